"""Data models for the landing page editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class Layout(str, Enum):
    CENTERED = "centered"
    SPLIT = "split"
    ZIGZAG = "zigzag"

    @classmethod
    def coerce(cls, value: Any) -> "Layout":
        """Map a stored string onto a layout, falling back to centered."""
        if isinstance(value, Layout):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.CENTERED


@dataclass(frozen=True)
class Testimonial:
    author: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Testimonial":
        return cls(
            author=_text(data.get("author")),
            content=_text(data.get("content")),
        )


@dataclass(frozen=True)
class ProductRecord:
    """Snapshot of everything the generator needs to build one landing page.

    Records are never mutated; the editor replaces the whole snapshot on every
    edit (see ``core.state.RecordStore``).
    """

    name: str = ""
    description: str = ""
    price: str = ""
    category: str = ""
    call_to_action: str = "Buy Now"
    images: Tuple[str, ...] = ()
    features: Tuple[str, ...] = ("",)
    testimonials: Tuple[Testimonial, ...] = field(default_factory=lambda: (Testimonial(),))
    primary_color: str = "#000000"
    secondary_color: str = "#ffffff"
    font_family: str = "Inter"
    layout: Layout = Layout.CENTERED

    @property
    def hero_image(self) -> Optional[str]:
        return self.images[0] if self.images else None

    @classmethod
    def from_dict(cls, data: dict) -> "ProductRecord":
        # Absent lists and text mean "nothing to render", not editor defaults.
        testimonials: list[Testimonial] = []
        for item in data.get("testimonials") or []:
            if isinstance(item, Testimonial):
                testimonials.append(item)
            elif isinstance(item, dict):
                testimonials.append(Testimonial.from_dict(item))
        return cls(
            name=_text(data.get("name")),
            description=_text(data.get("description")),
            price=_text(data.get("price")),
            category=_text(data.get("category")),
            call_to_action=_text(data.get("callToAction")),
            images=tuple(_text(i) for i in data.get("images") or []),
            features=tuple(_text(f) for f in data.get("features") or []),
            testimonials=tuple(testimonials),
            primary_color=_text(data.get("primaryColor")),
            secondary_color=_text(data.get("secondaryColor")),
            font_family=_text(data.get("fontFamily")),
            layout=Layout.coerce(data.get("layout")),
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value)
