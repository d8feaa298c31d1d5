"""Landing page generation helpers."""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader

from .models import Layout, ProductRecord, Testimonial

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

RecordLike = Union[ProductRecord, Mapping[str, Any]]

FONT_STYLESHEETS: Dict[str, str] = {
    "Inter": "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    "Playfair Display": "https://fonts.googleapis.com/css2?family=Playfair+Display:wght@400;500;700&display=swap",
    "Roboto": "https://fonts.googleapis.com/css2?family=Roboto:wght@300;400;500;700&display=swap",
    "Montserrat": "https://fonts.googleapis.com/css2?family=Montserrat:wght@300;400;500;600;700&display=swap",
    "Poppins": "https://fonts.googleapis.com/css2?family=Poppins:wght@300;400;500;600;700&display=swap",
}

CHECK_ICON_PATH = (
    "M9 12L11 14L15 10M21 12C21 16.9706 16.9706 21 12 21C7.02944 21 3 16.9706 3 12"
    "C3 7.02944 7.02944 3 12 3C16.9706 3 21 7.02944 21 12Z"
)

FONT_LABELS: Dict[str, str] = {
    "Inter": "Inter (Modern & Clean)",
    "Playfair Display": "Playfair Display (Elegant)",
    "Roboto": "Roboto (Classic)",
    "Montserrat": "Montserrat (Contemporary)",
    "Poppins": "Poppins (Friendly)",
}

TRUST_BADGES = ("Secure Checkout", "Free Shipping", "30-Day Return")


def sanitize(text: Optional[str]) -> str:
    """Entity-encode angle brackets; nothing else is touched."""
    if not text:
        return ""
    return str(text).replace("<", "&lt;").replace(">", "&gt;")


def font_link(font_family: Optional[str]) -> str:
    href = FONT_STYLESHEETS.get(font_family or "")
    if href is None:
        return ""
    return f'<link rel="stylesheet" href="{href}">'


def font_family_from_label(text: Optional[str]) -> str:
    """Map a font picker entry back to its family; typed names pass through."""
    text = (text or "").strip()
    for family, label in FONT_LABELS.items():
        if text == label:
            return family
    return text


def visible_testimonials(testimonials: Iterable[Testimonial]) -> List[Testimonial]:
    """Return the testimonials that make it onto the page.

    The section is only attempted when the first entry has content; after that,
    each entry needs both content and an author. An empty result means the
    section is left out entirely.
    """
    entries = list(testimonials or ())
    if not entries or not entries[0].content:
        return []
    return [t for t in entries if t.content and t.author]


def _as_record(record: RecordLike) -> ProductRecord:
    if isinstance(record, ProductRecord):
        return record
    return ProductRecord.from_dict(record)


@lru_cache(maxsize=None)
def _env() -> Environment:
    # sanitize() is the only escaping applied to interpolated values.
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["sanitize"] = sanitize
    return env


def generate_document(record: RecordLike, year: Optional[int] = None) -> str:
    """Render ``record`` as a complete standalone HTML document.

    ``record`` may also be a plain camelCase mapping; missing fields render as
    empty.
    """
    record = _as_record(record)
    layout = Layout.coerce(record.layout)
    tpl = _env().get_template("landing.html.j2")
    html = tpl.render(
        name=record.name,
        description=record.description,
        price=record.price,
        category=record.category,
        call_to_action=record.call_to_action,
        image=record.hero_image,
        image_first=layout is Layout.SPLIT,
        centered=layout is Layout.CENTERED,
        features=list(record.features or ()),
        testimonials=visible_testimonials(record.testimonials),
        trust_badges=TRUST_BADGES,
        check_path=CHECK_ICON_PATH,
        primary_color=record.primary_color or "",
        secondary_color=record.secondary_color or "",
        font_family=record.font_family or "",
        font_link=font_link(record.font_family),
        year=year if year is not None else date.today().year,
    )
    logger.debug("Generated %d characters for layout %s", len(html), layout.value)
    return html


def generate_component_source(record: RecordLike) -> str:
    """Placeholder component source; only the product name is carried over."""
    record = _as_record(record)
    tpl = _env().get_template("component.jsx.j2")
    return tpl.render(name=record.name or "")
