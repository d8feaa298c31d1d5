"""Single state container for the record being edited."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Union

from .models import Layout, ProductRecord, Testimonial

logger = logging.getLogger(__name__)

Listener = Callable[[ProductRecord], None]

TEXT_FIELDS = ("name", "description", "price", "category", "call_to_action")
TESTIMONIAL_FIELDS = ("author", "content")
COLOR_FIELDS = {"primary": "primary_color", "secondary": "secondary_color"}


class RecordStore:
    """Holds the current ``ProductRecord`` and applies edits to it.

    Every edit swaps in a new frozen snapshot and notifies subscribers once.
    The store keeps at least one (possibly empty) feature and testimonial.
    """

    def __init__(self, initial: Optional[ProductRecord] = None) -> None:
        self._record = initial if initial is not None else ProductRecord()
        self._listeners: List[Listener] = []

    @property
    def record(self) -> ProductRecord:
        return self._record

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, record: ProductRecord) -> None:
        self._record = record
        for listener in list(self._listeners):
            listener(record)

    # -------------------------------------------------------------- Text --
    def set_field(self, name: str, value: str) -> None:
        if name not in TEXT_FIELDS:
            raise KeyError(name)
        self._commit(replace(self._record, **{name: value}))

    # ---------------------------------------------------------- Features --
    def set_feature(self, index: int, text: str) -> None:
        features = list(self._record.features)
        features[index] = text
        self._commit(replace(self._record, features=tuple(features)))

    def add_feature(self) -> None:
        self._commit(replace(self._record, features=self._record.features + ("",)))

    def remove_feature(self, index: int) -> None:
        features = list(self._record.features)
        del features[index]
        self._commit(replace(self._record, features=tuple(features) or ("",)))

    # ------------------------------------------------------ Testimonials --
    def set_testimonial(self, index: int, field: str, value: str) -> None:
        if field not in TESTIMONIAL_FIELDS:
            raise KeyError(field)
        testimonials = list(self._record.testimonials)
        testimonials[index] = replace(testimonials[index], **{field: value})
        self._commit(replace(self._record, testimonials=tuple(testimonials)))

    def add_testimonial(self) -> None:
        self._commit(replace(self._record, testimonials=self._record.testimonials + (Testimonial(),)))

    def remove_testimonial(self, index: int) -> None:
        testimonials = list(self._record.testimonials)
        del testimonials[index]
        self._commit(replace(self._record, testimonials=tuple(testimonials) or (Testimonial(),)))

    # ------------------------------------------------------------ Images --
    def add_image(self, ref: str) -> None:
        """Append an image; completions land in arrival order."""
        self._commit(replace(self._record, images=self._record.images + (ref,)))
        logger.debug("Image added, %d total", len(self._record.images))

    def remove_image(self, index: int) -> None:
        images = list(self._record.images)
        del images[index]
        self._commit(replace(self._record, images=tuple(images)))

    # ------------------------------------------------------------- Style --
    def set_color(self, which: str, color: str) -> None:
        attr = COLOR_FIELDS.get(which)
        if attr is None:
            raise KeyError(which)
        self._commit(replace(self._record, **{attr: color}))

    def set_layout(self, layout: Union[Layout, str]) -> None:
        self._commit(replace(self._record, layout=Layout(layout)))

    def set_font(self, font_family: str) -> None:
        self._commit(replace(self._record, font_family=font_family))

    def reset(self, record: Optional[ProductRecord] = None) -> None:
        self._commit(record if record is not None else ProductRecord())
