"""Live preview plumbing shared by the UI and tests."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol
from urllib.parse import quote

from .generator import generate_document
from .models import ProductRecord

logger = logging.getLogger(__name__)

# Chromium rejects URLs longer than this, and setHtml() hands the page over as
# a percent-encoded data: URL.
INLINE_URL_LIMIT = 2 * 1024 * 1024
INLINE_URL_PREFIX = "data:text/html;charset=UTF-8,"


def inline_url_length(html: str) -> int:
    return len(INLINE_URL_PREFIX) + len(quote(html, safe=""))


def fits_inline(html: str) -> bool:
    """True when ``html`` can be loaded with ``setHtml`` rather than from a file."""
    return inline_url_length(html) < INLINE_URL_LIMIT


class RenderSurface(Protocol):
    def set_document(self, html: str) -> None:
        """Replace everything the surface shows with ``html``."""


class PreviewRenderer:
    """Regenerates the document and pushes it into a surface.

    There is no diffing: each call replaces the surface content wholesale.
    """

    def __init__(
        self,
        surface: RenderSurface,
        generate: Callable[[ProductRecord], str] = generate_document,
    ) -> None:
        self.surface = surface
        self._generate = generate
        self._last: Optional[ProductRecord] = None

    @property
    def last_record(self) -> Optional[ProductRecord]:
        return self._last

    def render(self, record: ProductRecord) -> str:
        html = self._generate(record)
        self.surface.set_document(html)
        self._last = record
        logger.debug("Preview rendered (%d chars)", len(html))
        return html

    def refresh(self) -> Optional[str]:
        if self._last is None:
            return None
        return self.render(self._last)
