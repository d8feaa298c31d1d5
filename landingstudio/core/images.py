"""Turning local image files into embeddable references."""

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path

logger = logging.getLogger(__name__)

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.webp *.svg *.bmp *.ico)"


class ImageRejected(ValueError):
    """Raised for files that are not images."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Not an image file: {Path(path).name}")
        self.path = Path(path)


def guess_image_type(path: str | Path) -> str | None:
    mime, _ = mimetypes.guess_type(str(path))
    if mime and mime.startswith("image/"):
        return mime
    return None


def is_image_file(path: str | Path) -> bool:
    return guess_image_type(path) is not None


def read_image_as_data_url(path: str | Path) -> str:
    """Read ``path`` and return a ``data:`` URL for it.

    Raises ``ImageRejected`` for non-image files; read errors propagate as
    ``OSError``.
    """
    path = Path(path)
    mime = guess_image_type(path)
    if mime is None:
        logger.warning("Rejected non-image file %s", path)
        raise ImageRejected(path)
    data = path.read_bytes()
    logger.debug("Read %s (%d bytes, %s)", path.name, len(data), mime)
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
