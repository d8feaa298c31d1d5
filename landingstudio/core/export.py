"""Writing generated output to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path

from .generator import generate_component_source, generate_document
from .models import ProductRecord

logger = logging.getLogger(__name__)


class ExportKind(str, Enum):
    DOCUMENT = "document"
    COMPONENT_SOURCE = "component-source"


EXPORT_FILENAMES = {
    ExportKind.DOCUMENT: "landing-page.html",
    ExportKind.COMPONENT_SOURCE: "ProductLandingPage.jsx",
}


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; exported pages get the usual umask mode.
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def export_filename(kind: ExportKind | str) -> str:
    return EXPORT_FILENAMES[ExportKind(kind)]


def write_export(content: str, kind: ExportKind | str, target_dir: str | Path) -> Path:
    """Write ``content`` under the fixed file name for ``kind``.

    An existing file of the same name is replaced. The temporary file used
    while writing never outlives the call.
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    dest = target_dir / export_filename(kind)

    fd, tmp_name = tempfile.mkstemp(prefix=".export-", suffix=".tmp", dir=str(target_dir))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, dest)
    except OSError:
        logger.warning("Export to %s failed", dest, exc_info=True)
        raise
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info("Exported %s (%d chars)", dest, len(content))
    return dest


def export_record(record: ProductRecord, kind: ExportKind | str, target_dir: str | Path) -> Path:
    kind = ExportKind(kind)
    if kind is ExportKind.DOCUMENT:
        content = generate_document(record)
    else:
        content = generate_component_source(record)
    return write_export(content, kind, target_dir)
