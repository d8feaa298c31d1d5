from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from landingstudio.core.export import ExportKind, export_filename, export_record, write_export
from landingstudio.core.models import ProductRecord


def test_filenames_are_fixed_per_kind() -> None:
    assert export_filename(ExportKind.DOCUMENT) == "landing-page.html"
    assert export_filename("component-source") == "ProductLandingPage.jsx"
    with pytest.raises(ValueError):
        export_filename("pdf")


def test_write_export_creates_file_and_leaves_no_temp(tmp_path: Path) -> None:
    path = write_export("<html></html>", ExportKind.DOCUMENT, tmp_path)
    assert path == tmp_path / "landing-page.html"
    assert path.read_text(encoding="utf-8") == "<html></html>"
    assert [p.name for p in tmp_path.iterdir()] == ["landing-page.html"]


def test_write_export_overwrites_existing_file(tmp_path: Path) -> None:
    write_export("old", ExportKind.COMPONENT_SOURCE, tmp_path)
    path = write_export("new", ExportKind.COMPONENT_SOURCE, tmp_path)
    assert path.read_text(encoding="utf-8") == "new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["ProductLandingPage.jsx"]


def test_write_export_creates_missing_folder(tmp_path: Path) -> None:
    target = tmp_path / "out" / "site"
    path = write_export("x", "document", target)
    assert path.parent == target
    assert path.exists()


def test_export_record_writes_document_and_component(tmp_path: Path) -> None:
    record = ProductRecord(name="Backpack <XL>")
    html_path = export_record(record, ExportKind.DOCUMENT, tmp_path)
    jsx_path = export_record(record, ExportKind.COMPONENT_SOURCE, tmp_path)

    html = html_path.read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "<h1>Backpack &lt;XL&gt;</h1>" in html

    jsx = jsx_path.read_text(encoding="utf-8")
    assert "<h1>Backpack <XL></h1>" in jsx
    assert "export default ProductLandingPage;" in jsx


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_exported_file_follows_umask(tmp_path: Path) -> None:
    previous = os.umask(0o022)
    try:
        path = write_export("<html></html>", ExportKind.DOCUMENT, tmp_path)
    finally:
        os.umask(previous)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
