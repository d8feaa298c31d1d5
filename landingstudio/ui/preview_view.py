"""Qt WebEngine surface for the live preview."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional

from PyQt6 import QtCore, QtWidgets
from PyQt6.QtWebEngineCore import QWebEngineSettings
from PyQt6.QtWebEngineWidgets import QWebEngineView

from ..core.preview import fits_inline, inline_url_length

logger = logging.getLogger(__name__)

VIEWPORT_WIDTHS: Dict[str, Optional[int]] = {
    "desktop": None,
    "tablet": 768,
    "mobile": 375,
}


class WebEngineSurface(QtWidgets.QWidget):
    """Embedded browser that only ever shows the latest generated document."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._preview_tmp: Optional[str] = None
        self._viewport = "desktop"

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.view = QWebEngineView(self)
        settings = self.view.settings()
        if settings is not None:
            settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, False)
            settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True)
        layout.addStretch(1)
        layout.addWidget(self.view, 100)
        layout.addStretch(1)

    # ------------------------------------------------------------ Render --
    def set_document(self, html: str) -> None:
        if fits_inline(html):
            self._drop_tmp()
            self.view.setHtml(html, QtCore.QUrl("about:blank"))
            return

        self._drop_tmp()
        self._preview_tmp = tempfile.mkdtemp(prefix="landingstudio_preview_")
        path = Path(self._preview_tmp) / "landing-page.html"
        path.write_text(html, encoding="utf-8")
        logger.debug("Preview needs a %d char URL, loading from %s", inline_url_length(html), path)
        self.view.setUrl(QtCore.QUrl.fromLocalFile(str(path)))

    # ---------------------------------------------------------- Viewport --
    def viewport(self) -> str:
        return self._viewport

    def set_viewport(self, name: str) -> None:
        if name not in VIEWPORT_WIDTHS:
            raise ValueError(f"Unknown viewport: {name}")
        self._viewport = name
        width = VIEWPORT_WIDTHS[name]
        if width is None:
            self.view.setMinimumWidth(0)
            self.view.setMaximumWidth(16777215)
        else:
            self.view.setFixedWidth(width)

    # ----------------------------------------------------------- Cleanup --
    def _drop_tmp(self) -> None:
        if self._preview_tmp and os.path.isdir(self._preview_tmp):
            shutil.rmtree(self._preview_tmp, ignore_errors=True)
        self._preview_tmp = None

    def close_surface(self) -> None:
        self._drop_tmp()
