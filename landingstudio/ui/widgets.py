"""Small reusable editor widgets."""

from __future__ import annotations

from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from ..core.images import IMAGE_FILE_FILTER, is_image_file

PRESET_COLORS = [
    "#000000", "#ffffff", "#f8fafc", "#f1f5f9",
    "#e2e8f0", "#cbd5e1", "#94a3b8", "#64748b",
    "#334155", "#1e293b", "#0f172a", "#020617",
    "#ef4444", "#f59e0b", "#10b981", "#3b82f6",
    "#6366f1", "#8b5cf6", "#d946ef", "#ec4899",
]


class ColorButton(QtWidgets.QPushButton):
    """Shows the current color and offers preset swatches or a color dialog."""

    colorChanged = QtCore.pyqtSignal(str)

    def __init__(self, color: str = "#ffffff", parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._color = color or "#ffffff"
        self.setMinimumWidth(120)
        self.setMenu(self._build_menu())
        self._update_style()

    def color(self) -> str:
        return self._color

    def setColor(self, color: str) -> None:  # noqa: N802 (Qt naming)
        if not color or color == self._color:
            return
        self._color = color
        self._update_style()
        self.colorChanged.emit(color)

    def _build_menu(self) -> QtWidgets.QMenu:
        menu = QtWidgets.QMenu(self)
        grid_host = QtWidgets.QWidget(menu)
        grid = QtWidgets.QGridLayout(grid_host)
        grid.setContentsMargins(8, 8, 8, 8)
        grid.setSpacing(6)
        for i, preset in enumerate(PRESET_COLORS):
            swatch = QtWidgets.QToolButton(grid_host)
            swatch.setFixedSize(22, 22)
            swatch.setToolTip(preset)
            swatch.setStyleSheet(
                f"background:{preset}; border: 1px solid rgba(148,163,184,0.6); border-radius: 11px;"
            )
            swatch.clicked.connect(lambda _=False, c=preset: self._pick(c, menu))
            grid.addWidget(swatch, i // 5, i % 5)
        action = QtWidgets.QWidgetAction(menu)
        action.setDefaultWidget(grid_host)
        menu.addAction(action)
        menu.addSeparator()
        custom = menu.addAction("Custom…")
        if custom is not None:
            custom.triggered.connect(self._choose_color)
        return menu

    def _pick(self, color: str, menu: QtWidgets.QMenu) -> None:
        menu.close()
        self.setColor(color)

    def _choose_color(self) -> None:
        dialog_color = QtWidgets.QColorDialog.getColor(QtGui.QColor(self._color), self.window())
        if dialog_color.isValid():
            self.setColor(dialog_color.name())

    def _update_style(self) -> None:
        self.setText(self._color)
        text = "#ffffff" if QtGui.QColor(self._color).lightness() < 128 else "#0f172a"
        self.setStyleSheet(
            f"background:{self._color}; color:{text}; border: 1px solid rgba(148,163,184,0.6);"
            " border-radius:4px; padding: 6px;"
        )


class ImageDropArea(QtWidgets.QFrame):
    """Dashed drop zone with a file picker button."""

    filesChosen = QtCore.pyqtSignal(list)

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setObjectName("imageDropArea")
        self._set_active(False)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(12, 16, 12, 16)
        title = QtWidgets.QLabel("Drag and drop images here", self)
        title.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        hint = QtWidgets.QLabel("PNG, JPG, GIF, WebP or SVG", self)
        hint.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        hint.setStyleSheet("color: #64748b; font-size: 11px;")
        self.btn_select = QtWidgets.QPushButton("Select files", self)
        self.btn_select.clicked.connect(self._on_select)

        layout.addWidget(title)
        layout.addWidget(hint)
        layout.addWidget(self.btn_select, 0, QtCore.Qt.AlignmentFlag.AlignCenter)

    def _set_active(self, active: bool) -> None:
        border = "#3b82f6" if active else "#cbd5e1"
        background = "rgba(59,130,246,0.06)" if active else "transparent"
        self.setStyleSheet(
            f"#imageDropArea {{ border: 2px dashed {border}; border-radius: 8px; background: {background}; }}"
        )

    def _on_select(self) -> None:
        files, _ = QtWidgets.QFileDialog.getOpenFileNames(self, "Select images", "", IMAGE_FILE_FILTER)
        if files:
            self.filesChosen.emit(files)

    def dragEnterEvent(self, event: QtGui.QDragEnterEvent) -> None:  # noqa: N802 (Qt override)
        mime = event.mimeData()
        if mime is not None and any(
            url.isLocalFile() and is_image_file(url.toLocalFile()) for url in mime.urls()
        ):
            self._set_active(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QtGui.QDragMoveEvent) -> None:  # noqa: N802 (Qt override)
        event.acceptProposedAction()

    def dragLeaveEvent(self, event: QtGui.QDragLeaveEvent) -> None:  # noqa: N802 (Qt override)
        self._set_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QtGui.QDropEvent) -> None:  # noqa: N802 (Qt override)
        self._set_active(False)
        mime = event.mimeData()
        paths: List[str] = []
        if mime is not None:
            paths = [url.toLocalFile() for url in mime.urls() if url.isLocalFile()]
        if paths:
            self.filesChosen.emit(paths)
        event.acceptProposedAction()
