"""Main application window for the landing page editor."""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from ..config import SettingsManager
from ..core.export import ExportKind, export_filename, export_record
from ..core.generator import FONT_LABELS, FONT_STYLESHEETS, font_family_from_label
from ..core.models import Layout, ProductRecord
from ..core.preview import PreviewRenderer
from ..core.state import RecordStore
from .image_loader import ImageLoader
from .preview_view import VIEWPORT_WIDTHS, WebEngineSurface
from .widgets import ColorButton, ImageDropArea

logger = logging.getLogger(__name__)

APP_TITLE = "Landing Studio"

CATEGORIES = [
    ("electronics", "Electronics"),
    ("clothing", "Clothing"),
    ("home", "Home & Kitchen"),
    ("beauty", "Beauty & Personal Care"),
    ("sports", "Sports & Outdoors"),
    ("books", "Books & Media"),
    ("food", "Food & Beverages"),
    ("other", "Other"),
]

LAYOUT_LABELS = {
    Layout.CENTERED: "Centered",
    Layout.SPLIT: "Split",
    Layout.ZIGZAG: "Zigzag",
}


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Optional[SettingsManager] = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1320, 860)

        self.settings = settings if settings is not None else SettingsManager()
        self.store = RecordStore(self._initial_record())

        self._debounce = QtCore.QTimer(self)
        self._debounce.setInterval(400)
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self.update_preview)

        self.image_loader = ImageLoader(self)

        self._build_ui()
        self._build_menu()
        self._bind_events()

        self.renderer = PreviewRenderer(self.surface)
        self._sync_form_from_record()
        self._apply_viewport(self.settings.get("preview_viewport", "desktop"), announce=False)
        self.update_preview()

    # ------------------------------------------------------------------ UI --
    def _build_ui(self) -> None:
        splitter = QtWidgets.QSplitter(self)
        splitter.setOrientation(QtCore.Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        self.tabs = QtWidgets.QTabWidget(self)
        self.tabs.setDocumentMode(True)
        self.tabs.addTab(self._scrollable(self._build_content_tab()), "Content")
        self.tabs.addTab(self._scrollable(self._build_style_tab()), "Style")
        self.tabs.addTab(self._build_export_tab(), "Export")

        right_panel = QtWidgets.QWidget(self)
        right_layout = QtWidgets.QVBoxLayout(right_panel)
        right_layout.setContentsMargins(6, 6, 6, 6)
        right_layout.setSpacing(6)

        controls = QtWidgets.QHBoxLayout()
        self.viewport_group = QtWidgets.QButtonGroup(self)
        self.viewport_buttons: dict[str, QtWidgets.QToolButton] = {}
        for name in VIEWPORT_WIDTHS:
            btn = QtWidgets.QToolButton(right_panel)
            btn.setText(name.capitalize())
            btn.setCheckable(True)
            self.viewport_group.addButton(btn)
            self.viewport_buttons[name] = btn
            controls.addWidget(btn)
        controls.addStretch(1)
        self.btn_refresh = QtWidgets.QToolButton(right_panel)
        self.btn_refresh.setText("Refresh")
        self.btn_preview_export = QtWidgets.QToolButton(right_panel)
        self.btn_preview_export.setText("Download HTML")
        controls.addWidget(self.btn_refresh)
        controls.addWidget(self.btn_preview_export)

        self.surface = WebEngineSurface(right_panel)
        right_layout.addLayout(controls)
        right_layout.addWidget(self.surface, 1)

        splitter.addWidget(self.tabs)
        splitter.addWidget(right_panel)
        splitter.setSizes([520, 800])

        self.status = self.statusBar()

    def _scrollable(self, inner: QtWidgets.QWidget) -> QtWidgets.QScrollArea:
        area = QtWidgets.QScrollArea(self)
        area.setWidgetResizable(True)
        area.setFrameShape(QtWidgets.QFrame.Shape.NoFrame)
        area.setWidget(inner)
        return area

    def _build_content_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(page)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        form = QtWidgets.QFormLayout()
        self.name_edit = QtWidgets.QLineEdit(page)
        self.name_edit.setPlaceholderText("Enter product name")
        self.description_edit = QtWidgets.QPlainTextEdit(page)
        self.description_edit.setPlaceholderText("Enter product description")
        self.description_edit.setFixedHeight(96)
        self.price_edit = QtWidgets.QLineEdit(page)
        self.price_edit.setPlaceholderText("$99.99")
        self.category_combo = QtWidgets.QComboBox(page)
        self.category_combo.addItem("Select category", "")
        for value, label in CATEGORIES:
            self.category_combo.addItem(label, value)
        self.cta_edit = QtWidgets.QLineEdit(page)
        self.cta_edit.setPlaceholderText("Buy Now")

        form.addRow("Product Name", self.name_edit)
        form.addRow("Description", self.description_edit)
        form.addRow("Price", self.price_edit)
        form.addRow("Category", self.category_combo)
        form.addRow("Call to Action", self.cta_edit)
        layout.addLayout(form)

        # Features
        feat_header = QtWidgets.QHBoxLayout()
        feat_header.addWidget(QtWidgets.QLabel("<b>Product Features</b>", page))
        feat_header.addStretch(1)
        self.btn_add_feature = QtWidgets.QPushButton("Add Feature", page)
        feat_header.addWidget(self.btn_add_feature)
        layout.addLayout(feat_header)
        self.features_box = QtWidgets.QVBoxLayout()
        layout.addLayout(self.features_box)

        # Testimonials
        test_header = QtWidgets.QHBoxLayout()
        test_header.addWidget(QtWidgets.QLabel("<b>Testimonials</b>", page))
        test_header.addStretch(1)
        self.btn_add_testimonial = QtWidgets.QPushButton("Add Testimonial", page)
        test_header.addWidget(self.btn_add_testimonial)
        layout.addLayout(test_header)
        self.testimonials_box = QtWidgets.QVBoxLayout()
        layout.addLayout(self.testimonials_box)

        # Images
        layout.addWidget(QtWidgets.QLabel("<b>Product Images</b>", page))
        self.drop_area = ImageDropArea(page)
        layout.addWidget(self.drop_area)

        url_row = QtWidgets.QHBoxLayout()
        self.image_url_edit = QtWidgets.QLineEdit(page)
        self.image_url_edit.setPlaceholderText("https://… image URL")
        self.btn_add_image_url = QtWidgets.QPushButton("Add URL", page)
        url_row.addWidget(self.image_url_edit, 1)
        url_row.addWidget(self.btn_add_image_url)
        layout.addLayout(url_row)

        self.images_view = QtWidgets.QListWidget(page)
        self.images_view.setViewMode(QtWidgets.QListView.ViewMode.IconMode)
        self.images_view.setIconSize(QtCore.QSize(96, 96))
        self.images_view.setResizeMode(QtWidgets.QListView.ResizeMode.Adjust)
        self.images_view.setMovement(QtWidgets.QListView.Movement.Static)
        self.images_view.setFixedHeight(132)
        layout.addWidget(self.images_view)
        self.btn_remove_image = QtWidgets.QPushButton("Remove Selected Image", page)
        layout.addWidget(self.btn_remove_image, 0, QtCore.Qt.AlignmentFlag.AlignLeft)

        layout.addStretch(1)
        return page

    def _build_style_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(page)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        colors = QtWidgets.QGroupBox("Color Scheme", page)
        colors_form = QtWidgets.QFormLayout(colors)
        self.primary_button = ColorButton("#000000", colors)
        self.secondary_button = ColorButton("#ffffff", colors)
        colors_form.addRow("Primary Color", self.primary_button)
        colors_form.addRow("Secondary Color", self.secondary_button)
        layout.addWidget(colors)

        layouts = QtWidgets.QGroupBox("Layout Style", page)
        layouts_row = QtWidgets.QHBoxLayout(layouts)
        self.layout_group = QtWidgets.QButtonGroup(self)
        self.layout_radios: dict[Layout, QtWidgets.QRadioButton] = {}
        for layout_value, label in LAYOUT_LABELS.items():
            radio = QtWidgets.QRadioButton(label, layouts)
            self.layout_group.addButton(radio)
            self.layout_radios[layout_value] = radio
            layouts_row.addWidget(radio)
        layout.addWidget(layouts)

        typography = QtWidgets.QGroupBox("Typography", page)
        typo_form = QtWidgets.QFormLayout(typography)
        self.font_combo = QtWidgets.QComboBox(typography)
        self.font_combo.setEditable(True)
        self.font_combo.setInsertPolicy(QtWidgets.QComboBox.InsertPolicy.NoInsert)
        for font in FONT_STYLESHEETS:
            self.font_combo.addItem(FONT_LABELS.get(font, font), font)
        typo_form.addRow("Font family", self.font_combo)
        layout.addWidget(typography)

        self.live_preview_check = QtWidgets.QCheckBox("Update preview while typing", page)
        self.live_preview_check.setChecked(self.settings.get("live_preview", "0") == "1")
        layout.addWidget(self.live_preview_check)

        layout.addStretch(1)
        return page

    def _build_export_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(page)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(QtWidgets.QLabel("<h3>Ready to export your landing page?</h3>", page))
        layout.addWidget(QtWidgets.QLabel("Preview your design or export it in your preferred format.", page))

        self.btn_update_preview = QtWidgets.QPushButton("Update Preview", page)
        self.btn_export_html = QtWidgets.QPushButton("Export as HTML", page)
        self.btn_export_component = QtWidgets.QPushButton("Export as React", page)
        for btn in (self.btn_update_preview, self.btn_export_html, self.btn_export_component):
            btn.setMinimumHeight(32)
            layout.addWidget(btn)
        layout.addStretch(1)
        return page

    def _build_menu(self) -> None:
        bar = self.menuBar()
        if bar is None:
            bar = QtWidgets.QMenuBar(self)
            self.setMenuBar(bar)

        file_menu = bar.addMenu("&File")
        self.act_new = QtGui.QAction("New Page", self)
        self.act_preview = QtGui.QAction("Update Preview", self)
        self.act_preview.setShortcut(QtGui.QKeySequence("Ctrl+R"))
        self.act_export_html = QtGui.QAction("Export as HTML…", self)
        self.act_export_component = QtGui.QAction("Export as React…", self)
        self.act_quit = QtGui.QAction("Quit", self)
        if file_menu is not None:
            file_menu.addActions([self.act_new, self.act_preview])
            file_menu.addSeparator()
            file_menu.addActions([self.act_export_html, self.act_export_component])
            file_menu.addSeparator()
            file_menu.addAction(self.act_quit)

        help_menu = bar.addMenu("&Help")
        self.act_about = QtGui.QAction("About", self)
        if help_menu is not None:
            help_menu.addAction(self.act_about)

    def _bind_events(self) -> None:
        self.name_edit.textEdited.connect(lambda v: self.store.set_field("name", v))
        self.description_edit.textChanged.connect(self._on_description_changed)
        self.price_edit.textEdited.connect(lambda v: self.store.set_field("price", v))
        self.category_combo.currentIndexChanged.connect(self._on_category_changed)
        self.cta_edit.textEdited.connect(lambda v: self.store.set_field("call_to_action", v))

        self.btn_add_feature.clicked.connect(self.add_feature)
        self.btn_add_testimonial.clicked.connect(self.add_testimonial)

        self.drop_area.filesChosen.connect(self.load_images)
        self.btn_add_image_url.clicked.connect(self.add_image_url)
        self.btn_remove_image.clicked.connect(self.remove_selected_image)
        self.image_loader.loaded.connect(self._on_image_loaded)
        self.image_loader.rejected.connect(self._on_image_rejected)
        self.image_loader.failed.connect(self._on_image_failed)

        self.primary_button.colorChanged.connect(lambda c: self.store.set_color("primary", c))
        self.secondary_button.colorChanged.connect(lambda c: self.store.set_color("secondary", c))
        for layout_value, radio in self.layout_radios.items():
            radio.toggled.connect(lambda checked, lv=layout_value: checked and self.store.set_layout(lv))
        self.font_combo.currentTextChanged.connect(self._on_font_changed)
        self.live_preview_check.toggled.connect(self._on_live_preview_toggled)

        for name, btn in self.viewport_buttons.items():
            btn.clicked.connect(lambda _=False, n=name: self._apply_viewport(n))
        self.btn_refresh.clicked.connect(self.refresh_preview)
        self.btn_preview_export.clicked.connect(self.export_previewed_document)

        self.btn_update_preview.clicked.connect(self.update_preview_with_notice)
        self.btn_export_html.clicked.connect(lambda: self.export(ExportKind.DOCUMENT))
        self.btn_export_component.clicked.connect(lambda: self.export(ExportKind.COMPONENT_SOURCE))

        self.act_new.triggered.connect(self.new_page)
        self.act_preview.triggered.connect(self.update_preview_with_notice)
        self.act_export_html.triggered.connect(lambda: self.export(ExportKind.DOCUMENT))
        self.act_export_component.triggered.connect(lambda: self.export(ExportKind.COMPONENT_SOURCE))
        self.act_quit.triggered.connect(self.close)
        self.act_about.triggered.connect(self.show_about)

        self.store.subscribe(self._on_record_changed)

    # --------------------------------------------------------------- Record --
    def _initial_record(self) -> ProductRecord:
        return ProductRecord(
            font_family=self.settings.get("default_font", "Inter") or "Inter",
            layout=Layout.coerce(self.settings.get("default_layout", "centered")),
        )

    def new_page(self) -> None:
        self.store.reset(self._initial_record())
        self._sync_form_from_record()
        self.update_preview()

    def _on_record_changed(self, record: ProductRecord) -> None:
        if self.live_preview_check.isChecked():
            self._debounce.start()

    def _on_description_changed(self) -> None:
        text = self.description_edit.toPlainText()
        if text != self.store.record.description:
            self.store.set_field("description", text)

    def _on_category_changed(self, index: int) -> None:
        value = self.category_combo.itemData(index)
        self.store.set_field("category", value or "")

    def _on_font_changed(self, text: str) -> None:
        font = font_family_from_label(text)
        if font and font != self.store.record.font_family:
            self.store.set_font(font)

    def _on_live_preview_toggled(self, checked: bool) -> None:
        self.settings.set("live_preview", "1" if checked else "0")
        if checked:
            self.update_preview()

    # ------------------------------------------------------------- Features --
    def add_feature(self) -> None:
        self.store.add_feature()
        self._rebuild_features()

    def remove_feature(self, index: int) -> None:
        self.store.remove_feature(index)
        self._rebuild_features()

    def _rebuild_features(self) -> None:
        _clear_layout(self.features_box)
        features = self.store.record.features
        for index, text in enumerate(features):
            row = QtWidgets.QHBoxLayout()
            edit = QtWidgets.QLineEdit(text)
            edit.setPlaceholderText(f"Feature {index + 1}")
            edit.textEdited.connect(lambda v, i=index: self.store.set_feature(i, v))
            remove = QtWidgets.QToolButton()
            remove.setText("✕")
            remove.setEnabled(len(features) > 1)
            remove.clicked.connect(lambda _=False, i=index: self.remove_feature(i))
            row.addWidget(edit, 1)
            row.addWidget(remove)
            self.features_box.addLayout(row)

    # --------------------------------------------------------- Testimonials --
    def add_testimonial(self) -> None:
        self.store.add_testimonial()
        self._rebuild_testimonials()

    def remove_testimonial(self, index: int) -> None:
        self.store.remove_testimonial(index)
        self._rebuild_testimonials()

    def _rebuild_testimonials(self) -> None:
        _clear_layout(self.testimonials_box)
        testimonials = self.store.record.testimonials
        for index, testimonial in enumerate(testimonials):
            box = QtWidgets.QGroupBox(f"Testimonial {index + 1}")
            box_layout = QtWidgets.QGridLayout(box)
            content = QtWidgets.QPlainTextEdit(testimonial.content)
            content.setPlaceholderText("Testimonial content")
            content.setFixedHeight(64)
            content.textChanged.connect(
                lambda i=index, w=content: self.store.set_testimonial(i, "content", w.toPlainText())
            )
            author = QtWidgets.QLineEdit(testimonial.author)
            author.setPlaceholderText("Author name")
            author.textEdited.connect(lambda v, i=index: self.store.set_testimonial(i, "author", v))
            remove = QtWidgets.QToolButton()
            remove.setText("✕")
            remove.setEnabled(len(testimonials) > 1)
            remove.clicked.connect(lambda _=False, i=index: self.remove_testimonial(i))
            box_layout.addWidget(content, 0, 0)
            box_layout.addWidget(remove, 0, 1, QtCore.Qt.AlignmentFlag.AlignTop)
            box_layout.addWidget(author, 1, 0, 1, 2)
            self.testimonials_box.addWidget(box)

    # --------------------------------------------------------------- Images --
    def load_images(self, paths: List[str]) -> None:
        self.image_loader.load(paths)

    def add_image_url(self) -> None:
        url = self.image_url_edit.text().strip()
        if not url:
            return
        self.store.add_image(url)
        self.image_url_edit.clear()
        self._refresh_images_list()

    def remove_selected_image(self) -> None:
        row = self.images_view.currentRow()
        if row < 0 or row >= len(self.store.record.images):
            return
        self.store.remove_image(row)
        self._refresh_images_list()

    def _on_image_loaded(self, index: int, data_url: str) -> None:
        logger.debug("Image %d of batch loaded", index)
        self.store.add_image(data_url)
        self._refresh_images_list()

    def _on_image_rejected(self, index: int, message: str) -> None:
        logger.info("Skipped file %d: %s", index, message)
        self._notify("Only image files are allowed", 4000)

    def _on_image_failed(self, index: int, message: str) -> None:
        self._notify(f"Could not read image: {message}", 5000)

    def _refresh_images_list(self) -> None:
        self.images_view.clear()
        for index, ref in enumerate(self.store.record.images):
            item = QtWidgets.QListWidgetItem(f"Image {index + 1}")
            pixmap = _pixmap_from_ref(ref)
            if pixmap is not None:
                item.setIcon(QtGui.QIcon(pixmap))
            item.setToolTip(ref if not ref.startswith("data:") else "Embedded image")
            self.images_view.addItem(item)

    # ---------------------------------------------------- Editing & Preview --
    def _sync_form_from_record(self) -> None:
        record = self.store.record
        widgets = [
            self.name_edit, self.description_edit, self.price_edit, self.category_combo,
            self.cta_edit, self.font_combo, *self.layout_radios.values(),
            self.primary_button, self.secondary_button,
        ]
        for w in widgets:
            w.blockSignals(True)
        try:
            self.name_edit.setText(record.name)
            self.description_edit.setPlainText(record.description)
            self.price_edit.setText(record.price)
            cat_index = self.category_combo.findData(record.category)
            self.category_combo.setCurrentIndex(max(0, cat_index))
            self.cta_edit.setText(record.call_to_action)
            font_index = self.font_combo.findData(record.font_family)
            if font_index >= 0:
                self.font_combo.setCurrentIndex(font_index)
            else:
                self.font_combo.setEditText(record.font_family)
            self.layout_radios[Layout.coerce(record.layout)].setChecked(True)
            self.primary_button.setColor(record.primary_color)
            self.secondary_button.setColor(record.secondary_color)
        finally:
            for w in widgets:
                w.blockSignals(False)
        self._rebuild_features()
        self._rebuild_testimonials()
        self._refresh_images_list()

    def update_preview(self) -> None:
        self.renderer.render(self.store.record)

    def update_preview_with_notice(self) -> None:
        self.update_preview()
        self._notify("Preview updated!", 2500)

    def refresh_preview(self) -> None:
        if self.renderer.refresh() is None:
            self.update_preview()
        self._notify("Preview refreshed", 2500)

    def _apply_viewport(self, name: str, announce: bool = True) -> None:
        if name not in VIEWPORT_WIDTHS:
            name = "desktop"
        self.surface.set_viewport(name)
        self.viewport_buttons[name].setChecked(True)
        if self.settings.get("preview_viewport") != name:
            self.settings.set("preview_viewport", name)
        if announce:
            self._notify(f"Switched to {name} view", 2500)

    # --------------------------------------------------------------- Export --
    def export(self, kind: ExportKind, record: Optional[ProductRecord] = None) -> None:
        record = record if record is not None else self.store.record
        start_dir = self.settings.get("last_export_dir", "") or str(Path.home())
        out_dir = QtWidgets.QFileDialog.getExistingDirectory(
            self, f"Export {export_filename(kind)} To…", start_dir
        )
        if not out_dir:
            return
        try:
            path = export_record(record, kind, out_dir)
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Export failed", f"Could not write {export_filename(kind)}:\n{exc}")
            return
        self.settings.set("last_export_dir", out_dir)
        label = "html" if kind is ExportKind.DOCUMENT else "react"
        self._notify(f"Exported as {label}! Saved {path.name}", 5000)

    def export_previewed_document(self) -> None:
        self.export(ExportKind.DOCUMENT, self.renderer.last_record)

    # ---------------------------------------------------------------- Misc --
    def _notify(self, message: str, timeout: int) -> None:
        if self.status is not None:
            self.status.showMessage(message, timeout)

    def show_about(self) -> None:
        QtWidgets.QMessageBox.information(
            self,
            "About",
            f"{APP_TITLE}\n\nBuild a product landing page, preview it live and export static HTML.",
        )

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802 (Qt override)
        self._debounce.stop()
        self.image_loader.wait_all()
        self.surface.close_surface()
        super().closeEvent(event)


def _clear_layout(layout: QtWidgets.QLayout) -> None:
    while layout.count():
        item = layout.takeAt(0)
        if item is None:
            continue
        widget = item.widget()
        if widget is not None:
            widget.deleteLater()
            continue
        child = item.layout()
        if child is not None:
            _clear_layout(child)
            child.deleteLater()


def _pixmap_from_ref(ref: str) -> Optional[QtGui.QPixmap]:
    if not ref.startswith("data:") or ";base64," not in ref:
        return None
    try:
        data = base64.b64decode(ref.split(";base64,", 1)[1])
    except ValueError:
        return None
    pixmap = QtGui.QPixmap()
    if not pixmap.loadFromData(data):
        return None
    return pixmap
