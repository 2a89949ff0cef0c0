# -*- coding: utf-8 -*-
"""
Main application window (QMainWindow). Builds the widgets around the chart
canvas, routes user actions to the ChartViewModel and reflects its updates.
"""
import sys
from typing import List, Tuple

from .qt import *
from .chart_canvas import ChartCanvas, qcolor, theme_font
from config.settings import APP_NAME
from config.themes import ChartTheme, THEMES, theme_ids
from core.entry import Entry
from core.settings_manager import SettingsManager
from tools.localization import tr, get_available_languages, get_current_language
from viewmodels.chart_viewmodel import ChartViewModel


def _qss_color(hex_color: str) -> str:
    return qcolor(hex_color).name(QColor.NameFormat.HexArgb)


def build_stylesheet(theme: ChartTheme) -> str:
    """Qt stylesheet for the window chrome derived from the theme colors."""
    radius = 0 if theme.square_borders else 6
    border = f"{theme.border_width:.0f}px solid {_qss_color(theme.input_border_color)}"
    return f"""
        QWidget#mainContainer {{ background-color: {_qss_color(theme.background_color)}; }}
        QLabel {{ color: {_qss_color(theme.axis_label_color)}; }}
        QLabel#titleLabel {{ color: {_qss_color(theme.title_color)}; }}
        QLabel#statusLabel {{ color: {_qss_color(theme.phase_label_color)}; }}
        QLineEdit, QComboBox {{
            background-color: {_qss_color(theme.input_bg_color)};
            color: {_qss_color(theme.axis_label_color)};
            border: {border}; border-radius: {radius}px; padding: 4px 8px;
        }}
        QPushButton {{
            background-color: {_qss_color(theme.button_bg_color)};
            color: {_qss_color(theme.button_text_color)};
            border: none; border-radius: {radius}px; padding: 5px 12px;
        }}
        QPushButton:disabled {{ background-color: {_qss_color(theme.grid_line_color)}; }}
        QFrame#chip {{
            background-color: {_qss_color(theme.chip_bg_color)};
            border-radius: {radius}px;
        }}
        QPushButton#chipRemove {{ background: transparent; padding: 0px 4px; }}
        QScrollArea {{ background: transparent; border: none; }}
    """


def theme_choices() -> List[Tuple[str, str, str]]:
    """(label, theme id, tagline) for each entry of the theme picker."""
    return [(THEMES[theme_id].display_name, theme_id, THEMES[theme_id].tagline) for theme_id in theme_ids()]


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, view_model: ChartViewModel, settings_manager: SettingsManager):
        super().__init__()
        self.view_model = view_model
        self.settings_manager = settings_manager
        self._chip_widgets: List[QWidget] = []

        self.init_ui()
        self.connect_signals()
        self.apply_theme(self.view_model.theme)
        self._rebuild_chips(self.view_model.entries)
        self.resize(960, 680)
        self._restore_geometry()
        self.show()

    def _restore_geometry(self):
        geometry_str = self.settings_manager.window_geometry
        if geometry_str:
            try:
                self.restoreGeometry(QByteArray.fromHex(geometry_str.encode('ascii')))
            except (ValueError, TypeError): self.resize(960, 680)

    def init_ui(self):
        self.setWindowTitle(tr("window_title"))
        main_container = QWidget()
        main_container.setObjectName("mainContainer")
        self.setCentralWidget(main_container)
        main_layout = QVBoxLayout(main_container)
        main_layout.setContentsMargins(15, 12, 15, 12); main_layout.setSpacing(10)

        # Header: title + theme / language pickers
        header = QHBoxLayout()
        self.title_label = QLabel()
        self.title_label.setObjectName("titleLabel")
        header.addWidget(self.title_label, 1)
        self.theme_label = QLabel(tr("theme_label"))
        self.theme_combo = QComboBox()
        for index, (label, theme_id, tagline) in enumerate(theme_choices()):
            self.theme_combo.addItem(label, theme_id)
            self.theme_combo.setItemData(index, tagline, Qt.ItemDataRole.ToolTipRole)
        self.language_label = QLabel(tr("language_label"))
        self.language_combo = QComboBox()
        for code, display_name in get_available_languages().items():
            self.language_combo.addItem(display_name, code)
        header.addWidget(self.theme_label); header.addWidget(self.theme_combo)
        header.addWidget(self.language_label); header.addWidget(self.language_combo)
        main_layout.addLayout(header)

        # Input row
        input_row = QHBoxLayout()
        self.prompt_label = QLabel()
        self.name_input = QLineEdit()
        self.add_button = QPushButton()
        self.add_button.setEnabled(False)
        self.randomize_button = QPushButton()
        self.clear_button = QPushButton()
        input_row.addWidget(self.prompt_label)
        input_row.addWidget(self.name_input, 1)
        input_row.addWidget(self.add_button)
        input_row.addWidget(self.randomize_button)
        input_row.addWidget(self.clear_button)
        main_layout.addLayout(input_row)

        self.canvas = ChartCanvas(self.view_model, self)
        main_layout.addWidget(self.canvas, 1)

        # Chips row + share
        bottom_row = QHBoxLayout()
        self.chips_container = QWidget()
        self.chips_layout = QHBoxLayout(self.chips_container)
        self.chips_layout.setContentsMargins(0, 0, 0, 0); self.chips_layout.setSpacing(6)
        self.chips_layout.addStretch(1)
        chips_scroll = QScrollArea()
        chips_scroll.setWidgetResizable(True)
        chips_scroll.setFixedHeight(44)
        chips_scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        chips_scroll.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        chips_scroll.setWidget(self.chips_container)
        self.share_button = QPushButton()
        bottom_row.addWidget(chips_scroll, 1)
        bottom_row.addWidget(self.share_button)
        main_layout.addLayout(bottom_row)

        self.status_label = QLabel("")
        self.status_label.setObjectName("statusLabel")
        main_layout.addWidget(self.status_label)

        self._sync_combo(self.theme_combo, self.view_model.theme.id)
        self._sync_combo(self.language_combo, get_current_language())
        self.retranslate_ui()

    def connect_signals(self):
        self.name_input.textChanged.connect(self._on_name_text_changed)
        self.name_input.returnPressed.connect(self._on_add_clicked)
        self.add_button.clicked.connect(self._on_add_clicked)
        self.randomize_button.clicked.connect(self.view_model.request_randomize)
        self.clear_button.clicked.connect(self.view_model.request_clear)
        self.share_button.clicked.connect(self._on_share_clicked)
        self.theme_combo.currentIndexChanged.connect(
            lambda _i: self.view_model.select_theme(self.theme_combo.currentData()))
        self.language_combo.currentIndexChanged.connect(
            lambda _i: self.view_model.select_language(self.language_combo.currentData()))

        self.view_model.entries_updated.connect(self._rebuild_chips)
        self.view_model.theme_updated.connect(self.apply_theme)
        self.view_model.language_updated.connect(lambda _code: self.retranslate_ui())
        self.view_model.status_text_changed.connect(self.status_label.setText)
        self.view_model.panel_enabled_changed.connect(self._on_panel_enabled_changed)
        self._on_panel_enabled_changed(self.view_model.is_panel_enabled())

    @staticmethod
    def _sync_combo(combo: QComboBox, data: str):
        index = combo.findData(data)
        if index >= 0 and combo.currentIndex() != index:
            combo.blockSignals(True)
            combo.setCurrentIndex(index)
            combo.blockSignals(False)

    # --- Slots ---

    @Slot(str)
    def _on_name_text_changed(self, text: str):
        self.add_button.setEnabled(self.view_model.can_add(text))

    @Slot()
    def _on_add_clicked(self):
        text = self.name_input.text()
        if not self.view_model.can_add(text):
            return
        if self.view_model.request_add(text):
            self.name_input.clear()

    @Slot()
    def _on_share_clicked(self):
        path = self.view_model.export_image()
        if path:
            image = QImage(path)
            if not image.isNull():
                QApplication.clipboard().setImage(image)

    @Slot(bool)
    def _on_panel_enabled_changed(self, enabled: bool):
        self.share_button.setEnabled(enabled)
        self.randomize_button.setEnabled(enabled)
        self.clear_button.setEnabled(enabled)

    @Slot(object)
    def _rebuild_chips(self, entries: List[Entry]):
        for widget in self._chip_widgets:
            self.chips_layout.removeWidget(widget)
            widget.deleteLater()
        self._chip_widgets = []
        theme = self.view_model.theme
        for entry in entries:
            chip = self._make_chip(entry, theme)
            self.chips_layout.insertWidget(self.chips_layout.count() - 1, chip)
            self._chip_widgets.append(chip)

    def _make_chip(self, entry: Entry, theme: ChartTheme) -> QWidget:
        chip = QFrame()
        chip.setObjectName("chip")
        layout = QHBoxLayout(chip)
        layout.setContentsMargins(8, 2, 4, 2); layout.setSpacing(4)
        name_label = QLabel(entry.display_name)
        name_label.setStyleSheet(f"color: {_qss_color(theme.marker_color(entry.color_index))};")
        name_label.setFont(theme_font(theme, 9))
        remove_button = QPushButton(theme.remove_text)
        remove_button.setObjectName("chipRemove")
        remove_button.setToolTip(tr("remove_chip_tooltip", name=entry.name))
        remove_button.clicked.connect(lambda _checked=False, entry_id=entry.id: self.view_model.request_remove(entry_id))
        layout.addWidget(name_label)
        layout.addWidget(remove_button)
        return chip

    @Slot(object)
    def apply_theme(self, theme: ChartTheme):
        self.setStyleSheet(build_stylesheet(theme))
        self.title_label.setText(theme.title_text)
        self.title_label.setFont(theme_font(theme, 16))
        self._apply_title_glow(theme)
        self.prompt_label.setText(theme.prompt_char)
        self.add_button.setText(theme.add_text)
        self.share_button.setText(theme.share_text)
        for widget in (self.name_input, self.add_button, self.randomize_button,
                       self.clear_button, self.share_button, self.status_label):
            widget.setFont(theme_font(theme, 10))
        self._sync_combo(self.theme_combo, theme.id)
        self._rebuild_chips(self.view_model.entries)

    def _apply_title_glow(self, theme: ChartTheme):
        if theme.tag_glow_radius <= 0:
            self.title_label.setGraphicsEffect(None)
            return
        glow = QGraphicsDropShadowEffect(self.title_label)
        glow.setOffset(0, 0)
        glow.setBlurRadius(2 * theme.tag_glow_radius)
        glow.setColor(qcolor(theme.title_color, 0.8))
        self.title_label.setGraphicsEffect(glow)

    def retranslate_ui(self):
        self.setWindowTitle(tr("window_title"))
        self.theme_label.setText(tr("theme_label"))
        self.language_label.setText(tr("language_label"))
        self.name_input.setPlaceholderText(tr("name_placeholder"))
        self.add_button.setToolTip(tr("add_button_tooltip"))
        self.randomize_button.setText(tr("randomize_button"))
        self.randomize_button.setToolTip(tr("randomize_button_tooltip"))
        self.clear_button.setText(tr("clear_button"))
        self.share_button.setToolTip(tr("share_button_tooltip"))
        self.canvas.setToolTip(tr("drag_hint"))
        self._sync_combo(self.language_combo, get_current_language())

    def closeEvent(self, event: QCloseEvent):
        try:
            geometry_str = bytes(self.saveGeometry().toHex().data()).decode('ascii')
            self.settings_manager.set_window_geometry(geometry_str)
        except (UnicodeDecodeError, RuntimeError) as e:
            print(f"Warning: failed to save window geometry on close: {e}", file=sys.stderr)
        print(f"{APP_NAME}: main window closed.")
        super().closeEvent(event)
