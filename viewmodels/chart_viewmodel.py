# viewmodels/chart_viewmodel.py
# -*- coding: utf-8 -*-
"""
ViewModel between the chart widgets and ChartState.

Holds the pixel <-> normalized mapping used by the canvas, forwards user
requests to the state, and owns theme selection and PNG export.
"""
import sys
from datetime import datetime
from typing import List, NamedTuple, Optional, Tuple

from gui.qt import QObject, QRectF, Signal, Slot
from .base_viewmodel import BaseViewModel
from config.themes import ChartTheme, theme_for
from core.chart_state import ChartState
from core.entry import Entry
from core.path_manager import PathManager
from core.settings_manager import SettingsManager
from gui.chart_export import export_chart_png
from tools.localization import tr, set_language

PIXEL_FONT_SIZE = 3


class DrawableRect(NamedTuple):
    """Area of a widget or image that maps onto the normalized unit square."""
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_qrectf(cls, rect: QRectF) -> "DrawableRect":
        return cls(rect.left(), rect.top(), rect.width(), rect.height())

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def aspect_ratio(self) -> float:
        return self.width / max(self.height, 1.0)


def normalized_to_pixel(point: Tuple[float, float], rect: DrawableRect) -> Tuple[float, float]:
    """Normalized (y up) -> pixel (y down)."""
    nx, ny = point
    return rect.left + nx * rect.width, rect.top + (1.0 - ny) * rect.height


def pixel_to_normalized(pos: Tuple[float, float], rect: DrawableRect) -> Tuple[float, float]:
    px, py = pos
    return (px - rect.left) / max(rect.width, 1.0), 1.0 - (py - rect.top) / max(rect.height, 1.0)


def estimate_tag_half_width_px(text: str, pixel_font: bool) -> float:
    """Rough pixel half-width of a rendered name tag."""
    if pixel_font:
        return (len(text) * 4 * PIXEL_FONT_SIZE + 8) / 2 + 12
    return len(text) * 6.5 / 2 + 14


def clamp_tag_x(px: float, half_width_px: float, rect: DrawableRect) -> float:
    """Keeps a tag centred at px fully inside the drawable area horizontally."""
    lo = rect.left + half_width_px
    hi = rect.right - half_width_px
    if lo > hi:
        return rect.left + rect.width / 2
    return min(max(px, lo), hi)


class ChartViewModel(BaseViewModel):
    """
    Exposes chart entries, theme and status text to the View and turns user
    gestures into ChartState operations.
    """
    # --- Signals to notify View ---
    entries_updated = Signal(object)  # List[Entry]
    theme_updated = Signal(object)  # ChartTheme
    language_updated = Signal(str)
    export_finished = Signal(str)

    def __init__(self, chart_state: ChartState, settings_manager: SettingsManager,
                 path_manager: Optional[PathManager] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.state = chart_state
        self.settings = settings_manager
        self.paths = path_manager
        self._entries: List[Entry] = chart_state.current_entries()
        self._theme: ChartTheme = theme_for(settings_manager.get_theme_id())

        self.state.entries_changed.connect(self._on_entries_changed)
        self.state.status_message_changed.connect(self.set_status_text)
        self.settings.theme_changed.connect(self._on_theme_changed)
        self.settings.language_changed.connect(self._on_language_changed)
        self.set_panel_enabled(bool(self._entries))

    # --- Getters for View ---
    @property
    def entries(self) -> List[Entry]:
        return self._entries

    @property
    def theme(self) -> ChartTheme:
        return self._theme

    @property
    def uses_pixel_font(self) -> bool:
        return self._theme.font_family == "monospace"

    @staticmethod
    def can_add(text: str) -> bool:
        return bool((text or "").strip())

    # --- Slots for View to call ---
    @Slot(str)
    def request_add(self, text: str) -> Optional[str]:
        return self.state.add_entry(text)

    @Slot(str)
    def request_remove(self, entry_id: str):
        self.state.remove_entry(entry_id)

    @Slot()
    def request_randomize(self):
        self.state.randomize_all()

    @Slot()
    def request_clear(self):
        self.state.clear()

    def finish_drag(self, entry_id: str, pixel_pos: Tuple[float, float], drawable_rect: DrawableRect):
        """Called by the canvas when a marker is released."""
        target = pixel_to_normalized(pixel_pos, drawable_rect)
        self.state.move_entry(entry_id, target, drawable_rect.aspect_ratio)

    @Slot(str)
    def select_theme(self, theme_id: str):
        self.settings.set_theme_id(theme_id)

    @Slot(str)
    def select_language(self, lang_code: str):
        self.settings.set_language(lang_code)

    def export_image(self, path: Optional[str] = None) -> Optional[str]:
        """Renders the current chart to PNG. Returns the file path, or None on failure."""
        if path is None and self.paths is not None:
            path = self.paths.export_file()
        date_text = datetime.now().strftime("%b %d, %Y")
        try:
            written = export_chart_png(self.state.current_entries(), self._theme, path,
                                       date_text=date_text)
        except (OSError, ValueError) as e:
            print(f"Error: chart export failed: {e}", file=sys.stderr)
            self.state.post_status(tr("export_failed"))
            return None
        self.state.post_status(tr("export_success", path=written))
        self.export_finished.emit(written)
        return written

    # --- Slots for services to call ---
    @Slot(object)
    def _on_entries_changed(self, entries: List[Entry]):
        self._entries = entries
        self.set_panel_enabled(bool(entries))
        self.entries_updated.emit(entries)

    @Slot(str)
    def _on_theme_changed(self, theme_id: str):
        self._theme = theme_for(theme_id)
        self.theme_updated.emit(self._theme)
        self.state.post_status(tr("theme_changed_message", theme=self._theme.display_name))

    @Slot(str)
    def _on_language_changed(self, lang_code: str):
        set_language(lang_code)
        self.language_updated.emit(lang_code)
