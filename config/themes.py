# -*- coding: utf-8 -*-
"""
Static theme tables for the chart.

Themes are plain keyed configuration consumed only by the rendering layers
(QPainter canvas and matplotlib export). Colors are hex strings, either
"#RRGGBB" or "#RRGGBBAA" when a theme needs translucency.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from config.settings import DEFAULT_THEME_ID

OVERLAY_NONE = "none"
OVERLAY_CRT_SCANLINES = "crt_scanlines"


@dataclass(frozen=True)
class ChartTheme:
    """All colors, fonts and chrome switches of one theme."""
    id: str
    emoji: str
    tagline: str
    title_text: str
    export_title_text: str

    # -- Colors --
    background_color: str
    grid_line_color: str
    curve_color: str
    curve_glow_color: Optional[str]  # None = no glow layer
    title_color: str
    axis_label_color: str
    phase_label_color: str
    input_bg_color: str
    input_border_color: str
    button_bg_color: str
    button_text_color: str
    chip_bg_color: str
    marker_colors: Tuple[str, ...]

    # -- Curve rendering --
    curve_line_width: float
    curve_glow_width: float

    # -- Typography --
    font_family: str  # generic family: "monospace", "serif" or "sans-serif"
    font_weight: str  # "semibold", "bold" or "heavy"

    # -- Name tags --
    tag_glow_radius: float
    tag_border_width: float
    tag_bg_opacity: float

    # -- UI chrome --
    square_borders: bool
    bracket_buttons: bool
    prompt_char: str
    border_width: float
    overlay: str

    @property
    def display_name(self) -> str:
        return f"{self.emoji} {self.id}"

    @property
    def add_text(self) -> str:
        return "[ADD]" if self.bracket_buttons else "Add"

    @property
    def share_text(self) -> str:
        return "[SHARE]" if self.bracket_buttons else "Share"

    @property
    def remove_text(self) -> str:
        return "[X]" if self.bracket_buttons else "×"

    def marker_color(self, color_index: int) -> str:
        """Resolves an entry's color index against the palette (cycles by modulo)."""
        return self.marker_colors[color_index % len(self.marker_colors)]


# ── 8-Bit ZX Spectrum ────────────────────────────────────────
ZX_SPECTRUM = ChartTheme(
    id="8-BIT",
    emoji="👾",
    tagline="Loading tape…",
    title_text="DUNNING-KREUGERIZER-5000",
    export_title_text="⚡ DUNNING-KREUGERIZER-5000 ⚡",
    background_color="#0D0D1F",
    grid_line_color="#262640",
    curve_color="#00FF00",
    curve_glow_color="#00FF004D",
    title_color="#FFFF00",
    axis_label_color="#00CCCC",
    phase_label_color="#B3B3B3",
    input_bg_color="#1A1A33",
    input_border_color="#00CCCC",
    button_bg_color="#CC0000",
    button_text_color="#FFFFFF",
    chip_bg_color="#1F1F38",
    marker_colors=("#FF0000", "#4D80FF", "#FF00FF", "#00FFFF",
                   "#FFFF00", "#FFFFFF", "#00FF00", "#FF8000"),
    curve_line_width=3.0,
    curve_glow_width=8.0,
    font_family="monospace",
    font_weight="heavy",
    tag_glow_radius=6.0,
    tag_border_width=2.0,
    tag_bg_opacity=0.92,
    square_borders=True,
    bracket_buttons=True,
    prompt_char=">",
    border_width=2.0,
    overlay=OVERLAY_CRT_SCANLINES,
)

# ── Victorian Antique ────────────────────────────────────────
VICTORIAN = ChartTheme(
    id="VICTORIAN",
    emoji="🏛",
    tagline="Ye olde chart",
    title_text="❧ The Dunning-Kruger Effect ❦",
    export_title_text="✦ The Dunning-Kruger Effect ✦",
    background_color="#EBDEC2",    # warm aged parchment
    grid_line_color="#B89E7A",
    curve_color="#591F14",         # dark burgundy ink
    curve_glow_color=None,
    title_color="#8C6114",         # antique gold
    axis_label_color="#734D1F",
    phase_label_color="#6B4724",
    input_bg_color="#E0D1B3",
    input_border_color="#946B2E",
    button_bg_color="#801A1F",
    button_text_color="#F2E0A6",
    chip_bg_color="#D9C7A3",
    marker_colors=("#A61A1A", "#1A388C", "#8C2680", "#146B4D",
                   "#9E7A0D", "#8C3314", "#47267A", "#1A6173"),
    curve_line_width=3.0,
    curve_glow_width=0.0,
    font_family="serif",
    font_weight="bold",
    tag_glow_radius=0.0,
    tag_border_width=2.0,
    tag_bg_opacity=0.90,
    square_borders=False,
    bracket_buttons=False,
    prompt_char="❧",
    border_width=2.5,
    overlay=OVERLAY_NONE,
)

# ── Chalkboard ───────────────────────────────────────────────
CHALKBOARD = ChartTheme(
    id="CHALKBOARD",
    emoji="🍎",
    tagline="Class is in session",
    title_text="The Dunning-Kruger Effect",
    export_title_text="The Dunning-Kruger Effect",
    background_color="#24452B",
    grid_line_color="#FFFFFF1F",
    curve_color="#FFFFFFE0",
    curve_glow_color=None,
    title_color="#FFFFFFEB",
    axis_label_color="#F2D980",
    phase_label_color="#FFFFFFA6",
    input_bg_color="#1C3824",
    input_border_color="#FFFFFF59",
    button_bg_color="#D98C8C",
    button_text_color="#24452B",
    chip_bg_color="#2B5236",
    marker_colors=("#FFD966", "#8CCCFF", "#FF99A6", "#FFFFFF",
                   "#B3FFA6", "#FFBF80", "#CCA6FF", "#99F2E6"),
    curve_line_width=3.5,
    curve_glow_width=0.0,
    font_family="sans-serif",
    font_weight="semibold",
    tag_glow_radius=0.0,
    tag_border_width=1.5,
    tag_bg_opacity=0.85,
    square_borders=False,
    bracket_buttons=False,
    prompt_char="✎",
    border_width=2.0,
    overlay=OVERLAY_NONE,
)

# ── Corporate Slide ──────────────────────────────────────────
CORPORATE = ChartTheme(
    id="CORPORATE",
    emoji="📊",
    tagline="Per my last email",
    title_text="Competency Assessment Matrix",
    export_title_text="Competency Assessment Matrix",
    background_color="#F7F7FA",
    grid_line_color="#E0E0E6",
    curve_color="#3366BF",
    curve_glow_color=None,
    title_color="#333347",
    axis_label_color="#737385",
    phase_label_color="#8C8C9E",
    input_bg_color="#FFFFFF",
    input_border_color="#CCCCD6",
    button_bg_color="#3366BF",
    button_text_color="#FFFFFF",
    chip_bg_color="#F0F0F5",
    marker_colors=("#3366BF", "#E65940", "#33A659", "#F2A61A",
                   "#8C4DB3", "#268C8C", "#D97326", "#80808C"),
    curve_line_width=2.5,
    curve_glow_width=0.0,
    font_family="sans-serif",
    font_weight="semibold",
    tag_glow_radius=0.0,
    tag_border_width=1.0,
    tag_bg_opacity=0.95,
    square_borders=False,
    bracket_buttons=False,
    prompt_char="•",
    border_width=1.0,
    overlay=OVERLAY_NONE,
)

THEMES: Dict[str, ChartTheme] = {t.id: t for t in (ZX_SPECTRUM, VICTORIAN, CHALKBOARD, CORPORATE)}


def theme_ids() -> List[str]:
    """Theme identifiers in menu order."""
    return list(THEMES.keys())


def theme_for(theme_id: Optional[str]) -> ChartTheme:
    """Returns the theme for an id, falling back to the default theme."""
    return THEMES.get(theme_id or "", THEMES[DEFAULT_THEME_ID])
