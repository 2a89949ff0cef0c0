# gui/chart_export.py
# -*- coding: utf-8 -*-
"""
Static PNG rendering of the chart with matplotlib.

The figure is built without pyplot and drawn through the Agg canvas, so export
works the same with or without a running Qt event loop.
"""
import os
import tempfile
from datetime import datetime
from typing import List, Optional, Sequence

from matplotlib import patheffects
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch, Rectangle
from matplotlib.path import Path

from config.settings import (EXPORT_WIDTH_IN, EXPORT_HEIGHT_IN, EXPORT_DPI, EXPORT_FILE_NAME,
                             GRID_COLUMNS, GRID_ROWS, PHASE_LABELS, X_AXIS_LABEL, Y_AXIS_LABEL,
                             TAG_LEADER_LINE_MIN_OFFSET)
from config.themes import ChartTheme, OVERLAY_CRT_SCANLINES
from core.curve_sampler import CubicSegment, CurveSampler
from core.entry import Entry
from core.tag_layout import estimate_half_width

# Axes rectangle inside the figure, in figure fractions: left, bottom, width, height
CHART_AXES_RECT = (0.08, 0.11, 0.88, 0.74)
SCANLINE_SPACING_PX = 3
DOT_SIZE_PT2 = 60


def curve_path(segments: Sequence[CubicSegment]) -> Path:
    """Builds one matplotlib Path (MOVETO + CURVE4 triplets) from the curve segments."""
    vertices: List = [segments[0].p0]
    codes: List[int] = [Path.MOVETO]
    for seg in segments:
        vertices.extend([seg.p1, seg.p2, seg.p3])
        codes.extend([Path.CURVE4] * 3)
    return Path(vertices, codes)


def _font(theme: ChartTheme, size: float) -> dict:
    return {"family": theme.font_family, "weight": theme.font_weight, "size": size}


def _draw_grid(ax, theme: ChartTheme):
    for i in range(1, GRID_COLUMNS):
        ax.axvline(i / GRID_COLUMNS, color=theme.grid_line_color, linewidth=0.6, zorder=1)
    for j in range(1, GRID_ROWS):
        ax.axhline(j / GRID_ROWS, color=theme.grid_line_color, linewidth=0.6, zorder=1)
    ax.add_patch(Rectangle((0, 0), 1, 1, transform=ax.transAxes, fill=False,
                           edgecolor=theme.axis_label_color, linewidth=theme.border_width, zorder=2))


def _draw_curve(ax, theme: ChartTheme, sampler: CurveSampler):
    path = curve_path(sampler.segments)
    if theme.curve_glow_color and theme.curve_glow_width > 0:
        ax.add_patch(PathPatch(path, facecolor="none", edgecolor=theme.curve_glow_color,
                               linewidth=theme.curve_glow_width, capstyle="round", zorder=3))
    ax.add_patch(PathPatch(path, facecolor="none", edgecolor=theme.curve_color,
                           linewidth=theme.curve_line_width, capstyle="round", zorder=4))


def _draw_labels(fig: Figure, ax, theme: ChartTheme, date_text: str):
    for text, x, y_from_top in PHASE_LABELS:
        ax.text(x, 1.0 - y_from_top, text, ha="center", va="center", color=theme.phase_label_color,
                fontdict=_font(theme, 7), linespacing=1.1, zorder=5)

    left, bottom, width, height = CHART_AXES_RECT
    fig.text(left + width / 2, bottom - 0.06, X_AXIS_LABEL, ha="center", va="center",
             color=theme.axis_label_color, fontdict=_font(theme, 9))
    fig.text(left - 0.035, bottom + height / 2, Y_AXIS_LABEL, ha="center", va="center",
             rotation=90, color=theme.axis_label_color, fontdict=_font(theme, 9))
    fig.text(0.5, 0.93, theme.export_title_text, ha="center", va="center",
             color=theme.title_color, fontdict=_font(theme, 16))
    fig.text(0.985, 0.02, date_text, ha="right", va="bottom", alpha=0.6,
             color=theme.phase_label_color, fontdict=_font(theme, 7))


def glow_effects(theme: ChartTheme, color: str, alpha: float) -> list:
    """Path effects that stroke a wide translucent halo under an artist; empty without glow."""
    if theme.tag_glow_radius <= 0:
        return []
    return [patheffects.Stroke(linewidth=theme.tag_border_width + theme.tag_glow_radius,
                               foreground=to_rgba(color, alpha)),
            patheffects.Normal()]


def _draw_entries(ax, theme: ChartTheme, entries: Sequence[Entry]):
    for entry in entries:
        color = theme.marker_color(entry.color_index)
        label = entry.display_name
        half_width = estimate_half_width(len(label))
        tag_x = min(max(entry.x, half_width), 1.0 - half_width)
        tag_y = entry.y + entry.tag_offset

        if abs(entry.tag_offset) > TAG_LEADER_LINE_MIN_OFFSET:
            ax.plot([entry.x, tag_x], [entry.y, tag_y], color=color, linewidth=1.0,
                    linestyle=(0, (3, 2)), alpha=0.8, zorder=6)
        dot = ax.scatter([entry.x], [entry.y], s=DOT_SIZE_PT2, color=color,
                         edgecolors=theme.background_color, linewidths=1.5,
                         marker="s" if theme.square_borders else "o", zorder=7)
        dot.set_path_effects(glow_effects(theme, color, 0.7))
        box_style = "square,pad=0.35" if theme.square_borders else "round,pad=0.35"
        tag = ax.text(tag_x, tag_y, label, ha="center", va="center", color=color,
                      fontdict=_font(theme, 8), zorder=8,
                      bbox={"boxstyle": box_style,
                            "facecolor": to_rgba(theme.chip_bg_color, theme.tag_bg_opacity),
                            "edgecolor": color, "linewidth": theme.tag_border_width})
        tag.get_bbox_patch().set_path_effects(glow_effects(theme, color, 0.5))


def _draw_scanlines(fig: Figure, dpi: float):
    height_px = fig.get_figheight() * dpi
    count = int(height_px // SCANLINE_SPACING_PX)
    if count <= 0:
        return
    segments = [[(0.0, i / count), (1.0, i / count)] for i in range(count)]
    fig.add_artist(LineCollection(segments, colors=[(0, 0, 0, 0.18)], linewidths=0.5,
                                  transform=fig.transFigure, zorder=20))


def render_chart_figure(entries: Sequence[Entry], theme: ChartTheme,
                        date_text: Optional[str] = None, dpi: float = EXPORT_DPI,
                        sampler: Optional[CurveSampler] = None) -> Figure:
    """Builds the themed chart figure for the given entry snapshots."""
    sampler = sampler or CurveSampler.shared()
    if date_text is None:
        date_text = datetime.now().strftime("%b %d, %Y")

    fig = Figure(figsize=(EXPORT_WIDTH_IN, EXPORT_HEIGHT_IN), dpi=dpi,
                 facecolor=theme.background_color)
    ax = fig.add_axes(CHART_AXES_RECT)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_facecolor(theme.background_color)
    ax.set_axis_off()

    _draw_grid(ax, theme)
    _draw_curve(ax, theme, sampler)
    _draw_labels(fig, ax, theme, date_text)
    _draw_entries(ax, theme, entries)
    if theme.overlay == OVERLAY_CRT_SCANLINES:
        _draw_scanlines(fig, dpi)
    return fig


def default_export_path() -> str:
    return os.path.join(tempfile.gettempdir(), EXPORT_FILE_NAME)


def export_chart_png(entries: Sequence[Entry], theme: ChartTheme, path: Optional[str] = None,
                     dpi: int = EXPORT_DPI, date_text: Optional[str] = None) -> str:
    """
    Writes the chart to a PNG file and returns its path.

    Raises OSError when the file cannot be written.
    """
    path = path or default_export_path()
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    fig = render_chart_figure(entries, theme, date_text=date_text, dpi=dpi)
    FigureCanvasAgg(fig)
    fig.savefig(path, format="png", dpi=dpi, facecolor=fig.get_facecolor(), edgecolor="none")
    return path
