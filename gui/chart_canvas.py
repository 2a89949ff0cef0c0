# -*- coding: utf-8 -*-
"""
基于QPainter的达克效应图表画布。

静态图层 (背景、网格、曲线、标签) 缓存在一个pixmap中，只在尺寸或主题变化时重建；
标记和名字标签每帧绘制在其上。拖动标记时预览最近的曲线采样点，
松开时把位置交给ViewModel。
"""

from .qt import *
from typing import List, Optional, Tuple

from config.settings import (CHART_PADDING_PX, CHART_PADDING_COMPACT_PX, COMPACT_WIDTH_PX,
                             GRID_COLUMNS, GRID_ROWS, MARKER_DOT_DIAMETER_PX, PHASE_LABELS,
                             X_AXIS_LABEL, Y_AXIS_LABEL, TAG_LEADER_LINE_MIN_OFFSET)
from config.themes import ChartTheme, OVERLAY_CRT_SCANLINES
from core.entry import Entry
from tools.localization import tr
from viewmodels.chart_viewmodel import (ChartViewModel, DrawableRect, normalized_to_pixel,
                                        pixel_to_normalized, estimate_tag_half_width_px, clamp_tag_x)

MARKER_PICK_RADIUS_PX = 12.0
TAG_HEIGHT_PX = 20.0
SCANLINE_SPACING_PX = 3

_STYLE_HINTS = {
    "monospace": ("Courier New", QFont.StyleHint.Monospace),
    "serif": ("Georgia", QFont.StyleHint.Serif),
    "sans-serif": ("Helvetica", QFont.StyleHint.SansSerif),
}
_WEIGHTS = {
    "semibold": QFont.Weight.DemiBold,
    "bold": QFont.Weight.Bold,
    "heavy": QFont.Weight.Black,
}


def qcolor(hex_color: str, opacity: Optional[float] = None) -> QColor:
    """从 "#RRGGBB" 或 "#RRGGBBAA" 生成QColor (Qt自身会把8位十六进制解析为 #AARRGGBB)。"""
    value = hex_color.lstrip('#')
    r, g, b = int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    a = int(value[6:8], 16) if len(value) >= 8 else 255
    color = QColor(r, g, b, a)
    if opacity is not None:
        color.setAlphaF(max(0.0, min(1.0, opacity)))
    return color


def theme_font(theme: ChartTheme, point_size: float) -> QFont:
    family, hint = _STYLE_HINTS.get(theme.font_family, _STYLE_HINTS["sans-serif"])
    font = QFont(family)
    font.setStyleHint(hint)
    font.setPointSizeF(point_size)
    font.setWeight(_WEIGHTS.get(theme.font_weight, QFont.Weight.DemiBold))
    return font


def glow_pen(theme: ChartTheme, color: QColor, opacity: float) -> Optional[QPen]:
    """在轮廓下方绘制光晕用的宽半透明画笔；主题没有光晕时返回None。"""
    if theme.tag_glow_radius <= 0:
        return None
    halo = QColor(color)
    halo.setAlphaF(max(0.0, min(1.0, opacity)))
    pen = QPen(halo, theme.tag_border_width + theme.tag_glow_radius)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


class ChartCanvas(QWidget):
    """绑定到ChartViewModel的交互式图表控件。"""

    def __init__(self, view_model: ChartViewModel, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.view_model = view_model
        self.setMinimumSize(360, 240)
        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._entries: List[Entry] = view_model.entries
        self._theme: ChartTheme = view_model.theme
        self._plot_area = QRectF()
        self._background_pixmap: Optional[QPixmap] = None

        self._dragging_id: Optional[str] = None
        self._drag_preview: Optional[Tuple[float, float]] = None  # 归一化坐标
        self._hovered_id: Optional[str] = None

        self.view_model.entries_updated.connect(self._on_entries_updated)
        self.view_model.theme_updated.connect(self._on_theme_updated)
        self.view_model.language_updated.connect(lambda _code: self.retranslate_ui())

    # --- ViewModel 更新 ---

    @Slot(object)
    def _on_entries_updated(self, entries: List[Entry]):
        self._entries = entries
        if self._dragging_id and not any(e.id == self._dragging_id for e in entries):
            self._dragging_id = None
            self._drag_preview = None
        self.update()

    @Slot(object)
    def _on_theme_updated(self, theme: ChartTheme):
        self._theme = theme
        self._background_pixmap = None
        self.update()

    def retranslate_ui(self):
        self._background_pixmap = None
        self.update()

    # --- 几何计算 ---

    def drawable_rect(self) -> DrawableRect:
        return DrawableRect.from_qrectf(self._plot_area)

    def _update_plot_area(self):
        rect = self.rect()
        pad = CHART_PADDING_COMPACT_PX if rect.width() < COMPACT_WIDTH_PX else CHART_PADDING_PX
        self._plot_area = QRectF(pad, pad, max(1, rect.width() - 2 * pad), max(1, rect.height() - 2 * pad))

    def _to_widget(self, x: float, y: float) -> QPointF:
        px, py = normalized_to_pixel((x, y), self.drawable_rect())
        return QPointF(px, py)

    def resizeEvent(self, event: QResizeEvent):
        self._update_plot_area()
        self._background_pixmap = None
        super().resizeEvent(event)

    # --- 绘制 ---

    def paintEvent(self, event):
        if self._plot_area.isEmpty():
            self._update_plot_area()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if self._background_pixmap is None or self._background_pixmap.size() != self.size():
            self._background_pixmap = QPixmap(self.size())
            self._background_pixmap.fill(Qt.GlobalColor.transparent)
            bg_painter = QPainter(self._background_pixmap)
            bg_painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            self._draw_background(bg_painter)
            self._draw_grid(bg_painter)
            self._draw_curve(bg_painter)
            self._draw_labels(bg_painter)
            bg_painter.end()

        painter.drawPixmap(0, 0, self._background_pixmap)
        if not self._entries:
            self._draw_empty_hint(painter)
        for entry in self._entries:
            self._draw_marker(painter, entry)
        if self._theme.overlay == OVERLAY_CRT_SCANLINES:
            self._draw_scanlines(painter)
        painter.end()

    def _draw_background(self, painter: QPainter):
        theme = self._theme
        painter.fillRect(self.rect(), qcolor(theme.background_color))
        pen = QPen(qcolor(theme.axis_label_color), theme.border_width)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        if theme.square_borders:
            painter.drawRect(self._plot_area)
        else:
            painter.drawRoundedRect(self._plot_area, 6, 6)

    def _draw_grid(self, painter: QPainter):
        area = self._plot_area
        painter.setPen(QPen(qcolor(self._theme.grid_line_color), 1))
        for i in range(1, GRID_COLUMNS):
            x = area.left() + area.width() * i / GRID_COLUMNS
            painter.drawLine(QPointF(x, area.top()), QPointF(x, area.bottom()))
        for j in range(1, GRID_ROWS):
            y = area.top() + area.height() * j / GRID_ROWS
            painter.drawLine(QPointF(area.left(), y), QPointF(area.right(), y))

    def _curve_path(self) -> QPainterPath:
        segments = self.view_model.state.sampler.segments
        path = QPainterPath(self._to_widget(*segments[0].p0))
        for seg in segments:
            path.cubicTo(self._to_widget(*seg.p1), self._to_widget(*seg.p2), self._to_widget(*seg.p3))
        return path

    def _draw_curve(self, painter: QPainter):
        theme = self._theme
        path = self._curve_path()
        painter.setBrush(Qt.BrushStyle.NoBrush)
        if theme.curve_glow_color and theme.curve_glow_width > 0:
            glow = QPen(qcolor(theme.curve_glow_color), theme.curve_glow_width)
            glow.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(glow)
            painter.drawPath(path)
        pen = QPen(qcolor(theme.curve_color), theme.curve_line_width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        painter.drawPath(path)

    def _draw_labels(self, painter: QPainter):
        theme = self._theme
        area = self._plot_area
        painter.setFont(theme_font(theme, 7))
        painter.setPen(qcolor(theme.phase_label_color))
        for text, x, y_from_top in PHASE_LABELS:
            center = QPointF(area.left() + x * area.width(), area.top() + y_from_top * area.height())
            box = QRectF(center.x() - 80, center.y() - 14, 160, 28)
            painter.drawText(box, Qt.AlignmentFlag.AlignCenter, text)

        painter.setFont(theme_font(theme, 8))
        painter.setPen(qcolor(theme.axis_label_color))
        bottom_box = QRectF(area.left(), area.bottom() + 4, area.width(), self.height() - area.bottom() - 4)
        painter.drawText(bottom_box, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, X_AXIS_LABEL)
        painter.save()
        painter.translate(area.left() - 6, area.center().y())
        painter.rotate(-90)
        painter.drawText(QRectF(-area.height() / 2, -20, area.height(), 20),
                         Qt.AlignmentFlag.AlignCenter, Y_AXIS_LABEL)
        painter.restore()

    def _draw_empty_hint(self, painter: QPainter):
        painter.setFont(theme_font(self._theme, 10))
        painter.setPen(qcolor(self._theme.phase_label_color))
        hint_box = QRectF(self._plot_area.left(), self._plot_area.center().y() + 30, self._plot_area.width(), 24)
        painter.drawText(hint_box, Qt.AlignmentFlag.AlignCenter, f"{self._theme.prompt_char} {tr('empty_chart_hint')}")

    def _marker_position(self, entry: Entry) -> Tuple[float, float]:
        if entry.id == self._dragging_id and self._drag_preview is not None:
            return self._drag_preview
        return entry.x, entry.y

    def _tag_rect(self, entry: Entry, x: float, y: float) -> QRectF:
        rect = self.drawable_rect()
        label = entry.display_name
        half_width = estimate_tag_half_width_px(label, self.view_model.uses_pixel_font)
        center = self._to_widget(x, y + entry.tag_offset)
        cx = clamp_tag_x(center.x(), half_width, rect)
        return QRectF(cx - half_width, center.y() - TAG_HEIGHT_PX / 2, 2 * half_width, TAG_HEIGHT_PX)

    def _draw_marker(self, painter: QPainter, entry: Entry):
        theme = self._theme
        color = qcolor(theme.marker_color(entry.color_index))
        x, y = self._marker_position(entry)
        dot = self._to_widget(x, y)
        tag = self._tag_rect(entry, x, y)

        if abs(entry.tag_offset) > TAG_LEADER_LINE_MIN_OFFSET:
            leader = QPen(color, 1)
            leader.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(leader)
            edge_y = tag.bottom() if tag.center().y() < dot.y() else tag.top()
            painter.drawLine(dot, QPointF(tag.center().x(), edge_y))

        radius = MARKER_DOT_DIAMETER_PX / 2
        if entry.id in (self._hovered_id, self._dragging_id):
            radius += 2
        dot_rect = QRectF(dot.x() - radius, dot.y() - radius, 2 * radius, 2 * radius)
        dot_glow = glow_pen(theme, color, 0.7)
        if dot_glow is not None:
            painter.setPen(dot_glow)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            self._draw_dot_shape(painter, dot_rect)
        painter.setPen(QPen(qcolor(theme.background_color), 1.5))
        painter.setBrush(QBrush(color))
        self._draw_dot_shape(painter, dot_rect)

        tag_glow = glow_pen(theme, color, 0.5)
        if tag_glow is not None:
            painter.setPen(tag_glow)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            self._draw_tag_shape(painter, tag)
        painter.setPen(QPen(color, theme.tag_border_width))
        painter.setBrush(QBrush(qcolor(theme.chip_bg_color, theme.tag_bg_opacity)))
        self._draw_tag_shape(painter, tag)
        painter.setFont(theme_font(theme, 8))
        painter.drawText(tag, Qt.AlignmentFlag.AlignCenter, entry.display_name)

    def _draw_dot_shape(self, painter: QPainter, dot_rect: QRectF):
        if self._theme.square_borders:
            painter.drawRect(dot_rect)
        else:
            painter.drawEllipse(dot_rect)

    def _draw_tag_shape(self, painter: QPainter, tag: QRectF):
        if self._theme.square_borders:
            painter.drawRect(tag)
        else:
            painter.drawRoundedRect(tag, 5, 5)

    def _draw_scanlines(self, painter: QPainter):
        painter.setPen(QPen(QColor(0, 0, 0, 46), 1))
        for y in range(0, self.height(), SCANLINE_SPACING_PX):
            painter.drawLine(0, y, self.width(), y)

    # --- 鼠标交互 ---

    def _entry_at(self, pos: QPointF) -> Optional[Entry]:
        # 先检查最上层 (最后绘制) 的标记。
        for entry in reversed(self._entries):
            x, y = self._marker_position(entry)
            dot = self._to_widget(x, y)
            if (pos.x() - dot.x()) ** 2 + (pos.y() - dot.y()) ** 2 < MARKER_PICK_RADIUS_PX ** 2:
                return entry
            if self._tag_rect(entry, x, y).contains(pos):
                return entry
        return None

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        entry = self._entry_at(event.position())
        if entry:
            self._dragging_id = entry.id
            self._drag_preview = (entry.x, entry.y)
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        if self._dragging_id is not None:
            rect = self.drawable_rect()
            target = pixel_to_normalized((pos.x(), pos.y()), rect)
            self._drag_preview = tuple(self.view_model.state.sampler.nearest_point(target, rect.aspect_ratio))
            self.update()
            return
        hovered = self._entry_at(pos)
        new_hover = hovered.id if hovered else None
        if new_hover != self._hovered_id:
            self._hovered_id = new_hover
            self.setCursor(Qt.CursorShape.OpenHandCursor if new_hover else Qt.CursorShape.ArrowCursor)
            self.update()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if self._dragging_id is None or event.button() != Qt.MouseButton.LeftButton:
            return
        entry_id = self._dragging_id
        self._dragging_id = None
        self._drag_preview = None
        self.setCursor(Qt.CursorShape.ArrowCursor)
        pos = event.position()
        self.view_model.finish_drag(entry_id, (pos.x(), pos.y()), self.drawable_rect())
        self.update()
