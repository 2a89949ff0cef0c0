# -*- coding: utf-8 -*-
"""
贪心的名字标签布局。

为每个标签计算一个相对曲线的带符号垂直偏移 (正数在上方，负数在下方)，
使标签矩形互不重叠。这里的函数都只依赖输入，没有副作用。
"""
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Sequence

from config.settings import (TAG_CHAR_WIDTH, TAG_WIDTH_PADDING, TAG_HALF_HEIGHT,
                             TAG_BASE_OFFSET, TAG_PUSH_STEP, TAG_MAX_PUSH_ATTEMPTS,
                             TAG_NEIGHBOR_WINDOW, TAG_MAX_DISPLAY_CHARS)


class LayoutInput(NamedTuple):
    index: int
    x: float
    curve_y: float
    name_length: int


@dataclass(frozen=True)
class TagRect:
    index: int
    x: float
    y: float  # 曲线上的y
    half_width: float
    half_height: float
    offset: float

    @property
    def min_x(self) -> float: return self.x - self.half_width
    @property
    def max_x(self) -> float: return self.x + self.half_width
    @property
    def effective_y(self) -> float: return self.y + self.offset
    @property
    def min_y(self) -> float: return self.effective_y - self.half_height
    @property
    def max_y(self) -> float: return self.effective_y + self.half_height

    def with_offset(self, offset: float) -> "TagRect":
        return replace(self, offset=offset)


def estimate_half_width(name_length: int) -> float:
    """显示 name_length 个字符的标签的近似归一化半宽。"""
    capped = max(0, min(int(name_length), TAG_MAX_DISPLAY_CHARS))
    return capped * TAG_CHAR_WIDTH / 2 + TAG_WIDTH_PADDING


def overlaps(a: TagRect, b: TagRect) -> bool:
    """两个轴上都严格相交才算重叠，边缘相接不算。"""
    if not (a.max_x > b.min_x and b.max_x > a.min_x):
        return False
    return a.max_y > b.min_y and b.max_y > a.min_y


def _offset_ladder(side: float) -> List[float]:
    return [side * (TAG_BASE_OFFSET + k * TAG_PUSH_STEP) for k in range(TAG_MAX_PUSH_ATTEMPTS + 1)]


def _place(rect: TagRect, window: Sequence[TagRect]) -> float:
    """根据窗口内已放置的矩形为 rect 选择偏移。"""
    side = 1.0
    if any(overlaps(rect, n) and n.offset > 0 for n in window):
        side = -1.0

    candidates = _offset_ladder(side) + _offset_ladder(-side)
    best_offset, best_count = candidates[0], None
    for offset in candidates:
        moved = rect.with_offset(offset)
        count = sum(1 for n in window if overlaps(moved, n))
        if count == 0:
            return offset
        if best_count is None or count < best_count:
            best_offset, best_count = offset, count
    return best_offset


def resolve_overlaps(tags: Sequence[LayoutInput]) -> List[float]:
    """
    按输入顺序为每个标签返回一个偏移。

    标签按x从左到右依次处理，每个标签只与x顺序上前 TAG_NEIGHBOR_WINDOW 个标签比较。
    若与上方的邻居相撞则翻到曲线下方，再逐步远离曲线直到不再重叠。
    标签不超过四个时任意两个都在同一窗口内，因此结果中不会有重叠的矩形。
    """
    if not tags:
        return []

    rects = [
        TagRect(index=position, x=float(tag.x), y=float(tag.curve_y),
                half_width=estimate_half_width(tag.name_length),
                half_height=TAG_HALF_HEIGHT, offset=TAG_BASE_OFFSET)
        for position, tag in enumerate(tags)
    ]
    rects.sort(key=lambda r: r.x)

    for i in range(1, len(rects)):
        window = rects[max(0, i - TAG_NEIGHBOR_WINDOW):i]
        rects[i] = rects[i].with_offset(_place(rects[i], window))

    result = [0.0] * len(tags)
    for rect in rects:
        result[rect.index] = rect.offset
    return result
