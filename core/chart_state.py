# -*- coding: utf-8 -*-
"""
定义了图表的中心化、响应式状态。

ChartState 持有所有已绘制的条目。每次修改都会先把位置吸附到曲线上，
重新计算标签布局，然后通过Qt信号发布一份新的快照列表，UI组件只会拿到副本。
"""
import copy
import random
from typing import Callable, List, Optional, Tuple

from gui.qt import QObject, Signal, QTimer
from config.settings import RANDOM_X_MIN, RANDOM_X_MAX, STATUS_MESSAGE_DURATION_MS
from core.curve_sampler import CurveSampler
from core.entry import Entry
from core.tag_layout import LayoutInput, resolve_overlaps
from core import zones

# scheduler(delay_ms, callback)
Scheduler = Callable[[int, Callable[[], None]], None]


def _qt_single_shot(delay_ms: int, callback: Callable[[], None]):
    QTimer.singleShot(delay_ms, callback)


class ChartState(QObject):
    entries_changed = Signal(object)  # List[Entry]
    status_message_changed = Signal(str)

    def __init__(self, sampler: Optional[CurveSampler] = None,
                 rng: Optional[random.Random] = None,
                 scheduler: Optional[Scheduler] = None,
                 status_duration_ms: int = STATUS_MESSAGE_DURATION_MS,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.sampler = sampler or CurveSampler.shared()
        self._rng = rng or random.Random()
        self._schedule = scheduler or _qt_single_shot
        self._status_duration_ms = status_duration_ms

        self._entries: List[Entry] = []
        self._next_color_index: int = 0
        self._status_message: Optional[str] = None
        self._status_generation: int = 0

    # --- 查询 ---

    def current_entries(self) -> List[Entry]:
        return [copy.copy(e) for e in self._entries]

    def entry(self, entry_id: str) -> Optional[Entry]:
        found = self._find(entry_id)
        return copy.copy(found) if found else None

    def current_status_message(self) -> Optional[str]:
        return self._status_message

    @property
    def next_color_index(self) -> int:
        return self._next_color_index

    @property
    def status_generation(self) -> int:
        return self._status_generation

    def zone_for(self, x: float) -> zones.Zone:
        return zones.zone_for(x)

    def message_for(self, name: str, x: float) -> str:
        return zones.message_for(name, x)

    # --- 修改 ---

    def add_entry(self, name: str) -> Optional[str]:
        """在曲线上的随机位置添加一个命名条目。空白名字会被忽略。"""
        trimmed = (name or "").strip()
        if not trimmed:
            return None

        color_index = self._next_color_index
        self._next_color_index += 1

        x, y = self.sampler.snap((self._random_x(), 0.0))
        entry = Entry(name=trimmed, color_index=color_index, x=x, y=y)
        self._entries.append(entry)
        self.relayout_all()
        self._show_status(self.message_for(entry.name, entry.x))
        return entry.id

    def remove_entry(self, entry_id: str):
        entry = self._find(entry_id)
        if entry is None:
            return
        self._entries.remove(entry)
        self.relayout_all()

    def move_entry(self, entry_id: str, target: Tuple[float, float], aspect_ratio: float = 1.0):
        """将条目移动到距目标最近的曲线采样点 (按屏幕上的距离计算)。"""
        entry = self._find(entry_id)
        if entry is None:
            return
        nearest = self.sampler.nearest_point(target, aspect_ratio)
        entry.x, entry.y = self.sampler.snap(nearest)
        self.relayout_all()
        self._show_status(self.message_for(entry.name, entry.x))

    def randomize_all(self):
        if not self._entries:
            return
        for entry in self._entries:
            entry.x, entry.y = self.sampler.snap((self._random_x(), 0.0))
        self.relayout_all()

    def clear(self):
        """移除所有条目。颜色索引继续递增，不会重置。"""
        if not self._entries:
            return
        self._entries.clear()
        self.relayout_all()

    def relayout_all(self):
        """重新计算所有标签偏移并发布新的快照。"""
        inputs = [LayoutInput(index=i, x=e.x, curve_y=e.y, name_length=len(e.name))
                  for i, e in enumerate(self._entries)]
        offsets = resolve_overlaps(inputs)
        for layout_input, offset in zip(inputs, offsets):
            self._entries[layout_input.index].tag_offset = offset
        self.entries_changed.emit(self.current_entries())

    # --- 状态消息生命周期 ---

    def post_status(self, message: str):
        """显示一条临时消息 (例如导出结果)，过期规则与其他状态消息相同。"""
        if message:
            self._show_status(message)

    def _show_status(self, message: str):
        self._status_generation += 1
        generation = self._status_generation
        self._status_message = message
        self.status_message_changed.emit(message)
        self._schedule(self._status_duration_ms, lambda: self._expire_status(generation))

    def _expire_status(self, generation: int):
        # 已有更新的消息取代了这一条。
        if generation != self._status_generation:
            return
        self._status_message = None
        self.status_message_changed.emit("")

    # --- 辅助方法 ---

    def _find(self, entry_id: str) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _random_x(self) -> float:
        return self._rng.uniform(RANDOM_X_MIN, RANDOM_X_MAX)
