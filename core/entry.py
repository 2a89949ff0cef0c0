# -*- coding: utf-8 -*-
"""
图表上的单个命名标记。
"""
import uuid
from dataclasses import dataclass, field

from config.settings import TAG_MAX_DISPLAY_CHARS


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Entry:
    name: str
    color_index: int
    x: float
    y: float
    tag_offset: float = 0.0  # 0 表示尚未布局
    id: str = field(default_factory=_new_id)

    @property
    def display_name(self) -> str:
        """大写的名字，过长时截断并加省略号以适应标签。"""
        upper = self.name.upper()
        if len(upper) > TAG_MAX_DISPLAY_CHARS:
            return upper[:TAG_MAX_DISPLAY_CHARS - 1] + "…"
        return upper
