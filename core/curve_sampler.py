# -*- coding: utf-8 -*-
"""
固定达克效应曲线的共享采样器。

曲线由归一化空间中四段首尾相接的三次贝塞尔曲线组成 (x = 经验, y = 自信程度)。
各段只采样一次，生成按x排序的查找表，之后所有的高度、吸附和最近点查询都基于这张表，
保证图表状态、画布和导出器看到的曲线形状完全一致。
"""
import math
import threading
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from config.settings import (DK_CURVE_SEGMENTS, SAMPLES_PER_SEGMENT,
                             DEGENERATE_BRACKET_EPSILON, NEAREST_TARGET_LIMIT, ControlPoints)


class CurvePoint(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class CubicSegment:
    """一段三次贝塞尔曲线: 从 p0 到 p3，控制点为 p1 和 p2。"""
    p0: Tuple[float, float]
    p1: Tuple[float, float]
    p2: Tuple[float, float]
    p3: Tuple[float, float]

    @classmethod
    def from_control_points(cls, points: ControlPoints) -> "CubicSegment":
        return cls(*points)

    def evaluate(self, t: np.ndarray) -> np.ndarray:
        """对一组t值计算 B(t)，返回 (n, 2) 数组。"""
        t = np.asarray(t, dtype=float)[:, np.newaxis]
        mt = 1.0 - t
        p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (self.p0, self.p1, self.p2, self.p3))
        return (mt ** 3) * p0 + 3.0 * (mt ** 2) * t * p1 + 3.0 * mt * (t ** 2) * p2 + (t ** 3) * p3


def _clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


class CurveSampler:
    """
    曲线各段的预计算查找表。

    查找表在构造函数中生成，此后只读，因此单个实例可以被任意多个读取方共享。
    """
    _shared: Optional["CurveSampler"] = None
    _shared_lock = threading.Lock()

    def __init__(self, segments: Sequence[ControlPoints] = DK_CURVE_SEGMENTS,
                 samples_per_segment: int = SAMPLES_PER_SEGMENT):
        self.segments: List[CubicSegment] = [CubicSegment.from_control_points(s) for s in segments]
        self.samples_per_segment = max(1, int(samples_per_segment))

        t_values = np.linspace(0.0, 1.0, self.samples_per_segment + 1)
        samples = np.concatenate([seg.evaluate(t_values) for seg in self.segments])
        order = np.argsort(samples[:, 0], kind="stable")
        table = samples[order]
        table.flags.writeable = False
        self._table = table
        self._xs = table[:, 0]
        self._ys = table[:, 1]

    @classmethod
    def shared(cls) -> "CurveSampler":
        """返回标准曲线在整个进程内共享的采样器。"""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    @property
    def table(self) -> np.ndarray:
        """按x排序的 (n, 2) 只读采样数组。"""
        return self._table

    def curve_height(self, x: float) -> float:
        """用二分查找定位x两侧的采样点，再线性插值得到曲线高度。"""
        x = _clamp_unit(float(x))
        lo, hi = 0, len(self._table) - 1
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self._xs[mid] <= x:
                lo = mid
            else:
                hi = mid

        ax, ay = float(self._xs[lo]), float(self._ys[lo])
        bx, by = float(self._xs[hi]), float(self._ys[hi])
        if abs(bx - ax) < DEGENERATE_BRACKET_EPSILON:
            return ay
        return ay + (x - ax) / (bx - ax) * (by - ay)

    def snap(self, point: Tuple[float, float]) -> CurvePoint:
        """保留x (限制在 [0, 1] 内)，并把y替换为该处的曲线高度。"""
        x = _clamp_unit(float(point[0]))
        return CurvePoint(x, self.curve_height(x))

    def nearest_point(self, target: Tuple[float, float], aspect_ratio: float = 1.0) -> CurvePoint:
        """
        返回查找表中距 target 最近的采样点。

        aspect_ratio 为绘图区宽度 / 高度，x方向的距离按它缩放，使度量与屏幕上的距离一致。
        距离相同时取索引最小的采样点。
        """
        try:
            aspect = float(aspect_ratio)
        except (TypeError, ValueError):
            aspect = 1.0
        if not math.isfinite(aspect) or aspect <= 0.0:
            aspect = 1.0
        aspect = min(aspect, NEAREST_TARGET_LIMIT)

        # 远处或无穷大的目标先裁剪到有限范围，避免平方溢出
        tx, ty = np.clip([float(target[0]), float(target[1])], -NEAREST_TARGET_LIMIT, NEAREST_TARGET_LIMIT)
        dx = (self._xs - tx) * aspect
        dy = self._ys - ty
        distances = dx * dx + dy * dy
        if np.isnan(distances).all():
            index = 0
        else:
            index = int(np.nanargmin(distances))
        return CurvePoint(float(self._xs[index]), float(self._ys[index]))
