# -*- coding: utf-8 -*-
"""
达克效应图表应用的全局常量和默认设置。
"""
from typing import List, Dict, Any, Tuple

# ==============================================================================
# 应用信息
# ==============================================================================
APP_NAME: str = "Dunning-Kreugerizer-5000"
APP_ORGANIZATION_NAME: str = "DunningKruger"
APP_INTERNAL_NAME: str = "DunningKrugerChart"

# ==============================================================================
# 文件名 (完整路径由 core.path_manager.PathManager 集中生成)
# ==============================================================================
CONFIG_FILE_NAME: str = "dk_chart_config.json"
LANGUAGES_FILE_NAME: str = "languages.json"
EXPORT_DIR_NAME: str = "exports"
EXPORT_FILE_NAME: str = "Kreugerizer5000.png"

# ==============================================================================
# 曲线定义 (归一化的 0..1 空间, y = 自信程度)
# ==============================================================================
ControlPoints = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float], Tuple[float, float]]

# 四段首尾相接的三次贝塞尔曲线: 第 i 段的 p3 即第 i+1 段的 p0。
DK_CURVE_SEGMENTS: List[ControlPoints] = [
    ((0.00, 0.15), (0.05, 0.15), (0.08, 0.95), (0.15, 0.95)),
    ((0.15, 0.95), (0.22, 0.95), (0.30, 0.12), (0.40, 0.12)),
    ((0.40, 0.12), (0.50, 0.12), (0.60, 0.45), (0.70, 0.60)),
    ((0.70, 0.60), (0.80, 0.72), (0.90, 0.75), (1.00, 0.75)),
]
SAMPLES_PER_SEGMENT: int = 50
DEGENERATE_BRACKET_EPSILON: float = 1e-9
NEAREST_TARGET_LIMIT: float = 1e6

# ==============================================================================
# 名字标签布局 (归一化单位)
# ==============================================================================
TAG_CHAR_WIDTH: float = 0.009
TAG_WIDTH_PADDING: float = 0.01
TAG_HALF_HEIGHT: float = 0.03
TAG_BASE_OFFSET: float = 0.10
TAG_PUSH_STEP: float = 0.05
TAG_MAX_PUSH_ATTEMPTS: int = 5
TAG_NEIGHBOR_WINDOW: int = 3
TAG_MAX_DISPLAY_CHARS: int = 12
TAG_LEADER_LINE_MIN_OFFSET: float = 0.01

# ==============================================================================
# 图表状态行为
# ==============================================================================
RANDOM_X_MIN: float = 0.1
RANDOM_X_MAX: float = 0.9
STATUS_MESSAGE_DURATION_MS: int = 2000

# 区域边界 (升序)。x 小于第一个边界时属于第一个区域，依此类推。
ZONE_THRESHOLDS: List[float] = [0.25, 0.48, 0.75]

# ==============================================================================
# 绘制 / 导出
# ==============================================================================
CHART_PADDING_PX: int = 44
CHART_PADDING_COMPACT_PX: int = 28
COMPACT_WIDTH_PX: int = 500
GRID_COLUMNS: int = 10
GRID_ROWS: int = 8
MARKER_DOT_DIAMETER_PX: float = 10.0
EXPORT_WIDTH_IN: float = 8.0
EXPORT_HEIGHT_IN: float = 5.0
EXPORT_DPI: int = 200  # 800x500 点，按两倍分辨率输出

# 阶段标签锚点，使用归一化绘图坐标 (x, 距顶部的 y)。
PHASE_LABELS: List[Tuple[str, float, float]] = [
    ("MT. STUPID", 0.18, 0.02),
    ("VALLEY OF\nDESPAIR", 0.40, 0.97),
    ("SLOPE OF\nENLIGHTENMENT", 0.62, 0.50),
    ("PLATEAU OF\nSUSTAINABILITY", 0.88, 0.10),
]
X_AXIS_LABEL: str = "EXPERIENCE / KNOWLEDGE -->"
Y_AXIS_LABEL: str = "CONFIDENCE -->"

# ==============================================================================
# 偏好设置
# ==============================================================================
DEFAULT_LANGUAGE: str = "en" # 默认语言代码 (ISO 639-1)
DEFAULT_THEME_ID: str = "8-BIT"
KNOWN_LANGUAGES: Dict[str, str] = {"en": "English", "zh": "中文"}

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "language": DEFAULT_LANGUAGE,
    "theme_id": DEFAULT_THEME_ID,
    "window_geometry": None,
}
