# -*- coding: utf-8 -*-
"""
界面文字的国际化 (i18n) 处理。
从JSON文件加载语言字符串，并提供 tr() 查找函数。
区域消息属于图表内容，不在这里翻译。
"""

import json
import os
import sys
from typing import Dict, Optional
from config.settings import DEFAULT_LANGUAGE, KNOWN_LANGUAGES

# ==============================================================================
# 内置翻译字典
# ==============================================================================

# --- 英语 ---
DEFAULT_ENGLISH_TRANSLATIONS: Dict[str, str] = {
    # 窗口和控件
    "window_title": "Dunning-Kreugerizer-5000",
    "name_placeholder": "Enter a name",
    "add_button_tooltip": "Put someone on the curve",
    "randomize_button": "Shuffle",
    "randomize_button_tooltip": "Drop everyone at a new random spot",
    "clear_button": "Clear",
    "share_button_tooltip": "Export the chart as PNG and copy it to the clipboard",
    "remove_chip_tooltip": "Remove {name}",
    "theme_label": "Theme:",
    "language_label": "Language:",
    "empty_chart_hint": "Add a name to get started",
    "drag_hint": "Drag a marker along the curve",

    # 状态消息
    "export_success": "Chart copied to clipboard. Saved to {path}",
    "export_failed": "Could not export the chart.",
    "theme_changed_message": "Theme: {theme}",

    # 错误和对话框
    "unhandled_exception_title": "Unhandled Exception",
    "unhandled_exception_msg": "An unexpected error occurred:\n\n{error}",

    # 语言显示名称
    "lang_display_name_en": "English",
    "lang_display_name_zh": "中文",
}

# --- 中文 ---
DEFAULT_CHINESE_TRANSLATIONS: Dict[str, str] = {
    # 窗口和控件
    "window_title": "达克效应曲线生成器 5000",
    "name_placeholder": "输入名字",
    "add_button_tooltip": "把某人放到曲线上",
    "randomize_button": "随机",
    "randomize_button_tooltip": "把所有人随机放到新位置",
    "clear_button": "清空",
    "share_button_tooltip": "导出PNG图像并复制到剪贴板",
    "remove_chip_tooltip": "移除 {name}",
    "theme_label": "主题:",
    "language_label": "语言:",
    "empty_chart_hint": "添加一个名字开始",
    "drag_hint": "沿曲线拖动标记",

    # 状态消息
    "export_success": "图表已复制到剪贴板，并保存到 {path}",
    "export_failed": "无法导出图表。",
    "theme_changed_message": "主题: {theme}",

    # 错误和对话框
    "unhandled_exception_title": "未处理的异常",
    "unhandled_exception_msg": "发生了意外错误:\n\n{error}",

    # 语言显示名称
    "lang_display_name_en": "English",
    "lang_display_name_zh": "中文",
}

# ==============================================================================
# 模块状态和函数
# ==============================================================================
_BUILTIN_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": DEFAULT_ENGLISH_TRANSLATIONS,
    "zh": DEFAULT_CHINESE_TRANSLATIONS,
}

_translations: Dict[str, Dict[str, str]] = {}
_current_language: str = DEFAULT_LANGUAGE
_translations_loaded: bool = False
_language_file_path: Optional[str] = None

def load_translations(file_path: str):
    """
    加载 languages.json。文件缺失或损坏时用内置字典重新生成，
    方便用户在此模板上编辑。
    """
    global _translations, _translations_loaded, _language_file_path
    _language_file_path = file_path

    default_data = {code: table.copy() for code, table in _BUILTIN_TRANSLATIONS.items()}
    loaded_data = {}

    try:
        if os.path.exists(file_path) and os.path.getsize(file_path) > 0:
            with open(file_path, 'r', encoding='utf-8') as f:
                loaded_data = json.load(f)
            if not isinstance(loaded_data, dict):
                raise json.JSONDecodeError("Invalid format", "", 0)
        else:
            raise FileNotFoundError
    except (FileNotFoundError, json.JSONDecodeError):
        try:
            dir_name = os.path.dirname(file_path)
            if dir_name:
                os.makedirs(dir_name, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(default_data, f, indent=4, ensure_ascii=False)
        except OSError as e:
            print(f"Could not write default language file: {e}", file=sys.stderr)
        loaded_data = default_data

    # 以内置字典为基础，文件中的条目按键覆盖。
    final_translations = default_data.copy()
    for lang, trans in loaded_data.items():
        if isinstance(trans, dict):
            merged = _BUILTIN_TRANSLATIONS.get(lang, DEFAULT_ENGLISH_TRANSLATIONS).copy()
            merged.update({k: v for k, v in trans.items() if isinstance(v, str)})
            final_translations[lang] = merged

    _translations = final_translations
    _translations_loaded = True

def set_language(lang_code: str):
    global _current_language
    if lang_code in _translations or (not _translations_loaded and lang_code in _BUILTIN_TRANSLATIONS):
        _current_language = lang_code
    else:
        _current_language = DEFAULT_LANGUAGE

def tr(key: str, **kwargs) -> str:
    """返回当前语言中 key 对应的翻译，找不到时依次回退到英语和 key 本身。"""
    lang_dict = _translations.get(_current_language) or _BUILTIN_TRANSLATIONS.get(_current_language, {})
    translation = lang_dict.get(key)

    if translation is None:
        translation = DEFAULT_ENGLISH_TRANSLATIONS.get(key, key)

    try:
        return translation.format(**kwargs)
    except (KeyError, ValueError, IndexError):
        return translation

def get_available_languages() -> Dict[str, str]:
    source = _translations or _BUILTIN_TRANSLATIONS
    available = {}
    for code in sorted(source.keys()):
        display_name_key = f"lang_display_name_{code}"
        display_name = source[code].get(display_name_key, KNOWN_LANGUAGES.get(code, code.upper()))
        available[code] = display_name
    return available

def get_current_language() -> str:
    return _current_language
