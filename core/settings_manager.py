# -*- coding: utf-8 -*-
"""
负责加载、校验并保存应用的偏好设置 (主题、语言、窗口几何信息)。
图表中的条目从不写入磁盘。
"""
import copy
import json
import sys
from typing import Any, Dict, Optional

from gui.qt import QObject, Signal, Property
from config.settings import DEFAULT_PREFERENCES, DEFAULT_THEME_ID, DEFAULT_LANGUAGE, KNOWN_LANGUAGES
from config.themes import THEMES
from core.path_manager import PathManager


class SettingsManager(QObject):
    """以JSON文件为后端的响应式偏好设置对象。"""
    theme_changed = Signal(str)
    language_changed = Signal(str)

    def __init__(self, path_manager: PathManager, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.paths = path_manager
        self.config_path = path_manager.config_file
        self._theme_id: str = DEFAULT_THEME_ID
        self._language: str = DEFAULT_LANGUAGE
        self.window_geometry: Optional[str] = None

    def _set_value(self, field_name: str, value: Any, signal: Any) -> bool:
        if getattr(self, field_name) != value:
            setattr(self, field_name, value)
            signal.emit(value)
            return True
        return False

    def get_theme_id(self) -> str: return self._theme_id
    def set_theme_id(self, value: str):
        if value not in THEMES:
            print(f"Warning: unknown theme '{value}', using '{DEFAULT_THEME_ID}'.", file=sys.stderr)
            value = DEFAULT_THEME_ID
        if self._set_value('_theme_id', value, self.theme_changed):
            self.save_config()
    theme_id = Property(str, get_theme_id, set_theme_id, notify=theme_changed)  # type: ignore

    def get_language(self) -> str: return self._language
    def set_language(self, value: str):
        if self._set_value('_language', value, self.language_changed):
            self.save_config()
    language = Property(str, get_language, set_language, notify=language_changed)  # type: ignore

    def set_window_geometry(self, geometry: Optional[str]):
        if self.window_geometry != geometry:
            self.window_geometry = geometry
            self.save_config()

    def load_config(self):
        """读取JSON文件并应用校验后的值，无效字段回退为默认值。"""
        data = self._validated(self._read_config_file())
        self._set_value('_theme_id', data["theme_id"], self.theme_changed)
        self._set_value('_language', data["language"], self.language_changed)
        self.window_geometry = data["window_geometry"]

    def save_config(self):
        config_data = self.to_dict()
        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(config_data, f, indent=4, ensure_ascii=False)
        except OSError as e:
            print(f"Error: could not save config to '{self.config_path}': {e}", file=sys.stderr)

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self._language, "theme_id": self._theme_id,
                "window_geometry": self.window_geometry}

    def _read_config_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            print(f"Warning: ignoring unreadable config '{self.config_path}': {e}", file=sys.stderr)
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _validated(raw: Dict[str, Any]) -> Dict[str, Any]:
        data = copy.deepcopy(DEFAULT_PREFERENCES)
        theme_id = raw.get("theme_id")
        if isinstance(theme_id, str) and theme_id in THEMES:
            data["theme_id"] = theme_id
        language = raw.get("language")
        if isinstance(language, str) and language in KNOWN_LANGUAGES:
            data["language"] = language
        geometry = raw.get("window_geometry")
        if isinstance(geometry, str):
            data["window_geometry"] = geometry
        return data
