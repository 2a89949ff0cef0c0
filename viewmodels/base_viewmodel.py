# viewmodels/base_viewmodel.py
# -*- coding: utf-8 -*-
"""
Base class for ViewModel objects.
"""
from typing import Optional

from gui.qt import QObject, Signal

class BaseViewModel(QObject):
    """
    Common signals shared by the ViewModels: whether the bound panel is
    enabled, and the status line text shown to the user.
    """
    panel_enabled_changed = Signal(bool)
    status_text_changed = Signal(str)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._is_panel_enabled = True
        self._status_text = ""

    def is_panel_enabled(self) -> bool:
        """Returns whether the panel associated with this ViewModel should be enabled."""
        return self._is_panel_enabled

    def set_panel_enabled(self, enabled: bool):
        """Sets the enabled state of the panel."""
        if self._is_panel_enabled != enabled:
            self._is_panel_enabled = enabled
            self.panel_enabled_changed.emit(enabled)

    def status_text(self) -> str:
        return self._status_text

    def set_status_text(self, text: str):
        if self._status_text != text:
            self._status_text = text
            self.status_text_changed.emit(text)
