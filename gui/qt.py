# -*- coding: utf-8 -*-
"""
集中管理的Qt导入。

应用需要的所有Qt名称都在这里统一导入，其余代码只依赖本模块，而不直接依赖具体的绑定库。
"""

# PySide6
from PySide6.QtCore import (
    QObject,
    QTimer,
    QCoreApplication,
    Qt,
    QByteArray,
    Signal,
    Slot,
    QPointF,
    QRectF,
    Property
)
from PySide6.QtGui import (
    QPainter,
    QPainterPath,
    QColor,
    QPen,
    QBrush,
    QFont,
    QImage,
    QPixmap,
    QCloseEvent,
    QMouseEvent,
    QResizeEvent
)
from PySide6.QtWidgets import (
    QApplication,
    QMessageBox,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFrame,
    QLabel,
    QSizePolicy,
    QPushButton,
    QLineEdit,
    QComboBox,
    QScrollArea,
    QGraphicsDropShadowEffect
)
