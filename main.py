# -*- coding: utf-8 -*-
"""
应用程序主入口。
只在这里确定一次权威路径，加载翻译和偏好设置，
按 状态 -> ViewModel -> 窗口 的顺序完成装配，然后运行Qt事件循环。
"""

import sys
import os
import traceback
from typing import Optional

# --- 权威路径确定 ---
# 这是整个应用中唯一应该确定根目录的地方。
EXECUTABLE_PATH: str = sys.executable
MAIN_SCRIPT_PATH: str = ""
IS_FROZEN: bool = getattr(sys, 'frozen', False)

if IS_FROZEN:
    # 打包模式: 文件位于可执行文件旁边。
    BASE_DIR: str = os.path.dirname(os.path.abspath(EXECUTABLE_PATH))
else:
    MAIN_SCRIPT_PATH = os.path.abspath(__file__)
    BASE_DIR = os.path.dirname(MAIN_SCRIPT_PATH)

# --- 导入项目模块 ---
from gui.qt import QApplication, QMessageBox, QCoreApplication

from config.settings import APP_NAME, APP_ORGANIZATION_NAME, APP_INTERNAL_NAME
from tools import localization
from tools.localization import load_translations, tr, set_language
from core.path_manager import PathManager
from core.settings_manager import SettingsManager
from core.chart_state import ChartState
from gui.main_window import MainWindow
from viewmodels.chart_viewmodel import ChartViewModel


def handle_exception(exc_type, exc_value, exc_traceback):
    """全局异常处理器: 记录堆栈信息，通知用户，然后退出。"""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    error_msg_detail = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    print(f"Unhandled exception:\n{error_msg_detail}", file=sys.stderr)

    try:
        title = tr("unhandled_exception_title") if localization._translations_loaded else "Unhandled Exception"
        msg = tr("unhandled_exception_msg", error=exc_value)
        app = QApplication.instance() or QApplication([])
        QMessageBox.critical(None, title, msg)
    except RuntimeError as e:
        print(f"Error while showing the exception dialog: {e}", file=sys.stderr)

    print("Exiting after unhandled exception.")
    os._exit(1)


def main(argv: Optional[list] = None):
    """主应用程序函数。"""
    sys.excepthook = handle_exception

    path_manager = PathManager(
        base_dir=BASE_DIR,
        executable_path=EXECUTABLE_PATH,
        main_script_path=MAIN_SCRIPT_PATH
    )
    if path_manager.is_running_as_script():
        print(f"Running from source, base dir: {BASE_DIR}")

    load_translations(path_manager.languages)

    QCoreApplication.setOrganizationName(APP_ORGANIZATION_NAME)
    QCoreApplication.setApplicationName(APP_INTERNAL_NAME)
    app = QApplication(argv if argv is not None else sys.argv)

    settings_manager = SettingsManager(path_manager)
    settings_manager.load_config()
    set_language(settings_manager.get_language())

    chart_state = ChartState()
    view_model = ChartViewModel(chart_state, settings_manager, path_manager)
    main_window = MainWindow(view_model, settings_manager)

    print(f"Starting {APP_NAME} event loop...")
    exit_code = app.exec()
    print(f"Event loop finished, exit code: {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
