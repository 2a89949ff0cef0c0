import os

from config.settings import CONFIG_FILE_NAME, LANGUAGES_FILE_NAME, EXPORT_DIR_NAME, EXPORT_FILE_NAME


class PathManager:
    """
    集中生成应用所需的全部文件和目录路径。
    由main.py在启动时创建一次，并注入到需要路径的地方。
    """
    def __init__(self, base_dir: str, executable_path: str, main_script_path: str):
        """
        Args:
            base_dir (str): 应用程序的根目录 (BASE_DIR)。
            executable_path (str): 当前解释器或打包后可执行文件的真实路径。
            main_script_path (str): 主脚本 main.py 的真实路径 (仅在脚本模式下有效)。
        """
        self.base_dir = base_dir
        self.executable_path = executable_path
        self.main_script_path = main_script_path

        # --- 配置文件 ---
        self.config_file = os.path.join(self.base_dir, CONFIG_FILE_NAME)
        self.languages = os.path.join(self.base_dir, LANGUAGES_FILE_NAME)

        # --- 导出 ---
        self.export_dir = os.path.join(self.base_dir, EXPORT_DIR_NAME)

    def export_file(self, file_name: str = EXPORT_FILE_NAME) -> str:
        """导出目录中图片文件的路径 (目录按需创建)。"""
        os.makedirs(self.export_dir, exist_ok=True)
        return os.path.join(self.export_dir, file_name)

    def is_running_as_script(self) -> bool:
        """通过Python解释器启动而非打包版本时返回True。"""
        return os.path.basename(self.executable_path).lower().startswith('python')
