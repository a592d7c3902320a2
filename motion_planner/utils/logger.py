"""
日誌工具模組
提供統一的日誌管理功能，支援文件輸出和格式化
"""

import functools
import logging
import os
import sys
import time
from datetime import datetime
from typing import Optional


DEFAULT_LOGGER_NAME = 'MotionPlanner'


# ==========================================
# 日誌等級映射
# ==========================================
LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


# ==========================================
# 日誌格式定義
# ==========================================
class LogFormatter(logging.Formatter):
    """自訂日誌格式器，支援顏色輸出（終端機）"""

    # ANSI 顏色碼
    COLORS = {
        'DEBUG': '\033[36m',      # 青色
        'INFO': '\033[32m',       # 綠色
        'WARNING': '\033[33m',    # 黃色
        'ERROR': '\033[31m',      # 紅色
        'CRITICAL': '\033[35m',   # 紫色
        'RESET': '\033[0m'
    }

    def __init__(self, use_color: bool = True):
        """
        初始化格式器

        參數:
            use_color: 是否使用顏色
        """
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_color = use_color

    def format(self, record):
        """格式化日誌記錄"""
        if self.use_color and sys.stdout.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                # 複製一份，避免顏色碼汙染其他處理器
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = (
                    f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
                )

        return super().format(record)


# ==========================================
# 日誌管理器
# ==========================================
class Logger:
    """統一的日誌管理器"""

    _instances = {}

    def __init__(self, name: str = DEFAULT_LOGGER_NAME,
                 level: str = 'INFO',
                 log_dir: Optional[str] = None,
                 log_to_file: bool = False,
                 log_to_console: bool = True):
        """
        初始化日誌管理器

        參數:
            name: 日誌名稱
            level: 日誌等級
            log_dir: 日誌目錄
            log_to_file: 是否輸出到文件
            log_to_console: 是否輸出到控制台
        """
        self.name = name
        self.log_filepath: Optional[str] = None
        self.logger = logging.getLogger(name)
        self.set_level(level)

        # 同名日誌器重新設定時，先關閉舊的處理器
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if log_to_console:
            self._attach(logging.StreamHandler(sys.stdout), use_color=True)

        if log_to_file:
            # 未指定目錄時寫到工作目錄下的 logs/，檔名按日期
            log_dir = log_dir or os.path.join(os.getcwd(), 'logs')
            os.makedirs(log_dir, exist_ok=True)
            self.log_filepath = os.path.join(
                log_dir, f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
            )
            self._attach(logging.FileHandler(self.log_filepath, encoding='utf-8'), use_color=False)

        self.logger.propagate = False

    def _attach(self, handler: logging.Handler, use_color: bool):
        handler.setFormatter(LogFormatter(use_color=use_color))
        self.logger.addHandler(handler)

    def debug(self, message: str):
        """輸出 DEBUG 等級日誌"""
        self.logger.debug(message)

    def info(self, message: str):
        """輸出 INFO 等級日誌"""
        self.logger.info(message)

    def warning(self, message: str):
        """輸出 WARNING 等級日誌"""
        self.logger.warning(message)

    def error(self, message: str):
        """輸出 ERROR 等級日誌"""
        self.logger.error(message)

    def set_level(self, level: str):
        """設定日誌等級（DEBUG, INFO, WARNING, ERROR, CRITICAL）"""
        self.logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))


# ==========================================
# 便捷函數
# ==========================================
def setup_logger(name: str = DEFAULT_LOGGER_NAME,
                 level: str = 'INFO',
                 log_dir: Optional[str] = None,
                 log_to_file: bool = False,
                 log_to_console: bool = True) -> Logger:
    """
    設定日誌管理器（取代同名的既有實例）

    參數:
        name: 日誌名稱
        level: 日誌等級
        log_dir: 日誌目錄
        log_to_file: 是否輸出到文件
        log_to_console: 是否輸出到控制台

    返回:
        Logger 實例
    """
    instance = Logger(name, level, log_dir, log_to_file, log_to_console)
    Logger._instances[name] = instance
    return instance


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> Logger:
    """獲取日誌實例，首次呼叫時以預設參數建立（僅控制台輸出）"""
    if name not in Logger._instances:
        Logger._instances[name] = Logger(name)
    return Logger._instances[name]


# ==========================================
# 日誌裝飾器
# ==========================================
def log_execution_time(logger: Optional[Logger] = None):
    """
    日誌裝飾器，記錄函數執行時間（DEBUG 等級）

    參數:
        logger: Logger 實例（可選）

    使用範例:
        @log_execution_time()
        def my_function():
            pass
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger()
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                execution_time = time.perf_counter() - start_time
                _logger.debug(f"函數 {func.__qualname__} 執行時間: {execution_time:.4f} 秒")
                return result
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                _logger.error(
                    f"函數 {func.__qualname__} 執行失敗 "
                    f"({execution_time:.4f} 秒): {e}"
                )
                raise
        return wrapper
    return decorator
