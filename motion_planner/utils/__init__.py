"""
工具模組
提供日誌管理等基礎工具
"""

from .logger import (
    Logger,
    LogFormatter,
    setup_logger,
    get_logger,
    log_execution_time
)

__all__ = [
    'Logger',
    'LogFormatter',
    'setup_logger',
    'get_logger',
    'log_execution_time'
]
