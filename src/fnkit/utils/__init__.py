"""
工具模块初始化
导出日志配置工具
"""

from .logging import configure_default_logging, configure_logging, get_logger

__all__ = ['configure_default_logging', 'configure_logging', 'get_logger']
