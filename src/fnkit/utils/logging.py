from __future__ import annotations

import logging
from typing import Any, Optional

import structlog

from ..config.settings import get_settings


def configure_default_logging() -> None:
    """未由宿主程序配置时使用的默认日志设置

    经由标准库 logging 输出，由宿主程序的日志级别决定是否显示。
    不缓存记录器，之后调用 configure_logging 或宿主程序自行配置时
    模块级记录器同样生效。
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(verbose: Optional[bool] = None, colors: bool = True) -> None:
    """初始化结构化日志。

    verbose 为 None 时使用 FNKIT_VERBOSE 设置。
    """
    if verbose is None:
        verbose = get_settings().verbose
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """获取结构化日志记录器"""
    return structlog.get_logger(name) if name else structlog.get_logger()


if not structlog.is_configured():
    configure_default_logging()
