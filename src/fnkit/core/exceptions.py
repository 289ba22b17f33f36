"""异常定义"""

from __future__ import annotations

from typing import Optional


class FnkitError(Exception):
    """fnkit 所有异常的基类"""


class InvalidLambda(FnkitError, ValueError):
    """lambda 字符串无法匹配任何形式，或表达式体无法编译"""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        self.reason = reason
        msg = f"invalid lambda string '{source}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
