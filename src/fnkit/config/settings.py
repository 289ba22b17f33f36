from __future__ import annotations

from functools import lru_cache
from typing import Set

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# lambda 表达式中可见的内置函数
DEFAULT_LAMBDA_BUILTINS = frozenset({
    "abs", "all", "any", "bool", "dict", "enumerate", "filter", "float",
    "int", "isinstance", "len", "list", "map", "max", "min", "range",
    "reversed", "round", "set", "sorted", "str", "sum", "tuple", "zip",
})


class FnkitSettings(BaseSettings):
    """全局设置（可由 FNKIT_ 前缀的环境变量覆盖）"""

    model_config = SettingsConfigDict(
        env_prefix="FNKIT_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    verbose: bool = Field(default=False, description="详细日志输出")
    deprecation_warnings: bool = Field(default=True, description="调用已弃用接口时发出警告")
    lambda_builtins: Set[str] = Field(
        default_factory=lambda: set(DEFAULT_LAMBDA_BUILTINS),
        description="lambda 表达式体内可用的内置函数名",
    )

    @field_validator("lambda_builtins")
    @classmethod
    def _no_dunder_builtins(cls, names: Set[str]) -> Set[str]:
        bad = sorted(name for name in names if name.startswith("_"))
        if bad:
            raise ValueError(f"不允许的内置函数名: {', '.join(bad)}")
        return names


@lru_cache(maxsize=1)
def get_settings() -> FnkitSettings:
    """返回缓存的设置实例"""
    return FnkitSettings()


def reset_settings() -> None:
    """清除缓存的设置，下次访问时重新读取环境变量"""
    get_settings.cache_clear()


__all__ = ["FnkitSettings", "get_settings", "reset_settings", "DEFAULT_LAMBDA_BUILTINS"]
