"""
类型定义模块
迭代器协议、lambda 解析结果等公共类型
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


# 基础 Pydantic 配置
class BaseTypeModel(BaseModel):
    """基础类型模型配置"""
    model_config = ConfigDict(
        frozen=True,  # 不可变
        extra='forbid',  # 禁止额外字段
        validate_assignment=True,
        use_enum_values=False,
    )


@runtime_checkable
class StepFunction(Protocol):
    """迭代步进函数协议

    step(state, key) 返回以下一个控制键开头的元组；
    返回 None、空元组或首元素为 None 时迭代结束。
    """

    def __call__(self, state: Any, key: Any) -> Optional[Tuple[Any, ...]]:
        ...


# (step, state, key) 三元组
IteratorTriple = Tuple[Callable[[Any, Any], Optional[Tuple[Any, ...]]], Any, Any]
IteratorFunction = Callable[..., IteratorTriple]


class LambdaForm(str, Enum):
    """lambda 字符串的三种形式"""
    OPERATOR = "operator"      # "<"
    POSITIONAL = "positional"  # "= _1 < _2"
    NAMED = "named"            # "|a,b| a<b"

    def __str__(self) -> str:
        return self.value


class ParsedLambda(BaseTypeModel):
    """解析后的 lambda 字符串"""
    source: str = Field(description="原始 lambda 字符串")
    form: LambdaForm = Field(description="匹配到的形式")
    params: Tuple[str, ...] = Field(default=(), description="参数名")
    body: str = Field(default="", description="表达式体")

    @property
    def vararg(self) -> Optional[str]:
        """以 * 开头的末尾参数名"""
        if self.params and self.params[-1].startswith("*"):
            return self.params[-1][1:]
        return None

    @property
    def positional_params(self) -> Tuple[str, ...]:
        return tuple(p for p in self.params if not p.startswith("*"))
