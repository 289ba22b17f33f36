"""
运算符表
将运算符符号映射为对应的可调用对象，供 lambda 编译器直接查表
"""

from __future__ import annotations

import operator as _op
from types import MappingProxyType
from typing import Any, Callable, Dict, List


def _minus(*args: Any) -> Any:
    """一个参数时取负，两个参数时相减"""
    if len(args) == 1:
        return -args[0]
    if len(args) != 2:
        raise TypeError(f"'-' takes 1 or 2 arguments ({len(args)} given)")
    a, b = args
    return a - b


def _logical_not(a: Any) -> bool:
    return not a


def _logical_and(a: Any, b: Any) -> Any:
    return a and b


def _logical_or(a: Any, b: Any) -> Any:
    return a or b


def _concat(*args: Any) -> str:
    return "".join(str(a) for a in args)


def _pack(*args: Any) -> List[Any]:
    return list(args)


def _contains(item: Any, container: Any) -> bool:
    # 与 `item in container` 的参数顺序一致
    return item in container


_TABLE: Dict[str, Callable[..., Any]] = {
    # 算术
    "+": _op.add,
    "-": _minus,
    "*": _op.mul,
    "/": _op.truediv,
    "//": _op.floordiv,
    "%": _op.mod,
    "**": _op.pow,
    "@": _op.matmul,

    # 位运算
    "&": _op.and_,
    "|": _op.or_,
    "^": _op.xor,
    "<<": _op.lshift,
    ">>": _op.rshift,
    "~": _op.invert,

    # 比较
    "==": _op.eq,
    "!=": _op.ne,
    "~=": _op.ne,
    "<": _op.lt,
    "<=": _op.le,
    ">": _op.gt,
    ">=": _op.ge,
    "in": _contains,
    "is": _op.is_,

    # 逻辑
    "not": _logical_not,
    "and": _logical_and,
    "or": _logical_or,

    # 容器
    "[]": _op.getitem,
    "{}": _pack,
    "..": _concat,
    "#": len,
}

OPERATORS = MappingProxyType(_TABLE)


def get_operator(symbol: str) -> Callable[..., Any]:
    """按符号查找运算符，不存在时抛出 KeyError"""
    return OPERATORS[symbol]


__all__ = ["OPERATORS", "get_operator"]
