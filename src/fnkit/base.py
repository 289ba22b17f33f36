"""
基础容器工具
默认迭代适配器（pairs / ipairs）以及序列辅助函数
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, TypeVar

from .core.types import IteratorTriple

F = TypeVar('F', bound=Callable[..., Any])

_MISSING = object()


def positional(step: F) -> F:
    """标记步进函数按 0 起始的连续下标顺序迭代"""
    step.positional = True  # type: ignore[attr-defined]
    return step


def is_positional(step: Any) -> bool:
    return bool(getattr(step, "positional", False))


def is_callable(x: Any) -> bool:
    """判断对象是否可调用"""
    return callable(x)


def _item(container: Any, index: int) -> Any:
    """按下标取值，不存在时返回 _MISSING"""
    if isinstance(container, Mapping):
        return container.get(index, _MISSING)
    if 0 <= index < len(container):
        return container[index]
    return _MISSING


@positional
def _next_index(container: Any, key: Optional[int]) -> Optional[Tuple[int, Any]]:
    i = 0 if key is None else key + 1
    value = _item(container, i)
    if value is _MISSING:
        return None
    return i, value


class _KeyOrder(NamedTuple):
    mapping: Mapping
    keys: Tuple[Any, ...]
    position: Dict[Any, int]


def _next_key(state: _KeyOrder, key: Any) -> Optional[Tuple[Any, Any]]:
    i = 0 if key is None else state.position[key] + 1
    if i >= len(state.keys):
        return None
    k = state.keys[i]
    return k, state.mapping[k]


def _as_sequence(container: Any) -> Any:
    if isinstance(container, (Sequence, Mapping)) and not isinstance(container, (str, bytes)):
        return container
    return tuple(container)


def pairs(container: Any, *_: Any) -> IteratorTriple:
    """遍历任意容器的 (key, value)

    字典按插入顺序产出 (key, value)；其他容器产出 (index, value)。
    """
    if isinstance(container, Mapping):
        keys = tuple(container)
        state = _KeyOrder(container, keys, {k: i for i, k in enumerate(keys)})
        return _next_key, state, None
    return _next_index, _as_sequence(container), None


def ipairs(container: Any, *_: Any) -> IteratorTriple:
    """按下标 0, 1, 2... 顺序遍历，遇到第一个缺失下标即停止"""
    return _next_index, _as_sequence(container), None


def length(seq: Any) -> int:
    """序列长度；字典只统计从 0 开始连续的整数键"""
    if isinstance(seq, Mapping):
        n = 0
        while n in seq:
            n += 1
        return n
    return len(seq)


def unpack(seq: Any) -> Tuple[Any, ...]:
    """取出容器的位置部分"""
    if isinstance(seq, Mapping):
        return tuple(seq[i] for i in range(length(seq)))
    return tuple(seq)


def ireverse(seq: Any) -> List[Any]:
    """返回位置部分逆序后的新列表"""
    return list(reversed(unpack(seq)))


def identity(*args: Any) -> Any:
    """原样返回参数；多个参数返回元组"""
    if len(args) == 1:
        return args[0]
    return args


def nop(*args: Any) -> None:
    """忽略所有参数"""
    return None


def tostring(x: Any) -> str:
    """确定性的字符串表示，字典按键排序"""
    if isinstance(x, Mapping):
        items = sorted((tostring(k), tostring(v)) for k, v in x.items())
        return "{" + ",".join(f"{k}={v}" for k, v in items) + "}"
    if isinstance(x, (set, frozenset)):
        return "set(" + ",".join(sorted(tostring(v) for v in x)) + ")"
    if isinstance(x, list):
        return "[" + ",".join(tostring(v) for v in x) + "]"
    if isinstance(x, tuple):
        return "(" + ",".join(tostring(v) for v in x) + ")"
    return repr(x)


__all__ = [
    'positional', 'is_positional', 'is_callable',
    'pairs', 'ipairs', 'length', 'unpack', 'ireverse',
    'identity', 'nop', 'tostring',
]
