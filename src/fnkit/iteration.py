"""
迭代适配协议

组合子既可以接收普通容器，也可以接收 "迭代函数 + 参数"。
resolve() 在入口处一次性把两种调用方式统一为 Source，
walk() 负责驱动 (step, state, key) 三元组直到结束。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Tuple, Union

from .base import is_positional, pairs
from .core.types import IteratorFunction, StepFunction


@dataclass(frozen=True)
class Source:
    """统一后的迭代源"""
    step: StepFunction
    state: Any
    key: Any
    positional: bool = False

    @classmethod
    def from_triple(cls, triple: Tuple[Any, Any, Any]) -> "Source":
        step, state, key = triple
        return cls(step, state, key, is_positional(step))


def resolve(ifn: Any, *args: Any, default: IteratorFunction = pairs) -> Source:
    """把 (ifn, *args) 解析为 Source

    ifn 可调用时作为迭代函数，ifn(*args) 返回 (step, state, key)；
    否则 ifn 只是数据，交给默认适配器遍历。
    """
    if callable(ifn):
        return Source.from_triple(ifn(*args))
    return Source.from_triple(default(ifn, *args))


def walk(source: Source) -> Iterator[Tuple[Any, ...]]:
    """逐个产出步进结果元组，结束后不再调用 step"""
    step, state, key = source.step, source.state, source.key
    while True:
        t = step(state, key)
        if t is None:
            return
        if not isinstance(t, tuple):
            t = (t,)
        if not t or t[0] is None:
            return
        yield t
        key = t[0]


def values_of(t: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """回调参数：(key, value, ...) 取 key 之后的部分，单值元组取其本身"""
    return t[1:] if len(t) > 1 else t


def call_with(fn: Callable[..., Any], t: Tuple[Any, ...], with_key: bool = False) -> Any:
    args = values_of(t)
    if with_key:
        return fn(*args, t[0])
    return fn(*args)


class ResultBuilder:
    """收集结果并决定输出形状

    只使用 append() 时得到列表，一旦 put() 过显式键则得到字典；
    没有写入任何结果时由 keyed 决定返回空字典还是空列表。
    """

    def __init__(self, keyed: bool = False) -> None:
        self.keyed = keyed
        self._items: Dict[Any, Any] = {}
        self._has_keys = False
        self._next = 0

    def append(self, value: Any) -> None:
        while self._next in self._items:
            self._next += 1
        self._items[self._next] = value

    def put(self, key: Any, value: Any) -> None:
        self._has_keys = True
        self._items[key] = value

    def __len__(self) -> int:
        return len(self._items)

    def build(self) -> Union[List[Any], Dict[Any, Any]]:
        if self._has_keys or (self.keyed and not self._items):
            return dict(self._items)
        return list(self._items.values())


__all__ = ["Source", "resolve", "walk", "values_of", "call_with", "ResultBuilder"]
