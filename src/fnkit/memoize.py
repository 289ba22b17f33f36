"""
记忆化

注意：缓存没有淘汰策略，会随不同参数无限增长。
只应用于参数取值范围小且稳定的纯函数。
"""

from __future__ import annotations

import threading
from functools import update_wrapper
from typing import Any, Callable, Dict, NamedTuple, Optional

from .base import tostring
from .utils.logging import get_logger

logger = get_logger(__name__)

Normalizer = Callable[..., Any]


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int


def default_normalize(*args: Any, **kwargs: Any) -> str:
    """把全部参数转换为确定性的缓存键"""
    if kwargs:
        return tostring(args) + tostring(kwargs)
    return tostring(args)


class Memoized:
    """带缓存的可调用对象

    相同的规范化键只会调用一次被包装函数；函数抛出异常时不写缓存。
    """

    def __init__(self, fn: Callable[..., Any], normalize: Optional[Normalizer] = None):
        self.fn = fn
        self.normalize = normalize or default_normalize
        self.cache: Dict[Any, Any] = {}
        self.hits = 0
        self.misses = 0
        # 递归的记忆化函数会在同一线程内重入
        self._lock = threading.RLock()
        update_wrapper(self, fn)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key = self.normalize(*args, **kwargs)
        with self._lock:
            try:
                result = self.cache[key]
            except KeyError:
                pass
            else:
                self.hits += 1
                return result
            self.misses += 1
            result = self.fn(*args, **kwargs)
            self.cache[key] = result
            return result

    def __contains__(self, key: Any) -> bool:
        return key in self.cache

    def __len__(self) -> int:
        return len(self.cache)

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        # 作为方法装饰器使用时绑定实例
        if instance is None:
            return self
        return _BoundMemoized(self, instance)

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self.hits, self.misses, len(self.cache))

    def cache_clear(self) -> None:
        with self._lock:
            size = len(self.cache)
            self.cache.clear()
            self.hits = self.misses = 0
        logger.debug("memoize_cache_cleared", function=getattr(self.fn, "__qualname__", repr(self.fn)), size=size)

    def __repr__(self) -> str:
        return f"<Memoized {getattr(self.fn, '__qualname__', self.fn)!r} size={len(self.cache)}>"


class _BoundMemoized:
    def __init__(self, memoized: Memoized, instance: Any):
        self._memoized = memoized
        self._instance = instance

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._memoized(self._instance, *args, **kwargs)


def memoize(fn: Optional[Callable[..., Any]] = None, normalize: Optional[Normalizer] = None) -> Any:
    """记忆化一个纯函数

    Args:
        fn: 无副作用的函数
        normalize: 参数规范化函数，返回缓存键；默认为全部参数的确定性字符串

    Returns:
        Memoized 对象；省略 fn 时返回装饰器

    Example:
        >>> fast = memoize(slow)
        >>> @memoize(normalize=lambda name, *rest: name)
        ... def intern(name, value): ...
    """
    if fn is None:
        return lambda f: Memoized(f, normalize)
    return Memoized(fn, normalize)


__all__ = ["Memoized", "CacheInfo", "memoize", "default_normalize"]
