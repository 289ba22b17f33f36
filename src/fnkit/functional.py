"""
高阶函数
组合、折叠、映射、过滤、柯里化等函数式编程工具。

需要函数参数的地方都可以传入 lambda 字符串，例如 ``map('=_1*_1', [1, 2, 3])``。
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from functools import wraps
from typing import Any, Callable, Dict, List, Union

from .base import identity, ipairs, ireverse, length, pairs, unpack
from .config.settings import get_settings
from .iteration import ResultBuilder, call_with, resolve, values_of, walk
from .lambdas import as_function
from .operators import OPERATORS
from .utils.logging import get_logger

logger = get_logger(__name__)

Container = Union[List[Any], Dict[Any, Any]]


def bind(fn: Any, argt: Mapping) -> Callable[..., Any]:
    """部分应用函数

    Args:
        fn: 要部分应用的函数
        argt: 预先绑定的参数，整数键为位置（从 0 开始），字符串键为关键字参数

    Returns:
        新函数；调用时的位置参数依次填入尚未绑定的位置

    Example:
        >>> cube = bind('**', {1: 3})
        >>> cube(2)
        8
    """
    if not isinstance(argt, Mapping):
        raise TypeError(f"bind() expects a mapping of arguments, got {type(argt).__name__}")
    fn = as_function(fn)
    bound_pos = {k: v for k, v in argt.items() if isinstance(k, int)}
    bound_kw = {k: v for k, v in argt.items() if isinstance(k, str)}

    @wraps(fn)
    def bound(*args: Any, **kwargs: Any) -> Any:
        slots = dict(bound_pos)
        i = 0
        for value in args:
            while i in slots:
                i += 1
            slots[i] = value
        n = max(slots) + 1 if slots else 0
        return fn(*(slots.get(j) for j in range(n)), **{**kwargs, **bound_kw})

    return bound


def case(with_: Any, branches: Any) -> Any:
    """简单的 case 语句

    在 branches 中查找 with_，找不到时使用 branches[0] 作为默认分支。
    可调用的分支以 with_ 为唯一参数调用并返回结果，否则直接返回分支值；
    既无匹配也无默认分支时返回 None。

    Example:
        >>> case(type(x).__name__, {
        ...     'dict': 'table',
        ...     'str': lambda s: 'string',
        ...     0: lambda s: 'unhandled',
        ... })
    """
    match = _lookup(branches, with_)
    if match is None:
        match = _lookup(branches, 0)
    if callable(match):
        return match(with_)
    return match


def _lookup(container: Any, key: Any) -> Any:
    if isinstance(container, Mapping):
        try:
            return container.get(key)
        except TypeError:  # 不可哈希的键
            return None
    if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(container):
        return container[key]
    return None


def collect(ifn: Any, *args: Any) -> Container:
    """收集迭代器的结果，默认使用 ipairs

    Example:
        >>> collect(['a', 'b', 'c'])
        ['a', 'b', 'c']
    """
    source = resolve(ifn, *args, default=ipairs)
    result = ResultBuilder(keyed=not source.positional)
    for t in walk(source):
        if len(t) == 1 or source.positional:
            result.append(t[-1])
        else:
            result.put(t[0], t[1])
    return result.build()


def compose(*fns: Any) -> Callable[..., Any]:
    """组合函数

    ``compose(f1, f2, ..., fn)`` 先调用 f1，最后调用 fn，
    因此参数列表从上到下就是调用顺序。返回元组的阶段会把元组展开
    作为下一阶段的参数，支持多返回值流水线。

    Example:
        >>> inc_then_double = compose('=_1 + 1', '=_1 * 2')
        >>> inc_then_double(3)
        8
    """
    stages = [as_function(f) for f in fns]

    def composed(*args: Any) -> Any:
        result: Any = args
        for stage in stages:
            result = stage(*result)
            if not isinstance(result, tuple):
                result = (result,)
        return identity(*result)

    return composed


def cond(*args: Any) -> Any:
    """简单的 cond 语句

    参数按 (expr, branch) 成对检查，第一个为真的 expr 按 case 的规则
    解析其 branch；末尾落单的参数作为默认分支（以 True 调用）。
    全部为假时返回 None。

    Example:
        >>> def triangle(n):
        ...     return cond(
        ...         n <= 0, 0,
        ...         n == 1, 1,
        ...         lambda _: n + triangle(n - 1))
    """
    i = 0
    while i < len(args):
        if i + 1 == len(args):
            expr, branch = True, args[i]
        else:
            expr, branch = args[i], args[i + 1]
        if expr:
            if callable(branch):
                return branch(expr)
            return branch
        i += 2
    return None


def curry(fn: Any, n: int) -> Callable[..., Any]:
    """柯里化

    Example:
        >>> add = curry('+', 2)
        >>> incr, decr = add(1), add(-1)
    """
    fn = as_function(fn)
    if n <= 1:
        return fn

    def curried(x: Any) -> Any:
        return curry(bind(fn, {0: x}), n - 1)

    return curried


def filter(pfn: Any, ifn: Any, *args: Any, with_key: bool = False) -> Container:
    """用谓词过滤迭代结果

    Args:
        pfn: 谓词，以值（with_key 时追加键）为参数
        ifn: 迭代函数，或直接传入容器
        *args: 迭代函数的参数
        with_key: 是否把键作为最后一个参数传给谓词

    Returns:
        位置型来源重新编号为列表；键值型来源保留原有键

    Example:
        >>> filter('|e| e % 2 == 0', [1, 2, 3, 4])
        [2, 4]
    """
    pfn = as_function(pfn)
    source = resolve(ifn, *args)
    result = ResultBuilder(keyed=not source.positional)
    for t in walk(source):
        if not call_with(pfn, t, with_key):
            continue
        if len(t) == 1 or source.positional:
            result.append(t[-1])
        else:
            result.put(t[0], t[1])
    return result.build()


def reduce(fn: Any, d: Any, ifn: Any, *args: Any) -> Any:
    """把二元函数折叠进迭代器

    每一步以 fn(累积值, 值) 更新累积值，忽略键。

    Example:
        >>> reduce('**', 2, ipairs, [3, 2])
        64
    """
    fn = as_function(fn)
    r = d
    for t in walk(resolve(ifn, *args)):
        r = fn(r, t[-1])
    return r


def foldl(fn: Any, *args: Any) -> Any:
    """左结合折叠

    ``foldl(fn, seq)`` 以 seq 的首元素为初值；``foldl(fn, d, seq)`` 显式给出初值。

    Example:
        >>> foldl('/', [10000, 100, 10])  # (10000 / 100) / 10
        10.0
    """
    if len(args) == 1:
        (t,) = args
        items = unpack(t)
        if not items:
            return None
        d, t = items[0], list(items[1:])
    elif len(args) == 2:
        d, t = args
    else:
        raise TypeError(f"foldl() takes 2 or 3 arguments ({len(args) + 1} given)")
    return reduce(fn, d, ipairs, t)


def foldr(fn: Any, *args: Any) -> Any:
    """右结合折叠

    ``foldr(fn, seq)`` 以 seq 的末元素为初值；``foldr(fn, d, seq)`` 显式给出初值。

    Example:
        >>> foldr('/', [10000, 100, 10])  # 10000 / (100 / 10)
        1000.0
    """
    if len(args) == 1:
        (t,) = args
        last = length(t)
        if last == 0:
            return None
        items = unpack(t)
        d, t = items[last - 1], list(items[:last - 1])
    elif len(args) == 2:
        d, t = args
    else:
        raise TypeError(f"foldr() takes 2 or 3 arguments ({len(args) + 1} given)")
    fn = as_function(fn)
    return reduce(lambda x, y: fn(y, x), d, ipairs, ireverse(t))


def map(mapfn: Any, ifn: Any, *args: Any, with_key: bool = False) -> Container:
    """把函数映射到迭代结果上

    mapfn 以值为参数（with_key 时追加键），返回 None 的条目被丢弃。
    返回二元组 (键, 值) 时按显式键写入，结果为字典；
    返回其他单个值时依次编号，结果为列表。

    Example:
        >>> map('=_1*_1', [1, 2, 3, 4])
        [1, 4, 9, 16]
        >>> map('|v, k| (v, k)', {'a': 1}, with_key=True)
        {1: 'a'}
    """
    mapfn = as_function(mapfn)
    source = resolve(ifn, *args)
    result = ResultBuilder()
    for t in walk(source):
        v = call_with(mapfn, t, with_key)
        if isinstance(v, tuple) and len(v) == 2:
            key, v = v
            if v is not None:
                result.put(key, v)
        elif v is not None:
            result.append(v)
    return result.build()


def map_with(mapfn: Any, tt: Any) -> Container:
    """对参数列表表中的每一项调用函数

    Example:
        >>> map_with('|*xs| "".join(map(str, xs))', [[1, 2, 3], [4, 5]])
        ['123', '45']
    """
    mapfn = as_function(mapfn)
    source = resolve(tt)
    result = ResultBuilder()
    for t in walk(source):
        value = mapfn(*unpack(values_of(t)[0]))
        if source.positional:
            result.append(value)
        else:
            result.put(t[0], value)
    return result.build()


def zip(tt: Any) -> Container:
    """转置表的表

    ``zip(tt)[k][outer] == tt[outer][k]``；内层键不一致时得到稀疏结果。
    对规则（矩形）输入，zip 是自身的逆运算。

    Example:
        >>> zip([[1, 2], [3, 4], [5]])
        [[1, 3, 5], [2, 4]]
        >>> zip({'x': {'a': 1, 'b': 2}, 'y': {'a': 3, 'b': 4}})
        {'a': {'x': 1, 'y': 3}, 'b': {'x': 2, 'y': 4}}
    """
    columns: Dict[Any, Dict[Any, Any]] = {}
    for outer in walk(resolve(tt)):
        outer_key, inner = outer[0], outer[1]
        for t in walk(resolve(inner)):
            columns.setdefault(t[0], {})[outer_key] = t[1]
    return _shape({k: _shape(column) for k, column in columns.items()})


def _shape(d: Dict[Any, Any]) -> Container:
    """键恰好为 0..n-1 的字典转换为列表"""
    n = len(d)
    if all(isinstance(k, int) and not isinstance(k, bool) for k in d) and set(d) == set(range(n)):
        return [d[i] for i in range(n)]
    return d


def zip_with(fn: Any, tt: Any) -> Container:
    """对转置后的每一列调用函数

    Example:
        >>> zip_with('+', [[1, 2], [3, 4]])
        [4, 6]
    """
    return map_with(fn, zip(tt))


def _deprecated(name: str, replacement: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if get_settings().deprecation_warnings:
            message = f"'{name}' is deprecated, use '{replacement}' instead"
            logger.warning("deprecated_call", name=name, replacement=replacement)
            warnings.warn(message, DeprecationWarning, stacklevel=2)
        return fn(*args, **kwargs)

    return wrapper


# 兼容旧接口
op = OPERATORS
fold = _deprecated("fold", "reduce", reduce)


__all__ = [
    'bind', 'case', 'collect', 'compose', 'cond', 'curry', 'filter',
    'foldl', 'foldr', 'map', 'map_with', 'reduce', 'zip', 'zip_with',
    'op', 'fold', 'pairs', 'ipairs',
]
