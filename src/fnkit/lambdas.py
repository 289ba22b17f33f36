"""
lambda 字符串编译器

支持三种形式：

1. ``'op'``：运算符表中的符号，直接返回对应函数，例如 ``'<'``
2. ``'=expression'``：前九个位置参数绑定为 ``_1`` 到 ``_9``，例如 ``'= _1 < _2'``
3. ``'|args|expression'``：显式命名参数，例如 ``'|a,b| a<b'``

编译结果按原始字符串永久缓存，同一字符串只编译一次。
"""

from __future__ import annotations

import ast
import builtins
import keyword
import re
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .base import identity
from .config.settings import get_settings
from .core.exceptions import InvalidLambda
from .core.types import LambdaForm, ParsedLambda
from .memoize import Memoized
from .operators import OPERATORS, get_operator
from .utils.logging import get_logger

logger = get_logger(__name__)

_NAMED = re.compile(r"^\|([^|]*)\|\s*(.+)$", re.DOTALL)
_POSITIONAL = re.compile(r"^=\s*(.+)$", re.DOTALL)

POSITIONAL_PARAMS = tuple(f"_{i}" for i in range(1, 10))
_REST = "_rest"

# 表达式体中允许出现的语法节点
_ALLOWED_NODES = (
    ast.Expression, ast.BoolOp, ast.BinOp, ast.UnaryOp, ast.Compare, ast.IfExp,
    ast.Call, ast.keyword, ast.Name, ast.Constant, ast.Attribute, ast.Subscript,
    ast.Slice, ast.Tuple, ast.List, ast.Dict, ast.Set, ast.Starred,
    ast.ListComp, ast.SetComp, ast.DictComp, ast.GeneratorExp, ast.comprehension,
    ast.JoinedStr, ast.FormattedValue, ast.Lambda, ast.arguments, ast.arg,
    ast.operator, ast.unaryop, ast.cmpop, ast.boolop, ast.expr_context,
)


def _parse_params(source: str, text: str) -> Tuple[str, ...]:
    text = text.strip()
    if not text:
        return ()
    params = tuple(p.strip() for p in text.split(","))
    for i, param in enumerate(params):
        name = param[1:] if param.startswith("*") else param
        if param.startswith("*") and i != len(params) - 1:
            raise InvalidLambda(source, f"'{param}' must be the last parameter")
        if not name.isidentifier() or keyword.iskeyword(name):
            raise InvalidLambda(source, f"bad parameter '{param}'")
    names = [p.lstrip("*") for p in params]
    if len(set(names)) != len(names):
        raise InvalidLambda(source, "duplicate parameter")
    return params


def parse_lambda(source: str) -> ParsedLambda:
    """识别 lambda 字符串的形式

    Raises:
        InvalidLambda: 不匹配任何形式
    """
    if source in OPERATORS:
        return ParsedLambda(source=source, form=LambdaForm.OPERATOR)

    match = _NAMED.match(source)
    if match:
        params = _parse_params(source, match.group(1))
        return ParsedLambda(source=source, form=LambdaForm.NAMED, params=params, body=match.group(2))

    match = _POSITIONAL.match(source)
    if match:
        return ParsedLambda(
            source=source,
            form=LambdaForm.POSITIONAL,
            params=POSITIONAL_PARAMS + ("*" + _REST,),
            body=match.group(1),
        )

    raise InvalidLambda(source)


def _check_tree(body: str, tree: ast.AST) -> None:
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise InvalidLambda(body, f"{type(node).__name__} not allowed")
        if isinstance(node, ast.Attribute) and node.attr.startswith("_"):
            raise InvalidLambda(body, f"private attribute '{node.attr}'")
        if isinstance(node, ast.Name) and node.id.startswith("__"):
            raise InvalidLambda(body, f"private name '{node.id}'")


def _lambda_builtins() -> Dict[str, Any]:
    names = get_settings().lambda_builtins
    return {name: getattr(builtins, name) for name in names if hasattr(builtins, name)}


def compile_expression(params: Sequence[str], body: str) -> Callable[..., Any]:
    """把参数列表和表达式体编译为函数

    这是唯一构造代码的入口。表达式体先以 ast 解析并检查，
    只允许表达式节点，禁止访问下划线开头的属性；
    缺省的位置参数为 None，``*name`` 形式的末尾参数收集多余参数。

    Raises:
        InvalidLambda: 表达式体或参数无法编译
    """
    try:
        tree = ast.parse(body.strip(), mode="eval")
    except SyntaxError as exc:
        raise InvalidLambda(body, exc.msg) from exc
    _check_tree(body, tree)

    positional = [p for p in params if not p.startswith("*")]
    rest: Optional[str] = next((p[1:] for p in params if p.startswith("*")), None)
    arguments = ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=name, annotation=None) for name in positional],
        vararg=ast.arg(arg=rest, annotation=None) if rest else None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[ast.Constant(value=None) for _ in positional],
    )
    node = ast.Expression(body=ast.Lambda(args=arguments, body=tree.body))
    ast.fix_missing_locations(node)
    try:
        code = compile(node, "<lambda>", "eval")
    except (SyntaxError, ValueError, TypeError) as exc:
        raise InvalidLambda(body, str(exc)) from exc
    return eval(code, {"__builtins__": _lambda_builtins()})


def _compile_lambda(source: str) -> Callable[..., Any]:
    if not isinstance(source, str):
        raise TypeError(f"lambda string expected, got {type(source).__name__}")
    try:
        parsed = parse_lambda(source)
        if parsed.form is LambdaForm.OPERATOR:
            return get_operator(source)
        fn = compile_expression(parsed.params, parsed.body)
    except InvalidLambda as exc:
        logger.debug("lambda_invalid", source=source, reason=exc.reason)
        if exc.source == source:
            raise
        raise InvalidLambda(source, exc.reason) from exc

    fn.__name__ = fn.__qualname__ = "<lambda>"
    fn.__doc__ = source
    logger.debug("lambda_compiled", source=source, form=str(parsed.form))
    return fn


# 以原始字符串为键（不做规范化），编译结果永久缓存
lambda_: Memoized = Memoized(_compile_lambda, normalize=identity)


def as_function(fn: Any) -> Callable[..., Any]:
    """字符串按 lambda 编译，其他对象原样返回"""
    if isinstance(fn, str):
        return lambda_(fn)
    return fn


__all__ = ["lambda_", "parse_lambda", "compile_expression", "as_function", "POSITIONAL_PARAMS"]
