"""
fnkit

A small functional programming toolkit: composition, folding, mapping,
filtering, currying, memoization and a tiny lambda-string compiler, all
built on one generic iteration protocol.
"""

__version__ = "0.1.0"

from .base import identity, ipairs, ireverse, is_callable, length, nop, pairs, positional, tostring, unpack
from .core.exceptions import FnkitError, InvalidLambda
from .functional import (
    bind, case, collect, compose, cond, curry, filter, fold, foldl, foldr,
    map, map_with, op, reduce, zip, zip_with,
)
from .iteration import Source, resolve, walk
from .lambdas import compile_expression, lambda_, parse_lambda
from .memoize import Memoized, memoize
from .operators import OPERATORS

__all__ = [
    # 组合子
    "bind", "case", "collect", "compose", "cond", "curry", "filter",
    "fold", "foldl", "foldr", "map", "map_with", "reduce", "zip", "zip_with",

    # lambda 与记忆化
    "lambda_", "parse_lambda", "compile_expression", "memoize", "Memoized",

    # 迭代协议
    "Source", "resolve", "walk", "pairs", "ipairs", "positional",

    # 基础工具
    "identity", "nop", "is_callable", "ireverse", "length", "unpack", "tostring",
    "OPERATORS", "op",

    # 异常
    "FnkitError", "InvalidLambda",
]
