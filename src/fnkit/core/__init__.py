"""
核心模块初始化
导出公共类型和异常
"""

from .types import (
    BaseTypeModel, StepFunction, IteratorTriple, IteratorFunction,
    LambdaForm, ParsedLambda
)

from .exceptions import FnkitError, InvalidLambda

__all__ = [
    # 类型
    'BaseTypeModel', 'StepFunction', 'IteratorTriple', 'IteratorFunction',
    'LambdaForm', 'ParsedLambda',

    # 异常
    'FnkitError', 'InvalidLambda'
]
