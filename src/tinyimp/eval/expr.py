from __future__ import annotations

import math
from typing import Callable, Dict

from ..ast_nodes import BinaryOp, Expression
from ..scope import Scope
from ..types import (
    ImpBool,
    ImpInvalidExpression,
    ImpNumber,
    ImpTypeMismatch,
    ImpValue,
    type_name,
)
from .helpers import require_bool, require_number

EvalFunc = Callable[[Expression, Scope], ImpValue]

def _divide(lhs: float, rhs: float) -> float:
    # IEEE-754 division: x/0 is a signed infinity, 0/0 is nan.
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)

    return lhs / rhs

_ARITHMETIC: Dict[str, Callable[[float, float], float]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
}

_COMPARISON: Dict[str, Callable[[float, float], bool]] = {
    '<': lambda a, b: a < b,
    '>': lambda a, b: a > b,
}

def apply_binary_operator(op: str, lhs: ImpValue, rhs: ImpValue) -> ImpValue:
    if type(lhs) is not type(rhs):
        raise ImpTypeMismatch(
            f"Operator '{op}' applied to mismatched types {type_name(lhs)} and {type_name(rhs)}",
            op=op,
        )

    match op:
        case '===':
            return ImpBool(lhs.value == rhs.value)
        case '&&':
            a, b = require_bool(lhs, op), require_bool(rhs, op)
            return ImpBool(a and b)
        case '||':
            a, b = require_bool(lhs, op), require_bool(rhs, op)
            return ImpBool(a or b)
        case '+' | '-' | '*' | '/':
            a, b = require_number(lhs, op), require_number(rhs, op)
            return ImpNumber(_ARITHMETIC[op](a, b))
        case '<' | '>':
            a, b = require_number(lhs, op), require_number(rhs, op)
            return ImpBool(_COMPARISON[op](a, b))
        case _:
            raise ImpInvalidExpression(f"Unknown operator {op!r}", kind=op)

def eval_binary(node: BinaryOp, scope: Scope, eval_func: EvalFunc) -> ImpValue:
    # Both sides are always evaluated, left first; && and || do not short circuit.
    lhs = eval_func(node.left, scope)
    rhs = eval_func(node.right, scope)

    return apply_binary_operator(node.op, lhs, rhs)
