from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from .ast_nodes import (
    Assign,
    BinaryOp,
    BooleanLiteral,
    If,
    Let,
    NumberLiteral,
    Print,
    Variable,
    While,
)
from .scope import Scope
from .types import (
    ImpBool,
    ImpInvalidExpression,
    ImpInvalidStatement,
    ImpNestingTooDeep,
    ImpNumber,
    ImpRuntimeError,
    ImpValue,
    render_value,
)

from .eval.bind import eval_assign, eval_let
from .eval.blocks import OutputSink, eval_program
from .eval.control import eval_if_stmt, eval_while_stmt
from .eval.expr import eval_binary

logger = logging.getLogger(__name__)

def print_sink(value: ImpValue) -> None:
    """Default output sink: one rendered value per line on stdout."""
    print(render_value(value))

def _maybe_attach_location(exc: ImpRuntimeError, stmt: Any) -> None:
    if getattr(exc, "_augmented", False):
        return

    meta = getattr(stmt, "meta", None)

    if meta is not None and getattr(meta, "line", None) is not None:
        exc.imp_meta = meta
        exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Public API ----------------

def run_statement(stmt: Any, scope: Optional[Scope]=None, output: Optional[OutputSink]=None) -> Dict[str, ImpValue]:
    """Execute one statement and return the bindings of the scope it ran in."""
    if scope is None:
        scope = Scope()

    scope = eval_stmt(stmt, scope, output or print_sink)
    return scope.bindings()

def run_program(program: Sequence[Any], output: Optional[OutputSink]=None) -> Dict[str, ImpValue]:
    try:
        return eval_program(program, output or print_sink, _eval_stmt)
    except RecursionError:
        raise ImpNestingTooDeep("Program") from None

def eval_expr(expr: Any, scope: Scope) -> ImpValue:
    try:
        return _eval_expr(expr, scope)
    except RecursionError:
        raise ImpNestingTooDeep("Expression") from None

def eval_stmt(stmt: Any, scope: Scope, output: OutputSink=print_sink) -> Scope:
    try:
        return _eval_stmt(stmt, scope, output)
    except RecursionError:
        raise ImpNestingTooDeep("Statement") from None

# ---------------- Core evaluator ----------------

def _eval_expr(expr: Any, scope: Scope) -> ImpValue:
    match expr:
        case BooleanLiteral(value=value):
            if not isinstance(value, bool):
                raise ImpInvalidExpression(f"boolean literal holds {type(value).__name__}", kind="boolean")
            return ImpBool(value)
        case NumberLiteral(value=value):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ImpInvalidExpression(f"number literal holds {type(value).__name__}", kind="number")
            try:
                return ImpNumber(float(value))
            except OverflowError:
                raise ImpInvalidExpression("number literal is too large for a float", kind="number") from None
        case Variable(name=name):
            return scope.lookup(name)
        case BinaryOp():
            return eval_binary(expr, scope, _eval_expr)
        case _:
            kind = type(expr).__name__
            raise ImpInvalidExpression(f"Invalid expression node {kind}", kind=kind)

def _eval_stmt(stmt: Any, scope: Scope, output: OutputSink) -> Scope:
    try:
        return _eval_stmt_inner(stmt, scope, output)
    except ImpRuntimeError as e:
        _maybe_attach_location(e, stmt)
        logger.debug("%s failed: %s", type(stmt).__name__, e)
        raise

def _eval_stmt_inner(stmt: Any, scope: Scope, output: OutputSink) -> Scope:
    match stmt:
        case Let():
            return eval_let(stmt, scope, _eval_expr)
        case Assign():
            return eval_assign(stmt, scope, _eval_expr)
        case If():
            return eval_if_stmt(stmt, scope, output, _eval_expr, _eval_stmt)
        case While():
            return eval_while_stmt(stmt, scope, output, _eval_expr, _eval_stmt)
        case Print(expr=expr):
            output(_eval_expr(expr, scope))
            return scope
        case _:
            kind = type(stmt).__name__
            raise ImpInvalidStatement(f"Invalid statement node {kind}", kind=kind)
