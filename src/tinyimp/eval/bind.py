from __future__ import annotations

from typing import Callable

from ..ast_nodes import Assign, Expression, Let
from ..scope import Scope, check_name
from ..types import ImpValue

EvalFunc = Callable[[Expression, Scope], ImpValue]

def eval_let(stmt: Let, scope: Scope, eval_func: EvalFunc) -> Scope:
    name = check_name(stmt.name)
    value = eval_func(stmt.expr, scope)
    scope.declare(name, value)

    return scope

def eval_assign(stmt: Assign, scope: Scope, eval_func: EvalFunc) -> Scope:
    """Write through to whichever scope in the chain declared the name."""
    name = check_name(stmt.name)
    value = eval_func(stmt.expr, scope)
    scope.assign(name, value)

    return scope
