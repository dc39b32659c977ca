from __future__ import annotations

import logging
from typing import Callable

from ..ast_nodes import Expression, If, While
from ..scope import Scope
from ..types import ImpValue
from .blocks import ExecFunc, OutputSink, eval_block
from .helpers import require_condition

EvalFunc = Callable[[Expression, Scope], ImpValue]

logger = logging.getLogger(__name__)

def eval_if_stmt(stmt: If, scope: Scope, output: OutputSink, eval_func: EvalFunc, exec_func: ExecFunc) -> Scope:
    if require_condition(eval_func(stmt.test, scope), "if"):
        return eval_block(stmt.then_block, scope, output, exec_func)

    return eval_block(stmt.else_block, scope, output, exec_func)

def eval_while_stmt(stmt: While, scope: Scope, output: OutputSink, eval_func: EvalFunc, exec_func: ExecFunc) -> Scope:
    iterations = 0

    # No iteration cap: a loop that never turns false runs until interrupted.
    while require_condition(eval_func(stmt.test, scope), "while"):
        scope = eval_block(stmt.body, scope, output, exec_func)
        iterations += 1

    logger.debug("while loop finished after %d iteration(s)", iterations)

    return scope
