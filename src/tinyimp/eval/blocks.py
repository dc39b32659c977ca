from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Sequence

from ..scope import Scope, enter_block, exit_block
from ..types import ImpInvalidStatement, ImpValue

OutputSink = Callable[[ImpValue], None]
ExecFunc = Callable[[Any, Scope, OutputSink], Scope]

logger = logging.getLogger(__name__)

def _require_block(stmts: Any) -> Sequence[Any]:
    if not isinstance(stmts, (tuple, list)):
        raise ImpInvalidStatement(f"Block must be a sequence of statements; got {type(stmts).__name__}")

    return stmts

def eval_block(stmts: Sequence[Any], scope: Scope, output: OutputSink, exec_func: ExecFunc) -> Scope:
    """Run a block in a fresh child scope and hand back the enclosing scope."""
    stmts = _require_block(stmts)
    child = enter_block(scope)

    try:
        for stmt in stmts:
            child = exec_func(stmt, child, output)
    finally:
        scope = exit_block(child)

    return scope

def eval_program(stmts: Sequence[Any], output: OutputSink, exec_func: ExecFunc) -> Dict[str, ImpValue]:
    """Run top-level statements directly in a new root scope."""
    stmts = _require_block(stmts)
    root = Scope()
    logger.debug("running program with %d top-level statement(s)", len(stmts))

    for stmt in stmts:
        root = exec_func(stmt, root, output)

    return root.bindings()
