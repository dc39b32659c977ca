"""Lexical scope chain.

A Scope owns its own bindings and holds a plain reference to the enclosing
scope. Links only ever point from child to parent, so the chain is a tree
rooted at the program scope and never forms a cycle.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from .types import (
    ImpDuplicateDeclaration,
    ImpInvalidName,
    ImpRuntimeError,
    ImpUnboundVariable,
    ImpValue,
)

logger = logging.getLogger(__name__)


def check_name(name: object) -> str:
    if not isinstance(name, str) or not name:
        raise ImpInvalidName(name)

    return name


class Scope:
    __slots__ = ("parent", "vars", "depth")

    def __init__(self, parent: Optional['Scope']=None):
        self.parent = parent
        self.vars: Dict[str, ImpValue] = {}
        self.depth: int = 0 if parent is None else parent.depth + 1

    def __repr__(self) -> str:
        return f"Scope(depth={self.depth}, vars={self.vars!r})"

    def is_root(self) -> bool:
        return self.parent is None

    def owner(self, name: str) -> Optional['Scope']:
        """Nearest scope in the chain that declares `name`."""
        cur: Optional[Scope] = self

        while cur is not None:
            if name in cur.vars:
                return cur
            cur = cur.parent

        return None

    def lookup(self, name: str) -> ImpValue:
        check_name(name)
        target = self.owner(name)

        if target is None:
            raise ImpUnboundVariable(name)

        return target.vars[name]

    def declare(self, name: str, value: ImpValue) -> None:
        check_name(name)

        # Only this frame counts; outer bindings may be shadowed.
        if name in self.vars:
            raise ImpDuplicateDeclaration(name)

        self.vars[name] = value

    def assign(self, name: str, value: ImpValue) -> None:
        check_name(name)
        target = self.owner(name)

        if target is None:
            raise ImpUnboundVariable(name)

        target.vars[name] = value

    def bindings(self) -> Dict[str, ImpValue]:
        """Snapshot of this frame's own bindings."""
        return dict(self.vars)


def enter_block(scope: Scope) -> Scope:
    child = Scope(parent=scope)
    logger.debug("enter scope depth=%d", child.depth)
    return child


def exit_block(child: Scope) -> Scope:
    parent = child.parent

    if parent is None:
        raise ImpRuntimeError("Cannot exit the root scope")

    logger.debug("exit scope depth=%d discarding %d binding(s)", child.depth, len(child.vars))
    child.vars.clear()
    child.parent = None

    return parent
