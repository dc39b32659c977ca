"""AST node types for tinyimp programs.

Nodes are frozen dataclasses forming two closed sums, `Expression` and
`Statement`. A block is a tuple of statements. Statements produced by the
parser carry a `meta` position that does not take part in equality.

`expr_from_json` / `stmt_from_json` / `program_from_json` accept the
kind-tagged dictionary encoding::

    {"kind": "operator", "op": "+", "e1": {...}, "e2": {...}}
    {"kind": "let", "name": "x", "expression": {...}}
    {"kind": "if", "test": {...}, "truePart": [...], "falsePart": [...]}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple
from typing_extensions import TypeAlias

from .types import ImpInvalidExpression, ImpInvalidStatement

BINARY_OPS = frozenset({"===", "&&", "||", "+", "-", "*", "/", "<", ">"})

@dataclass(frozen=True)
class SourcePos:
    line: int
    column: int

# ---------- Expressions ----------

@dataclass(frozen=True)
class BooleanLiteral:
    value: bool

@dataclass(frozen=True)
class NumberLiteral:
    value: float

@dataclass(frozen=True)
class Variable:
    name: str

@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: 'Expression'
    right: 'Expression'

Expression: TypeAlias = BooleanLiteral | NumberLiteral | Variable | BinaryOp

# ---------- Statements ----------

@dataclass(frozen=True)
class Let:
    name: str
    expr: Expression
    meta: Optional[SourcePos] = field(default=None, compare=False, repr=False)

@dataclass(frozen=True)
class Assign:
    name: str
    expr: Expression
    meta: Optional[SourcePos] = field(default=None, compare=False, repr=False)

@dataclass(frozen=True)
class If:
    test: Expression
    then_block: 'Block'
    else_block: 'Block' = ()
    meta: Optional[SourcePos] = field(default=None, compare=False, repr=False)

@dataclass(frozen=True)
class While:
    test: Expression
    body: 'Block'
    meta: Optional[SourcePos] = field(default=None, compare=False, repr=False)

@dataclass(frozen=True)
class Print:
    expr: Expression
    meta: Optional[SourcePos] = field(default=None, compare=False, repr=False)

Statement: TypeAlias = Let | Assign | If | While | Print
Block: TypeAlias = Tuple[Statement, ...]

# ---------- Kind-tagged dictionaries ----------

def _require_mapping(obj: Any, what: str, exc: type) -> dict:
    if not isinstance(obj, dict):
        raise exc(f"{what} must be an object; got {type(obj).__name__}", kind=None)

    return obj

def expr_from_json(obj: Any) -> Expression:
    node = _require_mapping(obj, "Expression", ImpInvalidExpression)
    kind = node.get("kind")

    match kind:
        case "boolean":
            value = node.get("value")
            if not isinstance(value, bool):
                raise ImpInvalidExpression(f"boolean literal has non-boolean value {value!r}", kind=kind)
            return BooleanLiteral(value)
        case "number":
            value = node.get("value")
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ImpInvalidExpression(f"number literal has non-number value {value!r}", kind=kind)
            try:
                return NumberLiteral(float(value))
            except OverflowError:
                raise ImpInvalidExpression("number literal is too large for a float", kind=kind) from None
        case "variable":
            return Variable(node.get("name"))
        case "operator":
            op = node.get("op")
            if not isinstance(op, str) or op not in BINARY_OPS:
                raise ImpInvalidExpression(f"Unknown binary operator {op!r}", kind=op)
            return BinaryOp(
                op,
                expr_from_json(node.get("e1")),
                expr_from_json(node.get("e2")),
            )
        case _:
            raise ImpInvalidExpression(f"Invalid expression kind {kind!r}", kind=kind)

def block_from_json(obj: Any) -> Block:
    if obj is None:
        return ()

    if not isinstance(obj, list):
        raise ImpInvalidStatement(f"Block must be an array; got {type(obj).__name__}")

    return tuple(stmt_from_json(item) for item in obj)

def stmt_from_json(obj: Any) -> Statement:
    node = _require_mapping(obj, "Statement", ImpInvalidStatement)
    kind = node.get("kind")

    match kind:
        case "let":
            return Let(node.get("name"), expr_from_json(node.get("expression")))
        case "assignment":
            return Assign(node.get("name"), expr_from_json(node.get("expression")))
        case "if":
            return If(
                expr_from_json(node.get("test")),
                block_from_json(node.get("truePart")),
                block_from_json(node.get("falsePart")),
            )
        case "while":
            return While(expr_from_json(node.get("test")), block_from_json(node.get("body")))
        case "print":
            return Print(expr_from_json(node.get("expression")))
        case _:
            raise ImpInvalidStatement(f"Invalid statement kind {kind!r}", kind=kind)

def program_from_json(obj: Any) -> List[Statement]:
    if not isinstance(obj, list):
        raise ImpInvalidStatement(f"Program must be an array; got {type(obj).__name__}")

    return [stmt_from_json(item) for item in obj]
