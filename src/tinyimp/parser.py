"""
Parser for tinyimp source text.

A lark LALR parser over `grammar.lark`, followed by a non-recursive
Transformer that lowers the parse tree into the frozen AST dataclasses of
`ast_nodes`, so long operator chains do not hit the recursion limit.
Statements keep their source position so runtime errors can report it.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from lark import Lark, Token, UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.visitors import Transformer_NonRecursive, VisitError, v_args

from .ast_nodes import (
    Assign,
    BinaryOp,
    Block,
    BooleanLiteral,
    Expression,
    If,
    Let,
    NumberLiteral,
    Print,
    SourcePos,
    Statement,
    Variable,
    While,
)

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, line: Optional[int]=None, column: Optional[int]=None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )

@lru_cache(maxsize=1)
def make_parser() -> Lark:
    return Lark.open(
        "grammar.lark",
        rel_to=__file__,
        parser="lalr",
        start=["start", "expr"],
        propagate_positions=True,
    )

def _pos(meta) -> Optional[SourcePos]:
    line = getattr(meta, "line", None)
    if line is None:
        return None

    return SourcePos(line, getattr(meta, "column", 0))

class ToAst(Transformer_NonRecursive):
    """Lower lark parse trees into AST nodes."""

    @v_args(inline=True)
    def number(self, tok: Token) -> NumberLiteral:
        return NumberLiteral(float(tok))

    def true(self, _children) -> BooleanLiteral:
        return BooleanLiteral(True)

    def false(self, _children) -> BooleanLiteral:
        return BooleanLiteral(False)

    @v_args(inline=True)
    def variable(self, tok: Token) -> Variable:
        return Variable(str(tok))

    @v_args(inline=True)
    def binop(self, lhs: Expression, op: Token, rhs: Expression) -> BinaryOp:
        return BinaryOp(str(op), lhs, rhs)

    @v_args(meta=True, inline=True)
    def let_stmt(self, meta, name: Token, expr: Expression) -> Let:
        return Let(str(name), expr, meta=_pos(meta))

    @v_args(meta=True, inline=True)
    def assign_stmt(self, meta, name: Token, expr: Expression) -> Assign:
        return Assign(str(name), expr, meta=_pos(meta))

    @v_args(meta=True, inline=True)
    def if_stmt(self, meta, test: Expression, then_block: Block, else_block: Block=()) -> If:
        return If(test, then_block, else_block, meta=_pos(meta))

    @v_args(meta=True, inline=True)
    def while_stmt(self, meta, test: Expression, body: Block) -> While:
        return While(test, body, meta=_pos(meta))

    @v_args(meta=True, inline=True)
    def print_stmt(self, meta, expr: Expression) -> Print:
        return Print(expr, meta=_pos(meta))

    def block(self, children) -> Block:
        return tuple(children)

    def start(self, children) -> List[Statement]:
        return list(children)

def _parse_error(exc: UnexpectedInput) -> ParseError:
    line = getattr(exc, "line", None)
    column = getattr(exc, "column", None)

    if line is not None and line < 1:
        line = column = None

    if isinstance(exc, UnexpectedCharacters):
        message = f"Unexpected character {exc.char!r}"
    elif isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            message = "Unexpected end of input"
        else:
            message = f"Unexpected token {str(exc.token)!r}"
    else:
        message = "Invalid syntax"

    return ParseError(message, line, column)

def _parse(text: str, start: str):
    try:
        tree = make_parser().parse(text, start=start)
    except UnexpectedInput as exc:
        raise _parse_error(exc) from None
    except RecursionError:
        raise ParseError("Input nested too deeply") from None

    try:
        return ToAst().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, RecursionError):
            raise ParseError("Input nested too deeply") from None
        raise

def parse_program(text: str) -> List[Statement]:
    return _parse(text, "start")

def parse_expression(text: str) -> Expression:
    return _parse(text, "expr")
