from __future__ import annotations

import pytest

from tests.support.harness import ParseError
from tinyimp.ast_nodes import (
    Assign,
    BinaryOp,
    BooleanLiteral,
    If,
    Let,
    NumberLiteral,
    Print,
    SourcePos,
    Variable,
    While,
)
from tinyimp.parser import parse_expression, parse_program


def _n(v: float) -> NumberLiteral:
    return NumberLiteral(float(v))


EXPRESSION_CASES = [
    pytest.param("42", _n(42), id="integer"),
    pytest.param("2.5", _n(2.5), id="decimal"),
    pytest.param("1e3", _n(1000), id="exponent"),
    pytest.param("true", BooleanLiteral(True), id="true"),
    pytest.param("false", BooleanLiteral(False), id="false"),
    pytest.param("letter", Variable("letter"), id="keyword-prefixed-name"),
    pytest.param("iffy_2", Variable("iffy_2"), id="keyword-prefixed-name-digits"),
    pytest.param(
        "1 + 2 * 3",
        BinaryOp("+", _n(1), BinaryOp("*", _n(2), _n(3))),
        id="mul-over-add",
    ),
    pytest.param(
        "8 - 2 - 1",
        BinaryOp("-", BinaryOp("-", _n(8), _n(2)), _n(1)),
        id="left-assoc",
    ),
    pytest.param(
        "(1 + 2) * 3",
        BinaryOp("*", BinaryOp("+", _n(1), _n(2)), _n(3)),
        id="parens",
    ),
    pytest.param(
        "a < b === c > d",
        BinaryOp(
            "===",
            BinaryOp("<", Variable("a"), Variable("b")),
            BinaryOp(">", Variable("c"), Variable("d")),
        ),
        id="relational-over-equality",
    ),
    pytest.param(
        "a || b && c",
        BinaryOp("||", Variable("a"), BinaryOp("&&", Variable("b"), Variable("c"))),
        id="and-over-or",
    ),
    pytest.param(
        "x === 1 && y",
        BinaryOp("&&", BinaryOp("===", Variable("x"), _n(1)), Variable("y")),
        id="equality-over-and",
    ),
]


@pytest.mark.parametrize("source, expected", EXPRESSION_CASES)
def test_parse_expression(source: str, expected: object) -> None:
    assert parse_expression(source) == expected


def test_parse_statements() -> None:
    source = """
    let x = 1;
    x = x + 1;
    if (x > 1) { print(x); } else { print(false); }
    while (x < 3) { x = x + 1; }
    """

    assert parse_program(source) == [
        Let("x", _n(1)),
        Assign("x", BinaryOp("+", Variable("x"), _n(1))),
        If(
            BinaryOp(">", Variable("x"), _n(1)),
            (Print(Variable("x")),),
            (Print(BooleanLiteral(False)),),
        ),
        While(
            BinaryOp("<", Variable("x"), _n(3)),
            (Assign("x", BinaryOp("+", Variable("x"), _n(1))),),
        ),
    ]


def test_if_without_else_has_empty_else_block() -> None:
    (stmt,) = parse_program("if (true) { }")

    assert isinstance(stmt, If)
    assert stmt.then_block == ()
    assert stmt.else_block == ()


def test_nested_blocks() -> None:
    (stmt,) = parse_program("while (true) { if (false) { let y = 1; } }")

    assert isinstance(stmt, While)
    (inner,) = stmt.body
    assert inner == If(BooleanLiteral(False), (Let("y", _n(1)),))


def test_statement_positions() -> None:
    first, second = parse_program("let x = 1;\n  x = 2;")

    assert first.meta == SourcePos(1, 1)
    assert second.meta == SourcePos(2, 3)


def test_comments_and_whitespace_ignored() -> None:
    source = "// leading\nlet x = 1; // trailing\n\n// only a comment\n"

    assert parse_program(source) == [Let("x", _n(1))]


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("", id="empty"),
        pytest.param("   \n", id="whitespace"),
        pytest.param("// nothing here", id="comment-only"),
    ],
)
def test_empty_program(source: str) -> None:
    assert parse_program(source) == []


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("let x = ;", id="missing-expression"),
        pytest.param("let = 1;", id="missing-name"),
        pytest.param("x = 1", id="missing-semicolon"),
        pytest.param("@", id="bad-character"),
        pytest.param("if true { }", id="if-without-parens"),
        pytest.param("let x = 1 +;", id="dangling-operator"),
        pytest.param("let x = 1 == 1;", id="double-equals"),
        pytest.param("while (true) { x = 1;", id="unclosed-block"),
    ],
)
def test_parse_errors(source: str) -> None:
    with pytest.raises(ParseError):
        parse_program(source)


def test_end_of_input_message() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_program("x = 1")

    assert exc_info.value.message == "Unexpected end of input"


def test_unexpected_character_message() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_program("let x = 1 @ 2;")

    err = exc_info.value
    assert err.message.startswith("Unexpected character")
    assert (err.line, err.column) == (1, 11)
    assert str(err).endswith("at line 1, col 11")


def test_error_reports_line() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_program("let x = 1;\nlet y = ;\n")

    assert exc_info.value.line == 2


def test_expression_rejects_statements() -> None:
    with pytest.raises(ParseError):
        parse_expression("let x = 1;")


def test_long_operator_chain_parses() -> None:
    (stmt,) = parse_program("let x = " + " + ".join(["1"] * 5000) + ";")

    node = stmt.expr
    depth = 0
    while isinstance(node, BinaryOp):
        node = node.left
        depth += 1

    assert depth == 4999
    assert node == _n(1)
