from __future__ import annotations

import pytest

from tinyimp.config import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled
from tinyimp.repl import _normalize, handle_slash
from tinyimp.repl_highlight import GROUP_STYLE, highlight_line
from tinyimp.scope import Scope
from tinyimp.types import ImpBool, ImpNumber


def test_non_command_line_is_not_handled() -> None:
    assert handle_slash("let x = 1;", [Scope()]) is False


def test_vars_lists_bindings(capsys: pytest.CaptureFixture[str]) -> None:
    scope = Scope()
    scope.declare("x", ImpNumber(3.0))
    scope.declare("ok", ImpBool(False))

    assert handle_slash("/vars", [scope]) is True
    assert capsys.readouterr().out == "x = 3\nok = false\n"


def test_vars_on_empty_scope(capsys: pytest.CaptureFixture[str]) -> None:
    assert handle_slash("/vars", [Scope()]) is True
    assert capsys.readouterr().out == "(no bindings)\n"


def test_reset_swaps_scope(capsys: pytest.CaptureFixture[str]) -> None:
    old = Scope()
    old.declare("x", ImpNumber(1.0))
    box = [old]

    assert handle_slash("  /reset  ", box) is True
    assert box[0] is not old
    assert box[0].bindings() == {}
    assert "Environment reset." in capsys.readouterr().out


def test_py_traceback_toggle(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    # setenv first so monkeypatch restores the variable afterwards
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "0")
    box = [Scope()]

    handle_slash("/py-traceback on", box)
    assert debug_py_trace_enabled()

    handle_slash("/py-traceback", box)
    assert not debug_py_trace_enabled()

    handle_slash("/py-traceback off", box)
    assert not debug_py_trace_enabled()

    out = capsys.readouterr().out
    assert out.splitlines() == ["Python traceback: on", "Python traceback: off", "Python traceback: off"]


def test_py_traceback_bad_argument(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "0")

    assert handle_slash("/py-traceback maybe", [Scope()]) is True
    assert "Usage: /py-traceback" in capsys.readouterr().err
    assert not debug_py_trace_enabled()


def test_unknown_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert handle_slash("/nope", [Scope()]) is True
    assert "Unknown command: /nope" in capsys.readouterr().err


def test_normalize_strips_invisible_characters() -> None:
    assert _normalize("let\u200b x = 1;\r") == "let x = 1;"


def test_highlight_styles_tokens() -> None:
    fragments = highlight_line("let x = 1; // note")

    assert (GROUP_STYLE["keyword"], "let") in fragments
    assert (GROUP_STYLE["number"], "1") in fragments
    assert (GROUP_STYLE["comment"], "// note") in fragments
    assert "".join(text for _, text in fragments) == "let x = 1; // note"


def test_highlight_booleans() -> None:
    fragments = highlight_line("while (true) { }")

    assert (GROUP_STYLE["keyword"], "while") in fragments
    assert (GROUP_STYLE["boolean"], "true") in fragments


def test_highlight_marks_bad_input() -> None:
    fragments = highlight_line("let x = @")

    assert fragments[-1] == (GROUP_STYLE["error"], "@")
    assert (GROUP_STYLE["keyword"], "let") in fragments


def test_highlight_empty_line() -> None:
    assert highlight_line("") == [("", "")]
