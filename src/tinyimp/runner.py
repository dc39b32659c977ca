from __future__ import annotations

import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .ast_nodes import program_from_json
from .config import debug_py_trace_enabled, setup_logging
from .evaluator import eval_expr, eval_stmt, print_sink, run_program
from .eval.blocks import OutputSink
from .parser import ParseError, parse_expression, parse_program
from .scope import Scope
from .types import ImpNestingTooDeep, ImpRuntimeError, ImpValue, render_value

logger = logging.getLogger(__name__)

USAGE = """\
usage: tinyimp [--json | --expr] [--log-level LEVEL] [FILE | - | SOURCE]
       tinyimp --repl

  FILE     path to a program; '-' or nothing reads stdin;
           anything else is run as literal source
  --json   input is a JSON AST (array of kind-tagged statements)
  --expr   input is a single expression; print its value
  --repl   start the interactive REPL
"""

def run(src: str, output: Optional[OutputSink]=None) -> Dict[str, ImpValue]:
    """Parse and run a program, returning the root scope's final bindings."""
    return run_program(parse_program(src), output)

def run_json(text: str, output: Optional[OutputSink]=None) -> Dict[str, ImpValue]:
    try:
        program = program_from_json(json.loads(text))
    except RecursionError:
        raise ImpNestingTooDeep("JSON program") from None

    return run_program(program, output)

def eval_source(src: str, scope: Optional[Scope]=None) -> ImpValue:
    return eval_expr(parse_expression(src), scope or Scope())

def repl_eval(text: str, scope: Scope, output: Optional[OutputSink]=None) -> Tuple[Optional[ImpValue], bool]:
    """
    Run one REPL submission against a persistent root scope.

    Returns (value, is_stmt): statements yield (None, True); a bare
    expression yields its value and False.
    """
    try:
        stmts = parse_program(text)
    except ParseError as program_error:
        try:
            expr = parse_expression(text)
        except ParseError:
            raise program_error from None

        return eval_expr(expr, scope), False

    sink = output or print_sink

    for stmt in stmts:
        scope = eval_stmt(stmt, scope, sink)

    return None, True

def format_bindings(bindings: Dict[str, ImpValue]) -> str:
    return "\n".join(f"{name} = {render_value(value)}" for name, value in bindings.items())

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    try:
        is_file = candidate.is_file()
    except (OSError, ValueError):
        is_file = False

    if is_file:
        return candidate.read_text(encoding="utf-8")

    return arg

def _report_error(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)

    if debug_py_trace_enabled():
        print("\nPython traceback:", file=sys.stderr)
        print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")

def main(argv: Optional[List[str]]=None) -> int:
    mode = "program"
    log_level = None
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token in ("-h", "--help"):
            print(USAGE, end="")
            return 0

        if token == "--json":
            mode = "json"
            continue

        if token == "--expr":
            mode = "expr"
            continue

        if token == "--repl":
            mode = "repl"
            continue

        if token.startswith("--log-level="):
            log_level = token.split("=", 1)[1]
            continue

        if token == "--log-level":
            try:
                log_level = next(it)
            except StopIteration:
                raise SystemExit("--log-level flag requires a level") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    setup_logging(log_level)

    if mode == "repl":
        from .repl import repl
        repl()
        return 0

    source = _load_source(arg)
    logger.debug("running %s input (%d chars)", mode, len(source))

    try:
        if mode == "expr":
            print(render_value(eval_source(source)))
            return 0

        if mode == "json":
            bindings = run_json(source)
        else:
            bindings = run(source)
    except (ParseError, ImpRuntimeError, json.JSONDecodeError) as exc:
        _report_error(exc)
        return 1

    if bindings:
        print(format_bindings(bindings))

    return 0

if __name__ == "__main__":
    sys.exit(main())
