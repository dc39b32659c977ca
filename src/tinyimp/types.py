from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from typing_extensions import TypeAlias

# ---------- Value Model ----------

def format_number(v: float) -> str:
    """Render a float the way JavaScript's Number#toString does."""
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    if v == 0:
        return "0"

    sign = "-" if v < 0 else ""
    # repr gives the shortest round-tripping digits
    _, raw_digits, exp = Decimal(repr(abs(v))).as_tuple()
    point = len(raw_digits) + exp
    digits = "".join(str(d) for d in raw_digits).rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        return sign + digits + "0" * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    e = point - 1
    exp_part = f"e{'+' if e >= 0 else '-'}{abs(e)}"

    if k == 1:
        return sign + digits + exp_part

    return sign + digits[0] + "." + digits[1:] + exp_part

@dataclass
class ImpNumber:
    value: float
    def __repr__(self) -> str:
        return format_number(self.value)

@dataclass
class ImpBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

ImpValue: TypeAlias = ImpNumber | ImpBool

def type_name(value: object) -> str:
    """Language-level name of a runtime value, for error messages."""
    if isinstance(value, ImpNumber):
        return "number"
    if isinstance(value, ImpBool):
        return "boolean"

    return type(value).__name__

def render_value(value: ImpValue) -> str:
    return repr(value)

# ---------- Exceptions ----------

class ImpRuntimeError(Exception):
    imp_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.imp_meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "imp_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class ImpInvalidExpression(ImpRuntimeError):
    def __init__(self, message: str, kind: object = None):
        super().__init__(message)
        self.kind = kind

class ImpInvalidStatement(ImpRuntimeError):
    def __init__(self, message: str, kind: object = None):
        super().__init__(message)
        self.kind = kind

class ImpUnboundVariable(ImpRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' is not declared")
        self.name = name

class ImpDuplicateDeclaration(ImpRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' is already declared in this scope")
        self.name = name

class ImpTypeMismatch(ImpRuntimeError):
    def __init__(self, message: str, op: Optional[str] = None):
        super().__init__(message)
        self.op = op

class ImpNonBooleanCondition(ImpRuntimeError):
    def __init__(self, context: str, value: object):
        super().__init__(f"{context} condition must be a boolean; got {type_name(value)}")
        self.context = context
        self.value = value

class ImpInvalidName(ImpRuntimeError):
    def __init__(self, name: object):
        super().__init__(f"Invalid variable name: {name!r}")
        self.name = name

class ImpNestingTooDeep(ImpRuntimeError):
    def __init__(self, what: str):
        super().__init__(f"{what} nested too deeply to evaluate")
        self.what = what
