from __future__ import annotations

from ..types import ImpBool, ImpNonBooleanCondition, ImpNumber, ImpTypeMismatch, ImpValue, type_name

def require_condition(value: ImpValue, context: str) -> bool:
    """Unwrap an if/while test; anything but a boolean is fatal."""
    if isinstance(value, ImpBool):
        return value.value

    raise ImpNonBooleanCondition(context, value)

def require_bool(value: ImpValue, op: str) -> bool:
    if isinstance(value, ImpBool):
        return value.value

    raise ImpTypeMismatch(f"Operator '{op}' expects boolean operands; got {type_name(value)}", op=op)

def require_number(value: ImpValue, op: str) -> float:
    if isinstance(value, ImpNumber):
        return value.value

    raise ImpTypeMismatch(f"Operator '{op}' expects number operands; got {type_name(value)}", op=op)
