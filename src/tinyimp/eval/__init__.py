"""Evaluator helper modules for the tinyimp runtime."""

__all__ = [
    "bind",
    "blocks",
    "control",
    "expr",
    "helpers",
]
