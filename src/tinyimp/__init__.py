"""Reference evaluator for tinyimp, a small imperative language with nested scopes."""

__all__ = [
    "ast_nodes",
    "config",
    "evaluator",
    "parser",
    "runner",
    "scope",
    "types",
]
