"""Environment-driven settings and logging setup for the CLI and REPL."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "TINYIMP_LOG_LEVEL"
DEBUG_PY_TRACE_ENV = "TINYIMP_DEBUG_PY_TRACE"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}

def env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY

def debug_py_trace_enabled() -> bool:
    """Print the Python traceback alongside language errors."""
    return env_flag(DEBUG_PY_TRACE_ENV)

def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)

def log_level_from_env() -> str:
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)

def setup_logging(level: Optional[str]=None) -> None:
    """
    Configure root logging on stderr.

    Args:
        level: level name (DEBUG, INFO, ...); falls back to TINYIMP_LOG_LEVEL.
    """
    name = (level or log_level_from_env()).upper()
    numeric_level = getattr(logging, name, None)

    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("tinyimp").setLevel(numeric_level)
