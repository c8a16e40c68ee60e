"""
Logging setup for gemimg.

Nothing is configured at import time. Library users see gemimg records only
through their own logging configuration; the CLI calls configure_logging().

Verbosity:
- 0: INFO, one line per request with model, reference count and timing
- 1: as 0, plus the prompt text (truncated)
- 2: DEBUG, plus request URLs, timeouts and response status codes

Raw request/response bodies are a separate switch (debug_api) because they
are large even with image data truncated.
"""

import logging
import os

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "gemimg"
API_LOGGER_NAME = ROOT_LOGGER_NAME + ".core.api"
MAX_VERBOSITY = 2

_log_prompts: bool = False


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def set_verbosity(level: int) -> None:
    """Set the gemimg logger level and prompt logging from a 0-2 verbosity."""
    global _log_prompts
    level = max(0, min(level, MAX_VERBOSITY))
    _root_logger().setLevel(logging.DEBUG if level >= 2 else logging.INFO)
    _log_prompts = level >= 1


def log_prompts() -> bool:
    """Whether prompt text may be written to the log."""
    return _log_prompts


def configure_logging(verbose_level: int = 0, quiet: bool = False, debug_api: bool = False) -> None:
    """
    Configure gemimg logging for a CLI run.

    Args:
        verbose_level: 0-2, see module docstring
        quiet: Only warnings and errors; prompts are never logged
        debug_api: Emit raw API bodies even when quiet
    """
    global _log_prompts
    if quiet:
        _root_logger().setLevel(logging.WARNING)
        _log_prompts = False
    else:
        set_verbosity(verbose_level)
    # The transport logger inherits the root level unless API bodies were asked for
    logging.getLogger(API_LOGGER_NAME).setLevel(logging.DEBUG if debug_api else logging.NOTSET)


def get_verbosity_from_env() -> int:
    """Read GEMIMG_VERBOSITY, clamped to 0-2. Unparseable values mean 0."""
    raw = os.environ.get("GEMIMG_VERBOSITY", "").strip()
    try:
        level = int(raw)
    except ValueError:
        return 0
    return max(0, min(level, MAX_VERBOSITY))


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the gemimg namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = [
    "API_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "get_verbosity_from_env",
    "log_prompts",
    "set_verbosity",
]
