"""
Logging configuration for infocanvas.

Logging is configured lazily: library users who never call set_verbosity or
configure_logging get no output unless they configure logging themselves.

Verbosity levels:
- 0 (default): INFO, session activity and timings only
- 1 (info): INFO + instruction text sent to the model
- 2 (verbose): DEBUG + instruction text, request parts, provider calls

INFOCANVAS_VERBOSITY env (0/1/2) is read by the CLI; CLI flags override it.
"""

import logging
import os

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER_NAME = "infocanvas"

# verbosity -> (logger level, whether instruction text is logged)
_VERBOSITY_LEVELS: dict[int, tuple[int, bool]] = {
    0: (logging.INFO, False),
    1: (logging.INFO, True),
    2: (logging.DEBUG, True),
}

# Instruction text longer than this is cut in log lines
PROMPT_LOG_MAX = 50_000

_log_prompts: bool = False
_configured: bool = False


def _ensure_handler() -> None:
    """Attach a stderr handler to the infocanvas root logger once."""
    global _configured
    if _configured:
        return
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    _configured = True


def set_verbosity(level: int) -> None:
    """
    Set logging verbosity (0=default, 1=info, 2=verbose).

    Levels above 2 behave like 2; negative levels like 0.
    """
    global _log_prompts
    _ensure_handler()
    clamped = max(0, min(level, 2))
    log_level, with_prompts = _VERBOSITY_LEVELS[clamped]
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(log_level)
    _log_prompts = with_prompts


def log_prompts() -> bool:
    """Return True if instruction text should be logged (verbosity 1 or 2)."""
    return _log_prompts


def configure_logging(verbose_level: int = 0, quiet: bool = False) -> None:
    """
    Configure logging from the CLI or a library caller.

    quiet wins over verbose_level and only lets warnings and errors through.
    """
    global _log_prompts
    _ensure_handler()
    if quiet:
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.WARNING)
        _log_prompts = False
        return
    set_verbosity(verbose_level)


def get_verbosity_from_env() -> int:
    """Read INFOCANVAS_VERBOSITY (0, 1 or 2); anything else is 0."""
    raw = os.environ.get("INFOCANVAS_VERBOSITY", "0").strip()
    if raw in ("1", "2"):
        return int(raw)
    return 0


def truncate_for_log(text: str, limit: int = PROMPT_LOG_MAX) -> str:
    """Cut text to limit characters for a log line."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under infocanvas (e.g. infocanvas.core.session)."""
    if name.startswith(ROOT_LOGGER_NAME + ".") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(ROOT_LOGGER_NAME + "." + name)


__all__ = [
    "configure_logging",
    "get_logger",
    "get_verbosity_from_env",
    "log_prompts",
    "set_verbosity",
    "truncate_for_log",
]
