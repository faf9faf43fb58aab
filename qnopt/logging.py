"""Logging utilities for qnopt.

The optimizers report per-iteration progress at DEBUG level and termination
at INFO level. Nothing is printed unless the level is lowered.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qnopt.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("line search accepted step 0.5")
    """
    if name is None:
        name = "qnopt"

    logger_name = name if name == "qnopt" or name.startswith("qnopt.") else f"qnopt.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all qnopt loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or string
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for qnopt.

    Replaces the handlers of every logger created so far and sets the default
    level for loggers created afterwards.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level


__all__ = ["configure_logging", "get_logger", "set_log_level"]
