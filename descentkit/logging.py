"""Logging utilities for descentkit.

Solvers report their terminal status at INFO and per-iteration detail at
DEBUG. The default level is WARNING and can be overridden with the
``DESCENTKIT_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_LOG_LEVEL_ENV_VAR = "DESCENTKIT_LOG_LEVEL"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


_DEFAULT_LEVEL = _coerce_level(os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING"))
_stream: Optional[object] = None
_format = _DEFAULT_FORMAT

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached so that repeated calls never stack handlers. The name
    should typically be ``__name__`` of the calling module.

    Args:
        name: Logger name. If None, returns the package logger.

    Returns:
        Configured logger instance under the ``descentkit`` namespace.

    Example:
        >>> from descentkit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting descent")
    """
    if name is None:
        name = "descentkit"

    if name == "descentkit" or name.startswith("descentkit."):
        logger_name = name
    else:
        logger_name = f"descentkit.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(_stream or sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_format))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all descentkit loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or its name
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for descentkit.

    Replaces the handlers of every logger created so far and sets the default
    used by loggers created later.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from descentkit.logging import configure_logging
        >>> configure_logging(level=logging.INFO)
    """
    level = _coerce_level(level)

    global _DEFAULT_LEVEL, _stream, _format
    _DEFAULT_LEVEL = level
    _stream = stream
    _format = format_string or _DEFAULT_FORMAT

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(_format)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
