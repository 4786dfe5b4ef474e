"""Logging for nlop.

Two kinds of loggers live here:

* module loggers from :func:`get_logger`, all under the ``nlop.`` namespace,
  writing formatted records to one stream (stderr unless reconfigured);
* run traces from :func:`file_trace`, which write bare messages to a plain
  text file for the duration of one optimizer run.

Run traces are never registered with :mod:`logging`'s manager, so repeated
runs do not accumulate logger objects, and :func:`configure_logging` never
touches them.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_TRACE_FORMAT = "%(message)s"

_level = logging.WARNING
_formatter = logging.Formatter(_DEFAULT_FORMAT)
_stream: Optional[IO[str]] = None

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _qualified(name: Optional[str]) -> str:
    if name is None or name == "nlop" or name.startswith("nlop."):
        return name or "nlop"
    return f"nlop.{name}"


def _stream_handler() -> logging.Handler:
    # resolved per handler: sys.stderr may be replaced after import
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(_formatter)
    return handler


def _install(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(_level)
    logger.addHandler(_stream_handler())
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create the logger of a module.

    Args:
        name: Usually ``__name__``. Names outside the package are prefixed
            with ``nlop.``; None gives the package logger ``nlop``.

    Example:
        >>> from nlop.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting Newton iterations")
    """
    qualified = _qualified(name)
    logger = _loggers.get(qualified)
    if logger is None:
        logger = logging.getLogger(qualified)
        _install(logger)
        _loggers[qualified] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every nlop logger, current and future.

    Args:
        level: A :mod:`logging` level or its name, e.g. ``"DEBUG"``.
    """
    global _level
    _level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Route every nlop logger to ``stream`` with one formatter.

    Use ``logging.INFO`` to see the initial configuration and per-iteration
    progress of the optimizers; WARNING (the default) only reports runs that
    ran out of iterations.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _level, _formatter, _stream
    _level = _coerce_level(level)
    _formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    _stream = stream
    for logger in _loggers.values():
        _install(logger)


@contextmanager
def file_trace(path: str | Path, name: Optional[str] = None) -> Iterator[logging.Logger]:
    """Write INFO messages of the yielded logger to ``path``, one per line.

    The file is truncated on entry, parent directories are created, and the
    file is closed on exit, also when the body raises. The logger is not
    affected by :func:`set_log_level` or :func:`configure_logging`.

    Example:
        >>> with file_trace(tmp / "Newton.txt") as trace:  # doctest: +SKIP
        ...     trace.info("iteration: 0  x: [1.]")
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    trace = logging.Logger(f"{_qualified('trace')}.{name or path.stem}", logging.INFO)
    trace.propagate = False
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_TRACE_FORMAT))
    trace.addHandler(handler)
    try:
        yield trace
    finally:
        trace.removeHandler(handler)
        handler.close()


__all__ = ["get_logger", "set_log_level", "configure_logging", "file_trace"]
