"""Per-iteration diagnostics for the optimizers.

Progress goes to the ``nlop.diagnostics`` logger (INFO for progress, WARNING
for non-convergence). When a parameter bundle enables ``log_file`` the
per-iteration lines are also written as plain text to
``<log_dir>/<algorithm>.txt`` for the duration of one run.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np

from .logging import file_trace, get_logger

if TYPE_CHECKING:
    from .optimize.params import OptimizerParams

logger = get_logger(__name__)


def format_point(x: np.ndarray) -> str:
    return np.array2string(np.asarray(x), precision=6, separator=", ")


class IterationLogger:
    """Diagnostic sink for one named algorithm."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._trace: Optional[logging.Logger] = None

    @property
    def is_file_open(self) -> bool:
        return self._trace is not None

    def initial_configuration(self, params: "OptimizerParams") -> None:
        settings = ", ".join(f"{key}={value}" for key, value in params.describe().items())
        logger.info("%s initial configuration: %s", self.name, settings)

    def iteration(self, k: int, x: np.ndarray, value: float, grad_norm: float) -> None:
        line = (
            f"iteration: {k}  x: {format_point(x)}  "
            f"f(x): {value:.10g}  |grad|: {grad_norm:.6e}"
        )
        logger.info("%s %s", self.name, line)
        if self._trace is not None:
            self._trace.info(line)

    def success(self, k: int, x: np.ndarray, value: float) -> str:
        message = (
            f"{self.name} converged after {k} iterations: "
            f"x = {format_point(x)}, f(x) = {value:.10g}"
        )
        logger.info(message)
        return message

    def failure(self, k: int, x: np.ndarray, value: float) -> str:
        message = (
            f"{self.name} exceeded {k} iterations without converging; "
            f"returning x = {format_point(x)}, f(x) = {value:.10g}"
        )
        logger.warning(message)
        return message

    @contextmanager
    def session(self, params: "OptimizerParams") -> Iterator["IterationLogger"]:
        """Scope one run: print the configuration and, if ``params.log_file``
        is set, mirror iteration lines to ``params.log_path(name)``."""
        self.initial_configuration(params)
        if not params.log_file:
            yield self
            return
        with file_trace(params.log_path(self.name), self.name) as trace:
            self._trace = trace
            try:
                yield self
            finally:
                self._trace = None


__all__ = ["IterationLogger", "format_point"]
