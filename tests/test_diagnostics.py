"""Tests for the per-iteration diagnostic sink."""

import logging
from io import StringIO

import numpy as np
import pytest

from nlop.diagnostics import IterationLogger
from nlop.logging import configure_logging
from nlop.optimize import (
    GradientDescentOptimizer,
    GradientDescentParams,
    NewtonOptimizer,
    NewtonParams,
    ObjectiveFunction,
    SingularHessianError,
)


def square():
    return ObjectiveFunction(lambda x: float(x @ x), grad=lambda x: 2 * x)


def test_log_file_has_one_line_per_iteration(tmp_path):
    params = NewtonParams(log_file=True, log_dir=str(tmp_path))
    optimizer = NewtonOptimizer(hessian=lambda x: 2.0)
    optimizer.initialize(10.0, square(), params)
    optimizer.run()

    lines = (tmp_path / "Newton.txt").read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("iteration: 0")
    assert lines[1].startswith("iteration: 1")
    assert not optimizer.logger.is_file_open


def test_log_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("NLOP_LOG_DIR", str(tmp_path / "logs"))
    params = GradientDescentParams(learning_rate=0.25, log_file=True)
    optimizer = GradientDescentOptimizer()
    optimizer.initialize(np.array([1.0, -1.0]), square(), params)
    optimizer.run()
    assert (tmp_path / "logs" / "Gradient descent.txt").exists()


def test_no_file_without_log_file(tmp_path):
    params = NewtonParams(log_dir=str(tmp_path))
    optimizer = NewtonOptimizer(hessian=lambda x: 2.0)
    optimizer.initialize(10.0, square(), params)
    optimizer.run()
    assert list(tmp_path.iterdir()) == []


def test_log_file_closed_when_run_raises(tmp_path):
    params = NewtonParams(log_file=True, log_dir=str(tmp_path))
    optimizer = NewtonOptimizer(hessian=lambda x: np.zeros((2, 2)))
    optimizer.initialize(np.ones(2), square(), params)
    with pytest.raises(SingularHessianError):
        optimizer.run()
    assert not optimizer.logger.is_file_open
    assert (tmp_path / "Newton.txt").read_text().startswith("iteration: 0")


def test_progress_and_success_at_info():
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    optimizer = NewtonOptimizer(hessian=lambda x: 2.0)
    optimizer.initialize(10.0, square(), NewtonParams())
    optimizer.run()

    output = stream.getvalue()
    assert "Newton initial configuration" in output
    assert "iteration: 0" in output
    assert "converged after 1 iterations" in output


def test_non_convergence_is_a_warning():
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    optimizer = GradientDescentOptimizer()
    optimizer.initialize(
        np.array([3.0]), square(), GradientDescentParams(learning_rate=1e-6, max_iterations=2)
    )
    optimizer.run()

    output = stream.getvalue()
    assert "[WARNING]" in output
    assert "exceeded 2 iterations" in output
    assert optimizer.result.message in output


def test_logged_runs_do_not_register_loggers(tmp_path):
    registered = set(logging.Logger.manager.loggerDict)
    optimizers = []
    for _ in range(20):
        optimizer = NewtonOptimizer(hessian=lambda x: 2.0)
        optimizer.initialize(10.0, square(), NewtonParams(log_file=True, log_dir=str(tmp_path)))
        optimizer.run()
        optimizers.append(optimizer)
    assert set(logging.Logger.manager.loggerDict) == registered


def test_session_without_log_file_opens_nothing(tmp_path):
    sink = IterationLogger("Test")
    with sink.session(NewtonParams(log_dir=str(tmp_path))):
        assert not sink.is_file_open
    assert list(tmp_path.iterdir()) == []
