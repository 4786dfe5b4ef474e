"""Pytest configuration and shared fixtures for the nlop tests."""

import logging
import os

import numpy as np
import pytest

from nlop.logging import configure_logging


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def quiet_logging():
    """Keep nlop loggers at WARNING between tests."""
    yield
    configure_logging(level=logging.WARNING)
