"""Shared pytest fixtures for radixfft tests."""

import logging

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so failures are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def brute_force_dft():
    """Direct O(n^2) evaluation of y[k] = sum x[m] exp(-2 pi i k m / n)."""

    def _dft(x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.complex128)
        n = x.size
        out = np.zeros(n, dtype=np.complex128)
        m = np.arange(n)
        for k in range(n):
            out[k] = np.sum(x * np.exp(-2j * np.pi * ((k * m) % n) / n))
        return out

    return _dft


@pytest.fixture
def random_signal(rng):
    """Factory for random complex test signals."""

    def _generate(n: int) -> tuple[np.ndarray, np.ndarray]:
        """Return (re, im) arrays of standard normal samples."""
        return rng.standard_normal(n), rng.standard_normal(n)

    return _generate


@pytest.fixture
def assert_close_relative():
    """Assert max |a - b| <= rel * max |b|."""

    def _check(actual: np.ndarray, expected: np.ndarray, rel: float = 1e-9) -> None:
        scale = max(float(np.max(np.abs(expected))), 1.0)
        err = float(np.max(np.abs(actual - expected)))
        assert err <= rel * scale, f"max error {err:.3e} exceeds {rel:.0e} * {scale:.3e}"

    return _check


@pytest.fixture(autouse=True)
def _reset_package_log_level():
    """configure_logging() pins the package level; undo it between tests."""
    yield
    logging.getLogger("radixfft").setLevel(logging.NOTSET)
