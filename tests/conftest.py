"""Pytest configuration and shared fixtures for descentkit tests.

This module provides:
- A deterministic NumPy RNG fixture
- Reusable quadratic test problems
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the legacy global numpy RNG before every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def quadratic():
    """f(x) = x^T A x + b^T x with A symmetric positive definite.

    Returns (f, grad_f, minimizer).
    """
    A = np.array([[3.0, 0.5], [0.5, 2.0]])
    b = np.array([1.0, -2.0])

    def f(x: np.ndarray) -> float:
        return float(x @ (A @ x) + b @ x)

    def grad_f(x: np.ndarray) -> np.ndarray:
        return 2.0 * A @ x + b

    minimizer = np.linalg.solve(2.0 * A, -b)
    return f, grad_f, minimizer
