"""Armijo backtracking used by gradient descent."""

from __future__ import annotations

from .core import Array, ScalarFunction
from .utils import squared_norm


def backtracking_armijo(
    f: ScalarFunction,
    x: Array,
    grad: Array,
    alpha0: float = 1.0,
    sigma: float = 0.1,
    minimum_step: float = 1e-2,
    rho: float = 0.5,
    fx: float | None = None,
) -> tuple[float, int]:
    """Backtrack along ``-grad`` until the sufficient-decrease test holds.

    Starting from ``alpha0``, ``alpha`` is multiplied by ``rho`` while
    ``alpha > minimum_step`` and
    ``f(x) - f(x - alpha * grad) < sigma * alpha * ||grad||^2``.
    ``grad`` must be the raw gradient: its magnitude enters the test.

    Returns the accepted step and the number of objective evaluations. When
    the loop stops on ``minimum_step`` the decrease test may not hold.
    """
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    alpha = float(alpha0)
    nfev = 0
    if fx is None:
        fx = f(x)
        nfev += 1
    slope = squared_norm(grad)
    while alpha > minimum_step:
        f_new = f(x - alpha * grad)
        nfev += 1
        if fx - f_new >= sigma * alpha * slope:
            break
        alpha *= rho
    return alpha, nfev


__all__ = ["backtracking_armijo"]
