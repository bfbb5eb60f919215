"""Finite-difference gradients and Hessians of arbitrary scalar functions.

Both builders return callables rather than arrays so that a synthesized
gradient can be dropped into :class:`~descentkit.optimize.core.Parameters`
in place of an analytic one.

The Hessian is assembled row by row as the gradient of one gradient
component. The outer differentiation uses the *opposite* stencil of the inner
one (forward <-> backward, centered <-> centered), so that the first-order
bias of a one-sided inner stencil is cancelled instead of compounded.

Example
-------
>>> import numpy as np
>>> from descentkit.optimize import DifferenceType, gradient
>>> grad = gradient(lambda x: x[0] ** 2 + x[1] ** 2, 1e-4, DifferenceType.CENTERED)
>>> np.allclose(grad(np.array([1.0, 1.0])), [2.0, 2.0])
True
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Optional, Union

import numpy as np

from .core import MatrixFunction, ScalarFunction, VectorFunction
from .utils import Array, as_point, axis_step


class DifferenceType(Enum):
    """Stencil used to approximate a first derivative."""

    FORWARD = "forward"
    BACKWARD = "backward"
    CENTERED = "centered"

    @property
    def opposite(self) -> "DifferenceType":
        return opposite(self)

    @classmethod
    def coerce(cls, value: Union["DifferenceType", str]) -> "DifferenceType":
        """Accept a member or a case-insensitive name such as ``"Centered"``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        supported = [member.value for member in cls]
        raise ValueError(
            f"Unsupported difference type {value!r}. Supported: {supported}"
        )


_OPPOSITE = {
    DifferenceType.FORWARD: DifferenceType.BACKWARD,
    DifferenceType.BACKWARD: DifferenceType.FORWARD,
    DifferenceType.CENTERED: DifferenceType.CENTERED,
}


def opposite(stencil: DifferenceType) -> DifferenceType:
    """Stencil used for the outer derivative when composing second derivatives."""
    return _OPPOSITE[stencil]


def _fan_out(task: Callable[[int], object], n: int, workers: Optional[int]) -> list:
    if workers is None or workers <= 1 or n <= 1:
        return [task(i) for i in range(n)]
    with ThreadPoolExecutor(max_workers=min(workers, n)) as pool:
        return list(pool.map(task, range(n)))


def partial(
    f: ScalarFunction,
    x: Array,
    i: int,
    h: float,
    stencil: DifferenceType = DifferenceType.CENTERED,
    fx: Optional[float] = None,
) -> float:
    """Approximate ``df/dx_i`` at ``x`` with a single stencil.

    ``fx`` may carry a precomputed ``f(x)`` for the one-sided stencils.
    ``h`` is not validated; ``h == 0`` yields ``inf``/``nan``.
    """
    if stencil is DifferenceType.FORWARD:
        base = f(x) if fx is None else fx
        return float((f(axis_step(x, i, h)) - base) / h)
    if stencil is DifferenceType.BACKWARD:
        base = f(x) if fx is None else fx
        return float((base - f(axis_step(x, i, -h))) / h)
    return float((f(axis_step(x, i, h)) - f(axis_step(x, i, -h))) / (2 * h))


def gradient(
    f: ScalarFunction,
    h: float = 1e-6,
    stencil: Union[DifferenceType, str] = DifferenceType.CENTERED,
    workers: Optional[int] = None,
) -> VectorFunction:
    """Build a finite-difference gradient of ``f``.

    Parameters
    ----------
    f:
        Scalar function of a 1-D array.
    h:
        Perturbation size, applied along one axis at a time.
    stencil:
        Forward, backward or centered differences.
    workers:
        If greater than one, coordinates are evaluated on a thread pool.
        Results are joined in coordinate order and are identical to the
        serial evaluation.
    """
    stencil = DifferenceType.coerce(stencil)

    def grad_f(x: Array) -> Array:
        point = as_point(x)
        fx = None
        if stencil is not DifferenceType.CENTERED:
            fx = f(point)
        values = _fan_out(
            lambda i: partial(f, point, i, h, stencil, fx), point.size, workers
        )
        return np.asarray(values, dtype=float)

    return grad_f


def hessian(
    f: ScalarFunction,
    h: float = 1e-4,
    stencil: Union[DifferenceType, str] = DifferenceType.CENTERED,
    workers: Optional[int] = None,
) -> MatrixFunction:
    """Build a finite-difference Hessian of ``f``.

    Row ``i`` is the gradient, taken with ``opposite(stencil)``, of the
    ``i``-th component of the ``stencil`` gradient of ``f``. Rows are
    independent and are fanned out over ``workers`` threads when requested.
    The result is not symmetrized; off-diagonal pairs agree up to the
    finite-difference error.
    """
    stencil = DifferenceType.coerce(stencil)
    outer = opposite(stencil)

    def hess_f(x: Array) -> Array:
        point = as_point(x)

        def row(i: int) -> Array:
            def grad_i(y: Array) -> float:
                return partial(f, y, i, h, stencil)

            return gradient(grad_i, h, outer)(point)

        rows = _fan_out(row, point.size, workers)
        return np.vstack(rows) if rows else np.zeros((0, 0))

    return hess_f


__all__ = ["DifferenceType", "gradient", "hessian", "opposite", "partial"]
