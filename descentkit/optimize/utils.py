"""Vector helpers shared by the finite-difference engine and the optimizers.

Thin wrappers over NumPy, so that every module agrees on
dtype, shape and the handling of zero vectors.
"""

from __future__ import annotations

import numpy as np

Array = np.ndarray


def as_point(x: Array, copy: bool = True) -> Array:
    """Return ``x`` as a 1-D float array, copied unless ``copy`` is False."""
    point = np.asarray(x, dtype=float).reshape(-1)
    if copy:
        point = point.copy()
    return point


def norm(x: Array) -> float:
    """Euclidean norm as a Python float."""
    return float(np.linalg.norm(x))


def squared_norm(x: Array) -> float:
    return float(np.dot(x, x))


def normalize(x: Array) -> Array:
    """Scale ``x`` to unit length.

    A zero vector is returned unchanged rather than turned into NaNs.
    """
    length = norm(x)
    if length == 0.0:
        return np.array(x, dtype=float)
    return x / length


def axis_step(x: Array, i: int, h: float) -> Array:
    """Return a copy of ``x`` moved by ``h`` along coordinate ``i`` only."""
    moved = np.array(x, dtype=float)
    moved[i] += h
    return moved


__all__ = ["Array", "as_point", "axis_step", "norm", "normalize", "squared_norm"]
