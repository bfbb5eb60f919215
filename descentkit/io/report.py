"""Plain-text reports of descent runs."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from descentkit.optimize.core import ScalarFunction, VectorFunction


def format_point(x) -> str:
    """Format a vector as ``(a,b,...)``."""
    values = np.asarray(x, dtype=float).reshape(-1)
    return "(" + ",".join(f"{v:g}" for v in values) + ")"


def format_result(x, f: ScalarFunction, grad_f: VectorFunction) -> str:
    """Report the computed minimum, ``f`` there and the gradient norm there."""
    point = format_point(x)
    value = float(f(np.asarray(x, dtype=float)))
    grad_norm = float(np.linalg.norm(grad_f(np.asarray(x, dtype=float))))
    return "\n".join(
        [
            f"Computed minimum: {point}",
            f"f {point} = {value:g}",
            f"|| grad_f {point} || = {grad_norm:g}",
        ]
    )


def format_parameters(info: Dict[str, Any]) -> str:
    """Format the dictionary returned by ``DescentMethod.describe()``."""
    lines = []
    for key, value in info.items():
        if key == "initial_condition":
            value = format_point(value)
        lines.append(f"{key}: {value}")
    return "\n".join(lines)


__all__ = ["format_parameters", "format_point", "format_result"]
