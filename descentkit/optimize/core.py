"""Core interfaces shared across the descent algorithms."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

if TYPE_CHECKING:
    from .momentum import AdamMoments

Array = np.ndarray
ScalarFunction = Callable[[Array], float]
VectorFunction = Callable[[Array], Array]
MatrixFunction = Callable[[Array], Array]

EPSILON = 1e-8


class Status(Enum):
    """Which stopping condition ended a run."""

    RUNNING = "running"
    CONVERGED_RESIDUAL = "converged_residual"
    CONVERGED_STEP = "converged_step"
    MAX_ITERATIONS = "max_iterations"

    @property
    def converged(self) -> bool:
        return self in (Status.CONVERGED_RESIDUAL, Status.CONVERGED_STEP)


@dataclass(frozen=True)
class Parameters:
    """
    Everything a descent run needs, fixed for the duration of the run.

    The shared fields are used by every method. ``sigma`` (Armijo), ``mu``
    (step decay), ``eta`` (momentum memory) and ``beta1``/``beta2`` (Adam
    moments) are simply ignored by methods that do not use them.

    Args:
        f: Objective to minimize.
        grad_f: Gradient of ``f``. When None, a centered finite-difference
            gradient with step ``fd_step`` is synthesized at run time.
        initial_condition: Starting point.
        tolerance_r: Stop when the gradient norm falls below this value.
        tolerance_s: Stop when the step length falls below this value.
        initial_step: Initial step size ``alpha0``.
        max_iterations: Iteration cap.
        minimum_step: Floor for the Armijo backtracking and the decay rules.
    """

    f: ScalarFunction
    initial_condition: Array
    grad_f: Optional[VectorFunction] = None
    tolerance_r: float = 1e-6
    tolerance_s: float = 1e-6
    initial_step: float = 1.0
    max_iterations: int = 1000
    minimum_step: float = 1e-2
    sigma: float = 0.1
    mu: float = 0.2
    eta: float = 0.9
    beta1: float = 0.9
    beta2: float = 0.999
    fd_step: float = 1e-6

    def __post_init__(self) -> None:
        x0 = np.asarray(self.initial_condition, dtype=float)
        if x0.ndim != 1 or x0.size == 0:
            raise ValueError(
                "initial_condition must be a non-empty 1-D vector, "
                f"got shape {x0.shape}."
            )
        object.__setattr__(self, "initial_condition", x0.copy())
        for name in ("tolerance_r", "tolerance_s", "initial_step", "minimum_step"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}.")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be an integer >= 1, got {self.max_iterations}."
            )
        object.__setattr__(self, "max_iterations", int(self.max_iterations))
        for name in ("beta1", "beta2"):
            value = getattr(self, name)
            if not (0 < value < 1):
                raise ValueError(f"{name} must lie in (0, 1), got {value}.")
        if self.sigma <= 0:
            raise ValueError(f"sigma must be positive, got {self.sigma}.")
        if self.mu < 0:
            raise ValueError(f"mu must be non-negative, got {self.mu}.")
        if self.eta < 0:
            raise ValueError(f"eta must be non-negative, got {self.eta}.")
        if self.fd_step <= 0:
            raise ValueError(f"fd_step must be positive, got {self.fd_step}.")

    @property
    def dim(self) -> int:
        return int(self.initial_condition.size)


@dataclass
class IterationState:
    """Per-run scratch space. Created when a run starts, dropped when it ends."""

    alpha: float
    iteration: int = 0
    grad_f: Optional[VectorFunction] = None
    velocity: Optional[Array] = None
    lookahead: Optional[Array] = None
    moments: Optional[AdamMoments] = None
    beta1_power: float = 1.0
    beta2_power: float = 1.0
    nfev: int = 0
    njev: int = 0


@dataclass
class OptimizeResult:
    """Result returned by every descent method.

    ``grad_norm`` is the norm of the last gradient the method evaluated and
    ``nfev`` counts the objective evaluations made by the method itself
    (Armijo backtracking and the final value), not those hidden inside a
    finite-difference ``grad_f``.
    """

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int
    njev: int
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status.converged


__all__ = [
    "Array",
    "EPSILON",
    "IterationState",
    "MatrixFunction",
    "OptimizeResult",
    "Parameters",
    "ScalarFunction",
    "Status",
    "VectorFunction",
]
