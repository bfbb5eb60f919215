"""Stopping criteria shared by every descent method.

A run starts in :attr:`Status.RUNNING` and ends in exactly one of three
terminal states: the gradient norm dropped below ``tolerance_r``, the step
length dropped below ``tolerance_s``, or the iteration cap was reached.
Reaching the cap is reported, never raised.
"""

from __future__ import annotations

from descentkit.logging import get_logger

from .core import Status

logger = get_logger(__name__)


class ConvergenceMonitor:
    """Tracks the convergence state of one run."""

    def __init__(self, tolerance_r: float, tolerance_s: float, max_iterations: int):
        self.tolerance_r = float(tolerance_r)
        self.tolerance_s = float(tolerance_s)
        self.max_iterations = int(max_iterations)
        self.status = Status.RUNNING
        self.iterations = 0

    @property
    def done(self) -> bool:
        return self.status is not Status.RUNNING

    @property
    def message(self) -> str:
        if self.status is Status.CONVERGED_RESIDUAL:
            return (
                f"Converged in {self.iterations} iterations thanks to residual criterion."
            )
        if self.status is Status.CONVERGED_STEP:
            return (
                f"Converged in {self.iterations} iterations thanks to step size criterion."
            )
        if self.status is Status.MAX_ITERATIONS:
            return f"Not converged (max_iterations = {self.max_iterations})."
        return "Running."

    def _finish(self, status: Status, iteration: int) -> None:
        self.status = status
        self.iterations = iteration
        if status.converged:
            logger.info(self.message)
        else:
            logger.warning(self.message)

    def check_residual(self, residual: float, iteration: int) -> bool:
        """Return True (and stop) if ``residual < tolerance_r``."""
        if self.done:
            return True
        if residual < self.tolerance_r:
            self._finish(Status.CONVERGED_RESIDUAL, iteration)
            return True
        return False

    def check_step(self, step: float, iteration: int) -> bool:
        """Return True (and stop) if ``step < tolerance_s``."""
        if self.done:
            return True
        if step < self.tolerance_s:
            self._finish(Status.CONVERGED_STEP, iteration)
            return True
        return False

    def exhausted(self) -> None:
        """Mark the run as having hit the iteration cap."""
        if not self.done:
            self._finish(Status.MAX_ITERATIONS, self.max_iterations)


__all__ = ["ConvergenceMonitor"]
