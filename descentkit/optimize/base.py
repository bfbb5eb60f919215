"""Iterate loop shared by every descent method.

Each iteration evaluates the gradient at the current point, stops if its norm
is below ``tolerance_r``, lets the concrete method compute the next point and
its step length, and stops if that length is below ``tolerance_s``. Methods
only implement :meth:`DescentMethod._update`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Optional

import numpy as np

from descentkit.logging import get_logger

from .convergence import ConvergenceMonitor
from .core import (
    Array,
    IterationState,
    OptimizeResult,
    Parameters,
    ScalarFunction,
    VectorFunction,
)
from .finite_difference import DifferenceType, gradient
from .step_size import StepRule
from .utils import as_point, norm

logger = get_logger(__name__)

Callback = Callable[[Array, Array], None]


def resolve_gradient(params: Parameters) -> VectorFunction:
    """Return ``params.grad_f``, or a centered finite-difference gradient."""
    if params.grad_f is not None:
        return params.grad_f
    return gradient(params.f, params.fd_step, DifferenceType.CENTERED)


class DescentMethod:
    """Base class for the first-order descent methods.

    Args:
        params: Problem and tuning parameters for the run.
        rule: Step-size rule; must be one of ``supported_rules``.
        history: Record every iterate in ``OptimizeResult.history``.
        callback: Called as ``callback(x, grad)`` after every update with
            copies of the new point and the gradient that produced it.
    """

    name = "descent"
    supported_rules: tuple[StepRule, ...] = ()
    default_rule: StepRule = StepRule.CONSTANT

    def __init__(
        self,
        params: Parameters,
        rule: StepRule | str | None = None,
        history: bool = False,
        callback: Optional[Callback] = None,
    ):
        rule = self.default_rule if rule is None else StepRule.coerce(rule)
        if rule not in self.supported_rules:
            supported = [r.value for r in self.supported_rules]
            raise ValueError(
                f"{type(self).__name__} does not support step rule "
                f"'{rule.value}'. Supported rules: {supported}"
            )
        self.params = params
        self.rule = rule
        self.history = history
        self.callback = callback

    def __call__(
        self,
        f: Optional[ScalarFunction] = None,
        grad_f: Optional[VectorFunction] = None,
        initial_condition: Optional[Array] = None,
    ) -> OptimizeResult:
        """Run to completion, optionally on a new problem.

        Any of ``f``, ``grad_f`` and ``initial_condition`` given here replace
        the stored ones before the run; all other parameters are kept.
        """
        updates: dict[str, Any] = {}
        if f is not None:
            updates["f"] = f
            updates["grad_f"] = grad_f
        elif grad_f is not None:
            updates["grad_f"] = grad_f
        if initial_condition is not None:
            updates["initial_condition"] = initial_condition
        if updates:
            self.params = replace(self.params, **updates)
        return self.run()

    def describe(self) -> dict[str, Any]:
        """Summary of the method and of the parameters it uses."""
        p = self.params
        return {
            "method": self.name,
            "step_rule": self.rule.value,
            "initial_condition": p.initial_condition.tolist(),
            "tolerance_r": p.tolerance_r,
            "tolerance_s": p.tolerance_s,
            "initial_step": p.initial_step,
            "max_iterations": p.max_iterations,
            "minimum_step": p.minimum_step,
        }

    def _initial_state(self, x: Array) -> IterationState:
        return IterationState(alpha=self.params.initial_step)

    def _gradient(self, x: Array, state: IterationState) -> Array:
        state.njev += 1
        return np.asarray(state.grad_f(x), dtype=float).reshape(-1)

    def _update(
        self, x: Array, grad: Array, residual: float, state: IterationState
    ) -> tuple[Array, float]:
        """Return the next point and the step length tested against ``tolerance_s``."""
        raise NotImplementedError

    def run(self) -> OptimizeResult:
        """Run from ``params.initial_condition`` with fresh iteration state."""
        p = self.params
        x = as_point(p.initial_condition)
        state = self._initial_state(x)
        state.grad_f = resolve_gradient(p)
        monitor = ConvergenceMonitor(p.tolerance_r, p.tolerance_s, p.max_iterations)
        hist: list[Array] = [x.copy()] if self.history else []
        grad_norm = float("nan")

        for k in range(p.max_iterations):
            state.iteration = k
            grad = self._gradient(x, state)
            grad_norm = norm(grad)
            if monitor.check_residual(grad_norm, k):
                break
            x_new, step = self._update(x, grad, grad_norm, state)
            x = x_new
            if self.callback is not None:
                self.callback(x.copy(), grad.copy())
            if self.history:
                hist.append(x.copy())
            logger.debug(
                "%s iteration %d: alpha=%.6e residual=%.6e step=%.6e",
                self.name,
                k,
                state.alpha,
                grad_norm,
                step,
            )
            if monitor.check_step(step, k + 1):
                break
        else:
            monitor.exhausted()

        fx = float(p.f(x))
        state.nfev += 1
        return OptimizeResult(
            x=x,
            fun=fx,
            nit=monitor.iterations,
            status=monitor.status,
            message=monitor.message,
            grad_norm=grad_norm,
            nfev=state.nfev,
            njev=state.njev,
            history=hist,
        )


__all__ = ["DescentMethod", "resolve_gradient"]
