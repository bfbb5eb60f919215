"""Plain gradient descent with exponential, inverse or Armijo step sizes."""

from __future__ import annotations

from typing import Optional

from .base import Callback, DescentMethod
from .core import Array, IterationState, OptimizeResult, Parameters
from .line_search import backtracking_armijo
from .step_size import StepRule, decay_step
from .utils import norm


class GradientDescent(DescentMethod):
    """``x <- x - alpha * g``.

    Under EXPONENTIAL and INVERSE the gradient is normalized before the
    update and ``alpha`` decays every iteration. Under ARMIJO the raw
    gradient is used, because its magnitude enters the sufficient-decrease
    test, and ``alpha`` restarts from ``initial_step`` every iteration.
    """

    name = "gradient_descent"
    supported_rules = (StepRule.EXPONENTIAL, StepRule.INVERSE, StepRule.ARMIJO)
    default_rule = StepRule.ARMIJO

    def describe(self) -> dict:
        info = super().describe()
        info["mu"] = self.params.mu
        info["sigma"] = self.params.sigma
        return info

    def _update(
        self, x: Array, grad: Array, residual: float, state: IterationState
    ) -> tuple[Array, float]:
        p = self.params
        if self.rule is StepRule.ARMIJO:
            state.alpha, nfev = backtracking_armijo(
                p.f,
                x,
                grad,
                alpha0=p.initial_step,
                sigma=p.sigma,
                minimum_step=p.minimum_step,
            )
            state.nfev += nfev
            direction = grad
        else:
            direction = grad / residual
            state.alpha = decay_step(
                self.rule, state.alpha, p, state.iteration, residual, guarded=False
            )
        x_new = x - state.alpha * direction
        return x_new, norm(x_new - x)


def gradient_descent(
    params: Parameters,
    rule: StepRule | str = StepRule.ARMIJO,
    history: bool = False,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Run :class:`GradientDescent` once and return its result."""
    return GradientDescent(params, rule, history=history, callback=callback).run()


__all__ = ["GradientDescent", "gradient_descent"]
