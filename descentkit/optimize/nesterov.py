"""Nesterov accelerated gradient."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .base import Callback, DescentMethod
from .core import Array, IterationState, OptimizeResult, Parameters
from .momentum import MomentumStrategy, momentum_coefficient, nesterov_lookahead
from .step_size import StepRule, decay_step
from .utils import norm, normalize


class Nesterov(DescentMethod):
    """Descent from a lookahead point ``y``.

    The residual is measured at ``x``, the point that is returned. The update
    is ``x <- y - alpha * g_hat(y)`` with the normalized gradient at ``y``,
    then ``y <- x + c * (x - x_prev)``.
    """

    name = "nesterov"
    supported_rules = (StepRule.EXPONENTIAL, StepRule.INVERSE, StepRule.CONSTANT)
    default_rule = StepRule.EXPONENTIAL

    def __init__(
        self,
        params: Parameters,
        rule: StepRule | str | None = None,
        strategy: MomentumStrategy | str = MomentumStrategy.CONSTANT,
        history: bool = False,
        callback: Optional[Callback] = None,
    ):
        super().__init__(params, rule, history=history, callback=callback)
        self.strategy = MomentumStrategy.coerce(strategy)

    def describe(self) -> dict:
        info = super().describe()
        info["momentum_strategy"] = self.strategy.value
        info["mu"] = self.params.mu
        info["eta"] = self.params.eta
        return info

    def _initial_state(self, x: Array) -> IterationState:
        state = super()._initial_state(x)
        state.lookahead = x.copy()
        return state

    def _update(
        self, x: Array, grad: Array, residual: float, state: IterationState
    ) -> tuple[Array, float]:
        p = self.params
        y = state.lookahead
        # y coincides with x on the first iteration and whenever x stalls
        grad_y = grad if np.array_equal(y, x) else self._gradient(y, state)
        direction = normalize(grad_y)
        state.alpha = decay_step(self.rule, state.alpha, p, state.iteration, residual)
        x_new = y - state.alpha * direction
        coefficient = momentum_coefficient(self.strategy, state.alpha, p.eta)
        state.lookahead = nesterov_lookahead(x_new, x, coefficient)
        return x_new, norm(x_new - x)


def nesterov(
    params: Parameters,
    rule: StepRule | str = StepRule.EXPONENTIAL,
    strategy: MomentumStrategy | str = MomentumStrategy.CONSTANT,
    history: bool = False,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Run :class:`Nesterov` once and return its result."""
    return Nesterov(params, rule, strategy, history=history, callback=callback).run()


__all__ = ["Nesterov", "nesterov"]
