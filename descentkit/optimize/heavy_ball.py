"""Heavy-ball (Polyak) momentum descent."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .base import Callback, DescentMethod
from .core import Array, IterationState, OptimizeResult, Parameters
from .momentum import MomentumStrategy, heavy_ball_velocity, momentum_coefficient
from .step_size import StepRule, decay_step
from .utils import norm


class HeavyBall(DescentMethod):
    """Velocity ``d <- c * d - alpha * g_hat`` followed by ``x <- x + d``.

    ``g_hat`` is the normalized gradient and ``c`` is chosen by the
    :class:`MomentumStrategy`. The step length tested against
    ``tolerance_s`` is ``||d||``.
    """

    name = "heavy_ball"
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
        state.velocity = np.zeros_like(x)
        return state

    def _update(
        self, x: Array, grad: Array, residual: float, state: IterationState
    ) -> tuple[Array, float]:
        p = self.params
        direction = grad / residual
        state.alpha = decay_step(self.rule, state.alpha, p, state.iteration, residual)
        coefficient = momentum_coefficient(self.strategy, state.alpha, p.eta)
        state.velocity = heavy_ball_velocity(
            state.velocity, direction, state.alpha, coefficient
        )
        return x + state.velocity, norm(state.velocity)


def heavy_ball(
    params: Parameters,
    rule: StepRule | str = StepRule.EXPONENTIAL,
    strategy: MomentumStrategy | str = MomentumStrategy.CONSTANT,
    history: bool = False,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Run :class:`HeavyBall` once and return its result."""
    return HeavyBall(
        params, rule, strategy, history=history, callback=callback
    ).run()


__all__ = ["HeavyBall", "heavy_ball"]
