"""Adam: adaptive moment estimation.

.. math::

    m_t = \\beta_1 m_{t-1} + (1 - \\beta_1) g_t, \\qquad
    v_t = \\beta_2 v_{t-1} + (1 - \\beta_2) g_t^2

    \\hat m_t = m_t / (1 - \\beta_1^t), \\qquad \\hat v_t = v_t / (1 - \\beta_2^t)

    x_{t+1} = x_t - \\alpha_t \\hat m_t / (\\sqrt{\\hat v_t} + \\epsilon)

Under the ADAPTIVE rule ``alpha_t = alpha0 * sqrt(1 - beta2^t) / (1 - beta1^t)``
is recomputed every iteration while ``alpha_t > minimum_step``; under
CONSTANT ``alpha_t = alpha0``. The raw gradient is used throughout.
"""

from __future__ import annotations

from typing import Optional

from .base import Callback, DescentMethod
from .core import EPSILON, Array, IterationState, OptimizeResult, Parameters
from .momentum import AdamMoments
from .step_size import StepRule, adam_step_size
from .utils import norm


class Adam(DescentMethod):
    name = "adam"
    supported_rules = (StepRule.ADAPTIVE, StepRule.CONSTANT)
    default_rule = StepRule.ADAPTIVE

    def describe(self) -> dict:
        info = super().describe()
        info["beta1"] = self.params.beta1
        info["beta2"] = self.params.beta2
        return info

    def _initial_state(self, x: Array) -> IterationState:
        state = super()._initial_state(x)
        state.moments = AdamMoments(x.size, self.params.beta1, self.params.beta2)
        state.beta1_power = self.params.beta1
        state.beta2_power = self.params.beta2
        return state

    def _update(
        self, x: Array, grad: Array, residual: float, state: IterationState
    ) -> tuple[Array, float]:
        p = self.params
        state.moments.update(grad)
        if self.rule is StepRule.ADAPTIVE and state.alpha > p.minimum_step:
            state.alpha = adam_step_size(
                p.initial_step, state.beta1_power, state.beta2_power
            )
        x_new = x - state.alpha * state.moments.direction(
            state.beta1_power, state.beta2_power, EPSILON
        )
        state.beta1_power *= p.beta1
        state.beta2_power *= p.beta2
        return x_new, norm(x_new - x)


def adam(
    params: Parameters,
    rule: StepRule | str = StepRule.ADAPTIVE,
    history: bool = False,
    callback: Optional[Callback] = None,
) -> OptimizeResult:
    """Run :class:`Adam` once and return its result."""
    return Adam(params, rule, history=history, callback=callback).run()


__all__ = ["Adam", "adam"]
