"""Step-size rules.

============  ==============================================================
Rule          Update of ``alpha``
============  ==============================================================
EXPONENTIAL   ``alpha * exp(-mu)``
INVERSE       ``alpha0 / (1 + mu * k / ||g||)`` at iteration ``k``
ARMIJO        backtracking from ``alpha0`` (see :mod:`.line_search`)
ADAPTIVE      ``alpha0 * sqrt(1 - beta2^t) / (1 - beta1^t)`` (Adam)
CONSTANT      ``alpha0`` for the whole run
============  ==============================================================

For the momentum methods and Adam the decay rules only fire while
``alpha > minimum_step``; once the step has dropped to the floor it is kept
as is.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

from .core import Parameters


class StepRule(Enum):
    """How the step size evolves during a run."""

    EXPONENTIAL = "exponential"
    INVERSE = "inverse"
    ARMIJO = "armijo"
    ADAPTIVE = "adaptive"
    CONSTANT = "constant"

    @classmethod
    def coerce(cls, value: Union["StepRule", str]) -> "StepRule":
        """Accept a member, its value, or the labels used in config files."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        supported = sorted({member.value for member in cls} | set(_ALIASES))
        raise ValueError(f"Unsupported step rule {value!r}. Supported: {supported}")


_ALIASES = {
    "exponential decay": StepRule.EXPONENTIAL,
    "inverse decay": StepRule.INVERSE,
    "armijo rule": StepRule.ARMIJO,
    "dynamic": StepRule.ADAPTIVE,
}


def exponential_decay(alpha: float, mu: float) -> float:
    return alpha * math.exp(-mu)


def inverse_decay(alpha0: float, mu: float, iteration: int, residual: float) -> float:
    # residual is the gradient norm already checked against tolerance_r
    return alpha0 / (1 + mu * iteration * (1 / residual))


def adam_step_size(alpha0: float, beta1_power: float, beta2_power: float) -> float:
    """Bias-corrected Adam rate, with ``beta*_power`` equal to ``beta*^t``."""
    return alpha0 * math.sqrt(1 - beta2_power) / (1 - beta1_power)


def decay_step(
    rule: StepRule,
    alpha: float,
    params: Parameters,
    iteration: int,
    residual: float,
    guarded: bool = True,
) -> float:
    """Apply an EXPONENTIAL or INVERSE decay.

    With ``guarded`` the decay only fires while ``alpha > minimum_step``.
    Plain gradient descent decays unguarded so that its normalized steps keep
    shrinking below the floor. CONSTANT returns ``alpha`` unchanged; ARMIJO
    and ADAPTIVE need extra state and are handled by their optimizers.
    """
    if rule is StepRule.CONSTANT or (guarded and alpha <= params.minimum_step):
        return alpha
    if rule is StepRule.EXPONENTIAL:
        return exponential_decay(alpha, params.mu)
    if rule is StepRule.INVERSE:
        return inverse_decay(params.initial_step, params.mu, iteration, residual)
    raise ValueError(f"decay_step does not handle {rule.value!r}")


__all__ = [
    "StepRule",
    "adam_step_size",
    "decay_step",
    "exponential_decay",
    "inverse_decay",
]
