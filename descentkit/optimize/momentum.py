"""Momentum updates for the heavy-ball, Nesterov and Adam methods."""

from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np

from .core import EPSILON, Array


class MomentumStrategy(Enum):
    """How the memory coefficient of heavy-ball and Nesterov is chosen.

    DYNAMIC uses ``1 - alpha`` while ``alpha < 1`` and falls back to ``eta``
    otherwise; CONSTANT always uses ``eta``.
    """

    DYNAMIC = "dynamic"
    CONSTANT = "constant"

    @classmethod
    def coerce(cls, value: Union["MomentumStrategy", str]) -> "MomentumStrategy":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        supported = [member.value for member in cls]
        raise ValueError(
            f"Unsupported momentum strategy {value!r}. Supported: {supported}"
        )


def momentum_coefficient(strategy: MomentumStrategy, alpha: float, eta: float) -> float:
    if strategy is MomentumStrategy.DYNAMIC and alpha < 1:
        return 1.0 - alpha
    return eta


def heavy_ball_velocity(velocity: Array, grad: Array, alpha: float, coefficient: float) -> Array:
    """``d <- c * d - alpha * g``."""
    return coefficient * velocity - alpha * grad


def nesterov_lookahead(x: Array, x_prev: Array, coefficient: float) -> Array:
    """``y <- x + c * (x - x_prev)``."""
    return x + coefficient * (x - x_prev)


class AdamMoments:
    """Exponential moving averages of the gradient and its square."""

    def __init__(self, dim: int, beta1: float, beta2: float):
        self.beta1 = beta1
        self.beta2 = beta2
        self.m = np.zeros(dim)
        self.v = np.zeros(dim)

    def update(self, grad: Array) -> None:
        self.m = self.beta1 * self.m + (1 - self.beta1) * grad
        self.v = self.beta2 * self.v + (1 - self.beta2) * np.square(grad)

    def corrected(self, beta1_power: float, beta2_power: float) -> tuple[Array, Array]:
        """Bias-corrected ``(m_hat, v_hat)`` given ``beta1^t`` and ``beta2^t``."""
        return self.m / (1 - beta1_power), self.v / (1 - beta2_power)

    def direction(
        self, beta1_power: float, beta2_power: float, epsilon: float = EPSILON
    ) -> Array:
        """``m_hat / (sqrt(v_hat) + epsilon)``, the step before scaling by alpha."""
        m_hat, v_hat = self.corrected(beta1_power, beta2_power)
        return m_hat / (np.sqrt(v_hat) + epsilon)


__all__ = [
    "AdamMoments",
    "MomentumStrategy",
    "heavy_ball_velocity",
    "momentum_coefficient",
    "nesterov_lookahead",
]
