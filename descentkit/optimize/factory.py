"""Factory resolving a method name and its strategies into a solver instance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .adam import Adam
from .base import DescentMethod
from .core import OptimizeResult, Parameters
from .gradient import GradientDescent
from .heavy_ball import HeavyBall
from .momentum import MomentumStrategy
from .nesterov import Nesterov
from .step_size import StepRule


class Method(Enum):
    """Supported descent methods."""

    GRADIENT_DESCENT = "gradient_descent"
    HEAVY_BALL = "heavy_ball"
    NESTEROV = "nesterov"
    ADAM = "adam"

    @classmethod
    def coerce(cls, value: Union["Method", str]) -> "Method":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        supported = [member.value for member in cls]
        raise ValueError(
            f"Unsupported method name '{value}'. Supported names: {supported}"
        )


_CLASSES: dict[Method, type[DescentMethod]] = {
    Method.GRADIENT_DESCENT: GradientDescent,
    Method.HEAVY_BALL: HeavyBall,
    Method.NESTEROV: Nesterov,
    Method.ADAM: Adam,
}

_MOMENTUM_METHODS = (Method.HEAVY_BALL, Method.NESTEROV)


@dataclass(frozen=True)
class MethodConfig:
    """
    Which descent method to run and with which strategies.

    Names are accepted case-insensitively, either as enum values
    (``"exponential"``, ``"dynamic"``) or as the labels used in
    configuration files (``"Exponential decay"``, ``"Armijo rule"``).
    ``strategy`` only applies to heavy-ball and Nesterov and is ignored
    otherwise.

    Args:
        method: Method name or :class:`Method`.
        rule: Step-size rule. Defaults to the method's own default.
        strategy: Momentum strategy. Defaults to CONSTANT.
    """

    method: Method
    rule: Optional[StepRule] = None
    strategy: MomentumStrategy = MomentumStrategy.CONSTANT

    def __post_init__(self) -> None:
        method = Method.coerce(self.method)
        object.__setattr__(self, "method", method)
        if self.rule is None:
            rule = _CLASSES[method].default_rule
        else:
            # for Adam, "Dynamic" is the label of the ADAPTIVE rule
            rule = StepRule.coerce(self.rule)
        object.__setattr__(self, "rule", rule)
        object.__setattr__(self, "strategy", MomentumStrategy.coerce(self.strategy))
        supported = _CLASSES[method].supported_rules
        if rule not in supported:
            raise ValueError(
                f"Step rule '{rule.value}' is not supported by {method.value}. "
                f"Supported rules: {[r.value for r in supported]}"
            )


def create_method(
    config: MethodConfig,
    params: Parameters,
    history: bool = False,
    callback=None,
) -> DescentMethod:
    """
    Create a descent method from a configuration.

    The variant is resolved here, once; the returned solver carries no
    further dispatch on the configuration.

    Args:
        config: Method and strategies.
        params: Problem and tuning parameters.
        history: Record every iterate.
        callback: Per-iteration callback, see :class:`DescentMethod`.

    Returns:
        A ready-to-run :class:`DescentMethod`.
    """
    cls = _CLASSES[config.method]
    if config.method in _MOMENTUM_METHODS:
        return cls(
            params,
            config.rule,
            config.strategy,
            history=history,
            callback=callback,
        )
    return cls(params, config.rule, history=history, callback=callback)


def minimize(
    params: Parameters,
    method: Method | str = Method.GRADIENT_DESCENT,
    rule: StepRule | str | None = None,
    strategy: MomentumStrategy | str = MomentumStrategy.CONSTANT,
    history: bool = False,
) -> OptimizeResult:
    """Build the requested method and run it once."""
    config = MethodConfig(method=method, rule=rule, strategy=strategy)
    return create_method(config, params, history=history).run()


__all__ = ["Method", "MethodConfig", "create_method", "minimize"]
