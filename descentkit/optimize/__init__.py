"""First-order descent methods and finite-difference derivatives.

Example
-------
>>> import numpy as np
>>> from descentkit.optimize import Parameters, StepRule, gradient_descent
>>> def f(x):
...     return (x[0] - 1.0) ** 2 + 2.0 * (x[1] + 0.5) ** 2
>>> def grad_f(x):
...     return np.array([2.0 * (x[0] - 1.0), 4.0 * (x[1] + 0.5)])
>>> params = Parameters(f=f, grad_f=grad_f, initial_condition=np.zeros(2))
>>> res = gradient_descent(params, rule=StepRule.ARMIJO)
>>> bool(res.success)
True
"""

from .adam import Adam, adam
from .base import DescentMethod, resolve_gradient
from .convergence import ConvergenceMonitor
from .core import (
    EPSILON,
    IterationState,
    OptimizeResult,
    Parameters,
    Status,
)
from .factory import Method, MethodConfig, create_method, minimize
from .finite_difference import DifferenceType, gradient, hessian, opposite, partial
from .gradient import GradientDescent, gradient_descent
from .heavy_ball import HeavyBall, heavy_ball
from .line_search import backtracking_armijo
from .momentum import (
    AdamMoments,
    MomentumStrategy,
    heavy_ball_velocity,
    momentum_coefficient,
    nesterov_lookahead,
)
from .nesterov import Nesterov, nesterov
from .step_size import (
    StepRule,
    adam_step_size,
    decay_step,
    exponential_decay,
    inverse_decay,
)
from .utils import as_point, norm, normalize, squared_norm

__all__ = [
    "Adam",
    "AdamMoments",
    "ConvergenceMonitor",
    "DescentMethod",
    "DifferenceType",
    "EPSILON",
    "GradientDescent",
    "HeavyBall",
    "IterationState",
    "Method",
    "MethodConfig",
    "MomentumStrategy",
    "Nesterov",
    "OptimizeResult",
    "Parameters",
    "Status",
    "StepRule",
    "adam",
    "adam_step_size",
    "as_point",
    "backtracking_armijo",
    "create_method",
    "decay_step",
    "exponential_decay",
    "gradient",
    "gradient_descent",
    "heavy_ball",
    "heavy_ball_velocity",
    "hessian",
    "inverse_decay",
    "minimize",
    "momentum_coefficient",
    "nesterov",
    "nesterov_lookahead",
    "norm",
    "normalize",
    "opposite",
    "partial",
    "resolve_gradient",
    "squared_norm",
]
