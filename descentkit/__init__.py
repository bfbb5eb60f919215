"""descentkit - first-order descent methods with finite-difference derivatives."""

__version__ = "0.1.0"

# Configuration, expressions and reports
from .io import (
    RunConfig,
    format_parameters,
    format_result,
    load_config,
    parse_config,
    scalar_function,
    vector_function,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Descent methods
from .optimize import (
    Adam,
    DescentMethod,
    DifferenceType,
    GradientDescent,
    HeavyBall,
    Method,
    MethodConfig,
    MomentumStrategy,
    Nesterov,
    OptimizeResult,
    Parameters,
    Status,
    StepRule,
    adam,
    create_method,
    gradient,
    gradient_descent,
    heavy_ball,
    hessian,
    minimize,
    nesterov,
    opposite,
)
from .runner import run, run_config, run_file

__all__ = [
    "Adam",
    "DescentMethod",
    "DifferenceType",
    "GradientDescent",
    "HeavyBall",
    "Method",
    "MethodConfig",
    "MomentumStrategy",
    "Nesterov",
    "OptimizeResult",
    "Parameters",
    "RunConfig",
    "Status",
    "StepRule",
    "__version__",
    "adam",
    "configure_logging",
    "create_method",
    "format_parameters",
    "format_result",
    "get_logger",
    "gradient",
    "gradient_descent",
    "heavy_ball",
    "hessian",
    "load_config",
    "minimize",
    "nesterov",
    "opposite",
    "parse_config",
    "run",
    "run_config",
    "run_file",
    "scalar_function",
    "set_log_level",
    "vector_function",
]
