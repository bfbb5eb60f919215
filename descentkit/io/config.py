"""JSON configuration for descent runs.

Schema Structure:
    {
        "f": <string>,                      # objective, e.g. "x[0]^2 + x[1]^2"
        "grad_f": <string>,                 # required when "fd" is false
        "fd": <bool>,                       # default true
        "fd_t": <string>,                   # "Forward" | "Backward" | "Centered"
        "h": <number>,                      # default 1e-2
        "initial_condition": [<number>, ...],
        "tolerance_r": <number>, "tolerance_s": <number>,
        "initial_step": <number>, "max_iterations": <integer>,
        "minimum_step": <number>, "sigma": <number>, "mu": <number>,
        "eta": <number>, "beta1": <number>, "beta2": <number>,
        "methods": {                        # optional, all enabled by default
            "gradient_descent": {"enabled": <bool>, "step": <string>, ...},
            "heavy_ball": {"step": <string>, "strategy": <string>, ...},
            "nesterov": {...},
            "adam": {...}
        }
    }

Every numeric parameter may be overridden inside a method section.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from descentkit.logging import get_logger
from descentkit.optimize.core import Parameters, ScalarFunction, VectorFunction
from descentkit.optimize.factory import Method, MethodConfig
from descentkit.optimize.finite_difference import DifferenceType, gradient

from .expression import scalar_function, vector_function

logger = get_logger(__name__)

DEFAULT_OBJECTIVE = "4*x[0]^4 + 2*x[1]^2 + 2*x[0]*x[1] + 2*x[0]"
DEFAULT_FD_STEP = 1e-2

NUMERIC_FIELDS = (
    "tolerance_r",
    "tolerance_s",
    "initial_step",
    "max_iterations",
    "minimum_step",
    "sigma",
    "mu",
    "eta",
    "beta1",
    "beta2",
)

METHOD_DEFAULTS: Dict[str, Dict[str, str]] = {
    "gradient_descent": {"step": "Armijo rule"},
    "heavy_ball": {"step": "Exponential decay", "strategy": "Constant"},
    "nesterov": {"step": "Exponential decay", "strategy": "Constant"},
    "adam": {"step": "Dynamic"},
}


@dataclass
class RunConfig:
    """Parsed configuration: shared parameters plus one entry per enabled method."""

    parameters: Parameters
    runs: List[Tuple[MethodConfig, Parameters]] = field(default_factory=list)
    expression: Optional[str] = None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_numbers(section: dict, where: str) -> None:
    for name in NUMERIC_FIELDS:
        if name in section and not _is_number(section[name]):
            raise ValueError(
                f"{where}: field '{name}' must be a number, "
                f"got {type(section[name]).__name__}."
            )
    if "max_iterations" in section and int(section["max_iterations"]) != section["max_iterations"]:
        raise ValueError(f"{where}: field 'max_iterations' must be an integer.")


def validate_config(obj: dict) -> None:
    """
    Validate a configuration object.

    Checks structure and types only; value ranges are enforced when the
    :class:`Parameters` are built.

    Raises
    ------
    ValueError
        If the object does not conform to the schema.
    """
    if not isinstance(obj, dict):
        raise ValueError("Configuration must be a dictionary object.")

    if "f" in obj and not isinstance(obj["f"], str):
        raise ValueError("Field 'f' must be a string.")
    if "grad_f" in obj and not isinstance(obj["grad_f"], str):
        raise ValueError("Field 'grad_f' must be a string.")
    if "fd" in obj and not isinstance(obj["fd"], bool):
        raise ValueError("Field 'fd' must be a boolean.")
    if not obj.get("fd", True) and "grad_f" not in obj:
        raise ValueError("Field 'grad_f' is required when 'fd' is false.")
    if "fd_t" in obj:
        if not isinstance(obj["fd_t"], str):
            raise ValueError("Field 'fd_t' must be a string.")
        DifferenceType.coerce(obj["fd_t"])
    if "h" in obj and not (_is_number(obj["h"]) and obj["h"] > 0):
        raise ValueError(f"Field 'h' must be a positive number, got {obj['h']!r}.")

    if "initial_condition" in obj:
        ic = obj["initial_condition"]
        if not isinstance(ic, list) or len(ic) == 0:
            raise ValueError("Field 'initial_condition' must be a non-empty list.")
        for i, value in enumerate(ic):
            if not _is_number(value):
                raise ValueError(
                    f"initial_condition[{i}] must be a number, got {type(value).__name__}."
                )

    _validate_numbers(obj, "Configuration")

    methods = obj.get("methods", {})
    if not isinstance(methods, dict):
        raise ValueError("Field 'methods' must be a dictionary.")
    for name, section in methods.items():
        if name not in METHOD_DEFAULTS:
            raise ValueError(
                f"Unknown method '{name}'. Supported methods: {list(METHOD_DEFAULTS)}."
            )
        if not isinstance(section, dict):
            raise ValueError(f"Method '{name}' must be a dictionary.")
        if "enabled" in section and not isinstance(section["enabled"], bool):
            raise ValueError(f"Method '{name}': field 'enabled' must be a boolean.")
        for key in ("step", "strategy"):
            if key in section and not isinstance(section[key], str):
                raise ValueError(f"Method '{name}': field '{key}' must be a string.")
        _validate_numbers(section, f"Method '{name}'")


def _build_gradient(obj: dict, f: ScalarFunction, n: int) -> VectorFunction:
    if obj.get("fd", True):
        stencil = DifferenceType.coerce(obj.get("fd_t", "Centered"))
        h = float(obj.get("h", DEFAULT_FD_STEP))
        logger.info("Finite differences type: %s (h = %g)", stencil.value, h)
        return gradient(f, h, stencil)
    return vector_function(obj["grad_f"], n)


def _parameters(section: dict, base: dict, f, grad_f, x0: np.ndarray) -> Parameters:
    values = dict(base)
    values.update({name: section[name] for name in NUMERIC_FIELDS if name in section})
    return Parameters(f=f, grad_f=grad_f, initial_condition=x0, **values)


def parse_config(obj: dict) -> RunConfig:
    """
    Turn a configuration object into ready-to-run parameters.

    Raises
    ------
    ValueError
        If the configuration is invalid, an expression cannot be parsed, or
        a method/step/strategy combination is unsupported.
    """
    validate_config(obj)

    x0 = np.asarray(obj.get("initial_condition", [0.0, 0.0]), dtype=float)
    n = x0.size
    expression = obj.get("f", DEFAULT_OBJECTIVE)
    logger.info("Function to be optimized: %s", expression)
    f = scalar_function(expression, n)
    grad_f = _build_gradient(obj, f, n)

    base = {name: obj[name] for name in NUMERIC_FIELDS if name in obj}
    parameters = _parameters({}, base, f, grad_f, x0)

    runs: List[Tuple[MethodConfig, Parameters]] = []
    methods = obj.get("methods", {})
    for name, defaults in METHOD_DEFAULTS.items():
        section = methods.get(name, {})
        if not section.get("enabled", True):
            continue
        config = MethodConfig(
            method=Method.coerce(name),
            rule=section.get("step", defaults["step"]),
            strategy=section.get("strategy", defaults.get("strategy", "Constant")),
        )
        runs.append((config, _parameters(section, base, f, grad_f, x0)))

    return RunConfig(parameters=parameters, runs=runs, expression=expression)


def load_config(path: str) -> RunConfig:
    """
    Load and parse a JSON configuration file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not valid JSON or the configuration is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            obj = json.load(fh)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {path}: {e}")

    return parse_config(obj)


__all__ = [
    "METHOD_DEFAULTS",
    "RunConfig",
    "load_config",
    "parse_config",
    "validate_config",
]
