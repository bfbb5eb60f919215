"""Run configured descent methods and log their reports."""

from __future__ import annotations

from typing import List, Tuple

from descentkit.io.config import RunConfig, load_config
from descentkit.io.report import format_parameters, format_result
from descentkit.logging import get_logger
from descentkit.optimize.base import DescentMethod, resolve_gradient
from descentkit.optimize.core import OptimizeResult
from descentkit.optimize.factory import MethodConfig, create_method

logger = get_logger(__name__)


def run(method: DescentMethod) -> OptimizeResult:
    """Run one solver, logging its parameters and the final report at INFO."""
    logger.info("%s\n%s", method.name.upper(), format_parameters(method.describe()))
    result = method.run()
    grad_f = resolve_gradient(method.params)
    logger.info(
        "%s\n%s", result.message, format_result(result.x, method.params.f, grad_f)
    )
    return result


def run_config(config: RunConfig) -> List[Tuple[MethodConfig, OptimizeResult]]:
    """Run every enabled method of ``config`` in turn."""
    results = []
    for method_config, params in config.runs:
        solver = create_method(method_config, params)
        results.append((method_config, run(solver)))
    return results


def run_file(path: str) -> List[Tuple[MethodConfig, OptimizeResult]]:
    """Load a JSON configuration and run it."""
    return run_config(load_config(path))


__all__ = ["run", "run_config", "run_file"]
