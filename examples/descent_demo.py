"""
Example: First-order descent methods in descentkit

Minimizes f(x) = 4 x0^4 + 2 x1^2 + 2 x0 x1 + 2 x0 with each descent method,
first through the Python API and then from the JSON configuration in
examples/data.json (or a path given on the command line).
"""

import logging
import sys
from pathlib import Path

import numpy as np

from descentkit import (
    DifferenceType,
    Parameters,
    configure_logging,
    format_result,
    gradient,
    hessian,
    minimize,
    run_file,
)

DATA = Path(__file__).resolve().parent / "data.json"


def f(x):
    return 4 * x[0] ** 4 + 2 * x[1] ** 2 + 2 * x[0] * x[1] + 2 * x[0]


def example_api():
    """Example: gradient descent with a finite-difference gradient."""
    print("=" * 60)
    print("Example 1: Gradient descent with Armijo backtracking")
    print("=" * 60)

    grad_f = gradient(f, 1e-2, DifferenceType.CENTERED)
    params = Parameters(f=f, grad_f=grad_f, initial_condition=np.zeros(2))
    result = minimize(params, "gradient_descent", "Armijo rule")
    print(result.message)
    print(format_result(result.x, f, grad_f))
    print(f"Hessian at minimum:\n{hessian(f, 1e-3)(result.x)}")
    print()


def example_momentum():
    """Example: heavy-ball, Nesterov and Adam on the same problem."""
    print("=" * 60)
    print("Example 2: Momentum methods")
    print("=" * 60)

    params = Parameters(
        f=f,
        initial_condition=np.zeros(2),
        initial_step=0.1,
        minimum_step=1e-12,
        max_iterations=5000,
    )
    runs = (
        ("heavy_ball", "Inverse decay"),
        ("nesterov", "Inverse decay"),
        ("adam", "Constant"),
    )
    for method, rule in runs:
        result = minimize(params, method, rule)
        print(f"{method:>10}: x = {result.x}, f = {result.fun:.6f} ({result.message})")
    print()


def example_config(path):
    """Example: every method configured from a JSON file."""
    print("=" * 60)
    print(f"Example 3: Runs configured in {Path(path).name}")
    print("=" * 60)

    configure_logging(level=logging.INFO, stream=sys.stdout)
    try:
        results = run_file(str(path))
    finally:
        configure_logging(level=logging.WARNING)
    converged = sum(result.success for _, result in results)
    print(f"{converged}/{len(results)} methods converged")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("descentkit - First-Order Descent Examples")
    print("=" * 60 + "\n")

    example_api()
    example_momentum()
    example_config(sys.argv[1] if len(sys.argv) > 1 else DATA)

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
