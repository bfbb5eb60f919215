"""Tests for running configured descent methods."""

from __future__ import annotations

import json
import logging
from io import StringIO
from pathlib import Path

import numpy as np
import pytest

from descentkit import (
    GradientDescent,
    Parameters,
    configure_logging,
    parse_config,
    run,
    run_config,
    run_file,
)
from descentkit.optimize import Method

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def captured():
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)


def test_run_logs_parameters_and_report(captured) -> None:
    params = Parameters(
        f=lambda x: float(x @ x),
        grad_f=lambda x: 2 * x,
        initial_condition=np.array([1.0, -1.0]),
    )
    result = run(GradientDescent(params))
    assert result.success
    output = captured.getvalue()
    assert "GRADIENT_DESCENT" in output
    assert "step_rule: armijo" in output
    assert "initial_condition: (1,-1)" in output
    assert "Computed minimum: (0,0)" in output
    assert "Converged in 1 iterations thanks to residual criterion." in output


def test_run_config_default_objective(captured) -> None:
    config = parse_config(
        {"methods": {name: {"enabled": False} for name in ("heavy_ball", "nesterov", "adam")}}
    )
    results = run_config(config)
    assert len(results) == 1
    method_config, result = results[0]
    assert method_config.method is Method.GRADIENT_DESCENT
    assert result.success
    assert "Function to be optimized" in captured.getvalue()


def test_run_file(tmp_path) -> None:
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps(
            {
                "f": "(x[0] - 1)^2 + (x[1] + 2)^2",
                "grad_f": "{2*(x[0] - 1), 2*(x[1] + 2)}",
                "fd": False,
                "methods": {"adam": {"enabled": False}},
            }
        ),
        encoding="utf-8",
    )
    results = run_file(str(path))
    assert [c.method for c, _ in results] == [
        Method.GRADIENT_DESCENT,
        Method.HEAVY_BALL,
        Method.NESTEROV,
    ]
    assert results[0][1].success
    assert np.allclose(results[0][1].x, [1.0, -2.0], atol=1e-6)


def test_shipped_example_configuration() -> None:
    results = run_file(str(ROOT / "examples" / "data.json"))
    assert len(results) == 4
    gd = results[0][1]
    assert gd.success
    assert gd.x[0] == pytest.approx(-0.5416, abs=1e-3)
