import math

import numpy as np
import pytest

from descentkit.optimize import Nesterov, Parameters, Status, StepRule, nesterov


def test_first_two_updates_use_lookahead():
    params = Parameters(
        f=lambda x: float(x @ x),
        grad_f=lambda x: 2 * x,
        initial_condition=np.array([1.0]),
        initial_step=0.5,
        minimum_step=1e-3,
        max_iterations=2,
    )
    res = nesterov(params, StepRule.EXPONENTIAL, "constant", history=True)
    a1 = 0.5 * math.exp(-0.2)
    a2 = 0.5 * math.exp(-0.4)
    assert res.status is Status.MAX_ITERATIONS
    assert np.allclose(res.history[1], [1.0 - a1])
    # y = x1 + 0.9 * (x1 - x0), then x2 = y - a2
    assert np.allclose(res.history[2], [1.0 - 1.9 * a1 - a2])
    # the first lookahead coincides with x0 and reuses its gradient
    assert res.njev == 3


def test_without_memory_lookahead_is_current_point():
    params = Parameters(
        f=lambda x: float(x[0]),
        grad_f=lambda x: np.ones(1),
        initial_condition=np.zeros(1),
        initial_step=0.5,
        minimum_step=0.3,
        eta=0.0,
        max_iterations=5,
    )
    res = nesterov(params, history=True)
    steps = -np.diff(np.concatenate(res.history))
    a = 0.5 * math.exp(-0.2)
    expected = [a, a * math.exp(-0.2), a * math.exp(-0.4)]
    expected += [expected[-1]] * 2
    assert np.allclose(steps, expected)
    assert res.njev == res.nit


def test_nesterov_inverse_quadratic_converges(quadratic):
    f, grad_f, expected = quadratic
    params = Parameters(
        f=f,
        grad_f=grad_f,
        initial_condition=np.zeros(2),
        initial_step=0.1,
        minimum_step=1e-12,
        max_iterations=5000,
    )
    res = nesterov(params, StepRule.INVERSE)
    assert res.success
    assert np.linalg.norm(res.x - expected) < 1e-3
    assert np.linalg.norm(grad_f(res.x)) < 1e-2


def test_nesterov_rejects_adaptive(quadratic):
    f, grad_f, _ = quadratic
    params = Parameters(f=f, grad_f=grad_f, initial_condition=np.zeros(2))
    with pytest.raises(ValueError, match="does not support step rule"):
        Nesterov(params, "Dynamic")


def test_rerun_is_deterministic(quadratic):
    f, grad_f, _ = quadratic
    params = Parameters(
        f=f, grad_f=grad_f, initial_condition=np.array([1.0, 1.0]), max_iterations=20
    )
    method = Nesterov(params, StepRule.CONSTANT, history=True)
    first = method.run()
    second = method.run()
    assert len(first.history) == len(second.history)
    for a, b in zip(first.history, second.history):
        assert np.array_equal(a, b)
