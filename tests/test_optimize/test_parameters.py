import dataclasses

import numpy as np
import pytest

from descentkit.optimize import IterationState, OptimizeResult, Parameters, Status


def _f(x):
    return float(x @ x)


def test_defaults():
    params = Parameters(f=_f, initial_condition=[1, 2])
    assert params.tolerance_r == 1e-6
    assert params.tolerance_s == 1e-6
    assert params.initial_step == 1.0
    assert params.max_iterations == 1000
    assert params.minimum_step == 1e-2
    assert params.sigma == 0.1
    assert params.mu == 0.2
    assert params.eta == 0.9
    assert params.beta1 == 0.9
    assert params.beta2 == 0.999
    assert params.grad_f is None
    assert params.dim == 2
    assert params.initial_condition.dtype == float


def test_initial_condition_is_copied():
    x0 = np.array([1.0, 2.0])
    params = Parameters(f=_f, initial_condition=x0)
    x0[0] = 5.0
    assert params.initial_condition[0] == 1.0


@pytest.mark.parametrize(
    "field, value",
    [
        ("tolerance_r", 0.0),
        ("tolerance_s", -1e-6),
        ("initial_step", 0.0),
        ("minimum_step", -1.0),
        ("max_iterations", 0),
        ("max_iterations", 2.5),
        ("beta1", 1.0),
        ("beta2", 0.0),
        ("sigma", 0.0),
        ("mu", -0.1),
        ("eta", -0.5),
        ("fd_step", 0.0),
    ],
)
def test_invalid_values_raise(field, value):
    with pytest.raises(ValueError, match=field):
        Parameters(f=_f, initial_condition=np.zeros(2), **{field: value})


@pytest.mark.parametrize("x0", [[], [[1.0, 2.0]], 3.0])
def test_initial_condition_shape(x0):
    with pytest.raises(ValueError, match="initial_condition"):
        Parameters(f=_f, initial_condition=x0)


def test_parameters_are_frozen():
    params = Parameters(f=_f, initial_condition=np.zeros(2))
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.mu = 0.5
    updated = dataclasses.replace(params, mu=0.5)
    assert updated.mu == 0.5
    assert params.mu == 0.2


def test_result_success_follows_status():
    result = OptimizeResult(
        x=np.zeros(2),
        fun=0.0,
        nit=3,
        status=Status.CONVERGED_STEP,
        message="",
        grad_norm=0.0,
        nfev=1,
        njev=3,
    )
    assert result.success
    result.status = Status.MAX_ITERATIONS
    assert not result.success
    assert result.history == []


def test_iteration_state_holds_only_method_scratch():
    names = {field.name for field in dataclasses.fields(IterationState)}
    assert names == {
        "alpha",
        "iteration",
        "grad_f",
        "velocity",
        "lookahead",
        "moments",
        "beta1_power",
        "beta2_power",
        "nfev",
        "njev",
    }
    state = IterationState(alpha=0.5)
    assert state.velocity is None
    assert state.nfev == state.njev == 0
