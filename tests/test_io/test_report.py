import numpy as np

from descentkit.io import format_parameters, format_point, format_result


def test_format_point():
    assert format_point([1.0, 2.5]) == "(1,2.5)"
    assert format_point(np.array([-0.5416])) == "(-0.5416)"


def test_format_result():
    report = format_result(np.array([1.0, 2.0]), lambda x: float(x @ x), lambda x: 2 * x)
    assert report.splitlines() == [
        "Computed minimum: (1,2)",
        "f (1,2) = 5",
        "|| grad_f (1,2) || = 4.47214",
    ]


def test_format_parameters():
    text = format_parameters(
        {"method": "adam", "initial_condition": [0.0, 1.0], "beta1": 0.9}
    )
    assert text == "method: adam\ninitial_condition: (0,1)\nbeta1: 0.9"
