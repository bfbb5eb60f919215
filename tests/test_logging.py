"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from descentkit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from descentkit.optimize import GradientDescent, Parameters


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("descentkit.")


def test_get_logger_keeps_package_names():
    """Module names already under the package are not prefixed twice."""
    logger = get_logger("descentkit.optimize.base")
    assert logger.name == "descentkit.optimize.base"
    assert get_logger().name == "descentkit"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_logger_output():
    """Test that logger outputs messages correctly."""
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger = get_logger("test_module")
        logger.info("Test message")

        output = captured.getvalue()
        assert "Test message" in output
        assert "descentkit.test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level <= logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level <= logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR

    set_log_level("WARNING")


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)

        logger = get_logger("test_module")
        logger.debug("Debug message")

        assert "Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_configure_logging_applies_to_new_loggers():
    """Loggers created after configure_logging use its stream."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        logger = get_logger("created_after_configure")
        logger.info("late logger")
        assert "late logger" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_multiple_loggers_independent():
    """Test that multiple loggers work independently."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    logger1.setLevel(logging.DEBUG)
    logger2.setLevel(logging.ERROR)

    assert logger1.level == logging.DEBUG
    assert logger2.level == logging.ERROR


def test_solver_logs_convergence_and_non_convergence():
    """Convergence is reported at INFO, hitting the cap at WARNING."""
    stream = StringIO()

    def f(x):
        return float(x @ x)

    def grad_f(x):
        return 2 * x

    try:
        configure_logging(level=logging.INFO, stream=stream)
        GradientDescent(Parameters(f=f, grad_f=grad_f, initial_condition=np.ones(2))).run()
        GradientDescent(
            Parameters(
                f=f, grad_f=grad_f, initial_condition=np.ones(2), max_iterations=1
            ),
            rule="exponential",
        ).run()
        output = stream.getvalue()
        assert "[INFO]" in output
        assert "Converged in" in output
        assert "[WARNING]" in output
        assert "Not converged (max_iterations = 1)." in output
    finally:
        configure_logging(level=logging.WARNING)
