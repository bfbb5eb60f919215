"""Expression parsing, JSON configuration and text reports."""

from .config import RunConfig, load_config, parse_config, validate_config
from .expression import scalar_function, vector_function
from .report import format_parameters, format_point, format_result

__all__ = [
    "RunConfig",
    "format_parameters",
    "format_point",
    "format_result",
    "load_config",
    "parse_config",
    "scalar_function",
    "validate_config",
    "vector_function",
]
