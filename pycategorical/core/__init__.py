"""
Core infrastructure for PyCategorical.

Shared abstractions used by the association subpackage.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and GPU detection
"""

from pycategorical.core.result import Result
from pycategorical.core.exceptions import (
    PyCategoricalError,
    ValidationError,
    DimensionError,
    InvalidInputError,
    EmptyDataError,
    InvalidConfigurationError,
    NumericalError,
    DegenerateTableError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyCategoricalError",
    "ValidationError",
    "DimensionError",
    "InvalidInputError",
    "EmptyDataError",
    "InvalidConfigurationError",
    "NumericalError",
    "DegenerateTableError",
]
