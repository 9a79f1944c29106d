"""
Input validation utilities for PyCategorical.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pycategorical.core.exceptions import (
    DimensionError,
    InvalidConfigurationError,
    InvalidInputError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        InvalidInputError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(
            f"{name}: cannot convert to array: {e}", field=name
        ) from e

    if result.dtype == object:
        raise InvalidInputError(
            f"{name}: converted to object dtype, indicating mixed types "
            f"or non-numeric data",
            field=name,
        )

    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise InvalidInputError(
            f"{name}: non-numeric dtype {result.dtype}, expected counts",
            field=name,
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        InvalidInputError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidInputError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)",
            field=name,
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            field=name,
        )


def check_counts(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array holds non-negative whole-number counts.

    Args:
        array: Array to check (already finite)
        name: Parameter name for error messages

    Raises:
        InvalidInputError: If any count is negative or fractional
    """
    negative = np.argwhere(array < 0)
    if len(negative) > 0:
        first = tuple(int(i) for i in negative[0])
        raise InvalidInputError(
            f"{name}: counts must be non-negative, found {array[first]:g} "
            f"at index {first} ({len(negative)} negative cell(s))",
            field=name,
        )

    fractional = np.argwhere(array != np.floor(array))
    if len(fractional) > 0:
        first = tuple(int(i) for i in fractional[0])
        raise InvalidInputError(
            f"{name}: counts must be whole numbers, found {array[first]:g} "
            f"at index {first}",
            field=name,
        )


def check_min_categories(n_categories: int, name: str) -> None:
    """
    Verify a table spans at least two cells.

    Raises:
        InvalidInputError: If fewer than 2 categories are present
    """
    if n_categories < 2:
        raise InvalidInputError(
            f"{name}: need at least 2 categories, got {n_categories}",
            field=name,
        )


def check_consistent_length(
    *arrays: NDArray[Any],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        odd = next(n for n, length in zip(names, lengths) if length != lengths[0])
        raise DimensionError(f"Inconsistent lengths: {details}", field=odd)


def check_open_unit_interval(value: float, name: str) -> float:
    """
    Verify a probability-like option lies strictly in (0, 1).

    Raises:
        InvalidConfigurationError: If value is outside (0, 1)
    """
    if not (0.0 < value < 1.0):
        raise InvalidConfigurationError(
            f"{name} must be in (0, 1), got {value}", option=name
        )
    return float(value)
