"""
Input validation utilities for pydensela.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages before any LAPACK routine is
entered, so a failed precondition never leaves partial output behind.

Design principles:
    - No silent type coercion beyond promotion to a LAPACK element type
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pydensela.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to a LAPACK-compatible numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Integer and boolean inputs are promoted to float64; float32, float64,
    complex64 and complex128 pass through unchanged. Extended precision is
    narrowed to the double-precision type of the same kind.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a float or complex dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        if result.dtype not in (np.complex64, np.complex128):
            result = result.astype(np.complex128)
        return result

    if not np.issubdtype(result.dtype, np.floating):
        return result.astype(np.float64)

    if result.dtype not in (np.float32, np.float64):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    LAPACK routines do not propagate non-finite input predictably, so
    decompositions refuse it up front.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """Verify array is 1-dimensional (a vector)."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional (a matrix)."""
    check_ndim(array, 2, name)


def check_vector_or_matrix(array: NDArray[Any], name: str) -> None:
    """
    Verify array is either a vector or a matrix.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is 0D or has more than two dimensions
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected a vector or a matrix, got {array.ndim}D with shape {array.shape}"
        )


def check_square(array: NDArray[Any], name: str) -> None:
    """
    Verify array is a square matrix.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 2D or not square
    """
    check_2d(array, name)
    if array.shape[0] != array.shape[1]:
        raise DimensionError(
            f"{name}: expected a square matrix, got shape {array.shape}"
        )


def check_same_shape(
    a: NDArray[Any],
    b: NDArray[Any],
    names: tuple[str, str]
) -> None:
    """
    Verify two arrays have identical shapes.

    Args:
        a: First array
        b: Second array
        names: Parameter names for error messages

    Raises:
        DimensionError: If the shapes differ
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"Inconsistent shapes: {names[0]}={a.shape}, {names[1]}={b.shape}"
        )


def check_integer(value: Any, name: str) -> int:
    """
    Verify a scalar argument is an integer and return it as ``int``.

    Booleans are rejected even though they subclass ``int``.

    Raises:
        ValidationError: If value is not an integral number
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}"
        )
    return int(value)
