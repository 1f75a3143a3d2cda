"""Arithmetic on float32 scalars, vectors and matrices.

A scalar is any real number (or a 0-d array), a vector is a 1-d numpy array
and a matrix is a 2-d numpy array. Results are always float32.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

import numpy as np

Value = Union[float, int, np.number, np.ndarray]

__all__ = [
    "ShapeMismatchError",
    "plus",
    "minus",
    "times",
    "matmul",
    "plus_inplace",
    "minus_inplace",
    "times_inplace",
    "transpose",
    "element_sum",
    "square_root",
]


class ShapeMismatchError(ValueError):
    """Raised when two operands of compatible kinds have incompatible shapes."""

    def __init__(self, operation: str, left_shape: tuple, right_shape: tuple) -> None:
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        super().__init__(
            f"mismatched dimensions for operation [{operation}]: "
            f"{left_shape} and {right_shape}"
        )


class _Kind(Enum):
    SCALAR = "scalar"
    VECTOR = "vector"
    MATRIX = "matrix"


_KIND_BY_NDIM = {0: _Kind.SCALAR, 1: _Kind.VECTOR, 2: _Kind.MATRIX}


def _kind(value: Value) -> _Kind:
    if isinstance(value, np.ndarray):
        try:
            return _KIND_BY_NDIM[value.ndim]
        except KeyError:
            raise TypeError(f"arrays of {value.ndim} dimensions are not supported") from None
    if isinstance(value, (int, float, np.number)) and not isinstance(value, bool):
        return _Kind.SCALAR
    raise TypeError(f"unsupported operand type: {type(value).__name__}")


def _scalar(value: Value) -> np.float32:
    return np.float32(value)


def _array(value: np.ndarray) -> np.ndarray:
    return np.asarray(value, dtype=np.float32)


def _unsupported(operation: str, left: _Kind, right: _Kind) -> TypeError:
    return TypeError(
        f"unsupported operand kinds for operation [{operation}]: "
        f"{left.value} and {right.value}"
    )


def _elementwise(
    ufunc: Callable, operation: str, left: Value, right: Value, *, swap_mixed: bool = False
) -> Value:
    left_kind, right_kind = _kind(left), _kind(right)
    if left_kind is right_kind:
        if left_kind is _Kind.SCALAR:
            return _scalar(ufunc(_scalar(left), _scalar(right)))
        a, b = _array(left), _array(right)
        if a.shape != b.shape:
            raise ShapeMismatchError(operation, a.shape, b.shape)
        return ufunc(a, b).astype(np.float32, copy=False)
    if left_kind is _Kind.SCALAR:
        first, second = _scalar(left), _array(right)
    elif right_kind is _Kind.SCALAR:
        first, second = _array(left), _scalar(right)
    else:
        raise _unsupported(operation, left_kind, right_kind)
    if swap_mixed:
        first, second = second, first
    return ufunc(first, second).astype(np.float32, copy=False)


def plus(left: Value, right: Value) -> Value:
    """Element-wise sum; a scalar is broadcast over a vector or matrix."""
    return _elementwise(np.add, "PLUS", left, right)


def minus(left: Value, right: Value) -> Value:
    """Element-wise difference.

    When exactly one operand is a scalar the result is ``right - left``:
    ``minus(s, v)`` gives ``v - s`` and ``minus(v, s)`` gives ``s - v``.
    """
    return _elementwise(np.subtract, "MINUS", left, right, swap_mixed=True)


def times(left: Value, right: Value) -> Value:
    """Element-wise product; a scalar is broadcast over a vector or matrix."""
    return _elementwise(np.multiply, "TIMES", left, right)


def matmul(left: Value, right: Value) -> np.ndarray:
    """Matrix product.

    Two vectors give their outer product, a vector on the left acts as a row
    vector and a vector on the right as a column vector.
    """
    left_kind, right_kind = _kind(left), _kind(right)
    pair = (left_kind, right_kind)
    if pair == (_Kind.VECTOR, _Kind.VECTOR):
        return np.outer(_array(left), _array(right)).astype(np.float32, copy=False)
    if pair == (_Kind.VECTOR, _Kind.MATRIX):
        vector, matrix = _array(left), _array(right)
        if vector.shape[0] != matrix.shape[0]:
            raise ShapeMismatchError("MATMUL", vector.shape, matrix.shape)
        return vector @ matrix
    if pair == (_Kind.MATRIX, _Kind.VECTOR):
        matrix, vector = _array(left), _array(right)
        if matrix.shape[1] != vector.shape[0]:
            raise ShapeMismatchError("MATMUL", matrix.shape, vector.shape)
        return matrix @ vector
    if pair == (_Kind.MATRIX, _Kind.MATRIX):
        first, second = _array(left), _array(right)
        if first.shape[1] != second.shape[0]:
            raise ShapeMismatchError("MATMUL", first.shape, second.shape)
        return first @ second
    raise _unsupported("MATMUL", left_kind, right_kind)


def _inplace(ufunc: Callable, operation: str, target: Value, other: Value) -> Value:
    target_kind, other_kind = _kind(target), _kind(other)
    if target_kind is _Kind.SCALAR:
        if other_kind is not _Kind.SCALAR:
            raise _unsupported(operation, target_kind, other_kind)
        return _scalar(ufunc(_scalar(target), _scalar(other)))
    if other_kind is _Kind.SCALAR:
        ufunc(target, _scalar(other), out=target)
    elif other_kind is target_kind:
        if target.shape != other.shape:
            raise ShapeMismatchError(operation, target.shape, other.shape)
        ufunc(target, _array(other), out=target)
    else:
        raise _unsupported(operation, target_kind, other_kind)
    return target


def plus_inplace(target: Value, other: Value) -> Value:
    """Add ``other`` into ``target``.

    Arrays are updated in place and returned; a scalar target is immutable,
    so the new scalar is returned instead.
    """
    return _inplace(np.add, "SUM_INPLACE", target, other)


def minus_inplace(target: Value, other: Value) -> Value:
    """Subtract ``other`` from ``target`` in place; returns the updated value."""
    return _inplace(np.subtract, "MINUS_INPLACE", target, other)


def times_inplace(target: Value, other: Value) -> Value:
    """Multiply ``target`` by ``other`` in place; returns the updated value."""
    return _inplace(np.multiply, "TIMES_INPLACE", target, other)


def transpose(value: Value) -> Value:
    """Transpose a matrix; scalars and vectors come back as copies."""
    kind = _kind(value)
    if kind is _Kind.SCALAR:
        return _scalar(value)
    if kind is _Kind.VECTOR:
        return _array(value).copy()
    return _array(value).T.copy()


def element_sum(value: Value) -> np.float32:
    """Sum of all elements as a float32 scalar."""
    if _kind(value) is _Kind.SCALAR:
        return _scalar(value)
    return np.float32(_array(value).sum(dtype=np.float32))


def square_root(value: Value) -> Value:
    """Element-wise square root; negative elements give NaN."""
    with np.errstate(invalid="ignore"):
        if _kind(value) is _Kind.SCALAR:
            return np.sqrt(_scalar(value))
        return np.sqrt(_array(value))