"""A single float32 value: scalar, vector, matrix or nothing."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable

import numpy as np

from gradnet import arithmetic

__all__ = ["DataKind", "Data"]


class DataKind(Enum):
    """The shape class of a :class:`Data` value."""

    SCALAR = "ScalarF32"
    VECTOR = "VectorF32"
    MATRIX = "MatrixF32"
    NONE = "None"


_NDIM_BY_KIND = {DataKind.VECTOR: 1, DataKind.MATRIX: 2}
_KIND_BY_NDIM = {0: DataKind.SCALAR, 1: DataKind.VECTOR, 2: DataKind.MATRIX}


class Data:
    """A float32 scalar, vector or matrix, or the empty value ``none``.

    Binary operations return new values; the ``*_assign`` methods update
    this value in place. Unsupported operand pairs raise ``TypeError`` and
    incompatible shapes raise :class:`gradnet.arithmetic.ShapeMismatchError`.
    """

    __slots__ = ("kind", "value")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, kind: DataKind, value=None) -> None:
        self.kind = kind
        if kind is DataKind.NONE:
            self.value = None
        elif kind is DataKind.SCALAR:
            self.value = np.float32(value)
        else:
            array = np.array(value, dtype=np.float32)
            expected = _NDIM_BY_KIND[kind]
            if array.ndim != expected:
                raise ValueError(
                    f"{kind.value} needs {expected} dimension(s), got {array.ndim}"
                )
            self.value = array

    # construction -----------------------------------------------------

    @classmethod
    def scalar(cls, value: float) -> "Data":
        return cls(DataKind.SCALAR, value)

    @classmethod
    def vector(cls, values: Iterable[float]) -> "Data":
        return cls(DataKind.VECTOR, values)

    @classmethod
    def matrix(cls, values) -> "Data":
        return cls(DataKind.MATRIX, values)

    @classmethod
    def none(cls) -> "Data":
        return cls(DataKind.NONE)

    @classmethod
    def zero(cls) -> "Data":
        return cls.scalar(0.0)

    @classmethod
    def one(cls) -> "Data":
        return cls.scalar(1.0)

    @classmethod
    def neg_one(cls) -> "Data":
        return cls.scalar(-1.0)

    @classmethod
    def _wrap(cls, value) -> "Data":
        if isinstance(value, np.ndarray) and value.ndim in _KIND_BY_NDIM:
            kind = _KIND_BY_NDIM[value.ndim]
            if kind is DataKind.SCALAR:
                return cls.scalar(value)
            return cls(kind, value)
        return cls.scalar(value)

    # inspection -------------------------------------------------------

    def variant_name(self) -> str:
        return self.kind.value

    def dim(self) -> tuple:
        """Shape of the value: ``(1,)`` for a scalar, ``()`` for none."""
        if self.kind is DataKind.NONE:
            return ()
        if self.kind is DataKind.SCALAR:
            return (1,)
        return tuple(self.value.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.kind is DataKind.NONE:
            return True
        return bool(np.array_equal(self.value, other.value))

    def __repr__(self) -> str:
        if self.kind is DataKind.NONE:
            return "Data.none()"
        if self.kind is DataKind.SCALAR:
            return f"Data.scalar({float(self.value)!r})"
        return f"Data.{self.kind.name.lower()}({self.value.tolist()!r})"

    # arithmetic -------------------------------------------------------

    def _check_pair(self, other: "Data", operation: str) -> None:
        if self.kind is DataKind.NONE or other.kind is DataKind.NONE:
            raise TypeError(
                f"unsupported data type pair for operation [{operation}]: "
                f"{self.variant_name()} and {other.variant_name()}"
            )

    def _binary(self, other: "Data", func: Callable, operation: str) -> "Data":
        self._check_pair(other, operation)
        return Data._wrap(func(self.value, other.value))

    def _assign(self, other: "Data", func: Callable, operation: str) -> None:
        self._check_pair(other, operation)
        self.value = func(self.value, other.value)

    def plus(self, other: "Data") -> "Data":
        return self._binary(other, arithmetic.plus, "PLUS")

    def sum_assign(self, other: "Data") -> None:
        self._assign(other, arithmetic.plus_inplace, "PLUS_INPLACE")

    def minus(self, other: "Data") -> "Data":
        """Difference; with exactly one scalar operand the result is ``other - self``."""
        return self._binary(other, arithmetic.minus, "MINUS")

    def minus_assign(self, other: "Data") -> None:
        self._assign(other, arithmetic.minus_inplace, "MINUS_INPLACE")

    def times(self, other: "Data") -> "Data":
        return self._binary(other, arithmetic.times, "TIMES")

    def times_assign(self, other: "Data") -> None:
        self._assign(other, arithmetic.times_inplace, "TIMES_INPLACE")

    def matmul(self, other: "Data") -> "Data":
        return self._binary(other, arithmetic.matmul, "MATMUL")

    def transpose(self) -> "Data":
        if self.kind is DataKind.NONE:
            return Data.none()
        return Data._wrap(arithmetic.transpose(self.value))

    def element_sum(self) -> "Data":
        if self.kind is DataKind.NONE:
            return Data.none()
        return Data.scalar(arithmetic.element_sum(self.value))

    def sqrt(self) -> "Data":
        if self.kind is DataKind.NONE:
            return Data.none()
        return Data._wrap(arithmetic.square_root(self.value))

    def apply_elementwise(self, func: Callable[[float], float]) -> "Data":
        """Apply ``func`` to every element, keeping the shape."""
        if self.kind is DataKind.NONE:
            return Data.none()
        if self.kind is DataKind.SCALAR:
            return Data.scalar(func(self.value))
        mapped = np.vectorize(func, otypes=[np.float32])(self.value)
        return Data(self.kind, mapped)