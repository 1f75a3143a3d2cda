"""Containers that tag :class:`Data` as a batch, an inference value or a parameter."""

from __future__ import annotations

import copy
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple

from gradnet import batch_ops
from gradnet.data import Data

__all__ = ["ContainerType", "DataContainer"]


class ContainerType(Enum):
    """The role a :class:`DataContainer` plays."""

    BATCH = "Batch"
    INFERENCE = "Inference"
    PARAMETER = "Parameter"
    EMPTY = "Empty"


_B = ContainerType.BATCH
_I = ContainerType.INFERENCE
_P = ContainerType.PARAMETER
_E = ContainerType.EMPTY


class DataContainer:
    """A batch of data values, a single inference value, a parameter, or nothing.

    Binary operations follow fixed rules for which container kinds may be
    combined and what kind the result has; any other pairing raises
    ``TypeError``. Batches paired element by element must have equal sizes,
    otherwise :class:`gradnet.batch_ops.BatchSizeMismatchError` is raised.
    """

    __slots__ = ("kind", "value")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, kind: ContainerType, value=None) -> None:
        self.kind = kind
        if kind is _B:
            self.value: object = list(value or [])
        elif kind is _E:
            self.value = None
        else:
            if not isinstance(value, Data):
                raise TypeError(f"{kind.value} container needs a Data value")
            self.value = value

    # construction -----------------------------------------------------

    @classmethod
    def batch(cls, items: Iterable[Data]) -> "DataContainer":
        return cls(_B, items)

    @classmethod
    def inference(cls, data: Data) -> "DataContainer":
        return cls(_I, data)

    @classmethod
    def parameter(cls, data: Data) -> "DataContainer":
        return cls(_P, data)

    @classmethod
    def empty(cls) -> "DataContainer":
        return cls(_E)

    @classmethod
    def with_type(cls, data: Data, container_type: ContainerType) -> "DataContainer":
        """Wrap a single value as an inference value or a parameter."""
        if container_type in (_I, _P):
            return cls(container_type, data)
        raise ValueError(
            f"invalid container type to wrap a single data value: {container_type.value}"
        )

    @classmethod
    def zero(cls) -> "DataContainer":
        return cls.parameter(Data.zero())

    @classmethod
    def one(cls) -> "DataContainer":
        return cls.parameter(Data.one())

    @classmethod
    def neg_one(cls) -> "DataContainer":
        return cls.parameter(Data.neg_one())

    # inspection -------------------------------------------------------

    def container_name(self) -> str:
        return self.kind.value

    def dim(self) -> Tuple[int, tuple]:
        """Number of values held and the shape of the first one."""
        if self.kind is _B:
            if not self.value:
                return (0, ())
            return (len(self.value), self.value[0].dim())
        if self.kind is _E:
            return (0, ())
        return (1, self.value.dim())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataContainer):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __repr__(self) -> str:
        if self.kind is _E:
            return "DataContainer.empty()"
        return f"DataContainer.{self.kind.name.lower()}({self.value!r})"

    # arithmetic -------------------------------------------------------

    def _unsupported(self, other: "DataContainer", operation: str) -> TypeError:
        return TypeError(
            f"unsupported container type pair for operation [{operation}]: "
            f"{self.container_name()} and {other.container_name()}"
        )

    def _binary(self, other: "DataContainer", table: Dict, operation: str) -> "DataContainer":
        try:
            func = table[(self.kind, other.kind)]
        except KeyError:
            raise self._unsupported(other, operation) from None
        return func(self.value, other.value)

    def _assign(self, other: "DataContainer", table: Dict, operation: str) -> None:
        try:
            func = table[(self.kind, other.kind)]
        except KeyError:
            raise self._unsupported(other, operation) from None
        func(self.value, other.value)

    def plus(self, other: "DataContainer") -> "DataContainer":
        return self._binary(other, _PLUS, "PLUS")

    def sum_assign(self, other: "DataContainer") -> None:
        self._assign(other, _SUM_ASSIGN, "SUM_INPLACE")

    def minus(self, other: "DataContainer") -> "DataContainer":
        return self._binary(other, _MINUS, "MINUS")

    def minus_assign(self, other: "DataContainer") -> None:
        self._assign(other, _MINUS_ASSIGN, "MINUS_INPLACE")

    def times(self, other: "DataContainer") -> "DataContainer":
        return self._binary(other, _TIMES, "TIMES")

    def times_assign(self, other: "DataContainer") -> None:
        self._assign(other, _TIMES_ASSIGN, "TIMES_INPLACE")

    def matmul(self, other: "DataContainer") -> "DataContainer":
        return self._binary(other, _MATMUL, "MATMUL")

    def _unary(self, batch_func: Callable, data_func: Callable) -> "DataContainer":
        if self.kind is _B:
            return DataContainer.batch(batch_func(self.value))
        if self.kind is _E:
            return DataContainer.empty()
        return DataContainer(self.kind, data_func(self.value))

    def transpose(self) -> "DataContainer":
        return self._unary(batch_ops.transpose_batch, Data.transpose)

    def element_sum(self) -> "DataContainer":
        return self._unary(batch_ops.element_sum_batch, Data.element_sum)

    def sqrt(self) -> "DataContainer":
        return self._unary(batch_ops.sqrt_batch, Data.sqrt)

    def apply_function(self, func: Callable[[Data], Data]) -> "DataContainer":
        """Apply ``func`` to every held value; an empty container stays empty."""
        return self._unary(lambda items: [func(item) for item in items], func)

    def apply_elementwise(self, func: Callable[[float], float]) -> "DataContainer":
        """Apply ``func`` to every element of every held value."""
        if self.kind is _E:
            raise ValueError("cannot apply an element-wise function to an empty container")
        return self.apply_function(lambda data: data.apply_elementwise(func))

    def average_batch(self) -> "DataContainer":
        """Mean of a batch as a parameter; other containers come back as copies."""
        if self.kind is not _B:
            return copy.deepcopy(self)
        items: List[Data] = self.value
        if not items:
            return DataContainer.empty()
        average = copy.deepcopy(items[0])
        for item in items[1:]:
            average.sum_assign(item)
        average.times_assign(Data.scalar(1.0 / len(items)))
        return DataContainer.parameter(average)


def _binary_table(
    batches: Callable[[List[Data], List[Data]], List[Data]],
    batch_data: Callable[[List[Data], Data], List[Data]],
    data_batch: Callable[[Data, List[Data]], List[Data]],
    data_op: Callable[[Data, Data], Data],
) -> Dict:
    def single(kind: ContainerType) -> Callable:
        return lambda a, b: DataContainer(kind, data_op(a, b))

    return {
        (_B, _B): lambda a, b: DataContainer.batch(batches(a, b)),
        (_B, _P): lambda a, b: DataContainer.batch(batch_data(a, b)),
        (_I, _I): single(_I),
        (_I, _P): single(_I),
        (_P, _B): lambda a, b: DataContainer.batch(data_batch(a, b)),
        (_P, _I): single(_I),
        (_P, _P): single(_P),
    }


def _assign_table(
    batches: Callable[[List[Data], List[Data]], None],
    batch_data: Callable[[List[Data], Data], None],
    data_op: Callable[[Data, Data], None],
) -> Dict:
    table: Dict = {
        (_B, _B): batches,
        (_B, _I): batch_data,
        (_B, _P): batch_data,
    }
    for left in (_I, _P):
        for right in (_I, _P):
            table[(left, right)] = data_op
    return table


_PLUS = _binary_table(
    batch_ops.plus_batches,
    batch_ops.plus_batch_data,
    lambda data, batch: batch_ops.plus_batch_data(batch, data),
    Data.plus,
)
_MINUS = _binary_table(
    batch_ops.minus_batches,
    batch_ops.minus_batch_data,
    batch_ops.minus_data_batch,
    Data.minus,
)
_TIMES = _binary_table(
    batch_ops.times_batches,
    batch_ops.times_batch_data,
    lambda data, batch: batch_ops.times_batch_data(batch, data),
    Data.times,
)
_MATMUL = _binary_table(
    batch_ops.matmul_batches,
    batch_ops.matmul_batch_data,
    batch_ops.matmul_data_batch,
    Data.matmul,
)
_SUM_ASSIGN = _assign_table(
    batch_ops.sum_assign_batches, batch_ops.sum_assign_batch_data, Data.sum_assign
)
_MINUS_ASSIGN = _assign_table(
    batch_ops.minus_assign_batches, batch_ops.minus_assign_batch_data, Data.minus_assign
)
_TIMES_ASSIGN = _assign_table(
    batch_ops.times_assign_batches, batch_ops.times_assign_batch_data, Data.times_assign
)