"""Operations over batches, i.e. lists of :class:`Data` values."""

from __future__ import annotations

from typing import Callable, List, Sequence

from gradnet.data import Data

__all__ = [
    "BatchSizeMismatchError",
    "plus_batches",
    "plus_batch_data",
    "minus_batches",
    "minus_batch_data",
    "minus_data_batch",
    "times_batches",
    "times_batch_data",
    "matmul_batches",
    "matmul_batch_data",
    "matmul_data_batch",
    "sum_assign_batches",
    "sum_assign_batch_data",
    "minus_assign_batches",
    "minus_assign_batch_data",
    "times_assign_batches",
    "times_assign_batch_data",
    "transpose_batch",
    "element_sum_batch",
    "sqrt_batch",
]


class BatchSizeMismatchError(ValueError):
    """Raised when two batches paired element by element differ in length."""

    def __init__(self, operation: str, left_size: int, right_size: int) -> None:
        self.operation = operation
        self.left_size = left_size
        self.right_size = right_size
        super().__init__(
            f"batch size mismatch for operation [{operation}]: "
            f"{left_size} and {right_size}"
        )


def _check(operation: str, left: Sequence[Data], right: Sequence[Data]) -> None:
    if len(left) != len(right):
        raise BatchSizeMismatchError(operation, len(left), len(right))


def _pairwise(
    operation: str,
    left: Sequence[Data],
    right: Sequence[Data],
    func: Callable[[Data, Data], Data],
) -> List[Data]:
    _check(operation, left, right)
    return [func(a, b) for a, b in zip(left, right)]


def plus_batches(left: Sequence[Data], right: Sequence[Data]) -> List[Data]:
    return _pairwise("PLUS", left, right, Data.plus)


def plus_batch_data(batch: Sequence[Data], data: Data) -> List[Data]:
    return [item.plus(data) for item in batch]


def minus_batches(left: Sequence[Data], right: Sequence[Data]) -> List[Data]:
    return _pairwise("MINUS", left, right, Data.minus)


def minus_batch_data(batch: Sequence[Data], data: Data) -> List[Data]:
    """Each batch item minus ``data``."""
    return [item.minus(data) for item in batch]


def minus_data_batch(data: Data, batch: Sequence[Data]) -> List[Data]:
    """``data`` minus each batch item."""
    return [data.minus(item) for item in batch]


def times_batches(left: Sequence[Data], right: Sequence[Data]) -> List[Data]:
    return _pairwise("TIMES", left, right, Data.times)


def times_batch_data(batch: Sequence[Data], data: Data) -> List[Data]:
    return [item.times(data) for item in batch]


def matmul_batches(left: Sequence[Data], right: Sequence[Data]) -> List[Data]:
    return _pairwise("MATMUL", left, right, Data.matmul)


def matmul_batch_data(batch: Sequence[Data], data: Data) -> List[Data]:
    """Each batch item multiplied on the right by ``data``."""
    return [item.matmul(data) for item in batch]


def matmul_data_batch(data: Data, batch: Sequence[Data]) -> List[Data]:
    """``data`` multiplied on the right by each batch item."""
    return [data.matmul(item) for item in batch]


def sum_assign_batches(target: Sequence[Data], other: Sequence[Data]) -> None:
    _check("SUM_INPLACE", target, other)
    for item, addend in zip(target, other):
        item.sum_assign(addend)


def sum_assign_batch_data(target: Sequence[Data], data: Data) -> None:
    for item in target:
        item.sum_assign(data)


def minus_assign_batches(target: Sequence[Data], other: Sequence[Data]) -> None:
    _check("MINUS_INPLACE", target, other)
    for item, subtrahend in zip(target, other):
        item.minus_assign(subtrahend)


def minus_assign_batch_data(target: Sequence[Data], data: Data) -> None:
    for item in target:
        item.minus_assign(data)


def times_assign_batches(target: Sequence[Data], other: Sequence[Data]) -> None:
    _check("TIMES_INPLACE", target, other)
    for item, factor in zip(target, other):
        item.times_assign(factor)


def times_assign_batch_data(target: Sequence[Data], data: Data) -> None:
    for item in target:
        item.times_assign(data)


def transpose_batch(batch: Sequence[Data]) -> List[Data]:
    return [item.transpose() for item in batch]


def element_sum_batch(batch: Sequence[Data]) -> List[Data]:
    return [item.element_sum() for item in batch]


def sqrt_batch(batch: Sequence[Data]) -> List[Data]:
    return [item.sqrt() for item in batch]