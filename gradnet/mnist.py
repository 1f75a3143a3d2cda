"""Handwritten digit examples read from MNIST-style CSV rows."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from itertools import islice
from typing import Iterable, List, Sequence

import numpy as np

from gradnet.container import ContainerType, DataContainer
from gradnet.data import Data, DataKind

__all__ = [
    "InvalidRowError",
    "Misclassification",
    "HandwrittenExample",
    "load_data_from_csv",
]

ROW_LENGTH = 28 * 28 + 1
OUTPUT_LENGTH = 10
_U16_MAX = 65535


class InvalidRowError(ValueError):
    """Raised when a CSV row is not a label followed by 784 pixel values."""


@dataclass(frozen=True)
class Misclassification:
    """Count of wrongly classified examples out of a total."""

    incorrect: int
    total: int


@dataclass
class HandwrittenExample:
    """A digit label and its pixel intensities scaled to ``[0, 1]``."""

    label: int
    data: np.ndarray = field(repr=False)

    @classmethod
    def from_row(cls, row: Sequence[int]) -> "HandwrittenExample":
        """Build an example from a label followed by 784 pixel values."""
        if len(row) != ROW_LENGTH:
            raise InvalidRowError("Input data didn't match the expected length")
        values = np.asarray(row, dtype=np.float32)
        return cls(label=int(row[0]), data=values[1:] / np.float32(255.0))

    def response(self) -> Data:
        """The label as a one-hot vector of length 10."""
        one_hot = [0.0] * OUTPUT_LENGTH
        one_hot[self.label] = 1.0
        return Data.vector(one_hot)

    def input(self) -> Data:
        return Data.vector(self.data)

    def test_error(self, predicted: DataContainer) -> Misclassification:
        """Whether the largest output points at the correct label."""
        if predicted.kind is not ContainerType.INFERENCE or predicted.value.kind is not DataKind.VECTOR:
            raise ValueError("Invalid data format for test error processing")
        values = predicted.value.value
        if values.shape[0] != OUTPUT_LENGTH:
            raise ValueError(
                f"Invalid output dimension, expected {OUTPUT_LENGTH} but got {values.shape[0]}"
            )
        best = 0
        for index, value in enumerate(values[1:], start=1):
            if value > values[best]:
                best = index
        return Misclassification(incorrect=0 if best == self.label else 1, total=1)


def _parse(fields: Iterable[str]) -> List[int]:
    try:
        values = [int(item) for item in fields]
    except ValueError as exc:
        raise InvalidRowError(f"non-integer value in row: {exc}") from None
    if any(not 0 <= value <= _U16_MAX for value in values):
        raise InvalidRowError("row value out of range")
    return values


def load_data_from_csv(path: str, offset: int, rows: int) -> List[HandwrittenExample]:
    """Read ``rows`` examples from a header-less CSV file, skipping ``offset`` rows."""
    with open(path, newline="") as handle:
        records = (record for record in csv.reader(handle) if record)
        return [
            HandwrittenExample.from_row(_parse(record))
            for record in islice(records, offset, offset + rows)
        ]