"""Serializable parameters of a fully connected unit."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

import numpy as np

from gradnet.container import DataContainer
from gradnet.data import Data

__all__ = ["UnitKind", "UnitParams"]

_rng = np.random.default_rng()


class UnitKind(Enum):
    """The kind of unit a set of parameters describes."""

    LINEAR = "Linear"
    SOFTMAX = "Softmax"


def _generate_weights(input_size: int, output_size: int) -> List[float]:
    scale = math.sqrt(6.0 / (input_size + output_size))
    weights = _rng.uniform(-scale, scale, size=output_size * input_size)
    return weights.astype(np.float32).tolist()


@dataclass
class UnitParams:
    """Weights, biases and activation of a linear or softmax unit.

    Weights are stored flat in row-major order with shape ``weights_dim``,
    which is ``(output_size, input_size)``.
    """

    kind: UnitKind
    input_size: int
    output_size: int
    weights_dim: Tuple[int, int]
    weights: List[float] = field(repr=False)
    biases: List[float] = field(repr=False)
    activation: str

    def __post_init__(self) -> None:
        self.weights_dim = (int(self.weights_dim[0]), int(self.weights_dim[1]))
        rows, cols = self.weights_dim
        if rows * cols != len(self.weights):
            raise ValueError(
                f"{len(self.weights)} weights do not fit shape {self.weights_dim}"
            )

    @classmethod
    def _new(
        cls, kind: UnitKind, input_size: int, output_size: int, activation: str
    ) -> "UnitParams":
        return cls(
            kind=kind,
            input_size=input_size,
            output_size=output_size,
            weights_dim=(output_size, input_size),
            weights=_generate_weights(input_size, output_size),
            biases=[0.0] * output_size,
            activation=activation,
        )

    @classmethod
    def new_linear(cls, input_size: int, output_size: int, activation: str) -> "UnitParams":
        """Fresh linear unit with uniformly initialised weights and zero biases."""
        return cls._new(UnitKind.LINEAR, input_size, output_size, activation)

    @classmethod
    def new_softmax(cls, input_size: int, output_size: int, activation: str) -> "UnitParams":
        """Fresh softmax unit with uniformly initialised weights and zero biases."""
        return cls._new(UnitKind.SOFTMAX, input_size, output_size, activation)

    def weights(self) -> DataContainer:
        """The weight matrix as a parameter container."""
        matrix = np.asarray(self.weights, dtype=np.float32).reshape(self.weights_dim)
        return DataContainer.parameter(Data.matrix(matrix))

    def biases(self) -> DataContainer:
        """The bias vector as a parameter container."""
        return DataContainer.parameter(Data.vector(self.biases))

    def type_name(self) -> str:
        return f"UnitParam::{self.kind.value}"

    def to_dict(self) -> Dict[str, Any]:
        """A JSON-ready mapping tagged with ``unit_type``."""
        return {
            "unit_type": self.kind.value,
            "input_size": self.input_size,
            "output_size": self.output_size,
            "weights_dim": list(self.weights_dim),
            "weights": list(self.weights),
            "biases": list(self.biases),
            "activation": self.activation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnitParams":
        """Build parameters from a mapping produced by :meth:`to_dict`."""
        try:
            kind = UnitKind(data["unit_type"])
            return cls(
                kind=kind,
                input_size=int(data["input_size"]),
                output_size=int(data["output_size"]),
                weights_dim=tuple(data["weights_dim"]),
                weights=[float(w) for w in data["weights"]],
                biases=[float(b) for b in data["biases"]],
                activation=str(data["activation"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing unit parameter field: {exc.args[0]}") from None