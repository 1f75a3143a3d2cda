# gradnet

Numeric building blocks for small feed-forward neural networks, on top of numpy.
All values are float32.

## Modules

- `gradnet.arithmetic` – functions on plain numbers and 1-d/2-d numpy arrays:
  `plus`, `minus`, `times`, `matmul`, `plus_inplace`, `minus_inplace`,
  `times_inplace`, `transpose`, `element_sum` and `square_root`.
  A scalar is broadcast over a vector or matrix. Arrays whose shapes do not fit
  raise `ShapeMismatchError` (a `ValueError`); unsupported operand kinds raise
  `TypeError`. `matmul` of two vectors is their outer product.
  Note that `minus` with exactly one scalar operand returns `right - left`.
- `gradnet.data` – `Data`, a tagged value of kind `DataKind.SCALAR`, `VECTOR`,
  `MATRIX` or `NONE`, built with `Data.scalar`, `Data.vector`, `Data.matrix`,
  `Data.none`, `Data.zero`, `Data.one` and `Data.neg_one`. It offers `plus`,
  `minus`, `times`, `matmul`, `transpose`, `element_sum`, `sqrt`,
  `apply_elementwise`, `dim` and `variant_name`, and the in-place
  `sum_assign`, `minus_assign` and `times_assign`. Binary operations with a
  `NONE` operand raise `TypeError`.
- `gradnet.batch_ops` – the same operations over lists of `Data`, pairwise
  (`plus_batches`, …) or against a single value (`plus_batch_data`,
  `minus_data_batch`, …). Pairwise operations on lists of different length raise
  `BatchSizeMismatchError`.
- `gradnet.container` – `DataContainer`, which tags data as a batch, an
  inference value, a parameter or empty (`ContainerType`). Binary operations
  accept fixed pairings of container kinds and raise `TypeError` for others.
  It also provides `with_type`, `apply_function`, `apply_elementwise`,
  `average_batch` (the mean of a batch as a parameter) and `dim`
  (count of values and shape of the first).
- `gradnet.unit_params` – `UnitParams`, the record of a linear or softmax
  layer (`UnitKind`): sizes, flat row-major weights, biases and activation name.
  `new_linear` and `new_softmax` draw weights uniformly from
  `±sqrt(6 / (inputs + outputs))` with zero biases. `to_dict` and `from_dict`
  convert to and from a JSON-ready mapping tagged with `unit_type`;
  `type_name` gives `"UnitParam::Linear"` or `"UnitParam::Softmax"`.
- `gradnet.mnist` – `HandwrittenExample` (a label plus 784 pixel values scaled
  to `[0, 1]`), `Misclassification`, `InvalidRowError` and
  `load_data_from_csv(path, offset, rows)`, which reads header-less CSV rows
  of a label followed by 784 integers. `response()` gives the one-hot label,
  `input()` the pixels, and `test_error(prediction)` compares the index of the
  largest output of an inference vector with the label.

## Installation

```
pip install .
```

## Example

```python
from gradnet.data import Data
from gradnet.container import DataContainer
from gradnet.unit_params import UnitParams
from gradnet.mnist import load_data_from_csv

weights = Data.matrix([[1.0, 2.0, 3.0], [3.0, 2.0, 1.0]])
x = Data.vector([0.7, 0.1, 1.0])
print(weights.matmul(x))

batch = DataContainer.batch([Data.vector([1.0, 2.0]), Data.vector([3.0, 4.0])])
print(batch.average_batch())

layer = UnitParams.new_linear(784, 50, "relu")
record = layer.to_dict()
print(layer.type_name(), record["weights_dim"])

examples = load_data_from_csv("mnist_train.csv", offset=0, rows=100)
print(examples[0].response())
```

## What it does not do

The package holds values, containers, layer records and MNIST examples only.
It does not assemble layers into a network, run forward or backward passes,
train, regularise, or save and load whole models, and it has no command-line
program.

## Running the tests

```
pip install ".[test]"
pytest
```