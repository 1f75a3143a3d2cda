import copy

import numpy as np
import pytest

from gradnet import batch_ops
from gradnet.batch_ops import BatchSizeMismatchError
from gradnet.data import Data


@pytest.fixture
def left():
    return [Data.vector([1.0, 2.0]), Data.vector([3.0, -4.0]), Data.vector([0.5, 9.0])]


@pytest.fixture
def right():
    return [Data.vector([2.0, 2.0]), Data.vector([0.25, 1.0]), Data.vector([-1.0, 3.0])]


@pytest.mark.parametrize(
    "func, method",
    [
        (batch_ops.plus_batches, Data.plus),
        (batch_ops.minus_batches, Data.minus),
        (batch_ops.times_batches, Data.times),
        (batch_ops.matmul_batches, Data.matmul),
    ],
)
def test_pairwise_matches_elementwise(func, method, left, right):
    result = func(left, right)
    assert result == [method(a, b) for a, b in zip(left, right)]


@pytest.mark.parametrize(
    "func",
    [
        batch_ops.plus_batches,
        batch_ops.minus_batches,
        batch_ops.times_batches,
        batch_ops.matmul_batches,
    ],
)
def test_pairwise_size_mismatch(func, left, right):
    with pytest.raises(BatchSizeMismatchError):
        func(left, right[:2])


def test_empty_batches():
    assert batch_ops.plus_batches([], []) == []
    assert batch_ops.transpose_batch([]) == []


def test_plus_minus_roundtrip(left, right):
    back = batch_ops.minus_batches(batch_ops.plus_batches(left, right), right)
    expected = [[1.0, 2.0], [3.0, -4.0], [0.5, 9.0]]
    assert len(back) == len(expected)
    for item, values in zip(back, expected):
        assert np.allclose(item.value, values)


def test_batch_data_broadcast(left):
    assert batch_ops.plus_batch_data(left, Data.zero()) == left
    assert batch_ops.times_batch_data(left, Data.one()) == left


def test_minus_orientation(left):
    d = Data.vector([5.0, -1.0])
    forward = batch_ops.minus_batch_data(left, d)
    backward = batch_ops.minus_data_batch(d, left)
    expected_forward = [[-4.0, 3.0], [-2.0, -3.0], [-4.5, 10.0]]
    expected_backward = [[4.0, -3.0], [2.0, 3.0], [4.5, -10.0]]
    assert len(forward) == len(expected_forward)
    assert len(backward) == len(expected_backward)
    for item, values in zip(forward, expected_forward):
        assert np.allclose(item.value, values)
    for item, values in zip(backward, expected_backward):
        assert np.allclose(item.value, values)


def test_matmul_orientation():
    m = Data.matrix([[1, 2], [3, 4], [5, 6]])
    batch = [Data.vector([1, 0]), Data.vector([0, 1])]
    assert [x.dim() for x in batch_ops.matmul_data_batch(m, batch)] == [(3,), (3,)]
    rows = [Data.vector([1, 1, 1])]
    assert batch_ops.matmul_batch_data(rows, m)[0].dim() == (2,)


def test_sum_assign_roundtrip(left, right):
    original = copy.deepcopy(left)
    batch_ops.sum_assign_batches(left, right)
    assert left == batch_ops.plus_batches(original, right)
    batch_ops.minus_assign_batches(left, right)
    assert len(left) == len(original)
    for item, before in zip(left, original):
        assert np.allclose(item.value, before.value)


def test_assign_batch_data(left):
    original = copy.deepcopy(left)
    batch_ops.sum_assign_batch_data(left, Data.one())
    batch_ops.minus_assign_batch_data(left, Data.one())
    assert left == original
    batch_ops.times_assign_batch_data(left, Data.neg_one())
    assert left == batch_ops.times_batch_data(original, Data.neg_one())


def test_times_assign_batches(left, right):
    expected = batch_ops.times_batches(left, right)
    batch_ops.times_assign_batches(left, right)
    assert left == expected


@pytest.mark.parametrize(
    "func",
    [
        batch_ops.sum_assign_batches,
        batch_ops.minus_assign_batches,
        batch_ops.times_assign_batches,
    ],
)
def test_assign_mismatch_leaves_target_unchanged(func, left, right):
    original = copy.deepcopy(left)
    with pytest.raises(BatchSizeMismatchError) as info:
        func(left, right[:1])
    assert (info.value.left_size, info.value.right_size) == (3, 1)
    assert left == original


def test_unary_batches():
    batch = [Data.matrix([[1, 2, 3], [4, 5, 6]]), Data.matrix([[1.0], [4.0]])]
    transposed = batch_ops.transpose_batch(batch)
    assert [x.dim() for x in transposed] == [(3, 2), (1, 2)]
    assert batch_ops.transpose_batch(transposed) == batch

    sums = batch_ops.element_sum_batch([Data.vector(np.zeros(3)), Data.none()])
    assert sums == [Data.zero(), Data.none()]

    roots = batch_ops.sqrt_batch([Data.vector([1.0, 4.0, 9.0])])
    assert len(roots) == 1
    assert np.allclose(roots[0].value, [1.0, 2.0, 3.0])