import numpy as np
import pytest

from gradnet.arithmetic import (
    ShapeMismatchError,
    element_sum,
    matmul,
    minus,
    minus_inplace,
    plus,
    plus_inplace,
    square_root,
    times,
    times_inplace,
    transpose,
)


@pytest.fixture
def vector():
    return np.array([0.7, 0.1, 1.0], dtype=np.float32)


@pytest.fixture
def matrix():
    return np.array([[1.0, 2.0, 3.0], [3.0, 2.0, 1.0]], dtype=np.float32)


def test_plus_scalar_broadcast_is_commutative(vector):
    assert np.array_equal(plus(0.5, vector), plus(vector, 0.5))


def test_plus_then_minus_round_trip(vector):
    other = np.array([0.3, 0.8, 0.2], dtype=np.float32)
    np.testing.assert_allclose(minus(plus(vector, other), other), vector, rtol=1e-6)


def test_plus_matrices_round_trip(matrix):
    doubled = plus(matrix, matrix)
    np.testing.assert_allclose(minus(doubled, matrix), matrix)


def test_plus_mismatched_vectors_raises(vector):
    with pytest.raises(ShapeMismatchError):
        plus(vector, np.zeros(2, dtype=np.float32))


def test_plus_vector_matrix_unsupported(vector, matrix):
    with pytest.raises(TypeError):
        plus(vector, matrix)


def test_results_are_float32(vector):
    assert plus(vector, 1).dtype == np.float32
    assert times(vector, vector).dtype == np.float32


def test_minus_mixed_is_right_minus_left(vector):
    scalar = 0.25
    np.testing.assert_allclose(minus(scalar, vector), -minus(vector, scalar), rtol=1e-6)
    restored = plus(minus(vector, scalar), vector)
    np.testing.assert_allclose(restored, np.full_like(vector, scalar), atol=1e-6)


def test_minus_matrix_scalar_orientation(matrix):
    scalar = 2.0
    np.testing.assert_allclose(plus(minus(scalar, matrix), scalar), matrix)


def test_minus_scalars(vector):
    assert minus(3.0, 3.0) == 0.0


def test_times_by_one_is_identity(vector, matrix):
    assert np.array_equal(times(vector, 1.0), vector)
    assert np.array_equal(times(1.0, matrix), matrix)


def test_times_mismatched_matrices_raises(matrix):
    with pytest.raises(ShapeMismatchError):
        times(matrix, matrix.T)


def test_matmul_identity(matrix):
    identity = np.eye(3, dtype=np.float32)
    assert np.array_equal(matmul(matrix, identity), matrix)


def test_matmul_matrix_vector_identity(vector):
    identity = np.eye(3, dtype=np.float32)
    assert np.array_equal(matmul(identity, vector), vector)
    assert np.array_equal(matmul(vector, identity), vector)


def test_matmul_vectors_is_outer_product(vector):
    other = np.array([2.0, -1.0], dtype=np.float32)
    outer = matmul(vector, other)
    assert outer.shape == (vector.shape[0], other.shape[0])
    assert np.array_equal(outer, transpose(matmul(other, vector)))


def test_matmul_vector_matrix_consistent_with_transpose(matrix):
    row = np.array([1.0, -2.0], dtype=np.float32)
    np.testing.assert_allclose(matmul(row, matrix), matmul(transpose(matrix), row))


def test_matmul_mismatches_raise(matrix, vector):
    with pytest.raises(ShapeMismatchError):
        matmul(matrix, matrix)
    with pytest.raises(ShapeMismatchError):
        matmul(vector, matrix)
    with pytest.raises(ShapeMismatchError):
        matmul(matrix, np.zeros(2, dtype=np.float32))


def test_matmul_scalar_unsupported(vector):
    with pytest.raises(TypeError):
        matmul(2.0, vector)


def test_plus_inplace_mutates_and_minus_undoes(vector):
    original = vector.copy()
    other = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    result = plus_inplace(vector, other)
    assert result is vector
    np.testing.assert_allclose(vector, plus(original, other))
    minus_inplace(vector, other)
    np.testing.assert_allclose(vector, original, rtol=1e-6)


def test_minus_inplace_scalar_subtracts_from_elements(matrix):
    original = matrix.copy()
    minus_inplace(matrix, 1.5)
    plus_inplace(matrix, 1.5)
    np.testing.assert_allclose(matrix, original)


def test_times_inplace_by_one_keeps_values(matrix):
    original = matrix.copy()
    assert times_inplace(matrix, 1.0) is matrix
    assert np.array_equal(matrix, original)


def test_inplace_mismatch_leaves_target(vector):
    original = vector.copy()
    with pytest.raises(ShapeMismatchError):
        plus_inplace(vector, np.ones(4, dtype=np.float32))
    assert np.array_equal(vector, original)


def test_inplace_scalar_target_returns_value(vector):
    assert plus_inplace(1.0, 2.0) == plus(1.0, 2.0)
    with pytest.raises(TypeError):
        times_inplace(1.0, vector)


def test_inplace_vector_matrix_unsupported(vector, matrix):
    with pytest.raises(TypeError):
        minus_inplace(matrix, vector)


def test_transpose_twice_is_identity(matrix):
    assert np.array_equal(transpose(transpose(matrix)), matrix)
    assert transpose(matrix).shape == matrix.shape[::-1]


def test_transpose_vector_is_copy(vector):
    result = transpose(vector)
    assert np.array_equal(result, vector)
    result[0] = 42.0
    assert vector[0] != 42.0


def test_element_sum_invariant_under_transpose(matrix):
    assert element_sum(matrix) == element_sum(transpose(matrix))


def test_element_sum_of_ones():
    assert element_sum(np.ones((2, 3), dtype=np.float32)) == 6.0


def test_element_sum_scalar_is_itself():
    assert element_sum(0.5) == np.float32(0.5)


def test_square_root_of_square_is_abs():
    values = np.array([-2.0, 0.0, 3.0], dtype=np.float32)
    np.testing.assert_allclose(square_root(times(values, values)), np.abs(values))


def test_square_root_negative_is_nan():
    assert np.isnan(square_root(-1.0))
    assert np.isnan(square_root(np.array([-4.0], dtype=np.float32))[0])


def test_square_root_does_not_modify_input(matrix):
    original = matrix.copy()
    square_root(matrix)
    assert np.array_equal(matrix, original)


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        plus([1.0, 2.0], 1.0)