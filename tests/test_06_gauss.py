"""Elimination engine and the operations derived from it."""
import logging
from fractions import Fraction

import numpy as np
import pytest
import scipy.linalg

from densematrix import ROW_MAJOR, DisableLogger, Gauss, Matrix, Rational, RrefResult

SYSTEM = [[1, -2, 1], [0, 2, -8], [5, 0, -5]]
AUGMENTED = [[1, -2, 1, 0], [0, 2, -8, 8], [5, 0, -5, 10]]
SQUARE4 = [[1, -2, 1, 0], [0, 2, -8, 8], [5, 0, -5, 10], [9, -5, -5, 6]]


def test_rref_of_augmented_system(element_type, expect):
    reduced = Matrix(AUGMENTED, dtype=element_type).rref()
    assert reduced.to_flat_list(ROW_MAJOR) == expect([1, 0, 0, 1,
                                                      0, 1, 0, 0,
                                                      0, 0, 1, -1])


def test_rref_is_idempotent(exact_type):
    reduced = Matrix(SQUARE4[:3], dtype=exact_type).rref()
    assert reduced.rref() == reduced


def test_rref_leaves_input_unchanged(element_type):
    m = Matrix(AUGMENTED, dtype=element_type)
    before = m.copy()
    m.rref()
    m.rank()
    m.solution([1, 2, 3])
    assert m == before


def test_rref_skips_zero_columns():
    m = Matrix([[0, 1, 2], [0, 2, 4]], dtype=Rational)
    assert m.rref().tolist() == [[0, 1, 2], [0, 0, 0]]


def test_rref_traced_records_swaps_and_scaling():
    result = Gauss.instance().rref_traced(Matrix([[0, 2], [3, 0]], dtype=Rational))
    assert isinstance(result, RrefResult)
    assert result.swap_count == 1
    assert result.scale_product == 6
    assert result.matrix == Matrix.identity(2, dtype=Rational)


def test_float_rref_has_no_negative_zeros():
    # scaling by 1/-2 would turn the zeros of the pivot row into -0.0
    reduced = Matrix([[0.0, -2.0, 0.0], [0.0, 0.0, 3.0]]).rref()
    assert reduced.tolist() == [[0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    assert str(reduced) == "{ [0.0, 1.0, 0.0] [0.0, 0.0, 1.0] }"


def test_rref_of_int_matrix_is_exact():
    reduced = Matrix([[2, 1], [1, 1]]).rref_traced()
    assert reduced.matrix.dtype is Fraction
    # pivots 2 and 1/2, their product is the determinant
    assert reduced.scale_product == 1
    assert Matrix([[2, 1]]).rref().tolist() == [[1, Fraction(1, 2)]]


def test_gauss_is_a_singleton():
    assert Gauss.instance() is Gauss.instance()


# Determinant
def test_determinant(element_type):
    det = Matrix(SQUARE4, dtype=element_type).det()
    if element_type is float:
        assert det == pytest.approx(-480)
    else:
        assert det == -480
        assert isinstance(det, element_type)


def test_determinant_of_int_matrix_is_int():
    det = Matrix(SQUARE4).determinant()
    assert det == -480
    assert type(det) is int


def test_singular_determinant(element_type):
    m = Matrix([[1, 2], [2, 4]], dtype=element_type)
    assert m.det() == 0
    assert not m.linearly_independent()


def test_determinant_of_identity(element_type):
    for n in (1, 2, 5):
        assert Matrix.identity(n, dtype=element_type).det() == 1


def test_row_swap_negates_determinant(exact_type):
    m = Matrix([[2, 7], [3, 1]], dtype=exact_type)
    swapped = m.copy()
    swapped.swap_rows(0, 1)
    assert swapped.det() == -m.det() == 19


def test_determinant_1x1():
    assert Matrix([[Rational(-3, 4)]]).det() == Rational(-3, 4)
    assert Matrix([[0.0]]).det() == 0.0


def test_determinant_requires_square():
    with pytest.raises(ValueError):
        Matrix(AUGMENTED).det()


def test_float_determinant_matches_scipy():
    values = [[4.0, -2.0, 1.5], [3.0, 6.0, -4.0], [2.0, 1.0, 8.0]]
    assert Matrix(values).det() == pytest.approx(scipy.linalg.det(np.array(values)))


# Rank and independence
def test_rank_and_nullity(element_type):
    m = Matrix([[1, 2, 3], [2, 4, 6], [1, 0, 1]], dtype=element_type)
    assert m.rank() == 2
    assert Gauss.instance().nullity(m) == 1


def test_independence_is_tested_over_columns():
    # 3 independent columns in R^4
    assert Matrix.from_columns([[1, 0, 0, 0], [0, 1, 0, 1], [1, 1, 1, 1]]).linearly_independent()
    # more columns than rows can never be independent
    assert not Matrix([[1, 0, 1], [0, 1, 1]]).linearly_independent()


def test_independence_of_rational_vectors():
    vectors = [[Rational(1), Rational(2), Rational(3)],
               [Rational(-2), Rational(3), Rational(1, 2)],
               [Rational(1, 3), Rational(5), Rational(0)]]
    assert Matrix.from_columns(vectors).linearly_independent()
    vectors[2] = [Rational(-1), Rational(5), Rational(7, 2)]
    assert not Matrix.from_columns(vectors).linearly_independent()


# Linear systems
def test_solve(element_type, expect):
    x = Matrix(SYSTEM, dtype=element_type).solution([0, 8, 10])
    assert x == expect([1, 0, -1])


def test_solve_int_system_returns_fractions():
    x = Matrix([[2, 0], [0, 4]]).solve([1, 1])
    assert x == [Fraction(1, 2), Fraction(1, 4)]


def test_solve_accepts_column_matrix():
    b = Matrix.from_columns([[0, 8, 10]], dtype=Rational)
    assert Matrix(SYSTEM, dtype=Rational).solve(b) == [1, 0, -1]


def test_solve_rejects_wrong_length():
    with pytest.raises(ValueError):
        Matrix(SYSTEM).solve([1, 2])
    with pytest.raises(ValueError):
        Matrix(SYSTEM).solve(Matrix(3, 2))


def test_inconsistent_system_has_no_solution(element_type):
    m = Matrix([[1, 2], [2, 4]], dtype=element_type)
    assert m.solution([1, 3]) is None


def test_underdetermined_system_warns(caplog, exact_type):
    m = Matrix([[1, 1, 1], [0, 1, 2]], dtype=exact_type)
    with caplog.at_level(logging.WARNING, logger="densematrix.gauss"):
        x = m.solve([3, 1])
    assert x == [2, 1, 0]
    assert "free variable" in caplog.text


def test_float_solution_matches_scipy():
    a = [[3.0, 2.0, -1.0], [2.0, -2.0, 4.0], [-1.0, 0.5, -1.0]]
    b = [1.0, -2.0, 0.0]
    expected = scipy.linalg.solve(np.array(a), np.array(b))
    assert Matrix(a).solve(b) == pytest.approx(list(expected))


# Inverse and nullspace
def test_inverse(exact_type):
    m = Matrix(SYSTEM, dtype=exact_type)
    inverse = m.inverse()
    assert m * inverse == Matrix.identity(3, dtype=exact_type)
    assert inverse * m == Matrix.identity(3, dtype=exact_type)


def test_inverse_of_float_matrix():
    m = Matrix([[4.0, 7.0], [2.0, 6.0]])
    assert m.inverse().to_flat_list(ROW_MAJOR) == pytest.approx([0.6, -0.7, -0.2, 0.4])


def test_inverse_errors():
    with pytest.raises(ValueError):
        Matrix([[1, 2], [2, 4]]).inverse()
    with pytest.raises(ValueError):
        Matrix(AUGMENTED).inverse()


def test_nullspace(exact_type):
    m = Matrix([[1, 2, 3], [2, 4, 6]], dtype=exact_type)
    kernel = m.nullspace()
    assert kernel.shape == (3, 2)
    assert m * kernel == Matrix(2, 2, dtype=exact_type)
    assert kernel.col_at(0).tolist() == [-2, 1, 0]
    assert kernel.col_at(1).tolist() == [-3, 0, 1]


def test_trivial_nullspace():
    assert Matrix(SYSTEM).nullspace() is None


# Logging
def test_elimination_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="densematrix.gauss"):
        Matrix(SYSTEM).rref()
    assert "Pivot at (0, 0)" in caplog.text


def test_disable_logger(caplog):
    with caplog.at_level(logging.DEBUG, logger="densematrix.gauss"):
        with DisableLogger():
            Matrix(SYSTEM).rref()
    assert caplog.text == ""
