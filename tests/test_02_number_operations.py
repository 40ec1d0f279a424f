"""Element type capability contract."""
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from densematrix import (DoubleOperations, FractionOperations, IntegerOperations, Matrix, NumberOperations, Rational,
                         RationalOperations, operations_for, register_operations)
from densematrix.number_operations import infer_operations


def test_singletons():
    assert DoubleOperations.instance() is DoubleOperations()
    assert RationalOperations.instance() is RationalOperations.instance()
    assert DoubleOperations.instance() is not FractionOperations.instance()


def test_lookup_by_type():
    assert operations_for(float) is DoubleOperations.instance()
    assert operations_for(int) is IntegerOperations.instance()
    assert operations_for(Fraction) is FractionOperations.instance()
    assert operations_for(Rational) is RationalOperations.instance()
    # subclasses resolve through their base class
    assert operations_for(np.float64) is DoubleOperations.instance()
    assert operations_for(np.int32) is IntegerOperations.instance()


def test_lookup_rejects_unknown_types():
    with pytest.raises(TypeError):
        operations_for(str)
    with pytest.raises(TypeError):
        operations_for(bool)


def test_identities(element_type):
    ops = operations_for(element_type)
    assert ops.number_class() is element_type
    assert ops.is_zero(ops.zero())
    assert ops.is_one(ops.one())
    assert not ops.is_zero(ops.one())
    assert isinstance(ops.zero(), element_type)


def test_arithmetic(element_type):
    ops = operations_for(element_type)
    a = ops.value_of(3)
    b = ops.value_of(4)
    assert ops.add(a, b) == 7
    assert ops.subtract(a, b) == -1
    assert ops.multiply(a, b) == 12
    assert ops.divide(a, b) == Fraction(3, 4)
    assert ops.negate(a) == -3
    assert ops.invert(b) == Fraction(1, 4)


def test_exactness_flag():
    assert not DoubleOperations.instance().exact
    assert FractionOperations.instance().exact
    assert RationalOperations.instance().exact


def test_integer_division_is_exact():
    ops = IntegerOperations.instance()
    assert ops.divide(1, 3) == Fraction(1, 3)
    assert ops.value_of(4.0) == 4
    with pytest.raises(TypeError):
        ops.value_of(2.5)


def test_value_of_conversions():
    assert RationalOperations.instance().value_of("2/4") == Rational(1, 2)
    assert FractionOperations.instance().value_of(Rational(1, 3)) == Fraction(1, 3)
    assert DoubleOperations.instance().value_of(Rational(1, 4)) == 0.25


def test_infer_operations():
    assert infer_operations([1, 2, 3]) is IntegerOperations.instance()
    assert infer_operations([1, Rational(1, 2)]) is RationalOperations.instance()
    assert infer_operations([1, 2.5]) is DoubleOperations.instance()
    assert infer_operations([Fraction(1, 2), 1]) is FractionOperations.instance()


class DecimalOperations(NumberOperations):
    """Minimal custom element type used to test registration"""

    def number_class(self):
        return Decimal

    def zero(self):
        return Decimal(0)

    def one(self):
        return Decimal(1)

    def value_of(self, value):
        return Decimal(value)


def test_register_operations():
    with pytest.raises(TypeError):
        register_operations(Decimal, object())
    register_operations(Decimal, DecimalOperations())
    assert isinstance(operations_for(Decimal), DecimalOperations)
    m = Matrix([[Decimal(2), Decimal(0)], [Decimal(0), Decimal(4)]])
    assert m.dtype is Decimal
    assert m.det() == Decimal(8)
