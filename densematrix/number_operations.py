#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""
Element-type capability contract for matrices.

A Matrix never calls arithmetic on its elements directly. It goes through the
NumberOperations instance of its element type, which supplies the additive and
multiplicative identities, conversion of input values, and the field operations
the elimination engine needs. One singleton exists per supported type:

- DoubleOperations   (float)
- IntegerOperations  (int, division-free operations only)
- FractionOperations (fractions.Fraction)
- RationalOperations (densematrix.Rational)

Further element types can be plugged in with register_operations().
"""

import numbers
from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any, Dict, Generic, Iterable, TypeVar

from .rational import Rational

N = TypeVar('N')


class NumberOperations(ABC, Generic[N]):
    """
    Operations on the numbers of one element type.

    Subclasses provide the type, its identities and value conversion. The
    arithmetic defaults to Python's operators, which every supported type
    implements.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation"""
        if cls.__dict__.get('_instance') is None:
            cls._instance = super(NumberOperations, cls).__new__(cls)
        return cls._instance

    @classmethod
    def instance(cls) -> 'NumberOperations':
        """Returns the singleton instance"""
        return cls()

    @abstractmethod
    def number_class(self) -> type:
        """Return the element type handled by this instance"""

    @abstractmethod
    def zero(self) -> N:
        """Return the additive identity"""

    @abstractmethod
    def one(self) -> N:
        """Return the multiplicative identity"""

    @abstractmethod
    def value_of(self, value: Any) -> N:
        """Convert an input value into the element type"""

    # Predicates compare by equality, never by tolerance
    def is_zero(self, number: N) -> bool:
        return number == self.zero()

    def is_one(self, number: N) -> bool:
        return number == self.one()

    # Arithmetic
    def add(self, num_a: N, num_b: N) -> N:
        return num_a + num_b

    def subtract(self, num_a: N, num_b: N) -> N:
        return num_a - num_b

    def multiply(self, num_a: N, num_b: N) -> N:
        return num_a * num_b

    def divide(self, num_a: N, num_b: N) -> N:
        return num_a / num_b

    def negate(self, number: N) -> N:
        return -number

    def invert(self, number: N) -> N:
        """Return the multiplicative inverse"""
        return self.divide(self.one(), number)

    @property
    def exact(self) -> bool:
        """Whether arithmetic on this type is free of rounding"""
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DoubleOperations(NumberOperations[float]):
    """Operations on Python floats"""

    def number_class(self) -> type:
        return float

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def value_of(self, value: Any) -> float:
        return float(value)

    @property
    def exact(self) -> bool:
        return False


class IntegerOperations(NumberOperations[int]):
    """
    Operations on Python ints.

    Integers do not form a field. Division is exact and returns a Fraction, so
    elimination on integer matrices runs on Fraction copies instead.
    """

    def number_class(self) -> type:
        return int

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def value_of(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational) and value.is_integer():
            return value.numerator
        if isinstance(value, (Fraction, float)) and value == int(value):
            return int(value)
        raise TypeError(f"Cannot convert non-integral value {value!r} to int")

    def divide(self, num_a: int, num_b: int) -> Fraction:
        return Fraction(num_a, num_b)


class FractionOperations(NumberOperations[Fraction]):
    """Operations on fractions.Fraction"""

    def number_class(self) -> type:
        return Fraction

    def zero(self) -> Fraction:
        return Fraction(0)

    def one(self) -> Fraction:
        return Fraction(1)

    def value_of(self, value: Any) -> Fraction:
        if isinstance(value, Rational):
            return value.to_fraction()
        if isinstance(value, numbers.Integral):
            return Fraction(int(value))
        return Fraction(value)


class RationalOperations(NumberOperations[Rational]):
    """Operations on densematrix.Rational"""

    def number_class(self) -> type:
        return Rational

    def zero(self) -> Rational:
        return Rational.ZERO

    def one(self) -> Rational:
        return Rational.ONE

    def value_of(self, value: Any) -> Rational:
        return Rational.value_of(value)

    def is_zero(self, number: Rational) -> bool:
        return number.is_zero()

    def is_one(self, number: Rational) -> bool:
        return number.is_one()


_REGISTRY: Dict[type, NumberOperations] = {
    float: DoubleOperations.instance(),
    int: IntegerOperations.instance(),
    Fraction: FractionOperations.instance(),
    Rational: RationalOperations.instance(),
}


def register_operations(number_class: type, operations: NumberOperations) -> None:
    """
    Make a new element type available to Matrix.

    Args:
        number_class: The element type
        operations: NumberOperations implementation for that type
    """
    if not isinstance(operations, NumberOperations):
        raise TypeError(f"expected a NumberOperations instance, got {type(operations).__name__}")
    _REGISTRY[number_class] = operations


def operations_for(number_class: type) -> NumberOperations:
    """
    Resolve the NumberOperations of an element type.

    The lookup walks the method resolution order, so subclasses such as
    numpy.float64 resolve to the operations of their registered base. bool is
    rejected rather than treated as int.

    Raises:
        TypeError: If no operations are registered for the type
    """
    if number_class is bool:
        raise TypeError("bool is not a supported matrix element type")
    for klass in number_class.__mro__:
        if klass in _REGISTRY:
            return _REGISTRY[klass]
    if issubclass(number_class, numbers.Integral):
        return _REGISTRY[int]
    raise TypeError(f"No number operations registered for element type {number_class.__name__}")


def infer_operations(values: Iterable[Any]) -> NumberOperations:
    """
    Pick the operations for a collection of input values.

    The first value whose type is not integral decides (so mixed int and
    Rational input becomes Rational); all-integral input stays int.
    """
    for value in values:
        if not isinstance(value, numbers.Integral):
            return operations_for(type(value))
    return _REGISTRY[int]
