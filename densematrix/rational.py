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
Exact rational scalar used as a matrix element type.

Rational wraps Python's fractions.Fraction, so every value is kept in lowest
terms with a positive denominator and arithmetic never rounds. Operands may be
other Rationals, ints or Fractions; floats are rejected to keep results exact
(convert them explicitly with Rational.value_of).
"""

import numbers
from fractions import Fraction
from typing import Union

from .names import ERR_ZERO_DENOMINATOR, ERR_ZERO_DIVISOR

Exact = Union['Rational', int, Fraction]


class Rational:
    """
    Exact rational number with immutable value semantics.

    Example:
        >>> Rational(3, 2) / Rational(2, 7)
        Rational(21, 4)
        >>> str(Rational(10, 2))
        '5'
    """

    __slots__ = ('_fraction',)

    def __init__(self, numerator: Union[int, 'Rational', Fraction] = 0, denominator: int = 1):
        """
        Args:
            numerator: Integer numerator, or a Rational/Fraction to copy
            denominator: Integer denominator (default 1)

        Raises:
            ValueError: If denominator is zero
            TypeError: If numerator or denominator are not integral
        """
        if isinstance(numerator, (Rational, Fraction)):
            if denominator != 1:
                raise TypeError("A denominator can only be given with an integer numerator")
            self._fraction = numerator._fraction if isinstance(numerator, Rational) else numerator
            return
        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError(f"Rational requires integer numerator and denominator, got "
                            f"{type(numerator).__name__} and {type(denominator).__name__}")
        if denominator == 0:
            raise ValueError(ERR_ZERO_DENOMINATOR)
        self._fraction = Fraction(numerator, denominator)

    @property
    def numerator(self) -> int:
        return self._fraction.numerator

    @property
    def denominator(self) -> int:
        return self._fraction.denominator

    def to_fraction(self) -> Fraction:
        return self._fraction

    @staticmethod
    def _coerce(other):
        """Returns the Fraction behind an exact operand, or None for unsupported types"""
        if isinstance(other, Rational):
            return other._fraction
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return Fraction(other)
        return None

    # Arithmetic
    def add(self, other: Exact) -> 'Rational':
        """Return self + other"""
        return Rational(self._fraction + self._require(other))

    def subtract(self, other: Exact) -> 'Rational':
        """Return self - other"""
        return Rational(self._fraction - self._require(other))

    def multiply(self, other: Exact) -> 'Rational':
        """Return self * other"""
        return Rational(self._fraction * self._require(other))

    def divide(self, other: Exact) -> 'Rational':
        """
        Return self / other.

        Raises:
            ValueError: If other is zero
        """
        divisor = self._require(other)
        if divisor == 0:
            if isinstance(other, Rational):
                raise ValueError(ERR_ZERO_DIVISOR)
            raise ValueError("Cannot divide by zero!")
        return Rational(self._fraction / divisor)

    def negate(self) -> 'Rational':
        return Rational(-self._fraction)

    def invert(self) -> 'Rational':
        """Return the multiplicative inverse 1/self"""
        if self._fraction == 0:
            raise ValueError(ERR_ZERO_DIVISOR)
        return Rational(1 / self._fraction)

    def abs(self) -> 'Rational':
        return Rational(abs(self._fraction))

    def _require(self, other) -> Fraction:
        value = self._coerce(other)
        if value is None:
            raise TypeError(f"unsupported operand type for Rational: '{type(other).__name__}'")
        return value

    # Predicates
    def signum(self) -> int:
        """Return sign: -1, 0, or 1"""
        return (self._fraction > 0) - (self._fraction < 0)

    def is_zero(self) -> bool:
        return self._fraction == 0

    def is_one(self) -> bool:
        return self._fraction == 1

    def is_integer(self) -> bool:
        return self._fraction.denominator == 1

    # Python operator overloading
    def __add__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Rational(value - self._fraction)

    def __mul__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other):
        if self._coerce(other) is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Rational(value).divide(self)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # Comparison
    def __eq__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._fraction == value

    def __lt__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._fraction < value

    def __le__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._fraction <= value

    def __gt__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._fraction > value

    def __ge__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._fraction >= value

    def __hash__(self) -> int:
        return hash(self._fraction)

    def __bool__(self) -> bool:
        return self._fraction != 0

    # Conversion
    def __float__(self) -> float:
        return float(self._fraction)

    def __int__(self) -> int:
        return int(self._fraction)

    def __str__(self) -> str:
        if self._fraction.denominator == 1:
            return str(self._fraction.numerator)
        return f"{self._fraction.numerator}/{self._fraction.denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._fraction.numerator}, {self._fraction.denominator})"

    def write_to(self, writer) -> None:
        """Write the fraction rendering to a text writer"""
        writer.write(str(self))

    @staticmethod
    def value_of(value: Union[int, float, str, Fraction, 'Rational']) -> 'Rational':
        """
        Factory method to create a Rational from various types.

        Strings may be "num/den" or anything Fraction accepts ("0.25", "3").
        Floats are converted to the closest fraction with a bounded denominator.
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return Rational(value)
        if isinstance(value, str):
            if '/' in value:
                parts = value.split('/')
                if len(parts) != 2:
                    raise ValueError(f"Invalid fraction format: {value}")
                return Rational(int(parts[0]), int(parts[1]))
            return Rational(Fraction(value))
        if isinstance(value, float):
            return Rational(Fraction(value).limit_denominator())
        if isinstance(value, numbers.Integral):
            return Rational(int(value))
        raise TypeError(f"Cannot convert {type(value).__name__} to Rational")


Rational.ZERO = Rational(0)
Rational.ONE = Rational(1)
