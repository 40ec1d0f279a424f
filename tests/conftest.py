from fractions import Fraction

import pytest

from densematrix import Rational

element_types = [float, Fraction, Rational]


@pytest.fixture(params=element_types, scope="session", ids=lambda t: t.__name__)
def element_type(request: pytest.FixtureRequest) -> type:
    """Provide session-level fixture for parametrized matrix element types."""
    return request.param


@pytest.fixture(params=[Fraction, Rational], scope="session", ids=lambda t: t.__name__)
def exact_type(request: pytest.FixtureRequest) -> type:
    """Provide session-level fixture for the exact element types only."""
    return request.param


@pytest.fixture(scope="session")
def expect(element_type):
    """Turn a flat list of expected values into something comparable with matrix elements."""

    def convert(values):
        if element_type is float:
            return pytest.approx([float(v) for v in values])
        return [Fraction(v) for v in values]

    return convert
