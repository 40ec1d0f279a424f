"""Test if package imports successfully."""


def test1():
    import densematrix
    m = densematrix.Matrix([[1, 2], [3, 4]], dtype=densematrix.Rational)
    assert m.det() == -2
