"""Column independence, determinant, linear system and product of a small exact matrix"""
import logging
from densematrix import Matrix, Rational

logging.basicConfig(level=logging.INFO)

v1 = [Rational(1), Rational(0), Rational(5)]
v2 = [Rational(-2), Rational(2), Rational(0)]
v3 = [Rational(1), Rational(-8), Rational(-5)]

# vectors as columns
A = Matrix.from_columns([v1, v2, v3])
print('A =')
A.print()

print('\nA is' + (' ' if A.linearly_independent() else ' NOT ') + 'linearly independent.\n')
print('det(A) = ' + str(A.det()) + '\n')

b = [0, 8, 10]
x = A.solution(b)
print('Ax=b; x = ' + (' '.join(str(v) for v in x) if x is not None else 'NO SOLUTION') + '\n')

B = Matrix([[1, 2], [3, 4], [5, 6]], dtype=Rational)
print('A * B = C =')
(A * B).print()

print('\nrref(A | b) = ' + str(Matrix.from_columns([v1, v2, v3, b]).rref()))
