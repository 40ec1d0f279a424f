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
Gaussian elimination on densematrix.Matrix.

The Gauss class reduces matrices to Reduced Row Echelon Form (RREF) using only
the three elementary row operations of Matrix (swap_rows, scale_row, add_row)
and derives determinant, rank, linear independence, linear system solutions,
inverses and nullspaces from the result.

Pivot selection is the plain column sweep: for each column the first row at or
below the current pivot row whose entry is not equal to zero becomes the pivot.
Zero tests are exact comparisons with the element type's zero, no tolerance is
applied. Exact element types (Rational, Fraction) give exact results; float
matrices carry the usual rounding. Integer matrices are eliminated on Fraction
copies, so no operation ever truncates.
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, List, Optional, Sequence

from .matrix import Matrix
from .number_operations import IntegerOperations

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class RrefResult:
    """
    RREF of a matrix together with the trace needed to recover its determinant.

    Attributes:
        matrix: The matrix in reduced row echelon form
        swap_count: Number of row swaps performed
        scale_product: Product of all pivots that were scaled to one
    """
    matrix: Matrix
    swap_count: int
    scale_product: Any


class Gauss:
    """
    Matrix operations based on Gaussian elimination.

    None of the operations modifies its input matrix.
    """

    _instance = None

    @classmethod
    def instance(cls) -> 'Gauss':
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @staticmethod
    def _working_copy(matrix: Matrix) -> Matrix:
        """Independent copy to eliminate on, int matrices become Fraction matrices"""
        if isinstance(matrix.get_number_operations(), IntegerOperations):
            return matrix.astype(Fraction)
        return matrix.copy()

    # Core elimination
    def rref_traced(self, matrix: Matrix) -> RrefResult:
        """
        Compute the reduced row echelon form and record swaps and pivot scalings.

        Each pivot that is not one is multiplied into scale_product before its row
        is scaled by 1/pivot, so that
        det(A) = (-1)**swap_count * scale_product * prod(diag(rref)).

        Args:
            matrix: Input matrix (left unchanged)

        Returns:
            RrefResult with the reduced matrix, swap count and scale product
        """
        m = self._working_copy(matrix)
        ops = m.get_number_operations()
        rows, cols = m.shape
        swap_count = 0
        scale_product = ops.one()

        row = col = 0
        while row < rows and col < cols:
            pivot_row = self._find_pivot_row(m, row, col)
            if pivot_row is None:
                # all-zero column, keep the pivot row for the next column
                col += 1
                continue

            if pivot_row != row:
                m.swap_rows(pivot_row, row)
                swap_count += 1

            pivot = m.at(row, col)
            if not ops.is_one(pivot):
                scale_product = ops.multiply(scale_product, pivot)
                m.scale_row(row, ops.invert(pivot))
                m.set_at(row, col, ops.one())

            for other in range(rows):
                if other == row:
                    continue
                value = m.at(other, col)
                if not ops.is_zero(value):
                    m.add_row(row, other, ops.negate(value))
                    m.set_at(other, col, ops.zero())

            LOG.debug(f"Pivot at ({row}, {col}) with value {pivot}")
            row += 1
            col += 1

        if not ops.exact:
            self._clear_negative_zeros(m)
        LOG.debug(f"RREF of {rows}x{cols} matrix: {row} pivots, {swap_count} swaps, scale product {scale_product}")
        return RrefResult(m, swap_count, scale_product)

    @staticmethod
    def _clear_negative_zeros(matrix: Matrix) -> None:
        """Replace -0.0 left behind by negative scale factors with the element type's zero"""
        ops = matrix.get_number_operations()
        zero = ops.zero()
        for row in range(matrix.get_row_count()):
            for col in range(matrix.get_column_count()):
                if ops.is_zero(matrix.at(row, col)):
                    matrix.set_at(row, col, zero)

    def rref(self, matrix: Matrix) -> Matrix:
        """Reduced row echelon form of matrix as a new matrix"""
        return self.rref_traced(matrix).matrix

    @staticmethod
    def _find_pivot_row(matrix: Matrix, start_row: int, col: int) -> Optional[int]:
        """First row at or below start_row with a non-zero entry in col, None if there is none"""
        ops = matrix.get_number_operations()
        for row in range(start_row, matrix.get_row_count()):
            if not ops.is_zero(matrix.at(row, col)):
                return row
        return None

    @staticmethod
    def _pivot_columns(reduced: Matrix, col_count: Optional[int] = None) -> List[int]:
        """
        Leading column of every non-zero row of a matrix in RREF.

        Only the first col_count columns are searched when given, so that the
        augmented part of [A | b] does not count as a pivot.
        """
        ops = reduced.get_number_operations()
        cols = reduced.get_column_count() if col_count is None else col_count
        pivots = []
        for row in range(reduced.get_row_count()):
            for col in range(cols):
                if not ops.is_zero(reduced.at(row, col)):
                    pivots.append(col)
                    break
        return pivots

    # Derived operations
    def determinant(self, matrix: Matrix) -> Any:
        """
        Determinant of a square matrix.

        A 1x1 matrix returns its only element. Otherwise the determinant is
        rebuilt from the elimination trace: swaps negate it, scaling a row by k
        multiplies it by k, adding multiples of rows leaves it unchanged.
        Integer matrices return an int.

        Raises:
            ValueError: If the matrix is not square
        """
        if not matrix.is_square():
            raise ValueError(f"Determinant requires a square matrix, got "
                             f"{matrix.get_row_count()}x{matrix.get_column_count()}")
        if matrix.shape == (1, 1):
            return matrix.at(0, 0)

        result = self.rref_traced(matrix)
        reduced = result.matrix
        ops = reduced.get_number_operations()
        det = ops.one()
        for i in range(reduced.get_row_count()):
            det = ops.multiply(det, reduced.at(i, i))
        if result.swap_count % 2 == 1:
            det = ops.negate(det)
        det = ops.multiply(det, result.scale_product)

        if isinstance(matrix.get_number_operations(), IntegerOperations):
            return int(det)
        return det

    def rank(self, matrix: Matrix) -> int:
        """Number of non-zero rows in the RREF of matrix"""
        return len(self._pivot_columns(self.rref(matrix)))

    def nullity(self, matrix: Matrix) -> int:
        """Dimension of the nullspace, column count minus rank"""
        return matrix.get_column_count() - self.rank(matrix)

    def linearly_independent(self, matrix: Matrix) -> bool:
        """
        True if the columns of matrix are linearly independent.

        The columns are independent iff the rank equals the column count.
        """
        return self.rank(matrix) == matrix.get_column_count()

    def solve(self, matrix: Matrix, b: Sequence) -> Optional[List[Any]]:
        """
        Solve matrix * x = b.

        The system is reduced as the augmented matrix [A | b]. A row whose left
        part is zero but whose right hand side is not makes the system
        inconsistent. For consistent systems with free variables, those are set
        to zero and a particular solution is returned.

        Args:
            matrix: Coefficient matrix A (R x C)
            b: Right hand side of length R, a sequence or an R x 1 Matrix

        Returns:
            The solution x as a list of length C, or None if no solution exists

        Raises:
            ValueError: If the length of b does not match the row count
        """
        if isinstance(b, Matrix):
            if b.get_column_count() != 1:
                raise ValueError(f"Right hand side must be a column vector, got {b.get_row_count()}x"
                                 f"{b.get_column_count()}")
            b = b.to_flat_list()
        b = list(b)
        rows, cols = matrix.shape
        if len(b) != rows:
            raise ValueError(f"Right hand side has {len(b)} elements, expected {rows}")

        coefficients = self._working_copy(matrix)
        ops = coefficients.get_number_operations()
        data = coefficients.to_flat_list() + [ops.value_of(v) for v in b]
        # column-major storage, the right hand side is simply the last column
        reduced = self.rref(Matrix._from_storage(rows, cols + 1, data, ops))

        solution = [ops.zero()] * cols
        pivot_count = 0
        for row in range(rows):
            lead = next((col for col in range(cols + 1) if not ops.is_zero(reduced.at(row, col))), None)
            if lead is None:
                continue
            if lead == cols:
                LOG.debug(f"Inconsistent system, row {row} reduces to 0 = {reduced.at(row, cols)}")
                return None
            solution[lead] = reduced.at(row, cols)
            pivot_count += 1

        if pivot_count < cols:
            LOG.warning(f"System has {cols - pivot_count} free variable(s), returning the solution with "
                        "free variables set to zero.")
        return solution

    def invert(self, matrix: Matrix) -> Matrix:
        """
        Inverse of a square matrix, the right half of RREF([A | I]).

        Raises:
            ValueError: If matrix is not square or singular
        """
        if not matrix.is_square():
            raise ValueError(f"Matrix must be square for inversion: "
                             f"{matrix.get_row_count()}x{matrix.get_column_count()}")
        n = matrix.get_row_count()
        working = self._working_copy(matrix)
        ops = working.get_number_operations()
        identity = Matrix.identity(n, dtype=ops)
        augmented = Matrix._from_storage(n, 2 * n, working.to_flat_list() + identity.to_flat_list(), ops)

        reduced = self.rref(augmented)
        rank = len(self._pivot_columns(reduced, n))
        if rank < n:
            raise ValueError(f"Matrix is singular (rank {rank} < {n})")
        return Matrix._from_storage(n, n, reduced.to_flat_list()[n * n:], ops)

    def nullspace(self, matrix: Matrix) -> Optional[Matrix]:
        """
        Basis of the nullspace of matrix.

        For every free column f of the RREF, the basis vector has a one at f and
        minus the RREF entries of column f at the pivot positions.

        Returns:
            Matrix whose columns form a basis of the nullspace, or None if the
            nullspace is trivial
        """
        reduced = self.rref(matrix)
        ops = reduced.get_number_operations()
        cols = reduced.get_column_count()
        pivots = self._pivot_columns(reduced)
        free = [col for col in range(cols) if col not in pivots]
        if not free:
            return None

        basis = []
        for f in free:
            vector = [ops.zero()] * cols
            vector[f] = ops.one()
            for row, pivot_col in enumerate(pivots):
                vector[pivot_col] = ops.negate(reduced.at(row, f))
            basis.append(vector)
        LOG.debug(f"Nullspace of dimension {len(basis)}")
        return Matrix.from_columns(basis, dtype=ops)
