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
Dense matrix over a generic element type.

The matrix is stored as one flat list in column-major order: element (r, c)
lives at index c * rows + r. All element arithmetic goes through the
NumberOperations of the element type, so the same class serves float, int,
fractions.Fraction and Rational matrices. Elimination based operations (RREF,
determinant, rank, solve, ...) are provided by densematrix.gauss and exposed
here as convenience methods.
"""

import copy
import io
import numbers
import sys
from collections.abc import Sequence
from typing import Any, Iterable, List, Optional, Tuple, Union

import numpy as np

from .names import COLUMN_MAJOR, DEFAULT_DTYPE, DEFAULT_ORDER, ERR_ZERO_DIMENSION, ORDERS, ROW_MAJOR
from .number_operations import IntegerOperations, NumberOperations, infer_operations, operations_for
from .views import ColumnView, RowView, check_index

DType = Union[type, NumberOperations, None]


def _resolve_operations(dtype: DType, values: Iterable[Any] = ()) -> NumberOperations:
    """NumberOperations for an explicit dtype, or inferred from the values"""
    if isinstance(dtype, NumberOperations):
        return dtype
    if dtype is not None:
        return operations_for(dtype)
    return infer_operations(values)


def _check_dimensions(rows: Any, cols: Any) -> None:
    for name, value in (('row', rows), ('column', cols)):
        if not isinstance(value, numbers.Integral) or isinstance(value, bool):
            raise TypeError(f"{name} count must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"negative {name} count: {value}")
    if rows == 0 or cols == 0:
        raise ValueError(ERR_ZERO_DIMENSION)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, (str, bytes))


class Matrix:
    """
    Fixed-size dense matrix.

    Supported constructor signatures:
    - Matrix(rows, cols, dtype=float) - zero matrix
    - Matrix(rows, cols, elements, order=COLUMN_MAJOR, dtype=None) - from a flat list
    - Matrix(nested_rows, dtype=None) - from a list of rows
    - Matrix(matrix) - deep copy
    - Matrix(ndarray) - from a two-dimensional numpy array

    Example:
        >>> m = Matrix(2, 2, [0, 1, 2, 3])
        >>> m[1, 0], m[0, 1]
        (1, 2)
        >>> Matrix([[1, 2], [3, 4]]).det()
        -2
    """

    __hash__ = None

    def __init__(self, *args, dtype: DType = None, order: str = DEFAULT_ORDER):
        if len(args) == 1 and isinstance(args[0], Matrix):
            self._init_from_matrix(args[0], dtype)
        elif len(args) == 1 and isinstance(args[0], np.ndarray):
            self._init_from_numpy(args[0], dtype)
        elif len(args) == 1:
            self._init_from_rows(args[0], dtype)
        elif len(args) == 2:
            _check_dimensions(args[0], args[1])
            ops = _resolve_operations(dtype if dtype is not None else DEFAULT_DTYPE)
            self._set_storage(int(args[0]), int(args[1]), [ops.zero()] * (args[0] * args[1]), ops)
        elif len(args) == 3:
            self._init_from_flat(args[0], args[1], args[2], dtype, order)
        else:
            raise TypeError(f"Invalid constructor arguments: {args}")

    def _set_storage(self, rows: int, cols: int, data: List[Any], ops: NumberOperations) -> None:
        self._row_count = rows
        self._column_count = cols
        self._data = data
        self._ops = ops

    def _init_from_matrix(self, other: 'Matrix', dtype: DType) -> None:
        if dtype is None:
            self._set_storage(other._row_count, other._column_count, list(other._data), other._ops)
        else:
            ops = _resolve_operations(dtype)
            self._set_storage(other._row_count, other._column_count, [ops.value_of(v) for v in other._data], ops)

    def _init_from_flat(self, rows: int, cols: int, elements: Iterable[Any], dtype: DType, order: str) -> None:
        _check_dimensions(rows, cols)
        if order not in ORDERS:
            raise ValueError(f"order must be one of {ORDERS}, got {order!r}")
        elements = list(elements)
        if len(elements) != rows * cols:
            raise ValueError("Initializer list does not match matrix dimensions: "
                             f"expected {rows * cols} elements, but found {len(elements)}")
        ops = _resolve_operations(dtype, elements)
        data = [ops.value_of(v) for v in elements]
        if order == ROW_MAJOR:
            data = [data[r * cols + c] for c in range(cols) for r in range(rows)]
        self._set_storage(int(rows), int(cols), data, ops)

    def _init_from_rows(self, rows: Any, dtype: DType) -> None:
        """Initialize from a sequence of row sequences"""
        if not _is_sequence(rows):
            raise ValueError(f"expected a sequence of rows, got {type(rows).__name__}")
        if len(rows) == 0:
            raise ValueError("Matrix requires at least one row.")
        for i, row in enumerate(rows):
            if not _is_sequence(row):
                raise ValueError(f"row {i} is not a sequence: {row!r}")
            if len(row) == 0:
                raise ValueError(f"row {i} is empty.")
            if len(row) != len(rows[0]):
                raise ValueError(f"All rows must have the same length: row 0 has {len(rows[0])} elements, "
                                 f"row {i} has {len(row)}")
        row_count = len(rows)
        col_count = len(rows[0])
        ops = _resolve_operations(dtype, (v for row in rows for v in row))
        data = [ops.value_of(rows[r][c]) for c in range(col_count) for r in range(row_count)]
        self._set_storage(row_count, col_count, data, ops)

    def _init_from_numpy(self, array: np.ndarray, dtype: DType) -> None:
        if array.ndim != 2:
            raise ValueError(f"expected a two-dimensional array, got {array.ndim} dimension(s)")
        if dtype is None:
            if array.dtype.kind == 'f':
                dtype = float
            elif array.dtype.kind in 'iu':
                dtype = int
        self._init_from_rows(array.tolist(), dtype)

    @classmethod
    def _from_storage(cls, rows: int, cols: int, data: List[Any], ops: NumberOperations) -> 'Matrix':
        """Wrap already converted column-major data without copying or validation"""
        result = cls.__new__(cls)
        result._set_storage(rows, cols, data, ops)
        return result

    # Factories
    @classmethod
    def from_rows(cls, rows: Sequence, dtype: DType = None) -> 'Matrix':
        """Create a matrix from a list of rows"""
        return cls(rows, dtype=dtype)

    @classmethod
    def from_columns(cls, columns: Sequence, dtype: DType = None) -> 'Matrix':
        """
        Create a matrix from a list of columns.

        Args:
            columns: Non-empty sequence of equally long, non-empty column sequences
            dtype: Element type, inferred from the values if omitted

        Raises:
            ValueError: If the column list or a column is empty, or columns differ in length
        """
        if not _is_sequence(columns):
            raise ValueError(f"expected a sequence of columns, got {type(columns).__name__}")
        if len(columns) == 0:
            raise ValueError("Matrix requires at least one column.")
        for i, column in enumerate(columns):
            if not _is_sequence(column):
                raise ValueError(f"column {i} is not a sequence: {column!r}")
            if len(column) == 0:
                raise ValueError(f"column {i} is empty.")
            if len(column) != len(columns[0]):
                raise ValueError(f"All columns must have the same length: column 0 has {len(columns[0])} "
                                 f"elements, column {i} has {len(column)}")
        flat = [v for column in columns for v in column]
        return cls(len(columns[0]), len(columns), flat, dtype=dtype, order=COLUMN_MAJOR)

    @classmethod
    def identity(cls, size: int, dtype: DType = DEFAULT_DTYPE) -> 'Matrix':
        """Create a size x size identity matrix"""
        result = cls(size, size, dtype=dtype)
        one = result._ops.one()
        for i in range(size):
            result._data[i * size + i] = one
        return result

    @classmethod
    def from_numpy(cls, array: np.ndarray, dtype: DType = None) -> 'Matrix':
        """
        Create a matrix from a two-dimensional numpy array.

        Float arrays become float matrices and integer arrays int matrices.
        Object arrays keep their elements (e.g. Fractions); the element type is
        inferred unless dtype is given.
        """
        return cls(np.asarray(array), dtype=dtype)

    # Dimensions and element type
    def get_row_count(self) -> int:
        return self._row_count

    def get_column_count(self) -> int:
        return self._column_count

    @property
    def rows(self) -> int:
        return self._row_count

    @property
    def cols(self) -> int:
        return self._column_count

    @property
    def shape(self) -> Tuple[int, int]:
        return self._row_count, self._column_count

    @property
    def dtype(self) -> type:
        """Element type of this matrix"""
        return self._ops.number_class()

    def get_number_operations(self) -> NumberOperations:
        return self._ops

    def is_square(self) -> bool:
        return self._row_count == self._column_count

    # Element access
    def _position(self, row: int, col: int) -> int:
        row = self._check_row(row)
        return self._check_column(col) * self._row_count + row

    def _check_row(self, row: int) -> int:
        return check_index(row, self._row_count, "Row")

    def _check_column(self, col: int) -> int:
        return check_index(col, self._column_count, "Column")

    def at(self, row: int, col: int) -> Any:
        """
        Read the element at (row, col).

        Raises:
            IndexError: If the position lies outside the matrix
        """
        return self._data[self._position(row, col)]

    def set_at(self, row: int, col: int, value: Any) -> None:
        """Write the element at (row, col), converting value to the element type"""
        position = self._position(row, col)
        self._data[position] = self._ops.value_of(value)

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        row, col = self._split_key(key)
        return self.at(row, col)

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        row, col = self._split_key(key)
        self.set_at(row, col, value)

    @staticmethod
    def _split_key(key: Any) -> Tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix indices must be (row, col) tuples, not {key!r}")
        return key

    def row_at(self, row: int) -> RowView:
        """
        Return a live view of one row.

        Raises:
            IndexError: If row is outside the matrix
        """
        return RowView(self, self._check_row(row))

    def col_at(self, col: int) -> ColumnView:
        """
        Return a live view of one column.

        Raises:
            IndexError: If col is outside the matrix
        """
        return ColumnView(self, self._check_column(col))

    def tolist(self) -> List[List[Any]]:
        """Copy the elements into a list of rows"""
        return [[self._data[c * self._row_count + r] for c in range(self._column_count)]
                for r in range(self._row_count)]

    def to_flat_list(self, order: str = DEFAULT_ORDER) -> List[Any]:
        """Copy the elements into a flat list in the given order"""
        if order == COLUMN_MAJOR:
            return list(self._data)
        if order == ROW_MAJOR:
            return [v for row in self.tolist() for v in row]
        raise ValueError(f"order must be one of {ORDERS}, got {order!r}")

    # Copies and conversions
    def copy(self) -> 'Matrix':
        """Deep copy with an independent element buffer"""
        return Matrix._from_storage(self._row_count, self._column_count, list(self._data), self._ops)

    def __copy__(self) -> 'Matrix':
        return self.copy()

    def __deepcopy__(self, memo) -> 'Matrix':
        return Matrix._from_storage(self._row_count, self._column_count, copy.deepcopy(self._data, memo), self._ops)

    def astype(self, dtype: DType) -> 'Matrix':
        """Copy of this matrix with every element converted to dtype"""
        return Matrix(self, dtype=dtype)

    def transpose(self) -> 'Matrix':
        """Return the transposed matrix"""
        return Matrix._from_storage(self._column_count, self._row_count, self.to_flat_list(ROW_MAJOR), self._ops)

    def to_numpy(self, dtype: Optional[Any] = None) -> np.ndarray:
        """
        Convert to a two-dimensional numpy array.

        Exact element types produce object arrays unless dtype is given.
        """
        if dtype is None:
            dtype = float if not self._ops.exact else object
            if isinstance(self._ops, IntegerOperations):
                dtype = np.int64 if all(-2**63 <= v < 2**63 for v in self._data) else object
        array = np.empty(self.shape, dtype=dtype)
        for r, row in enumerate(self.tolist()):
            for c, value in enumerate(row):
                array[r, c] = value
        return array

    # Row primitives
    def swap_rows(self, row_a: int, row_b: int) -> None:
        """
        Exchange two rows in place.

        Raises:
            IndexError: If either row is outside the matrix
        """
        row_a = self._check_row(row_a)
        row_b = self._check_row(row_b)
        if row_a == row_b:
            return
        data = self._data
        rows = self._row_count
        for col in range(self._column_count):
            idx_a = col * rows + row_a
            idx_b = col * rows + row_b
            data[idx_a], data[idx_b] = data[idx_b], data[idx_a]

    def scale_row(self, row: int, factor: Any) -> None:
        """
        Multiply every element of a row by factor in place. A zero factor is allowed.

        Raises:
            IndexError: If row is outside the matrix
        """
        row = self._check_row(row)
        factor = self._ops.value_of(factor)
        multiply = self._ops.multiply
        data = self._data
        for idx in range(row, len(data), self._row_count):
            data[idx] = multiply(data[idx], factor)

    def add_row(self, src_row: int, dst_row: int, factor: Any) -> None:
        """
        Add factor times src_row to dst_row in place: row[dst] := row[dst] + factor * row[src].

        src_row and dst_row may be equal.

        Raises:
            IndexError: If either row is outside the matrix
        """
        src_row = self._check_row(src_row)
        dst_row = self._check_row(dst_row)
        factor = self._ops.value_of(factor)
        add = self._ops.add
        multiply = self._ops.multiply
        data = self._data
        rows = self._row_count
        for col in range(self._column_count):
            src = data[col * rows + src_row]
            data[col * rows + dst_row] = add(data[col * rows + dst_row], multiply(factor, src))

    # Arithmetic
    def _combined_operations(self, other: 'Matrix') -> NumberOperations:
        if self._ops is other._ops:
            return self._ops
        if isinstance(self._ops, IntegerOperations):
            return other._ops
        if isinstance(other._ops, IntegerOperations):
            return self._ops
        raise TypeError(f"incompatible element types: {self.dtype.__name__} and {other.dtype.__name__}")

    def _check_same_shape(self, other: 'Matrix', operation: str) -> None:
        if self.shape != other.shape:
            raise ValueError(f"Cannot {operation} matrices of different dimensions: "
                             f"{self._row_count}x{self._column_count} and {other._row_count}x{other._column_count}")

    def add(self, other: 'Matrix') -> 'Matrix':
        """
        Element-wise sum.

        Raises:
            ValueError: If the dimensions differ
        """
        self._check_same_shape(other, 'add')
        ops = self._combined_operations(other)
        data = [ops.add(a, b) for a, b in zip(self._data, other._data)]
        return Matrix._from_storage(self._row_count, self._column_count, data, ops)

    def subtract(self, other: 'Matrix') -> 'Matrix':
        """
        Element-wise difference.

        Raises:
            ValueError: If the dimensions differ
        """
        self._check_same_shape(other, 'subtract')
        ops = self._combined_operations(other)
        data = [ops.subtract(a, b) for a, b in zip(self._data, other._data)]
        return Matrix._from_storage(self._row_count, self._column_count, data, ops)

    def negate(self) -> 'Matrix':
        data = [self._ops.negate(a) for a in self._data]
        return Matrix._from_storage(self._row_count, self._column_count, data, self._ops)

    def scale(self, factor: Any) -> 'Matrix':
        """
        Multiply every element by a scalar.

        An int matrix scaled by a non-integral factor is promoted to the
        factor's element type.
        """
        ops = self._ops
        data = self._data
        if isinstance(ops, IntegerOperations) and not isinstance(factor, numbers.Integral):
            ops = operations_for(type(factor))
            data = [ops.value_of(v) for v in data]
        factor = ops.value_of(factor)
        return Matrix._from_storage(self._row_count, self._column_count, [ops.multiply(a, factor) for a in data], ops)

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Matrix product self * other.

        Raises:
            ValueError: If self's column count differs from other's row count
        """
        if self._column_count != other._row_count:
            raise ValueError(f"Cannot multiply {self._row_count}x{self._column_count} matrix with "
                             f"{other._row_count}x{other._column_count} matrix")
        ops = self._combined_operations(other)
        rows, inner, cols = self._row_count, self._column_count, other._column_count
        a, b = self._data, other._data
        data = []
        for c in range(cols):
            column = b[c * inner:(c + 1) * inner]
            for r in range(rows):
                acc = ops.zero()
                for k in range(inner):
                    acc = ops.add(acc, ops.multiply(a[k * rows + r], column[k]))
                data.append(acc)
        return Matrix._from_storage(rows, cols, data, ops)

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        return self.scale(other)

    def __rmul__(self, other):
        return self.scale(other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other) -> bool:
        """Equal dimensions and elements; matrices of different dimensions are simply unequal"""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and all(a == b for a, b in zip(self._data, other._data))

    # Elimination based operations, see densematrix.gauss
    def rref(self) -> 'Matrix':
        """Reduced row echelon form (a new matrix)"""
        return _gauss().rref(self)

    def rref_traced(self):
        """Reduced row echelon form with swap count and scale product"""
        return _gauss().rref_traced(self)

    def rank(self) -> int:
        return _gauss().rank(self)

    def nullity(self) -> int:
        return _gauss().nullity(self)

    def det(self) -> Any:
        """Determinant of a square matrix, see Gauss.determinant"""
        return _gauss().determinant(self)

    determinant = det

    def linearly_independent(self) -> bool:
        """True if the columns of this matrix are linearly independent"""
        return _gauss().linearly_independent(self)

    def solution(self, b: Sequence) -> Optional[List[Any]]:
        """Solve self * x = b, returns None if the system has no solution"""
        return _gauss().solve(self, b)

    solve = solution

    def inverse(self) -> 'Matrix':
        return _gauss().invert(self)

    def nullspace(self) -> Optional['Matrix']:
        return _gauss().nullspace(self)

    # String representation
    def __str__(self) -> str:
        """Single line string representation"""
        return self._matrix_to_string("{", " }", " [", "]", "", "", "", ", ")

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r}, dtype={self.dtype.__name__})"

    def to_multiline_string(self) -> str:
        """Multi-line string representation"""
        return self._matrix_to_string("{\n", "}\n", " [", "]\n", "", " ", " ", ",")

    def _matrix_to_string(self, prefix: str, postfix: str, row_prefix: str, row_postfix: str, row_separator: str,
                          col_prefix: str, col_postfix: str, col_separator: str) -> str:
        result = [prefix]
        for r, row in enumerate(self.tolist()):
            if r > 0:
                result.append(row_separator)
            result.append(row_prefix)
            for c, value in enumerate(row):
                if c > 0:
                    result.append(col_separator)
                result.append(col_prefix)
                result.append(str(value))
                result.append(col_postfix)
            result.append(row_postfix)
        result.append(postfix)
        return ''.join(result)

    def write_to(self, writer: io.TextIOBase) -> None:
        """Write single line representation to text writer"""
        writer.write(str(self))

    def write_to_multiline(self, writer: io.TextIOBase) -> None:
        """Write multi-line representation, prefixed by the dimensions, to text writer"""
        writer.write(f"{self._row_count}x{self._column_count} {self.to_multiline_string()}")

    def print(self, file: Optional[io.TextIOBase] = None) -> None:
        """Print one comma separated line per row (stdout by default)"""
        out = file if file is not None else sys.stdout
        for row in self.tolist():
            out.write(', '.join(str(v) for v in row) + '\n')

    def print_col(self, col: int, file: Optional[io.TextIOBase] = None) -> None:
        """Print the elements of one column, one per line (stdout by default)"""
        out = file if file is not None else sys.stdout
        for value in self.col_at(col):
            out.write(f"{value}\n")


def _gauss():
    from .gauss import Gauss
    return Gauss.instance()
