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
Live row and column views of a Matrix.

A view holds a reference to its matrix and a fixed row or column index. Reads
and writes go straight to the matrix storage, so a change made through a view is
visible in the matrix and vice versa. Matrix dimensions never change after
construction, so a view stays valid for as long as its matrix is alive.
"""

import operator
from abc import abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Iterator, List

from .names import ERR_OUT_OF_RANGE

if TYPE_CHECKING:
    from .matrix import Matrix


def check_index(index: Any, size: int, label: str = "Index") -> int:
    """
    Validate an index into a line of length size and return it as an int.

    Anything implementing __index__ is accepted (numpy integers included),
    bool is not. Negative indices are out of range, there is no wrap-around.

    Raises:
        TypeError: If index is not an integer
        IndexError: If index is not in [0, size)
    """
    if isinstance(index, bool):
        raise TypeError(f"{label} must be an integer, not bool")
    try:
        value = operator.index(index)
    except TypeError:
        raise TypeError(f"{label} must be an integer, not {type(index).__name__}") from None
    if not 0 <= value < size:
        raise IndexError(ERR_OUT_OF_RANGE + f" {label} {value} not in [0, {size})")
    return value


class _LineView(Sequence):
    """Common part of RowView and ColumnView"""

    __slots__ = ('_matrix', '_index')

    def __init__(self, matrix: 'Matrix', index: int):
        self._matrix = matrix
        self._index = index

    @property
    def index(self) -> int:
        """Row or column index this view refers to"""
        return self._index

    @abstractmethod
    def _storage_index(self, i: int) -> int:
        """Position of the i-th viewed element in the matrix storage"""

    def _check(self, i: int) -> int:
        return self._storage_index(check_index(i, len(self)))

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[k] for k in range(*i.indices(len(self)))]
        return self._matrix._data[self._check(i)]

    def __setitem__(self, i: int, value: Any) -> None:
        position = self._check(i)
        self._matrix._data[position] = self._matrix._ops.value_of(value)

    def __iter__(self) -> Iterator[Any]:
        data = self._matrix._data
        for i in range(len(self)):
            yield data[self._storage_index(i)]

    def __eq__(self, other) -> bool:
        if isinstance(other, (_LineView, list, tuple)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None

    def tolist(self) -> List[Any]:
        """Copy the viewed elements into a new list"""
        return list(self)

    def __str__(self) -> str:
        return '[' + ', '.join(str(v) for v in self) + ']'


class RowView(_LineView):
    """View of one matrix row, len() equals the column count"""

    __slots__ = ()

    def __len__(self) -> int:
        return self._matrix._column_count

    def _storage_index(self, i: int) -> int:
        return i * self._matrix._row_count + self._index

    def __repr__(self) -> str:
        return f"RowView(row={self._index}, {self.tolist()!r})"


class ColumnView(_LineView):
    """View of one matrix column, len() equals the row count"""

    __slots__ = ()

    def __len__(self) -> int:
        return self._matrix._row_count

    def _storage_index(self, i: int) -> int:
        return self._index * self._matrix._row_count + i

    def __repr__(self) -> str:
        return f"ColumnView(column={self._index}, {self.tolist()!r})"
