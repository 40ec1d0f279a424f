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
"""densematrix: dense matrices over exact and floating point element types"""

import logging

from .names import *
from .rational import Rational
from .number_operations import (NumberOperations, DoubleOperations, IntegerOperations, FractionOperations,
                                RationalOperations, operations_for, register_operations)
from .views import RowView, ColumnView
from .matrix import Matrix
from .gauss import Gauss, RrefResult

__version__ = "0.1.0"


class DisableLogger():
    """Environment in which logging is disabled"""

    def __enter__(self):
        logging.disable(logging.CRITICAL)

    def __exit__(self, exit_type, exit_value, exit_traceback):
        logging.disable(logging.NOTSET)


__all__ = [
    'Rational',
    'NumberOperations',
    'DoubleOperations',
    'IntegerOperations',
    'FractionOperations',
    'RationalOperations',
    'operations_for',
    'register_operations',
    'RowView',
    'ColumnView',
    'Matrix',
    'Gauss',
    'RrefResult',
    'DisableLogger',
    'COLUMN_MAJOR',
    'ROW_MAJOR',
]
