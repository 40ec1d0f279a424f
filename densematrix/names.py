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
"""Static strings used in the densematrix package

    Element ordering of flat element lists

        COLUMN_MAJOR = 'column_major'

        ROW_MAJOR = 'row_major'

        DEFAULT_ORDER = COLUMN_MAJOR

    Default element type of matrices built from dimensions only

        DEFAULT_DTYPE = float

    Error messages

        ERR_ZERO_DIMENSION = 'Matrix dimensions cannot be zero.'

        ERR_OUT_OF_RANGE = 'Requested position outside of matrix dimensions.'

        ERR_ZERO_DENOMINATOR = 'Denominator cannot be zero!'

        ERR_ZERO_DIVISOR = 'Resulting rational would have a denominator of zero!'
"""

COLUMN_MAJOR = 'column_major'
ROW_MAJOR = 'row_major'
DEFAULT_ORDER = COLUMN_MAJOR
ORDERS = (COLUMN_MAJOR, ROW_MAJOR)

DEFAULT_DTYPE = float

ERR_ZERO_DIMENSION = 'Matrix dimensions cannot be zero.'
ERR_OUT_OF_RANGE = 'Requested position outside of matrix dimensions.'
ERR_ZERO_DENOMINATOR = 'Denominator cannot be zero!'
ERR_ZERO_DIVISOR = 'Resulting rational would have a denominator of zero!'
