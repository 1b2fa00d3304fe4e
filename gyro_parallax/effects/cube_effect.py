################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transforms for a cube that follows the calibrated orientation."""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from gyro_parallax.config.gyro_params import CubeParams
from gyro_parallax.effects.matrix3d import matrix3d_css
from gyro_parallax.math_utils.quat import Quaternion


class CubeEffect:
    """Renders the cube transform and hands the CSS text to a sink."""

    def __init__(self, params: CubeParams, sink: Callable[[str], None]) -> None:
        self._params: CubeParams = params
        self._sink: Callable[[str], None] = sink

    def matrix(self, output: Quaternion) -> NDArray[np.float64]:
        return output.as_matrix3d(self._params.translation)

    def __call__(self, output: Quaternion) -> None:
        self._sink(matrix3d_css(self.matrix(output)))
