################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""CSS matrix3d text for column-major 4x4 transforms."""

from __future__ import annotations

from typing import Optional
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.math_utils.quat import TranslationLike


def matrix3d_css(values: Sequence[float] | NDArray[np.float64]) -> str:
    """Format 16 transform values as a CSS matrix3d() function."""
    flat: NDArray[np.float64] = np.asarray(values, dtype=np.float64).ravel()
    if flat.shape != (16,):
        raise ValueError("matrix3d needs exactly 16 values")
    return "matrix3d(" + ",".join(repr(float(v)) for v in flat) + ")"


def quaternion_css(
    q: Quaternion, translation: Optional[TranslationLike] = None
) -> str:
    """Return the CSS transform for a rotation and optional translation."""
    return matrix3d_css(q.as_matrix3d(translation))
