################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Unit conversion helpers and numeric constants."""

from __future__ import annotations

import sys

import numpy as np
from numpy.typing import NDArray


class Angle:
    """Angular unit conversions."""

    @staticmethod
    def deg2rad(x: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
        """Convert degrees to radians."""
        arr: NDArray[np.float64] = np.asarray(x, dtype=float)
        result: NDArray[np.float64] = np.deg2rad(arr)
        if np.ndim(result) == 0:
            return float(result)
        return result


class NumericConstants:
    """Numeric thresholds used by the quaternion algebra."""

    # Smallest quaternion norm accepted by normalize, inverse and ln
    EPS: float = 1e-12

    # Machine epsilon for float64, used by the slerp lerp fallback
    MACHINE_EPS: float = sys.float_info.epsilon

    # Vector-part magnitude below which exp treats the input as real
    EXP_VECTOR_EPS: float = 1e-7

    # Vector-part magnitude below which ln treats the input as real
    LN_VECTOR_EPS: float = 1e-9


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")
