################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.orientation.calibration_animator import CalibrationAnimator
from gyro_parallax.orientation.calibration_animator import (
    CalibrationAnimatorConfig,
)
from gyro_parallax.orientation.calibration_animator import CalibrationAnimatorState
from gyro_parallax.orientation.composer import compose
from gyro_parallax.orientation.gyroscope import Gyroscope
from gyro_parallax.orientation.orientation_tracker import OrientationTracker


__all__ = [
    "CalibrationAnimator",
    "CalibrationAnimatorConfig",
    "CalibrationAnimatorState",
    "Gyroscope",
    "OrientationTracker",
    "compose",
]
