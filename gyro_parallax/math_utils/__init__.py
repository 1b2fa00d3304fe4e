################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.math_utils.quat import DegenerateQuaternionError
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.math_utils.quat import tait_bryan_to_quaternion


__all__ = [
    "DegenerateQuaternionError",
    "Quaternion",
    "tait_bryan_to_quaternion",
]
