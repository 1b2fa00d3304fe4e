################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Combine calibration and live orientation into the rendered rotation."""

from __future__ import annotations

from gyro_parallax.math_utils.quat import Quaternion


def compose(calibration: Quaternion, live: Quaternion) -> Quaternion:
    """Return calibration * live, the quaternion handed to renderers."""
    return calibration * live
