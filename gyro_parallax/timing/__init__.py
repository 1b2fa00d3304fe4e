################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.timing.animation_clock import AnimationClock
from gyro_parallax.timing.animation_clock import ManualAnimationClock
from gyro_parallax.timing.animation_clock import SystemAnimationClock


__all__ = [
    "AnimationClock",
    "ManualAnimationClock",
    "SystemAnimationClock",
]
