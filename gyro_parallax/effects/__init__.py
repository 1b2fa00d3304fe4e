################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.effects.cube_effect import CubeEffect
from gyro_parallax.effects.matrix3d import matrix3d_css
from gyro_parallax.effects.matrix3d import quaternion_css
from gyro_parallax.effects.particle_effect import ParticleFrame
from gyro_parallax.effects.particle_effect import ParticlePlaneEffect


__all__ = [
    "CubeEffect",
    "ParticleFrame",
    "ParticlePlaneEffect",
    "matrix3d_css",
    "quaternion_css",
]
