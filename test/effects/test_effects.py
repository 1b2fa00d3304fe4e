################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the cube and particle plane effects."""

from __future__ import annotations

import numpy as np

from gyro_parallax.config.gyro_params import CubeParams
from gyro_parallax.config.gyro_params import ParticleParams
from gyro_parallax.effects.cube_effect import CubeEffect
from gyro_parallax.effects.matrix3d import quaternion_css
from gyro_parallax.effects.particle_effect import ParticleFrame
from gyro_parallax.effects.particle_effect import ParticlePlaneEffect
from gyro_parallax.math_utils.quat import Quaternion


def test_cube_translates_after_rotation() -> None:
    """The cube transform carries the configured translation."""
    sink: list[str] = []
    effect = CubeEffect(CubeParams(), sink.append)
    q = Quaternion.from_tait_bryan(30.0, 10.0, 0.0)

    effect(q)

    assert sink == [quaternion_css(q, [0.0, 0.0, 160.0])]
    assert np.array_equal(effect.matrix(q)[12:15], [0.0, 0.0, 160.0])


def test_particle_grid_layout() -> None:
    """Particles fill a five-column grid above the plane."""
    effect = ParticlePlaneEffect(ParticleParams(), lambda frame: None)

    assert len(effect.offsets) == 25
    assert np.array_equal(effect.offsets[0], [0.0, 40.0, 100.0])
    assert np.array_equal(effect.offsets[4], [280.0, 40.0, 100.0])
    assert np.array_equal(effect.offsets[5], [0.0, 90.0, 100.0])
    assert np.array_equal(effect.offsets[24], [280.0, 240.0, 100.0])


def test_particles_counter_rotate() -> None:
    """Particles use the conjugate rotation so they face the viewer."""
    frames: list[ParticleFrame] = []
    params = ParticleParams(count=3, columns=2)
    effect = ParticlePlaneEffect(params, frames.append)
    q = Quaternion.from_tait_bryan(0.0, 40.0, -15.0)

    effect(q)

    assert len(frames) == 1
    frame: ParticleFrame = frames[0]
    assert frame.plane == quaternion_css(q)
    assert len(frame.particles) == 3
    assert frame.particles[2] == quaternion_css(q.conjugate(), [0.0, 90.0, 100.0])

    plane_block = q.as_matrix3d().reshape(4, 4)[:3, :3]
    particle_block = q.conjugate().as_matrix3d().reshape(4, 4)[:3, :3]
    assert np.allclose(plane_block @ particle_block, np.eye(3), atol=1e-12)
