################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transforms for a rotating plane carrying counter-rotated particles.

The plane follows the calibrated orientation. Each particle sits on a grid
above the plane and is rotated by the conjugate of the plane rotation, so it
keeps facing the viewer while the plane tilts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from gyro_parallax.config.gyro_params import ParticleParams
from gyro_parallax.effects.matrix3d import matrix3d_css
from gyro_parallax.math_utils.quat import Quaternion


@dataclass(frozen=True)
class ParticleFrame:
    """CSS transforms for one rendered frame."""

    plane: str
    particles: tuple[str, ...]


class ParticlePlaneEffect:
    """Renders the plane and particle transforms and hands them to a sink."""

    def __init__(
        self, params: ParticleParams, sink: Callable[[ParticleFrame], None]
    ) -> None:
        self._params: ParticleParams = params
        self._sink: Callable[[ParticleFrame], None] = sink
        self._offsets: tuple[NDArray[np.float64], ...] = tuple(
            self.particle_offset(index) for index in range(params.count)
        )

    @property
    def offsets(self) -> tuple[NDArray[np.float64], ...]:
        return self._offsets

    def particle_offset(self, index: int) -> NDArray[np.float64]:
        """Grid position of a particle, row-major from the top left."""
        row: int = index // self._params.columns
        column: int = index % self._params.columns
        return np.array(
            [
                column * self._params.spacing_x,
                row * self._params.spacing_y + self._params.offset_y,
                self._params.depth,
            ],
            dtype=np.float64,
        )

    def frame(self, output: Quaternion) -> ParticleFrame:
        counter: Quaternion = output.copy().conjugate()
        return ParticleFrame(
            plane=matrix3d_css(output.as_matrix3d()),
            particles=tuple(
                matrix3d_css(counter.as_matrix3d(offset)) for offset in self._offsets
            ),
        )

    def __call__(self, output: Quaternion) -> None:
        self._sink(self.frame(output))
