################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Latest live orientation derived from device orientation samples."""

from __future__ import annotations

from typing import Optional

from gyro_parallax.math_utils.quat import Quaternion


class OrientationTracker:
    """Holds the most recent orientation sample as a quaternion.

    Each sample replaces the previous one wholesale; no history is kept.
    """

    def __init__(self) -> None:
        self._live: Optional[Quaternion] = None
        self._sample_count: int = 0

    @property
    def live(self) -> Optional[Quaternion]:
        """Latest orientation, or None before the first sample."""
        return self._live

    @property
    def sample_count(self) -> int:
        """Number of samples received since construction or reset."""
        return self._sample_count

    def has_sample(self) -> bool:
        return self._live is not None

    def update(self, alpha_deg: float, beta_deg: float, gamma_deg: float) -> Quaternion:
        """Replace the live orientation from Tait-Bryan angles in degrees."""
        self._live = Quaternion.from_tait_bryan(alpha_deg, beta_deg, gamma_deg)
        self._sample_count += 1
        return self._live

    def reset(self) -> None:
        self._live = None
        self._sample_count = 0
