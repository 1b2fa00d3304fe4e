################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Event handlers tying orientation samples and triggers to a renderer.

A Gyroscope owns one OrientationTracker and one CalibrationAnimator. Sensor
samples and user triggers arrive on the same logical thread as animation
frames, so no locking is needed; every state change renders
compose(calibration, live) through the injected callback.
"""

from __future__ import annotations

import logging
from typing import Callable
from typing import Optional

from gyro_parallax.config.gyro_config import GyroConfig
from gyro_parallax.config.gyro_params import FirstSampleParams
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.orientation.calibration_animator import CalibrationAnimator
from gyro_parallax.orientation.calibration_animator import (
    CalibrationAnimatorConfig,
)
from gyro_parallax.orientation.composer import compose
from gyro_parallax.orientation.orientation_tracker import OrientationTracker
from gyro_parallax.timing.animation_clock import AnimationClock


_LOG: logging.Logger = logging.getLogger(__name__)


RenderCallback = Callable[[Quaternion], None]


class Gyroscope:
    """Calibrated device orientation for one on-screen effect."""

    def __init__(
        self,
        render: RenderCallback,
        clock: AnimationClock,
        config: Optional[GyroConfig] = None,
    ) -> None:
        gyro_config: GyroConfig = (
            config if config is not None else GyroConfig.defaults()
        )

        self._render: RenderCallback = render
        self._tracker: OrientationTracker = OrientationTracker()
        self._animator: CalibrationAnimator = CalibrationAnimator(
            CalibrationAnimatorConfig(duration_ms=gyro_config.duration_ms()),
            clock,
            self._on_calibration_tick,
        )

        self._first_sample: FirstSampleParams = gyro_config.params.first_sample

        # Samples left before the one-shot calibration; negative once spent
        self._one_shot_countdown: int = (
            self._first_sample.warmup_samples if self._first_sample.enabled else -1
        )

    @property
    def tracker(self) -> OrientationTracker:
        return self._tracker

    @property
    def animator(self) -> CalibrationAnimator:
        return self._animator

    @property
    def calibration(self) -> Quaternion:
        return self._animator.calibration

    @property
    def live(self) -> Optional[Quaternion]:
        return self._tracker.live

    @property
    def is_animating(self) -> bool:
        return self._animator.is_animating

    @property
    def one_shot_pending(self) -> bool:
        """True until the one-shot auto-calibration has been consumed."""
        return self._one_shot_countdown >= 0

    def output(self) -> Optional[Quaternion]:
        """Current rendered rotation, or None before the first sample."""
        live: Optional[Quaternion] = self._tracker.live
        if live is None:
            return None
        return compose(self._animator.calibration, live)

    def on_orientation_sample(
        self, alpha_deg: float, beta_deg: float, gamma_deg: float
    ) -> Quaternion:
        """Handle a device orientation sample and render.

        The first warmup samples only seed the live orientation. The next
        sample sets the calibration to the conjugate of the live orientation
        exactly once.

        Returns the rendered quaternion.
        """
        live: Quaternion = self._tracker.update(alpha_deg, beta_deg, gamma_deg)

        if self._one_shot_countdown > 0:
            self._one_shot_countdown -= 1
        elif self._one_shot_countdown == 0:
            self._one_shot_countdown -= 1
            self._apply_one_shot(live)

        output: Quaternion = compose(self._animator.calibration, live)
        self._render(output)
        return output

    def on_trigger(self) -> bool:
        """Handle a user trigger by starting a recentering animation.

        Returns True if an animation started, False if the trigger was
        ignored because an animation is running or no sample has arrived.
        """
        live: Optional[Quaternion] = self._tracker.live
        if live is None:
            _LOG.info("Ignoring trigger before the first orientation sample")
            return False

        return self._animator.start(live)

    def _apply_one_shot(self, live: Quaternion) -> None:
        if self._animator.is_animating and self._first_sample.skip_while_animating:
            _LOG.warning("Skipping startup calibration during a running animation")
            return

        _LOG.debug("Applying startup calibration")
        self._animator.set_calibration(live.conjugate())

    def _on_calibration_tick(self, calibration: Quaternion) -> None:
        live: Optional[Quaternion] = self._tracker.live
        if live is None:
            return
        self._render(compose(calibration, live))
