################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time-bounded recentering animation for the calibration quaternion."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Callable
from typing import Optional

from gyro_parallax.math_utils.easing import eased_progress
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.timing.animation_clock import AnimationClock


_LOG: logging.Logger = logging.getLogger(__name__)


CalibrationListener = Callable[[Quaternion], None]


@dataclass
class CalibrationAnimatorConfig:
    """Configuration values for the calibration animator."""

    # Animation duration, in milliseconds of the injected clock
    duration_ms: float = 500.0


@dataclass
class CalibrationAnimatorState:
    """Mutable state for the calibration animator."""

    # Calibration applied to the live orientation
    calibration: Quaternion = field(default_factory=Quaternion.identity)

    # True between a trigger and the final animation tick
    animating: bool = False

    # Calibration captured when the animation started
    snap_start: Optional[Quaternion] = None

    # Calibration the animation converges to
    snap_end: Optional[Quaternion] = None

    # Clock time when the animation started, in milliseconds
    start_ms: Optional[float] = None

    # Linear progress of the last tick, in [0, 1]
    progress: float = 0.0

    # Number of ticks run by the current or last animation
    ticks: int = 0


class CalibrationAnimator:
    """Idle/animating state machine driving the calibration quaternion.

    A trigger while idle captures the current calibration and the conjugate
    of the live orientation, then slerps between them on each frame using an
    eased time curve. Triggers while animating are ignored. The end target
    is fixed at trigger time; later orientation samples do not move it.
    """

    def __init__(
        self,
        config: CalibrationAnimatorConfig,
        clock: AnimationClock,
        listener: Optional[CalibrationListener] = None,
    ) -> None:
        if config.duration_ms <= 0.0:
            raise ValueError("duration_ms must be positive")

        self._config: CalibrationAnimatorConfig = config
        self._clock: AnimationClock = clock
        self._listener: Optional[CalibrationListener] = listener
        self._state: CalibrationAnimatorState = CalibrationAnimatorState()

        # Bumped by start and reset. Frames scheduled under an older value
        # are dropped when they run.
        self._generation: int = 0

    @property
    def state(self) -> CalibrationAnimatorState:
        """Return the mutable animator state."""

        return self._state

    @property
    def calibration(self) -> Quaternion:
        return self._state.calibration

    @property
    def is_animating(self) -> bool:
        return self._state.animating

    def set_listener(self, listener: Optional[CalibrationListener]) -> None:
        """Set the callback notified with the calibration after every tick."""

        self._listener = listener

    def set_calibration(self, calibration: Quaternion) -> None:
        """Overwrite the calibration without animating.

        A running animation keeps going and overwrites this value on its
        next tick.
        """

        self._state.calibration = calibration

    def start(self, live: Quaternion) -> bool:
        """Begin animating toward the conjugate of the live orientation.

        The first tick runs immediately. Returns False without side effects
        when an animation is already running.

        Args:
            live: Live orientation captured at trigger time
        """

        if self._state.animating:
            _LOG.debug("Ignoring trigger while animating")
            return False

        self._generation += 1
        self._state.animating = True
        self._state.snap_start = self._state.calibration.copy()
        self._state.snap_end = live.copy().conjugate()
        self._state.start_ms = self._clock.now_ms()
        self._state.progress = 0.0
        self._state.ticks = 0

        _LOG.debug(
            "Starting calibration animation at %.3f ms for %.3f ms",
            self._state.start_ms,
            self._config.duration_ms,
        )

        self.tick()

        return True

    def tick(self) -> None:
        """Advance the animation to the current clock time.

        Schedules the next frame while progress is below 1 and returns the
        animator to idle on the tick that reaches 1.
        """

        state: CalibrationAnimatorState = self._state
        if not state.animating:
            return

        assert state.snap_start is not None
        assert state.snap_end is not None
        assert state.start_ms is not None

        elapsed_ms: float = self._clock.now_ms() - state.start_ms
        progress, eased = eased_progress(elapsed_ms, self._config.duration_ms)

        state.calibration = Quaternion.slerp(state.snap_start, state.snap_end, eased)
        state.progress = progress
        state.ticks += 1

        done: bool = progress == 1.0
        if done:
            state.animating = False
            state.snap_start = None
            state.snap_end = None
            state.start_ms = None
            _LOG.debug("Calibration animation finished after %d ticks", state.ticks)

        if self._listener is not None:
            self._listener(state.calibration)

        if not done:
            self._clock.schedule_next_frame(
                functools.partial(self._run_frame, self._generation)
            )

    def reset(self) -> None:
        """Return to idle with the identity calibration.

        A frame already queued on the clock becomes a no-op.
        """

        self._generation += 1
        self._state = CalibrationAnimatorState()

    def _run_frame(self, generation: int) -> None:
        if generation != self._generation:
            _LOG.debug("Dropping frame from a cancelled animation")
            return

        self.tick()
