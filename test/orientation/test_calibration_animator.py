################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the calibration animation state machine."""

from __future__ import annotations

import numpy as np
import pytest

from gyro_parallax.math_utils.easing import ease_in_out_cubic
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.orientation.calibration_animator import CalibrationAnimator
from gyro_parallax.orientation.calibration_animator import (
    CalibrationAnimatorConfig,
)
from gyro_parallax.timing.animation_clock import ManualAnimationClock


DURATION_MS: float = 500.0


def _make_animator(
    clock: ManualAnimationClock, seen: list[Quaternion]
) -> CalibrationAnimator:
    config = CalibrationAnimatorConfig(duration_ms=DURATION_MS)
    return CalibrationAnimator(config, clock, seen.append)


def test_rejects_non_positive_duration() -> None:
    clock = ManualAnimationClock()
    with pytest.raises(ValueError):
        CalibrationAnimator(CalibrationAnimatorConfig(duration_ms=0.0), clock)


def test_starts_idle_with_identity() -> None:
    clock = ManualAnimationClock()
    animator = _make_animator(clock, [])

    assert not animator.is_animating
    assert animator.calibration == Quaternion.identity()
    assert clock.pending_frames == 0


def test_start_runs_first_tick_immediately() -> None:
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    live = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)

    assert animator.start(live) is True

    assert animator.is_animating
    assert len(seen) == 1
    assert np.allclose(seen[0].wxyz, [1.0, 0.0, 0.0, 0.0])
    assert animator.state.snap_end == live.conjugate()
    assert animator.state.start_ms == 0.0
    assert clock.pending_frames == 1


def test_interpolates_with_eased_progress() -> None:
    clock = ManualAnimationClock()
    animator = _make_animator(clock, [])
    live = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)
    animator.start(live)

    clock.set_time(125.0)
    clock.run_frame()

    eased: float = ease_in_out_cubic(0.25)
    expected = Quaternion.slerp(Quaternion.identity(), live.conjugate(), eased)
    assert animator.state.progress == 0.25
    assert np.allclose(animator.calibration.wxyz, expected.wxyz, atol=1e-12)
    assert animator.is_animating


def test_finishes_exactly_at_duration() -> None:
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    live = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)
    animator.start(live)

    clock.set_time(DURATION_MS)
    clock.run_frame()

    assert not animator.is_animating
    assert np.allclose(animator.calibration.wxyz, live.conjugate().wxyz, atol=1e-12)
    assert seen[-1] is animator.calibration
    assert animator.state.snap_start is None
    assert animator.state.snap_end is None
    assert clock.pending_frames == 0


def test_no_extra_frame_after_completion() -> None:
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    animator.start(Quaternion.from_tait_bryan(0.0, 30.0, 0.0))

    frames: int = clock.run_frames(100.0)

    # Ticks at 0 (start), 100, 200, 300, 400 and 500 ms
    assert frames == 5
    assert len(seen) == 6
    assert animator.state.ticks == 6
    assert clock.run_frame() == 0


def test_late_frame_clamps_to_end() -> None:
    clock = ManualAnimationClock()
    animator = _make_animator(clock, [])
    live = Quaternion.from_tait_bryan(45.0, 10.0, -20.0)
    animator.start(live)

    clock.set_time(2.0 * DURATION_MS)
    clock.run_frame()

    assert animator.state.progress == 1.0
    assert not animator.is_animating
    assert np.allclose(animator.calibration.wxyz, live.conjugate().wxyz, atol=1e-12)


def test_retrigger_while_animating_is_ignored() -> None:
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    first = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)
    animator.start(first)

    clock.set_time(100.0)
    clock.run_frame()
    calibration_before: Quaternion = animator.calibration
    renders_before: int = len(seen)

    assert animator.start(Quaternion.from_tait_bryan(0.0, 60.0, 0.0)) is False

    assert animator.calibration is calibration_before
    assert animator.state.snap_end == first.conjugate()
    assert animator.state.start_ms == 0.0
    assert len(seen) == renders_before
    assert clock.pending_frames == 1


def test_restart_after_completion_starts_from_current_calibration() -> None:
    clock = ManualAnimationClock()
    animator = _make_animator(clock, [])
    first = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)
    second = Quaternion.from_tait_bryan(0.0, 45.0, 0.0)

    animator.start(first)
    clock.run_frames(50.0)
    assert animator.start(second) is True

    snap_start = animator.state.snap_start
    assert snap_start is not None
    assert snap_start == animator.calibration
    assert np.allclose(snap_start.wxyz, first.conjugate().wxyz, atol=1e-12)
    clock.run_frames(50.0)
    assert np.allclose(animator.calibration.wxyz, second.conjugate().wxyz, atol=1e-12)


def test_set_calibration_is_overwritten_by_next_tick() -> None:
    clock = ManualAnimationClock()
    animator = _make_animator(clock, [])
    live = Quaternion.from_tait_bryan(90.0, 0.0, 0.0)
    animator.start(live)

    forced = Quaternion.from_tait_bryan(0.0, 0.0, 80.0)
    animator.set_calibration(forced)
    assert animator.calibration == forced

    clock.set_time(250.0)
    clock.run_frame()
    expected = Quaternion.slerp(
        Quaternion.identity(), live.conjugate(), ease_in_out_cubic(0.5)
    )
    assert np.allclose(animator.calibration.wxyz, expected.wxyz, atol=1e-12)


def test_reset_cancels_pending_tick() -> None:
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    animator.start(Quaternion.from_tait_bryan(90.0, 0.0, 0.0))

    animator.reset()
    clock.set_time(100.0)
    clock.run_frame()

    assert not animator.is_animating
    assert animator.calibration == Quaternion.identity()
    assert len(seen) == 1
    assert clock.pending_frames == 0


def test_restart_after_reset_runs_single_frame_chain() -> None:
    """A frame queued before reset does not tick the next animation."""
    clock = ManualAnimationClock()
    seen: list[Quaternion] = []
    animator = _make_animator(clock, seen)
    animator.start(Quaternion.from_tait_bryan(90.0, 0.0, 0.0))

    animator.reset()
    live = Quaternion.from_tait_bryan(0.0, 45.0, 0.0)
    assert animator.start(live) is True
    assert len(seen) == 2
    assert clock.pending_frames == 2

    clock.advance(16.0)
    assert clock.run_frame() == 2

    assert len(seen) == 3
    assert animator.state.ticks == 2
    assert clock.pending_frames == 1

    clock.run_frames(16.0)
    assert not animator.is_animating
    assert np.allclose(animator.calibration.wxyz, live.conjugate().wxyz, atol=1e-12)
    assert clock.pending_frames == 0
