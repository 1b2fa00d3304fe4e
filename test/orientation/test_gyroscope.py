################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the gyroscope event handlers."""

from __future__ import annotations

from typing import Optional

import numpy as np

from gyro_parallax.config.gyro_config import GyroConfig
from gyro_parallax.config.gyro_params import FirstSampleParams
from gyro_parallax.config.gyro_params import GyroParams
from gyro_parallax.math_utils.easing import ease_in_out_cubic
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.math_utils.quat import tait_bryan_to_quaternion
from gyro_parallax.orientation.gyroscope import Gyroscope
from gyro_parallax.timing.animation_clock import ManualAnimationClock


IDENTITY_WXYZ: list[float] = [1.0, 0.0, 0.0, 0.0]


def _make_gyroscope(
    first_sample: Optional[FirstSampleParams] = None,
) -> tuple[Gyroscope, ManualAnimationClock, list[Quaternion]]:
    clock = ManualAnimationClock()
    rendered: list[Quaternion] = []
    params = GyroParams.defaults()
    if first_sample is not None:
        params = params.replace(first_sample=first_sample)
    gyroscope = Gyroscope(rendered.append, clock, GyroConfig(params))
    return gyroscope, clock, rendered


def test_first_sample_seeding() -> None:
    """The second sample sets the calibration to the conjugate orientation."""
    gyroscope, _, rendered = _make_gyroscope()

    gyroscope.on_orientation_sample(10.0, 20.0, 30.0)
    assert gyroscope.calibration == Quaternion.identity()
    assert gyroscope.one_shot_pending

    gyroscope.on_orientation_sample(40.0, 50.0, 60.0)
    expected = tait_bryan_to_quaternion(40.0, 50.0, 60.0).conjugate()
    assert np.allclose(gyroscope.calibration.wxyz, expected.wxyz, atol=1e-12)
    assert not gyroscope.one_shot_pending

    # The neutral pose renders as the identity
    assert np.allclose(rendered[-1].wxyz, IDENTITY_WXYZ, atol=1e-12)


def test_one_shot_fires_only_once() -> None:
    """Later samples leave the calibration alone."""
    gyroscope, _, _ = _make_gyroscope()
    gyroscope.on_orientation_sample(10.0, 20.0, 30.0)
    gyroscope.on_orientation_sample(40.0, 50.0, 60.0)
    calibration: Quaternion = gyroscope.calibration

    gyroscope.on_orientation_sample(70.0, 10.0, -10.0)

    assert gyroscope.calibration is calibration


def test_every_sample_renders_composition() -> None:
    """Each sample renders calibration * live."""
    gyroscope, _, rendered = _make_gyroscope()

    first = gyroscope.on_orientation_sample(10.0, 20.0, 30.0)
    assert len(rendered) == 1
    assert rendered[0] == first
    assert first == tait_bryan_to_quaternion(10.0, 20.0, 30.0)

    gyroscope.on_orientation_sample(40.0, 50.0, 60.0)
    third = gyroscope.on_orientation_sample(45.0, 50.0, 60.0)
    assert len(rendered) == 3
    assert rendered[-1] == third
    assert third == gyroscope.calibration * tait_bryan_to_quaternion(45.0, 50.0, 60.0)
    assert gyroscope.output() == third


def test_trigger_before_any_sample_is_ignored() -> None:
    """Without a live orientation there is nothing to recenter on."""
    gyroscope, clock, rendered = _make_gyroscope()

    assert gyroscope.on_trigger() is False
    assert not gyroscope.is_animating
    assert gyroscope.output() is None
    assert rendered == []
    assert clock.pending_frames == 0


def test_calibration_animation_scenario() -> None:
    """A trigger animates the calibration to the conjugate orientation."""
    gyroscope, clock, rendered = _make_gyroscope()
    gyroscope.on_orientation_sample(90.0, 0.0, 0.0)
    current = tait_bryan_to_quaternion(90.0, 0.0, 0.0)
    assert gyroscope.calibration == Quaternion.identity()

    assert gyroscope.on_trigger() is True
    assert gyroscope.is_animating

    clock.set_time(100.0)
    clock.run_frame()
    calibration_before: Quaternion = gyroscope.calibration

    # A second trigger mid-animation is a no-op
    assert gyroscope.on_trigger() is False
    assert gyroscope.calibration is calibration_before

    clock.set_time(500.0)
    clock.run_frame()

    assert not gyroscope.is_animating
    assert np.allclose(
        gyroscope.calibration.wxyz, current.conjugate().wxyz, atol=1e-12
    )
    assert np.allclose(rendered[-1].wxyz, IDENTITY_WXYZ, atol=1e-12)
    assert clock.pending_frames == 0


def test_animation_ticks_render() -> None:
    """Every animation tick renders the interpolated calibration."""
    gyroscope, clock, rendered = _make_gyroscope()
    live = gyroscope.on_orientation_sample(90.0, 0.0, 0.0)
    gyroscope.on_trigger()
    renders_after_trigger: int = len(rendered)

    clock.set_time(250.0)
    clock.run_frame()

    assert len(rendered) == renders_after_trigger + 1
    calibration = Quaternion.slerp(
        Quaternion.identity(), live.conjugate(), ease_in_out_cubic(0.5)
    )
    assert np.allclose(rendered[-1].wxyz, (calibration * live).wxyz, atol=1e-12)


def test_samples_during_animation_keep_target() -> None:
    """The animation converges to the orientation captured at trigger time."""
    gyroscope, clock, rendered = _make_gyroscope(
        FirstSampleParams(enabled=False)
    )
    captured = gyroscope.on_orientation_sample(90.0, 0.0, 0.0)
    gyroscope.on_trigger()

    clock.set_time(200.0)
    clock.run_frame()
    moved = gyroscope.on_orientation_sample(0.0, 45.0, 0.0)

    clock.set_time(500.0)
    clock.run_frame()

    assert np.allclose(
        gyroscope.calibration.wxyz, captured.conjugate().wxyz, atol=1e-12
    )
    # The last render combines the fixed target with the newest sample
    assert np.allclose(
        rendered[-1].wxyz, (captured.conjugate() * moved).wxyz, atol=1e-12
    )


def test_one_shot_races_with_animation_by_default() -> None:
    """The one-shot writes immediately and the next tick overwrites it."""
    gyroscope, clock, rendered = _make_gyroscope()
    first = gyroscope.on_orientation_sample(90.0, 0.0, 0.0)
    gyroscope.on_trigger()

    clock.set_time(100.0)
    second = gyroscope.on_orientation_sample(0.0, 30.0, 0.0)

    assert np.allclose(
        gyroscope.calibration.wxyz, second.conjugate().wxyz, atol=1e-12
    )
    assert np.allclose(rendered[-1].wxyz, IDENTITY_WXYZ, atol=1e-12)
    assert not gyroscope.one_shot_pending

    clock.run_frame()
    expected = Quaternion.slerp(
        Quaternion.identity(), first.conjugate(), ease_in_out_cubic(0.2)
    )
    assert np.allclose(gyroscope.calibration.wxyz, expected.wxyz, atol=1e-12)


def test_one_shot_skipped_while_animating_when_configured() -> None:
    """With skip_while_animating the one-shot is consumed without writing."""
    gyroscope, clock, _ = _make_gyroscope(
        FirstSampleParams(skip_while_animating=True)
    )
    gyroscope.on_orientation_sample(90.0, 0.0, 0.0)
    gyroscope.on_trigger()

    clock.set_time(100.0)
    calibration_before: Quaternion = gyroscope.calibration
    gyroscope.on_orientation_sample(0.0, 30.0, 0.0)

    assert gyroscope.calibration is calibration_before
    assert not gyroscope.one_shot_pending

    # Idle samples afterwards do not revive the one-shot
    clock.run_frames(16.0)
    settled: Quaternion = gyroscope.calibration
    gyroscope.on_orientation_sample(10.0, 10.0, 10.0)
    assert gyroscope.calibration is settled


def test_one_shot_applies_when_idle_even_if_skip_configured() -> None:
    """skip_while_animating only matters during an animation."""
    gyroscope, _, _ = _make_gyroscope(FirstSampleParams(skip_while_animating=True))
    gyroscope.on_orientation_sample(10.0, 20.0, 30.0)
    live = gyroscope.on_orientation_sample(40.0, 50.0, 60.0)

    assert np.allclose(gyroscope.calibration.wxyz, live.conjugate().wxyz)


def test_one_shot_disabled() -> None:
    """Without auto-calibration only triggers change the calibration."""
    gyroscope, _, _ = _make_gyroscope(FirstSampleParams(enabled=False))
    gyroscope.on_orientation_sample(10.0, 20.0, 30.0)
    gyroscope.on_orientation_sample(40.0, 50.0, 60.0)

    assert gyroscope.calibration == Quaternion.identity()
    assert not gyroscope.one_shot_pending


def test_zero_warmup_calibrates_on_first_sample() -> None:
    """With no warmup samples the first sample calibrates."""
    gyroscope, _, rendered = _make_gyroscope(FirstSampleParams(warmup_samples=0))
    live = gyroscope.on_orientation_sample(10.0, 20.0, 30.0)

    assert np.allclose(gyroscope.calibration.wxyz, live.conjugate().wxyz)
    assert np.allclose(rendered[-1].wxyz, IDENTITY_WXYZ, atol=1e-12)
