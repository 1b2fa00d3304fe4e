################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Drive a Gyroscope offline from an event script."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable
from typing import Optional

from gyro_parallax.config.gyro_config import GyroConfig
from gyro_parallax.config.gyro_params import ReplayParams
from gyro_parallax.math_utils.quat import Quaternion
from gyro_parallax.orientation.gyroscope import Gyroscope
from gyro_parallax.replay.event_script import EVENT_FRAME
from gyro_parallax.replay.event_script import EVENT_SAMPLE
from gyro_parallax.replay.event_script import EVENT_TRIGGER
from gyro_parallax.replay.event_script import EventScript
from gyro_parallax.replay.event_script import ReplayEvent
from gyro_parallax.timing.animation_clock import ManualAnimationClock


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedFrame:
    """One rendered output.

    Attributes:
        t_ms: Clock time of the render in milliseconds
        output: Quaternion passed to the renderer
    """

    t_ms: float
    output: Quaternion


class ReplayEngine:
    """Replays events against a Gyroscope on a manual clock.

    Pending animation frames are pumped at a fixed period between events and
    after the last event until the animation settles.
    """

    def __init__(
        self,
        config: Optional[GyroConfig] = None,
        render: Optional[Callable[[Quaternion], None]] = None,
    ) -> None:
        self._config: GyroConfig = (
            config if config is not None else GyroConfig.defaults()
        )
        self._render: Optional[Callable[[Quaternion], None]] = render
        self._clock: ManualAnimationClock = ManualAnimationClock()
        self._frames: list[RenderedFrame] = []
        self._gyroscope: Gyroscope = Gyroscope(
            self._on_render, self._clock, self._config
        )

    @property
    def clock(self) -> ManualAnimationClock:
        return self._clock

    @property
    def gyroscope(self) -> Gyroscope:
        return self._gyroscope

    @property
    def frames(self) -> list[RenderedFrame]:
        return self._frames

    def run(self, script: EventScript) -> list[RenderedFrame]:
        """Replay every event and settle any running animation."""
        self._clock.set_time(max(self._clock.now_ms(), script.start_ms))

        for event in script.events:
            self._pump_until(event.t_ms)
            self._clock.set_time(event.t_ms)
            self._dispatch(event)

        params: ReplayParams = self._config.params.replay
        self._clock.run_frames(params.frame_ms, params.max_frames)

        return self._frames

    def _pump_until(self, t_ms: float) -> None:
        params: ReplayParams = self._config.params.replay
        frames: int = 0
        while (
            self._clock.pending_frames > 0
            and self._clock.now_ms() + params.frame_ms <= t_ms
        ):
            if frames >= params.max_frames:
                _LOG.warning("Frame limit reached before %.3f ms", t_ms)
                break
            self._clock.advance(params.frame_ms)
            self._clock.run_frame()
            frames += 1

    def _dispatch(self, event: ReplayEvent) -> None:
        if event.kind == EVENT_SAMPLE:
            self._gyroscope.on_orientation_sample(event.alpha, event.beta, event.gamma)
        elif event.kind == EVENT_TRIGGER:
            started: bool = self._gyroscope.on_trigger()
            _LOG.debug("Trigger at %.3f ms started=%s", event.t_ms, started)
        elif event.kind == EVENT_FRAME:
            self._clock.run_frame()

    def _on_render(self, output: Quaternion) -> None:
        self._frames.append(RenderedFrame(t_ms=self._clock.now_ms(), output=output))
        if self._render is not None:
            self._render(output)
