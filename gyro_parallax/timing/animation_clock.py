################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Time source and frame scheduling for orientation animations
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable
from typing import Deque


_LOG: logging.Logger = logging.getLogger(__name__)


FrameCallback = Callable[[], None]


class AnimationClock:
    """
    Clock abstraction for animation timing

    Timestamps are floating-point milliseconds since an arbitrary epoch; only
    differences are meaningful.
    """

    def now_ms(self) -> float:
        """
        Return the current time in milliseconds
        """

        raise NotImplementedError

    def schedule_next_frame(self, callback: FrameCallback) -> None:
        """
        Run the callback once on the next animation frame
        """

        raise NotImplementedError


class SystemAnimationClock(AnimationClock):
    """
    Monotonic wall clock with a frame queue pumped by the host loop

    Callbacks scheduled while a frame runs are deferred to the following
    frame, so a callback that reschedules itself runs once per frame.
    """

    def __init__(self) -> None:
        self._pending: Deque[FrameCallback] = deque()

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    def schedule_next_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending_frames(self) -> int:
        """
        Number of callbacks waiting for the next frame
        """

        return len(self._pending)

    def run_frame(self) -> int:
        """
        Run every callback scheduled before this frame started

        Returns the number of callbacks run.
        """

        batch: list[FrameCallback] = list(self._pending)
        self._pending.clear()

        for callback in batch:
            callback()

        return len(batch)


class ManualAnimationClock(SystemAnimationClock):
    """
    Frame clock whose time only moves when advanced explicitly
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._now_ms: float = float(start_ms)

    def now_ms(self) -> float:
        return self._now_ms

    def set_time(self, t_ms: float) -> None:
        """
        Jump to an absolute time, which must not move backwards
        """

        if t_ms < self._now_ms:
            raise ValueError(
                f"Clock cannot move backwards ({t_ms} ms < {self._now_ms} ms)"
            )
        self._now_ms = float(t_ms)

    def advance(self, dt_ms: float) -> None:
        """
        Move the clock forward by dt_ms
        """

        self.set_time(self._now_ms + dt_ms)

    def run_frames(self, frame_ms: float, max_frames: int = 10000) -> int:
        """
        Advance by frame_ms and run a frame until nothing is scheduled

        Returns the number of frames run.
        """

        frames: int = 0
        while self.pending_frames > 0:
            if frames >= max_frames:
                _LOG.warning("Stopped after %d frames with work pending", frames)
                break
            self.advance(frame_ms)
            self.run_frame()
            frames += 1

        return frames
