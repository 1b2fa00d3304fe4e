################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.replay.event_script import EventScript
from gyro_parallax.replay.event_script import EventScriptError
from gyro_parallax.replay.event_script import ReplayEvent
from gyro_parallax.replay.replay_engine import RenderedFrame
from gyro_parallax.replay.replay_engine import ReplayEngine


__all__ = [
    "EventScript",
    "EventScriptError",
    "RenderedFrame",
    "ReplayEngine",
    "ReplayEvent",
]
