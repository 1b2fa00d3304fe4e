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
Entry point for replaying orientation event scripts offline.
"""

import argparse
import dataclasses
import logging
import sys
from typing import Optional

from gyro_parallax.config.gyro_config import GyroConfig
from gyro_parallax.config.gyro_config import GyroConfigError
from gyro_parallax.config.gyro_config import load_yaml as load_config
from gyro_parallax.effects.matrix3d import quaternion_css
from gyro_parallax.replay.event_script import EventScript
from gyro_parallax.replay.event_script import EventScriptError
from gyro_parallax.replay.event_script import load_yaml as load_script
from gyro_parallax.replay.replay_engine import RenderedFrame
from gyro_parallax.replay.replay_engine import ReplayEngine


################################################################################
# Entry point
################################################################################


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay orientation samples and triggers, printing each render"
    )
    parser.add_argument("script", help="YAML event script to replay")
    parser.add_argument(
        "--config",
        default=None,
        help="YAML parameter file overriding the defaults",
    )
    parser.add_argument(
        "--frame-ms",
        type=float,
        default=None,
        help="Animation frame period in milliseconds",
    )
    parser.add_argument(
        "--matrix3d",
        action="store_true",
        help="Print the CSS matrix3d transform instead of quaternion components",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(args=args)


def _format_frame(frame: RenderedFrame, matrix3d: bool) -> str:
    if matrix3d:
        return f"{frame.t_ms:.3f} {quaternion_css(frame.output)}"
    return (
        f"{frame.t_ms:.3f} {frame.output.x:.9f} {frame.output.y:.9f} "
        f"{frame.output.z:.9f} {frame.output.w:.9f}"
    )


def main(args: Optional[list[str]] = None) -> int:
    options: argparse.Namespace = _parse_args(args=args)

    logging.basicConfig(
        level=getattr(logging, options.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config: GyroConfig = (
            load_config(options.config)
            if options.config is not None
            else GyroConfig.defaults()
        )
        if options.frame_ms is not None:
            config = GyroConfig(
                config.params.replace(
                    replay=dataclasses.replace(
                        config.params.replay, frame_ms=options.frame_ms
                    )
                )
            )
        script: EventScript = load_script(options.script)
    except (GyroConfigError, EventScriptError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    engine: ReplayEngine = ReplayEngine(config)
    for frame in engine.run(script):
        print(_format_frame(frame, options.matrix3d))

    return 0
