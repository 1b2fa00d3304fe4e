################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper and YAML loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Union

import yaml

from .gyro_params import GyroParams
from .gyro_params import GyroParamsError


_LOG: logging.Logger = logging.getLogger(__name__)


class GyroConfigError(Exception):
    """Raised when gyroscope configuration loading or validation fails."""


@dataclass(frozen=True)
class GyroConfig:
    """Convenience wrapper around gyroscope parameters."""

    params: GyroParams

    def __init__(self, params: GyroParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> GyroConfig:
        """Return a configuration built from default parameters."""
        return cls(GyroParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants."""
        try:
            self.params.validate()
        except GyroParamsError as exc:
            raise GyroConfigError(str(exc)) from exc

        if self.params.replay.frame_ms > self.params.animation.duration_ms:
            raise GyroConfigError(
                "replay.frame_ms must not exceed animation.duration_ms"
            )

    def duration_ms(self) -> float:
        """Return the calibration animation duration."""
        return self.params.animation.duration_ms

    def frame_ms(self) -> float:
        """Return the replay frame period."""
        return self.params.replay.frame_ms


def loads_yaml(text: str) -> GyroConfig:
    """Parse a configuration from YAML text."""
    loaded: Any = yaml.safe_load(text)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise GyroConfigError("YAML root must be a mapping")

    try:
        params: GyroParams = GyroParams.from_dict(loaded)
    except (GyroParamsError, TypeError, ValueError) as exc:
        raise GyroConfigError(str(exc)) from exc

    return GyroConfig(params)


def load_yaml(path: Union[str, Path]) -> GyroConfig:
    """Load a configuration from a YAML file."""
    config_path: Path = Path(path)

    _LOG.info("Loading gyroscope config from %s", config_path)

    try:
        text: str = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GyroConfigError(f"Unable to read {config_path}: {exc}") from exc

    return loads_yaml(text)
