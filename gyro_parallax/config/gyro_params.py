################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for gyroscope tilt effects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
from typing import Any

import numpy as np


# Calibration animation duration in milliseconds
ANIMATION_DURATION_MS: float = 500.0

# Auto-calibrate from the live orientation after the warmup samples
FIRST_SAMPLE_ENABLED: bool = True
# Number of sensor samples consumed before the one-shot calibration
FIRST_SAMPLE_WARMUP_SAMPLES: int = 1
# Drop the one-shot calibration when a trigger animation is running
FIRST_SAMPLE_SKIP_WHILE_ANIMATING: bool = False

# Cube translation applied after rotation, in CSS pixels
CUBE_TRANSLATION: np.ndarray = np.array([0.0, 0.0, 160.0], dtype=np.float64)

# Number of particles laid out on the plane
PARTICLE_COUNT: int = 25
# Particles per grid row
PARTICLE_COLUMNS: int = 5
# Horizontal particle spacing in CSS pixels
PARTICLE_SPACING_X: float = 70.0
# Vertical particle spacing in CSS pixels
PARTICLE_SPACING_Y: float = 50.0
# Vertical offset of the first particle row in CSS pixels
PARTICLE_OFFSET_Y: float = 40.0
# Particle depth above the plane in CSS pixels
PARTICLE_DEPTH: float = 100.0

# Frame period used when replaying event scripts, in milliseconds
REPLAY_FRAME_MS: float = 16.0
# Upper bound on frames pumped between two replay events
REPLAY_MAX_FRAMES: int = 10000


class GyroParamsError(Exception):
    """Raised when gyroscope parameter validation fails."""


def _as_float_array(value: Any, name: str) -> np.ndarray:
    """Coerce a value to a float64 numpy array with shape (3,)."""
    array: np.ndarray = np.asarray(value, dtype=np.float64)
    if array.shape != (3,):
        raise GyroParamsError(f"{name} must have shape (3,)")
    if not np.all(np.isfinite(array)):
        raise GyroParamsError(f"{name} must contain finite values")
    return array


def _require_number(value: Any, name: str) -> None:
    """Require a finite real number that is not a bool."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GyroParamsError(f"{name} must be a number")
    if not math.isfinite(value):
        raise GyroParamsError(f"{name} must be finite")


def _require_positive(value: float, name: str) -> None:
    """Require a positive value."""
    _require_number(value, name)
    if value <= 0.0:
        raise GyroParamsError(f"{name} must be positive")


def _require_non_negative(value: float, name: str) -> None:
    """Require a non-negative value."""
    _require_number(value, name)
    if value < 0.0:
        raise GyroParamsError(f"{name} must be non-negative")


def _require_int(value: Any, name: str) -> None:
    """Require an integer value that is not a bool."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise GyroParamsError(f"{name} must be an int")


def _require_bool(value: Any, name: str) -> None:
    """Require a bool value."""
    if not isinstance(value, bool):
        raise GyroParamsError(f"{name} must be a bool")


@dataclass(frozen=True)
class AnimationParams:
    """Timing of the click-triggered recentering animation."""

    # Animation duration in milliseconds
    duration_ms: float = ANIMATION_DURATION_MS


@dataclass(frozen=True)
class FirstSampleParams:
    """One-shot auto-calibration at startup."""

    # Enable the one-shot calibration
    enabled: bool = FIRST_SAMPLE_ENABLED
    # Sensor samples consumed before the one-shot fires
    warmup_samples: int = FIRST_SAMPLE_WARMUP_SAMPLES
    # Skip the one-shot while an animation is running
    skip_while_animating: bool = FIRST_SAMPLE_SKIP_WHILE_ANIMATING


@dataclass(frozen=True)
class CubeParams:
    """Placement of the rotating cube."""

    # Translation in CSS pixels
    translation: np.ndarray = field(default_factory=lambda: CUBE_TRANSLATION.copy())

    def __post_init__(self) -> None:
        """Coerce the translation into a float64 numpy array."""
        object.__setattr__(
            self,
            "translation",
            _as_float_array(self.translation, "cube.translation"),
        )


@dataclass(frozen=True)
class ParticleParams:
    """Grid layout of counter-rotated particles."""

    # Number of particles
    count: int = PARTICLE_COUNT
    # Particles per row
    columns: int = PARTICLE_COLUMNS
    # Horizontal spacing in CSS pixels
    spacing_x: float = PARTICLE_SPACING_X
    # Vertical spacing in CSS pixels
    spacing_y: float = PARTICLE_SPACING_Y
    # Vertical offset of the first row in CSS pixels
    offset_y: float = PARTICLE_OFFSET_Y
    # Depth above the plane in CSS pixels
    depth: float = PARTICLE_DEPTH


@dataclass(frozen=True)
class ReplayParams:
    """Frame pacing for offline event script replay."""

    # Frame period in milliseconds
    frame_ms: float = REPLAY_FRAME_MS
    # Maximum frames pumped between events
    max_frames: int = REPLAY_MAX_FRAMES


@dataclass(frozen=True)
class GyroParams:
    """Complete configuration tree for gyroscope tilt effects."""

    animation: AnimationParams
    first_sample: FirstSampleParams
    cube: CubeParams
    particles: ParticleParams
    replay: ReplayParams

    @classmethod
    def defaults(cls) -> GyroParams:
        """Return the default parameter tree."""
        return cls(
            animation=AnimationParams(),
            first_sample=FirstSampleParams(),
            cube=CubeParams(),
            particles=ParticleParams(),
            replay=ReplayParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_positive(self.animation.duration_ms, "animation.duration_ms")

        _require_bool(self.first_sample.enabled, "first_sample.enabled")
        _require_int(self.first_sample.warmup_samples, "first_sample.warmup_samples")
        _require_non_negative(
            self.first_sample.warmup_samples, "first_sample.warmup_samples"
        )
        _require_bool(
            self.first_sample.skip_while_animating,
            "first_sample.skip_while_animating",
        )

        _require_int(self.particles.count, "particles.count")
        _require_non_negative(self.particles.count, "particles.count")
        _require_int(self.particles.columns, "particles.columns")
        _require_positive(self.particles.columns, "particles.columns")
        _require_number(self.particles.spacing_x, "particles.spacing_x")
        _require_number(self.particles.spacing_y, "particles.spacing_y")
        _require_number(self.particles.offset_y, "particles.offset_y")
        _require_number(self.particles.depth, "particles.depth")

        _require_positive(self.replay.frame_ms, "replay.frame_ms")
        _require_int(self.replay.max_frames, "replay.max_frames")
        _require_positive(self.replay.max_frames, "replay.max_frames")

    def replace(self, **namespace_overrides: Any) -> GyroParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GyroParams:
        """Build parameters from a nested mapping, defaulting missing keys.

        Unknown namespaces or keys raise GyroParamsError.
        """
        defaults: GyroParams = cls.defaults()
        namespaces: dict[str, Any] = {}
        known: set[str] = {f.name for f in fields(cls)}

        unknown: set[str] = set(data.keys()) - known
        if unknown:
            raise GyroParamsError(
                f"Unknown parameter namespaces: {', '.join(sorted(unknown))}"
            )

        for name in sorted(known):
            default_section: Any = getattr(defaults, name)
            overrides: Any = data.get(name) or {}
            if not isinstance(overrides, dict):
                raise GyroParamsError(f"{name} must be a mapping")
            section_keys: set[str] = {f.name for f in fields(default_section)}
            unknown_keys: set[str] = set(overrides.keys()) - section_keys
            if unknown_keys:
                raise GyroParamsError(
                    f"Unknown keys in {name}: {', '.join(sorted(unknown_keys))}"
                )
            namespaces[name] = replace(default_section, **overrides)

        return cls(**namespaces)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses and numpy arrays into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    if isinstance(value, np.ndarray):
        return value.tolist()
    return value
