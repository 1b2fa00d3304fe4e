################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema for timed orientation and trigger event scripts.

Example:

    events:
      - {t_ms: 0, type: sample, alpha: 10, beta: 20, gamma: 30}
      - {t_ms: 16, type: sample, alpha: 12, beta: 20, gamma: 30}
      - {t_ms: 100, type: trigger}
      - {t_ms: 116, type: frame}
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Union

import yaml


EVENT_SAMPLE: str = "sample"
EVENT_TRIGGER: str = "trigger"
EVENT_FRAME: str = "frame"

EVENT_TYPES: frozenset[str] = frozenset({EVENT_SAMPLE, EVENT_TRIGGER, EVENT_FRAME})


class EventScriptError(Exception):
    """Raised when an event script is malformed."""


@dataclass(frozen=True)
class ReplayEvent:
    """One timed input event.

    Attributes:
        t_ms: Event time in milliseconds
        kind: One of sample, trigger or frame
        alpha: Rotation about z in degrees, samples only
        beta: Rotation about x in degrees, samples only
        gamma: Rotation about y in degrees, samples only
    """

    t_ms: float
    kind: str
    alpha: float = 0.0
    beta: float = 0.0
    gamma: float = 0.0

    def __post_init__(self) -> None:
        """Validate the event fields."""
        if self.kind not in EVENT_TYPES:
            raise EventScriptError(
                f"Unknown event type {self.kind!r}, expected one of "
                f"{', '.join(sorted(EVENT_TYPES))}"
            )
        object.__setattr__(self, "t_ms", _require_float(self.t_ms, "t_ms"))
        object.__setattr__(self, "alpha", _require_float(self.alpha, "alpha"))
        object.__setattr__(self, "beta", _require_float(self.beta, "beta"))
        object.__setattr__(self, "gamma", _require_float(self.gamma, "gamma"))


@dataclass(frozen=True)
class EventScript:
    """Time-ordered list of replay events."""

    events: tuple[ReplayEvent, ...]

    def __post_init__(self) -> None:
        """Require non-decreasing event times."""
        for previous, current in zip(self.events, self.events[1:]):
            if current.t_ms < previous.t_ms:
                raise EventScriptError(
                    f"Events must be sorted by time ({current.t_ms} ms "
                    f"follows {previous.t_ms} ms)"
                )

    @property
    def start_ms(self) -> float:
        return self.events[0].t_ms if self.events else 0.0


def event_from_dict(data: dict[str, object]) -> ReplayEvent:
    """Build an event from a mapping."""
    kind: object = data.get("type")
    if not isinstance(kind, str):
        raise EventScriptError("type must be a string")
    if "t_ms" not in data:
        raise EventScriptError("t_ms is required")

    angles: set[str] = {"alpha", "beta", "gamma"}
    allowed: set[str] = {"t_ms", "type"} | (angles if kind == EVENT_SAMPLE else set())
    unknown: set[str] = {key for key in data.keys() if key not in allowed}
    if unknown:
        raise EventScriptError(
            f"Unexpected keys in {kind} event: {', '.join(sorted(unknown))}"
        )
    if kind == EVENT_SAMPLE:
        missing: set[str] = {key for key in angles if key not in data}
        if missing:
            raise EventScriptError(
                f"Missing keys in sample event: {', '.join(sorted(missing))}"
            )

    return ReplayEvent(
        t_ms=data["t_ms"],  # type: ignore[arg-type]
        kind=kind,
        alpha=data.get("alpha", 0.0),  # type: ignore[arg-type]
        beta=data.get("beta", 0.0),  # type: ignore[arg-type]
        gamma=data.get("gamma", 0.0),  # type: ignore[arg-type]
    )


def loads_yaml(text: str) -> EventScript:
    """Parse an event script from YAML text."""
    loaded: Any = yaml.safe_load(text)
    if not isinstance(loaded, dict):
        raise EventScriptError("YAML root must be a mapping")
    if set(loaded.keys()) != {"events"}:
        raise EventScriptError("YAML root must contain only 'events'")

    raw_events: Any = loaded["events"]
    if raw_events is None:
        raw_events = []
    if not isinstance(raw_events, list):
        raise EventScriptError("events must be a list")

    events: list[ReplayEvent] = []
    for index, raw in enumerate(raw_events):
        if not isinstance(raw, dict):
            raise EventScriptError(f"events[{index}] must be a mapping")
        try:
            events.append(event_from_dict(raw))
        except EventScriptError as exc:
            raise EventScriptError(f"events[{index}]: {exc}") from exc

    return EventScript(events=tuple(events))


def load_yaml(path: Union[str, Path]) -> EventScript:
    """Load an event script from a YAML file."""
    script_path: Path = Path(path)
    try:
        text: str = script_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EventScriptError(f"Unable to read {script_path}: {exc}") from exc
    return loads_yaml(text)


def _require_float(value: object, name: str) -> float:
    """Ensure the value is a finite real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise EventScriptError(f"{name} must be a number")
    result: float = float(value)
    if not math.isfinite(result):
        raise EventScriptError(f"{name} must be finite")
    return result
