################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Scalar helpers for time-based animation curves."""

from __future__ import annotations


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in/ease-out curve.

    The curve accelerates over the first half and decelerates over the
    second half. The result is not clamped; floating error can push it a
    hair outside [0, 1] at the endpoints.
    """
    if t < 0.5:
        return 4.0 * t * t * t
    return (t - 1.0) * (2.0 * t - 2.0) * (2.0 * t - 2.0) + 1.0


def eased_progress(elapsed: float, duration: float) -> tuple[float, float]:
    """Return (progress, eased) for an animation, both clamped to [0, 1].

    Args:
        elapsed: Time since the animation started
        duration: Total animation duration in the same units as elapsed
    """
    progress: float = clamp(elapsed / duration, 0.0, 1.0)
    eased: float = clamp(ease_in_out_cubic(progress), 0.0, 1.0)
    return progress, eased
