################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion algebra using the wxyz storage convention.

Conventions:
    * Components are stored in wxyz order; accessors expose x, y, z and w
    * Every operation returns a new Quaternion; instances are immutable
    * Products use the Hamilton convention, q_left * q_right
    * Device orientation angles follow the intrinsic Z-X-Y Tait-Bryan order
      (alpha about z, beta about x, gamma about y), in degrees

Degenerate inputs:
    normalized(), inverse(), ln() and power() raise DegenerateQuaternionError
    when the norm is below NumericConstants.EPS. exp(), power() and the
    matrix conversions raise it when an intermediate overflows float64.
    Construction rejects non-finite components, so NaN and infinity never
    leave this module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .units import Angle
from .units import NumericConstants
from .units import assert_finite


TranslationLike = Union[Sequence[float], NDArray[np.float64]]


class DegenerateQuaternionError(ValueError):
    """Raised when an operation requires a quaternion with non-zero norm."""


@dataclass(frozen=True)
class Quaternion:
    """Quaternion stored in wxyz order."""

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion inputs and freeze storage."""
        wxyz: NDArray[np.float64] = np.array(self.wxyz, dtype=np.float64)
        if wxyz.shape != (4,):
            raise ValueError("wxyz must be shape (4,)")
        assert_finite(wxyz, "wxyz")
        wxyz.setflags(write=False)
        object.__setattr__(self, "wxyz", wxyz)

    ############################################################################
    # Construction
    ############################################################################

    @staticmethod
    def identity() -> "Quaternion":
        """Return the identity quaternion."""
        return Quaternion.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> "Quaternion":
        """Create a quaternion from components."""
        return Quaternion(np.array([w, x, y, z], dtype=np.float64))

    @staticmethod
    def from_xyzw(x: float, y: float, z: float, w: float) -> "Quaternion":
        """Create a quaternion from components in xyzw order."""
        return Quaternion.from_wxyz(w, x, y, z)

    @staticmethod
    def from_tait_bryan(
        alpha_deg: float, beta_deg: float, gamma_deg: float
    ) -> "Quaternion":
        """Create a quaternion from device orientation angles.

        The composite is Rz(alpha) * Rx(beta) * Ry(gamma), evaluated in
        closed form from the half-angle sines and cosines.

        Args:
            alpha_deg: Rotation about the vertical z axis, in degrees
            beta_deg: Rotation about the x axis, in degrees
            gamma_deg: Rotation about the y axis, in degrees
        """
        half_beta: float = 0.5 * float(Angle.deg2rad(beta_deg))
        half_gamma: float = 0.5 * float(Angle.deg2rad(gamma_deg))
        half_alpha: float = 0.5 * float(Angle.deg2rad(alpha_deg))

        cb: float = math.cos(half_beta)
        cg: float = math.cos(half_gamma)
        ca: float = math.cos(half_alpha)
        sb: float = math.sin(half_beta)
        sg: float = math.sin(half_gamma)
        sa: float = math.sin(half_alpha)

        return Quaternion.from_wxyz(
            cb * cg * ca - sb * sg * sa,
            sb * cg * ca - cb * sg * sa,
            cb * sg * ca + sb * cg * sa,
            cb * cg * sa + sb * sg * ca,
        )

    ############################################################################
    # Components
    ############################################################################

    @property
    def w(self) -> float:
        return float(self.wxyz[0])

    @property
    def x(self) -> float:
        return float(self.wxyz[1])

    @property
    def y(self) -> float:
        return float(self.wxyz[2])

    @property
    def z(self) -> float:
        return float(self.wxyz[3])

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components."""
        return np.array(self.wxyz, dtype=np.float64)

    def to_xyzw(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components in xyzw order."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def copy(self) -> "Quaternion":
        """Return an independent quaternion with identical components."""
        return Quaternion(self.to_wxyz())

    ############################################################################
    # Arithmetic
    ############################################################################

    def __add__(self, other: "Quaternion") -> "Quaternion":
        """Componentwise sum."""
        return Quaternion(self.wxyz + other.wxyz)

    def __neg__(self) -> "Quaternion":
        """Negate every component."""
        return Quaternion(-self.wxyz)

    def __mul__(self, other: Union["Quaternion", float]) -> "Quaternion":
        """Hamilton product with a quaternion, or scaling by a real number."""
        if not isinstance(other, Quaternion):
            return self.scaled(float(other))

        lw, lx, ly, lz = (float(c) for c in self.wxyz)
        rw, rx, ry, rz = (float(c) for c in other.wxyz)

        return Quaternion.from_wxyz(
            lw * rw - lx * rx - ly * ry - lz * rz,
            lw * rx + lx * rw + ly * rz - lz * ry,
            lw * ry - lx * rz + ly * rw + lz * rx,
            lw * rz + lx * ry - ly * rx + lz * rw,
        )

    def __rmul__(self, scalar: float) -> "Quaternion":
        """Scale by a real number on the left."""
        return self.scaled(float(scalar))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.array_equal(self.wxyz, other.wxyz))

    def __hash__(self) -> int:
        return hash(tuple(float(c) for c in self.wxyz))

    def scaled(self, scalar: float) -> "Quaternion":
        """Multiply every component by a scalar."""
        return Quaternion(self.wxyz * scalar)

    def conjugate(self) -> "Quaternion":
        """Negate the vector part and keep the scalar part."""
        return Quaternion.from_wxyz(self.w, -self.x, -self.y, -self.z)

    def dot(self, other: "Quaternion") -> float:
        """Four-dimensional dot product."""
        return float(np.dot(self.wxyz, other.wxyz))

    def magnitude_squared(self) -> float:
        """Return x^2 + y^2 + z^2 + w^2."""
        return self.dot(self)

    def magnitude(self) -> float:
        """Return the Euclidean norm."""
        return math.hypot(self.w, self.x, self.y, self.z)

    def normalized(self) -> "Quaternion":
        """Return a unit quaternion with the same direction."""
        norm: float = self._checked_norm("normalize")
        return Quaternion(self.wxyz / norm)

    def inverse(self) -> "Quaternion":
        """Return the multiplicative inverse.

        For a unit quaternion this equals the conjugate.
        """
        norm: float = self._checked_norm("invert")
        return self.conjugate().scaled(1.0 / norm).scaled(1.0 / norm)

    ############################################################################
    # Exponential map
    ############################################################################

    def exp(self) -> "Quaternion":
        """Quaternion exponential.

        With r = |(x, y, z)|, the result is e^w * (cos r, sin r * v / r).
        Below NumericConstants.EXP_VECTOR_EPS the vector part is dropped.
        """
        r: float = self._vector_norm()
        try:
            et: float = math.exp(self.w)
        except OverflowError as exc:
            raise DegenerateQuaternionError(
                f"exp overflows for scalar part {self.w:.6g}"
            ) from exc
        s: float = et * math.sin(r) / r if r > NumericConstants.EXP_VECTOR_EPS else 0.0

        wxyz: NDArray[np.float64] = np.array(
            [et * math.cos(r), self.x * s, self.y * s, self.z * s], dtype=np.float64
        )
        if not np.all(np.isfinite(wxyz)):
            raise DegenerateQuaternionError("exp result overflows float64")

        return Quaternion(wxyz)

    def ln(self) -> "Quaternion":
        """Quaternion natural logarithm on the principal branch."""
        norm: float = self._checked_norm("take the logarithm of")

        r: float = self._vector_norm()
        t: float = (
            math.atan2(r, self.w) / r if r > NumericConstants.LN_VECTOR_EPS else 0.0
        )

        return Quaternion.from_wxyz(
            math.log(norm),
            self.x * t,
            self.y * t,
            self.z * t,
        )

    def power(self, exponent: float) -> "Quaternion":
        """Raise to a real power, exp(exponent * ln(q))."""
        return self.ln().scaled(exponent).exp()

    ############################################################################
    # Interpolation
    ############################################################################

    @staticmethod
    def lerp(start: "Quaternion", end: "Quaternion", t: float) -> "Quaternion":
        """Componentwise linear blend, end * t + start * (1 - t).

        The result is not normalized. Values of t outside [0, 1] extrapolate.
        """
        return end.scaled(t) + start.scaled(1.0 - t)

    @staticmethod
    def slerp(start: "Quaternion", end: "Quaternion", t: float) -> "Quaternion":
        """Spherical linear interpolation along the shortest arc.

        The end quaternion is negated when the inputs lie in opposite
        hemispheres, then nearly parallel inputs fall back to lerp before
        any division by sin(theta). Values of t outside [0, 1] extrapolate.
        """
        dot: float = start.dot(end)
        target: Quaternion = end

        if dot < 0.0:
            dot = -dot
            target = -end

        if 1.0 - dot < NumericConstants.MACHINE_EPS:
            return Quaternion.lerp(start, target, t)

        theta: float = math.acos(dot)
        scaled_start: Quaternion = start.scaled(math.sin((1.0 - t) * theta))
        scaled_target: Quaternion = target.scaled(math.sin(t * theta))

        return (scaled_start + scaled_target).scaled(1.0 / math.sin(theta))

    ############################################################################
    # Matrices
    ############################################################################

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the 3x3 rotation matrix.

        Non-unit input is rescaled internally. The zero quaternion maps to
        the identity matrix.
        """
        n: float = self.magnitude_squared()
        if math.isinf(n):
            raise DegenerateQuaternionError("Squared norm overflows float64")
        s: float = 0.0 if n == 0.0 else 2.0 / n

        w: float = self.w
        x: float = self.x
        y: float = self.y
        z: float = self.z

        wx: float = s * w * x
        wy: float = s * w * y
        wz: float = s * w * z
        xx: float = s * x * x
        xy: float = s * x * y
        xz: float = s * x * z
        yy: float = s * y * y
        yz: float = s * y * z
        zz: float = s * z * z

        return np.array(
            [
                [1.0 - (yy + zz), xy - wz, xz + wy],
                [xy + wz, 1.0 - (xx + zz), yz - wx],
                [xz - wy, yz + wx, 1.0 - (xx + yy)],
            ],
            dtype=np.float64,
        )

    def as_matrix3d(
        self, translation: Optional[TranslationLike] = None
    ) -> NDArray[np.float64]:
        """Return the 16 values of a column-major 4x4 homogeneous transform.

        The first three groups of four hold the rows of as_matrix() padded
        with 0, the last group holds the translation followed by 1. A
        consumer reading the values column by column therefore sees the
        transposed rotation block and the translation in the last column.

        Args:
            translation: Optional (x, y, z) offset, zero when omitted
        """
        offset: NDArray[np.float64] = (
            np.zeros(3, dtype=np.float64)
            if translation is None
            else np.array(translation, dtype=np.float64)
        )
        if offset.shape != (3,):
            raise ValueError("translation must be shape (3,)")
        assert_finite(offset, "translation")

        rot: NDArray[np.float64] = self.as_matrix()
        values: NDArray[np.float64] = np.zeros(16, dtype=np.float64)
        values[0:3] = rot[0]
        values[4:7] = rot[1]
        values[8:11] = rot[2]
        values[12:15] = offset
        values[15] = 1.0
        return values

    def rotate(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Rotate a 3-vector by this quaternion."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=np.float64)
        if vec.shape != (3,):
            raise ValueError("v must be shape (3,)")
        assert_finite(vec, "v")
        return self.as_matrix() @ vec

    ############################################################################
    # Comparison
    ############################################################################

    def almost_equal(self, other: "Quaternion", atol: float = 1e-9) -> bool:
        """Check approximate equality, accounting for sign ambiguity."""
        q1: NDArray[np.float64] = self.wxyz
        q2: NDArray[np.float64] = other.wxyz
        if np.allclose(q1, q2, atol=atol):
            return True
        return bool(np.allclose(q1, -q2, atol=atol))

    ############################################################################
    # Helpers
    ############################################################################

    def _vector_norm(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def _checked_norm(self, action: str) -> float:
        try:
            norm: float = self.magnitude()
        except OverflowError:
            norm = math.inf
        if norm < NumericConstants.EPS:
            raise DegenerateQuaternionError(
                f"Cannot {action} a quaternion with norm {norm:.3e}"
            )
        if math.isinf(norm):
            raise DegenerateQuaternionError(
                f"Cannot {action} a quaternion whose norm overflows float64"
            )
        return norm


def tait_bryan_to_quaternion(
    alpha_deg: float, beta_deg: float, gamma_deg: float
) -> Quaternion:
    """Convert device orientation angles in degrees to a quaternion."""
    return Quaternion.from_tait_bryan(alpha_deg, beta_deg, gamma_deg)
