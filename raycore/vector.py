"""
Vector and Point Value Types

This module provides the immutable 3D value types used throughout the
geometry kernel:

Vector3 for directions and normals, with the usual algebra (negate, scale,
divide, add, subtract, dot, cross, normalize) and a lossy 16-bit codec for
unit vectors.
Point3 for positions. Points and vectors are kept distinct so that
point - point yields a Vector3 and point + vector yields a Point3.

Both are frozen dataclasses: every operation returns a new value and no
instance is ever mutated, so values can be shared freely between primitives,
shading states and worker threads.

Unit-vector compression stores the elevation angle (arccos z) in the high
byte and the azimuth (atan2(y, x)) in the low byte. Decoding uses 256-entry
sine/cosine tables computed once at import time and marked read-only.
"""

import math
from dataclasses import dataclass

import numpy as np

from .math_utils import _as_vector3

# Elevation samples theta_i = i * pi / 256 for i in [0, 256).
# Azimuth tables use the doubled angle so that 256 entries cover [0, 2 pi).
_ANGLES = np.arange(256, dtype=float) * np.pi / 256.0
COS_THETA = np.cos(_ANGLES)
SIN_THETA = np.sin(_ANGLES)
COS_PHI = np.cos(2.0 * _ANGLES)
SIN_PHI = np.sin(2.0 * _ANGLES)
for _table in (COS_THETA, SIN_THETA, COS_PHI, SIN_PHI):
    _table.flags.writeable = False
del _table


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector.

    normalize() divides by the length; for the zero vector the result is
    non-finite. Callers must guarantee a nonzero input.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        # object.__setattr__ is required because the dataclass is frozen.
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_array(cls, value, name="vector"):
        """Build a Vector3 from any 3-element array-like. Raises ValueError otherwise."""
        x, y, z = _as_vector3(value, name)
        return cls(x, y, z)

    def to_array(self):
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def get(self, i):
        """Component by index: 0 -> x, 1 -> y, anything else -> z."""
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        return self.z

    def __getitem__(self, i):
        if i not in (0, 1, 2):
            raise IndexError("Vector3 index out of range")
        return self.get(i)

    def length(self):
        """Euclidean length sqrt(x^2 + y^2 + z^2)."""
        return math.sqrt(self.length_squared())

    def length_squared(self):
        """Squared length; avoids the square root when only comparing lengths."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def negate(self):
        """Vector pointing the opposite way, (-x, -y, -z)."""
        return Vector3(-self.x, -self.y, -self.z)

    def mul(self, s):
        """
        Scale every component by a scalar.

        :param s: Scalar factor.
        :return: New Vector3 (x * s, y * s, z * s).
        """
        return Vector3(self.x * s, self.y * s, self.z * s)

    def div(self, d):
        """
        Divide every component by a scalar.

        :param d: Scalar divisor. Zero gives infinite or NaN components.
        :return: New Vector3 (x / d, y / d, z / d).
        """
        return Vector3(self.x / d, self.y / d, self.z / d)

    def normalize(self):
        """
        Return this vector scaled to unit length.

        The zero vector has no direction; the result is then NaN in every
        component rather than an exception.
        """
        n = self.length()
        if n == 0.0:
            nan = float("nan")
            return Vector3(nan, nan, nan)
        inv = 1.0 / n
        return Vector3(self.x * inv, self.y * inv, self.z * inv)

    def dot(self, other):
        """
        Scalar product.

        :param other: Vector3 (or any object with x, y, z attributes).
        :return: x * ox + y * oy + z * oz as float.
        """
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """
        Right-handed vector product self x other.

        The result is orthogonal to both operands, with length
        |self| |other| sin(angle).

        :param other: Vector3.
        :return: New Vector3.
        """
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def add(self, other):
        """Component-wise sum with another Vector3."""
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other):
        """Component-wise difference self - other."""
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        if isinstance(other, Vector3):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector3):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, s):
        if isinstance(s, (int, float, np.floating, np.integer)):
            return self.mul(float(s))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, d):
        if isinstance(d, (int, float, np.floating, np.integer)):
            return self.div(float(d))
        return NotImplemented

    def encode(self):
        """
        Compress a unit vector into a 16-bit code.

        theta = floor(acos(z) * 256 / pi), clamped to 255.
        phi   = trunc(atan2(y, x) * 128 / pi), negative values wrapped by 256,
                values above 255 clamped.
        code  = (theta << 8) | phi

        :return: int in [0, 65535].
        """
        # acos is undefined just outside [-1, 1]; rounding can land there.
        z = float(np.clip(self.z, -1.0, 1.0))
        theta = int(math.acos(z) * (256.0 / math.pi))  # elevation bin, floor for theta >= 0
        if theta > 255:
            theta = 255
        phi = int(math.atan2(self.y, self.x) * (128.0 / math.pi))  # azimuth bin, truncated toward zero
        if phi < 0:
            phi += 256  # wrap (-pi, 0) onto the upper half of the byte
        elif phi > 255:
            phi = 255
        return ((theta & 0xFF) << 8) | (phi & 0xFF)

    @staticmethod
    def decode(code):
        """
        Reconstruct an approximate unit vector from a 16-bit code.

        Signed 16-bit codes are accepted too; only the low 16 bits are read.
        """
        code = int(code) & 0xFFFF
        t = code >> 8    # elevation bin, high byte
        p = code & 0xFF  # azimuth bin, low byte
        return Vector3(
            SIN_THETA[t] * COS_PHI[p],
            SIN_THETA[t] * SIN_PHI[p],
            COS_THETA[t],
        )

    def __str__(self):
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"


@dataclass(frozen=True)
class Point3:
    """
    Immutable 3D position.

    Differs from Vector3 only in which operations are defined: two points
    subtract to a Vector3, and a point offset by a Vector3 is again a point.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_array(cls, value, name="point"):
        """Build a Point3 from any 3-element array-like. Raises ValueError otherwise."""
        x, y, z = _as_vector3(value, name)
        return cls(x, y, z)

    def to_array(self):
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, i):
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        if i == 2:
            return self.z
        raise IndexError("Point3 index out of range")

    def distance_to_squared(self, other):
        """
        Squared Euclidean distance to another point.

        :param other: Point3.
        :return: float, same units as the coordinates squared.
        """
        dx = other.x - self.x
        dy = other.y - self.y
        dz = other.z - self.z
        return dx * dx + dy * dy + dz * dz

    def distance_to(self, other):
        return math.sqrt(self.distance_to_squared(other))

    @staticmethod
    def mid(a, b):
        """Point halfway between a and b."""
        return Point3(0.5 * (a.x + b.x), 0.5 * (a.y + b.y), 0.5 * (a.z + b.z))

    def __sub__(self, other):
        # point - point is a displacement; point - vector is a point
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, Vector3):
            return Point3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __str__(self):
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"
