"""
Axis-Aligned Bounding Box

This module provides BoundingBox, the axis-aligned volume used by primitives
to report their spatial extent. The box stores only its minimum and maximum
corners as numpy arrays and grows monotonically through include().

A box is empty when its maximum is below its minimum on any axis. A freshly
constructed box is empty (min = +inf, max = -inf); empty boxes are a valid,
checkable state: they report zero area and volume and never intersect or
contain anything. None inputs to include(), intersects() and contains() are
tolerated as no-ops rather than errors.
"""

import numpy as np

from .math_utils import _as_vector3, _ulp, enlarge_eps
from .vector import Point3, Vector3


class BoundingBox:
    """
    3D axis-aligned bounding box.

    Construction:
        BoundingBox()              empty box
        BoundingBox(point)         box containing only the point
        BoundingBox(x, y, z)       box containing only (x, y, z)
        BoundingBox(size)          cube of half edge `size` around the origin
        BoundingBox(other_box)     copy of another box
    """
    def __init__(self, *args):
        if len(args) == 0:
            self._min = np.full(3, np.inf)   # empty: every include() shrinks min
            self._max = np.full(3, -np.inf)  # empty: every include() grows max
        elif len(args) == 3:
            p = _as_vector3(args, "point")
            self._min = p.copy()
            self._max = p.copy()
        elif len(args) == 1 and isinstance(args[0], BoundingBox):
            self._min = args[0]._min.copy()
            self._max = args[0]._max.copy()
        elif len(args) == 1 and isinstance(args[0], (int, float, np.floating, np.integer)):
            size = float(args[0])
            self._min = np.full(3, -size)
            self._max = np.full(3, size)
        elif len(args) == 1:
            p = _as_vector3(args[0], "point")
            self._min = p.copy()
            self._max = p.copy()
        else:
            raise TypeError("BoundingBox takes a point, a box, a size, or x, y, z.")

    def copy(self):
        """Independent copy; later include() calls on either box do not affect the other."""
        return BoundingBox(self)

    @property
    def minimum(self):
        """Corner with the smallest coordinate on each axis."""
        return Point3.from_array(self._min)

    @property
    def maximum(self):
        """Corner with the largest coordinate on each axis."""
        return Point3.from_array(self._max)

    def get_center(self):
        """Midpoint of the two corners. Meaningless (non-finite) for an empty box."""
        return Point3.from_array(0.5 * (self._min + self._max))

    def get_corner(self, i):
        """
        Corner by index in [0, 7].

        Bit 0 selects the maximum on x, bit 1 on y, bit 2 on z. Corner 0 is the
        minimum and corner 7 the maximum.
        """
        bits = np.array([i & 1, i & 2, i & 4], dtype=bool)
        return Point3.from_array(np.where(bits, self._max, self._min))

    def get_bound(self, i):
        """
        Single side coordinate: 0 min.x, 1 max.x, 2 min.y, 3 max.y, 4 min.z, 5 max.z.

        Any other index returns 0.
        """
        if not 0 <= i <= 5:
            return 0.0
        corner = self._min if i % 2 == 0 else self._max
        return float(corner[i // 2])

    def get_extents(self):
        """max - min per axis. Negative on the empty axes of an empty box."""
        return Vector3.from_array(self._max - self._min)

    def get_area(self):
        """Surface area, with negative extents clamped to 0."""
        ax, ay, az = np.maximum(self._max - self._min, 0.0)  # clamp inverted axes
        return float(2.0 * (ax * ay + ay * az + az * ax))

    def get_volume(self):
        """Volume, with negative extents clamped to 0."""
        ax, ay, az = np.maximum(self._max - self._min, 0.0)
        return float(ax * ay * az)

    def enlarge_ulps(self):
        """
        Push both corners outward by max(1e-4, ulp) per axis.

        Guards against rays grazing a box computed from transformed geometry
        being missed because of rounding. Infinite coordinates (an empty box)
        stay infinite.
        """
        self._min = self._min - np.fmax(enlarge_eps, _ulp(self._min))
        self._max = self._max + np.fmax(enlarge_eps, _ulp(self._max))

    def is_empty(self):
        """
        True for a freshly constructed box, or any box whose maximum is below its
        minimum on some axis.
        """
        return bool(np.any(self._max < self._min))

    def intersects(self, other):
        """
        True if the two boxes overlap as solid volumes (closed intervals), so a
        box nested inside another intersects it. False for None.
        """
        if other is None:
            return False
        # Overlap on every axis; an empty box has min = +inf and fails the first test
        return bool(np.all(self._min <= other._max) and np.all(self._max >= other._min))

    def contains(self, *args):
        """
        Closed-interval membership test for a point, or for x, y, z.

        :param args: A Point3 (or 3-element array-like), three floats, or None.
        :return: True if min <= p <= max on every axis; False for None and
                 for an empty box.
        """
        if len(args) == 1 and args[0] is None:
            return False
        p = _as_vector3(args if len(args) == 3 else args[0], "point")
        return bool(np.all(p >= self._min) and np.all(p <= self._max))

    def include(self, *args):
        """
        Grow the box to include a point, another box, or x, y, z.

        Inclusion only ever moves min down and max up, so the box never
        shrinks and including an empty box changes nothing.

        :param args: A Point3 (or array-like), a BoundingBox, three floats, or
                     None (no-op).
        :raises ValueError: If a point argument does not have 3 components.
        """
        if len(args) == 1:
            item = args[0]
            if item is None:
                return
            if isinstance(item, BoundingBox):
                self._min = np.minimum(self._min, item._min)
                self._max = np.maximum(self._max, item._max)
                return
        p = _as_vector3(args if len(args) == 3 else args[0], "point")
        self._min = np.minimum(self._min, p)
        self._max = np.maximum(self._max, p)

    def __eq__(self, other):
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return bool(np.array_equal(self._min, other._min) and np.array_equal(self._max, other._max))

    def __str__(self):
        lo, hi = self._min, self._max
        return f"({lo[0]:.2f}, {lo[1]:.2f}, {lo[2]:.2f}) to ({hi[0]:.2f}, {hi[1]:.2f}, {hi[2]:.2f})"
