import math

from .math_utils import eps
from .vector import Point3, Vector3


class Ray:
    """
    Ray with origin, direction and an open valid interval (t_min, t_max).

    Primitives narrow t_max with set_max() when they record a hit, so after
    testing every primitive the ray ends at the nearest intersection.

    :param origin:    Point3 (or 3-element array-like) ray origin.
    :param direction: Vector3 (or 3-element array-like) direction; not normalized.
    :param t_min:     Lower bound of the valid interval (exclusive).
    :param t_max:     Upper bound of the valid interval (exclusive).
    """
    def __init__(self, origin, direction, t_min=eps, t_max=math.inf):
        self.origin = origin if isinstance(origin, Point3) else Point3.from_array(origin, "origin")
        self.direction = direction if isinstance(direction, Vector3) else Vector3.from_array(direction, "direction")
        self.t_min = float(t_min)
        self.t_max = float(t_max)

    def is_inside(self, t):
        """True if t lies strictly inside the current valid interval."""
        return self.t_min < t < self.t_max

    def set_max(self, t):
        self.t_max = float(t)

    def point_at(self, t):
        return self.origin + self.direction * t

    def get_point(self):
        """Point at the current end of the ray, i.e. the nearest hit so far."""
        return self.point_at(self.t_max)

    def __repr__(self):
        return f"Ray(origin={self.origin}, direction={self.direction}, t=({self.t_min}, {self.t_max}))"
