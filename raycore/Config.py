from collections.abc import Mapping

import numpy as np

from .color import Color
from .vector import Point3, Vector3


class PlaneConfig:
    # Plane placement
    center = (0.0, 0.0, 0.0)  # [world] reference point on the plane
    normal = (0.0, 1.0, 0.0)  # [unit] used only when point1/point2 are unset

    # Optional triangle (center, point1, point2) defining normal and UV mapping.
    # Both must be set; otherwise the plane has no UV mapping.
    point1 = None  # [world] maps to UV (1, 0)
    point2 = None  # [world] maps to UV (0, 1)


class WireframeConfig:
    line = (0.0, 0.0, 0.0)  # line color, black
    fill = (1.0, 1.0, 1.0)  # fill color, white
    # Angular half-width of a line as seen from the camera. Roughly half the
    # angular width of a pixel.
    width = np.pi * 0.5 / 4096  # [rad]


class ParameterList:
    """
    Named-option source consumed by Plane.update() and Shader.update().

    Wraps either a mapping or any object exposing options as attributes (such
    as the config classes above). A getter returns its default when the key
    is missing or set to None, so partial reconfiguration keeps the previous
    value of every option that is not mentioned.
    """
    def __init__(self, source=None, **options):
        """
        :param source:  Mapping, attribute object, another ParameterList, or None.
        :param options: Extra options layered on top of source.
        """
        self._source = {} if source is None else source
        self._options = dict(options)

    def _lookup(self, name):
        if name in self._options:
            return self._options[name]
        source = self._source
        if isinstance(source, ParameterList):
            return source._lookup(name)
        if isinstance(source, Mapping):
            return source.get(name)
        return getattr(source, name, None)

    def has(self, name):
        return self._lookup(name) is not None

    def get_point(self, name, default):
        """Return the option as a Point3, or default when unset."""
        value = self._lookup(name)
        if value is None:
            return default
        return Point3.from_array(value, name)

    def get_vector(self, name, default):
        """Return the option as a Vector3, or default when unset."""
        value = self._lookup(name)
        if value is None:
            return default
        return Vector3.from_array(value, name)

    def get_color(self, name, default):
        """Return the option as a Color, or default when unset."""
        value = self._lookup(name)
        if value is None:
            return default
        return Color.from_array(value, name)

    def get_float(self, name, default):
        value = self._lookup(name)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a float.") from None
