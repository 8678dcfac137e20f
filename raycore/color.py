from dataclasses import dataclass

import numpy as np

from .math_utils import _as_vector3


@dataclass(frozen=True)
class Color:
    """
    Immutable linear RGB color returned by shaders.

    Components are stored as given; no clamping or color-space conversion
    happens here.
    """
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "r", float(self.r))
        object.__setattr__(self, "g", float(self.g))
        object.__setattr__(self, "b", float(self.b))

    @classmethod
    def from_array(cls, value, name="color"):
        r, g, b = _as_vector3(value, name)
        return cls(r, g, b)

    def to_array(self):
        return np.array([self.r, self.g, self.b], dtype=float)

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
