"""
Orthonormal Basis

Right-handed local frames (u, v, w) built from one direction, or from a
direction plus an up hint. Shading uses them to express directions relative
to the surface normal (w).

The basis vectors are immutable Vector3 values; the basis itself changes only
through the flip/swap operations, which replace whole axes and therefore keep
every axis unit length and mutually orthogonal.
"""

from .vector import Vector3


class OrthoNormalBasis:
    """
    Orthonormal frame with axes u, v, w.

    Use make_from_w() or make_from_wv() to build one. Both produce a
    right-handed frame (u = v x w).
    """
    def __init__(self, u, v, w):
        self._u = u
        self._v = v
        self._w = w

    @property
    def u(self):
        return self._u

    @property
    def v(self):
        return self._v

    @property
    def w(self):
        return self._w

    @classmethod
    def make_from_w(cls, w):
        """
        Build a frame whose w axis is the given direction.

        The seed for v is made perpendicular to w by zeroing the component of
        w with the smallest magnitude and swapping/negating the other two.
        Zeroing the smallest component keeps the seed far from parallel to w,
        so its normalization is well conditioned.

        :param w: Nonzero Vector3.
        :return: OrthoNormalBasis.
        """
        w = w.normalize()
        ax, ay, az = abs(w.x), abs(w.y), abs(w.z)
        if ax < ay and ax < az:
            v = Vector3(0.0, w.z, -w.y)
        elif ay < az:
            v = Vector3(w.z, 0.0, -w.x)
        else:
            v = Vector3(w.y, -w.x, 0.0)
        v = v.normalize()
        u = v.cross(w)
        return cls(u, v, w)

    @classmethod
    def make_from_wv(cls, w, v):
        """
        Build a frame from a direction w and an up hint v.

        v is only a hint: it is re-derived as w x u so the frame is exactly
        orthogonal. The hint must not be parallel to w.
        """
        w = w.normalize()
        u = v.cross(w).normalize()
        v = w.cross(u)
        return cls(u, v, w)

    def flip_u(self):
        """
        Negate one axis in place (flip_u, flip_v, flip_w).

        A single flip turns the frame left-handed; callers mirroring a frame
        flip one axis, callers rotating it by 180 degrees flip two.
        """
        self._u = self._u.negate()

    def flip_v(self):
        self._v = self._v.negate()

    def flip_w(self):
        self._w = self._w.negate()

    def swap_uv(self):
        """
        Exchange two axes in place (swap_uv, swap_vw, swap_wu).

        Like a single flip, a swap reverses handedness.
        """
        self._u, self._v = self._v, self._u

    def swap_vw(self):
        self._v, self._w = self._w, self._v

    def swap_wu(self):
        self._w, self._u = self._u, self._w

    def transform(self, a):
        """
        Local -> ambient: a.x * u + a.y * v + a.z * w.

        :param a: Vector3 expressed in this frame.
        :return: Vector3 in the space the axes are expressed in.
        """
        u, v, w = self._u, self._v, self._w
        return Vector3(
            a.x * u.x + a.y * v.x + a.z * w.x,
            a.x * u.y + a.y * v.y + a.z * w.y,
            a.x * u.z + a.y * v.z + a.z * w.z,
        )

    def untransform(self, a):
        """
        Ambient -> local: (a.u, a.v, a.w). Inverse of transform() because the
        axes are orthonormal.

        :param a: Vector3 in ambient space.
        :return: Vector3 of frame coordinates.
        """
        return Vector3(a.dot(self._u), a.dot(self._v), a.dot(self._w))

    def untransform_x(self, a):
        """Single local coordinate along u; untransform_y and untransform_z read v and w."""
        return a.dot(self._u)

    def untransform_y(self, a):
        return a.dot(self._v)

    def untransform_z(self, a):
        return a.dot(self._w)

    def __repr__(self):
        return f"OrthoNormalBasis(u={self._u}, v={self._v}, w={self._w})"
