"""
Affine Transforms

Matrix4 wraps a 4x4 numpy matrix and applies it to the package value types.
The shading state uses it to move hit points and normals between object,
world and camera space:

    transform_p()            points (translation applied)
    transform_v()            directions (translation ignored)
    transform_transpose_v()  directions through the transposed 3x3 block;
                             applied with the inverse matrix this is the
                             correct transform for surface normals.
"""

import numpy as np

from .math_utils import _as_matrix4
from .vector import Point3, Vector3


class Matrix4:
    """Immutable 4x4 affine transform (row-major, column vectors)."""
    def __init__(self, matrix=None):
        """
        :param matrix: Array-like 4x4 matrix. Defaults to the identity.
        :raises ValueError: If the matrix is not 4x4.
        """
        m = np.eye(4) if matrix is None else _as_matrix4(matrix, "matrix").copy()
        m.flags.writeable = False
        self._m = m

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def translation(cls, x, y, z):
        m = np.eye(4)
        m[:3, 3] = (x, y, z)
        return cls(m)

    @classmethod
    def scale(cls, sx, sy=None, sz=None):
        sy = sx if sy is None else sy
        sz = sx if sz is None else sz
        return cls(np.diag([sx, sy, sz, 1.0]))

    @classmethod
    def rotation(cls, axis, angle):
        """Rotation of `angle` radians about `axis` (Rodrigues' formula)."""
        k = np.asarray(list(axis), dtype=float)
        k = k / np.linalg.norm(k)
        kx = np.array([
            [0.0, -k[2], k[1]],
            [k[2], 0.0, -k[0]],
            [-k[1], k[0], 0.0],
        ])
        m = np.eye(4)
        m[:3, :3] = np.eye(3) + np.sin(angle) * kx + (1.0 - np.cos(angle)) * (kx @ kx)
        return cls(m)

    @property
    def matrix(self):
        return self._m

    def multiply(self, other):
        """self * other: applies other first, then self."""
        return Matrix4(self._m @ other._m)

    __matmul__ = multiply

    def inverse(self):
        """
        :return: Inverse transform.
        :raises ValueError: If the matrix is singular.
        """
        try:
            inv = np.linalg.inv(self._m)
        except np.linalg.LinAlgError:
            raise ValueError("matrix is singular and cannot be inverted.") from None
        # Near-singular input can overflow instead of raising
        if not np.all(np.isfinite(inv)):
            raise ValueError("matrix is singular and cannot be inverted.")
        return Matrix4(inv)

    def transform_p(self, p):
        x, y, z = self._m[:3, :3] @ np.asarray(list(p), dtype=float) + self._m[:3, 3]
        return Point3(x, y, z)

    def transform_v(self, v):
        x, y, z = self._m[:3, :3] @ np.asarray(list(v), dtype=float)
        return Vector3(x, y, z)

    def transform_transpose_v(self, v):
        x, y, z = self._m[:3, :3].T @ np.asarray(list(v), dtype=float)
        return Vector3(x, y, z)

    def __eq__(self, other):
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None
