"""
Math Utilities Module

This module provides helper functions for the numerical corner cases shared
across the geometry kernel. It covers coercion of array-like inputs into
validated 3-vectors and 4x4 matrices, units-in-the-last-place spacing for
rounding-error inflation, and the dominant-axis table used to project planar
points onto the two coordinates that keep a 2D parameterization stable.

All functions here treat vector and matrix inputs consistently so that the
value types (Vector3, Point3, Color) and the numpy-backed types (BoundingBox,
Matrix4) can be fed from lists, tuples, numpy arrays or each other.
"""

from enum import IntEnum

import numpy as np

# Small numerical tolerance to reject degenerate configurations such as
# collinear plane points or near-zero determinants.
eps = 1e-12  # [dimensionless]

# Minimum outward margin applied by BoundingBox.enlarge_ulps().
enlarge_eps = 1e-4  # [world units]


class Axis(IntEnum):
    """
    Dominant-axis tag of a plane normal.

    NONE marks a plane without a UV mapping; its numeric value (3) is kept
    so the tag reads the same as the selector stored by the renderer.
    """
    X = 0
    Y = 1
    Z = 2
    NONE = 3


# For each dominant axis, the pair of coordinate indices (u, v) that the
# plane is projected onto. The cyclic order keeps the projection
# right-handed with respect to the dropped axis.
PROJECTION_AXES = {
    Axis.X: (1, 2),  # (y, z)
    Axis.Y: (2, 0),  # (z, x)
    Axis.Z: (0, 1),  # (x, y)
}


def _as_vector3(value, name):
    """
    Validate and convert an input into a flat 3-element float vector.

    Takes any array-like input (list, tuple, numpy array, or one of the
    package value types, which iterate over their components) and converts
    it to a 1D numpy array of exactly 3 elements with float64 dtype.

    :param value: Array-like input to convert into a 3D vector.
    :param name:  Human-readable parameter name, shown in error messages.

    :return: numpy array of shape (3,) with dtype float64.
    :raises ValueError: If the input does not contain exactly 3 elements.
    """
    # Value types are iterable; materialize them before handing to numpy
    if not isinstance(value, np.ndarray) and hasattr(value, "__iter__"):
        value = list(value)

    # Convert the input to a numpy float array and flatten it to 1D
    vec = np.asarray(value, dtype=float).reshape(-1)

    # Check that the flattened array has exactly 3 elements
    if vec.size != 3:
        raise ValueError(f"{name} must be a 3D vector.")

    return vec


def _as_matrix4(value, name):
    """
    Validate and convert an input into a 4x4 float matrix.

    Only the shape is validated; invertibility is checked where an inverse
    is actually required.

    :param value: Array-like input to convert into a 4x4 matrix.
    :param name:  Human-readable parameter name, shown in error messages.

    :return: numpy array of shape (4, 4) with dtype float64.
    :raises ValueError: If the resulting shape is not (4, 4).
    """
    matrix = np.asarray(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError(f"{name} must be a 4x4 matrix.")
    return matrix


def _ulp(values):
    """
    Unit in the last place for each element of an array.

    numpy's spacing() is signed (negative for negative inputs), so the
    magnitude is taken. Infinite inputs yield NaN, which callers are expected
    to discard with np.fmax.

    :param values: Array-like of floats.
    :return: numpy array of positive ulp magnitudes (NaN for infinities).
    """
    with np.errstate(invalid="ignore"):
        return np.abs(np.spacing(np.asarray(values, dtype=float)))


def _dominant_axis(normal):
    """
    Pick the axis along which a normal has its largest component magnitude.

    Ties resolve towards the later axis: x wins only if it is strictly larger
    than both y and z, and y wins only if it is strictly larger than z.

    :param normal: 3-element array-like normal.
    :return: Axis.X, Axis.Y or Axis.Z.
    """
    ax, ay, az = np.abs(_as_vector3(normal, "normal"))
    if ax > ay and ax > az:
        return Axis.X
    if ay > az:
        return Axis.Y
    return Axis.Z


def _project(point, axis):
    """
    Drop the dominant axis of a point and return the remaining two coordinates.

    :param point: 3-element array-like point.
    :param axis:  Dominant axis tag; Axis.NONE projects everything to (0, 0).
    :return: (hu, hv) tuple of floats.
    """
    if axis == Axis.NONE:
        return 0.0, 0.0
    iu, iv = PROJECTION_AXES[axis]
    return float(point[iu]), float(point[iv])
