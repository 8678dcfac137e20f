"""
Surface Primitives and Ray Intersection

This module provides the primitive capability interface used by the renderer
and its planar implementation:

PrimitiveList, the contract every surface kind follows: configure from a
ParameterList, intersect a ray against one of its sub-primitives (narrowing
the ray and recording the primitive id), report per-primitive and world
bounds, and fill in a ShadingState for a recorded hit.
Plane, an infinite plane given by a center point and a normal, or by three
points that additionally define an affine UV mapping.

Intersection never raises for geometric degeneracies: a ray parallel to the
plane simply reports no hit. Configuration, on the other hand, is validated
and a degenerate three-point plane is rejected with ValueError.
"""

import logging

from .basis import OrthoNormalBasis
from .Config import ParameterList
from .math_utils import Axis, _dominant_axis, _project, eps
from .vector import Point3, Vector3

logger = logging.getLogger(__name__)


class PrimitiveList:
    """
    Abstract base class for a collection of ray-traceable sub-primitives.

    Subclasses override every method below. Implementations must narrow the
    ray with ray.set_max(t) and call state.set_intersection(prim_id) when a
    hit inside the ray's valid interval is found, so only the nearest hit
    survives across primitives.
    """
    def update(self, params):
        """
        Apply configuration from a ParameterList (or anything it can wrap).

        :return: True if the configuration was accepted.
        :raises NotImplementedError: Must be overridden by subclasses.
        """
        raise NotImplementedError

    def get_num_primitives(self):
        raise NotImplementedError

    def get_primitive_bound(self, prim_id, i):
        """
        Bound of one sub-primitive. i indexes (min.x, max.x, min.y, max.y, min.z, max.z).
        """
        raise NotImplementedError

    def get_world_bounds(self, o2w):
        """
        World-space BoundingBox under the object-to-world transform o2w, or
        None when the primitive is unbounded and must be tested exhaustively.
        """
        raise NotImplementedError

    def intersect_primitive(self, ray, prim_id, state):
        raise NotImplementedError

    def prepare_shading_state(self, state):
        raise NotImplementedError

    def get_baking_primitives(self):
        """Primitives to use for light baking, or None when not supported."""
        return None


class Plane(PrimitiveList):
    """
    Infinite plane.

    Configured either by an explicit normal (no UV mapping; every hit gets
    UV (0, 0)) or by a triangle (center, point1, point2) whose winding
    defines the normal and which is mapped to UV so that point1 lands on
    (1, 0) and point2 on (0, 1).

    The UV map is stored as six coefficients applied to the projection of a
    hit point onto the two coordinates orthogonal to the normal's dominant
    axis. They are derived once per update() and reused on every hit.
    """
    def __init__(self, params=None):
        self.center = Point3(0.0, 0.0, 0.0)  # [world] reference point
        self.normal = Vector3(0.0, 1.0, 0.0)  # [unit] plane normal
        self.k = Axis.NONE                    # dominant axis of the UV projection
        self._reset_uv()
        if params is not None:
            self.update(params)

    def _reset_uv(self):
        self.bnu = self.bnv = self.bnd = 0.0  # u = hu * bnu + hv * bnv + bnd
        self.cnu = self.cnv = self.cnd = 0.0  # v = hu * cnu + hv * cnv + cnd

    @property
    def has_uv_mapping(self):
        return self.k != Axis.NONE

    def update(self, params):
        """
        Resolve the plane configuration.

        Recognized keys: center, point1, point2, normal. Missing keys keep
        their previous value. When both point1 and point2 are given:
            normal = normalize((point1 - center) x (point2 - center))
            k      = dominant axis of the normal
        and the 2x2 system mapping the projected triangle edges onto the UV
        axes is solved by Cramer's rule with
            det = bx * cy - by * cx
        where b = proj(point2) - proj(center), c = proj(point1) - proj(center).
        Otherwise the normal is taken from the `normal` key and the UV
        mapping is disabled.

        :param params: ParameterList, mapping, or attribute object.
        :return: True.
        :raises ValueError: If the three points are collinear or coincident.
                            The previous configuration is kept in that case.
        """
        pl = params if isinstance(params, ParameterList) else ParameterList(params)
        center = pl.get_point("center", self.center)
        b = pl.get_point("point1", None)
        c = pl.get_point("point2", None)

        if b is not None and c is not None:
            e1 = b - center
            e2 = c - center
            ng = e1.cross(e2)
            # Relative to the edge lengths so the test is scale invariant.
            tolerance = eps * e1.length() * e2.length()
            if ng.length() <= tolerance:
                logger.warning(f"Rejected plane through collinear points {center}, {b}, {c}")
                raise ValueError("point1 and point2 must not be collinear with center.")
            ng = ng.normalize()
            k = _dominant_axis(ng)

            ax, ay = _project(center, k)
            bx, by = _project(c, k)  # point2 edge
            cx, cy = _project(b, k)  # point1 edge
            bx -= ax
            by -= ay
            cx -= ax
            cy -= ay
            det = bx * cy - by * cx
            if abs(det) <= tolerance:
                logger.warning(f"Rejected plane with singular UV projection (det={det:g})")
                raise ValueError("point1 and point2 must not be collinear with center.")

            self.center = center
            self.normal = ng
            self.k = k
            self.bnu = -by / det
            self.bnv = bx / det
            self.bnd = (by * ax - bx * ay) / det
            self.cnu = cy / det
            self.cnv = -cx / det
            self.cnd = (cx * ay - cy * ax) / det
        else:
            normal = pl.get_vector("normal", self.normal)
            if normal.length() < eps:
                raise ValueError("normal must be non-zero.")
            self.center = center
            self.normal = normal.normalize()
            self.k = Axis.NONE
            self._reset_uv()

        logger.debug(f"Plane updated: center={self.center} normal={self.normal} k={self.k.name}")
        return True

    def get_uv(self, p):
        """
        Evaluate the UV map at an object-space point.

        :param p: Point3 or 3-element array-like in object space.
        :return: (u, v) tuple; (0, 0) when no UV mapping is configured.
        """
        hu, hv = _project(p, self.k)
        return (hu * self.bnu + hv * self.bnv + self.bnd,
                hu * self.cnu + hv * self.cnv + self.cnd)

    def intersect_primitive(self, ray, prim_id, state):
        """
        Ray-plane intersection.

        Formula:  t = dot(normal, center - origin) / dot(normal, direction)
        A denominator of exactly zero means the ray is parallel to the plane
        and there is no hit. A hit inside the ray's valid interval narrows the
        ray to t and records primitive id 0.
        """
        n = self.normal
        dn = n.dot(ray.direction)
        if dn == 0.0:
            return  # ray is parallel to the plane
        t = n.dot(self.center - ray.origin) / dn
        if ray.is_inside(t):
            ray.set_max(t)
            state.set_intersection(0)

    def get_num_primitives(self):
        return 1

    def get_primitive_bound(self, prim_id, i):
        return 0.0

    def get_world_bounds(self, o2w):
        # An infinite plane cannot be enclosed.
        return None

    def prepare_shading_state(self, state):
        """
        Fill a ShadingState for a hit recorded by intersect_primitive().

        The world normal is used for both the shading and the geometric
        normal. UV is evaluated in object space. The shading basis is built
        from the world normal.
        """
        state.init()
        state.point = state.ray.get_point()
        world_normal = state.transform_normal_object_to_world(self.normal).normalize()
        state.normal = world_normal
        state.geo_normal = world_normal
        parent = state.instance
        state.shader = parent.get_shader(0)
        state.modifier = parent.get_modifier(0)
        state.uv = self.get_uv(state.transform_world_to_object(state.point))
        state.basis = OrthoNormalBasis.make_from_w(world_normal)
