"""
Hit Records and Shading State

This module provides the records that carry one ray/surface interaction from
intersection to shading:

IntersectionState, the closest-hit record written by primitives during
intersection (which instance, which primitive id).
Instance, a placed primitive: the PrimitiveList, its object-to-world
transform, and the shader/modifier slots a hit binds.
ShadingState, the per-sample record a primitive fills in (hit point,
normals, UV, basis, shader binding) and a shader reads, together with the
object/world/camera transforms needed to move between spaces.

Instances are minimal by intent: they place a single primitive list and do
not form a scene graph.
"""

from .color import Color
from .primitives import PrimitiveList
from .ray import Ray
from .shaders import Shader
from .transform import Matrix4
from .vector import Point3


class IntersectionState:
    """
    Closest-hit record for a single ray.

    Primitives call set_intersection(prim_id) after narrowing the ray; the
    instance being tested is recorded alongside the id.
    """
    def __init__(self):
        self.instance = None   # Instance owning the current closest hit
        self.id = -1           # primitive id within the instance, -1 = no hit
        self._current = None   # instance under test, set by Instance.intersect()

    def set_intersection(self, prim_id):
        self.instance = self._current
        self.id = int(prim_id)

    def hit(self):
        return self.id >= 0


class Instance:
    """
    A primitive list placed in the world with shader and modifier slots.

    :param primitive:  PrimitiveList to place.
    :param shaders:    Sequence of Shader (slot 0 is bound on hits).
    :param modifiers:  Sequence of surface modifiers, opaque to this package.
    :param o2w:        Object-to-world Matrix4 (or 4x4 array-like). Defaults to identity.
    """
    def __init__(self, primitive, shaders=(), modifiers=(), o2w=None):
        if not isinstance(primitive, PrimitiveList):
            raise TypeError("Instance accepts PrimitiveList instances.")
        for shader in shaders:
            if shader is not None and not isinstance(shader, Shader):
                raise TypeError("Instance shaders must be Shader instances.")
        self.primitive = primitive
        self.shaders = list(shaders)
        self.modifiers = list(modifiers)
        self.o2w = o2w if isinstance(o2w, Matrix4) else Matrix4(o2w)
        self.w2o = self.o2w.inverse()

    def get_shader(self, i):
        return self.shaders[i] if 0 <= i < len(self.shaders) else None

    def get_modifier(self, i):
        return self.modifiers[i] if 0 <= i < len(self.modifiers) else None

    def get_bounds(self):
        """World bounds of the placed primitive, or None when unbounded."""
        return self.primitive.get_world_bounds(self.o2w)

    def intersect(self, ray, state):
        """
        Test every sub-primitive against the ray.

        The ray is moved into object space without renormalizing its
        direction, so parametric distances agree between the two spaces and
        a narrowed object-space t_max carries straight back to the world ray.
        """
        local = Ray(self.w2o.transform_p(ray.origin), self.w2o.transform_v(ray.direction),
                    t_min=ray.t_min, t_max=ray.t_max)
        state._current = self
        for prim_id in range(self.primitive.get_num_primitives()):
            self.primitive.intersect_primitive(local, prim_id, state)
        state._current = None
        ray.set_max(local.t_max)

    def prepare_shading_state(self, state):
        self.primitive.prepare_shading_state(state)


class ShadingState:
    """
    Per-sample shading record.

    Created from a ray and the IntersectionState it produced; call
    prepare() (or Instance.prepare_shading_state) to have the primitive fill
    in the surface fields, then get_radiance() to evaluate the bound shader.

    :param ray:             The world-space Ray, narrowed to the hit.
    :param instance:        Instance that was hit.
    :param prim_id:         Primitive id recorded for the hit.
    :param w2c:             World-to-camera Matrix4. Defaults to identity.
    :param triangle_points: Optional three object-space vertices of the hit
                            triangle. When omitted, the primitive is asked via
                            its get_triangle_points(prim_id) method, if any.
    """
    def __init__(self, ray, instance, prim_id=0, w2c=None, triangle_points=None):
        self.ray = ray
        self.instance = instance
        self.prim_id = int(prim_id)
        self.w2c = Matrix4() if w2c is None else (w2c if isinstance(w2c, Matrix4) else Matrix4(w2c))
        self._triangle_points = None
        if triangle_points is not None:
            pts = [p if isinstance(p, Point3) else Point3.from_array(p, "triangle point") for p in triangle_points]
            if len(pts) != 3:
                raise ValueError("triangle_points must contain exactly 3 points.")
            self._triangle_points = tuple(pts)
        self.init()

    @classmethod
    def from_intersection(cls, ray, istate, w2c=None):
        """
        Build and prepare the shading state for a recorded hit.

        :return: Prepared ShadingState, or None if istate recorded no hit.
        """
        if not istate.hit():
            return None
        state = cls(ray, istate.instance, prim_id=istate.id, w2c=w2c)
        state.prepare()
        return state

    def init(self):
        """Reset the surface fields before a primitive fills them in."""
        self.point = None       # [world] hit point
        self.normal = None      # [unit] shading normal, world space
        self.geo_normal = None  # [unit] geometric normal, world space
        self.uv = (0.0, 0.0)
        self.basis = None       # OrthoNormalBasis around the shading normal
        self.shader = None
        self.modifier = None

    def prepare(self):
        self.instance.prepare_shading_state(self)
        return self

    def set_shader(self, shader):
        self.shader = shader

    def set_modifier(self, modifier):
        self.modifier = modifier

    def get_world_to_camera(self):
        return self.w2c

    def transform_object_to_world(self, p):
        return self.instance.o2w.transform_p(p)

    def transform_world_to_object(self, p):
        return self.instance.w2o.transform_p(p)

    def transform_normal_object_to_world(self, n):
        # Normals transform by the inverse transpose.
        return self.instance.w2o.transform_transpose_v(n)

    def transform_normal_world_to_object(self, n):
        return self.instance.o2w.transform_transpose_v(n)

    def get_triangle_points(self):
        """
        The hit triangle's three object-space vertices, or None when the
        surface is not triangulated.
        """
        if self._triangle_points is not None:
            return self._triangle_points
        lookup = getattr(self.instance.primitive, "get_triangle_points", None)
        if lookup is None:
            return None
        return lookup(self.prim_id)

    def get_radiance(self):
        """Evaluate the bound shader, or black when no shader is bound."""
        if self.shader is None:
            return Color.BLACK
        return self.shader.get_radiance(self)
