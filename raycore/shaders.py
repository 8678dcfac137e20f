"""
Surface Shaders

Shader is the per-sample interface a ShadingState is evaluated against.
WireframeShader is a flat-color shader that draws the edges of triangulated
surfaces: a sample is on an edge when, seen from the camera, the angle between
the sample and its orthogonal projection onto the edge's line is within a
configured half-width.

Working with angles instead of distances keeps the on-screen line width
constant regardless of how far the surface is from the camera.
"""

import logging
import math

from .color import Color
from .Config import ParameterList, WireframeConfig

logger = logging.getLogger(__name__)

# Edge (i, j) pairs tested in order; the first edge within the width wins.
EDGES = ((0, 2), (1, 0), (2, 1))


class Shader:
    """
    Abstract base class for surface shaders.

    Subclasses must override get_radiance(); update() accepts configuration
    and returns True when it was applied.
    """
    def update(self, params):
        return True

    def get_radiance(self, state):
        """
        Color seen along the ray of a prepared ShadingState.

        :raises NotImplementedError: Must be overridden by subclasses.
        """
        raise NotImplementedError


class WireframeShader(Shader):
    """
    Draws triangle edges in a line color over a fill color.

    :param params: Optional configuration (keys line, fill, width) applied on
                   top of the WireframeConfig defaults.
    """
    def __init__(self, params=None):
        self.line_color = Color.from_array(WireframeConfig.line, "line")
        self.fill_color = Color.from_array(WireframeConfig.fill, "fill")
        self.width = float(WireframeConfig.width)  # [rad] angular half-width
        self.cos_width = math.cos(self.width)      # cached threshold
        if params is not None:
            self.update(params)

    def update(self, params):
        pl = params if isinstance(params, ParameterList) else ParameterList(params)
        self.line_color = pl.get_color("line", self.line_color)
        self.fill_color = pl.get_color("fill", self.fill_color)
        self.width = pl.get_float("width", self.width)
        self.cos_width = math.cos(self.width)
        logger.debug(f"Wireframe shader updated: width={self.width:g} rad")
        return True

    def get_fill_color(self, state):
        return self.fill_color

    def get_line_color(self, state):
        return self.line_color

    def get_radiance(self, state):
        """
        Classify the shaded point as edge or interior.

        For each edge (p_i, p_j) in camera space:
            t    = dot(c - p_i, p_j - p_i) / |p_j - p_i|^2
            proj = (1 - t) * p_i + t * p_j
            cos  = dot(proj, c) / (|proj| * |c|)
        and the point is on the edge when cos >= cos(width).

        Surfaces that cannot report triangle vertices get the fill color.
        Zero-length edges are skipped, as are projections that fall on the
        camera origin (no direction to compare).
        """
        points = state.get_triangle_points()
        if points is None:
            return self.get_fill_color(state)

        # Transform the shaded point and the vertices into camera space.
        w2c = state.get_world_to_camera()
        center = w2c.transform_p(state.point).to_array()
        p = [w2c.transform_p(state.transform_object_to_world(v)).to_array() for v in points]

        center_len = math.sqrt(float(center @ center))
        if center_len == 0.0:
            return self.get_fill_color(state)  # shaded point at the eye
        cn = 1.0 / center_len

        for i, j in EDGES:
            edge = p[j] - p[i]
            edge_len2 = float(edge @ edge)
            if edge_len2 == 0.0:
                logger.debug("Skipping zero-length wireframe edge (%d, %d)", i, j)
                continue
            t = float((center - p[i]) @ edge) / edge_len2
            proj = (1.0 - t) * p[i] + t * p[j]
            proj_len = math.sqrt(float(proj @ proj))
            if proj_len == 0.0:
                continue
            # Angle, seen from the camera, between the point and the edge.
            if float(proj @ center) * cn / proj_len >= self.cos_width:
                return self.get_line_color(state)
        return self.get_fill_color(state)
