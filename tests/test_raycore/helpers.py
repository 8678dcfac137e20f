"""
Shared test helpers for the raycore test suite.

Provides plot embedding for the HTML report, deterministic random direction
sampling, an orthonormality check for bases, and a builder for shading states
over a single triangle.
"""

import base64
import io

import numpy as np

from raycore.primitives import Plane
from raycore.ray import Ray
from raycore.shading import Instance, ShadingState
from raycore.vector import Point3, Vector3


def attach_plot_to_html_report(request, fig, name):
    """
    Embed a matplotlib figure into the pytest HTML report as an inline PNG.

    Does nothing when pytest-html is not active, so plotting tests still pass
    without it.

    :param request: the pytest ``request`` fixture of the running test
    :param fig:     a ``matplotlib.figure.Figure`` to embed
    :param name:    a short label shown beside the image in the report
    """
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)

    html_plugin = request.config.pluginmanager.getplugin("html")
    if html_plugin is not None and hasattr(html_plugin, "extras"):
        png_b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        extra = getattr(request.node, "extra", [])
        extra.append(html_plugin.extras.png(png_b64, name=name))
        request.node.extra = extra


def random_unit_vectors(n, seed=0):
    """
    Uniformly distributed unit vectors on the sphere.

    Gaussian samples are isotropic, so normalizing them gives a uniform
    direction distribution.

    :param n:    number of vectors
    :param seed: RNG seed, fixed so failures are reproducible
    :return: list of Vector3
    """
    rng = np.random.default_rng(seed)
    samples = rng.normal(size=(n, 3))
    samples /= np.linalg.norm(samples, axis=1, keepdims=True)
    return [Vector3(*row) for row in samples]


def assert_orthonormal(basis, atol=1e-9):
    """Unit axes, pairwise orthogonal, right-handed (u x v == w)."""
    u, v, w = basis.u, basis.v, basis.w
    for axis in (u, v, w):
        assert abs(axis.length() - 1.0) < atol
    assert abs(u.dot(v)) < atol
    assert abs(v.dot(w)) < atol
    assert abs(w.dot(u)) < atol
    np.testing.assert_allclose(u.cross(v).to_array(), w.to_array(), rtol=0.0, atol=atol)


def triangle_state(point, vertices, w2c=None, shader=None):
    """
    Shading state for a sample on a triangle.

    The triangle's own plane is used as the hit surface; the shaded point is
    set directly rather than traced, so samples can sit exactly on vertices.

    :param point:    world-space shaded point (array-like)
    :param vertices: three object-space vertices (array-like each)
    :param w2c:      optional world-to-camera Matrix4
    :param shader:   optional shader bound to the instance
    :return: ShadingState
    """
    v0, v1, v2 = (Point3.from_array(v) for v in vertices)
    plane = Plane({"center": v0, "point1": v1, "point2": v2})
    instance = Instance(plane, shaders=[shader] if shader is not None else [])
    ray = Ray(Point3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0))
    state = ShadingState(ray, instance, w2c=w2c, triangle_points=(v0, v1, v2))
    state.point = Point3.from_array(point)
    state.shader = shader
    return state
