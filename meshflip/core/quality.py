"""Scoring of a single edge rotation.

A score is ``quality(new diagonal v1-v3) - quality(current diagonal v2-v4)``
expressed so that a *negative* value means rotating improves the mesh (the
min-heap pops the most negative score first). ``NO_IMPROVEMENT`` marks quads
that must never be rotated; ``ALWAYS_ROTATE`` marks a current diagonal that is
degenerate and should be replaced before anything else.

Quad layout (see ``TriMesh.edge_quad``)::

        v1
       /  \\
     v2 -- v4      current faces (v2, v3, v4) and (v2, v4, v1)
       \\  /       rotated faces (v1, v2, v3) and (v1, v3, v4)
        v3
"""
from __future__ import annotations

import math

import numpy as np

from .config import BeautifyConfig, BeautifyMethod
from .constants import EPS_ZERO_AREA, NO_IMPROVEMENT, ALWAYS_ROTATE
from .geometry import normal_tri, angle_normalized, cross_tri, project_to_plane, cross_tri_2d

__all__ = [
    'rotate_beauty_area', 'rotate_beauty_angle', 'edge_rotate_beauty',
    'verts_calc_rotate_beauty', 'edge_calc_rotate_beauty',
]


def _rotate_beauty_area_2d(v1, v2, v3, v4, restrict_degenerate: bool) -> float:
    area_2x_234 = cross_tri_2d(v2, v3, v4)
    area_2x_241 = cross_tri_2d(v2, v4, v1)
    area_2x_123 = cross_tri_2d(v1, v2, v3)
    area_2x_134 = cross_tri_2d(v1, v3, v4)

    # (1-3) unusable: rotated faces would point in opposite directions or be empty
    if (area_2x_123 >= 0.0) != (area_2x_134 >= 0.0):
        return NO_IMPROVEMENT
    if abs(area_2x_123) <= EPS_ZERO_AREA or abs(area_2x_134) <= EPS_ZERO_AREA:
        return NO_IMPROVEMENT

    # (2-4) unusable: current faces fold over each other or one is empty
    if ((area_2x_234 >= 0.0) != (area_2x_241 >= 0.0)
            or abs(area_2x_234) <= EPS_ZERO_AREA or abs(area_2x_241) <= EPS_ZERO_AREA):
        if restrict_degenerate:
            return NO_IMPROVEMENT
        return ALWAYS_ROTATE

    len_12 = math.dist(v1, v2)
    len_23 = math.dist(v2, v3)
    len_34 = math.dist(v3, v4)
    len_41 = math.dist(v4, v1)
    len_13 = math.dist(v1, v3)
    len_24 = math.dist(v2, v4)

    # area over perimeter; both sides use 2*area so the ratio comparison holds
    fac_24 = (abs(area_2x_234) / (len_23 + len_34 + len_24)
              + abs(area_2x_241) / (len_41 + len_12 + len_24))
    fac_13 = (abs(area_2x_123) / (len_12 + len_23 + len_13)
              + abs(area_2x_134) / (len_34 + len_41 + len_13))
    return fac_24 - fac_13


def rotate_beauty_area(v1, v2, v3, v4, restrict_degenerate: bool = False) -> float:
    """Area/perimeter score of rotating diagonal v2-v4 to v1-v3.

    The quad is projected onto the plane orthogonal to the summed normals of
    the two current faces, then each triangle pair is rated by
    ``sum(area / perimeter)``; the pair closer to equilateral wins.
    """
    n = cross_tri(v2, v3, v4) + cross_tri(v2, v4, v1)
    length = float(np.linalg.norm(n))
    if length == 0.0:
        return NO_IMPROVEMENT
    p1, p2, p3, p4 = project_to_plane(np.array([v1, v2, v3, v4], dtype=np.float64), n / length)
    return _rotate_beauty_area_2d(tuple(p1), tuple(p2), tuple(p3), tuple(p4), restrict_degenerate)


def rotate_beauty_angle(v1, v2, v3, v4) -> float:
    """Change in the angle between the two face normals caused by rotating.

    Only the rotated state is checked for degeneracy: a zero-length normal
    on either new face yields ``NO_IMPROVEMENT``.
    """
    no_a, _ = normal_tri(v2, v3, v4)
    no_b, _ = normal_tri(v2, v4, v1)
    angle_24 = angle_normalized(no_a, no_b)

    no_a, len_a = normal_tri(v1, v2, v3)
    no_b, len_b = normal_tri(v1, v3, v4)
    if len_a == 0.0 or len_b == 0.0:
        return NO_IMPROVEMENT
    angle_13 = angle_normalized(no_a, no_b)
    return angle_13 - angle_24


def edge_rotate_beauty(v1, v2, v3, v4, *, method=BeautifyMethod.AREA, restrict_degenerate=False) -> float:
    """Score a rotation from four positions using the selected metric."""
    method = BeautifyMethod.coerce(method)
    if method is BeautifyMethod.AREA:
        return rotate_beauty_area(v1, v2, v3, v4, restrict_degenerate)
    return rotate_beauty_angle(v1, v2, v3, v4)


def verts_calc_rotate_beauty(mesh, v1, v2, v3, v4, config: BeautifyConfig = None) -> float:
    """Score a rotation given vertex indices of ``mesh``.

    Short-circuits to ``NO_IMPROVEMENT`` without touching geometry when the
    apexes coincide or, with ``restrict_tag``, when both apexes carry the
    same vertex tag.
    """
    config = config or BeautifyConfig()
    if config.restrict_tag and bool(mesh.vert_tags[v1]) == bool(mesh.vert_tags[v3]):
        return NO_IMPROVEMENT
    if v1 == v3:
        return NO_IMPROVEMENT
    pts = mesh.points
    return edge_rotate_beauty(pts[v1], pts[v2], pts[v3], pts[v4],
                              method=config.method, restrict_degenerate=config.restrict_degenerate)


def edge_calc_rotate_beauty(mesh, edge, config: BeautifyConfig = None) -> float:
    """Score rotating manifold ``edge`` of ``mesh``."""
    v1, v2, v3, v4 = mesh.edge_quad(edge)
    return verts_calc_rotate_beauty(mesh, v1, v2, v3, v4, config)
