"""Topological conformity checks for triangulated surfaces.

``check_mesh_conformity`` is what tests and the driver run after a beautify
pass: every face must be a proper triangle, no two faces may share the same
vertex triple and no edge may be shared by more than two faces.
"""
from __future__ import annotations

import numpy as np

from .constants import EPS_AREA
from .geometry import triangles_areas

__all__ = [
    'build_edge_to_tri_map', 'boundary_edges_from_map',
    'manifold_edges_from_map', 'check_mesh_conformity',
]


def build_edge_to_tri_map(triangles):
    edge_map = {}
    for t_idx, tri in enumerate(triangles):
        for i in range(3):
            a = int(tri[i]); b = int(tri[(i + 1) % 3])
            key = (a, b) if a < b else (b, a)
            edge_map.setdefault(key, set()).add(t_idx)
    return edge_map


def boundary_edges_from_map(edge_map):
    return {e for e, s in edge_map.items() if len(s) == 1}


def manifold_edges_from_map(edge_map):
    """Edges shared by exactly two faces, in sorted order."""
    return sorted(e for e, s in edge_map.items() if len(s) == 2)


def check_mesh_conformity(points, triangles, verbose=False, reject_degenerate=True):
    """Validate a triangle surface.

    Returns ``(ok, msgs)`` where ``msgs`` lists every detected problem
    (capped per category to keep messages readable).
    """
    triangles = np.ascontiguousarray(np.asarray(triangles, dtype=np.int32))
    msgs = []
    ok = True
    if triangles.size == 0:
        return False, ["No triangles."]
    if triangles.ndim != 2 or triangles.shape[1] != 3:
        return False, [f"triangles must have shape (M,3), got {triangles.shape}"]
    points = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
    npts = len(points)
    if triangles.max() >= npts or triangles.min() < 0:
        return False, ["Triangle indices out of range."]

    # Repeated corners make a face that is not a triangle
    rep = (triangles[:, 0] == triangles[:, 1]) | (triangles[:, 1] == triangles[:, 2]) | (triangles[:, 0] == triangles[:, 2])
    if np.any(rep):
        for ti in np.nonzero(rep)[0][:10]:
            msgs.append(f"Triangle {int(ti)} repeats a vertex: {triangles[ti].tolist()}.")
        ok = False

    if reject_degenerate:
        areas = triangles_areas(points, triangles)
        zero_mask = areas < EPS_AREA
        if np.any(zero_mask):
            for ti in np.nonzero(zero_mask)[0][:50]:
                msgs.append(f"Triangle {int(ti)} has near-zero area ({areas[ti]:.3e}).")
            ok = False

    sorted_tris = np.sort(triangles, axis=1)
    _, tri_counts = np.unique(sorted_tris, axis=0, return_counts=True)
    if np.any(tri_counts > 1):
        msgs.append("Duplicate triangles detected.")
        ok = False

    edges = np.vstack((triangles[:, [0, 1]], triangles[:, [1, 2]], triangles[:, [2, 0]])).astype(int)
    edges.sort(axis=1)
    uniq_edges, counts = np.unique(edges, axis=0, return_counts=True)
    nm_mask = counts > 2
    if np.any(nm_mask):
        for e, c in list(zip(uniq_edges[nm_mask], counts[nm_mask]))[:10]:
            msgs.append(f"Non-manifold edge ({int(e[0])}, {int(e[1])}) shared by >2 triangles (count={int(c)}).")
        ok = False

    if verbose:
        from .logging_utils import get_logger
        logger = get_logger('meshflip.conformity')
        for m in msgs:
            logger.info("Conformity: %s", m)
    return ok, msgs
