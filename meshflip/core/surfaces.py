"""Small surface builders used by the driver, the examples and the tests."""
from __future__ import annotations

import math

import numpy as np
from scipy.spatial import Delaunay

from .mesh import TriMesh

__all__ = ['default_height', 'build_height_field', 'build_grid', 'build_bipyramid', 'build_quad_pair']


def default_height(xy, amplitude=0.25):
    x = xy[:, 0]; y = xy[:, 1]
    return amplitude * np.sin(2.0 * math.pi * x) * np.cos(2.0 * math.pi * y)


def _orient_ccw_xy(xy, tris):
    """Swap corners so every triangle is counter-clockwise in the xy plane."""
    tris = np.asarray(tris, dtype=np.int32).copy()
    p0 = xy[tris[:, 0]]; p1 = xy[tris[:, 1]]; p2 = xy[tris[:, 2]]
    d1 = p1 - p0; d2 = p2 - p0
    signed = d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0]
    flip = signed < 0.0
    if np.any(flip):
        tris[flip, 1], tris[flip, 2] = tris[flip, 2].copy(), tris[flip, 1].copy()
    return tris


def _lift(xy, tris, height):
    z = np.zeros(len(xy)) if height is None else np.asarray(height(xy), dtype=np.float64)
    return TriMesh(np.column_stack([xy, z]), _orient_ccw_xy(xy, tris))


def build_height_field(npts=200, seed=0, amplitude=0.25, height=None):
    """Delaunay triangulation of random points in the unit square, lifted in z.

    ``height(xy) -> z`` defaults to a sine bump pattern scaled by
    ``amplitude``; pass ``amplitude=0`` for a flat mesh.
    """
    rng = np.random.RandomState(seed)
    corners = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    xy = np.vstack([corners, rng.rand(max(0, int(npts) - 4), 2)])
    tri = Delaunay(xy)
    if height is None:
        height = (lambda p: default_height(p, amplitude))
    return _lift(xy, tri.simplices, height)


def build_grid(nx=4, ny=4, height=None, diagonal='right'):
    """Regular (nx x ny)-cell grid over the unit square, two triangles per cell.

    ``diagonal='right'`` splits each cell along (i,j)-(i+1,j+1); ``'left'``
    along (i+1,j)-(i,j+1).
    """
    if diagonal not in ('right', 'left'):
        raise ValueError(f"diagonal must be 'right' or 'left', got {diagonal!r}")
    xs = np.linspace(0.0, 1.0, nx + 1)
    ys = np.linspace(0.0, 1.0, ny + 1)
    xy = np.array([[x, y] for y in ys for x in xs], dtype=np.float64)

    def vid(i, j):
        return j * (nx + 1) + i

    tris = []
    for j in range(ny):
        for i in range(nx):
            a, b, c, d = vid(i, j), vid(i + 1, j), vid(i + 1, j + 1), vid(i, j + 1)
            if diagonal == 'right':
                tris.extend([(a, b, c), (a, c, d)])
            else:
                tris.extend([(a, b, d), (b, c, d)])
    return _lift(xy, tris, height)


def build_bipyramid(n_ring=6, radius=1.0, height=1.0):
    """Closed double pyramid: a regular ring of ``n_ring`` vertices and two poles.

    No three vertices are collinear, so every rotation keeps triangles
    non-degenerate.
    """
    ang = np.linspace(0.0, 2.0 * math.pi, n_ring, endpoint=False)
    ring = np.column_stack([radius * np.cos(ang), radius * np.sin(ang), np.zeros(n_ring)])
    top, bottom = n_ring, n_ring + 1
    points = np.vstack([ring, [[0.0, 0.0, height], [0.0, 0.0, -height]]])
    tris = []
    for i in range(n_ring):
        j = (i + 1) % n_ring
        tris.append((i, j, top))
        tris.append((j, i, bottom))
    return TriMesh(points, tris)


def build_quad_pair(points):
    """Two triangles (0,1,2) and (1,3,2) sharing edge (1,2)."""
    return TriMesh(np.asarray(points, dtype=np.float64), [(0, 1, 2), (1, 3, 2)])
