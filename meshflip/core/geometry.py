"""Geometry primitives for triangulated surfaces in 3D.

Scalar helpers operate on single points (length-3 array-likes) and are used
by the per-edge metric; the ``triangles_*`` helpers are vectorized over
``(M, 3)`` index arrays and back the conformity checks and quality reports.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .constants import EPS_NORMAL

__all__ = [
    'normalize_edge', 'cross_tri', 'normal_tri', 'angle_normalized',
    'ortho_basis', 'project_to_plane', 'cross_tri_2d', 'triangle_area',
    'triangles_areas', 'triangles_min_angles',
]


def normalize_edge(a, b) -> Tuple[int, int]:
    """Return the canonical (small, large) vertex pair for an undirected edge."""
    a = int(a); b = int(b)
    return (a, b) if a < b else (b, a)


def cross_tri(p0, p1, p2) -> np.ndarray:
    """Unnormalized normal ``(p1 - p0) x (p2 - p0)`` (length = 2 * area)."""
    p0 = np.asarray(p0, dtype=np.float64)
    return np.cross(np.asarray(p1, dtype=np.float64) - p0, np.asarray(p2, dtype=np.float64) - p0)


def normal_tri(p0, p1, p2):
    """Unit normal of triangle (p0, p1, p2) and the length of its cross product.

    A degenerate triangle (collinear or coincident corners) yields a zero
    vector and a length of 0.0; callers test the length, not the vector.
    """
    n = cross_tri(p0, p1, p2)
    length = float(math.sqrt(float(np.dot(n, n))))
    if length <= EPS_NORMAL:
        return np.zeros(3, dtype=np.float64), 0.0
    return n / length, length


def angle_normalized(a, b) -> float:
    """Angle in radians between two unit vectors.

    Uses the chord-length form which stays accurate for nearly parallel and
    nearly opposite vectors where ``arccos(dot)`` loses precision.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if float(np.dot(a, b)) >= 0.0:
        return 2.0 * math.asin(min(1.0, float(np.linalg.norm(a - b)) / 2.0))
    return math.pi - 2.0 * math.asin(min(1.0, float(np.linalg.norm(a + b)) / 2.0))


def ortho_basis(n):
    """Two unit vectors (u, w) spanning the plane orthogonal to unit vector n.

    The triple (u, w, n) is right handed, so a triangle whose normal points
    along ``n`` has positive signed area once projected onto (u, w).
    """
    n = np.asarray(n, dtype=np.float64)
    # pick the world axis least aligned with n to seed the basis
    axis = np.zeros(3)
    axis[int(np.argmin(np.abs(n)))] = 1.0
    u = np.cross(axis, n)
    u /= np.linalg.norm(u)
    w = np.cross(n, u)
    return u, w


def project_to_plane(points, n) -> np.ndarray:
    """Project 3D points onto the plane orthogonal to unit normal n (2D coords)."""
    u, w = ortho_basis(n)
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    return np.stack([pts @ u, pts @ w], axis=1)


def cross_tri_2d(a, b, c) -> float:
    """Twice the signed area of a 2D triangle (positive when counter-clockwise)."""
    return float((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))


def triangle_area(p0, p1, p2) -> float:
    """Unsigned area of a 3D triangle."""
    return 0.5 * float(np.linalg.norm(cross_tri(p0, p1, p2)))


def triangles_areas(points, tris) -> np.ndarray:
    """Vectorized unsigned area for a batch of triangles.

    points: (N,3) float array
    tris:   (M,3) int array
    Returns: (M,) float64 array.
    """
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int64)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    return 0.5 * np.linalg.norm(np.cross(p1 - p0, p2 - p0), axis=1)


def triangles_min_angles(points, tris) -> np.ndarray:
    """Minimum interior angle (degrees) of each triangle in a batch."""
    pts = np.asarray(points, dtype=np.float64)
    T = np.asarray(tris, dtype=np.int64)
    if T.size == 0:
        return np.empty((0,), dtype=float)
    p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
    a = np.linalg.norm(p1 - p2, axis=1)
    b = np.linalg.norm(p0 - p2, axis=1)
    c = np.linalg.norm(p0 - p1, axis=1)

    def angle_opposite(A, B, C):
        denom = 2.0 * B * C
        with np.errstate(divide='ignore', invalid='ignore'):
            cosang = np.where(denom > 0, (B * B + C * C - A * A) / np.where(denom > 0, denom, 1.0), 1.0)
        return np.degrees(np.arccos(np.clip(cosang, -1.0, 1.0)))

    A = angle_opposite(a, b, c)
    B = angle_opposite(b, c, a)
    C = angle_opposite(c, a, b)
    return np.minimum(A, np.minimum(B, C))
