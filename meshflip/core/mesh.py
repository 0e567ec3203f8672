"""Triangle surface mesh with the query / rotate / tag operations beautify needs.

``TriMesh`` stores vertex positions as a ``(N, 3)`` float64 array and faces as
a ``(M, 3)`` int32 array. Face rows keep their index for the lifetime of the
mesh; an edge rotation rewrites the two incident rows in place and updates the
edge -> face map incrementally.

Edges are addressed by their sorted vertex pair ``(a, b)``, so an edge handle
stays valid until that edge is rotated away and can always be re-derived from
the current face array.
"""

import time
from collections import defaultdict

import numpy as np

from .conformity import (build_edge_to_tri_map, check_mesh_conformity,
                         boundary_edges_from_map, manifold_edges_from_map)
from .geometry import normalize_edge, triangles_min_angles
from .stats import OpStats, print_stats as _print_stats
from .logging_utils import get_logger

logger = get_logger('meshflip.mesh')


class NonManifoldEdgeError(ValueError):
    """An edge expected to have exactly two incident triangles does not."""


class TriMesh:
    def __init__(self, points, triangles, vert_tags=None, debug: bool = False):
        """Triangle surface mesh.

        Parameters
        ----------
        points : (N,3) float array-like
            Vertex positions. (N,2) input is lifted to z=0.
        triangles : (M,3) int array-like
            Ordered vertex indices of each face.
        vert_tags : (N,) bool array-like, optional
            Per-vertex marker consulted by ``BeautifyConfig.restrict_tag``.
        debug : bool
            Enable verbose debug logging of map mutations.
        """
        self.logger = get_logger(f'meshflip.mesh.{self.__class__.__name__}')
        self.debug = debug
        self._points = None
        self._triangles = None
        self.points = points
        self.triangles = triangles
        if vert_tags is None:
            self.vert_tags = np.zeros(len(self._points), dtype=bool)
        else:
            tags = np.asarray(vert_tags, dtype=bool)
            if tags.shape != (len(self._points),):
                raise ValueError(f"vert_tags must have shape ({len(self._points)},), got {tags.shape}")
            self.vert_tags = tags.copy()
        # caller-defined markers (purely observational)
        self.edge_tags = {}
        self.face_tags = defaultdict(set)
        self._op_stats = defaultdict(OpStats)
        self._update_maps()

    # Canonical storage properties
    @property
    def points(self):
        return self._points

    @points.setter
    def points(self, value):
        arr = np.asarray(value, dtype=np.float64)
        if arr.ndim == 2 and arr.shape[1] == 2:
            arr = np.hstack([arr, np.zeros((arr.shape[0], 1))])
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError("points must have shape (N,3) or (N,2)")
        self._points = np.ascontiguousarray(arr)

    @property
    def triangles(self):
        return self._triangles

    @triangles.setter
    def triangles(self, value):
        arr = np.asarray(value, dtype=np.int32)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError("triangles must have shape (M,3)")
        if arr.size and (arr.min() < 0 or arr.max() >= len(self._points)):
            raise ValueError("triangle vertex indices out of range")
        self._triangles = np.ascontiguousarray(arr.copy())
        if getattr(self, '_op_stats', None) is not None:
            self._update_maps()

    # --- Stats helpers ---
    def _get_op_stats(self, name: str) -> OpStats:
        return self._op_stats[name]

    def stats_summary(self):
        return {k: v.to_dict() for k, v in self._op_stats.items()}

    def print_stats(self, pretty: bool = True, file=None):
        _print_stats(self.stats_summary(), file=file, pretty=pretty)

    def reset_stats(self):
        self._op_stats.clear()

    def copy(self):
        """Deep copy of geometry, topology and tags (stats start empty)."""
        other = TriMesh(self._points.copy(), self._triangles.copy(), vert_tags=self.vert_tags.copy(),
                        debug=self.debug)
        other.edge_tags = {e: set(t) for e, t in self.edge_tags.items()}
        for f, t in self.face_tags.items():
            other.face_tags[f] = set(t)
        return other

    # --- Adjacency maps ---
    def _update_maps(self):
        self.edge_map = build_edge_to_tri_map(self._triangles)

    def _add_triangle_to_maps(self, tri_idx):
        tri = self._triangles[tri_idx]
        if self.debug:
            self.logger.debug("Adding triangle %d: %s", tri_idx, tri.tolist())
        for i in range(3):
            key = normalize_edge(tri[i], tri[(i + 1) % 3])
            self.edge_map.setdefault(key, set()).add(tri_idx)

    def _remove_triangle_from_maps(self, tri_idx):
        tri = self._triangles[tri_idx]
        if self.debug:
            self.logger.debug("Removing triangle %d: %s", tri_idx, tri.tolist())
        for i in range(3):
            key = normalize_edge(tri[i], tri[(i + 1) % 3])
            if key in self.edge_map:
                self.edge_map[key].discard(tri_idx)
                if not self.edge_map[key]:
                    del self.edge_map[key]

    # --- Queries ---
    @property
    def n_points(self) -> int:
        return len(self._points)

    @property
    def n_triangles(self) -> int:
        return len(self._triangles)

    def has_edge(self, edge) -> bool:
        return normalize_edge(*edge) in self.edge_map

    def edge_faces(self, edge):
        """Sorted indices of the faces incident to ``edge`` (empty if absent)."""
        return sorted(self.edge_map.get(normalize_edge(*edge), ()))

    def is_manifold_edge(self, edge) -> bool:
        return len(self.edge_map.get(normalize_edge(*edge), ())) == 2

    def manifold_edges(self):
        return manifold_edges_from_map(self.edge_map)

    def boundary_edges(self):
        return sorted(boundary_edges_from_map(self.edge_map))

    def face_edges(self, face_idx):
        tri = self._triangles[face_idx]
        return [normalize_edge(tri[i], tri[(i + 1) % 3]) for i in range(3)]

    def edge_quad(self, edge):
        """Quad ``(v1, v2, v3, v4)`` around a manifold edge.

        ``v2 -> v4`` is the edge as it runs in the winding of the first
        incident face, ``v1`` is that face's apex and ``v3`` the apex of the
        second face. Rotating the edge replaces diagonal v2-v4 by v1-v3.
        """
        key = normalize_edge(*edge)
        faces = self.edge_faces(key)
        if len(faces) != 2:
            raise NonManifoldEdgeError(f"edge {key} has {len(faces)} incident triangles (expected 2)")
        fa, fb = faces
        ta = [int(v) for v in self._triangles[fa]]
        for i in range(3):
            if normalize_edge(ta[i], ta[(i + 1) % 3]) == key:
                v2, v4, v1 = ta[i], ta[(i + 1) % 3], ta[(i + 2) % 3]
                break
        else:  # pragma: no cover - edge_map and triangles out of sync
            raise RuntimeError(f"edge {key} not found in face {fa}")
        v3 = next(int(v) for v in self._triangles[fb] if int(v) not in key)
        return v1, v2, v3, v4

    def global_min_angle(self) -> float:
        if self.n_triangles == 0:
            return 0.0
        return float(np.min(triangles_min_angles(self._points, self._triangles)))

    def check_conformity(self, verbose=False):
        return check_mesh_conformity(self._points, self._triangles, verbose=verbose)

    # --- Mutation ---
    def rotate_edge(self, edge, check_exists: bool = True):
        """Flip the diagonal of the quad formed by the two faces of ``edge``.

        Returns the new edge ``(v1, v3)`` (sorted) or ``None`` when the
        rotation is refused: the edge is not manifold, the two apexes
        coincide, or ``check_exists`` is set and the new diagonal is already
        an edge of the mesh (rotating would create a duplicate / non-manifold
        edge). A refused rotation leaves the mesh untouched.
        """
        t0 = time.perf_counter()
        try:
            return self._rotate_edge(edge, check_exists)
        finally:
            self._op_stats['rotate'].record_time(time.perf_counter() - t0)

    def _rotate_edge(self, edge, check_exists):
        stats = self._get_op_stats('rotate')
        stats.attempts += 1
        key = normalize_edge(*edge)
        faces = self.edge_faces(key)
        if len(faces) != 2:
            stats.fail += 1; stats.non_manifold_rejects += 1
            logger.debug("rotate %s refused: %d incident faces", key, len(faces))
            return None
        v1, v2, v3, v4 = self.edge_quad(key)
        if v1 == v3:
            stats.fail += 1; stats.degenerate_rejects += 1
            logger.debug("rotate %s refused: apexes coincide (%d)", key, v1)
            return None
        new_edge = normalize_edge(v1, v3)
        if check_exists and new_edge in self.edge_map:
            stats.fail += 1; stats.exists_rejects += 1
            logger.debug("rotate %s refused: edge %s already exists", key, new_edge)
            return None
        fa, fb = faces
        for idx in faces:
            self._remove_triangle_from_maps(idx)
        self._triangles[fa] = (v1, v2, v3)
        self._triangles[fb] = (v1, v3, v4)
        for idx in faces:
            self._add_triangle_to_maps(idx)
        stats.success += 1
        return new_edge

    # --- Tags ---
    def tag_edge(self, edge, tag):
        self.edge_tags.setdefault(normalize_edge(*edge), set()).add(tag)

    def tag_face(self, face_idx, tag):
        self.face_tags[int(face_idx)].add(tag)

    def edge_has_tag(self, edge, tag) -> bool:
        return tag in self.edge_tags.get(normalize_edge(*edge), ())

    def face_has_tag(self, face_idx, tag) -> bool:
        return tag in self.face_tags.get(int(face_idx), ())

    def tagged_edges(self, tag):
        """Current mesh edges carrying ``tag`` (rotated-away edges are skipped)."""
        return sorted(e for e, tags in self.edge_tags.items() if tag in tags and e in self.edge_map)

    def tagged_faces(self, tag):
        return sorted(f for f, tags in self.face_tags.items() if tag in tags)


__all__ = ['TriMesh', 'NonManifoldEdgeError']
