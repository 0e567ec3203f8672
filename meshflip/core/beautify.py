"""Beautify a triangle surface by rotating edges between triangle pairs.

The caller hands over a list of candidate edges. Each list position is a
*slot*: the optimizer keeps its per-edge state (queued heap entry, history of
visited configurations) by slot, and writes the rotated edge back into the
same list position, so the list always names the current edge of every slot.

Loop outline::

    score every candidate, queue the improving ones (score < 0)
    while the queue is not empty:
        pop the best edge and ask the mesh to rotate it
        refused  -> keep the old edge, continue
        rotated  -> remember the new configuration at this slot,
                    rescore the (up to) four candidate edges around the two
                    new faces unless rotating them would revisit a
                    configuration they already had

A slot never re-enters a configuration it has already recorded, so the number
of rotations per slot is bounded and the loop terminates even when scores tie
or two neighbouring edges keep improving each other.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config import BeautifyConfig
from .edge_heap import EdgeHeapTable
from .edge_state import EdgeStateTracker
from .geometry import normalize_edge
from .mesh import NonManifoldEdgeError
from .quality import edge_calc_rotate_beauty
from .logging_utils import get_logger

logger = get_logger('meshflip.beautify')

__all__ = ['BeautifyReport', 'beautify_fill', 'beautify_mesh']


@dataclass
class BeautifyReport:
    """What one beautify call did."""
    n_candidates: int = 0
    n_queued: int = 0          # candidates improving at start
    n_flips: int = 0
    n_rejected: int = 0        # rotations refused by the mesh
    n_revisits_skipped: int = 0
    flip_scores: List[float] = field(default_factory=list)
    flipped_slots: List[int] = field(default_factory=list)

    def to_dict(self):
        return {
            'n_candidates': self.n_candidates,
            'n_queued': self.n_queued,
            'n_flips': self.n_flips,
            'n_rejected': self.n_rejected,
            'n_revisits_skipped': self.n_revisits_skipped,
        }


def _update_rotate_cost(mesh, edge, slot_of, table, tracker, config, report):
    """Rescore one edge whose surroundings just changed."""
    slot = slot_of.get(edge)
    if slot is None:
        return
    table.discard(slot)
    # candidate edges keep both faces through neighbouring rotations
    assert mesh.is_manifold_edge(edge), f"candidate edge {edge} lost manifoldness"
    if tracker.has_visited_alternate(slot, mesh, edge):
        report.n_revisits_skipped += 1
        logger.debug('beautify: slot %d edge %s would revisit a recorded state', slot, edge)
        return
    table.update(slot, edge_calc_rotate_beauty(mesh, edge, config), edge)


def beautify_fill(mesh, edges, config: Optional[BeautifyConfig] = None, *,
                  edge_tag=None, face_tag=None,
                  on_flip: Optional[Callable] = None) -> BeautifyReport:
    """Rotate candidate edges of ``mesh`` until no improving rotation is left.

    Parameters
    ----------
    mesh : TriMesh
        Mutated in place.
    edges : list of (int, int)
        Candidate edges, each shared by exactly two triangles. Overwritten in
        place: a rotated slot receives its new (sorted) edge.
    config : BeautifyConfig, optional
        Metric and restriction options.
    edge_tag, face_tag : hashable, optional
        When given, every rotated edge and both of its faces receive the tag.
    on_flip : callable, optional
        ``on_flip(slot, old_edge, new_edge, score)`` after each rotation.

    Raises
    ------
    NonManifoldEdgeError
        A candidate edge does not have exactly two incident triangles.
    ValueError
        The same edge appears in two slots.
    """
    config = config or BeautifyConfig()
    n = len(edges)
    report = BeautifyReport(n_candidates=n)

    # private edge -> slot lookup; the mesh's own indices are left alone
    slot_of = {}
    for i, e in enumerate(edges):
        key = normalize_edge(*e)
        if not mesh.is_manifold_edge(key):
            raise NonManifoldEdgeError(
                f"candidate edge {key} (slot {i}) has {len(mesh.edge_faces(key))} incident triangles (expected 2)")
        if key in slot_of:
            raise ValueError(f"candidate edge {key} given twice (slots {slot_of[key]} and {i})")
        slot_of[key] = i

    table = EdgeHeapTable(n)
    tracker = EdgeStateTracker(n)
    try:
        for key, i in slot_of.items():
            if table.update(i, edge_calc_rotate_beauty(mesh, key, config), key):
                report.n_queued += 1

        while not table.is_empty():
            slot, edge, score = table.pop_min()
            new_edge = mesh.rotate_edge(edge, check_exists=True)
            if new_edge is None:
                report.n_rejected += 1
                continue

            tracker.record(slot, mesh, new_edge)
            del slot_of[edge]
            slot_of[new_edge] = slot
            edges[slot] = new_edge
            report.n_flips += 1
            report.flip_scores.append(score)
            report.flipped_slots.append(slot)
            logger.debug('beautify: slot %d rotated %s -> %s (score %.6g)', slot, edge, new_edge, score)

            faces = mesh.edge_faces(new_edge)
            for f in faces:
                for e in mesh.face_edges(f):
                    if e != new_edge:
                        _update_rotate_cost(mesh, e, slot_of, table, tracker, config, report)

            if edge_tag is not None:
                mesh.tag_edge(new_edge, edge_tag)
            if face_tag is not None:
                for f in faces:
                    mesh.tag_face(f, face_tag)
            if on_flip is not None:
                on_flip(slot, edge, new_edge, score)
    finally:
        table.clear()
        tracker.clear()
        slot_of.clear()

    logger.info('beautify: method=%s candidates=%d queued=%d flips=%d rejected=%d revisits_skipped=%d',
                config.method.value, report.n_candidates, report.n_queued, report.n_flips,
                report.n_rejected, report.n_revisits_skipped)
    return report


def beautify_mesh(mesh, config: Optional[BeautifyConfig] = None, **kwargs) -> BeautifyReport:
    """Beautify every interior (two-face) edge of ``mesh``."""
    edges = mesh.manifold_edges()
    return beautify_fill(mesh, edges, config, **kwargs)
