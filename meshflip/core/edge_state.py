"""Per-slot history of local diagonal configurations.

Rotating edges greedily can cycle: two neighbouring edges may keep
improving each other back and forth, or scores may tie. Every time an edge
rotation is committed at a slot, the resulting configuration (its
``EdgeRotState``) is stored in that slot's set, and a slot is never rotated
into a configuration it already holds. Each slot has finitely many
configurations, so the optimization terminates.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Set, Tuple

__all__ = ['EdgeRotState', 'edge_rot_state', 'edge_rot_state_alternate', 'EdgeStateTracker']


class EdgeRotState(NamedTuple):
    """Configuration signature of a manifold edge.

    v_pair: the edge's endpoints (sorted)
    f_pair: the apexes of its two faces, i.e. the other diagonal (sorted)
    """
    v_pair: Tuple[int, int]
    f_pair: Tuple[int, int]


def _ordered(a, b) -> Tuple[int, int]:
    a = int(a); b = int(b)
    return (a, b) if a < b else (b, a)


def edge_rot_state(mesh, edge) -> EdgeRotState:
    """Signature of ``edge`` as it currently sits in ``mesh``."""
    v1, v2, v3, v4 = mesh.edge_quad(edge)
    return EdgeRotState(_ordered(v2, v4), _ordered(v1, v3))


def edge_rot_state_alternate(mesh, edge) -> EdgeRotState:
    """Signature ``edge`` would have after being rotated."""
    v1, v2, v3, v4 = mesh.edge_quad(edge)
    return EdgeRotState(_ordered(v1, v3), _ordered(v2, v4))


class EdgeStateTracker:
    """Lazily allocated signature sets, one per candidate slot."""

    def __init__(self, n_slots: int):
        self._sets: List[Optional[Set[EdgeRotState]]] = [None] * int(n_slots)
        self.n_recorded = 0

    def __len__(self) -> int:
        return len(self._sets)

    def states(self, slot: int) -> Set[EdgeRotState]:
        s = self._sets[slot]
        return set(s) if s else set()

    def has_visited(self, slot: int, state: EdgeRotState) -> bool:
        s = self._sets[slot]
        return s is not None and state in s

    def has_visited_alternate(self, slot: int, mesh, edge) -> bool:
        """True if rotating ``edge`` would return ``slot`` to a recorded state."""
        if self._sets[slot] is None:
            return False
        return self.has_visited(slot, edge_rot_state_alternate(mesh, edge))

    def record(self, slot: int, mesh, edge) -> EdgeRotState:
        """Store the current configuration of a freshly rotated ``edge``."""
        state = edge_rot_state(mesh, edge)
        s = self._sets[slot]
        if s is None:
            s = self._sets[slot] = set()
        if state in s:
            raise RuntimeError(f"slot {slot} re-entered recorded state {state}")
        s.add(state)
        self.n_recorded += 1
        return state

    def clear(self) -> None:
        for i in range(len(self._sets)):
            self._sets[i] = None
        self.n_recorded = 0
