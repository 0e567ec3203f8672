import numpy as np

from meshflip.core.conformity import (check_mesh_conformity, build_edge_to_tri_map,
                                      boundary_edges_from_map, manifold_edges_from_map)

PTS = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0], [2, 0, 0], [0.5, 0.5, 1.0]], dtype=float)


def test_valid_square_passes():
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 2], [0, 2, 3]])
    assert ok and msgs == []


def test_edge_maps():
    em = build_edge_to_tri_map([[0, 1, 2], [0, 2, 3]])
    assert em[(0, 2)] == {0, 1}
    assert manifold_edges_from_map(em) == [(0, 2)]
    assert boundary_edges_from_map(em) == {(0, 1), (1, 2), (2, 3), (0, 3)}


def test_empty_and_out_of_range():
    ok, msgs = check_mesh_conformity(PTS, np.zeros((0, 3), dtype=int))
    assert not ok and 'No triangles' in msgs[0]
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 9]])
    assert not ok and 'out of range' in msgs[0]


def test_degenerate_and_repeated_corner():
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 4], [0, 2, 2]])
    assert not ok
    assert any('near-zero area' in m for m in msgs)
    assert any('repeats a vertex' in m for m in msgs)
    ok, _ = check_mesh_conformity(PTS, [[0, 1, 4]], reject_degenerate=False)
    assert ok


def test_duplicate_and_non_manifold():
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 2], [2, 1, 0]])
    assert not ok and 'Duplicate triangles detected.' in msgs
    ok, msgs = check_mesh_conformity(PTS, [[0, 1, 2], [0, 2, 3], [0, 2, 5]])
    assert not ok
    assert any('Non-manifold edge (0, 2)' in m for m in msgs)
