import math

import numpy as np
import pytest

from meshflip.core.config import BeautifyConfig, BeautifyMethod
from meshflip.core.constants import NO_IMPROVEMENT, ALWAYS_ROTATE
from meshflip.core.quality import (rotate_beauty_area, rotate_beauty_angle, edge_rotate_beauty,
                                   verts_calc_rotate_beauty, edge_calc_rotate_beauty)
from meshflip.core.surfaces import build_quad_pair

# ridge along diagonal (1,2); apexes 0 and 3 sit lower
RIDGE = np.array([[-1.0, 0.0, 0.0], [0.0, -1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 0.0]])

# planar rhombus, long current diagonal v2-v4 and short alternative v1-v3
RHOMBUS = dict(v1=(0.0, 1.0, 0.0), v2=(-2.0, 0.0, 0.0), v3=(0.0, -1.0, 0.0), v4=(2.0, 0.0, 0.0))


def test_angle_metric_prefers_flatter_diagonal():
    p0, p1, p2, p3 = RIDGE
    # quad (v1, v2, v3, v4) = (p0, p1, p3, p2): current diagonal 1-2, new 0-3
    score = rotate_beauty_angle(p0, p1, p3, p2)
    assert score == pytest.approx(math.pi / 4 - math.acos(2.0 / 3.0), abs=1e-12)
    assert score < 0


def test_angle_metric_reverses_sign_after_rotation():
    p0, p1, p2, p3 = RIDGE
    forward = rotate_beauty_angle(p0, p1, p3, p2)
    # after rotating, the quad is seen from the new diagonal
    backward = rotate_beauty_angle(p1, p3, p2, p0)
    assert backward == pytest.approx(-forward, abs=1e-12)


def test_angle_metric_degenerate_new_triangle_is_sentinel():
    # v1, v3, v4 collinear: new face (v1, v3, v4) has no normal
    v1, v2, v3, v4 = (0, 0, 0), (1, -1, 0.5), (2, 0, 0), (1, 0, 0)
    assert rotate_beauty_angle(v1, v2, v3, v4) == NO_IMPROVEMENT


def test_area_metric_planar_rhombus():
    r = RHOMBUS
    score = rotate_beauty_area(r['v1'], r['v2'], r['v3'], r['v4'])
    s5 = math.sqrt(5.0)
    fac_24 = 2 * 4.0 / (4.0 + 2 * s5)
    fac_13 = 2 * 4.0 / (2.0 + 2 * s5)
    assert score == pytest.approx(fac_24 - fac_13, rel=1e-9)
    assert score < 0
    back = rotate_beauty_area(r['v2'], r['v3'], r['v4'], r['v1'])
    assert back == pytest.approx(-score, rel=1e-9)


def test_area_metric_degenerate_new_triangle_is_sentinel():
    v1, v2, v3, v4 = (0, 0, 0), (1, -1, 0), (2, 0, 0), (1, 0, 0)
    assert rotate_beauty_area(v1, v2, v3, v4) == NO_IMPROVEMENT


def test_area_metric_folded_current_diagonal():
    # current faces (v2,v3,v4) and (v2,v4,v1) lie on the same side of v2-v4
    v1, v2, v3, v4 = (1, -2, 0), (0, 0, 0), (1, -1, 0), (2, 0, 0)
    assert rotate_beauty_area(v1, v2, v3, v4) == ALWAYS_ROTATE
    assert rotate_beauty_area(v1, v2, v3, v4, restrict_degenerate=True) == NO_IMPROVEMENT


def test_area_metric_empty_current_triangle():
    # current face (v2, v4, v1) is collinear, the rotated pair is fine
    v1, v2, v3, v4 = (1, 0, 0), (0, 0, 0), (1, -1, 0), (2, 0, 0)
    assert rotate_beauty_area(v1, v2, v3, v4) == ALWAYS_ROTATE
    assert rotate_beauty_area(v1, v2, v3, v4, restrict_degenerate=True) == NO_IMPROVEMENT


def test_area_metric_invariant_under_rigid_motion():
    r = RHOMBUS
    base = rotate_beauty_area(r['v1'], r['v2'], r['v3'], r['v4'])
    c, s = math.cos(0.7), math.sin(0.7)
    rot = np.array([[1, 0, 0], [0, c, -s], [0, s, c]])
    moved = [rot @ np.asarray(r[k]) + np.array([3.0, -1.0, 2.0]) for k in ('v1', 'v2', 'v3', 'v4')]
    assert rotate_beauty_area(*moved) == pytest.approx(base, rel=1e-9)


@pytest.mark.parametrize("method", ['area', 'angle', BeautifyMethod.AREA, 'ANGLE'])
def test_edge_rotate_beauty_dispatch(method):
    p0, p1, p2, p3 = RIDGE
    got = edge_rotate_beauty(p0, p1, p3, p2, method=method)
    if BeautifyMethod.coerce(method) is BeautifyMethod.AREA:
        assert got == rotate_beauty_area(p0, p1, p3, p2)
    else:
        assert got == rotate_beauty_angle(p0, p1, p3, p2)


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        edge_rotate_beauty((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), method='laplace')


def test_same_apex_short_circuits():
    mesh = build_quad_pair(RIDGE)
    assert verts_calc_rotate_beauty(mesh, 0, 1, 0, 2, BeautifyConfig(method='angle')) == NO_IMPROVEMENT


def test_restrict_tag_requires_different_apex_tags():
    mesh = build_quad_pair(RIDGE)
    cfg = BeautifyConfig(method='angle', restrict_tag=True)
    assert edge_calc_rotate_beauty(mesh, (1, 2), cfg) == NO_IMPROVEMENT
    mesh.vert_tags[0] = True
    assert edge_calc_rotate_beauty(mesh, (1, 2), cfg) < 0
    # tags on the shared edge endpoints do not matter
    mesh.vert_tags[1] = True
    mesh.vert_tags[2] = True
    assert edge_calc_rotate_beauty(mesh, (2, 1), cfg) < 0
