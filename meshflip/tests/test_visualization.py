import numpy as np

from meshflip.core.surfaces import build_quad_pair
from meshflip.core.visualization import plot_mesh

RIDGE = np.array([[-1.0, 0.0, 0.0], [0.0, -1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 0.0]])


def test_plot_mesh_writes_png(tmp_path):
    mesh = build_quad_pair(RIDGE)
    out = tmp_path / 'quad.png'
    plot_mesh(mesh, str(out), title='quad', highlight_edges=[(1, 2)])
    assert out.read_bytes()[:8] == b'\x89PNG\r\n\x1a\n'
