"""Plotting helpers for beautify runs (before/after surface views)."""
from __future__ import annotations

import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    try:
        _mpl.use('Agg')
    except Exception:
        pass
import numpy as np
import matplotlib.pyplot as plt

from .logging_utils import get_logger

logger = get_logger('meshflip.viz')

__all__ = ['draw_mesh', 'plot_mesh', 'plot_before_after']


def draw_mesh(ax, mesh, title=None, highlight_edges=None, face_color=(0.75, 0.82, 0.92)):
    """Draw ``mesh`` on a 3D axes; ``highlight_edges`` are drawn in red."""
    pts = np.asarray(mesh.points)
    tris = np.asarray(mesh.triangles)
    ax.plot_trisurf(pts[:, 0], pts[:, 1], pts[:, 2], triangles=tris,
                    color=face_color, edgecolor=(0.2, 0.2, 0.2), linewidth=0.3, alpha=0.9)
    for a, b in highlight_edges or ():
        seg = pts[[a, b]]
        ax.plot(seg[:, 0], seg[:, 1], seg[:, 2], color=(0.85, 0.2, 0.2), linewidth=1.2)
    if title:
        ax.set_title(title)
    ax.set_xlabel('x'); ax.set_ylabel('y'); ax.set_zlabel('z')


def plot_mesh(mesh, outname="mesh.png", title=None, highlight_edges=None):
    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(1, 1, 1, projection='3d')
    draw_mesh(ax, mesh, title=title, highlight_edges=highlight_edges)
    fig.tight_layout()
    fig.savefig(outname, dpi=150)
    plt.close(fig)
    logger.debug('wrote %s', outname)


def plot_before_after(before, after, outname="beautify.png", highlight_edges=None,
                      titles=('before', 'after')):
    """Side-by-side view of a mesh before and after beautify.

    ``highlight_edges`` (typically the rotated edges) are drawn on the
    ``after`` panel.
    """
    fig = plt.figure(figsize=(12, 6))
    ax0 = fig.add_subplot(1, 2, 1, projection='3d')
    draw_mesh(ax0, before, title=titles[0])
    ax1 = fig.add_subplot(1, 2, 2, projection='3d')
    draw_mesh(ax1, after, title=titles[1], highlight_edges=highlight_edges)
    fig.tight_layout()
    fig.savefig(outname, dpi=150)
    plt.close(fig)
    logger.debug('wrote %s', outname)
