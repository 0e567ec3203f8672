"""Public package API for the meshflip edge-rotation beautifier.

This facade provides a stable, flatter import surface on top of the
internal implementation package ``meshflip.core`` while deferring the
matplotlib-backed plotting module until first use so ``import meshflip``
stays fast.

Example
-------
    from meshflip import TriMesh, BeautifyConfig, beautify_fill

    mesh = TriMesh(points, triangles)
    edges = mesh.manifold_edges()
    report = beautify_fill(mesh, edges, BeautifyConfig(method='angle'))

The deeper modules (``meshflip.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("meshflip")  # populated when installed
except _NotFound:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_const = _imp('meshflip.core.constants')
_conf = _imp('meshflip.core.config')
_geom = _imp('meshflip.core.geometry')
_mesh = _imp('meshflip.core.mesh')
_quality = _imp('meshflip.core.quality')
_heap = _imp('meshflip.core.edge_heap')
_state = _imp('meshflip.core.edge_state')
_beautify = _imp('meshflip.core.beautify')
_surfaces = _imp('meshflip.core.surfaces')
_conformity = _imp('meshflip.core.conformity')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)
        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m
        def __getattr__(self, item):
            if item == '_m':
                raise AttributeError(item)
            return getattr(self._load(), item)
        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# Lazily loaded matplotlib-dependent module
visualization = _lazy_module('meshflip.core.visualization')

# Mesh collaborator
TriMesh = _mesh.TriMesh
NonManifoldEdgeError = _mesh.NonManifoldEdgeError

# Configuration
BeautifyConfig = _conf.BeautifyConfig
BeautifyMethod = _conf.BeautifyMethod

# Optimizer entry points
beautify_fill = _beautify.beautify_fill
beautify_mesh = _beautify.beautify_mesh
BeautifyReport = _beautify.BeautifyReport

# Metric
edge_rotate_beauty = _quality.edge_rotate_beauty
edge_calc_rotate_beauty = _quality.edge_calc_rotate_beauty

# Sentinels / tolerances
NO_IMPROVEMENT = _const.NO_IMPROVEMENT
ALWAYS_ROTATE = _const.ALWAYS_ROTATE
EPS_AREA = _const.EPS_AREA

# Namespace submodules for exploratory users
constants = _const
config = _conf
geometry = _geom
quality = _quality
edge_heap = _heap
edge_state = _state
surfaces = _surfaces
conformity = _conformity


def main(argv=None):
    """Console entry point (``meshflip-beautify``)."""
    return _imp('meshflip.core.beautify_driver').main(argv)


__all__ = [
    '__version__',
    # mesh + config
    'TriMesh', 'NonManifoldEdgeError', 'BeautifyConfig', 'BeautifyMethod',
    # optimizer
    'beautify_fill', 'beautify_mesh', 'BeautifyReport',
    # metric
    'edge_rotate_beauty', 'edge_calc_rotate_beauty',
    # sentinels / tolerances
    'NO_IMPROVEMENT', 'ALWAYS_ROTATE', 'EPS_AREA',
    # submodules / namespaces
    'constants', 'config', 'geometry', 'quality', 'edge_heap', 'edge_state',
    'surfaces', 'conformity', 'visualization', 'main',
]
