"""Smoke test to ensure top-level package import works without triggering
circular import errors. This guards against regressions in the flat API
layer (`meshflip/__init__.py`).
"""

def test_import_meshflip_smoke():
    import meshflip  # noqa: F401
    assert hasattr(meshflip, 'TriMesh')
    assert hasattr(meshflip, 'beautify_fill')
    assert callable(meshflip.beautify_mesh)
    assert meshflip.BeautifyMethod('angle') is meshflip.BeautifyMethod.ANGLE


def test_lazy_visualization_resolves():
    import meshflip
    assert callable(meshflip.visualization.plot_mesh)
    assert 'plot_before_after' in dir(meshflip.visualization)
