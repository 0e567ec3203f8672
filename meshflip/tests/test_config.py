import pytest

from meshflip.core.config import BeautifyConfig, BeautifyMethod, DriverConfig


def test_defaults():
    cfg = BeautifyConfig()
    assert cfg.method is BeautifyMethod.AREA
    assert not cfg.restrict_tag and not cfg.restrict_degenerate


def test_method_coercion():
    assert BeautifyConfig(method='ANGLE').method is BeautifyMethod.ANGLE
    assert BeautifyMethod.coerce(BeautifyMethod.AREA) is BeautifyMethod.AREA
    with pytest.raises(ValueError, match='unknown beautify method'):
        BeautifyConfig(method='delaunay')


def test_beautify_config_dict_roundtrip_ignores_unknown_keys():
    d = BeautifyConfig(method='angle', restrict_tag=True).to_dict()
    assert d == {'method': 'angle', 'restrict_tag': True, 'restrict_degenerate': False}
    d['legacy_option'] = 3
    cfg = BeautifyConfig.from_dict(d)
    assert cfg.method is BeautifyMethod.ANGLE and cfg.restrict_tag


def test_driver_config_nested_beautify():
    cfg = DriverConfig.from_dict({'npts': 50, 'plot': False,
                                  'beautify': {'method': 'angle', 'restrict_degenerate': True}})
    assert cfg.npts == 50 and cfg.seed == 42 and not cfg.plot
    assert cfg.beautify.method is BeautifyMethod.ANGLE
    assert cfg.beautify.restrict_degenerate
    assert cfg.to_dict()['beautify']['method'] == 'angle'
    assert DriverConfig.from_dict(None).beautify == BeautifyConfig()
