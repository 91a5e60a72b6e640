# tests/test_text_adapter.py — manual-entry parsing in front of the estimator
import pytest

import takeoff_estimator_core as core


def _raw(**kw):
    raw = {"weight": "960", "temperature": "15", "altitude": "0", "wind": "0", "surface": "asphalt"}
    raw.update(kw)
    return raw


def test_parse_plain_numbers():
    x = core.parse_text_inputs(_raw(weight=" 1005.5 ", wind="-3", surface="Grass"))
    assert x.weight_kg == 1005.5
    assert x.wind_kts == -3.0
    assert x.surface == "grass"


def test_decimal_comma():
    assert core.parse_text_inputs(_raw(temperature="12,5")).oat_c == 12.5


def test_missing_surface_defaults_to_asphalt():
    raw = _raw()
    del raw["surface"]
    assert core.parse_text_inputs(raw).surface == "asphalt"


@pytest.mark.parametrize("field", ["weight", "temperature", "altitude", "wind"])
@pytest.mark.parametrize("text", ["", "   ", "abc", "nan", "inf", "-Infinity", None,
                                  "1_000", "9_6_0", "\uff19\uff16\uff10", "12abc", "0x10"])
def test_unparseable_is_fatal(field, text):
    with pytest.raises(core.InputParseError):
        core.parse_text_inputs(_raw(**{field: text}))
    out = core.estimate_from_text(_raw(**{field: text}))
    assert not out.ok
    assert out.distance_m is None
    assert out.message == core.MSG_NOT_A_NUMBER


def test_parse_error_wins_over_mass_error():
    out = core.estimate_from_text(_raw(weight="0", wind="x"))
    assert out.message == core.MSG_NOT_A_NUMBER


def test_unknown_surface_text():
    out = core.estimate_from_text(_raw(surface="concrete"))
    assert out.message == core.MSG_SURFACE_UNKNOWN


def test_text_matches_typed(anchor):
    assert core.estimate_from_text(_raw()) == core.estimate(anchor)
    out = core.estimate_from_text(_raw(weight="800", surface="grass"))
    assert out.distance_m == 391 and out.warning


def test_parse_error_is_estimator_error():
    assert issubclass(core.InputParseError, core.EstimatorError)
    assert issubclass(core.EstimatorError, ValueError)


@pytest.mark.parametrize("text,value", [("+5", 5.0), ("-.5", -0.5), ("1e3", 1000.0), ("7.", 7.0)])
def test_accepted_number_forms(text, value):
    assert core.parse_text_inputs(_raw(wind=text)).wind_kts == value
