import pytest

from nurbs_designer.exceptions import InvalidConfigurationError
from nurbs_designer.knots import KnotAxis
from nurbs_designer.settings import EditorSettings


def test_defaults():
    s = EditorSettings()
    assert s.order == 3
    assert s.resolution == 100
    assert s.show_curve and not s.show_trace
    assert isinstance(s.knot_axis, KnotAxis)


def test_values_are_clamped():
    s = EditorSettings(order=0, resolution=-4, demo_parameter=2.0)
    assert s.order == 2
    assert s.resolution == 1
    assert s.demo_parameter == 1.0
    assert EditorSettings(demo_parameter=-1).demo_parameter == 0.0


def test_bad_pick_radius():
    with pytest.raises(InvalidConfigurationError):
        EditorSettings(pick_radius=0)


def test_from_dict_ignores_unknown_keys():
    s = EditorSettings.from_dict({"order": 4, "colour": "red", "knot_axis": {"origin": (0.0, -5.0), "length": 10.0}})
    assert s.order == 4
    assert s.knot_axis == KnotAxis((0.0, -5.0), 10.0)


def test_dict_round_trip():
    s = EditorSettings(order=5, show_trace=True)
    assert EditorSettings.from_dict(s.to_dict()) == s
