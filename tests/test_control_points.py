import math

import pytest

from nurbs_designer.control_points import ControlPoint, ControlPointSet
from nurbs_designer.exceptions import InvalidWeightError, NoSelectionError


def test_add_selects_new_point():
    pts = ControlPointSet()
    pts.knots_dirty = False
    assert pts.add((1.0, 2.0)) == 0
    assert pts.add((3.0, 4.0)) == 1
    assert pts.selected_index == 1
    assert pts.selected.position == (3.0, 4.0)
    assert pts.selected.weight == 1.0
    assert pts.knots_dirty


def test_select_nearest_first_match_wins():
    pts = ControlPointSet([(0.0, 0.0), (0.1, 0.0), (5.0, 5.0)])
    assert pts.select_nearest((0.09, 0.0), 0.5) == 0
    assert pts.selected_index == 0
    assert pts.select_nearest((5.1, 5.0), 0.5) == 2


def test_select_nearest_miss_keeps_selection():
    pts = ControlPointSet([(0.0, 0.0), (1.0, 0.0)])
    assert pts.selected_index == 1
    assert pts.select_nearest((10.0, 10.0), 0.5) is None
    assert pts.selected_index == 1


def test_move_selected_in_place():
    pts = ControlPointSet([(0.0, 0.0), (1.0, 0.0)])
    pts.knots_dirty = False
    pts.select_nearest((0.0, 0.0), 0.1)
    pts.move_selected((2.5, -1.0))
    assert pts[0].position == (2.5, -1.0)
    assert not pts.knots_dirty


def test_move_without_selection_fails_loudly():
    with pytest.raises(NoSelectionError):
        ControlPointSet().move_selected((1.0, 1.0))


def test_remove_moves_selection_to_last():
    pts = ControlPointSet([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])
    pts.select_nearest((0.0, 0.0), 0.1)
    pts.remove_selected()
    assert [p.position for p in pts] == [(1.0, 0.0), (2.0, 0.0)]
    assert pts.selected_index == 1
    pts.remove_selected()
    pts.remove_selected()
    assert len(pts) == 0
    assert pts.selected_index is None
    assert pts.selected is None


def test_remove_on_empty_set_is_noop():
    pts = ControlPointSet()
    pts.knots_dirty = False
    pts.remove_selected()
    assert len(pts) == 0
    assert not pts.knots_dirty


def test_add_then_remove_restores_points(arch_points):
    pts = ControlPointSet(arch_points)
    pts.add((9.0, 9.0))
    pts.remove_selected()
    assert [p.position for p in pts] == arch_points
    assert [p.weight for p in pts] == [1.0] * 4


def test_set_weight_rejects_non_positive():
    pts = ControlPointSet([(0.0, 0.0)])
    pts.set_weight(0, 2.5)
    assert pts[0].weight == 2.5
    for bad in (0.0, -1.0, math.nan, math.inf):
        with pytest.raises(InvalidWeightError):
            pts.set_weight(0, bad)
    assert pts[0].weight == 2.5


def test_control_point_validates_weight():
    with pytest.raises(ValueError):
        ControlPoint((0.0, 0.0), -0.5)
    assert ControlPoint((1, 2)).position == (1.0, 2.0)


def test_positions_and_weights_arrays(arch_points):
    pts = ControlPointSet(arch_points)
    pts.set_weight(2, 3.0)
    assert pts.positions().shape == (4, 2)
    assert list(pts.weights()) == [1.0, 1.0, 3.0, 1.0]
    assert ControlPointSet().positions().shape == (0, 2)


def test_replace_keeps_selection_in_range():
    pts = ControlPointSet([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])
    pts.replace([(0.0, 0.0), (1.0, 1.0)], [1.0, 2.0])
    assert pts.selected_index == 1
    assert pts[1].weight == 2.0


def test_clear():
    pts = ControlPointSet([(0.0, 0.0)])
    pts.clear()
    assert len(pts) == 0
    assert pts.selected_index is None
    assert pts.knots_dirty


def test_weight_assignment_is_validated(arch_points):
    pts = ControlPointSet(arch_points)
    with pytest.raises(InvalidWeightError):
        pts[0].weight = -1.0
    assert pts[0].weight == 1.0
    pts[0].weight = 3
    assert pts[0].weight == 3.0
    pts[1].position = (5, 6)
    assert pts[1].position == (5.0, 6.0)
