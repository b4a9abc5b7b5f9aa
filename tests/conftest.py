import pytest

from nurbs_designer import CurveEvaluator, CurveSnapshot, KnotVector

ARCH = [(0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0)]


@pytest.fixture
def arch_points():
    return list(ARCH)


@pytest.fixture
def arch_snapshot():
    knots = KnotVector.clamped(4, 3)
    return CurveSnapshot.of(ARCH, [1.0] * 4, knots.values, 3)


@pytest.fixture
def arch_evaluator(arch_snapshot):
    return CurveEvaluator(arch_snapshot)
