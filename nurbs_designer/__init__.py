"""Interactive editing and evaluation of a single planar NURBS curve."""

__all__ = [
    "ControlPoint",
    "ControlPointSet",
    "KnotVector",
    "KnotAxis",
    "CurveSnapshot",
    "CurveEvaluator",
    "insert_knot",
    "Gesture",
    "EditorSettings",
    "EditSession",
    "EditState",
]

from .control_points import ControlPoint, ControlPointSet
from .evaluator import CurveEvaluator, CurveSnapshot, insert_knot
from .events import Gesture
from .knots import KnotAxis, KnotVector
from .session import EditSession, EditState
from .settings import EditorSettings
