"""Interaction state machine that owns the editable curve.

``EditSession`` is the only thing that mutates the control points and the
knot vector. The front end feeds it one cursor position and one gesture per
event, then polls the read accessors to redraw.
"""

import logging
from enum import Enum

from .control_points import ControlPointSet
from .evaluator import CurveEvaluator, CurveSnapshot, insert_knot
from .events import Gesture
from .exceptions import NoSelectionError
from .knots import KnotVector
from .settings import EditorSettings

log = logging.getLogger("nurbs_designer.session")


class EditState(Enum):
    IDLE = "idle"
    PENDING_SELECT = "pending_select"
    PENDING_ADD = "pending_add"
    DRAGGING_POINT = "dragging_point"
    PENDING_KNOT_SELECT = "pending_knot_select"
    DRAGGING_KNOT = "dragging_knot"


_PENDING = (EditState.PENDING_SELECT, EditState.PENDING_ADD, EditState.PENDING_KNOT_SELECT)


class EditSession:
    def __init__(self, settings=None, points=()):
        self.settings = settings or EditorSettings()
        self.points = ControlPointSet(points)
        self.knots = KnotVector()
        self.state = EditState.IDLE
        self.cursor = (0.0, 0.0)
        self.active_knot = None
        self._last_order = None

    # -- configuration knobs

    @property
    def order(self):
        return self.settings.order

    def set_order(self, order):
        order = max(2, int(order))
        if order != self.settings.order:
            log.info("curve order %d -> %d", self.settings.order, order)
        self.settings.order = order

    @property
    def effective_order(self):
        return min(self.settings.order, len(self.points))

    def set_resolution(self, resolution):
        self.settings.resolution = max(1, int(resolution))

    def set_demo_parameter(self, u):
        self.settings.demo_parameter = min(1.0, max(0.0, float(u)))

    def selected_weight(self):
        p = self.points.selected
        return None if p is None else p.weight

    def set_selected_weight(self, w):
        if not len(self.points):
            return
        idx = self.points.selected_index
        if idx is None:
            raise NoSelectionError("No active control point to weight")
        self.points.set_weight(idx, w)

    # -- knot bookkeeping

    @property
    def knots_dirty(self):
        return self.points.knots_dirty or self._last_order != self.effective_order

    def refresh_knots(self):
        if not self.knots_dirty:
            return self.knots
        n, k = len(self.points), self.effective_order
        if k >= 2:
            self.knots = KnotVector.clamped(n, k)
            self.points.knots_dirty = False
            self._last_order = k
            log.debug("regenerated knots for n=%d order=%d: %s", n, k, self.knots.values)
        else:
            self.knots = KnotVector((), max(k, 0))
        return self.knots

    def snapshot(self):
        knots = self.refresh_knots()
        return CurveSnapshot.of(self.points.positions(), self.points.weights(), knots.values, knots.order)

    def evaluator(self):
        return CurveEvaluator(self.snapshot())

    # -- events

    def handle(self, cursor, gesture=Gesture.NONE):
        """Advance the state machine by one event and apply its edit."""
        self.cursor = (float(cursor[0]), float(cursor[1]))
        if gesture is Gesture.TERTIARY_DOWN:
            self.remove_selected()
            self.active_knot = None
            self._enter(EditState.IDLE)
            return self.state

        self._enter(self._next_state(gesture))
        while self.state in _PENDING:
            self._enter(self._resolve_pending())

        if gesture is Gesture.NONE:
            if self.state is EditState.DRAGGING_POINT:
                self.points.move_selected(self.cursor)
            elif self.state is EditState.DRAGGING_KNOT:
                self._drag_knot()
        return self.state

    def _enter(self, state):
        if state is not self.state:
            log.debug("state %s -> %s", self.state.value, state.value)
            self.state = state

    def _next_state(self, gesture):
        st = self.state
        if st is EditState.IDLE:
            if gesture is Gesture.PRIMARY_DOWN:
                return EditState.PENDING_SELECT
            if gesture is Gesture.SECONDARY_DOWN:
                return EditState.PENDING_ADD
        elif st in (EditState.DRAGGING_POINT, EditState.DRAGGING_KNOT):
            if gesture is Gesture.PRIMARY_UP:
                self.active_knot = None
                return EditState.IDLE
        return st

    def _resolve_pending(self):
        st = self.state
        if st is EditState.PENDING_SELECT:
            hit = self.points.select_nearest(self.cursor, self.settings.pick_radius)
            return EditState.DRAGGING_POINT if hit is not None else EditState.PENDING_KNOT_SELECT
        if st is EditState.PENDING_KNOT_SELECT:
            self.active_knot = self.pick_knot(self.cursor)
            return EditState.DRAGGING_KNOT if self.active_knot is not None else EditState.IDLE
        if st is EditState.PENDING_ADD:
            self.add_point(self.cursor)
            return EditState.IDLE
        return st

    def pick_knot(self, cursor):
        knots = self.refresh_knots()
        axis = self.settings.knot_axis
        r = self.settings.pick_radius
        for i in knots.editable_indices:
            mx, my = axis.marker(knots[i])
            if (mx - cursor[0]) ** 2 + (my - cursor[1]) ** 2 <= r * r:
                return i
        return None

    def _drag_knot(self):
        if self.knots_dirty or self.active_knot not in self.knots.editable_indices:
            self.active_knot = None
            self._enter(EditState.IDLE)
            return
        t = self.settings.knot_axis.parameter_at(self.cursor)
        self.knots.move_knot(self.active_knot, t)

    # -- commands

    def add_point(self, position):
        idx = self.points.add(position)
        log.info("added point %d, %d total", idx, len(self.points))
        return idx

    def remove_selected(self):
        if not len(self.points) or self.points.selected_index is None:
            return
        self.points.remove_selected()
        log.info("removed point, %d left", len(self.points))

    def insert_knot(self, u):
        ev = self.evaluator()
        if not ev.is_valid:
            return False
        lo, hi = ev.snapshot.knots[0], ev.snapshot.knots[-1]
        if not lo < u < hi:
            return False
        if min(self.order, len(self.points) + 1) != ev.snapshot.order:
            # one more point would raise the effective order and regenerate the knots
            log.info("knot insertion at %.4f skipped, order would change", u)
            return False
        positions, weights, knots = insert_knot(ev.snapshot, float(u))
        self.points.replace(positions, weights)
        self.knots = KnotVector(knots, ev.snapshot.order)
        self.points.knots_dirty = False
        log.info("inserted knot %.4f, %d points", u, len(self.points))
        return True

    def clear(self):
        self.points.clear()
        self.knots = KnotVector()
        self._last_order = None
        self.active_knot = None
        self._enter(EditState.IDLE)
        log.info("cleared curve")

    # -- read accessors polled by the renderer

    def control_points(self):
        if not self.settings.show_points:
            return []
        return [p.position for p in self.points]

    def curve_samples(self):
        if not self.settings.show_curve:
            return []
        return list(self.evaluator().sample(self.settings.resolution))

    def knot_markers(self):
        if not self.settings.show_knots:
            return []
        return self.settings.knot_axis.markers(self.refresh_knots())

    def recursion_trace(self):
        if not self.settings.show_trace:
            return []
        return self.evaluator().trace(self.settings.demo_parameter)

    def demo_point(self):
        if not self.settings.show_demo_point:
            return None
        return self.evaluator().point_at(self.settings.demo_parameter)
