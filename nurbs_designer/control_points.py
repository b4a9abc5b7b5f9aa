import logging
import math
from dataclasses import dataclass

import numpy as np

from .exceptions import InvalidWeightError, NoSelectionError

log = logging.getLogger("nurbs_designer.points")


def _check_weight(w):
    w = float(w)
    if not math.isfinite(w) or w <= 0.0:
        raise InvalidWeightError(w)
    return w


@dataclass
class ControlPoint:
    position: tuple
    weight: float = 1.0

    def __setattr__(self, name, value):
        # checked on every assignment, including the generated __init__
        if name == "weight":
            value = _check_weight(value)
        elif name == "position":
            x, y = value
            value = (float(x), float(y))
        super().__setattr__(name, value)


class ControlPointSet:
    """Ordered weighted control points plus the index of the active one.

    Insertion order is curve traversal order. Any change in the number of
    points raises ``knots_dirty``; whoever owns the knot vector clears it
    after regenerating.
    """

    def __init__(self, points=()):
        self._points = [p if isinstance(p, ControlPoint) else ControlPoint(p) for p in points]
        self.selected_index = len(self._points) - 1 if self._points else None
        self.knots_dirty = True

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    @property
    def selected(self):
        if self.selected_index is None:
            return None
        return self._points[self._validated_selection()]

    def _validated_selection(self):
        idx = self.selected_index
        if idx is None or not 0 <= idx < len(self._points):
            raise NoSelectionError("No active control point")
        return idx

    def add(self, point):
        self._points.append(ControlPoint(point))
        self.selected_index = len(self._points) - 1
        self.knots_dirty = True
        log.debug("added control point %d at (%.4f, %.4f)", self.selected_index, *self._points[-1].position)
        return self.selected_index

    def select_nearest(self, cursor, threshold):
        cx, cy = cursor
        for i, p in enumerate(self._points):
            if math.hypot(p.position[0] - cx, p.position[1] - cy) <= threshold:
                self.selected_index = i
                return i
        return None

    def move_selected(self, new_position):
        idx = self._validated_selection()
        x, y = new_position
        self._points[idx].position = (float(x), float(y))

    def remove_selected(self):
        if not self._points:
            return
        idx = self._validated_selection()
        self._points.pop(idx)
        self.selected_index = len(self._points) - 1 if self._points else None
        self.knots_dirty = True
        log.debug("removed control point %d, %d left", idx, len(self._points))

    def set_weight(self, index, w):
        self._points[index].weight = w

    def clear(self):
        self._points = []
        self.selected_index = None
        self.knots_dirty = True

    def replace(self, positions, weights):
        """Swap in a whole new point list, e.g. after knot insertion."""
        pts = [ControlPoint(tuple(p), w) for p, w in zip(positions, weights)]
        keep = self.selected_index
        self._points = pts
        if keep is not None and pts:
            self.selected_index = min(keep, len(pts) - 1)
        else:
            self.selected_index = len(pts) - 1 if pts else None
        self.knots_dirty = True

    def positions(self):
        if not self._points:
            return np.empty((0, 2))
        return np.array([p.position for p in self._points], dtype=float)

    def weights(self):
        return np.array([p.weight for p in self._points], dtype=float)
