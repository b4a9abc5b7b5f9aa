import logging
from dataclasses import dataclass

from .exceptions import InvalidConfigurationError, KnotNotEditableError

log = logging.getLogger("nurbs_designer.knots")

SPAN_EPSILON = 1e-9
KNOT_MARGIN = 1e-4
NOT_FOUND = -1


class KnotVector:
    """Non-decreasing knot values for a curve of the given order."""

    def __init__(self, values=(), order=2):
        self.values = [float(v) for v in values]
        self.order = int(order)

    @classmethod
    def clamped(cls, n, order):
        # order-1 zeros, n-order+2 uniform values over [0, 1], order-1 ones
        if order < 2 or n < order:
            raise InvalidConfigurationError(f"Clamped knots need n >= order >= 2, got n={n}, order={order}")
        segments = n - order + 1
        step = 1.0 / segments
        U = [0.0] * (order - 1)
        for i in range(segments):
            U.append(i * step)
        U.append(1.0)
        U += [1.0] * (order - 1)
        return cls(U, order)

    def __len__(self):
        return len(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def __eq__(self, other):
        if isinstance(other, KnotVector):
            return self.values == other.values and self.order == other.order
        return NotImplemented

    def __repr__(self):
        return f"KnotVector({self.values!r}, order={self.order})"

    def find_span(self, u, order, control_count):
        U = self.values
        if u >= 1.0:
            u = 1.0 - SPAN_EPSILON
        last = min(control_count + order - 1, len(U) - 1)
        for i in range(last):
            if U[i] <= u < U[i + 1]:
                return i
        return NOT_FOUND

    @property
    def editable_indices(self):
        return range(self.order, max(self.order, len(self.values) - self.order))

    def move_knot(self, index, proposed_value):
        editable = self.editable_indices
        if index not in editable:
            raise KnotNotEditableError(index, editable)
        lo = self.values[index - 1] + KNOT_MARGIN
        hi = self.values[index + 1] - KNOT_MARGIN
        if lo > hi:
            value = 0.5 * (self.values[index - 1] + self.values[index + 1])
        else:
            value = min(max(float(proposed_value), lo), hi)
        self.values[index] = value
        return value


@dataclass
class KnotAxis:
    """Strip in world space on which knot values are drawn and picked."""

    origin: tuple = (-8.0, -8.0)
    length: float = 16.0

    def marker(self, t):
        x0, y0 = self.origin
        return (x0 + t * self.length, y0)

    def parameter_at(self, cursor):
        return (cursor[0] - self.origin[0]) / self.length

    def markers(self, knots):
        return [self.marker(t) for t in knots]
