"""Rational de Boor evaluation of a planar NURBS curve.

All queries work on a :class:`CurveSnapshot`, an immutable copy of the
control points, weights and knots taken for one evaluation pass.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .exceptions import DegenerateKnotSpanError, InvalidConfigurationError
from .knots import NOT_FOUND, KnotVector

log = logging.getLogger("nurbs_designer.evaluator")

WEIGHT_EPSILON = 1e-12


@dataclass(frozen=True, eq=False)
class CurveSnapshot:
    positions: np.ndarray
    weights: np.ndarray
    knots: tuple
    order: int

    @classmethod
    def of(cls, positions, weights, knots, order):
        P = np.array(positions, dtype=float).reshape(-1, 2)
        W = np.array(weights, dtype=float).reshape(-1)
        P.setflags(write=False)
        W.setflags(write=False)
        return cls(P, W, tuple(float(k) for k in knots), int(order))

    @property
    def count(self):
        return len(self.positions)

    def homogeneous(self):
        return np.column_stack([self.positions * self.weights[:, None], self.weights])


def de_boor(values, knots, u, span, order, trace=None):
    """Triangular de Boor blend of ``values[span-order+1 .. span]``.

    ``values`` may hold scalars or vectors. When ``trace`` is a list, every
    pair of entries blended is appended to it before blending.
    """
    c = [values[span - j] for j in range(order)]
    for r in range(order, 1, -1):
        i = span
        for s in range(r - 1):
            denom = knots[i + r - 1] - knots[i]
            if denom == 0:
                raise DegenerateKnotSpanError(i, i + r - 1)
            omega = (u - knots[i]) / denom
            if trace is not None:
                trace.append((c[s], c[s + 1]))
            c[s] = omega * c[s] + (1.0 - omega) * c[s + 1]
            i -= 1
    return c[0]


class CurveEvaluator:
    def __init__(self, snapshot):
        self.snapshot = snapshot
        self._knots = KnotVector(snapshot.knots, snapshot.order)

    @property
    def is_valid(self):
        s = self.snapshot
        return s.order >= 2 and s.count >= s.order and len(s.knots) == s.count + s.order

    def span(self, u):
        if not self.is_valid:
            return NOT_FOUND
        s = self.snapshot
        delta = self._knots.find_span(u, s.order, s.count)
        # the blend window delta-order+1 .. delta must index real control points
        if delta < s.order - 1 or delta > s.count - 1:
            return NOT_FOUND
        return delta

    def weight_at(self, u):
        delta = self.span(u)
        if delta == NOT_FOUND:
            return None
        s = self.snapshot
        try:
            return float(de_boor(s.weights, s.knots, u, delta, s.order))
        except DegenerateKnotSpanError as e:
            log.debug("weight at u=%s skipped: %s", u, e)
            return None

    def point_at(self, u):
        delta = self.span(u)
        if delta == NOT_FOUND:
            return None
        s = self.snapshot
        try:
            h = de_boor(s.positions * s.weights[:, None], s.knots, u, delta, s.order)
        except DegenerateKnotSpanError as e:
            log.debug("point at u=%s skipped: %s", u, e)
            return None
        w = self.weight_at(u)
        if w is None or abs(w) < WEIGHT_EPSILON:
            return None
        return h / w

    def parameter_range(self):
        return self.snapshot.knots[self.snapshot.order - 1], 1.0

    def sample(self, count):
        """Yield the curve at ``count + 1`` evenly spaced parameters.

        Values that hit a degenerate span are skipped. Calling again starts over.
        """
        if not self.is_valid or count < 1:
            return
        start, end = self.parameter_range()
        for u in np.linspace(start, end, int(count) + 1):
            p = self.point_at(float(u))
            if p is not None:
                yield p

    def trace(self, u):
        delta = self.span(u)
        if delta == NOT_FOUND:
            return []
        s = self.snapshot
        pairs = []
        try:
            de_boor(s.positions * s.weights[:, None], s.knots, u, delta, s.order, trace=pairs)
        except DegenerateKnotSpanError as e:
            log.debug("trace at u=%s skipped: %s", u, e)
            return []
        return pairs


def insert_knot(snapshot, u):
    """Boehm insertion of a single knot ``u``.

    Returns ``(positions, weights, knots)`` of an equivalent curve with one
    more control point. Blending happens on homogeneous points so weights
    are carried through.
    """
    U = list(snapshot.knots)
    k = snapshot.order
    p = k - 1
    n = snapshot.count
    if not (U[0] < u < U[-1]):
        raise InvalidConfigurationError(f"Knot {u} must lie strictly inside ({U[0]}, {U[-1]})")
    span = KnotVector(U, k).find_span(u, k, n)
    if span == NOT_FOUND or span < p or span > n - 1:
        raise InvalidConfigurationError(f"No knot span contains {u}")

    H = snapshot.homogeneous()
    Q = []
    for i in range(0, span - p + 1):
        Q.append(H[i])
    for i in range(span - p + 1, span + 1):
        denom = U[i + p] - U[i]
        if denom == 0:
            raise DegenerateKnotSpanError(i, i + p)
        alpha = (u - U[i]) / denom
        Q.append(alpha * H[i] + (1 - alpha) * H[i - 1])
    for i in range(span, n):
        Q.append(H[i])

    Q = np.array(Q)
    new_w = Q[:, 2]
    new_pts = Q[:, :2] / new_w[:, None]
    new_knots = U[:span + 1] + [float(u)] + U[span + 1:]
    return new_pts, new_w, new_knots
