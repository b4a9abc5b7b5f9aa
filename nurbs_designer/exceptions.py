class CurveError(Exception):
    pass


class InvalidWeightError(CurveError, ValueError):
    def __init__(self, weight):
        super().__init__(f"Control point weight must be positive and finite, got {weight!r}")
        self.weight = weight


class NoSelectionError(CurveError, LookupError):
    pass


class KnotNotEditableError(CurveError, IndexError):
    def __init__(self, index, editable):
        super().__init__(f"Knot {index} is not editable (editable range {editable.start}..{editable.stop - 1})")
        self.index = index


class DegenerateKnotSpanError(CurveError, ZeroDivisionError):
    def __init__(self, lo, hi):
        super().__init__(f"Knots {lo} and {hi} coincide inside the evaluation window")
        self.lo = lo
        self.hi = hi


class InvalidConfigurationError(CurveError, ValueError):
    pass
