import math
from dataclasses import asdict, dataclass, field, fields

from .exceptions import InvalidConfigurationError
from .knots import KnotAxis


@dataclass
class EditorSettings:
    order: int = 3
    resolution: int = 100
    demo_parameter: float = 0.5
    pick_radius: float = 0.3
    knot_axis: KnotAxis = field(default_factory=KnotAxis)
    view_extent: float = 10.0
    show_points: bool = True
    show_curve: bool = True
    show_knots: bool = True
    show_trace: bool = False
    show_demo_point: bool = False

    def __post_init__(self):
        self.order = max(2, int(self.order))
        self.resolution = max(1, int(self.resolution))
        self.demo_parameter = min(1.0, max(0.0, float(self.demo_parameter)))
        self.pick_radius = float(self.pick_radius)
        if not math.isfinite(self.pick_radius) or self.pick_radius <= 0:
            raise InvalidConfigurationError(f"pick_radius must be positive, got {self.pick_radius}")
        if isinstance(self.knot_axis, dict):
            self.knot_axis = KnotAxis(**self.knot_axis)

    @classmethod
    def from_dict(cls, d):
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})

    def to_dict(self):
        return asdict(self)
