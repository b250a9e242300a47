"""Wire model for orthogonal connections."""

from dataclasses import dataclass, field, replace
from enum import Enum
from uuid import UUID, uuid4

from tikzschem.utils.geometry import (
    AXIS_TOLERANCE,
    JUNCTION_TOLERANCE,
    point_to_segment_distance,
)


class CornerMode(Enum):
    """Which axis a bent wire traverses first."""

    HV = "hv"  # horizontal then vertical, turns at (x2, y1)
    VH = "vh"  # vertical then horizontal, turns at (x1, y2)

    @property
    def connector(self) -> str:
        """CircuiTikZ path operator for this bend."""
        return "-|" if self is CornerMode.HV else "|-"


class SegmentTag(Enum):
    """Which part of a wire a point hits.

    Straight wires report the whole wire (``H`` or ``V``). Bent wires report
    the leg and the endpoint it carries: ``H1``/``V2`` for horizontal-first
    wires, ``V1``/``H2`` for vertical-first wires.
    """

    H = "h"
    V = "v"
    H1 = "h1"
    V1 = "v1"
    H2 = "h2"
    V2 = "v2"

    @property
    def is_horizontal(self) -> bool:
        return self in (SegmentTag.H, SegmentTag.H1, SegmentTag.H2)

    @property
    def is_vertical(self) -> bool:
        return not self.is_horizontal


@dataclass
class WireSegment:
    """A single straight leg of a wire."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_horizontal(self) -> bool:
        return abs(self.y1 - self.y2) < AXIS_TOLERANCE

    @property
    def length(self) -> float:
        return abs(self.x2 - self.x1) + abs(self.y2 - self.y1)

    def distance_to(self, px: float, py: float) -> float:
        return point_to_segment_distance(px, py, self.x1, self.y1, self.x2, self.y2)

    def contains_interior(self, px: float, py: float, tolerance: float) -> bool:
        """Point lies on this axis-aligned leg, strictly between its ends."""
        margin = tolerance / 2
        if abs(self.y1 - self.y2) < tolerance and abs(py - self.y1) < tolerance:
            low, high = sorted((self.x1, self.x2))
            return low + margin < px < high - margin
        if abs(self.x1 - self.x2) < tolerance and abs(px - self.x1) < tolerance:
            low, high = sorted((self.y1, self.y2))
            return low + margin < py < high - margin
        return False


@dataclass
class Wire:
    """An orthogonal wire between two points, with at most one bend."""

    id: UUID = field(default_factory=uuid4)
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    corner_mode: CornerMode = CornerMode.HV
    # Transient drag helper, never persisted
    is_smart_bridge: bool = field(default=False, compare=False)

    @property
    def start_point(self) -> tuple[float, float]:
        return (self.x1, self.y1)

    @property
    def end_point(self) -> tuple[float, float]:
        return (self.x2, self.y2)

    @property
    def is_horizontal(self) -> bool:
        return abs(self.y1 - self.y2) < AXIS_TOLERANCE

    @property
    def is_vertical(self) -> bool:
        return abs(self.x1 - self.x2) < AXIS_TOLERANCE

    @property
    def is_straight(self) -> bool:
        return self.is_horizontal or self.is_vertical

    @property
    def is_degenerate(self) -> bool:
        """Zero-length wire (within one world unit on both axes)."""
        return abs(self.x1 - self.x2) <= AXIS_TOLERANCE and abs(self.y1 - self.y2) <= AXIS_TOLERANCE

    @property
    def corner(self) -> tuple[float, float] | None:
        """The bend point, or None for straight wires."""
        if self.is_straight:
            return None
        if self.corner_mode is CornerMode.VH:
            return (self.x1, self.y2)
        return (self.x2, self.y1)

    def endpoint(self, end: int) -> tuple[float, float]:
        """Coordinates of endpoint 1 or 2."""
        return self.start_point if end == 1 else self.end_point

    def set_endpoint(self, end: int, x: float, y: float) -> None:
        if end == 1:
            self.x1, self.y1 = x, y
        else:
            self.x2, self.y2 = x, y

    def translate(self, dx: float, dy: float) -> None:
        self.x1 += dx
        self.y1 += dy
        self.x2 += dx
        self.y2 += dy

    def segments(self) -> list[WireSegment]:
        """Straight legs in path order (one for straight wires, two when bent)."""
        corner = self.corner
        if corner is None:
            return [WireSegment(self.x1, self.y1, self.x2, self.y2)]
        cx, cy = corner
        return [
            WireSegment(self.x1, self.y1, cx, cy),
            WireSegment(cx, cy, self.x2, self.y2),
        ]

    def get_all_points(self) -> list[tuple[float, float]]:
        """Endpoints plus the bend, in path order."""
        corner = self.corner
        if corner is None:
            return [self.start_point, self.end_point]
        return [self.start_point, corner, self.end_point]

    def distance_to(self, px: float, py: float) -> float:
        """Shortest distance from a point to any leg of the wire."""
        return min(seg.distance_to(px, py) for seg in self.segments())

    def passes_through(self, px: float, py: float, tolerance: float = JUNCTION_TOLERANCE) -> bool:
        """Point lies strictly inside one of the legs (ends and bend excluded)."""
        return any(seg.contains_interior(px, py, tolerance) for seg in self.segments())

    def segment_at(self, px: float, py: float) -> SegmentTag:
        """Identify the leg closest to a point."""
        if self.is_horizontal:
            return SegmentTag.H
        if self.is_vertical:
            return SegmentTag.V

        first, second = self.segments()
        on_first = first.distance_to(px, py) < second.distance_to(px, py)
        if self.corner_mode is CornerMode.VH:
            return SegmentTag.V1 if on_first else SegmentTag.H2
        return SegmentTag.H1 if on_first else SegmentTag.V2

    def copy(self, **changes) -> "Wire":
        """Return a detached copy, optionally with changed fields."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize wire to dictionary."""
        return {
            "id": str(self.id),
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "corner_mode": self.corner_mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Wire":
        """Deserialize wire from dictionary."""
        return cls(
            id=UUID(data["id"]),
            x1=data["x1"],
            y1=data["y1"],
            x2=data["x2"],
            y2=data["y2"],
            corner_mode=CornerMode(data.get("corner_mode", CornerMode.HV.value)),
        )
