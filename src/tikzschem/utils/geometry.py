"""Planar geometry helpers shared by the wire model and connectivity engine."""

import math

# Two coordinates closer than this are treated as the same axis value
# (straight-wire detection, merge coincidence).
AXIS_TOLERANCE = 1.0

# Coincidence radius used when classifying junctions.
JUNCTION_TOLERANCE = 2.0

# Coincidence radius used when propagating a moved point through the mesh.
PROPAGATION_TOLERANCE = 3.0

# Radius for "this wire end sits on that component terminal".
COMPONENT_ATTACH_TOLERANCE = 2.0

# Radius for smart-bridge creation and pinning.
TERMINAL_PIN_RADIUS = 5.0


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(ax - bx, ay - by)


def points_coincide(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    tolerance: float = JUNCTION_TOLERANCE,
) -> bool:
    """Check whether two points fall within ``tolerance`` on both axes."""
    return abs(ax - bx) < tolerance and abs(ay - by) < tolerance


def point_to_segment_distance(
    px: float, py: float,
    x1: float, y1: float,
    x2: float, y2: float,
) -> float:
    """
    Distance from a point to a line segment.

    Uses the clamped parametric projection; a zero-length segment
    degrades to point distance.
    """
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return distance(px, py, x1, y1)

    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    return distance(px, py, x1 + t * dx, y1 + t * dy)


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def snap_to_grid(value: float, grid_size: float) -> float:
    """Snap a single coordinate to the nearest grid line."""
    return round_half_away(value / grid_size) * grid_size
