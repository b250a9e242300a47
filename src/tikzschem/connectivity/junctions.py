"""Junction detection (points drawn with a connection dot)."""

from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Terminal
from tikzschem.models.wire import Wire
from tikzschem.utils.geometry import JUNCTION_TOLERANCE, points_coincide


def _candidate_points(wires: list[Wire], terminals: list[Terminal]) -> list[tuple[float, float]]:
    """Wire ends, bends and terminals, de-duplicated in discovery order."""
    points: dict[tuple[float, float], None] = {}
    for wire in wires:
        points.setdefault(wire.start_point)
        points.setdefault(wire.end_point)
        corner = wire.corner
        if corner is not None:
            points.setdefault(corner)
    for terminal in terminals:
        points.setdefault(terminal.position)
    return list(points)


def _count_at(
    wires: list[Wire],
    terminals: list[Terminal],
    x: float,
    y: float,
) -> tuple[int, bool]:
    count = 0
    mid_hit = False
    for wire in wires:
        touches = points_coincide(wire.x1, wire.y1, x, y) or points_coincide(wire.x2, wire.y2, x, y)
        if not touches:
            corner = wire.corner
            touches = corner is not None and points_coincide(corner[0], corner[1], x, y)
        if touches:
            count += 1
        elif wire.passes_through(x, y, JUNCTION_TOLERANCE):
            count += 1
            mid_hit = True
    for terminal in terminals:
        if points_coincide(terminal.x, terminal.y, x, y):
            count += 1
    return count, mid_hit


def _is_junction_count(count: int, mid_hit: bool) -> bool:
    return count >= 3 or (count >= 2 and mid_hit)


def connection_count(circuit: Circuit, x: float, y: float) -> tuple[int, bool]:
    """Number of wires and terminals meeting at a point.

    A wire counts once if the point is one of its ends or its bend, or once
    (as a mid-hit) if the point lies inside one of its legs.

    Returns:
        (count, has_mid_hit)
    """
    return _count_at(list(circuit.iter_wires()), circuit.all_terminals(), x, y)


def is_junction(circuit: Circuit, x: float, y: float) -> bool:
    """True when three or more things meet, or a wire is tapped mid-leg."""
    return _is_junction_count(*connection_count(circuit, x, y))


def find_junctions(circuit: Circuit) -> list[tuple[float, float]]:
    """All junction points, in wire then terminal discovery order.

    Zero-length wires, such as smart bridges mid-drag, are ignored.
    """
    wires = [wire for wire in circuit.iter_wires() if not wire.is_degenerate]
    terminals = circuit.all_terminals()
    return [
        (x, y)
        for x, y in _candidate_points(wires, terminals)
        if _is_junction_count(*_count_at(wires, terminals, x, y))
    ]
