"""Keeping the wire mesh connected while things move."""

import logging
from collections import deque
from uuid import UUID

from tikzschem.connectivity.snapping import SnapKind, SnapResolver, SnapResult
from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component
from tikzschem.models.wire import CornerMode, SegmentTag, Wire
from tikzschem.utils.geometry import (
    COMPONENT_ATTACH_TOLERANCE,
    PROPAGATION_TOLERANCE,
    TERMINAL_PIN_RADIUS,
    points_coincide,
)

logger = logging.getLogger(__name__)

# Source wires this close to vertical make a new wire leave vertically
_SOURCE_VERTICAL_TOLERANCE = 2.0


def _on_terminal(circuit: Circuit, x: float, y: float) -> bool:
    return SnapResolver(circuit).find_nearest_terminal(x, y, TERMINAL_PIN_RADIUS) is not None


def propagate_move(
    circuit: Circuit,
    old_x: float,
    old_y: float,
    new_x: float,
    new_y: float,
    origin: Wire,
    visited: set[UUID] | None = None,
    pin_bridges: bool = False,
    settled: set[tuple[UUID, int]] | None = None,
) -> list[Wire]:
    """Drag every wire end sitting on the old point over to the new point.

    Each wire that moves is processed in turn so wires chained behind it
    follow too. A wire is expanded at most once per call; ``visited`` may be
    shared between calls to extend that guarantee.

    With ``pin_bridges`` set, the terminal-side end of a smart bridge stays
    where it is as long as it still sits on a terminal.

    ``settled`` holds ``(wire id, end)`` pairs that already reached their
    final position. Those ends are left alone, and every end moved here is
    added to the set.

    Returns:
        Wires that had at least one endpoint moved, in the order moved.
    """
    if visited is None:
        visited = set()

    moved: list[Wire] = []
    queue: deque[Wire] = deque([origin])
    while queue:
        current = queue.popleft()
        if current.id in visited:
            continue
        visited.add(current.id)

        for wire in list(circuit.iter_wires()):
            if wire is current:
                continue
            touched = False
            for end in (1, 2):
                if settled is not None and (wire.id, end) in settled:
                    continue
                px, py = wire.endpoint(end)
                if not points_coincide(px, py, old_x, old_y, PROPAGATION_TOLERANCE):
                    continue
                if pin_bridges and wire.is_smart_bridge and end == 1 and _on_terminal(circuit, px, py):
                    continue
                wire.set_endpoint(end, new_x, new_y)
                if settled is not None:
                    settled.add((wire.id, end))
                touched = True
            if touched:
                moved.append(wire)
                queue.append(wire)

    return moved


def move_wire_endpoint(circuit: Circuit, wire: Wire, end: int, x: float, y: float) -> None:
    """Put one end of a wire at (x, y) and carry connected ends along."""
    old_x, old_y = wire.endpoint(end)
    wire.set_endpoint(end, x, y)
    propagate_move(circuit, old_x, old_y, x, y, wire)


def move_wire_segment(circuit: Circuit, wire: Wire, tag: SegmentTag, dx: float, dy: float) -> None:
    """Shift the tagged leg of a wire perpendicular to itself."""
    old_start = wire.start_point
    old_end = wire.end_point

    if tag is SegmentTag.H:
        wire.y1 += dy
        wire.y2 += dy
    elif tag is SegmentTag.V:
        wire.x1 += dx
        wire.x2 += dx
    elif tag is SegmentTag.H1:
        wire.y1 += dy
    elif tag is SegmentTag.V1:
        wire.x1 += dx
    elif tag is SegmentTag.H2:
        wire.y2 += dy
    elif tag is SegmentTag.V2:
        wire.x2 += dx

    if wire.start_point != old_start:
        propagate_move(circuit, *old_start, wire.x1, wire.y1, wire, pin_bridges=True)
    if wire.end_point != old_end:
        propagate_move(circuit, *old_end, wire.x2, wire.y2, wire, pin_bridges=True)


def move_component(
    circuit: Circuit,
    component: Component,
    dx: float,
    dy: float,
    settled: set[tuple[UUID, int]] | None = None,
) -> set[tuple[UUID, int]]:
    """Move a component and drag the wires attached to its terminals.

    Attached ends are collected before anything moves, so an end carried onto
    another terminal's old position is not picked up a second time.

    A wire left diagonal by the move gets a corner mode that leaves the
    terminal along the component's own axis.

    Returns:
        The ``(wire id, end)`` pairs moved, including those in ``settled``.
    """
    if settled is None:
        settled = set()

    attached: list[tuple[Wire, int]] = []
    for terminal in component.terminals():
        for wire in circuit.iter_wires():
            if points_coincide(wire.x1, wire.y1, terminal.x, terminal.y, COMPONENT_ATTACH_TOLERANCE):
                attached.append((wire, 1))
            elif points_coincide(wire.x2, wire.y2, terminal.x, terminal.y, COMPONENT_ATTACH_TOLERANCE):
                attached.append((wire, 2))

    component.x += dx
    component.y += dy
    vertical = component.is_vertical

    for wire, end in attached:
        if (wire.id, end) not in settled:
            old_x, old_y = wire.endpoint(end)
            wire.set_endpoint(end, old_x + dx, old_y + dy)
            settled.add((wire.id, end))
            propagate_move(circuit, old_x, old_y, old_x + dx, old_y + dy, wire, settled=settled)

        if not wire.is_straight:
            if vertical:
                wire.corner_mode = CornerMode.VH if end == 1 else CornerMode.HV
            else:
                wire.corner_mode = CornerMode.HV if end == 1 else CornerMode.VH

    return settled


def corner_mode_for_new_wire(
    circuit: Circuit,
    start: SnapResult,
    end_x: float,
    end_y: float,
) -> CornerMode:
    """Pick the bend direction for a freshly drawn wire."""
    straight = abs(start.y - end_y) < 1 or abs(start.x - end_x) < 1
    if straight:
        return CornerMode.HV

    if start.kind is SnapKind.TERMINAL and start.terminal is not None:
        comp = circuit.get_component(start.terminal.component_id)
        if comp is not None and comp.is_vertical:
            return CornerMode.VH
    elif start.kind is SnapKind.WIRE_ENDPOINT and start.wire is not None:
        if abs(start.wire.x1 - start.wire.x2) < _SOURCE_VERTICAL_TOLERANCE:
            return CornerMode.VH

    return CornerMode.HV


def insert_smart_bridges(circuit: Circuit, wire: Wire) -> list[Wire]:
    """Add zero-length stretch wires at each end of ``wire`` that sits on a terminal."""
    bridges = []
    for end in (1, 2):
        px, py = wire.endpoint(end)
        if _on_terminal(circuit, px, py):
            bridge = Wire(x1=px, y1=py, x2=px, y2=py, corner_mode=CornerMode.HV, is_smart_bridge=True)
            circuit.add_wire(bridge)
            bridges.append(bridge)
    if bridges:
        logger.debug(f"Inserted {len(bridges)} smart bridge(s) for wire {wire.id}")
    return bridges


def clear_smart_bridges(circuit: Circuit) -> None:
    """Turn every smart bridge into an ordinary wire."""
    for wire in circuit.iter_wires():
        wire.is_smart_bridge = False
