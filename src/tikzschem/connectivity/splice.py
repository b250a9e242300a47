"""Dropping a two-terminal component onto a wire."""

import logging

from tikzschem.connectivity.snapping import SnapResolver
from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component
from tikzschem.models.wire import Wire
from tikzschem.utils.geometry import distance

logger = logging.getLogger(__name__)


def insert_on_wire(circuit: Circuit, component: Component) -> bool:
    """Cut the wire under a component's centre and reconnect it to the terminals.

    Only two-terminal components whose orientation matches the struck leg
    are spliced. The wire end closest to each terminal is paired with it.

    Returns:
        True if the wire was replaced, False if nothing changed.
    """
    terminals = component.terminals()
    if len(terminals) != 2:
        return False

    wire = SnapResolver(circuit).find_wire_at(component.x, component.y)
    if wire is None:
        return False

    tag = wire.segment_at(component.x, component.y)
    if tag.is_horizontal == component.is_vertical:
        return False

    t1, t2 = terminals
    d11 = distance(wire.x1, wire.y1, t1.x, t1.y)
    d22 = distance(wire.x2, wire.y2, t2.x, t2.y)
    d12 = distance(wire.x1, wire.y1, t2.x, t2.y)
    d21 = distance(wire.x2, wire.y2, t1.x, t1.y)
    if d11 + d22 < d12 + d21:
        start, end = wire.start_point, wire.end_point
    else:
        start, end = wire.end_point, wire.start_point

    lead_in = Wire(x1=start[0], y1=start[1], x2=t1.x, y2=t1.y, corner_mode=wire.corner_mode)
    lead_out = Wire(x1=t2.x, y1=t2.y, x2=end[0], y2=end[1], corner_mode=wire.corner_mode)
    circuit.replace_wire(wire.id, [lead_in, lead_out])
    logger.debug(f"Spliced {component.name or component.id} into wire {wire.id}")
    return True
