"""Wire canonicalization: pruning, merging and splitting."""

import logging

from tikzschem.connectivity.junctions import is_junction
from tikzschem.models.circuit import Circuit
from tikzschem.models.wire import CornerMode, Wire
from tikzschem.utils.geometry import AXIS_TOLERANCE, points_coincide

logger = logging.getLogger(__name__)


def _near(a: float, b: float) -> bool:
    return abs(a - b) < AXIS_TOLERANCE


def shared_endpoint(w1: Wire, w2: Wire) -> tuple[float, float] | None:
    """First endpoint of ``w1`` that coincides with an endpoint of ``w2``."""
    for p in (w1.start_point, w1.end_point):
        for q in (w2.start_point, w2.end_point):
            if points_coincide(p[0], p[1], q[0], q[1], AXIS_TOLERANCE):
                return p
    return None


def merge_wires(w1: Wire, w2: Wire) -> Wire | None:
    """Fuse two wires joined end to end into one, if the shape allows it.

    Handles three shapes:

    * two straight collinear wires
    * a straight wire running into the start of a bent wire, in line with
      the bent wire's first leg
    * a horizontal and a vertical straight wire meeting at a corner

    The result carries ``w1``'s id. Returns None when the pair cannot be
    expressed as a single wire.
    """
    w1_h, w1_v = w1.is_horizontal, w1.is_vertical
    w2_h, w2_v = w2.is_horizontal, w2.is_vertical
    w1_bent = not (w1_h or w1_v)
    w2_bent = not (w2_h or w2_v)

    for w1_end in (1, 2):
        for w2_end in (1, 2):
            s1x, s1y = w1.endpoint(w1_end)
            s2x, s2y = w2.endpoint(w2_end)
            if not (_near(s1x, s2x) and _near(s1y, s2y)):
                continue

            f1x, f1y = w1.endpoint(3 - w1_end)
            f2x, f2y = w2.endpoint(3 - w2_end)

            if (w1_h and w2_h and _near(f1y, f2y)) or (w1_v and w2_v and _near(f1x, f2x)):
                return Wire(id=w1.id, x1=f1x, y1=f1y, x2=f2x, y2=f2y, corner_mode=CornerMode.HV)

            if w2_bent and w2_end == 1 and (
                (w1_h and w2.corner_mode is CornerMode.HV and _near(f1y, s2y))
                or (w1_v and w2.corner_mode is CornerMode.VH and _near(f1x, s2x))
            ):
                return Wire(id=w1.id, x1=f1x, y1=f1y, x2=f2x, y2=f2y, corner_mode=w2.corner_mode)

            if w1_bent and w1_end == 1 and (
                (w2_h and w1.corner_mode is CornerMode.HV and _near(f2y, s1y))
                or (w2_v and w1.corner_mode is CornerMode.VH and _near(f2x, s1x))
            ):
                return Wire(id=w1.id, x1=f2x, y1=f2y, x2=f1x, y2=f1y, corner_mode=w1.corner_mode)

            if (w1_h and w2_v) or (w1_v and w2_h):
                mode = CornerMode.HV if w1_h else CornerMode.VH
                return Wire(id=w1.id, x1=f1x, y1=f1y, x2=f2x, y2=f2y, corner_mode=mode)

    return None


def _drop_degenerate(circuit: Circuit) -> int:
    doomed = [wire.id for wire in circuit.iter_wires() if wire.is_degenerate]
    for wire_id in doomed:
        circuit.remove_wire(wire_id)
    return len(doomed)


def _merge_once(circuit: Circuit) -> bool:
    wires = list(circuit.iter_wires())
    for i, w1 in enumerate(wires):
        for w2 in wires[i + 1:]:
            shared = shared_endpoint(w1, w2)
            if shared is None or is_junction(circuit, *shared):
                continue
            merged = merge_wires(w1, w2)
            if merged is None:
                continue
            # Same id, so the merged wire keeps w1's slot
            circuit.wires[w1.id] = merged
            circuit.remove_wire(w2.id)
            logger.debug(f"Merged wire {w2.id} into {w1.id}")
            return True
    return False


def cleanup_wires(circuit: Circuit) -> int:
    """Bring the wire set into canonical form.

    Zero-length wires are dropped, then pairs meeting at a non-junction are
    merged until no merge applies. Running it twice changes nothing.

    Returns:
        Number of merges performed.
    """
    dropped = _drop_degenerate(circuit)
    if dropped:
        logger.debug(f"Dropped {dropped} degenerate wire(s)")

    merges = 0
    while _merge_once(circuit):
        merges += 1
    return merges


def split_wire_at_point(circuit: Circuit, wire: Wire, px: float, py: float) -> tuple[Wire, Wire] | None:
    """Cut a wire in two at (px, py).

    Both halves keep the corner mode, which leaves the bend on whichever
    half still spans it.
    """
    if circuit.get_wire(wire.id) is not wire:
        return None

    first = Wire(x1=wire.x1, y1=wire.y1, x2=px, y2=py, corner_mode=wire.corner_mode)
    second = Wire(x1=px, y1=py, x2=wire.x2, y2=wire.y2, corner_mode=wire.corner_mode)
    circuit.replace_wire(wire.id, [first, second])
    logger.debug(f"Split wire {wire.id} at ({px}, {py})")
    return first, second
