"""Wire and terminal connectivity engine."""

from tikzschem.connectivity.canonical import (
    cleanup_wires,
    merge_wires,
    shared_endpoint,
    split_wire_at_point,
)
from tikzschem.connectivity.config import EditorConfig
from tikzschem.connectivity.junctions import connection_count, find_junctions, is_junction
from tikzschem.connectivity.propagation import (
    clear_smart_bridges,
    corner_mode_for_new_wire,
    insert_smart_bridges,
    move_component,
    move_wire_endpoint,
    move_wire_segment,
    propagate_move,
)
from tikzschem.connectivity.snapping import SnapKind, SnapResolver, SnapResult
from tikzschem.connectivity.splice import insert_on_wire

__all__ = [
    "EditorConfig",
    "SnapKind",
    "SnapResolver",
    "SnapResult",
    "propagate_move",
    "move_wire_endpoint",
    "move_wire_segment",
    "move_component",
    "corner_mode_for_new_wire",
    "insert_smart_bridges",
    "clear_smart_bridges",
    "merge_wires",
    "shared_endpoint",
    "cleanup_wires",
    "split_wire_at_point",
    "find_junctions",
    "connection_count",
    "is_junction",
    "insert_on_wire",
]
