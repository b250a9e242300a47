"""Tunable editor parameters consumed by the connectivity engine."""

from dataclasses import asdict, dataclass


@dataclass
class EditorConfig:
    """Grid, snapping and history parameters, in world units."""

    grid_size: float = 20.0
    terminal_snap_radius: float = 15.0
    endpoint_snap_radius: float = 10.0
    body_snap_threshold: float = 10.0
    wire_hit_threshold: float = 12.0
    endpoint_grab_radius: float = 8.0
    paste_offset: float = 20.0
    max_history: int = 50

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "EditorConfig":
        """Deserialize from dictionary, ignoring unknown keys."""
        defaults = cls()
        return cls(
            grid_size=float(data.get("grid_size", defaults.grid_size)),
            terminal_snap_radius=float(data.get("terminal_snap_radius", defaults.terminal_snap_radius)),
            endpoint_snap_radius=float(data.get("endpoint_snap_radius", defaults.endpoint_snap_radius)),
            body_snap_threshold=float(data.get("body_snap_threshold", defaults.body_snap_threshold)),
            wire_hit_threshold=float(data.get("wire_hit_threshold", defaults.wire_hit_threshold)),
            endpoint_grab_radius=float(data.get("endpoint_grab_radius", defaults.endpoint_grab_radius)),
            paste_offset=float(data.get("paste_offset", defaults.paste_offset)),
            max_history=int(data.get("max_history", defaults.max_history)),
        )
