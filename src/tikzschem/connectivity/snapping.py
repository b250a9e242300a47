"""Snap resolution and hit testing against the live circuit."""

from dataclasses import dataclass
from enum import Enum

from tikzschem.connectivity.config import EditorConfig
from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component, Terminal
from tikzschem.models.wire import Wire
from tikzschem.utils.geometry import distance, snap_to_grid


class SnapKind(Enum):
    """What a snapped point landed on."""

    TERMINAL = "terminal"
    WIRE_ENDPOINT = "wire_endpoint"
    WIRE_BODY = "wire_body"
    GRID = "grid"


@dataclass
class SnapResult:
    """A resolved point plus the object it attached to, if any."""

    x: float
    y: float
    kind: SnapKind
    terminal: Terminal | None = None
    wire: Wire | None = None
    end: int | None = None  # 1 or 2 for WIRE_ENDPOINT

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


class SnapResolver:
    """Resolves raw world coordinates to connection points.

    Priority: component terminal, wire endpoint, wire body, grid.
    """

    def __init__(self, circuit: Circuit, config: EditorConfig | None = None):
        self._circuit = circuit
        self._config = config or EditorConfig()

    def resolve(self, x: float, y: float, terminal_radius: float | None = None) -> SnapResult:
        """Snap a point; always returns a result."""
        config = self._config
        radius = config.terminal_snap_radius if terminal_radius is None else terminal_radius

        terminal = self.find_nearest_terminal(x, y, radius)
        if terminal is not None:
            return SnapResult(terminal.x, terminal.y, SnapKind.TERMINAL, terminal=terminal)

        hit = self.find_wire_endpoint(x, y, config.endpoint_snap_radius)
        if hit is not None:
            wire, end = hit
            ex, ey = wire.endpoint(end)
            return SnapResult(ex, ey, SnapKind.WIRE_ENDPOINT, wire=wire, end=end)

        gx = snap_to_grid(x, config.grid_size)
        gy = snap_to_grid(y, config.grid_size)

        wire = self.find_wire_at(x, y, config.body_snap_threshold)
        if wire is not None and wire.passes_through(gx, gy):
            return SnapResult(gx, gy, SnapKind.WIRE_BODY, wire=wire)

        return SnapResult(gx, gy, SnapKind.GRID)

    def find_nearest_terminal(self, x: float, y: float, radius: float) -> Terminal | None:
        """Closest terminal strictly within ``radius``."""
        best: Terminal | None = None
        best_dist = radius
        for terminal in self._circuit.all_terminals():
            dist = distance(x, y, terminal.x, terminal.y)
            if dist < best_dist:
                best = terminal
                best_dist = dist
        return best

    def find_wire_endpoint(
        self,
        x: float,
        y: float,
        radius: float | None = None,
        exclude: Wire | None = None,
    ) -> tuple[Wire, int] | None:
        """First wire end within ``radius``, as (wire, end)."""
        if radius is None:
            radius = self._config.endpoint_snap_radius
        for wire in self._circuit.iter_wires():
            if wire is exclude:
                continue
            for end in (1, 2):
                ex, ey = wire.endpoint(end)
                if distance(x, y, ex, ey) < radius:
                    return wire, end
        return None

    def find_wire_at(self, x: float, y: float, threshold: float | None = None) -> Wire | None:
        """Topmost wire whose body passes within ``threshold``."""
        if threshold is None:
            threshold = self._config.wire_hit_threshold
        for wire in reversed(list(self._circuit.iter_wires())):
            if wire.distance_to(x, y) < threshold:
                return wire
        return None

    def find_component_at(self, x: float, y: float) -> Component | None:
        """Topmost component whose padded box contains the point."""
        for comp in reversed(list(self._circuit.iter_components())):
            if comp.contains_point(x, y):
                return comp
        return None
