"""Circuit model containing components and wires."""

import logging
from dataclasses import dataclass, field
from typing import Iterator
from uuid import UUID

from tikzschem.models.component import Component, Terminal
from tikzschem.models.symbol import get_symbol, name_prefix
from tikzschem.models.wire import Wire

logger = logging.getLogger(__name__)


@dataclass
class Circuit:
    """A schematic containing components and wires.

    Both collections preserve insertion order; later entries are drawn on top
    and win hit tests.
    """

    name: str = "untitled"
    components: dict[UUID, Component] = field(default_factory=dict)
    wires: dict[UUID, Wire] = field(default_factory=dict)
    _component_counter: dict[str, int] = field(default_factory=dict)

    def add_component(self, component: Component) -> None:
        """Add a component to the circuit."""
        if not component.name:
            component.name = self.generate_name(component.type)
        self.components[component.id] = component

    def remove_component(self, component_id: UUID) -> Component | None:
        """Remove a component from the circuit."""
        return self.components.pop(component_id, None)

    def get_component(self, component_id: UUID) -> Component | None:
        """Get a component by ID."""
        return self.components.get(component_id)

    def get_component_by_name(self, name: str) -> Component | None:
        """Get a component by name."""
        for comp in self.components.values():
            if comp.name == name:
                return comp
        return None

    def add_wire(self, wire: Wire) -> None:
        """Add a wire to the circuit."""
        self.wires[wire.id] = wire

    def remove_wire(self, wire_id: UUID) -> Wire | None:
        """Remove a wire from the circuit."""
        return self.wires.pop(wire_id, None)

    def get_wire(self, wire_id: UUID) -> Wire | None:
        """Get a wire by ID."""
        return self.wires.get(wire_id)

    def replace_wire(self, wire_id: UUID, replacements: list[Wire]) -> bool:
        """Swap one wire for others; returns False if the wire is gone."""
        if self.wires.pop(wire_id, None) is None:
            return False
        for wire in replacements:
            self.wires[wire.id] = wire
        return True

    def iter_components(self) -> Iterator[Component]:
        """Iterate over all components."""
        yield from self.components.values()

    def iter_wires(self) -> Iterator[Wire]:
        """Iterate over all wires."""
        yield from self.wires.values()

    def all_terminals(self) -> list[Terminal]:
        """Terminals of every component, in component then symbol order."""
        terminals: list[Terminal] = []
        for comp in self.components.values():
            terminals.extend(comp.terminals())
        return terminals

    def generate_name(self, type_key: str) -> str:
        """Generate a unique component name like R1, R2, C1, etc."""
        prefix = name_prefix(type_key)
        self._component_counter[prefix] = self._component_counter.get(prefix, 0) + 1
        return f"{prefix}{self._component_counter[prefix]}"

    def clear(self) -> None:
        """Clear all components and wires."""
        self.components.clear()
        self.wires.clear()
        self._component_counter.clear()

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary."""
        return {
            "name": self.name,
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires.values()],
            "component_counters": dict(self._component_counter),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Circuit":
        """Deserialize circuit from dictionary."""
        circuit = cls(name=data.get("name", "untitled"))
        circuit._component_counter = dict(data.get("component_counters", {}))
        for comp_data in data.get("components", []):
            comp = Component.from_dict(comp_data)
            if get_symbol(comp.type) is None:
                logger.warning(f"Unknown symbol type '{comp.type}' for {comp.name or comp.id}")
            if not comp.name:
                comp.name = circuit.generate_name(comp.type)
            circuit.components[comp.id] = comp
        for wire_data in data.get("wires", []):
            wire = Wire.from_dict(wire_data)
            circuit.wires[wire.id] = wire
        return circuit

    def restore(self, data: dict) -> None:
        """Replace the whole contents in place from a serialized snapshot."""
        restored = Circuit.from_dict(data)
        self.name = restored.name
        self.components = restored.components
        self.wires = restored.wires
        self._component_counter = restored._component_counter
