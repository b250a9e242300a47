"""Commands for component operations."""

from typing import Iterable
from uuid import UUID

from tikzschem.commands.base import Command
from tikzschem.commands.snapshot_command import CircuitEditCommand
from tikzschem.connectivity.propagation import move_component
from tikzschem.connectivity.splice import insert_on_wire
from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component


class AddComponentCommand(CircuitEditCommand):
    """Place a component, splicing it into the wire under its centre."""

    def __init__(self, circuit: Circuit, component: Component, splice: bool = True):
        super().__init__(circuit)
        self._component = component
        self._splice = splice
        self.spliced = False

    @property
    def component_id(self) -> UUID:
        return self._component.id

    def apply(self) -> None:
        self._circuit.add_component(self._component)
        if self._splice:
            self.spliced = insert_on_wire(self._circuit, self._component)

    @property
    def description(self) -> str:
        return f"Add {self._component.name or self._component.type}"


class DeleteComponentCommand(CircuitEditCommand):
    """Remove components, and optionally wires, in one step.

    Attached wires stay where they are.
    """

    def __init__(
        self,
        circuit: Circuit,
        component_ids: Iterable[UUID],
        wire_ids: Iterable[UUID] = (),
    ):
        super().__init__(circuit)
        self._component_ids = list(component_ids)
        self._wire_ids = list(wire_ids)
        self._names: list[str] = []

    def apply(self) -> None:
        for component_id in self._component_ids:
            component = self._circuit.remove_component(component_id)
            if component:
                self._names.append(component.name)
        for wire_id in self._wire_ids:
            self._circuit.remove_wire(wire_id)

    @property
    def description(self) -> str:
        if len(self._names) == 1 and not self._wire_ids:
            return f"Delete {self._names[0]}"
        return "Delete selection"


class MoveComponentCommand(CircuitEditCommand):
    """Move a component to a new position, dragging attached wires along."""

    def __init__(self, circuit: Circuit, component_id: UUID, new_x: float, new_y: float):
        super().__init__(circuit)
        self._component_id = component_id
        self._new_x = new_x
        self._new_y = new_y

    def apply(self) -> None:
        component = self._circuit.get_component(self._component_id)
        if component:
            move_component(
                self._circuit,
                component,
                self._new_x - component.x,
                self._new_y - component.y,
            )

    @property
    def description(self) -> str:
        component = self._circuit.get_component(self._component_id)
        name = component.name if component else str(self._component_id)[:8]
        return f"Move {name}"

    def can_merge(self, other: Command) -> bool:
        """Allow merging consecutive moves of the same component."""
        if isinstance(other, MoveComponentCommand):
            return other._component_id == self._component_id
        return False

    def merge(self, other: Command) -> None:
        """Keep our starting state, take the newer target."""
        if isinstance(other, MoveComponentCommand):
            self._new_x = other._new_x
            self._new_y = other._new_y
            if self.applied:
                self._after = other._after


class RotateComponentCommand(CircuitEditCommand):
    """Rotate components clockwise as seen on screen."""

    def __init__(self, circuit: Circuit, component_ids: Iterable[UUID], degrees: int = 90):
        super().__init__(circuit)
        self._component_ids = list(component_ids)
        self._degrees = degrees

    def apply(self) -> None:
        for component_id in self._component_ids:
            component = self._circuit.get_component(component_id)
            if component:
                component.rotate(self._degrees)

    @property
    def description(self) -> str:
        return "Rotate"


class FlipComponentCommand(CircuitEditCommand):
    """Mirror components along ``"x"`` (horizontal flip) or ``"y"``."""

    def __init__(self, circuit: Circuit, component_ids: Iterable[UUID], axis: str = "x"):
        if axis not in ("x", "y"):
            raise ValueError(f"Unknown flip axis: {axis!r}")
        super().__init__(circuit)
        self._component_ids = list(component_ids)
        self._axis = axis

    def apply(self) -> None:
        for component_id in self._component_ids:
            component = self._circuit.get_component(component_id)
            if component is None:
                continue
            if self._axis == "x":
                component.flip_horizontal()
            else:
                component.flip_vertical()

    @property
    def description(self) -> str:
        return "Flip horizontal" if self._axis == "x" else "Flip vertical"
