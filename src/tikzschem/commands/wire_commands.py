"""Commands for wire operations."""

from typing import Iterable
from uuid import UUID

from tikzschem.commands.snapshot_command import CircuitEditCommand
from tikzschem.models.circuit import Circuit
from tikzschem.models.wire import Wire


class AddWireCommand(CircuitEditCommand):
    """Add a wire; it may be merged into its neighbours afterwards."""

    def __init__(self, circuit: Circuit, wire: Wire):
        super().__init__(circuit)
        self._wire = wire

    def apply(self) -> None:
        self._circuit.add_wire(self._wire)

    @property
    def description(self) -> str:
        return "Add wire"


class DeleteWireCommand(CircuitEditCommand):
    """Remove one or more wires."""

    def __init__(self, circuit: Circuit, wire_ids: Iterable[UUID]):
        super().__init__(circuit)
        self._wire_ids = list(wire_ids)

    def apply(self) -> None:
        for wire_id in self._wire_ids:
            self._circuit.remove_wire(wire_id)

    @property
    def description(self) -> str:
        return "Delete wire" if len(self._wire_ids) == 1 else "Delete wires"
