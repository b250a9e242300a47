"""Commands that record whole-circuit snapshots."""

from abc import abstractmethod

from tikzschem.commands.base import Command
from tikzschem.connectivity.canonical import cleanup_wires
from tikzschem.models.circuit import Circuit


class SnapshotCommand(Command):
    """Swap between two serialized circuit states.

    Used for edits that were applied live, such as a finished drag: the
    session captures the state before and after and records this command
    without executing it.
    """

    def __init__(self, circuit: Circuit, before: dict, after: dict, description: str):
        self._circuit = circuit
        self._before = before
        self._after = after
        self._description = description

    def execute(self) -> None:
        self._circuit.restore(self._after)
        cleanup_wires(self._circuit)

    def undo(self) -> None:
        self._circuit.restore(self._before)
        cleanup_wires(self._circuit)

    @property
    def description(self) -> str:
        return self._description


class CircuitEditCommand(Command):
    """Base for edits computed once and replayed from snapshots.

    The first ``execute`` runs ``apply`` and canonicalizes the wires; redo
    restores the resulting snapshot so splices and merges replay exactly.
    """

    def __init__(self, circuit: Circuit):
        self._circuit = circuit
        self._before: dict | None = None
        self._after: dict | None = None

    @abstractmethod
    def apply(self) -> None:
        """Perform the edit on the live circuit."""
        pass

    @property
    def applied(self) -> bool:
        return self._after is not None

    def execute(self) -> None:
        if self._after is not None:
            self._circuit.restore(self._after)
            return
        self._before = self._circuit.to_dict()
        self.apply()
        cleanup_wires(self._circuit)
        self._after = self._circuit.to_dict()

    def undo(self) -> None:
        if self._before is not None:
            self._circuit.restore(self._before)
