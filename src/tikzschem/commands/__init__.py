"""Command pattern implementation for undo/redo support."""

from tikzschem.commands.base import Command, CommandStack
from tikzschem.commands.component_commands import (
    AddComponentCommand,
    DeleteComponentCommand,
    FlipComponentCommand,
    MoveComponentCommand,
    RotateComponentCommand,
)
from tikzschem.commands.snapshot_command import CircuitEditCommand, SnapshotCommand
from tikzschem.commands.wire_commands import AddWireCommand, DeleteWireCommand

__all__ = [
    "Command",
    "CommandStack",
    "CircuitEditCommand",
    "SnapshotCommand",
    "AddComponentCommand",
    "DeleteComponentCommand",
    "FlipComponentCommand",
    "MoveComponentCommand",
    "RotateComponentCommand",
    "AddWireCommand",
    "DeleteWireCommand",
]
