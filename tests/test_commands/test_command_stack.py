"""Tests for command system."""

import pytest

from tikzschem.commands.base import Command, CommandStack
from tikzschem.commands.component_commands import (
    AddComponentCommand,
    DeleteComponentCommand,
    FlipComponentCommand,
    MoveComponentCommand,
    RotateComponentCommand,
)
from tikzschem.commands.snapshot_command import SnapshotCommand
from tikzschem.commands.wire_commands import AddWireCommand, DeleteWireCommand
from tikzschem.models.component import Component
from tikzschem.models.wire import Wire


class SimpleCommand(Command):
    """Simple test command that tracks execution."""

    def __init__(self, name: str = "test"):
        self._name = name
        self.executed = False
        self.undone = False

    def execute(self) -> None:
        self.executed = True
        self.undone = False

    def undo(self) -> None:
        self.undone = True
        self.executed = False

    @property
    def description(self) -> str:
        return self._name


class TestCommandStack:
    def test_execute_command(self, command_stack):
        cmd = SimpleCommand()
        command_stack.execute(cmd)

        assert cmd.executed
        assert command_stack.can_undo
        assert not command_stack.can_redo

    def test_push_does_not_execute(self, command_stack):
        cmd = SimpleCommand()
        command_stack.push(cmd)

        assert not cmd.executed
        assert command_stack.undo_count == 1

    def test_undo(self, command_stack):
        cmd = SimpleCommand()
        command_stack.execute(cmd)

        assert command_stack.undo() is cmd
        assert cmd.undone
        assert not command_stack.can_undo
        assert command_stack.can_redo

    def test_undo_redo_on_empty_history(self, command_stack):
        assert command_stack.undo() is None
        assert command_stack.redo() is None

    def test_redo(self, command_stack):
        cmd = SimpleCommand()
        command_stack.execute(cmd)
        command_stack.undo()

        assert command_stack.redo() is cmd
        assert cmd.executed
        assert command_stack.can_undo
        assert not command_stack.can_redo

    def test_redo_cleared_on_new_command(self, command_stack):
        command_stack.execute(SimpleCommand("cmd1"))
        command_stack.undo()
        command_stack.execute(SimpleCommand("cmd2"))

        assert not command_stack.can_redo

    def test_history_is_bounded(self, qapp):
        stack = CommandStack(max_size=3)
        commands = [SimpleCommand(str(i)) for i in range(5)]
        for cmd in commands:
            stack.execute(cmd)

        assert stack.undo_count == 3
        assert stack.max_size == 3
        assert stack.undo_text == "Undo 4"
        for _ in range(3):
            stack.undo()
        assert not stack.can_undo
        assert not commands[1].undone

    def test_undo_text(self, command_stack):
        command_stack.execute(SimpleCommand("Add R1"))

        assert command_stack.undo_text == "Undo Add R1"
        command_stack.undo()
        assert command_stack.undo_text == "Undo"
        assert command_stack.redo_text == "Redo Add R1"

    def test_clean_state(self, command_stack):
        assert command_stack.is_clean

        command_stack.execute(SimpleCommand())
        assert not command_stack.is_clean

        command_stack.set_clean()
        assert command_stack.is_clean

        command_stack.undo()
        assert not command_stack.is_clean

    def test_clean_point_lost_with_redo_branch(self, command_stack):
        command_stack.execute(SimpleCommand())
        command_stack.set_clean()
        command_stack.undo()
        command_stack.execute(SimpleCommand())

        assert not command_stack.is_clean
        command_stack.undo()
        assert not command_stack.is_clean

    def test_clear(self, command_stack):
        command_stack.execute(SimpleCommand())
        command_stack.execute(SimpleCommand())
        command_stack.undo()

        command_stack.clear()

        assert not command_stack.can_undo
        assert not command_stack.can_redo

    def test_signals_and_callbacks(self, command_stack):
        seen = []
        calls = []
        command_stack.can_undo_changed.connect(lambda value: seen.append(value))
        command_stack.add_change_callback(lambda: calls.append(1))

        command_stack.execute(SimpleCommand())
        command_stack.undo()

        assert seen == [True, False]
        assert len(calls) == 2


class TestAddComponentCommand:
    def test_execute_add(self, circuit):
        comp = Component(type="resistor", name="R1")
        cmd = AddComponentCommand(circuit, comp)
        cmd.execute()

        assert comp.id in circuit.components
        assert circuit.get_component_by_name("R1") is comp
        assert not cmd.spliced

    def test_undo_and_redo_add(self, circuit):
        comp = Component(type="resistor", name="R1")
        cmd = AddComponentCommand(circuit, comp)
        cmd.execute()
        cmd.undo()

        assert comp.id not in circuit.components

        cmd.execute()
        assert circuit.get_component(comp.id).name == "R1"

    def test_add_splices_into_wire(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 0)
        comp = Component(type="testBipole", x=40, y=0)
        cmd = AddComponentCommand(circuit, comp)
        cmd.execute()

        assert cmd.spliced
        assert wire.id not in circuit.wires
        assert len(circuit.wires) == 2

        cmd.undo()
        assert list(circuit.wires) == [wire.id]
        assert not circuit.components

    def test_splice_can_be_disabled(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 0)
        AddComponentCommand(circuit, Component(type="testBipole", x=40, y=0), splice=False).execute()

        assert list(circuit.wires) == [wire.id]


class TestDeleteComponentCommand:
    def test_execute_delete(self, circuit):
        comp = Component(type="resistor", name="R1")
        circuit.add_component(comp)

        cmd = DeleteComponentCommand(circuit, [comp.id])
        cmd.execute()

        assert comp.id not in circuit.components
        assert cmd.description == "Delete R1"

    def test_undo_delete(self, circuit):
        comp = Component(type="resistor", name="R1")
        circuit.add_component(comp)

        cmd = DeleteComponentCommand(circuit, [comp.id])
        cmd.execute()
        cmd.undo()

        assert comp.id in circuit.components

    def test_delete_with_wires_leaves_attached_wires(self, circuit, add_wire):
        comp = Component(type="resistor", x=100, y=100)
        circuit.add_component(comp)
        attached = add_wire(140, 100, 200, 100)
        doomed = add_wire(0, 0, 0, 40)

        cmd = DeleteComponentCommand(circuit, [comp.id], [doomed.id])
        cmd.execute()

        assert list(circuit.wires) == [attached.id]
        assert cmd.description == "Delete selection"


class TestMoveComponentCommand:
    def test_execute_move(self, circuit):
        comp = Component(type="resistor", name="R1", x=0, y=0)
        circuit.add_component(comp)

        cmd = MoveComponentCommand(circuit, comp.id, 100, 200)
        cmd.execute()

        assert comp.x == 100
        assert comp.y == 200

    def test_undo_move(self, circuit):
        comp = Component(type="resistor", name="R1", x=50, y=75)
        circuit.add_component(comp)

        cmd = MoveComponentCommand(circuit, comp.id, 100, 200)
        cmd.execute()
        cmd.undo()

        restored = circuit.get_component(comp.id)
        assert (restored.x, restored.y) == (50, 75)

    def test_move_drags_wires(self, circuit, add_wire):
        comp = Component(type="resistor", x=100, y=100)
        circuit.add_component(comp)
        wire = add_wire(140, 100, 200, 100)

        MoveComponentCommand(circuit, comp.id, 100, 140).execute()

        assert circuit.get_wire(wire.id).start_point == (140, 140)

    def test_merge_moves(self, circuit):
        comp = Component(type="resistor", name="R1", x=0, y=0)
        circuit.add_component(comp)

        cmd1 = MoveComponentCommand(circuit, comp.id, 50, 50)
        cmd2 = MoveComponentCommand(circuit, comp.id, 100, 100)

        assert cmd1.can_merge(cmd2)
        cmd1.merge(cmd2)
        cmd1.execute()

        assert comp.x == 100
        assert comp.y == 100

    def test_stack_merges_consecutive_moves(self, command_stack, circuit):
        comp = Component(type="resistor", x=0, y=0)
        circuit.add_component(comp)

        command_stack.execute(MoveComponentCommand(circuit, comp.id, 20, 0))
        command_stack.execute(MoveComponentCommand(circuit, comp.id, 40, 0))

        assert command_stack.undo_count == 1
        command_stack.undo()
        assert circuit.get_component(comp.id).x == 0
        command_stack.redo()
        assert circuit.get_component(comp.id).x == 40

    def test_different_components_do_not_merge(self, circuit):
        cmd1 = MoveComponentCommand(circuit, Component().id, 0, 0)
        cmd2 = MoveComponentCommand(circuit, Component().id, 0, 0)
        assert not cmd1.can_merge(cmd2)


class TestRotateAndFlip:
    def test_rotate_all_selected_in_one_step(self, circuit):
        a = Component(type="resistor")
        b = Component(type="resistor", x=200)
        circuit.add_component(a)
        circuit.add_component(b)

        cmd = RotateComponentCommand(circuit, [a.id, b.id])
        cmd.execute()

        assert a.rotation == b.rotation == 270
        cmd.undo()
        assert circuit.get_component(a.id).rotation == 0

    def test_flip(self, circuit):
        comp = Component(type="npn")
        circuit.add_component(comp)

        FlipComponentCommand(circuit, [comp.id], axis="y").execute()

        assert comp.flipped_y
        assert not comp.flipped_x

    def test_flip_rejects_unknown_axis(self, circuit):
        with pytest.raises(ValueError):
            FlipComponentCommand(circuit, [], axis="z")


class TestWireCommands:
    def test_add_wire_merges_with_neighbour(self, circuit, add_wire):
        first = add_wire(0, 0, 40, 0)

        cmd = AddWireCommand(circuit, Wire(x1=40, y1=0, x2=80, y2=0))
        cmd.execute()

        assert list(circuit.wires) == [first.id]
        assert circuit.get_wire(first.id).end_point == (80, 0)

        cmd.undo()
        assert circuit.get_wire(first.id).end_point == (40, 0)

    def test_delete_wires(self, circuit, add_wire):
        a = add_wire(0, 0, 40, 0)
        b = add_wire(0, 40, 40, 40)

        cmd = DeleteWireCommand(circuit, [a.id, b.id])
        cmd.execute()

        assert not circuit.wires
        assert cmd.description == "Delete wires"
        cmd.undo()
        assert list(circuit.wires) == [a.id, b.id]


class TestSnapshotCommand:
    def test_swaps_states(self, circuit, add_wire):
        wire = add_wire(0, 0, 40, 0)
        before = circuit.to_dict()
        wire.set_endpoint(2, 80, 0)
        after = circuit.to_dict()

        cmd = SnapshotCommand(circuit, before, after, "Move wire")
        cmd.undo()
        assert circuit.get_wire(wire.id).end_point == (40, 0)

        cmd.execute()
        assert circuit.get_wire(wire.id).end_point == (80, 0)
        assert cmd.description == "Move wire"
