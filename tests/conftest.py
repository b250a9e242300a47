"""Pytest configuration and fixtures."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from tikzschem.models.symbol import SymbolDefinition, TerminalDef, register_symbol  # noqa: E402

# Small symbols with easy numbers for geometry tests
register_symbol(
    SymbolDefinition(
        key="testBipole",
        name="Test bipole",
        tikz_name="R",
        category="resistors",
        terminals=(TerminalDef(-10, 0, "left"), TerminalDef(10, 0, "right")),
        width=20,
        height=10,
        path_name="R",
    ),
    prefix="T",
)
register_symbol(
    SymbolDefinition(
        key="testProbe",
        name="Test probe",
        tikz_name="circ",
        category="monopoles",
        terminals=(TerminalDef(40, 0, "east"),),
        width=10,
        height=10,
    ),
    prefix="P",
)


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication instance for the entire test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def circuit():
    """Create a test circuit."""
    from tikzschem.models.circuit import Circuit

    return Circuit(name="test_circuit")


@pytest.fixture
def project():
    """Create a test project."""
    from tikzschem.models.project import Project

    return Project(name="test_project")


@pytest.fixture
def command_stack(qapp):
    """Create a command stack for testing."""
    from tikzschem.commands.base import CommandStack

    return CommandStack()


@pytest.fixture
def session(qapp, circuit):
    """Create an editor session over the test circuit."""
    from tikzschem.editor.session import EditorSession

    return EditorSession(circuit)


@pytest.fixture
def add_wire(circuit):
    """Add a wire to the test circuit and return it."""
    from tikzschem.models.wire import CornerMode, Wire

    def _add(x1, y1, x2, y2, mode=CornerMode.HV):
        wire = Wire(x1=x1, y1=y1, x2=x2, y2=y2, corner_mode=mode)
        circuit.add_wire(wire)
        return wire

    return _add
