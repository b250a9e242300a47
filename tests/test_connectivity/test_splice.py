"""Tests for dropping components onto wires."""

from tikzschem.connectivity.splice import insert_on_wire
from tikzschem.models.component import Component


def _place(circuit, type_key="testBipole", **fields):
    comp = Component(type=type_key, **fields)
    circuit.add_component(comp)
    return comp


def _ends(circuit):
    return [(w.start_point, w.end_point) for w in circuit.iter_wires()]


class TestInsertOnWire:
    def test_splits_horizontal_wire(self, circuit, add_wire):
        add_wire(0, 0, 80, 0)
        comp = _place(circuit, x=40, y=0)

        assert insert_on_wire(circuit, comp)
        assert _ends(circuit) == [((0, 0), (30, 0)), ((50, 0), (80, 0))]

    def test_pairs_nearest_ends(self, circuit, add_wire):
        add_wire(80, 0, 0, 0)
        comp = _place(circuit, x=40, y=0)

        assert insert_on_wire(circuit, comp)
        assert _ends(circuit) == [((0, 0), (30, 0)), ((50, 0), (80, 0))]

    def test_vertical_component_on_vertical_wire(self, circuit, add_wire):
        add_wire(0, 0, 0, 80)
        comp = _place(circuit, x=0, y=40, rotation=90)

        assert insert_on_wire(circuit, comp)
        spans = sorted(tuple(sorted(pair)) for pair in _ends(circuit))
        assert spans == [((0, 0), (0, 30)), ((0, 50), (0, 80))]

    def test_orientation_mismatch(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 0)
        comp = _place(circuit, x=40, y=0, rotation=90)

        assert not insert_on_wire(circuit, comp)
        assert list(circuit.iter_wires()) == [wire]

    def test_needs_two_terminals(self, circuit, add_wire):
        add_wire(0, 0, 80, 0)
        comp = _place(circuit, "testProbe", x=40, y=0)

        assert not insert_on_wire(circuit, comp)
        assert len(circuit.wires) == 1

    def test_no_wire_nearby(self, circuit, add_wire):
        add_wire(0, 0, 80, 0)
        comp = _place(circuit, x=40, y=40)

        assert not insert_on_wire(circuit, comp)
