"""Tests for wire merging, pruning and splitting."""

from tikzschem.connectivity.canonical import (
    cleanup_wires,
    merge_wires,
    shared_endpoint,
    split_wire_at_point,
)
from tikzschem.models.component import Component
from tikzschem.models.wire import CornerMode, Wire


def _shapes(circuit):
    return sorted((w.x1, w.y1, w.x2, w.y2, w.corner_mode.value) for w in circuit.iter_wires())


class TestMergeWires:
    def test_collinear(self):
        w1 = Wire(x1=0, y1=0, x2=40, y2=0)
        w2 = Wire(x1=40, y1=0, x2=80, y2=0)

        merged = merge_wires(w1, w2)

        assert merged.id == w1.id
        assert (merged.start_point, merged.end_point) == ((0, 0), (80, 0))

    def test_collinear_reversed(self):
        w1 = Wire(x1=40, y1=0, x2=0, y2=0)
        w2 = Wire(x1=80, y1=0, x2=40, y2=0)

        merged = merge_wires(w1, w2)

        assert (merged.start_point, merged.end_point) == ((0, 0), (80, 0))

    def test_straight_into_bent_start(self):
        w1 = Wire(x1=0, y1=0, x2=40, y2=0)
        w2 = Wire(x1=40, y1=0, x2=80, y2=40, corner_mode=CornerMode.HV)

        merged = merge_wires(w1, w2)

        assert (merged.start_point, merged.end_point) == ((0, 0), (80, 40))
        assert merged.corner_mode is CornerMode.HV

    def test_corner_from_two_straights(self):
        w1 = Wire(x1=0, y1=40, x2=0, y2=0)
        w2 = Wire(x1=0, y1=0, x2=40, y2=0)

        merged = merge_wires(w1, w2)

        assert (merged.start_point, merged.end_point) == ((0, 40), (40, 0))
        assert merged.corner == (0, 0)

    def test_bent_end_cannot_merge(self):
        w1 = Wire(x1=0, y1=0, x2=40, y2=40, corner_mode=CornerMode.HV)
        w2 = Wire(x1=40, y1=40, x2=80, y2=40)

        assert merge_wires(w1, w2) is None

    def test_shared_endpoint(self):
        w1 = Wire(x1=0, y1=0, x2=40, y2=0)
        assert shared_endpoint(w1, Wire(x1=40.5, y1=0, x2=40, y2=40)) == (40, 0)
        assert shared_endpoint(w1, Wire(x1=100, y1=0, x2=140, y2=0)) is None


class TestCleanup:
    def test_merges_collinear_pair(self, circuit, add_wire):
        first = add_wire(0, 0, 40, 0)
        add_wire(40, 0, 80, 0)

        assert cleanup_wires(circuit) == 1

        assert list(circuit.wires) == [first.id]
        assert _shapes(circuit) == [(0, 0, 80, 0, "hv")]

    def test_is_idempotent(self, circuit, add_wire):
        add_wire(0, 0, 40, 0)
        add_wire(40, 0, 40, 40)
        add_wire(40, 40, 80, 40)
        cleanup_wires(circuit)
        before = _shapes(circuit)

        assert cleanup_wires(circuit) == 0
        assert _shapes(circuit) == before

    def test_chain_collapses_repeatedly(self, circuit, add_wire):
        add_wire(0, 0, 20, 0)
        add_wire(20, 0, 40, 0)
        add_wire(40, 0, 60, 0)

        assert cleanup_wires(circuit) == 2
        assert _shapes(circuit) == [(0, 0, 60, 0, "hv")]

    def test_drops_zero_length(self, circuit, add_wire):
        add_wire(10, 10, 10, 10)
        add_wire(10, 10, 11, 11)
        keep = add_wire(0, 100, 40, 100)

        cleanup_wires(circuit)

        assert list(circuit.wires) == [keep.id]

    def test_junction_blocks_merge(self, circuit, add_wire):
        add_wire(0, 0, 40, 0)
        add_wire(40, 0, 80, 0)
        add_wire(40, 0, 40, 40)

        assert cleanup_wires(circuit) == 0
        assert len(circuit.wires) == 3

    def test_terminal_blocks_merge(self, circuit, add_wire):
        circuit.add_component(Component(type="resistor", x=100, y=0))
        add_wire(0, 0, 60, 0)
        add_wire(60, 0, 60, 40)

        assert cleanup_wires(circuit) == 0

    def test_tap_on_body_blocks_merge(self, circuit, add_wire):
        add_wire(0, 0, 40, 0)
        add_wire(40, 0, 80, 0)
        add_wire(40, -40, 40, 40)  # passes through the shared point

        assert cleanup_wires(circuit) == 0


class TestSplit:
    def test_split_straight(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 0)

        first, second = split_wire_at_point(circuit, wire, 40, 0)

        assert wire.id not in circuit.wires
        assert (first.start_point, first.end_point) == ((0, 0), (40, 0))
        assert (second.start_point, second.end_point) == ((40, 0), (80, 0))

    def test_split_keeps_bend_geometry(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 40, CornerMode.HV)

        first, second = split_wire_at_point(circuit, wire, 80, 20)

        assert first.corner == (80, 0)
        assert second.is_vertical
        assert first.corner_mode is second.corner_mode is CornerMode.HV

    def test_split_then_cleanup_restores_shape(self, circuit, add_wire):
        wire = add_wire(0, 0, 80, 0)

        split_wire_at_point(circuit, wire, 40, 0)
        cleanup_wires(circuit)

        assert _shapes(circuit) == [(0, 0, 80, 0, "hv")]

    def test_stale_wire(self, circuit):
        assert split_wire_at_point(circuit, Wire(x1=0, y1=0, x2=40, y2=0), 20, 0) is None
