"""Tests for Circuit model."""

import logging

from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component
from tikzschem.models.wire import CornerMode, Wire


class TestCircuit:
    def test_create_circuit(self):
        circuit = Circuit(name="test")
        assert circuit.name == "test"
        assert len(circuit.components) == 0
        assert len(circuit.wires) == 0

    def test_add_component(self):
        circuit = Circuit()
        comp = Component(type="resistor", name="R1")
        circuit.add_component(comp)

        assert comp.id in circuit.components
        assert circuit.get_component(comp.id) is comp

    def test_auto_name_generation(self):
        circuit = Circuit()

        r1 = Component(type="resistor")
        circuit.add_component(r1)
        assert r1.name == "R1"

        r2 = Component(type="varResistor")
        circuit.add_component(r2)
        assert r2.name == "R2"

        c1 = Component(type="capacitor")
        circuit.add_component(c1)
        assert c1.name == "C1"

        gnd = Component(type="ground")
        circuit.add_component(gnd)
        assert gnd.name == "GND1"

    def test_unknown_type_uses_default_prefix(self):
        circuit = Circuit()
        comp = Component(type="mystery")
        circuit.add_component(comp)
        assert comp.name == "U1"

    def test_get_component_by_name(self):
        circuit = Circuit()
        comp = Component(type="resistor", name="R1")
        circuit.add_component(comp)

        assert circuit.get_component_by_name("R1") is comp
        assert circuit.get_component_by_name("R2") is None

    def test_remove_component(self):
        circuit = Circuit()
        comp = Component(type="resistor", name="R1")
        circuit.add_component(comp)

        removed = circuit.remove_component(comp.id)
        assert removed is comp
        assert comp.id not in circuit.components

    def test_stale_ids_are_noops(self):
        circuit = Circuit()
        wire = Wire(x1=0, y1=0, x2=40, y2=0)

        assert circuit.remove_component(wire.id) is None
        assert circuit.remove_wire(wire.id) is None
        assert circuit.get_wire(wire.id) is None
        assert circuit.replace_wire(wire.id, []) is False

    def test_replace_wire_appends_replacements(self):
        circuit = Circuit()
        a = Wire(x1=0, y1=0, x2=40, y2=0)
        b = Wire(x1=0, y1=40, x2=40, y2=40)
        circuit.add_wire(a)
        circuit.add_wire(b)

        left = Wire(x1=0, y1=0, x2=20, y2=0)
        right = Wire(x1=20, y1=0, x2=40, y2=0)
        assert circuit.replace_wire(a.id, [left, right])

        assert list(circuit.wires) == [b.id, left.id, right.id]

    def test_all_terminals_in_component_order(self):
        circuit = Circuit()
        r = Component(type="resistor", x=100, y=100)
        probe = Component(type="testProbe", x=0, y=0)
        circuit.add_component(r)
        circuit.add_component(probe)

        positions = [t.position for t in circuit.all_terminals()]
        assert positions == [(60, 100), (140, 100), (40, 0)]

    def test_clear(self):
        circuit = Circuit()
        circuit.add_component(Component(type="resistor"))
        circuit.add_wire(Wire(x1=0, y1=0, x2=20, y2=0))

        circuit.clear()

        assert not circuit.components
        assert not circuit.wires
        comp = Component(type="resistor")
        circuit.add_component(comp)
        assert comp.name == "R1"


class TestCircuitSerialization:
    def test_round_trip(self):
        circuit = Circuit(name="amp")
        comp = Component(type="npn", x=40, y=60, rotation=90)
        circuit.add_component(comp)
        wire = Wire(x1=0, y1=0, x2=40, y2=40, corner_mode=CornerMode.VH)
        circuit.add_wire(wire)

        restored = Circuit.from_dict(circuit.to_dict())

        assert restored.name == "amp"
        assert restored.get_component(comp.id).name == comp.name
        assert restored.get_component(comp.id).rotation == 90
        assert restored.get_wire(wire.id) == wire

    def test_name_counters_survive(self):
        circuit = Circuit()
        circuit.add_component(Component(type="resistor"))
        circuit.add_component(Component(type="resistor"))

        restored = Circuit.from_dict(circuit.to_dict())
        comp = Component(type="resistor")
        restored.add_component(comp)

        assert comp.name == "R3"

    def test_smart_bridge_flag_not_persisted(self):
        circuit = Circuit()
        bridge = Wire(x1=0, y1=0, x2=0, y2=0, is_smart_bridge=True)
        circuit.add_wire(bridge)

        data = circuit.to_dict()

        assert "is_smart_bridge" not in data["wires"][0]
        assert Circuit.from_dict(data).get_wire(bridge.id).is_smart_bridge is False

    def test_unknown_symbol_logs_warning(self, caplog):
        data = {
            "name": "old",
            "components": [{"id": "12345678-1234-5678-1234-567812345678", "type": "flux", "x": 0, "y": 0}],
            "wires": [],
        }

        with caplog.at_level(logging.WARNING, logger="tikzschem.models.circuit"):
            circuit = Circuit.from_dict(data)

        assert "flux" in caplog.text
        comp = next(circuit.iter_components())
        assert comp.terminals() == []
        assert comp.name == "U1"

    def test_restore_in_place(self):
        circuit = Circuit()
        circuit.add_wire(Wire(x1=0, y1=0, x2=20, y2=0))
        snapshot = circuit.to_dict()
        circuit.clear()

        circuit.restore(snapshot)

        assert len(circuit.wires) == 1
