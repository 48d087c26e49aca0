"""Tests for the scripting API (app/scripting/)."""

import csv
import json

import pytest
from models.circuit import CircuitModel
from scripting import Circuit, SimulationResult
from simulation import SolverSettings
from simulation.results import ComponentStatus, WarningKind


@pytest.fixture
def led_demo():
    circuit = Circuit()
    circuit.add_component("battery", "9V")
    circuit.add_component("resistor", "220Ω")
    circuit.add_component("led")
    circuit.connect_chain("B1", "R1", "D1")
    return circuit


class TestCircuitCreation:
    def test_empty_circuit(self):
        circuit = Circuit()
        assert len(circuit.components) == 0
        assert len(circuit.connections) == 0

    def test_add_component_returns_id(self):
        assert Circuit().add_component("resistor", "1k") == "R1"

    def test_add_component_default_value(self):
        circuit = Circuit()
        cid = circuit.add_component("resistor")
        assert circuit.components[cid].value == "220Ω"

    def test_add_component_label(self):
        circuit = Circuit()
        cid = circuit.add_component("led", label="Power")
        assert circuit.components[cid].label == "Power"

    def test_add_closed_switch(self):
        circuit = Circuit()
        cid = circuit.add_component("switch", closed=True)
        assert circuit.components[cid].closed is True

    def test_closed_ignored_for_non_switch(self):
        circuit = Circuit()
        cid = circuit.add_component("resistor", closed=True)
        assert circuit.components[cid].closed is False

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown component kind"):
            Circuit().add_component("flux-capacitor")

    def test_alias_kind(self):
        circuit = Circuit()
        cid = circuit.add_component("NOT_GATE")
        assert circuit.components[cid].kind == "not-gate"

    def test_component_kinds(self):
        kinds = Circuit().component_kinds
        assert "battery" in kinds
        assert "led" in kinds

    def test_wraps_existing_model(self):
        model = CircuitModel()
        assert Circuit(model).model is model


class TestEditing:
    def test_connect(self):
        circuit = Circuit()
        circuit.add_component("battery")
        circuit.add_component("resistor")
        assert circuit.connect("B1", "R1") == "W1"

    def test_connect_unknown(self):
        circuit = Circuit()
        circuit.add_component("battery")
        with pytest.raises(ValueError):
            circuit.connect("B1", "R1")

    def test_connect_chain_closes_loop(self, led_demo):
        assert [c.get_endpoints() for c in led_demo.connections] == [
            ("B1", "R1"),
            ("R1", "D1"),
            ("D1", "B1"),
        ]

    def test_remove_component(self, led_demo):
        led_demo.remove_component("R1")
        assert "R1" not in led_demo.components
        assert len(led_demo.connections) == 1

    def test_update_value(self, led_demo):
        led_demo.update_value("R1", "1kΩ")
        assert led_demo.components["R1"].value == "1kΩ"

    def test_set_switch_and_toggle(self):
        circuit = Circuit()
        cid = circuit.add_component("switch")
        circuit.set_switch(cid, True)
        assert circuit.components[cid].closed
        assert circuit.toggle(cid) is False

    def test_switch_operations_reject_other_kinds(self, led_demo):
        with pytest.raises(ValueError):
            led_demo.set_switch("R1", True)
        with pytest.raises(ValueError):
            led_demo.toggle("R1")


class TestSimulation:
    def test_simulate(self, led_demo):
        result = led_demo.simulate()
        assert isinstance(result, SimulationResult)
        assert result.total_current_ma == pytest.approx(39.13, abs=0.01)
        assert result.has_warning(WarningKind.OVERCURRENT)

    def test_fix_by_changing_resistor(self, led_demo):
        led_demo.update_value("R1", "470Ω")
        result = led_demo.simulate()
        assert result.warnings == []
        assert result.component("D1").status == ComponentStatus.ON

    def test_settings(self, led_demo):
        result = led_demo.simulate(SolverSettings(led_max_current_ma=40.0))
        assert result.warnings == []

    def test_switch_controls_loop(self):
        circuit = Circuit()
        for kind in ("battery", "switch", "resistor"):
            circuit.add_component(kind)
        circuit.connect_chain("B1", "S1", "R1")
        assert not circuit.simulate().is_energized
        circuit.toggle("S1")
        assert circuit.simulate().is_energized

    def test_validate(self, led_demo):
        assert led_demo.validate().success
        assert not Circuit().validate().success


class TestPersistence:
    def test_save_and_load(self, tmp_path, led_demo):
        path = tmp_path / "demo.json"
        led_demo.save(path)
        loaded = Circuit.load(path)
        assert list(loaded.components) == ["B1", "R1", "D1"]
        assert loaded.simulate().to_dict() == led_demo.simulate().to_dict()

    def test_saved_file_is_circuit_json(self, tmp_path, led_demo):
        path = tmp_path / "demo.json"
        led_demo.save(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) >= {"components", "connections", "counters"}

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Circuit.load(tmp_path / "nope.json")

    def test_load_invalid(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"foo": 1}')
        with pytest.raises(ValueError):
            Circuit.load(path)

    def test_result_to_csv(self, tmp_path, led_demo):
        path = tmp_path / "result.csv"
        Circuit.result_to_csv(led_demo.simulate(), path)
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert ["Quantity", "Value"] in rows
