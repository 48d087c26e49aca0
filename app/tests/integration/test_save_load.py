"""
Tests for circuit file round-trips: save, reload, simulate.

Exercises the JSON file format end to end without any GUI dependencies.
"""
import json

import pytest
from controllers.file_controller import FileController
from models.circuit import CircuitModel
from models.component import COMPONENT_KINDS, DEFAULT_VALUES, ComponentData
from simulation import simulate
from tests.conftest import make_component, make_connection


# ── ComponentData round-trip ─────────────────────────────────────────

class TestComponentRoundTrip:

    @pytest.mark.parametrize("kind", COMPONENT_KINDS)
    def test_round_trip_preserves_all_fields(self, kind):
        original = ComponentData(
            component_id='X1',
            kind=kind,
            label='Part',
            value=DEFAULT_VALUES.get(kind, ''),
            closed=(kind == 'switch'),
            position=(42.0, -17.5),
        )
        restored = ComponentData.from_dict(json.loads(json.dumps(original.to_dict())))
        assert restored == original


# ── Full circuit through a file ──────────────────────────────────────

class TestCircuitFileRoundTrip:

    def _build(self):
        model = CircuitModel(name="night light")
        model.add_component(make_component("battery", "B1", "9V"))
        model.add_component(make_component("switch", "S1", closed=True))
        model.add_component(make_component("resistor", "R1", "330Ω"))
        model.add_component(make_component("led", "D1"))
        model.add_component(make_component("capacitor", "C1", "100μF"))
        for i, (a, b) in enumerate([("B1", "S1"), ("S1", "R1"), ("R1", "D1"), ("D1", "B1"), ("R1", "C1")]):
            model.add_connection(make_connection(f"W{i + 1}", a, b))
        return model

    def test_reload_simulates_identically(self, tmp_path):
        model = self._build()
        path = tmp_path / "night_light.json"
        FileController(model).save_circuit(path)

        reloaded = CircuitModel()
        FileController(reloaded).load_circuit(path)

        assert reloaded.to_dict() == model.to_dict()
        assert simulate(*reloaded.snapshot()).to_dict() == simulate(*model.snapshot()).to_dict()

    def test_switch_state_survives(self, tmp_path):
        path = tmp_path / "c.json"
        FileController(self._build()).save_circuit(path)
        reloaded = CircuitModel()
        FileController(reloaded).load_circuit(path)
        assert reloaded.components["S1"].closed is True

    def test_name_survives(self, tmp_path):
        path = tmp_path / "c.json"
        FileController(self._build()).save_circuit(path)
        reloaded = CircuitModel()
        FileController(reloaded).load_circuit(path)
        assert reloaded.name == "night light"

    def test_off_loop_capacitor(self, tmp_path):
        result = simulate(*self._build().snapshot())
        assert result.component("C1").status == "off"
        assert result.connection("W5").active is False
        assert result.total_resistance == pytest.approx(340.0)

    def test_editor_export_loads(self, tmp_path):
        path = tmp_path / "editor.json"
        path.write_text(json.dumps({
            "nodes": [
                {"id": "n1", "type": "battery", "value": "9V", "position": {"x": 0, "y": 0}},
                {"id": "n2", "type": "led", "position": {"x": 50, "y": 0}},
            ],
            "edges": [
                {"id": "e1", "source": "n1", "target": "n2"},
                {"id": "e2", "source": "n2", "target": "n1"},
            ],
        }))
        model = CircuitModel()
        FileController(model).load_circuit(path)
        result = simulate(*model.snapshot())
        assert result.active_path == ["n1", "n2"]
        assert result.has_warning("no-resistor")
