"""Tests for CircuitModel central data store."""

from models.circuit import CircuitModel
from models.ids import UuidIdGenerator
from tests.conftest import make_component, make_connection


def _model_with_loop():
    model = CircuitModel()
    model.add_component(make_component("battery", "B1", "9V"))
    model.add_component(make_component("resistor", "R1", "1k"))
    model.add_connection(make_connection("W1", "B1", "R1"))
    model.add_connection(make_connection("W2", "R1", "B1"))
    return model


class TestAddRemoveComponents:
    def test_add_component(self):
        model = CircuitModel()
        r1 = make_component("resistor", "R1", "1k")
        model.add_component(r1)
        assert model.components["R1"] is r1

    def test_insertion_order_kept(self):
        model = CircuitModel()
        for cid in ("R2", "B1", "R1"):
            model.add_component(make_component("resistor", cid))
        assert list(model.components) == ["R2", "B1", "R1"]

    def test_remove_component_returns_attached_connections(self):
        model = _model_with_loop()
        model.add_component(make_component("led", "D1"))
        model.add_connection(make_connection("W3", "D1", "B1"))
        removed = model.remove_component("R1")
        assert [c.connection_id for c in removed] == ["W1", "W2"]
        assert [c.connection_id for c in model.connections] == ["W3"]
        assert "R1" not in model.components

    def test_remove_missing_component(self):
        assert CircuitModel().remove_component("nope") == []


class TestIds:
    def test_new_ids_skip_existing(self):
        model = CircuitModel()
        model.add_component(make_component("resistor", "R1"))
        model.add_component(make_component("resistor", "R2"))
        assert model.new_component_id("R") == "R3"

    def test_new_connection_id(self):
        model = _model_with_loop()
        assert model.new_connection_id() == "W3"

    def test_independent_documents(self):
        a, b = CircuitModel(), CircuitModel()
        a.new_component_id("R")
        a.new_component_id("R")
        assert b.new_component_id("R") == "R1"

    def test_uuid_generator(self):
        model = CircuitModel(id_generator=UuidIdGenerator())
        new_id = model.new_component_id("R")
        assert new_id.startswith("R-")
        assert model.new_component_id("R") != new_id


class TestSwitches:
    def test_set_switch(self):
        model = CircuitModel()
        model.add_component(make_component("switch", "S1"))
        assert model.set_switch("S1", True)
        assert model.components["S1"].closed is True

    def test_set_switch_rejects_other_kinds(self):
        model = _model_with_loop()
        assert model.set_switch("R1", True) is False
        assert model.set_switch("missing", True) is False


class TestConnections:
    def test_remove_connection(self):
        model = _model_with_loop()
        removed = model.remove_connection("W1")
        assert removed.connection_id == "W1"
        assert [c.connection_id for c in model.connections] == ["W2"]

    def test_remove_missing_connection(self):
        assert _model_with_loop().remove_connection("W9") is None

    def test_find_connections(self):
        model = _model_with_loop()
        assert len(model.find_connections("B1")) == 2
        assert model.find_connections("X") == []


class TestClearAndSnapshot:
    def test_clear(self):
        model = _model_with_loop()
        model.name = "demo"
        model.clear()
        assert model.components == {}
        assert model.connections == []
        assert model.name == ""
        assert model.new_component_id("R") == "R1"

    def test_snapshot_is_a_copy(self):
        model = _model_with_loop()
        components, connections = model.snapshot()
        components[1].value = "5k"
        connections.pop()
        assert model.components["R1"].value == "1k"
        assert len(model.connections) == 2

    def test_snapshot_order(self):
        components, connections = _model_with_loop().snapshot()
        assert [c.component_id for c in components] == ["B1", "R1"]
        assert [c.connection_id for c in connections] == ["W1", "W2"]


class TestSerialization:
    def test_to_dict(self):
        data = _model_with_loop().to_dict()
        assert [c["id"] for c in data["components"]] == ["B1", "R1"]
        assert data["connections"][0] == {"id": "W1", "source": "B1", "target": "R1"}
        assert data["counters"] == {"B": 1, "R": 1, "W": 2}
        assert "name" not in data

    def test_from_dict_round_trip(self):
        model = _model_with_loop()
        model.name = "demo"
        restored = CircuitModel.from_dict(model.to_dict())
        assert restored.to_dict() == model.to_dict()

    def test_from_dict_editor_aliases(self):
        data = {
            "nodes": [
                {"id": "b", "type": "battery", "value": "9V"},
                {"id": "s", "type": "switch", "isOn": True},
            ],
            "edges": [{"id": "e1", "sourceId": "b", "targetId": "s"}],
        }
        model = CircuitModel.from_dict(data)
        assert model.components["s"].closed is True
        assert model.connections[0].source_id == "b"

    def test_counters_restored(self):
        data = _model_with_loop().to_dict()
        data["counters"]["R"] = 7
        assert CircuitModel.from_dict(data).new_component_id("R") == "R8"

    def test_missing_counters_rebuilt_from_ids(self):
        data = _model_with_loop().to_dict()
        del data["counters"]
        model = CircuitModel.from_dict(data)
        assert model.new_component_id("R") == "R2"
        assert model.new_connection_id() == "W3"
