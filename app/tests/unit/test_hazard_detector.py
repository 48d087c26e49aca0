"""Tests for simulation/hazard_detector.py."""

from simulation.evaluator import evaluate_path
from simulation.hazard_detector import (
    detect_hazards,
    flagged_ids,
    no_source_warning,
    open_circuit_warning,
)
from simulation.results import Severity, WarningKind
from simulation.settings import SolverSettings
from tests.conftest import make_component


def _hazards(components, settings=None):
    by_id = {c.component_id: c for c in components}
    path = [c.component_id for c in components]
    settings = settings or SolverSettings()
    evaluation = evaluate_path(path, by_id, components[0], settings)
    return detect_hazards(path, by_id, evaluation, settings)


class TestTerminalWarnings:
    def test_no_source(self):
        warning = no_source_warning()
        assert warning.kind == WarningKind.NO_SOURCE
        assert warning.severity == Severity.WARNING
        assert warning.affected_ids == []

    def test_open_circuit_names_source(self):
        warning = open_circuit_warning("B1")
        assert warning.kind == WarningKind.OPEN_CIRCUIT
        assert warning.affected_ids == ["B1"]


class TestDetectHazards:
    def test_safe_loop(self):
        components = [
            make_component("battery", "B1", "9V"),
            make_component("resistor", "R1", "1kΩ"),
            make_component("led", "D1"),
        ]
        assert _hazards(components) == []

    def test_overcurrent(self):
        components = [
            make_component("battery", "B1", "9V"),
            make_component("resistor", "R1", "220Ω"),
            make_component("led", "D1"),
        ]
        warnings = _hazards(components)
        assert [w.kind for w in warnings] == [WarningKind.OVERCURRENT]
        assert warnings[0].severity == Severity.WARNING
        assert warnings[0].affected_ids == ["D1"]
        assert "39.1 mA" in warnings[0].message
        assert "20 mA" in warnings[0].message

    def test_overcurrent_threshold_from_settings(self):
        components = [
            make_component("battery", "B1", "9V"),
            make_component("resistor", "R1", "220Ω"),
            make_component("led", "D1"),
        ]
        assert _hazards(components, SolverSettings(led_max_current_ma=50.0)) == []

    def test_led_without_resistor(self):
        components = [make_component("battery", "B1", "9V"), make_component("led", "D1")]
        kinds = [w.kind for w in _hazards(components)]
        assert kinds == [WarningKind.NO_RESISTOR, WarningKind.OVERCURRENT]

    def test_no_resistor_is_danger(self):
        components = [make_component("battery", "B1", "3V"), make_component("led", "D1")]
        warnings = _hazards(components, SolverSettings(led_max_current_ma=1000.0))
        assert len(warnings) == 1
        assert warnings[0].severity == Severity.DANGER
        assert warnings[0].affected_ids == ["D1"]

    def test_short_circuit_names_whole_loop(self):
        components = [
            make_component("battery", "B1", "9V"),
            make_component("switch", "S1", closed=True),
            make_component("resistor", "R1", "0.5Ω"),
        ]
        warnings = _hazards(components)
        assert [w.kind for w in warnings] == [WarningKind.SHORT_CIRCUIT]
        assert warnings[0].severity == Severity.DANGER
        assert warnings[0].affected_ids == ["B1", "S1", "R1"]

    def test_resistance_at_threshold_is_not_a_short(self):
        components = [make_component("battery", "B1", "1mV"), make_component("resistor", "R1", "1Ω")]
        assert _hazards(components) == []

    def test_multiple_leds_all_named(self):
        components = [
            make_component("battery", "B1", "9V"),
            make_component("led", "D1"),
            make_component("led", "D2"),
        ]
        warnings = _hazards(components)
        assert all(w.affected_ids == ["D1", "D2"] for w in warnings)


class TestFlaggedIds:
    def test_union(self):
        warnings = [open_circuit_warning("B1"), no_source_warning()]
        assert flagged_ids(warnings) == {"B1"}
