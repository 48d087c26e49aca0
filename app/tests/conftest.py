"""
Shared test fixtures for the circuit simulator test suite.

All fixtures build pure-Python model objects (no GUI dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.circuit import CircuitModel
from models.component import ComponentData
from models.connection import ConnectionData


def make_component(kind, component_id, value="", closed=False, label=""):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        kind=kind,
        label=label,
        value=value,
        closed=closed,
    )


def make_connection(connection_id, source_id, target_id):
    """Helper to create a ConnectionData."""
    return ConnectionData(
        connection_id=connection_id,
        source_id=source_id,
        target_id=target_id,
    )


def make_loop(*component_ids, prefix="W"):
    """Connect the ids in order and close the loop back to the first."""
    ids = list(component_ids)
    return [
        make_connection(f"{prefix}{i + 1}", a, b)
        for i, (a, b) in enumerate(zip(ids, ids[1:] + ids[:1]))
    ]


@pytest.fixture
def led_circuit():
    """
    B1 (9V) -- R1 (220Ω) -- D1 -- back to B1

    Loop resistance 230 Ω, current ~39.1 mA: above the LED rating.
    """
    components = [
        make_component("battery", "B1", "9V"),
        make_component("resistor", "R1", "220Ω"),
        make_component("led", "D1"),
    ]
    return components, make_loop("B1", "R1", "D1")


@pytest.fixture
def safe_led_circuit():
    """
    B1 (9V) -- R1 (1kΩ) -- D1 -- back to B1

    Loop resistance 1010 Ω, current ~8.9 mA: within the LED rating.
    """
    components = [
        make_component("battery", "B1", "9V"),
        make_component("resistor", "R1", "1kΩ"),
        make_component("led", "D1"),
    ]
    return components, make_loop("B1", "R1", "D1")


@pytest.fixture
def switched_circuit():
    """
    B1 (9V) -- S1 (open) -- R1 (1kΩ) -- back to B1
    """
    components = [
        make_component("battery", "B1", "9V"),
        make_component("switch", "S1", closed=False),
        make_component("resistor", "R1", "1kΩ"),
    ]
    return components, make_loop("B1", "S1", "R1")


@pytest.fixture
def led_model(led_circuit):
    """The led_circuit fixture as a CircuitModel document."""
    components, connections = led_circuit
    model = CircuitModel()
    for comp in components:
        model.add_component(comp)
    for conn in connections:
        model.add_connection(conn)
    return model
