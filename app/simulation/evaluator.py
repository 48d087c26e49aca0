"""
simulation/evaluator.py

Ohm's-law evaluation of a single active loop.

Only one loop is evaluated: this is a single-path approximation, not
mesh analysis.
"""

import logging
from dataclasses import dataclass, field

from .results import ComponentStatus
from .settings import DEFAULT_SETTINGS
from .value_parser import parse_value

logger = logging.getLogger(__name__)

# Kinds whose "on" state is visible in the editor (a lit LED, a live source)
GLOWING_KINDS = ("battery", "led")


@dataclass
class PathEvaluation:
    """Electrical quantities of one loop."""

    path: list[str]
    voltage: float
    resistance: float
    current_ma: float
    component_voltages: dict[str, float] = field(default_factory=dict)


def component_resistance(component, settings=DEFAULT_SETTINGS) -> float:
    """Return the series resistance a component adds to a loop."""
    if component.kind == "resistor":
        return parse_value(component.value, settings.default_resistance)
    if component.kind == "led":
        return settings.led_internal_resistance
    return 0.0


def source_voltage(source, settings=DEFAULT_SETTINGS) -> float:
    return parse_value(source.value, settings.default_source_voltage)


def loop_current_ma(voltage, resistance, settings=DEFAULT_SETTINGS) -> float:
    """I = V / R in milliamps.

    A loop below the resistance floor is evaluated at the floor so a short
    reports a large, finite current.
    """
    effective = max(resistance, settings.min_loop_resistance)
    return voltage / effective * 1000.0


def component_voltage(component, current_ma, source_v, settings=DEFAULT_SETTINGS) -> float:
    """Voltage across one component on an energized loop."""
    if component.kind == "resistor":
        return current_ma / 1000.0 * component_resistance(component, settings)
    if component.kind == "led":
        return settings.led_forward_voltage
    if component.is_source:
        return source_v
    return 0.0


def evaluate_path(path, components_by_id, source, settings=DEFAULT_SETTINGS) -> PathEvaluation:
    """
    Compute aggregate resistance, loop current and per-component voltage.

    Args:
        path: loop from find_circuit_paths() (source first)
        components_by_id: dict mapping component id to ComponentData
        source: the battery the loop runs through
        settings: SolverSettings

    Returns:
        PathEvaluation. Ids on the path that are missing from
        components_by_id contribute nothing.
    """
    members = [components_by_id[cid] for cid in path if cid in components_by_id]

    voltage = source_voltage(source, settings)
    resistance = sum(component_resistance(c, settings) for c in members)
    current_ma = loop_current_ma(voltage, resistance, settings)

    voltages = {
        c.component_id: component_voltage(c, current_ma, voltage, settings)
        for c in members
    }

    logger.debug(
        "Loop %s: V=%.3f R=%.3f I=%.3fmA", " -> ".join(path), voltage, resistance, current_ma
    )
    return PathEvaluation(
        path=list(path),
        voltage=voltage,
        resistance=resistance,
        current_ma=current_ma,
        component_voltages=voltages,
    )


def assign_status(component, on_path: bool, flagged: bool) -> ComponentStatus:
    """
    Pick the display status of a component.

    off     - not on the evaluated loop
    warning - on the loop and named by a hazard warning
    on      - on the loop, unflagged, and has a visible on state
    normal  - on the loop, unflagged, everything else
    """
    if not on_path:
        return ComponentStatus.OFF
    if flagged:
        return ComponentStatus.WARNING
    if component.kind in GLOWING_KINDS:
        return ComponentStatus.ON
    return ComponentStatus.NORMAL
