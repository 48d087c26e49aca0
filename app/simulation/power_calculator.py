"""
simulation/power_calculator.py

Calculates per-component power from the solver's voltages and currents.
"""

import logging

logger = logging.getLogger(__name__)


def calculate_power(component_results):
    """Calculate power for each component on the energized loop.

    Args:
        component_results: list of ComponentResult with voltage and
            current_ma already filled in

    Returns:
        dict mapping component_id to power in milliwatts (float).
        Positive = dissipating, negative = supplying (the battery).
        Components carrying no current are omitted.
    """
    power = {}
    for result in component_results:
        if result.current_ma == 0:
            continue
        p = result.voltage * result.current_ma
        if result.kind == "battery":
            p = -p
        power[result.component_id] = p
    logger.debug("Computed power for %d component(s)", len(power))
    return power


def supplied_power(voltage, current_ma):
    """Power delivered by the source in milliwatts (P = V * I)."""
    return voltage * current_ma


def total_power(power_dict):
    """Sum of all component powers in milliwatts."""
    return sum(power_dict.values())
