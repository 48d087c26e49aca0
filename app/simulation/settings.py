"""
simulation/settings.py

Per-run solver configuration. Defaults come from constants.py.
"""

from dataclasses import dataclass, replace

from . import constants


@dataclass(frozen=True)
class SolverSettings:
    max_path_depth: int = constants.MAX_PATH_DEPTH
    default_source_voltage: float = constants.DEFAULT_SOURCE_VOLTAGE
    default_resistance: float = constants.DEFAULT_RESISTANCE
    led_internal_resistance: float = constants.LED_INTERNAL_RESISTANCE
    led_forward_voltage: float = constants.LED_FORWARD_VOLTAGE
    led_max_current_ma: float = constants.LED_MAX_CURRENT_MA
    short_circuit_threshold: float = constants.SHORT_CIRCUIT_THRESHOLD
    min_loop_resistance: float = constants.MIN_LOOP_RESISTANCE

    def with_overrides(self, **overrides) -> "SolverSettings":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


DEFAULT_SETTINGS = SolverSettings()
