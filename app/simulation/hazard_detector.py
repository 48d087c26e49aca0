"""
simulation/hazard_detector.py

Hazard checks for the evaluated loop, plus the warnings for the
terminal topologies (no source, open circuit).
"""

from .results import Severity, SimulationWarning, WarningKind
from .settings import DEFAULT_SETTINGS


def no_source_warning() -> SimulationWarning:
    return SimulationWarning(
        kind=WarningKind.NO_SOURCE,
        severity=Severity.WARNING,
        message="No power source found. Add a battery to the circuit.",
        affected_ids=[],
    )


def open_circuit_warning(source_id: str) -> SimulationWarning:
    return SimulationWarning(
        kind=WarningKind.OPEN_CIRCUIT,
        severity=Severity.WARNING,
        message="Open circuit: the battery is not part of a closed loop.",
        affected_ids=[source_id],
    )


def detect_hazards(path, components_by_id, evaluation, settings=DEFAULT_SETTINGS):
    """
    Check an energized loop for hazards.

    The checks are independent; any combination may be reported.

    Args:
        path: the evaluated loop (source first)
        components_by_id: dict mapping component id to ComponentData
        evaluation: PathEvaluation for the loop
        settings: SolverSettings

    Returns:
        list[SimulationWarning] in order: short circuit, missing
        current-limiting resistor, overcurrent.
    """
    warnings = []
    members = [components_by_id[cid] for cid in path if cid in components_by_id]
    led_ids = [c.component_id for c in members if c.kind == "led"]
    has_resistor = any(c.kind == "resistor" for c in members)

    # 1. Short circuit: almost nothing limits the current
    if evaluation.resistance < settings.short_circuit_threshold:
        warnings.append(SimulationWarning(
            kind=WarningKind.SHORT_CIRCUIT,
            severity=Severity.DANGER,
            message=(
                f"Short circuit detected! Loop resistance is "
                f"{evaluation.resistance:.2f} Ω."
            ),
            affected_ids=list(path),
        ))

    # 2. LED without a current-limiting resistor
    if led_ids and not has_resistor:
        warnings.append(SimulationWarning(
            kind=WarningKind.NO_RESISTOR,
            severity=Severity.DANGER,
            message="LED may burn out! Add a current-limiting resistor in series.",
            affected_ids=list(led_ids),
        ))

    # 3. LED driven above its rated current
    if led_ids and evaluation.current_ma > settings.led_max_current_ma:
        warnings.append(SimulationWarning(
            kind=WarningKind.OVERCURRENT,
            severity=Severity.WARNING,
            message=(
                f"LED current {evaluation.current_ma:.1f} mA exceeds the "
                f"{settings.led_max_current_ma:g} mA rating."
            ),
            affected_ids=list(led_ids),
        ))

    return warnings


def flagged_ids(warnings) -> set[str]:
    """Return every component id named by any warning."""
    return {cid for w in warnings for cid in w.affected_ids}
