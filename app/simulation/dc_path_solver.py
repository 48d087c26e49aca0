"""
simulation/dc_path_solver.py

The DC path solver: build graph -> enumerate loops -> filter by switch
state -> evaluate the first active loop -> detect hazards.

simulate() is a pure function of the snapshot it is given. It never
raises for a structurally valid snapshot; every topological or electrical
problem is reported as a warning on the result.
"""

import logging

from .circuit_graph import build_graph, count_links
from .evaluator import assign_status, evaluate_path
from .hazard_detector import detect_hazards, flagged_ids, no_source_warning, open_circuit_warning
from .path_activation import filter_active_paths
from .path_finder import find_circuit_paths, path_hops, source_ids
from .power_calculator import calculate_power, supplied_power
from .results import ComponentResult, ComponentStatus, ConnectionState, SimulationResult
from .settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)

__all__ = ["simulate", "SolverSettings"]


def simulate(components, connections, settings: SolverSettings | None = None) -> SimulationResult:
    """
    Simulate a circuit snapshot.

    Args:
        components: iterable of ComponentData (document order matters: the
            first battery is the source)
        connections: iterable of ConnectionData
        settings: optional SolverSettings overriding the default constants

    Returns:
        SimulationResult. The inputs are not modified.
    """
    settings = settings or DEFAULT_SETTINGS
    components = list(components)
    connections = list(connections)
    by_id = {c.component_id: c for c in components}

    # 1. A circuit without a battery carries no current
    sources = source_ids(components)
    if not sources:
        logger.info("Simulation: no power source among %d component(s)", len(components))
        return _idle_result(components, connections, [no_source_warning()])

    source = by_id[sources[0]]
    if len(sources) > 1:
        logger.warning(
            "Simulation: %d batteries found, evaluating %s only", len(sources), source.component_id
        )

    # 2. Enumerate loops through the source
    graph = build_graph(components, connections)
    links = count_links(components, connections)
    paths = find_circuit_paths(graph, source.component_id, settings.max_path_depth, links)
    if not paths:
        logger.info("Simulation: open circuit at %s", source.component_id)
        return _idle_result(components, connections, [open_circuit_warning(source.component_id)])

    # 3. Keep loops whose switches are all closed
    active_paths = filter_active_paths(paths, by_id)
    if not active_paths:
        logger.info("Simulation: %d loop(s), none closed", len(paths))
        return _idle_result(components, connections, [])

    # 4. Evaluate the first active loop
    path = active_paths[0]
    evaluation = evaluate_path(path, by_id, source, settings)
    warnings = detect_hazards(path, by_id, evaluation, settings)
    flagged = flagged_ids(warnings)
    on_path = set(path)

    component_results = []
    for component in components:
        cid = component.component_id
        energized = cid in on_path
        component_results.append(ComponentResult(
            component_id=cid,
            kind=component.kind,
            label=component.label,
            voltage=evaluation.component_voltages.get(cid, 0.0) if energized else 0.0,
            current_ma=evaluation.current_ma if energized else 0.0,
            status=assign_status(component, energized, cid in flagged),
        ))

    power = calculate_power(component_results)
    for result in component_results:
        result.power_mw = power.get(result.component_id, 0.0)

    hops = path_hops(path)
    connection_states = []
    for connection in connections:
        active = any(connection.connects_pair(a, b) for a, b in hops)
        connection_states.append(ConnectionState(
            connection_id=connection.connection_id,
            active=active,
            current_ma=evaluation.current_ma if active else 0.0,
        ))

    logger.info(
        "Simulation: %.2f V across %.2f Ω -> %.2f mA, %d warning(s)",
        evaluation.voltage, evaluation.resistance, evaluation.current_ma, len(warnings),
    )
    return SimulationResult(
        total_voltage=evaluation.voltage,
        total_resistance=evaluation.resistance,
        total_current_ma=evaluation.current_ma,
        total_power_mw=supplied_power(evaluation.voltage, evaluation.current_ma),
        components=component_results,
        warnings=warnings,
        connections=connection_states,
        active_path=list(path),
    )


def _idle_result(components, connections, warnings) -> SimulationResult:
    """Zero aggregates, every component off, every connection inactive."""
    return SimulationResult(
        components=[
            ComponentResult(
                component_id=c.component_id,
                kind=c.kind,
                label=c.label,
                status=ComponentStatus.OFF,
            )
            for c in components
        ],
        warnings=warnings,
        connections=[ConnectionState(connection_id=c.connection_id) for c in connections],
    )
