"""
SimulationController - Orchestrates the simulation pipeline.

This module contains no GUI dependencies. It validates the circuit,
takes a snapshot of the model and hands it to the DC path solver.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.circuit import CircuitModel
from simulation import SimulationResult, SolverSettings, simulate

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Structural pre-check of a circuit."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class SimulationController:
    """
    Controller for the simulation pipeline.

    Coordinates: validate -> snapshot -> simulate -> notify
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.last_result: Optional[SimulationResult] = None

    def validate_circuit(self) -> ValidationReport:
        """
        Check the circuit for structural problems before simulation.

        Errors make the circuit unusable; warnings are things the solver
        will also report but that the editor may want to flag early.
        """
        report = ValidationReport()
        components = self.model.components

        if not components:
            report.errors.append("Circuit is empty. Add components before simulating.")
            return report

        for connection in self.model.connections:
            for endpoint in connection.get_endpoints():
                if endpoint not in components:
                    report.errors.append(
                        f"Connection {connection.connection_id} references "
                        f"unknown component '{endpoint}'."
                    )

        batteries = [c for c in components.values() if c.is_source]
        if not batteries:
            report.warnings.append("No battery: the circuit has no power source.")
        elif len(batteries) > 1:
            report.warnings.append(
                f"{len(batteries)} batteries found; only {batteries[0].component_id} is simulated."
            )

        connected = set()
        for connection in self.model.connections:
            connected.update(connection.get_endpoints())
        for component_id in components:
            if component_id not in connected:
                report.warnings.append(f"Component {component_id} is not connected.")

        return report

    def run_simulation(self, settings: Optional[SolverSettings] = None) -> SimulationResult:
        """
        Run the DC path solver on a snapshot of the current circuit.

        Observers are notified before and after. The result is kept in
        last_result.
        """
        if self.circuit_ctrl:
            self.circuit_ctrl._notify("simulation_started", None)

        components, connections = self.model.snapshot()
        result = simulate(components, connections, settings)
        self.last_result = result
        logger.debug("Simulation finished: %d warning(s)", len(result.warnings))

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("simulation_completed", result)
        return result
