"""
Circuit: high-level scripting API for programmatic circuit manipulation.

No GUI dependency. Wraps the existing model/controller/simulation
layers behind a user-friendly interface.
"""

import json
from pathlib import Path
from typing import Optional, Union

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from controllers.simulation_controller import SimulationController, ValidationReport
from models.circuit import CircuitModel
from models.component import COMPONENT_KINDS, ComponentData, normalize_kind
from models.connection import ConnectionData
from simulation import SimulationResult, SolverSettings
from simulation.csv_exporter import export_simulation_results, write_csv


class Circuit:
    """A scriptable circuit that can be built, simulated, and saved programmatically.

    Wraps CircuitModel, CircuitController, and SimulationController to provide
    a clean API for headless circuit workflows.

    Args:
        model: An existing CircuitModel to wrap. If None, creates an empty circuit.
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self._model = model or CircuitModel()
        self._controller = CircuitController(self._model)
        self._sim = SimulationController(self._model, self._controller)

    # --- Factory methods ---

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Circuit":
        """Load a circuit from a JSON file.

        Args:
            path: Path to the circuit JSON file.

        Returns:
            A new Circuit instance populated from the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the JSON structure is invalid.
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        validate_circuit_data(data)
        return cls(CircuitModel.from_dict(data))

    # --- Component operations ---

    def add_component(
        self,
        kind: str,
        value: Optional[str] = None,
        label: Optional[str] = None,
        closed: Optional[bool] = None,
    ) -> str:
        """Add a component to the circuit.

        Args:
            kind: One of the supported kinds (e.g. "battery", "resistor",
                "led", "switch"). See ``Circuit.component_kinds``.
            value: Component value (e.g. "9V", "1kΩ"). If None, uses the
                palette default for the kind.
            label: Display label. If None, uses the palette label.
            closed: Initial switch state. Ignored for non-switches.

        Returns:
            The auto-generated component ID (e.g. "R1", "B1", "D1").

        Raises:
            ValueError: If the kind is not recognized.
        """
        if normalize_kind(kind) not in COMPONENT_KINDS:
            raise ValueError(f"Unknown component kind '{kind}'. Valid kinds: {', '.join(COMPONENT_KINDS)}")

        comp = self._controller.add_component(kind, value=value, label=label)
        if closed and comp.is_switch:
            self._controller.set_switch(comp.component_id, True)
        return comp.component_id

    def remove_component(self, component_id: str) -> None:
        """Remove a component and its connections."""
        self._controller.remove_component(component_id)

    def update_value(self, component_id: str, value: str) -> None:
        """Update a component's value (e.g. "2.2kΩ")."""
        self._controller.update_component_value(component_id, value)

    def set_switch(self, component_id: str, closed: bool) -> None:
        """Open or close a switch.

        Raises:
            ValueError: If the component is not a switch.
        """
        if not self._controller.set_switch(component_id, closed):
            raise ValueError(f"'{component_id}' is not a switch.")

    def toggle(self, component_id: str) -> bool:
        """Flip a switch and return its new state (True = closed)."""
        component = self._model.components.get(component_id)
        if component is None or not component.is_switch:
            raise ValueError(f"'{component_id}' is not a switch.")
        return self._controller.toggle_switch(component_id)

    # --- Connection operations ---

    def connect(self, a: str, b: str) -> str:
        """Connect two components and return the new connection ID.

        Raises:
            ValueError: If either component does not exist.
        """
        return self._controller.add_connection(a, b).connection_id

    def connect_chain(self, *component_ids: str) -> list[str]:
        """Connect components in order, closing the loop back to the first.

        ``connect_chain("B1", "R1", "D1")`` wires B1-R1, R1-D1 and D1-B1.
        """
        ids = list(component_ids)
        return [self.connect(a, b) for a, b in zip(ids, ids[1:] + ids[:1])]

    # --- Analysis ---

    def simulate(self, settings: Optional[SolverSettings] = None) -> SimulationResult:
        """Run the DC path solver on the current circuit.

        Raises:
            No exceptions: circuit problems are reported as result.warnings.
        """
        return self._sim.run_simulation(settings)

    def validate(self) -> ValidationReport:
        """Check the circuit structure without running a simulation."""
        return self._sim.validate_circuit()

    # --- Persistence ---

    def save(self, path: Union[str, Path]) -> None:
        """Save the circuit to a JSON file."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self._model.to_dict(), f, indent=2, ensure_ascii=False)

    # --- Properties ---

    @property
    def components(self) -> dict[str, ComponentData]:
        """All components in the circuit, keyed by ID."""
        return self._model.components

    @property
    def connections(self) -> list[ConnectionData]:
        """All connections in the circuit."""
        return self._model.connections

    @property
    def model(self) -> CircuitModel:
        """Direct access to the underlying CircuitModel."""
        return self._model

    @property
    def component_kinds(self) -> list[str]:
        """List of all supported component kinds."""
        return list(COMPONENT_KINDS)

    # --- Result export ---

    @staticmethod
    def result_to_csv(result: SimulationResult, path: Union[str, Path]) -> None:
        """Export a simulation result to a CSV file."""
        write_csv(export_simulation_results(result), Path(path))
