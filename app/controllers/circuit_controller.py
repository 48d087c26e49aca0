"""
CircuitController - Orchestrates component and connection CRUD operations.

This module contains no GUI dependencies. It manages the CircuitModel
and notifies views of changes through an observer pattern.
"""

import logging
from typing import Any, Callable, Optional

from models.circuit import CircuitModel
from models.component import DEFAULT_LABELS, DEFAULT_VALUES, ID_PREFIXES, ComponentData, normalize_kind
from models.connection import ConnectionData

logger = logging.getLogger(__name__)


class CircuitController:
    """
    Controller for circuit component and connection operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_removed (str) - A component was removed (by ID)
        component_value_changed (ComponentData) - A component's value changed
        component_label_changed (ComponentData) - A component's label changed
        switch_toggled (ComponentData) - A switch was opened or closed
        connection_added (ConnectionData) - A new connection was added
        connection_removed (ConnectionData) - A connection was removed
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (None) - Circuit loaded from file
        model_saved (None) - Circuit saved to file
        simulation_started (None) - Simulation began
        simulation_completed (SimulationResult) - Simulation finished
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model or CircuitModel()
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Component operations ---

    def add_component(self, kind: str, value: Optional[str] = None,
                      label: Optional[str] = None,
                      position: tuple[float, float] = (0.0, 0.0)) -> ComponentData:
        """
        Create and add a new component to the circuit.

        Generates a unique ID through the model's id generator (R1, R2, B1, etc.)
        and fills in palette defaults for value and label. Switches start open.

        Returns:
            The newly created ComponentData.
        """
        kind = normalize_kind(kind)
        prefix = ID_PREFIXES.get(kind, "X")
        component = ComponentData(
            component_id=self.model.new_component_id(prefix),
            kind=kind,
            label=label if label is not None else DEFAULT_LABELS.get(kind, kind),
            value=value if value is not None else DEFAULT_VALUES.get(kind, ""),
            position=position,
        )
        self.model.add_component(component)
        self._notify('component_added', component)
        return component

    def remove_component(self, component_id: str) -> None:
        """Remove a component and all connections attached to it."""
        if component_id not in self.model.components:
            return
        for connection in self.model.remove_component(component_id):
            self._notify('connection_removed', connection)
        self._notify('component_removed', component_id)

    def update_component_value(self, component_id: str, value: str) -> None:
        """Update a component's value."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        component.value = value
        self._notify('component_value_changed', component)

    def update_component_label(self, component_id: str, label: str) -> None:
        """Update a component's display label."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        component.label = label
        self._notify('component_label_changed', component)

    def set_switch(self, component_id: str, closed: bool) -> bool:
        """Open or close a switch. Returns False if the id is not a switch."""
        if not self.model.set_switch(component_id, closed):
            return False
        self._notify('switch_toggled', self.model.components[component_id])
        return True

    def toggle_switch(self, component_id: str) -> bool:
        """Flip a switch. Returns the new closed state (False for non-switches)."""
        component = self.model.components.get(component_id)
        if component is None or not component.is_switch:
            return False
        self.set_switch(component_id, not component.closed)
        return component.closed

    # --- Connection operations ---

    def add_connection(self, source_id: str, target_id: str) -> ConnectionData:
        """
        Create and add a new connection between two components.

        Raises:
            ValueError: If either endpoint is not in the circuit, or both
                endpoints are the same component.
        """
        for endpoint in (source_id, target_id):
            if endpoint not in self.model.components:
                raise ValueError(f"Unknown component '{endpoint}'.")
        if source_id == target_id:
            raise ValueError(f"Cannot connect '{source_id}' to itself.")

        connection = ConnectionData(
            connection_id=self.model.new_connection_id(),
            source_id=source_id,
            target_id=target_id,
        )
        self.model.add_connection(connection)
        self._notify('connection_added', connection)
        return connection

    def remove_connection(self, connection_id: str) -> None:
        """Remove a connection by id."""
        connection = self.model.remove_connection(connection_id)
        if connection is not None:
            self._notify('connection_removed', connection)

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self.model.clear()
        self._notify('circuit_cleared', None)
