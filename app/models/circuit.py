"""
CircuitModel - The circuit document.

This module contains no GUI dependencies. It owns all components and
connections of one circuit and the id generator used to name new ones.
The solver never reads a CircuitModel directly; callers hand it a
snapshot() so simulation stays a pure function of the document state.
"""

import copy
from dataclasses import dataclass, field

from .component import ComponentData
from .connection import ConnectionData
from .ids import CounterIdGenerator, IdGenerator

CONNECTION_ID_PREFIX = "W"


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    Components are kept in insertion order; that order decides which
    battery is treated as the circuit's source.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    connections: list[ConnectionData] = field(default_factory=list)
    id_generator: IdGenerator = field(default_factory=CounterIdGenerator)
    name: str = ""

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        """Add a component to the circuit."""
        self.components[component.component_id] = component
        self.id_generator.reserve(component.component_id, component.get_id_prefix())

    def remove_component(self, component_id: str) -> list[ConnectionData]:
        """
        Remove a component and every connection attached to it.

        Returns:
            The removed connections (empty if the component did not exist).
        """
        if component_id not in self.components:
            return []

        removed = [c for c in self.connections if c.connects_component(component_id)]
        self.connections = [c for c in self.connections if not c.connects_component(component_id)]
        del self.components[component_id]
        return removed

    def new_component_id(self, kind_prefix: str) -> str:
        """Mint an id that is not used by any component in this document."""
        new_id = self.id_generator.next_id(kind_prefix)
        while new_id in self.components:
            new_id = self.id_generator.next_id(kind_prefix)
        return new_id

    def set_switch(self, component_id: str, closed: bool) -> bool:
        """Open or close a switch. Returns False if it is not a switch."""
        component = self.components.get(component_id)
        if component is None or not component.is_switch:
            return False
        component.closed = closed
        return True

    # --- Connection operations ---

    def add_connection(self, connection: ConnectionData) -> None:
        """Add a connection between two components."""
        self.connections.append(connection)
        self.id_generator.reserve(connection.connection_id, CONNECTION_ID_PREFIX)

    def new_connection_id(self) -> str:
        used = {c.connection_id for c in self.connections}
        new_id = self.id_generator.next_id(CONNECTION_ID_PREFIX)
        while new_id in used:
            new_id = self.id_generator.next_id(CONNECTION_ID_PREFIX)
        return new_id

    def remove_connection(self, connection_id: str) -> ConnectionData | None:
        """Remove a connection by id and return it, or None if missing."""
        for i, connection in enumerate(self.connections):
            if connection.connection_id == connection_id:
                return self.connections.pop(i)
        return None

    def find_connections(self, component_id: str) -> list[ConnectionData]:
        """Return all connections touching a component."""
        return [c for c in self.connections if c.connects_component(component_id)]

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.connections.clear()
        self.id_generator.reset()
        self.name = ""

    def snapshot(self) -> tuple[list[ComponentData], list[ConnectionData]]:
        """Return deep copies of the components and connections.

        The copies can be handed to the solver (or another thread) without
        later edits to the document leaking into a running simulation.
        """
        return (
            copy.deepcopy(list(self.components.values())),
            copy.deepcopy(self.connections),
        )

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (the circuit JSON file format)."""
        data = {
            "components": [c.to_dict() for c in self.components.values()],
            "connections": [c.to_dict() for c in self.connections],
            "counters": self.id_generator.state(),
        }
        if self.name:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict, id_generator: IdGenerator | None = None) -> "CircuitModel":
        """
        Deserialize circuit from dictionary.

        Accepts the editor's ``nodes``/``edges`` keys as aliases for
        ``components``/``connections``.
        """
        model = cls(id_generator=id_generator or CounterIdGenerator())
        model.id_generator.restore(data.get("counters", {}))
        model.name = data.get("name", "")

        for comp_data in data.get("components", data.get("nodes", [])):
            model.add_component(ComponentData.from_dict(comp_data))

        for conn_data in data.get("connections", data.get("edges", [])):
            model.add_connection(ConnectionData.from_dict(conn_data))

        return model
