"""
ConnectionData - Pure Python data model for circuit connections.

This module contains no GUI dependencies. A connection is stored as a
directed (source, target) pair but is electrically undirected.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ConnectionData:
    """
    Pure Python data class representing a wire between two components.

    The connection has its own identifier, distinct from its endpoints.
    """

    connection_id: str
    source_id: str
    target_id: str

    def get_endpoints(self) -> tuple[str, str]:
        """Return both endpoint component ids."""
        return (self.source_id, self.target_id)

    def connects_component(self, component_id: str) -> bool:
        """Check if this connection touches the given component."""
        return self.source_id == component_id or self.target_id == component_id

    def connects_pair(self, a: str, b: str) -> bool:
        """Check if this connection joins a and b, in either direction."""
        return (self.source_id == a and self.target_id == b) or (
            self.source_id == b and self.target_id == a
        )

    def other_end(self, component_id: str) -> Optional[str]:
        """Return the endpoint opposite component_id, or None if not attached."""
        if self.source_id == component_id:
            return self.target_id
        if self.target_id == component_id:
            return self.source_id
        return None

    def to_dict(self) -> dict:
        """Serialize connection to dictionary."""
        return {
            "id": self.connection_id,
            "source": self.source_id,
            "target": self.target_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConnectionData":
        """
        Deserialize connection from dictionary.

        Handles both the saved-file keys (source/target) and the API keys
        (sourceId/targetId).
        """
        return cls(
            connection_id=str(data["id"]),
            source_id=str(data.get("source", data.get("sourceId"))),
            target_id=str(data.get("target", data.get("targetId"))),
        )

    def __repr__(self) -> str:
        return f"ConnectionData({self.connection_id}: {self.source_id} -- {self.target_id})"
