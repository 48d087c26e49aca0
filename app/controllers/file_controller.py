"""
FileController - Handles circuit file I/O.

File dialog interaction is the responsibility of the view layer.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.circuit import CircuitModel

logger = logging.getLogger(__name__)


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    Connections to unknown components are not an error here: the solver
    ignores them, and the editor may save a half-drawn circuit.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    components = data.get("components", data.get("nodes"))
    connections = data.get("connections", data.get("edges"))
    if not isinstance(components, list):
        raise ValueError("Missing or invalid 'components' list.")
    if not isinstance(connections, list):
        raise ValueError("Missing or invalid 'connections' list.")

    comp_ids = set()
    for i, comp in enumerate(components):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        if "id" not in comp:
            raise ValueError(f"Component #{i + 1} is missing required field 'id'.")
        if "kind" not in comp and "type" not in comp:
            raise ValueError(f"Component '{comp['id']}' is missing required field 'kind'.")
        pos = comp.get("pos", comp.get("position"))
        if pos is not None:
            if not isinstance(pos, dict):
                raise ValueError(f"Component '{comp['id']}' has invalid position data.")
            if not all(isinstance(pos.get(k, 0), (int, float)) for k in ("x", "y")):
                raise ValueError(f"Component '{comp['id']}' position values must be numeric.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        comp_ids.add(comp["id"])

    for i, conn in enumerate(connections):
        if not isinstance(conn, dict):
            raise ValueError(f"Connection #{i + 1} is not an object.")
        for key, alias in (("id", None), ("source", "sourceId"), ("target", "targetId")):
            if key not in conn and (alias is None or alias not in conn):
                raise ValueError(f"Connection #{i + 1} is missing required field '{key}'.")
        source = conn.get("source", conn.get("sourceId"))
        target = conn.get("target", conn.get("targetId"))
        if source not in comp_ids or target not in comp_ids:
            logger.debug("Connection %s references an unknown component", conn["id"])


class FileController:
    """
    Manages circuit file I/O.

    Handles saving/loading circuit data as JSON and tracking
    the current file path for quick-save.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.model.clear()
        self.current_file = None
        if self.circuit_ctrl:
            self.circuit_ctrl._notify("circuit_cleared", None)

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Args:
            filepath: Path or string to save to.

        Raises:
            OSError: If the file cannot be written.
            TypeError: If model data is not JSON-serializable.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_saved", None)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place (preserving the reference so views stay connected).

        Args:
            filepath: Path or string to load from.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        validate_circuit_data(data)

        new_model = CircuitModel.from_dict(data)

        # Update current model in place (preserving reference)
        self.model.clear()
        self.model.components = new_model.components
        self.model.connections = new_model.connections
        self.model.id_generator = new_model.id_generator
        self.model.name = new_model.name

        self.current_file = filepath
        logger.info("Loaded circuit from %s (%d components)", filepath, len(self.model.components))

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_loaded", None)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None
