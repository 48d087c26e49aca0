"""
ComponentData - Pure Python data model for circuit components.

This module contains no GUI dependencies. Positions are represented as
tuples (x, y) and are only used for editor layout; the solver ignores them.

Component kinds use the editor's palette identifiers as canonical names:
'battery', 'resistor', 'led', 'capacitor', 'switch', 'and-gate',
'or-gate', 'not-gate', 'ground', 'vcc'
"""

from dataclasses import dataclass
from typing import Optional

# Component kind definitions (canonical)
COMPONENT_KINDS = [
    "battery",
    "resistor",
    "led",
    "capacitor",
    "switch",
    "and-gate",
    "or-gate",
    "not-gate",
    "ground",
    "vcc",
]

# Kinds that start a current loop
SOURCE_KINDS = ("battery",)

# Prefixes used when minting component ids (B1, R1, D1, ...)
ID_PREFIXES = {
    "battery": "B",
    "resistor": "R",
    "led": "D",
    "capacitor": "C",
    "switch": "S",
    "and-gate": "U",
    "or-gate": "U",
    "not-gate": "U",
    "ground": "GND",
    "vcc": "VCC",
}

# Palette default values per component kind
DEFAULT_VALUES = {
    "battery": "9V",
    "resistor": "220Ω",
    "led": "",
    "capacitor": "100μF",
    "switch": "",
    "and-gate": "",
    "or-gate": "",
    "not-gate": "",
    "ground": "",
    "vcc": "5V",
}

# Palette display labels per component kind
DEFAULT_LABELS = {
    "battery": "Battery",
    "resistor": "Resistor",
    "led": "LED",
    "capacitor": "Capacitor",
    "switch": "Switch",
    "and-gate": "AND",
    "or-gate": "OR",
    "not-gate": "NOT",
    "ground": "GND",
    "vcc": "VCC",
}

# Alternate spellings seen in saved documents and reconstructed circuits
KIND_ALIASES = {
    "and_gate": "and-gate",
    "or_gate": "or-gate",
    "not_gate": "not-gate",
    "power": "vcc",
    "power-source": "battery",
    "power_source": "battery",
    "light-emitting-diode": "led",
}


def normalize_kind(kind: Optional[str]) -> str:
    """Map a kind string (any case, any known alias) to its canonical name.

    Unknown kinds are returned lower-cased and otherwise untouched; the
    solver treats them as zero-resistance pass-through components.
    """
    if not kind:
        return ""
    key = str(kind).strip().lower()
    return KIND_ALIASES.get(key, key)


def _parse_closed(raw) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1", "on")
    return raw is True or (isinstance(raw, int) and raw == 1)


@dataclass
class ComponentData:
    """
    Pure Python data class representing a circuit component.

    ``closed`` is only meaningful for switches: a closed switch conducts.
    """

    component_id: str
    kind: str
    label: str = ""
    value: str = ""
    closed: bool = False
    position: tuple[float, float] = (0.0, 0.0)  # (x, y) in editor coordinates

    def __post_init__(self):
        self.kind = normalize_kind(self.kind)
        if self.value is None:
            self.value = ""

    @property
    def is_source(self) -> bool:
        return self.kind in SOURCE_KINDS

    @property
    def is_switch(self) -> bool:
        return self.kind == "switch"

    def get_id_prefix(self) -> str:
        """Return the id prefix for this component kind."""
        return ID_PREFIXES.get(self.kind, "X")

    def to_dict(self) -> dict:
        """Serialize component to dictionary (editor JSON shape)."""
        data = {
            "id": self.component_id,
            "kind": self.kind,
            "label": self.label,
            "value": self.value,
            "pos": {"x": self.position[0], "y": self.position[1]},
        }
        if self.is_switch:
            data["closed"] = self.closed
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Accepts the editor spelling as well: ``type`` for the kind and
        ``isOn`` for a switch's closed state. A missing position defaults
        to the origin. The closed flag is only true for ``true``, ``1`` or
        the strings "true"/"1"/"on"; anything else leaves the switch open.
        """
        kind = data.get("kind", data.get("type", ""))
        closed = data.get("closed", data.get("isOn", False))
        pos = data.get("pos") or data.get("position") or {}

        return cls(
            component_id=str(data["id"]),
            kind=kind,
            label=data.get("label") or "",
            value=data.get("value") or "",
            closed=_parse_closed(closed),
            position=(float(pos.get("x", 0.0)), float(pos.get("y", 0.0))),
        )

    def __repr__(self) -> str:
        extra = f", closed={self.closed}" if self.is_switch else ""
        return (
            f"ComponentData(id={self.component_id!r}, kind={self.kind!r}, "
            f"value={self.value!r}{extra})"
        )
