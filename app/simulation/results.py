"""
simulation/results.py

Result types produced by the DC path solver. Results are derived,
read-only data: a new SimulationResult is built on every run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ComponentStatus(str, Enum):
    OFF = "off"
    ON = "on"
    NORMAL = "normal"
    WARNING = "warning"


class WarningKind(str, Enum):
    NO_SOURCE = "no-source"
    OPEN_CIRCUIT = "open-circuit"
    SHORT_CIRCUIT = "short-circuit"
    NO_RESISTOR = "no-resistor"
    OVERCURRENT = "overcurrent"


class Severity(str, Enum):
    WARNING = "warning"
    DANGER = "danger"


@dataclass
class ComponentResult:
    """Computed quantities for one component."""

    component_id: str
    kind: str
    label: str
    voltage: float = 0.0
    current_ma: float = 0.0
    status: ComponentStatus = ComponentStatus.OFF
    power_mw: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.component_id,
            "kind": self.kind,
            "label": self.label,
            "voltage": self.voltage,
            "currentMilliamps": self.current_ma,
            "status": self.status.value,
            "powerMilliwatts": self.power_mw,
        }


@dataclass
class SimulationWarning:
    """A severity-tagged diagnostic naming the components involved."""

    kind: WarningKind
    severity: Severity
    message: str
    affected_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "affectedIds": list(self.affected_ids),
        }


@dataclass
class ConnectionState:
    """Whether current flows through a connection, and how much."""

    connection_id: str
    active: bool = False
    current_ma: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.connection_id,
            "active": self.active,
            "currentMilliamps": self.current_ma,
        }


@dataclass
class SimulationResult:
    """Aggregate report of one simulation run."""

    total_voltage: float = 0.0
    total_resistance: float = 0.0
    total_current_ma: float = 0.0
    total_power_mw: float = 0.0
    components: list[ComponentResult] = field(default_factory=list)
    warnings: list[SimulationWarning] = field(default_factory=list)
    connections: list[ConnectionState] = field(default_factory=list)
    active_path: list[str] = field(default_factory=list)

    @property
    def is_energized(self) -> bool:
        """True when a closed loop carries current."""
        return bool(self.active_path)

    def component(self, component_id: str) -> Optional[ComponentResult]:
        for result in self.components:
            if result.component_id == component_id:
                return result
        return None

    def connection(self, connection_id: str) -> Optional[ConnectionState]:
        for state in self.connections:
            if state.connection_id == connection_id:
                return state
        return None

    def has_warning(self, kind) -> bool:
        return any(w.kind == kind for w in self.warnings)

    def warnings_of(self, kind) -> list[SimulationWarning]:
        return [w for w in self.warnings if w.kind == kind]

    def to_dict(self) -> dict:
        """Serialize to the JSON shape returned by the API."""
        return {
            "totalVoltage": self.total_voltage,
            "totalResistance": self.total_resistance,
            "totalCurrentMilliamps": self.total_current_ma,
            "totalPowerMilliwatts": self.total_power_mw,
            "perComponent": [c.to_dict() for c in self.components],
            "warnings": [w.to_dict() for w in self.warnings],
            "perConnection": [c.to_dict() for c in self.connections],
            "activePath": list(self.active_path),
        }
