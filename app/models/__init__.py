"""
Pure Python data models for the circuit simulator.

This package contains GUI-free data classes that represent a circuit
document. All models use only Python standard library types.
"""

from .circuit import CircuitModel
from .component import (
    COMPONENT_KINDS,
    DEFAULT_LABELS,
    DEFAULT_VALUES,
    ID_PREFIXES,
    KIND_ALIASES,
    ComponentData,
    normalize_kind,
)
from .connection import ConnectionData
from .ids import CounterIdGenerator, IdGenerator, UuidIdGenerator

__all__ = [
    "CircuitModel",
    "ComponentData",
    "COMPONENT_KINDS",
    "DEFAULT_LABELS",
    "DEFAULT_VALUES",
    "ID_PREFIXES",
    "KIND_ALIASES",
    "normalize_kind",
    "ConnectionData",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "IdGenerator",
]
