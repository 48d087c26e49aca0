"""
Controllers for the circuit simulator.

This package contains GUI-free controller classes that orchestrate
operations between models and views using an observer pattern.
"""

from .circuit_controller import CircuitController
from .file_controller import FileController, validate_circuit_data
from .simulation_controller import SimulationController, ValidationReport

__all__ = [
    "CircuitController",
    "SimulationController",
    "ValidationReport",
    "FileController",
    "validate_circuit_data",
]
