"""
Scripting API: programmatic circuit creation and simulation.

This package provides a headless Python API for building, modifying,
and simulating circuits without the editor.

Usage::

    from scripting import Circuit

    circuit = Circuit()
    circuit.add_component("battery", "9V")
    circuit.add_component("resistor", "220Ω")
    circuit.add_component("led")
    circuit.connect_chain("B1", "R1", "D1")

    result = circuit.simulate()
    print(result.total_current_ma, [w.message for w in result.warnings])

    circuit.save("my_circuit.json")
"""

# Re-export SimulationResult for convenience
from scripting.circuit import Circuit
from simulation import SimulationResult

__all__ = ["Circuit", "SimulationResult"]
