from .circuit_graph import build_graph
from .dc_path_solver import simulate
from .path_finder import find_circuit_paths
from .results import ComponentStatus, Severity, SimulationResult, WarningKind
from .settings import SolverSettings
from .value_parser import parse_value

__all__ = ['simulate', 'SolverSettings', 'SimulationResult', 'ComponentStatus',
           'WarningKind', 'Severity', 'build_graph', 'find_circuit_paths', 'parse_value']
