"""
constants.py - Centralized electrical constants for the DC path solver.

This file is the SINGLE SOURCE OF TRUTH for the defaults used by
SolverSettings. Override per call through SolverSettings, not by editing
module attributes at runtime.
"""

# Path enumeration
MAX_PATH_DEPTH = 20            # Hop cap for the depth-first loop search

# Fallback values for unparseable component values
DEFAULT_SOURCE_VOLTAGE = 9.0   # Volts, battery
DEFAULT_RESISTANCE = 220.0     # Ohms, resistor

# LED model (typical 5 mm red LED)
LED_INTERNAL_RESISTANCE = 10.0  # Ohms
LED_FORWARD_VOLTAGE = 2.0       # Volts
LED_MAX_CURRENT_MA = 20.0       # Rated forward current

# Hazard thresholds
SHORT_CIRCUIT_THRESHOLD = 1.0  # Loop resistance below this is a short (Ohms)
MIN_LOOP_RESISTANCE = 0.1      # Floor used to keep the short-circuit current finite
