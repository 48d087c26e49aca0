"""
simulation/value_parser.py

Parses human-entered component values ("220Ω", "9V", "100μF", "4.7k")
into magnitudes, and formats magnitudes back with SI prefixes.
"""

import re

# Multiplier letters, matched case-insensitively.
# 'm' is always milli: there is no mega in the editor's vocabulary.
MULTIPLIERS = {
    'k': 1e3,    # Kilo
    'm': 1e-3,   # Milli
    'μ': 1e-6,   # Micro (Greek mu)
    'µ': 1e-6,   # Micro (micro sign)
    'u': 1e-6,   # Micro
    'n': 1e-9,   # Nano
    'p': 1e-12,  # Pico
    'g': 1e9,    # Giga
}

# For formatting, we iterate to find the best fit
FORMATTING_PREFIXES = sorted(
    [(1e9, 'G'), (1e6, 'M'), (1e3, 'k'),
     (1, ''), (1e-3, 'm'), (1e-6, 'µ'), (1e-9, 'n'), (1e-12, 'p')],
    key=lambda x: x[0], reverse=True
)

# Leading unsigned decimal, optional blanks, optional first unit character
_VALUE_RE = re.compile(r'^\s*(\d+(?:\.\d*)?|\.\d+)\s*(\S)?')


def parse_value(s, default: float = 0.0) -> float:
    """
    Parses a value string with an optional multiplier letter into a float.

    Examples: "10k" -> 10000.0, "25m" -> 0.025, "220Ω" -> 220.0, "9V" -> 9.0

    A string without a leading digit (empty, a bare unit, a sign) returns
    ``default``. A letter that is not a known multiplier is ignored.
    """
    if s is None:
        return default
    if isinstance(s, (int, float)) and not isinstance(s, bool):
        return float(s) if s >= 0 else default

    match = _VALUE_RE.match(str(s))
    if not match:
        return default

    num_str, prefix = match.groups()
    multiplier = MULTIPLIERS.get(prefix.lower(), 1.0) if prefix else 1.0
    return float(num_str) * multiplier


def format_value(value: float, unit: str = "") -> str:
    """
    Formats a float into a string with the most appropriate SI prefix.
    Examples: 0.015 -> "15.00m", 15000 -> "15.00k"
    """
    if value == 0:
        return f"0.00 {unit}".rstrip()

    abs_val = abs(value)
    for multiplier, prefix in FORMATTING_PREFIXES:
        if abs_val >= multiplier:
            return f"{value / multiplier:.2f} {prefix}{unit}".rstrip()

    multiplier, prefix = FORMATTING_PREFIXES[-1]
    return f"{value / multiplier:.2f} {prefix}{unit}".rstrip()
