"""
simulation/csv_exporter.py

Export simulation results to CSV format.
No GUI dependencies; choosing the destination is the caller's job.
"""

import csv
import io
from datetime import datetime


def export_simulation_results(result, circuit_name=""):
    """
    Export a SimulationResult to a CSV string.

    Layout: metadata header, aggregate summary, then one table each for
    components, warnings and connections, separated by blank rows.

    Args:
        result: SimulationResult from simulate()
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["# Analysis Type", "DC Path"])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    writer.writerow([])

    writer.writerow(["Quantity", "Value"])
    writer.writerow(["Total Voltage (V)", result.total_voltage])
    writer.writerow(["Total Resistance (Ohm)", result.total_resistance])
    writer.writerow(["Total Current (mA)", result.total_current_ma])
    writer.writerow(["Total Power (mW)", result.total_power_mw])
    writer.writerow([])

    writer.writerow(["Component", "Kind", "Label", "Voltage (V)", "Current (mA)", "Power (mW)", "Status"])
    for comp in result.components:
        writer.writerow([
            comp.component_id, comp.kind, comp.label,
            comp.voltage, comp.current_ma, comp.power_mw, comp.status.value,
        ])
    writer.writerow([])

    writer.writerow(["Warning", "Severity", "Message", "Affected"])
    for warning in result.warnings:
        writer.writerow([
            warning.kind.value, warning.severity.value, warning.message,
            " ".join(warning.affected_ids),
        ])
    writer.writerow([])

    writer.writerow(["Connection", "Active", "Current (mA)"])
    for state in result.connections:
        writer.writerow([state.connection_id, state.active, state.current_ma])

    return output.getvalue()


def write_csv(csv_content, filepath):
    """
    Write CSV content string to a file.

    Args:
        csv_content: str from export_simulation_results
        filepath: path to write to
    """
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write(csv_content)
