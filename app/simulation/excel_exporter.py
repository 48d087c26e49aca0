"""
simulation/excel_exporter.py

Export simulation results to Excel (.xlsx) format.
No GUI dependencies; choosing the destination is the caller's job.
"""

from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

WARNING_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
DANGER_FILL = PatternFill(start_color="F8CBAD", end_color="F8CBAD", fill_type="solid")


def _add_summary_sheet(wb, result, circuit_name=""):
    """Add a Summary sheet with circuit metadata and aggregate values."""
    ws = wb.active
    ws.title = "Summary"
    header_font = Font(bold=True)
    ws.append(["Circuit Report Summary"])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append([])
    ws.append(["Analysis Type", "DC Path"])
    ws.append(["Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        ws.append(["Circuit", circuit_name])
    ws.append(["Total Voltage (V)", result.total_voltage])
    ws.append(["Total Resistance (Ohm)", result.total_resistance])
    ws.append(["Total Current (mA)", result.total_current_ma])
    ws.append(["Total Power (mW)", result.total_power_mw])
    ws.append(["Active Path", " -> ".join(result.active_path)])
    for row in ws.iter_rows(min_row=3, max_col=1):
        row[0].font = header_font
    ws.column_dimensions["A"].width = 24
    ws.column_dimensions["B"].width = 30
    return ws


def _style_header_row(ws, row_num=1):
    """Apply header styling to the first row of a worksheet."""
    header_fill = PatternFill(
        start_color="4472C4", end_color="4472C4", fill_type="solid"
    )
    header_font = Font(bold=True, color="FFFFFF")
    for cell in ws[row_num]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")


def _set_widths(ws, widths):
    for j, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(j)].width = width


def export_to_excel(result, filepath, circuit_name=""):
    """Export a SimulationResult to an Excel workbook.

    Sheets: Summary, Components, Warnings, Connections.

    Args:
        result: SimulationResult from simulate()
        filepath: path to write the .xlsx file
        circuit_name: optional circuit filename for metadata
    """
    wb = Workbook()
    _add_summary_sheet(wb, result, circuit_name)
    _export_components(wb, result)
    _export_warnings(wb, result)
    _export_connections(wb, result)
    wb.save(filepath)


def _export_components(wb, result):
    ws = wb.create_sheet("Components")
    ws.append(["Component", "Kind", "Label", "Voltage (V)", "Current (mA)", "Power (mW)", "Status"])
    _style_header_row(ws)
    for comp in result.components:
        ws.append([
            comp.component_id, comp.kind, comp.label,
            comp.voltage, comp.current_ma, comp.power_mw, comp.status.value,
        ])
        if comp.status.value == "warning":
            for cell in ws[ws.max_row]:
                cell.fill = WARNING_FILL
    _set_widths(ws, [14, 12, 20, 14, 14, 14, 12])


def _export_warnings(wb, result):
    ws = wb.create_sheet("Warnings")
    ws.append(["Warning", "Severity", "Message", "Affected"])
    _style_header_row(ws)
    for warning in result.warnings:
        ws.append([
            warning.kind.value, warning.severity.value, warning.message,
            ", ".join(warning.affected_ids),
        ])
        fill = DANGER_FILL if warning.severity.value == "danger" else WARNING_FILL
        for cell in ws[ws.max_row]:
            cell.fill = fill
    _set_widths(ws, [16, 12, 60, 30])


def _export_connections(wb, result):
    ws = wb.create_sheet("Connections")
    ws.append(["Connection", "Active", "Current (mA)"])
    _style_header_row(ws)
    for state in result.connections:
        ws.append([state.connection_id, state.active, state.current_ma])
    _set_widths(ws, [14, 10, 14])
