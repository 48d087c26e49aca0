"""
Command-line interface for circuit batch operations.

Simulate circuits, validate them, and export reports without the editor.

Usage::

    python -m cli simulate circuit.json
    python -m cli simulate circuit.json --format csv --output results.csv
    python -m cli simulate circuit.json --led-max-current 30
    python -m cli validate circuit.json
    python -m cli export circuit.json --format xlsx --output report.xlsx
    python -m cli batch circuits/ --output-dir results/
    python -m cli import-analysis analysis.json --output circuit.json
"""

import argparse
import glob
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from controllers.simulation_controller import SimulationController
from models.circuit import CircuitModel
from simulation import SolverSettings
from simulation.analysis_document import parse_analysis_text, reconstructed_to_circuit
from simulation.csv_exporter import export_simulation_results
from simulation.value_parser import format_value


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    return CircuitModel.from_dict(data), ""


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def settings_from_args(args: argparse.Namespace) -> SolverSettings:
    """Build solver settings from the optional override flags."""
    return SolverSettings().with_overrides(
        max_path_depth=getattr(args, "max_depth", None),
        led_max_current_ma=getattr(args, "led_max_current", None),
    )


def cmd_simulate(args: argparse.Namespace) -> int:
    """Run simulation and output results."""
    model = load_circuit(args.circuit)
    controller = CircuitController(model)
    sim = SimulationController(model, controller)

    result = sim.run_simulation(settings_from_args(args))

    for warning in result.warnings:
        print(f"Warning: {warning.message}", file=sys.stderr)

    output_text = _format_result(result, args.format, Path(args.circuit).stem)

    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output_text)

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit without simulating."""
    model = load_circuit(args.circuit)
    sim = SimulationController(model)

    report = sim.validate_circuit()

    if report.success:
        print(f"Circuit is valid: {args.circuit}")
        for warning in report.warnings:
            print(f"  Warning: {warning}")
        return 0
    else:
        print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
        for err in report.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1


def cmd_export(args: argparse.Namespace) -> int:
    """Export the circuit document (json) or its simulation report (csv, xlsx)."""
    model = load_circuit(args.circuit)
    name = Path(args.circuit).stem
    fmt = args.format

    if fmt == "json":
        output_text = json.dumps(model.to_dict(), indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(output_text, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(output_text)
        return 0

    result = SimulationController(model).run_simulation()

    if fmt == "csv":
        output_text = export_simulation_results(result, name)
        if args.output:
            Path(args.output).write_text(output_text, encoding="utf-8")
            print(f"CSV written to {args.output}", file=sys.stderr)
        else:
            print(output_text)
        return 0

    elif fmt == "xlsx":
        if not args.output:
            print("Error: --output is required for xlsx export", file=sys.stderr)
            return 1
        from simulation.excel_exporter import export_to_excel

        try:
            export_to_excel(result, args.output, name)
        except OSError as e:
            print(f"Error writing {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Workbook written to {args.output}", file=sys.stderr)
        return 0

    else:
        print(f"Error: unsupported export format '{fmt}'", file=sys.stderr)
        print("Supported formats: json, csv, xlsx", file=sys.stderr)
        return 1


def _format_result(result, fmt: str, circuit_name: str = "") -> str:
    """Format simulation result as text."""
    if fmt == "csv":
        return export_simulation_results(result, circuit_name)
    elif fmt == "text":
        return _result_to_text(result)
    else:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _result_to_text(result) -> str:
    """Human-readable summary: aggregates, then one line per component."""
    lines = [
        f"Voltage:    {format_value(result.total_voltage, 'V')}",
        f"Resistance: {format_value(result.total_resistance, 'Ω')}",
        f"Current:    {format_value(result.total_current_ma / 1000, 'A')}",
        f"Power:      {format_value(result.total_power_mw / 1000, 'W')}",
    ]
    if result.active_path:
        lines.append(f"Path:       {' -> '.join(result.active_path)}")
    lines.append("")
    for comp in result.components:
        lines.append(
            f"{comp.component_id:<8} {comp.kind:<10} {comp.status.value:<8} "
            f"{comp.voltage:>8.2f} V {comp.current_ma:>8.2f} mA"
        )
    for warning in result.warnings:
        lines.append(f"[{warning.severity.value}] {warning.message}")
    return "\n".join(lines)


def cmd_batch(args: argparse.Namespace) -> int:
    """Run simulations on multiple circuit files."""
    # Resolve input files
    pattern = args.path
    path = Path(pattern)
    if path.is_dir():
        files = sorted(path.glob("*.json"))
    elif "*" in pattern or "?" in pattern:
        files = sorted(Path(p) for p in glob.glob(pattern))
    else:
        print(f"Error: {pattern} is not a directory or glob pattern", file=sys.stderr)
        return 1

    if not files:
        print(f"No .json circuit files found matching: {pattern}", file=sys.stderr)
        return 1

    output_dir = None
    if args.output_dir:
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    fmt = args.format
    settings = settings_from_args(args)
    results_summary = []
    any_failed = False

    for filepath in files:
        name = filepath.stem
        model, error = try_load_circuit(str(filepath))

        if model is None:
            results_summary.append({"file": filepath.name, "status": "LOAD_ERROR", "error": error})
            any_failed = True
            if args.fail_fast:
                break
            continue

        result = SimulationController(model).run_simulation(settings)

        danger = [w for w in result.warnings if w.severity.value == "danger"]
        results_summary.append({
            "file": filepath.name,
            "status": "DANGER" if danger else "OK",
            "details": f"{result.total_current_ma:.2f} mA, {len(result.warnings)} warning(s)",
        })

        if output_dir:
            ext = "csv" if fmt == "csv" else "json"
            out_path = output_dir / f"{name}.{ext}"
            out_path.write_text(_format_result(result, fmt, name), encoding="utf-8")

    # Print summary table
    print(f"\n{'File':<40} {'Status':<12} {'Details'}")
    print("-" * 70)
    for entry in results_summary:
        details = entry.get("details", entry.get("error", ""))
        print(f"{entry['file']:<40} {entry['status']:<12} {details}")

    total = len(results_summary)
    loaded = sum(1 for e in results_summary if e["status"] != "LOAD_ERROR")
    print(f"\n{loaded}/{total} simulated, {total - loaded} failed to load")

    return 1 if any_failed else 0


def cmd_import_analysis(args: argparse.Namespace) -> int:
    """Convert an analysis document's reconstructed circuit to circuit JSON."""
    filepath = Path(args.document)
    if not filepath.exists():
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        return 1

    try:
        text = filepath.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading {filepath}: {e}", file=sys.stderr)
        return 1

    document = parse_analysis_text(text)
    try:
        model = reconstructed_to_circuit(document)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out_path = Path(args.output) if args.output else filepath.with_name(f"{filepath.stem}_circuit.json")
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(model.to_dict(), f, indent=2, ensure_ascii=False)

    print(
        f"Imported {len(model.components)} components, {len(model.connections)} connections "
        f"-> {out_path}",
        file=sys.stderr,
    )
    return 0


def _add_solver_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max-depth", type=int, help="Longest loop the path search explores")
    parser.add_argument("--led-max-current", type=float, help="LED current rating in mA")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuit-sim-cli",
        description="Circuit simulator batch operations: simulate, validate, and export circuits.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log solver progress to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # simulate
    sim_parser = subparsers.add_parser("simulate", help="Run simulation and output results")
    sim_parser.add_argument("circuit", help="Path to circuit JSON file")
    sim_parser.add_argument(
        "--format", choices=["json", "csv", "text"], default="json", help="Output format (default: json)"
    )
    sim_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")
    _add_solver_flags(sim_parser)

    # validate
    val_parser = subparsers.add_parser("validate", help="Check circuit for errors without simulating")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    # export
    exp_parser = subparsers.add_parser("export", help="Export circuit or simulation report")
    exp_parser.add_argument("circuit", help="Path to circuit JSON file")
    exp_parser.add_argument(
        "--format", "-f", choices=["json", "csv", "xlsx"], default="json", help="Export format (default: json)"
    )
    exp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # batch
    batch_parser = subparsers.add_parser("batch", help="Run simulations on multiple circuit files")
    batch_parser.add_argument("path", help="Directory or glob pattern matching circuit JSON files")
    batch_parser.add_argument(
        "--format", choices=["json", "csv"], default="json", help="Output format for per-file results (default: json)"
    )
    batch_parser.add_argument("--output-dir", help="Write per-file results to this directory")
    batch_parser.add_argument("--fail-fast", action="store_true", help="Stop on first error")
    _add_solver_flags(batch_parser)

    # import-analysis
    import_parser = subparsers.add_parser(
        "import-analysis", help="Convert an analysis document's reconstructed circuit to circuit JSON"
    )
    import_parser.add_argument("document", help="Path to the analysis document (JSON text)")
    import_parser.add_argument("--output", "-o", help="Output JSON file path (default: <name>_circuit.json)")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handlers = {
        "simulate": cmd_simulate,
        "validate": cmd_validate,
        "export": cmd_export,
        "batch": cmd_batch,
        "import-analysis": cmd_import_analysis,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
