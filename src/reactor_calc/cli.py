"""Unified CLI for ReactorCalc.

Provides commands for running calculations from a YAML config, printing
unit tables, and serving the HTTP API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from reactor_calc import __version__

logger = logging.getLogger(__name__)


def _format_text(index: int, response: dict[str, Any]) -> str:
    if "error" in response:
        error = response["error"]
        return f"[{index}] error {error['kind']}: {error['message']}"

    units = response.get("units", {})
    lines = [f"[{index}] {response['reactor']} {response['mode']}"]
    for name, value in response["values"].items():
        if isinstance(value, dict):
            symbol = units.get(name, "")
            rendered = ", ".join(f"{key}={val:.6g}" for key, val in value.items())
            lines.append(f"    {name}: {rendered} {symbol}".rstrip())
        elif isinstance(value, list):
            lines.append(f"    {name}: {len(value)} points")
        elif isinstance(value, float):
            lines.append(f"    {name}: {value:.6g} {units.get(name, '')}".rstrip())
        elif value is not None:
            lines.append(f"    {name}: {value}")
    return "\n".join(lines)


def cmd_calculate(args: argparse.Namespace) -> None:
    """Run every calculation of a YAML config."""
    from reactor_calc.engine import handle_request
    from reactor_calc.exceptions import ConfigurationError
    from reactor_calc.utils.config import load_config
    from reactor_calc.utils.logging import setup_logging

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.log_file,
        module_levels=config.logging.module_levels,
    )

    responses = [handle_request(request) for request in config.calculations]

    if args.format == "json":
        print(json.dumps(responses, indent=2, ensure_ascii=False))
    else:
        for index, response in enumerate(responses):
            print(_format_text(index, response))

    failures = sum(1 for response in responses if "error" in response)
    if failures:
        logger.warning(f"{failures} of {len(responses)} calculation(s) failed")
        sys.exit(1)


def cmd_units(args: argparse.Namespace) -> None:
    """Print the unit table of one system."""
    from reactor_calc.exceptions import ReactorCalcError
    from reactor_calc.utils.units import as_unit_system, unit_table

    try:
        system = as_unit_system(args.system)
        table = unit_table(system, args.order)
    except ReactorCalcError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    print(f"Unit system: {system.value} (rate constant at order {args.order:g})")
    for quantity, spec in table.items():
        print(f"  {quantity:<28} {spec.factor:<14.6g} {spec.symbol}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    try:
        import uvicorn
    except ImportError:
        print("uvicorn is required. Install with: pip install reactor-calc[api]")
        sys.exit(1)

    from reactor_calc.api.server import app

    uvicorn.run(app, host=args.host, port=args.port)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``reactor-calc`` command."""
    parser = argparse.ArgumentParser(
        prog="reactor-calc",
        description="ReactorCalc: closed-form reactor sizing and kinetics",
    )
    parser.add_argument(
        "--version", action="version", version=f"reactor-calc {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # calculate
    calc_parser = subparsers.add_parser("calculate", help="Run calculations from a YAML config")
    calc_parser.add_argument("--config", required=True, help="Path to YAML config file")
    calc_parser.add_argument(
        "--format", choices=["json", "text"], default="text", help="Output format"
    )
    calc_parser.set_defaults(func=cmd_calculate)

    # units
    units_parser = subparsers.add_parser("units", help="Print a unit system's factors and symbols")
    units_parser.add_argument("--system", default="SI", help="SI, CGS or Imperial")
    units_parser.add_argument(
        "--order", type=float, default=1.0, help="Reaction order for rate-constant units"
    )
    units_parser.set_defaults(func=cmd_units)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the FastAPI server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=logging.INFO)
    args.func(args)


__all__ = ["main"]
