"""Main CLI entry point for the doxygen-graph command-line tool.

Loads a Doxygen XML output folder, resolves the object graph and prints the
permalink table, the top-level entries of each collection and the diagnostics
collected on the way.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from doxygen_graph import __version__
from doxygen_graph.api import process_folder
from doxygen_graph.shared import (
    ConfigError,
    GraphConfig,
    InputError,
    SchemaViolation,
    configure_logging,
    get_logger,
)
from doxygen_graph.workspace import Workspace

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_SCHEMA_VIOLATION = 2


def load_config(config_path: Optional[Path]) -> GraphConfig:
    """Read a JSON configuration file, or return the defaults."""
    if config_path is None:
        return GraphConfig()
    try:
        json_str = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    return GraphConfig.from_json(json_str)


def format_text(report: Dict[str, Any]) -> str:
    """Human-readable summary of a workspace report."""
    lines: List[str] = []
    project = report.get("project_name") or "(unnamed project)"
    lines.append(f"Project: {project} (Doxygen {report.get('doxygen_version') or '?'})")

    for name, collection in report["collections"].items():
        compounds = collection["compounds"]
        lines.append(f"[{name}] {len(compounds)} compounds")
        for compound_id in collection["top_level"]:
            compound = compounds[compound_id]
            lines.append(f"  {compound['label']}  {compound['permalink'] or '-'}")

    lines.append("Permalinks:")
    for compound_id, permalink in report["permalinks"].items():
        lines.append(f"  {compound_id} -> {permalink}")

    diagnostics = report["diagnostics"]
    lines.append(f"Diagnostics: {len(diagnostics)}")
    for diagnostic in diagnostics:
        lines.append(
            f"  {diagnostic['severity']} [{diagnostic['component']}] {diagnostic['message']}"
        )
    return "\n".join(lines) + "\n"


def render_report(workspace: Workspace, output_format: str) -> str:
    report = workspace.to_dict()
    if output_format == "json":
        return json.dumps(report, indent=2) + "\n"
    return format_text(report)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="doxygen-graph",
        description="Resolve a Doxygen XML output folder into a linked documentation graph"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "xml_folder",
        type=Path,
        help="Doxygen XML output folder (the one holding index.xml)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    logger = get_logger(__name__, None, "cli")

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    package_logger = logging.getLogger("doxygen_graph")
    previous_level = package_logger.level
    level = "DEBUG" if args.verbose else config.global_.logging_level
    handler = configure_logging(level)
    try:
        workspace = process_folder(args.xml_folder, config)
        output = render_report(workspace, args.format)
        if args.output:
            args.output.write_text(output, encoding="utf-8")
        else:
            sys.stdout.write(output)
    except SchemaViolation as e:
        logger.debug("Schema violation", extra={"folder": str(args.xml_folder)})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SCHEMA_VIOLATION
    except (InputError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
