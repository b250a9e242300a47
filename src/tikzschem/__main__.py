"""Entry point: convert a saved schematic to CircuiTikZ."""

import argparse
import logging
import sys
from pathlib import Path

from tikzschem.connectivity.canonical import cleanup_wires
from tikzschem.models.project import Project
from tikzschem.services.export_service import ExportService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tikzschem",
        description="Emit CircuiTikZ source for a saved schematic project.",
    )
    parser.add_argument("project", type=Path, help="Project file (.json)")
    parser.add_argument("-o", "--output", type=Path, help="Write to this .tex file instead of stdout")
    parser.add_argument("--scale", type=float, help="World units per drawing unit (default from project)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the converter."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        project = Project.load(args.project)
    except (OSError, ValueError, KeyError) as exc:
        print(f"Error: cannot load {args.project}: {exc}", file=sys.stderr)
        return 1

    settings = project.export_settings
    if args.scale:
        settings.scale = args.scale

    cleanup_wires(project.circuit)

    if args.output:
        ExportService.export_circuitikz(project.circuit, args.output, settings)
    else:
        print(ExportService.generate_circuitikz(project.circuit, settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
