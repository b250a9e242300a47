"""Export service for emitting circuits as CircuiTikZ source."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from tikzschem.connectivity.junctions import find_junctions
from tikzschem.models.project import ExportSettings

if TYPE_CHECKING:
    from tikzschem.models.circuit import Circuit
    from tikzschem.models.component import Component
    from tikzschem.models.wire import Wire

logger = logging.getLogger(__name__)

# Tripoles are sized so their terminals land on the editor grid
GRID_ALIGNED_TRIPOLES = (
    "nmos", "pmos", "npn", "pnp", "nfet", "pfet", "nfetd", "pfetd",
    "njfet", "pjfet", "hemt", "nigbt", "pigbt",
)

EMPTY_CIRCUIT_TEMPLATE = "\\begin{circuitikz}[american]\n  % Add components to generated code\n\\end{circuitikz}"

AnchorMap = dict[tuple[float, float], str]


def format_coordinate(value: float) -> str:
    """One decimal place, never ``-0.0``."""
    text = f"{value:.1f}"
    return "0.0" if text == "-0.0" else text


class ExportService:
    """Service for exporting circuits to CircuiTikZ."""

    @staticmethod
    def build_anchor_map(circuit: "Circuit") -> AnchorMap:
        """Map terminal coordinates to ``Name.anchor`` references.

        Path-drawn bipoles create no named node and are left out. A terminal
        without an anchor maps to the bare node name.
        """
        anchors: AnchorMap = {}
        for comp in circuit.iter_components():
            if comp.symbol.is_path_drawn:
                continue
            for terminal in comp.terminals():
                anchor = comp.anchor_name(terminal.terminal_index)
                anchors[terminal.position] = f"{comp.name}.{anchor}" if anchor else comp.name
        return anchors

    @staticmethod
    def generate_circuitikz(circuit: "Circuit", settings: ExportSettings | None = None) -> str:
        """Render the whole circuit as a ``circuitikz`` environment."""
        settings = settings or ExportSettings()
        if not circuit.components and not circuit.wires:
            return EMPTY_CIRCUIT_TEMPLATE.replace("[american]", f"[{settings.style}]")

        scale = settings.scale
        lines = [f"\\begin{{circuitikz}}[{settings.style}]"]
        for tripole in GRID_ALIGNED_TRIPOLES:
            lines.append(f"    \\ctikzset{{tripoles/{tripole}/height=2.0, tripoles/{tripole}/width=1.0}}")
        lines.append("  \\ctikzset{monopoles/vcc/arrow={Triangle[open, length=8pt, width=14pt]}}")
        lines.append("  \\ctikzset{monopoles/vee/arrow={Triangle[open, length=8pt, width=14pt]}}")

        anchors = ExportService.build_anchor_map(circuit)

        for comp in circuit.iter_components():
            if comp.symbol.is_path_drawn:
                line = ExportService._bipole_line(comp, scale)
                if line:
                    lines.append(line)
            else:
                lines.extend(ExportService._node_lines(comp, scale))

        for wire in circuit.iter_wires():
            lines.append(ExportService._wire_line(wire, anchors, scale))

        for x, y in find_junctions(circuit):
            lines.append(f"  \\node[circ] at {ExportService._point(x, y, anchors, scale)} {{}};")

        lines.append("\\end{circuitikz}")
        return "\n".join(lines)

    @staticmethod
    def export_circuitikz(
        circuit: "Circuit",
        filepath: str | Path,
        settings: ExportSettings | None = None,
    ) -> None:
        """Write CircuiTikZ source to a file.

        Args:
            circuit: The circuit to export
            filepath: Destination ``.tex`` path
            settings: Scale and style; defaults when omitted
        """
        code = ExportService.generate_circuitikz(circuit, settings)
        Path(filepath).write_text(code + "\n", encoding="utf-8")
        logger.info(f"Exported CircuiTikZ to {filepath}")

    @staticmethod
    def _coord(x: float, y: float, scale: float) -> str:
        return f"({format_coordinate(x / scale)},{format_coordinate(-y / scale)})"

    @staticmethod
    def _point(x: float, y: float, anchors: AnchorMap, scale: float) -> str:
        anchor = anchors.get((x, y))
        if anchor:
            return f"({anchor})"
        return ExportService._coord(x, y, scale)

    @staticmethod
    def _bipole_line(comp: "Component", scale: float) -> str | None:
        symbol = comp.symbol
        if symbol.terminal_count < 2:
            logger.warning(f"Path-drawn symbol '{symbol.key}' has fewer than two terminals")
            return None

        options = [symbol.path_name]
        if comp.type == "resistor" and comp.style == "european":
            options[0] = "R, european resistor"
        if comp.type in ("vsource", "isource") and comp.style in ("european", "classical"):
            options.append("european")
        if comp.label:
            options.append(f"l=${comp.label}$")
        if comp.value:
            options.append(f"a={comp.value}")

        start = ExportService._coord(*comp.get_terminal_position(0), scale)
        end = ExportService._coord(*comp.get_terminal_position(1), scale)
        return f"  \\draw {start} to[{', '.join(options)}] {end};"

    @staticmethod
    def _node_lines(comp: "Component", scale: float) -> list[str]:
        symbol = comp.symbol
        tikz_name = symbol.tikz_name
        if comp.depletion and symbol.depletion_variant:
            tikz_name = symbol.depletion_variant

        options = list(comp.transistor_options)
        if comp.style and comp.style != "default":
            options.append(comp.style)
        if comp.rotation:
            options.append(f"rotate={-comp.rotation}")
        if comp.flipped_x:
            options.append("xscale=-1")
        if comp.flipped_y:
            options.append("yscale=-1")
        if comp.label:
            options.append(f"l=${comp.label}$")
        if comp.value:
            options.append(f"a={comp.value}")

        opt_str = f", {', '.join(options)}" if options else ""
        lines = [f"  \\node[{tikz_name}{opt_str}] ({comp.name}) at {ExportService._coord(comp.x, comp.y, scale)} {{}};"]

        if "bulk" in comp.transistor_options and comp.bulk_connection:
            lines.append(f"  \\draw ({comp.name}.bulk) -- ({comp.name}.{comp.bulk_connection});")
        if "doublegate" in comp.transistor_options and comp.doublegate_connection:
            lines.append(f"  \\draw ({comp.name}.G2) -- ({comp.name}.{comp.doublegate_connection});")
        return lines

    @staticmethod
    def _wire_line(wire: "Wire", anchors: AnchorMap, scale: float) -> str:
        p1 = ExportService._point(wire.x1, wire.y1, anchors, scale)
        p2 = ExportService._point(wire.x2, wire.y2, anchors, scale)
        connector = "--" if wire.is_straight else wire.corner_mode.connector
        return f"  \\draw {p1} {connector} {p2};"
