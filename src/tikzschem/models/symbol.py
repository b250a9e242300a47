"""Symbol definitions for the component palette."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalDef:
    """A connection point on a symbol, relative to the symbol origin."""

    x: float
    y: float
    anchor: str = ""  # CircuiTikZ anchor name, empty for single-node symbols


@dataclass(frozen=True)
class SymbolDefinition:
    """Immutable description of a component type, shared by all instances."""

    key: str
    name: str
    tikz_name: str
    category: str
    terminals: tuple[TerminalDef, ...]
    width: float
    height: float
    path_name: str | None = None  # to[...] key for path-drawn bipoles
    family: str = ""
    depletion_variant: str | None = None
    available_options: tuple[str, ...] = ()

    @property
    def terminal_count(self) -> int:
        return len(self.terminals)

    @property
    def is_path_drawn(self) -> bool:
        """Bipoles drawn with ``to[...]`` create no named node to anchor to."""
        return self.path_name is not None


SYMBOL_CATEGORIES: dict[str, str] = {
    "monopoles": "Grounds & Terminals",
    "resistors": "Resistors",
    "dynamics": "Capacitors & Inductors",
    "sources": "Sources",
    "diodes": "Diodes",
    "transistors": "Transistors",
    "opamps": "Op-Amps",
    "switches": "Switches",
    "meters": "Meters",
    "gates": "Logic Gates",
}


def _bipole(
    key: str,
    name: str,
    tikz_name: str,
    category: str,
    half_span: float,
    width: float,
    height: float,
    anchors: bool = True,
) -> SymbolDefinition:
    """Create a horizontal two-terminal symbol drawn with path syntax."""
    left, right = ("left", "right") if anchors else ("", "")
    return SymbolDefinition(
        key=key,
        name=name,
        tikz_name=tikz_name,
        category=category,
        terminals=(TerminalDef(-half_span, 0, left), TerminalDef(half_span, 0, right)),
        width=width,
        height=height,
        path_name=tikz_name,
    )


def _transistor(
    key: str,
    name: str,
    family: str,
    control: str,
    first: str,
    second: str,
    inverted: bool = False,
    options: tuple[str, ...] = (),
    depletion_variant: str | None = None,
) -> SymbolDefinition:
    """Create a three-terminal transistor symbol (control pin on the left).

    The first main terminal sits on top unless ``inverted``; terminal order
    is kept as given because emitters rely on it.
    """
    first_y = 40 if inverted else -40
    return SymbolDefinition(
        key=key,
        name=name,
        tikz_name=key,
        category="transistors",
        terminals=(
            TerminalDef(-40, 0, control),
            TerminalDef(0, first_y, first),
            TerminalDef(0, -first_y, second),
        ),
        width=50,
        height=80,
        family=family,
        depletion_variant=depletion_variant,
        available_options=options,
    )


def _monopole(key: str, name: str, terminal_y: float) -> SymbolDefinition:
    return SymbolDefinition(
        key=key,
        name=name,
        tikz_name=key,
        category="monopoles",
        terminals=(TerminalDef(0, terminal_y),),
        width=40,
        height=60,
    )


def _gate(key: str, name: str, tikz_name: str, inputs: int) -> SymbolDefinition:
    if inputs == 1:
        ins: tuple[TerminalDef, ...] = (TerminalDef(-30, 0, "in"),)
    else:
        ins = (TerminalDef(-30, -10, "in 1"), TerminalDef(-30, 10, "in 2"))
    return SymbolDefinition(
        key=key,
        name=name,
        tikz_name=tikz_name,
        category="gates",
        terminals=ins + (TerminalDef(30, 0, "out"),),
        width=60,
        height=45 if inputs > 1 else 40,
    )


_MOS_OPTIONS = ("bulk", "solderdot", "doublegate")

SYMBOL_LIBRARY: dict[str, SymbolDefinition] = {
    symbol.key: symbol
    for symbol in (
        # Grounds & terminals
        _monopole("ground", "Ground", -40),
        _monopole("vcc", "VCC", 40),
        _monopole("vee", "VEE", -40),
        _monopole("antenna", "Antenna", 40),
        # Resistors
        _bipole("resistor", "Resistor", "R", "resistors", 40, 80, 20),
        _bipole("varResistor", "Variable R", "vR", "resistors", 40, 80, 40),
        SymbolDefinition(
            key="potentiometer",
            name="Potentiometer",
            tikz_name="pR",
            category="resistors",
            terminals=(
                TerminalDef(-40, 0, "left"),
                TerminalDef(40, 0, "right"),
                TerminalDef(0, -20, "wiper"),
            ),
            width=80,
            height=40,
            path_name="pR",
        ),
        # Capacitors & inductors
        _bipole("capacitor", "Capacitor", "C", "dynamics", 40, 80, 30),
        _bipole("polarCap", "Electrolytic", "eC", "dynamics", 40, 80, 30),
        _bipole("varCapacitor", "Variable Cap", "vC", "dynamics", 30, 60, 35),
        _bipole("curvedCap", "Curved Cap", "cC", "dynamics", 30, 60, 30),
        SymbolDefinition(
            key="capSensor",
            name="Cap Sensor",
            tikz_name="sC",
            category="dynamics",
            terminals=(
                TerminalDef(-30, 0, "left"),
                TerminalDef(30, 0, "right"),
                TerminalDef(0, -20, "tip"),
                TerminalDef(-10, 15, "wiper"),
            ),
            width=60,
            height=40,
            path_name="sC",
        ),
        _bipole("piezoelectric", "Piezoelectric", "PZ", "dynamics", 40, 80, 30),
        _bipole("cpe", "CPE", "cpe", "dynamics", 40, 80, 30),
        _bipole("ferroCap", "Ferroelectric", "feC", "dynamics", 40, 80, 30),
        _bipole("inductor", "Inductor", "L", "dynamics", 40, 80, 30),
        # Sources
        _bipole("vsource", "DC Voltage", "vsource", "sources", 30, 60, 40),
        _bipole("isource", "DC Current", "isource", "sources", 30, 60, 40),
        _bipole("battery", "Battery", "battery1", "sources", 30, 60, 40),
        _bipole("vsourceAC", "AC source", "sV", "sources", 30, 60, 40),
        _bipole("fuse", "Fuse", "fuse", "sources", 30, 60, 20),
        _bipole("lamp", "Lamp", "lamp", "sources", 30, 60, 40),
        # Diodes
        _bipole("diode", "Diode", "D", "diodes", 30, 60, 30),
        _bipole("zener", "Zener", "zD", "diodes", 30, 60, 30),
        _bipole("led", "LED", "leD", "diodes", 30, 60, 40),
        _bipole("photodiode", "Photodiode", "pD", "diodes", 30, 60, 40),
        # Transistors
        _transistor("npn", "NPN", "bjt", "B", "C", "E", options=("bulk", "solderdot")),
        _transistor("pnp", "PNP", "bjt", "B", "C", "E", True, ("bulk", "solderdot")),
        _transistor("nmos", "NMOS", "mosfet", "G", "D", "S", False, _MOS_OPTIONS, "nmosd"),
        _transistor("pmos", "PMOS", "mosfet", "G", "D", "S", True, _MOS_OPTIONS, "pmosd"),
        _transistor("nfet", "N-FET", "fet", "G", "D", "S", False, _MOS_OPTIONS, "nfetd"),
        _transistor("pfet", "P-FET", "fet", "G", "D", "S", True, _MOS_OPTIONS, "pfetd"),
        _transistor("njfet", "N-JFET", "jfet", "G", "D", "S"),
        _transistor("pjfet", "P-JFET", "jfet", "G", "D", "S", True),
        _transistor("nigbt", "N-IGBT", "igbt", "G", "C", "E", options=("bodydiode",)),
        _transistor("pigbt", "P-IGBT", "igbt", "G", "C", "E", True, ("bodydiode",)),
        _transistor("hemt", "HEMT", "fet", "G", "D", "S"),
        # Op-amps
        SymbolDefinition(
            key="opamp",
            name="Op-Amp",
            tikz_name="op amp",
            category="opamps",
            terminals=(
                TerminalDef(-40, -15, "-"),
                TerminalDef(-40, 15, "+"),
                TerminalDef(40, 0, "out"),
            ),
            width=80,
            height=60,
        ),
        # Switches
        _bipole("switchOpen", "Switch", "nos", "switches", 30, 60, 30, anchors=False),
        _bipole("pushButton", "Push Button", "push button", "switches", 30, 60, 30, anchors=False),
        # Meters
        _bipole("ammeter", "Ammeter", "ammeter", "meters", 30, 60, 40, anchors=False),
        _bipole("voltmeter", "Voltmeter", "voltmeter", "meters", 30, 60, 40, anchors=False),
        # Logic gates
        _gate("andGate", "AND Gate", "and port", 2),
        _gate("orGate", "OR Gate", "or port", 2),
        _gate("notGate", "NOT Gate", "not port", 1),
    )
}

# Reference designator prefixes used for automatic naming
NAME_PREFIXES: dict[str, str] = {
    "resistor": "R", "varResistor": "R", "potentiometer": "POT",
    "capacitor": "C", "polarCap": "C", "varCapacitor": "C", "curvedCap": "C",
    "capSensor": "C", "piezoelectric": "PZ", "cpe": "Z", "ferroCap": "C",
    "inductor": "L",
    "vsource": "V", "isource": "I", "battery": "V", "vsourceAC": "V",
    "fuse": "F", "lamp": "LP",
    "diode": "D", "zener": "D", "led": "D", "photodiode": "D",
    "npn": "Q", "pnp": "Q", "nmos": "M", "pmos": "M", "nfet": "M", "pfet": "M",
    "njfet": "J", "pjfet": "J", "nigbt": "Q", "pigbt": "Q", "hemt": "Q",
    "opamp": "U",
    "switchOpen": "SW", "pushButton": "SW",
    "ammeter": "A", "voltmeter": "V",
    "andGate": "U", "orGate": "U", "notGate": "U",
    "ground": "GND", "vcc": "VCC", "vee": "VEE", "antenna": "ANT",
}

DEFAULT_NAME_PREFIX = "U"


def get_symbol(key: str) -> SymbolDefinition | None:
    """Look up a symbol definition by type key."""
    return SYMBOL_LIBRARY.get(key)


def register_symbol(symbol: SymbolDefinition, prefix: str | None = None) -> None:
    """Add (or replace) a symbol in the library."""
    if symbol.key in SYMBOL_LIBRARY:
        logger.debug(f"Replacing symbol definition '{symbol.key}'")
    SYMBOL_LIBRARY[symbol.key] = symbol
    if prefix:
        NAME_PREFIXES[symbol.key] = prefix


def placeholder_symbol(key: str) -> SymbolDefinition:
    """Terminal-less stand-in for a symbol key missing from the library."""
    return SymbolDefinition(
        key=key,
        name=key,
        tikz_name=key,
        category="",
        terminals=(),
        width=60,
        height=30,
    )


def name_prefix(key: str) -> str:
    """Reference designator prefix for a symbol key."""
    return NAME_PREFIXES.get(key, DEFAULT_NAME_PREFIX)


def symbols_in_category(category: str) -> list[SymbolDefinition]:
    """All library symbols belonging to a palette category, in library order."""
    return [s for s in SYMBOL_LIBRARY.values() if s.category == category]
