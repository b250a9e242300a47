"""Data models for TikzSchem."""

from tikzschem.models.component import Component, Terminal
from tikzschem.models.symbol import (
    SYMBOL_LIBRARY,
    SymbolDefinition,
    TerminalDef,
    get_symbol,
    register_symbol,
)
from tikzschem.models.wire import CornerMode, SegmentTag, Wire, WireSegment
from tikzschem.models.circuit import Circuit
from tikzschem.models.project import ExportSettings, Project

__all__ = [
    "Component",
    "Terminal",
    "SYMBOL_LIBRARY",
    "SymbolDefinition",
    "TerminalDef",
    "get_symbol",
    "register_symbol",
    "CornerMode",
    "SegmentTag",
    "Wire",
    "WireSegment",
    "Circuit",
    "ExportSettings",
    "Project",
]
