"""TikzSchem - schematic wire and terminal connectivity engine with CircuiTikZ export."""

__version__ = "0.1.0"
