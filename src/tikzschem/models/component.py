"""Component model for placed schematic symbols."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from tikzschem.models.symbol import SymbolDefinition, get_symbol, placeholder_symbol

# Extra margin around the symbol box for hit testing
HIT_PADDING = 10.0


@dataclass(frozen=True)
class Terminal:
    """World-space connection point of a placed component."""

    x: float
    y: float
    component_id: UUID
    terminal_index: int

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Component:
    """A placed symbol with position, orientation and display fields."""

    id: UUID = field(default_factory=uuid4)
    type: str = "resistor"
    category: str = ""
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: int = 0  # Degrees, multiples of 90
    flipped_x: bool = False
    flipped_y: bool = False
    style: str = "default"
    label: str = ""
    label_position: str = "top"
    value: str = ""
    transistor_options: list[str] = field(default_factory=list)
    depletion: bool = False
    bulk_connection: str = ""
    doublegate_connection: str = ""

    def __post_init__(self):
        """Fill the category from the symbol library when not given."""
        if not self.category:
            self.category = self.symbol.category
        self.rotation = int(self.rotation) % 360

    @property
    def symbol(self) -> SymbolDefinition:
        """The immutable definition for this component's type."""
        return get_symbol(self.type) or placeholder_symbol(self.type)

    @property
    def is_vertical(self) -> bool:
        """True when the symbol's local x axis points up or down on screen."""
        return self.rotation in (90, 270)

    def get_terminal_position(self, terminal_index: int) -> tuple[float, float]:
        """Get absolute position of a terminal, accounting for flips and rotation."""
        terminals = self.symbol.terminals
        if terminal_index < 0 or terminal_index >= len(terminals):
            raise IndexError(f"Terminal index {terminal_index} out of range")

        local = terminals[terminal_index]
        px, py = local.x, local.y

        # Flip first, in symbol space
        if self.flipped_x:
            px = -px
        if self.flipped_y:
            py = -py

        # Each quarter turn maps (x, y) to (y, -x)
        for _ in range((self.rotation // 90) % 4):
            px, py = py, -px

        return self.x + px, self.y + py

    def terminals(self) -> list[Terminal]:
        """All terminals in symbol order."""
        result = []
        for index in range(self.symbol.terminal_count):
            tx, ty = self.get_terminal_position(index)
            result.append(Terminal(tx, ty, self.id, index))
        return result

    def anchor_name(self, terminal_index: int) -> str:
        """Symbolic anchor of a terminal (empty when the symbol has none)."""
        terminals = self.symbol.terminals
        if 0 <= terminal_index < len(terminals):
            return terminals[terminal_index].anchor
        return ""

    def contains_point(self, x: float, y: float, padding: float = HIT_PADDING) -> bool:
        """Bounding box hit test around the component centre."""
        symbol = self.symbol
        half_w = symbol.width / 2 + padding
        half_h = symbol.height / 2 + padding
        return self.x - half_w <= x <= self.x + half_w and self.y - half_h <= y <= self.y + half_h

    def rotate(self, degrees: int = 90) -> None:
        """Rotate clockwise as seen by the user."""
        self.rotation = (self.rotation - degrees) % 360

    def flip_horizontal(self) -> None:
        self.flipped_x = not self.flipped_x

    def flip_vertical(self) -> None:
        self.flipped_y = not self.flipped_y

    def to_dict(self) -> dict:
        """Serialize component to dictionary."""
        return {
            "id": str(self.id),
            "type": self.type,
            "category": self.category,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "flipped_x": self.flipped_x,
            "flipped_y": self.flipped_y,
            "style": self.style,
            "label": self.label,
            "label_position": self.label_position,
            "value": self.value,
            "transistor_options": list(self.transistor_options),
            "depletion": self.depletion,
            "bulk_connection": self.bulk_connection,
            "doublegate_connection": self.doublegate_connection,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Component":
        """Deserialize component from dictionary."""
        return cls(
            id=UUID(data["id"]),
            type=data["type"],
            category=data.get("category", ""),
            name=data.get("name", ""),
            x=data["x"],
            y=data["y"],
            rotation=data.get("rotation", 0),
            flipped_x=data.get("flipped_x", False),
            flipped_y=data.get("flipped_y", False),
            style=data.get("style", "default"),
            label=data.get("label", ""),
            label_position=data.get("label_position", "top"),
            value=data.get("value", ""),
            transistor_options=list(data.get("transistor_options", [])),
            depletion=data.get("depletion", False),
            bulk_connection=data.get("bulk_connection", ""),
            doublegate_connection=data.get("doublegate_connection", ""),
        )
