"""Editor session: selection, clipboard, history and the gesture state machine."""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

from PySide6.QtCore import QObject, Signal

from tikzschem.commands import (
    AddComponentCommand,
    CommandStack,
    DeleteComponentCommand,
    DeleteWireCommand,
    FlipComponentCommand,
    RotateComponentCommand,
    SnapshotCommand,
)
from tikzschem.connectivity.canonical import cleanup_wires, merge_wires, split_wire_at_point
from tikzschem.connectivity.config import EditorConfig
from tikzschem.connectivity.junctions import find_junctions
from tikzschem.connectivity.propagation import (
    clear_smart_bridges,
    corner_mode_for_new_wire,
    insert_smart_bridges,
    move_component,
    move_wire_endpoint,
    move_wire_segment,
)
from tikzschem.connectivity.snapping import SnapKind, SnapResolver, SnapResult
from tikzschem.connectivity.splice import insert_on_wire
from tikzschem.models.circuit import Circuit
from tikzschem.models.component import Component, Terminal
from tikzschem.models.wire import SegmentTag, Wire
from tikzschem.services.export_service import ExportService
from tikzschem.services.settings_service import SettingsService
from tikzschem.utils.geometry import snap_to_grid

logger = logging.getLogger(__name__)


class GestureState(Enum):
    """The single pointer interaction in progress."""

    IDLE = "idle"
    DRAWING_WIRE = "drawing_wire"
    DRAGGING_ENDPOINT = "dragging_endpoint"
    DRAGGING_BODY = "dragging_body"
    DRAGGING_COMPONENTS = "dragging_components"
    AREA_SELECTING = "area_selecting"
    PANNING = "panning"


class Tool(Enum):
    """Active pointer tool."""

    SELECT = "select"
    WIRE = "wire"


@dataclass(frozen=True)
class SchematicSnapshot:
    """Detached copy of everything a renderer or emitter needs."""

    wires: tuple[Wire, ...]
    components: tuple[Component, ...]
    terminals: tuple[Terminal, ...]
    junctions: tuple[tuple[float, float], ...]
    anchors: dict[tuple[float, float], str] = field(default_factory=dict)


@dataclass
class _Gesture:
    """Context for the gesture in progress."""

    state: GestureState = GestureState.IDLE
    before: dict | None = None
    start: SnapResult | None = None
    cursor: tuple[float, float] | None = None
    wire: Wire | None = None
    end: int | None = None
    segment: SegmentTag | None = None
    anchor: tuple[float, float] | None = None
    multi: bool = False


class EditorSession(QObject):
    """
    Owns a circuit and applies editing gestures to it.

    Callers translate pointer events into world coordinates and call
    ``press``/``update``/``end``/``cancel`` (or the explicit ``begin_*``
    methods). Every committed gesture leaves the wires in canonical form and
    records one undo step.

    Signals:
        changed: Emitted after the circuit or selection changes
        gesture_changed: Emitted with the new GestureState value
    """

    changed = Signal()
    gesture_changed = Signal(str)

    def __init__(
        self,
        circuit: Circuit | None = None,
        config: EditorConfig | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._circuit = circuit if circuit is not None else Circuit()
        self._config = config or EditorConfig()
        self._resolver = SnapResolver(self._circuit, self._config)
        self._commands = CommandStack(max_size=self._config.max_history, parent=self)
        self._tool = Tool.SELECT
        self._selected_components: list[Component] = []
        self._selected_wires: list[Wire] = []
        self._clipboard: dict | None = None
        self._gesture = _Gesture()
        self._pan_offset = (0.0, 0.0)

    @classmethod
    def from_settings(
        cls,
        settings: SettingsService,
        circuit: Circuit | None = None,
        parent: QObject | None = None,
    ) -> "EditorSession":
        """Create a session configured from persisted editor settings."""
        return cls(circuit, settings.get_editor_config(), parent)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def circuit(self) -> Circuit:
        return self._circuit

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def command_stack(self) -> CommandStack:
        return self._commands

    @property
    def resolver(self) -> SnapResolver:
        return self._resolver

    @property
    def state(self) -> GestureState:
        return self._gesture.state

    @property
    def tool(self) -> Tool:
        return self._tool

    @tool.setter
    def tool(self, tool: Tool) -> None:
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()
        self._tool = tool

    @property
    def selected_components(self) -> list[Component]:
        return list(self._selected_components)

    @property
    def selected_wires(self) -> list[Wire]:
        return list(self._selected_wires)

    @property
    def has_clipboard(self) -> bool:
        return self._clipboard is not None

    @property
    def pan_offset(self) -> tuple[float, float]:
        return self._pan_offset

    @property
    def selection_rect(self) -> tuple[float, float, float, float] | None:
        """Normalised (x1, y1, x2, y2) of the area being selected."""
        gesture = self._gesture
        if gesture.state is not GestureState.AREA_SELECTING or gesture.anchor is None:
            return None
        (ax, ay), (bx, by) = gesture.anchor, gesture.cursor or gesture.anchor
        return (min(ax, bx), min(ay, by), max(ax, bx), max(ay, by))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_component(self, component: Component) -> None:
        self._selected_components = [component]
        self._selected_wires = []
        self.changed.emit()

    def select_wire(self, wire: Wire) -> None:
        self._selected_components = []
        self._selected_wires = [wire]
        self.changed.emit()

    def select_items(self, components: list[Component], wires: list[Wire]) -> None:
        self._selected_components = list(components)
        self._selected_wires = list(wires)
        self.changed.emit()

    def deselect_all(self) -> None:
        self._selected_components = []
        self._selected_wires = []
        self.changed.emit()

    def _reselect(self) -> None:
        """Re-bind the selection to live objects after a restore."""
        self._selected_components = [
            comp for c in self._selected_components if (comp := self._circuit.get_component(c.id)) is not None
        ]
        self._selected_wires = [
            wire for w in self._selected_wires if (wire := self._circuit.get_wire(w.id)) is not None
        ]

    # ------------------------------------------------------------------
    # Gesture dispatch
    # ------------------------------------------------------------------

    def press(self, x: float, y: float) -> GestureState:
        """Start whichever gesture the point calls for.

        With the wire tool this always starts a wire. Otherwise the order is
        wire endpoint, component, wire body, then area selection.
        """
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()

        if self._tool is Tool.WIRE:
            self.begin_draw_wire(x, y)
            return self.state

        hit = self._resolver.find_wire_endpoint(x, y, self._config.endpoint_grab_radius)
        if hit is not None:
            self.begin_drag_endpoint(*hit)
            return self.state

        component = self._resolver.find_component_at(x, y)
        if component is not None:
            self.begin_drag_components(component, x, y)
            return self.state

        wire = self._resolver.find_wire_at(x, y)
        if wire is not None:
            self.begin_drag_body(wire, x, y)
            return self.state

        self.begin_area_select(x, y)
        return self.state

    def _enter(self, gesture: _Gesture) -> None:
        self._gesture = gesture
        self.gesture_changed.emit(gesture.state.value)

    def begin_draw_wire(self, x: float, y: float) -> None:
        start = self._resolver.resolve(x, y)
        self._enter(_Gesture(GestureState.DRAWING_WIRE, start=start, cursor=start.position))

    def begin_drag_endpoint(self, wire: Wire, end: int) -> None:
        self.select_wire(wire)
        self._enter(_Gesture(GestureState.DRAGGING_ENDPOINT, before=self._circuit.to_dict(), wire=wire, end=end))

    def begin_drag_body(self, wire: Wire, x: float, y: float) -> None:
        before = self._circuit.to_dict()
        self.select_wire(wire)
        insert_smart_bridges(self._circuit, wire)
        self._enter(
            _Gesture(
                GestureState.DRAGGING_BODY,
                before=before,
                wire=wire,
                segment=wire.segment_at(x, y),
                anchor=(x, y),
            )
        )

    def begin_drag_components(self, component: Component, x: float, y: float) -> None:
        """Drag a component, or the whole selection if it is part of one."""
        before = self._circuit.to_dict()
        selected = component in self._selected_components
        multi = selected and (len(self._selected_components) > 1 or bool(self._selected_wires))
        if multi:
            anchor = (x, y)
        else:
            self.select_component(component)
            anchor = (x - component.x, y - component.y)
        self._enter(_Gesture(GestureState.DRAGGING_COMPONENTS, before=before, anchor=anchor, multi=multi))

    def begin_area_select(self, x: float, y: float) -> None:
        self.deselect_all()
        self._enter(_Gesture(GestureState.AREA_SELECTING, anchor=(x, y), cursor=(x, y)))

    def begin_pan(self, x: float, y: float) -> None:
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()
        self._enter(_Gesture(GestureState.PANNING, anchor=(x, y)))

    def update(self, x: float, y: float) -> None:
        """Feed a pointer move to the gesture in progress."""
        gesture = self._gesture
        state = gesture.state

        if state is GestureState.DRAWING_WIRE or state is GestureState.AREA_SELECTING:
            gesture.cursor = (x, y)
        elif state is GestureState.DRAGGING_ENDPOINT:
            snap = self._resolver.resolve(x, y)
            if snap.position != gesture.wire.endpoint(gesture.end):
                move_wire_endpoint(self._circuit, gesture.wire, gesture.end, snap.x, snap.y)
        elif state is GestureState.DRAGGING_BODY:
            step = self._grid_step(x, y)
            if step is not None:
                move_wire_segment(self._circuit, gesture.wire, gesture.segment, *step)
        elif state is GestureState.DRAGGING_COMPONENTS:
            self._drag_components(x, y)
        elif state is GestureState.PANNING:
            ax, ay = gesture.anchor
            self._pan_offset = (self._pan_offset[0] + x - ax, self._pan_offset[1] + y - ay)
            gesture.anchor = (x, y)
        else:
            return

        self.changed.emit()

    def _grid_step(self, x: float, y: float) -> tuple[float, float] | None:
        """Whole-grid delta since the anchor, advancing the anchor by it."""
        gesture = self._gesture
        grid = self._config.grid_size
        ax, ay = gesture.anchor
        dx, dy = x - ax, y - ay
        if abs(dx) < grid and abs(dy) < grid:
            return None
        step_x = snap_to_grid(dx, grid)
        step_y = snap_to_grid(dy, grid)
        if step_x == 0 and step_y == 0:
            return None
        gesture.anchor = (ax + step_x, ay + step_y)
        return step_x, step_y

    def _drag_components(self, x: float, y: float) -> None:
        gesture = self._gesture
        if gesture.multi:
            step = self._grid_step(x, y)
            if step is None:
                return
            settled: set = set()
            for comp in self._selected_components:
                move_component(self._circuit, comp, *step, settled=settled)
            for wire in self._selected_wires:
                for end in (1, 2):
                    if (wire.id, end) not in settled:
                        px, py = wire.endpoint(end)
                        wire.set_endpoint(end, px + step[0], py + step[1])
            return

        if not self._selected_components:
            return
        comp = self._selected_components[0]
        grid = self._config.grid_size
        new_x = snap_to_grid(x - gesture.anchor[0], grid)
        new_y = snap_to_grid(y - gesture.anchor[1], grid)
        if new_x != comp.x or new_y != comp.y:
            move_component(self._circuit, comp, new_x - comp.x, new_y - comp.y)

    def end(self, x: float, y: float) -> bool:
        """Finish the gesture in progress.

        Returns:
            True if the circuit changed and an undo step was recorded.
        """
        gesture = self._gesture
        state = gesture.state
        if state is GestureState.IDLE:
            return False
        committed = False

        if state is GestureState.DRAWING_WIRE:
            committed = self._finish_wire(x, y)
        elif state is GestureState.DRAGGING_ENDPOINT:
            committed = self._commit(gesture.before, "Move wire end")
        elif state is GestureState.DRAGGING_BODY:
            clear_smart_bridges(self._circuit)
            committed = self._commit(gesture.before, "Move wire")
        elif state is GestureState.DRAGGING_COMPONENTS:
            if not gesture.multi and len(self._selected_components) == 1:
                insert_on_wire(self._circuit, self._selected_components[0])
            committed = self._commit(gesture.before, "Move")
        elif state is GestureState.AREA_SELECTING:
            gesture.cursor = (x, y)
            self._complete_area_selection()

        self._enter(_Gesture())
        self.changed.emit()
        return committed

    def cancel(self) -> None:
        """Abort the gesture in progress, leaving the circuit as it was."""
        gesture = self._gesture
        if gesture.state is GestureState.IDLE:
            return
        if gesture.before is not None:
            self._circuit.restore(gesture.before)
            self._reselect()
        self._enter(_Gesture())
        self.changed.emit()

    def _commit(self, before: dict | None, description: str) -> bool:
        """Canonicalize and record the change since ``before``, if any."""
        cleanup_wires(self._circuit)
        self._reselect()
        after = self._circuit.to_dict()
        if before is None or after == before:
            return False
        self._commands.push(SnapshotCommand(self._circuit, before, after, description))
        return True

    def _finish_wire(self, x: float, y: float) -> bool:
        start = self._gesture.start
        end = self._resolver.resolve(x, y)
        if end.position == start.position:
            return False

        before = self._circuit.to_dict()
        mode = corner_mode_for_new_wire(self._circuit, start, end.x, end.y)
        new_wire = Wire(x1=start.x, y1=start.y, x2=end.x, y2=end.y, corner_mode=mode)

        if end.kind is SnapKind.WIRE_BODY:
            split_wire_at_point(self._circuit, end.wire, end.x, end.y)
        if start.kind is SnapKind.WIRE_BODY:
            split_wire_at_point(self._circuit, start.wire, start.x, start.y)

        if not (self._merge_into(end, new_wire) or self._merge_into(start, new_wire)):
            self._circuit.add_wire(new_wire)

        return self._commit(before, "Add wire")

    def _merge_into(self, snap: SnapResult, new_wire: Wire) -> bool:
        """Fold the new wire into the wire whose end it was snapped to."""
        if snap.kind is not SnapKind.WIRE_ENDPOINT or snap.wire is None:
            return False
        existing = snap.wire
        if self._circuit.get_wire(existing.id) is not existing:
            return False
        merged = merge_wires(existing, new_wire)
        if merged is None:
            return False
        self._circuit.wires[existing.id] = merged
        return True

    def _complete_area_selection(self) -> None:
        x1, y1, x2, y2 = self.selection_rect

        def inside(px: float, py: float) -> bool:
            return x1 <= px <= x2 and y1 <= py <= y2

        components = [c for c in self._circuit.iter_components() if inside(c.x, c.y)]
        wires = [w for w in self._circuit.iter_wires() if inside(w.x1, w.y1) or inside(w.x2, w.y2)]
        self._selected_components = components
        self._selected_wires = wires

    def preview_wire(self) -> Wire | None:
        """The wire that ``end`` would create at the current cursor."""
        gesture = self._gesture
        if gesture.state is not GestureState.DRAWING_WIRE or gesture.cursor is None:
            return None
        end = self._resolver.resolve(*gesture.cursor)
        mode = corner_mode_for_new_wire(self._circuit, gesture.start, end.x, end.y)
        return Wire(x1=gesture.start.x, y1=gesture.start.y, x2=end.x, y2=end.y, corner_mode=mode)

    # ------------------------------------------------------------------
    # Editing operations
    # ------------------------------------------------------------------

    def drop_component(self, type_key: str, x: float, y: float, **fields) -> Component:
        """Place a new component at the grid point nearest (x, y)."""
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()
        grid = self._config.grid_size
        component = Component(type=type_key, x=snap_to_grid(x, grid), y=snap_to_grid(y, grid), **fields)
        command = AddComponentCommand(self._circuit, component)
        self._commands.execute(command)
        if command.spliced:
            logger.debug(f"Dropped {component.name} onto a wire")
        self.select_component(component)
        return component

    def rotate_selected(self, angle: int = 90) -> bool:
        """Rotate the selected components clockwise by ``angle`` degrees."""
        ids = [c.id for c in self._selected_components]
        if not ids:
            return False
        self._run(RotateComponentCommand(self._circuit, ids, angle))
        return True

    def flip_selected(self, axis: str = "x") -> bool:
        """Mirror the selected components; ``axis`` is ``"x"`` or ``"y"``."""
        ids = [c.id for c in self._selected_components]
        if not ids:
            return False
        self._run(FlipComponentCommand(self._circuit, ids, axis))
        return True

    def delete_selected(self) -> bool:
        component_ids = [c.id for c in self._selected_components]
        wire_ids = [w.id for w in self._selected_wires]
        if not component_ids and not wire_ids:
            return False
        if component_ids:
            command = DeleteComponentCommand(self._circuit, component_ids, wire_ids)
        else:
            command = DeleteWireCommand(self._circuit, wire_ids)
        self._run(command)
        self.deselect_all()
        return True

    def copy_selected(self) -> bool:
        """Copy the selection into the session clipboard."""
        if not self._selected_components and not self._selected_wires:
            return False
        self._clipboard = {
            "components": [c.to_dict() for c in self._selected_components],
            "wires": [w.to_dict() for w in self._selected_wires],
        }
        return True

    def cut_selected(self) -> bool:
        if not self.copy_selected():
            return False
        return self.delete_selected()

    def paste(self, offset: float | None = None) -> bool:
        """Insert the clipboard contents shifted by ``offset`` on both axes."""
        if self._clipboard is None:
            return False
        if offset is None:
            offset = self._config.paste_offset

        before = self._circuit.to_dict()
        components = []
        for data in self._clipboard["components"]:
            comp = Component.from_dict(data)
            comp.id = uuid4()
            comp.name = ""
            comp.x += offset
            comp.y += offset
            self._circuit.add_component(comp)
            components.append(comp)
        wires = []
        for data in self._clipboard["wires"]:
            wire = Wire.from_dict(data)
            wire.id = uuid4()
            wire.translate(offset, offset)
            self._circuit.add_wire(wire)
            wires.append(wire)

        self._selected_components = components
        self._selected_wires = wires
        self._commit(before, "Paste")
        self.changed.emit()
        return True

    def clear_all(self) -> bool:
        """Remove everything (undoable)."""
        if not self._circuit.components and not self._circuit.wires:
            return False
        before = self._circuit.to_dict()
        self._circuit.clear()
        self.deselect_all()
        return self._commit(before, "Clear all")

    def undo(self) -> bool:
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()
        if self._commands.undo() is None:
            return False
        self.deselect_all()
        return True

    def redo(self) -> bool:
        if self._gesture.state is not GestureState.IDLE:
            self.cancel()
        if self._commands.redo() is None:
            return False
        self.deselect_all()
        return True

    def _run(self, command) -> None:
        self._commands.execute(command)
        self._reselect()
        self.changed.emit()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def anchor_map(self) -> dict[tuple[float, float], str]:
        """Terminal coordinates to ``Name.anchor`` references."""
        return ExportService.build_anchor_map(self._circuit)

    def snapshot(self) -> SchematicSnapshot:
        """Detached copy of the current schematic with derived data.

        Zero-length wires are left out and copies never carry the bridge flag.
        """
        return SchematicSnapshot(
            wires=tuple(
                wire.copy(is_smart_bridge=False)
                for wire in self._circuit.iter_wires()
                if not wire.is_degenerate
            ),
            components=tuple(copy.deepcopy(list(self._circuit.iter_components()))),
            terminals=tuple(self._circuit.all_terminals()),
            junctions=tuple(find_junctions(self._circuit)),
            anchors=self.anchor_map(),
        )
