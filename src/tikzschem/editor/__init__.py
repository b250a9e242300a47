"""Interactive editing session on top of the connectivity engine."""

from tikzschem.editor.session import EditorSession, GestureState, SchematicSnapshot, Tool

__all__ = ["EditorSession", "GestureState", "SchematicSnapshot", "Tool"]
