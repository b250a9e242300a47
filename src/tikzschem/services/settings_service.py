"""Application settings service using QSettings."""

import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from tikzschem.connectivity.config import EditorConfig
from tikzschem.models.project import ExportSettings

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for managing persistent editor and export settings."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings("TikzSchem", "TikzSchem")

    # Recent projects
    def get_recent_projects(self) -> list[str]:
        """Get list of recently opened projects."""
        return self._settings.value("recent_projects", [], type=list) or []

    def add_recent_project(self, path: str) -> None:
        """Add a project to the recent list."""
        recent = self.get_recent_projects()
        path = str(Path(path).resolve())
        if path in recent:
            recent.remove(path)
        recent.insert(0, path)
        recent = recent[:10]  # Keep last 10
        self._settings.setValue("recent_projects", recent)

    def clear_recent_projects(self) -> None:
        """Clear the recent projects list."""
        self._settings.setValue("recent_projects", [])

    # Grid and snapping
    def get_grid_size(self) -> float:
        """Get grid size in world units."""
        return self._float("editor/grid_size", EditorConfig.grid_size)

    def set_grid_size(self, size: float) -> None:
        self._settings.setValue("editor/grid_size", size)

    def get_terminal_snap_radius(self) -> float:
        return self._float("editor/terminal_snap_radius", EditorConfig.terminal_snap_radius)

    def set_terminal_snap_radius(self, radius: float) -> None:
        self._settings.setValue("editor/terminal_snap_radius", radius)

    def get_max_history(self) -> int:
        """Get the number of undo steps kept."""
        return int(self._float("editor/max_history", EditorConfig.max_history))

    def set_max_history(self, size: int) -> None:
        self._settings.setValue("editor/max_history", size)

    def get_editor_config(self) -> EditorConfig:
        """Collect every stored editor parameter, falling back to defaults."""
        defaults = EditorConfig()
        return EditorConfig(
            grid_size=self.get_grid_size(),
            terminal_snap_radius=self.get_terminal_snap_radius(),
            endpoint_snap_radius=self._float("editor/endpoint_snap_radius", defaults.endpoint_snap_radius),
            body_snap_threshold=self._float("editor/body_snap_threshold", defaults.body_snap_threshold),
            wire_hit_threshold=self._float("editor/wire_hit_threshold", defaults.wire_hit_threshold),
            endpoint_grab_radius=self._float("editor/endpoint_grab_radius", defaults.endpoint_grab_radius),
            paste_offset=self._float("editor/paste_offset", defaults.paste_offset),
            max_history=self.get_max_history(),
        )

    def set_editor_config(self, config: EditorConfig) -> None:
        """Persist every editor parameter."""
        for key, value in config.to_dict().items():
            self._settings.setValue(f"editor/{key}", value)

    # Export
    def get_export_settings(self) -> ExportSettings:
        """Get CircuiTikZ scale and style."""
        defaults = ExportSettings()
        return ExportSettings(
            scale=self._float("export/scale", defaults.scale),
            style=str(self._settings.value("export/style", defaults.style)),
        )

    def set_export_settings(self, settings: ExportSettings) -> None:
        self._settings.setValue("export/scale", settings.scale)
        self._settings.setValue("export/style", settings.style)

    def sync(self) -> None:
        """Flush pending writes to storage."""
        self._settings.sync()

    def _float(self, key: str, default: float) -> float:
        value = self._settings.value(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable setting {key}={value!r}")
            return float(default)
