"""Application services for TikzSchem."""

from tikzschem.services.export_service import ExportService
from tikzschem.services.settings_service import SettingsService

__all__ = [
    "ExportService",
    "SettingsService",
]
