"""Project model for saving and loading schematics."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from tikzschem.models.circuit import Circuit


@dataclass
class ExportSettings:
    """Settings for CircuiTikZ emission."""

    scale: float = 40.0  # world units per drawing unit
    style: str = "american"

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"scale": self.scale, "style": self.style}

    @classmethod
    def from_dict(cls, data: dict) -> "ExportSettings":
        """Deserialize from dictionary."""
        return cls(
            scale=data.get("scale", 40.0),
            style=data.get("style", "american"),
        )


@dataclass
class Project:
    """A saved schematic with its export settings."""

    name: str = "Untitled Project"
    path: Path | None = None
    circuit: Circuit = field(default_factory=Circuit)
    export_settings: ExportSettings = field(default_factory=ExportSettings)
    created: datetime = field(default_factory=datetime.now)
    modified: datetime = field(default_factory=datetime.now)
    _dirty: bool = field(default=False, repr=False)

    @property
    def is_dirty(self) -> bool:
        """Check if project has unsaved changes."""
        return self._dirty

    def mark_dirty(self) -> None:
        """Mark project as having unsaved changes."""
        self._dirty = True
        self.modified = datetime.now()

    def mark_clean(self) -> None:
        """Mark project as saved."""
        self._dirty = False

    def to_dict(self) -> dict:
        """Serialize project to dictionary."""
        return {
            "version": "1.0",
            "name": self.name,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
            "export_settings": self.export_settings.to_dict(),
            "circuit": self.circuit.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, path: Path | None = None) -> "Project":
        """Deserialize project from dictionary."""
        return cls(
            name=data.get("name", "Untitled Project"),
            path=path,
            circuit=Circuit.from_dict(data.get("circuit", {})),
            export_settings=ExportSettings.from_dict(data.get("export_settings", {})),
            created=datetime.fromisoformat(data["created"]) if "created" in data else datetime.now(),
            modified=datetime.fromisoformat(data["modified"]) if "modified" in data else datetime.now(),
        )

    def save(self, path: Path | None = None) -> None:
        """Save project to file."""
        save_path = path or self.path
        if save_path is None:
            raise ValueError("No path specified for saving")

        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        self.path = save_path
        self.mark_clean()

    @classmethod
    def load(cls, path: Path) -> "Project":
        """Load project from file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        project = cls.from_dict(data, path)
        project.mark_clean()
        return project
