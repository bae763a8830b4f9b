"""Level layouts stored as JSON lists of placed objects."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .geometry import Vector3

DEFAULT_DIRECTORY = "resources/jsons"


@dataclass(frozen=True)
class LevelObject:
    """One placed object, already converted to the engine's axes."""

    name: str
    translation: Vector3
    rotation: Vector3
    scale: Vector3

    @property
    def model_file(self) -> str:
        """Model file the object is drawn with."""
        return f"{self.name}.obj"


def _vector(values: Any, first: int, second: int, third: int) -> Vector3:
    return Vector3(float(values[first]), float(values[second]), float(values[third]))


class LevelData:
    """Objects read from level JSON files, looked up by name."""

    def __init__(self, directory: str | Path = DEFAULT_DIRECTORY) -> None:
        self.directory = Path(directory)
        self._objects: list[LevelObject] = []

    @property
    def objects(self) -> tuple[LevelObject, ...]:
        return tuple(self._objects)

    def load_json(self, json_file_name: str) -> None:
        """Append the objects of ``json_file_name`` in the level directory.

        The file's axes are remapped: translation (x, y, z) becomes
        (y, z, x); rotation and scale (x, y, z) become (x, z, y).
        """
        with (self.directory / json_file_name).open(encoding="utf-8") as handle:
            scene = json.load(handle)

        for entry in scene.get("objects") or []:
            transform = entry["transform"]
            self._objects.append(
                LevelObject(
                    name=entry["name"],
                    translation=_vector(transform["translation"], 1, 2, 0),
                    rotation=_vector(transform["rotation"], 0, 2, 1),
                    scale=_vector(transform["scaling"], 0, 2, 1),
                )
            )

    def _find(self, name: str) -> LevelObject:
        for obj in self._objects:
            if obj.name == name:
                return obj
        raise KeyError(f"Object with name {name} not found.")

    def translation_by_name(self, name: str) -> Vector3:
        return self._find(name).translation

    def rotation_by_name(self, name: str) -> Vector3:
        return self._find(name).rotation

    def scale_by_name(self, name: str) -> Vector3:
        return self._find(name).scale