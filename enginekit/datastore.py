"""Key/value persistence of simple values and vectors in per-object JSON files."""

from __future__ import annotations

import json
import sys
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_BASE_PATH = "resources/jsons"


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _number(value: Any, cast: type) -> Any:
    if not isinstance(value, (int, float)):
        raise TypeError(f"type must be number, but is {_json_type(value)}")
    return cast(value)


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    return value


def _convert(value: Any, default: Any) -> Any:
    kind = type(default)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"type must be boolean, but is {_json_type(value)}")
        return value
    if isinstance(default, Enum):
        return kind(_number(value, int))
    if isinstance(default, int):
        return _number(value, int)
    if isinstance(default, float):
        return _number(value, float)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError(f"type must be string, but is {_json_type(value)}")
        return value
    if is_dataclass(default) and not isinstance(default, type):
        if not isinstance(value, dict):
            raise TypeError(f"type must be object, but is {_json_type(value)}")
        try:
            return kind(**{f.name: _number(value[f.name], float) for f in fields(default)})
        except KeyError as exc:
            raise KeyError(f"key {exc.args[0]!r} not found") from None
    return value


class DataHandler:
    """Stores values under keys in ``<base_path>/<folder>/<file>.json``."""

    def __init__(self, folder: str, file: str, base_path: str | Path = DEFAULT_BASE_PATH) -> None:
        self._folder = Path(base_path) / folder
        self._file_name = f"{file}.json"
        self._folder.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Full path of the backing JSON file."""
        return self._folder / self._file_name

    def _read(self) -> dict[str, Any] | None:
        try:
            with self.path.open(encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return None

    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, keeping the other keys of the file."""
        data = self._read() or {}
        data[key] = _encode(value)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=4, sort_keys=True, ensure_ascii=False)

    def load(self, key: str, default: T) -> T:
        """Return the value under ``key`` converted to the type of ``default``.

        ``default`` is returned when the file or key is missing or the stored
        value cannot be converted.
        """
        data = self._read()
        if data is None or key not in data:
            return default
        try:
            return _convert(data[key], default)
        except (TypeError, ValueError, KeyError) as exc:
            print(f"JSON Load Error: {exc} (Key: {key})", file=sys.stderr)
        return default