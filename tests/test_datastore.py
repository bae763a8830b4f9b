import json
from enum import IntEnum

import pytest

from enginekit.datastore import DataHandler
from enginekit.geometry import Vector2, Vector3


class Shape(IntEnum):
    CUBE = 0
    SPHERE = 1
    PLANE = 2


@pytest.fixture
def handler(tmp_path):
    return DataHandler("Collider", "player", base_path=tmp_path)


def test_constructor_creates_folder(tmp_path):
    handler = DataHandler("Things", "box", base_path=tmp_path)
    assert (tmp_path / "Things").is_dir()
    assert handler.path == tmp_path / "Things" / "box.json"


def test_missing_file_returns_default(handler):
    assert handler.load("radius", 2.5) == 2.5
    assert not handler.path.exists()


def test_round_trip_scalars(handler):
    handler.save("count", 7)
    handler.save("radius", 1.25)
    handler.save("name", "player")
    handler.save("visible", False)
    assert handler.load("count", 0) == 7
    assert handler.load("radius", 0.0) == 1.25
    assert handler.load("name", "") == "player"
    assert handler.load("visible", True) is False


def test_round_trip_vectors(handler):
    handler.save("center", Vector3(1.0, 2.0, 3.0))
    handler.save("uv", Vector2(0.5, 0.25))
    assert handler.load("center", Vector3()) == Vector3(1.0, 2.0, 3.0)
    assert handler.load("uv", Vector2()) == Vector2(0.5, 0.25)


def test_vector_written_as_named_components(handler):
    handler.save("center", Vector3(1.0, 2.0, 3.0))
    data = json.loads(handler.path.read_text(encoding="utf-8"))
    assert data == {"center": {"x": 1.0, "y": 2.0, "z": 3.0}}


def test_enum_stored_as_integer(handler):
    handler.save("shape", Shape.PLANE)
    data = json.loads(handler.path.read_text(encoding="utf-8"))
    assert data["shape"] == int(Shape.PLANE)
    assert handler.load("shape", Shape.CUBE) is Shape.PLANE


def test_save_keeps_existing_keys(handler):
    handler.save("a", 1)
    handler.save("b", 2)
    handler.save("a", 3)
    assert handler.load("a", 0) == 3
    assert handler.load("b", 0) == 2


def test_missing_key_returns_default(handler):
    handler.save("a", 1)
    assert handler.load("missing", 42) == 42


def test_type_mismatch_returns_default_and_reports(handler, capsys):
    handler.save("radius", "text")
    assert handler.load("radius", 1.5) == 1.5
    assert "(Key: radius)" in capsys.readouterr().err


def test_bool_default_rejects_number(handler, capsys):
    handler.save("flag", 1)
    assert handler.load("flag", True) is True
    assert "JSON Load Error" in capsys.readouterr().err


def test_vector_missing_component_returns_default(handler, capsys):
    handler.save("center", {"x": 1.0, "y": 2.0})
    fallback = Vector3(9.0, 9.0, 9.0)
    assert handler.load("center", fallback) == fallback
    assert "(Key: center)" in capsys.readouterr().err


def test_int_default_truncates_float(handler):
    handler.save("size", 3.9)
    assert handler.load("size", 0) == int(3.9)