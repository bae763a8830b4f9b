import json

import pytest

from enginekit.geometry import Vector3
from enginekit.level import LevelData


def _obj(name, translation, rotation, scaling):
    return {
        "name": name,
        "transform": {"translation": translation, "rotation": rotation, "scaling": scaling},
    }


@pytest.fixture
def level_dir(tmp_path):
    scene = {
        "objects": [
            _obj("crate", [1, 2, 3], [4, 5, 6], [7, 8, 9]),
            _obj("tree", [0.5, 0, -1], [0, 0, 0], [1, 1, 1]),
            _obj("crate", [9, 9, 9], [9, 9, 9], [9, 9, 9]),
        ]
    }
    (tmp_path / "scene.json").write_text(json.dumps(scene), encoding="utf-8")
    return tmp_path


def test_translation_axes_remapped(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    assert level.translation_by_name("crate") == Vector3(2, 3, 1)
    assert level.translation_by_name("tree") == Vector3(0, -1, 0.5)


def test_rotation_and_scale_axes_remapped(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    assert level.rotation_by_name("crate") == Vector3(4, 6, 5)
    assert level.scale_by_name("crate") == Vector3(7, 9, 8)


def test_first_object_with_name_wins(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    assert level.translation_by_name("crate") != Vector3(9, 9, 9)
    assert [obj.name for obj in level.objects] == ["crate", "tree", "crate"]


def test_model_file_from_name(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    assert level.objects[1].model_file == "tree.obj"


def test_unknown_name_raises(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    with pytest.raises(KeyError, match="rock"):
        level.rotation_by_name("rock")


def test_loading_twice_appends(level_dir):
    level = LevelData(level_dir)
    level.load_json("scene.json")
    level.load_json("scene.json")
    assert len(level.objects) == 6


def test_missing_objects_key_gives_empty_level(tmp_path):
    (tmp_path / "empty.json").write_text("{}", encoding="utf-8")
    level = LevelData(tmp_path)
    level.load_json("empty.json")
    assert level.objects == ()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LevelData(tmp_path).load_json("absent.json")