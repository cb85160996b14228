import json

import pytest

from mcaread.config import ReaderConfig, DEFAULT_BIOME, AIR_BLOCK


def test_defaults():
    config = ReaderConfig()
    assert config.default_biome == DEFAULT_BIOME == "minecraft:ocean"
    assert config.air_block == AIR_BLOCK == "minecraft:air"
    assert not config.cache_sections
    assert config.strict_names


def test_save_and_load(tmp_path):
    path = tmp_path / "reader.json"
    ReaderConfig(default_biome="minecraft:plains", cache_sections=True).save(path)
    assert json.loads(path.read_text())["cache_sections"] is True

    loaded = ReaderConfig.load(path)
    assert loaded == ReaderConfig(default_biome="minecraft:plains", cache_sections=True)


def test_load_fills_missing_keys(tmp_path):
    path = tmp_path / "reader.json"
    path.write_text(json.dumps({"strict_names": False}))
    config = ReaderConfig.load(path)
    assert not config.strict_names
    assert config.default_biome == DEFAULT_BIOME


@pytest.mark.parametrize("field", ["default_biome", "air_block"])
@pytest.mark.parametrize("value", ["plains", "minecraft:", ":stone", ":"])
def test_names_must_be_namespaced(tmp_path, field, value):
    with pytest.raises(ValueError):
        ReaderConfig(**{field: value}).validate()

    path = tmp_path / "reader.json"
    path.write_text(json.dumps({field: value}))
    with pytest.raises(ValueError):
        ReaderConfig.load(path)


@pytest.mark.parametrize("data", [
    {"default_biome": 5},
    {"air_block": None},
    {"cache_sections": "yes"},
    {"strict_names": 1},
])
def test_wrong_field_types(tmp_path, data):
    path = tmp_path / "reader.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValueError):
        ReaderConfig.load(path)


def test_namespaced_ids_may_contain_colons():
    ReaderConfig(air_block="mod:machine:core").validate()
