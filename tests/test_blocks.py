import nbtlib
import pytest

from builders import block_entry
from mcaread.anvil.blocks import Block, split_name
from mcaread.errors import BlockNameError, WrongTagError


def test_name_round_trips():
    block = Block.parse_name("minecraft:stone")
    assert (block.namespace, block.id) == ("minecraft", "stone")
    assert block.name == "minecraft:stone"
    assert str(block) == "minecraft:stone"
    assert Block.parse_name(block.name) == block


def test_split_on_first_colon_only():
    assert split_name("mod:machine:core") == ("mod", "machine:core")
    block = Block.from_name("mod:machine:core")
    assert block.id == "machine:core"
    assert block.name == "mod:machine:core"


@pytest.mark.parametrize("name", ["stone", "", ":stone", "minecraft:"])
def test_strict_parser_rejects_bad_names(name):
    with pytest.raises(BlockNameError):
        Block.parse_name(name)


def test_convenience_constructor_reuses_bare_name():
    block = Block.from_name("stone")
    assert block.namespace == "stone"
    assert block.id == "stone"


def test_empty_parts_rejected_on_construction():
    with pytest.raises(BlockNameError):
        Block("", "stone")


def test_from_palette_reads_properties_in_order():
    entry = block_entry("minecraft:oak_stairs", {"facing": "east", "half": "top", "waterlogged": "false"})
    block = Block.from_palette(entry, coords=(1, 65, 2), biome="minecraft:plains")
    assert block.name == "minecraft:oak_stairs"
    assert block.properties == (("facing", "east"), ("half", "top"), ("waterlogged", "false"))
    assert block.properties_dict()["half"] == "top"
    assert block.get_property("facing") == "east"
    assert block.get_property("shape", "straight") == "straight"
    assert block.coords == (1, 65, 2)
    assert block.biome == "minecraft:plains"


def test_from_palette_without_properties():
    block = Block.from_palette(block_entry("minecraft:stone"))
    assert block.properties == ()
    assert block.coords is None


def test_from_palette_type_errors():
    with pytest.raises(WrongTagError):
        Block.from_palette(nbtlib.String("minecraft:stone"))
    with pytest.raises(WrongTagError):
        Block.from_palette(nbtlib.Compound({"Name": nbtlib.Int(1)}))
    with pytest.raises(WrongTagError):
        Block.from_palette(nbtlib.Compound({}))
    with pytest.raises(WrongTagError):
        Block.from_palette(nbtlib.Compound({
            "Name": nbtlib.String("minecraft:stone"),
            "Properties": nbtlib.String("x"),
        }))


def test_from_palette_strictness():
    entry = block_entry("stone")
    with pytest.raises(BlockNameError):
        Block.from_palette(entry)
    assert Block.from_palette(entry, strict=False).name == "stone:stone"


def test_air_sentinel():
    air = Block.air((3, 70, 4))
    assert air.name == "minecraft:air"
    assert air.coords == (3, 70, 4)
    assert air.properties == ()


def test_blocks_are_immutable():
    block = Block.parse_name("minecraft:stone")
    with pytest.raises(AttributeError):
        block.id = "dirt"
