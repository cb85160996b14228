from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS = Path(__file__).resolve().parent
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))

from builders import block_entry, build_region, make_chunk, make_section, pack_padded  # noqa: E402

from mcaread import Chunk, ReaderConfig, Region  # noqa: E402


STONE = block_entry("minecraft:stone")
AIR = block_entry("minecraft:air")
STAIRS = block_entry("minecraft:oak_stairs", {"facing": "east", "half": "top"})


def layered_section(y: int):
    """Section with stone on its bottom layer, stairs at (1, 1, 2) and air elsewhere."""
    values = [0] * 4096
    for i in range(256):
        values[i] = 1
    values[1 * 256 + 2 * 16 + 1] = 2
    return make_section(
        y,
        blocks=[AIR, STONE, STAIRS],
        block_words=pack_padded(values, 4),
        biomes=["minecraft:plains"],
    )


@pytest.fixture()
def chunk_root():
    heights = [129 + (i % 7) for i in range(256)]
    floor = [100] * 256
    return make_chunk(
        sections=[
            make_section(-4, blocks=[block_entry("minecraft:deepslate")], biomes=["minecraft:dripstone_caves"]),
            layered_section(4),
        ],
        heightmaps={
            "WORLD_SURFACE": pack_padded(heights, 9),
            "OCEAN_FLOOR": pack_padded(floor, 9),
        },
    )


@pytest.fixture()
def chunk(chunk_root):
    return Chunk(chunk_root, 0, 0)


@pytest.fixture()
def region_bytes(chunk_root):
    return build_region(
        {
            (1, 2): chunk_root,
            (31, 31): make_chunk(status="minecraft:noise"),
        },
        timestamps={(1, 2): 1700000000},
    )


@pytest.fixture()
def region(region_bytes):
    return Region(region_bytes, "r.0.0.mca")


@pytest.fixture()
def region_file(tmp_path: Path, region_bytes: bytes) -> Path:
    path = tmp_path / "r.0.0.mca"
    path.write_bytes(region_bytes)
    return path


@pytest.fixture()
def cached_config():
    return ReaderConfig(cache_sections=True)
