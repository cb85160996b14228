"""Anvil (Minecraft region file) format handling."""

from .constants import (
    REGION_SIZE,
    SECTOR_SIZE,
    HEADER_SIZE,
    CHUNK_SIZE,
    SECTION_HEIGHT,
    BLOCKS_PER_SECTION,
    MIN_Y,
    MAX_Y,
    MIN_SECTION,
    MAX_SECTION,
    header_offset,
    altitude_index,
    block_index,
    biome_index,
)
from .palette import (
    bit_length,
    block_state_bits,
    biome_bits,
    read_packed_field,
    unpack_padded,
    decode_heightmap,
)
from .blocks import Block
from .section import Section, find_section
from .region import Region, parse_tag_tree, region_coords_from_filename, region_filename
from .chunk import Chunk
from .world import World

__all__ = [
    # Constants
    "REGION_SIZE",
    "SECTOR_SIZE",
    "HEADER_SIZE",
    "CHUNK_SIZE",
    "SECTION_HEIGHT",
    "BLOCKS_PER_SECTION",
    "MIN_Y",
    "MAX_Y",
    "MIN_SECTION",
    "MAX_SECTION",
    "header_offset",
    "altitude_index",
    "block_index",
    "biome_index",
    # Packed arrays
    "bit_length",
    "block_state_bits",
    "biome_bits",
    "read_packed_field",
    "unpack_padded",
    "decode_heightmap",
    # Blocks
    "Block",
    # Section
    "Section",
    "find_section",
    # Region
    "Region",
    "parse_tag_tree",
    "region_coords_from_filename",
    "region_filename",
    # Chunk
    "Chunk",
    # World
    "World",
]
