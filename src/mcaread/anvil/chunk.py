"""Chunk queries for the Anvil format.

A chunk is a 16x384x16 column of blocks (world Y -64 to 319) divided into 24
sections of 16 blocks. Besides its sections, a chunk root holds its
generation ``Status`` and a ``Heightmaps`` compound.
"""

import logging
from typing import Dict, Iterator, List, Optional

import nbtlib

from .blocks import Block
from .constants import (
    CHUNK_SIZE,
    BLOCKS_PER_SECTION,
    SECTION_HEIGHT,
    MIN_Y,
    MAX_Y,
    STATUS_FULL,
    altitude_index,
    x_from_index,
    y_from_index,
    z_from_index,
)
from .palette import decode_heightmap
from .section import Section, find_section
from ..config import ReaderConfig, DEFAULT_CONFIG
from ..errors import OutOfRangeError, WrongTagError

logger = logging.getLogger(__name__)

HEIGHTMAP_WORLD_SURFACE = "WORLD_SURFACE"
HEIGHTMAP_OCEAN_FLOOR = "OCEAN_FLOOR"


class Chunk:
    """A decoded chunk.

    Attributes:
        data: Root compound of the chunk's tag tree
        x: Chunk X coordinate within its region
        z: Chunk Z coordinate within its region
        config: Query defaults
    """

    def __init__(self, data: nbtlib.Compound, x: int, z: int,
                 config: Optional[ReaderConfig] = None):
        self.data = data
        self.x = x
        self.z = z
        self.config = config or DEFAULT_CONFIG
        self._sections: Dict[int, Optional[Section]] = {}

    @classmethod
    def from_region(cls, region, chunk_x: int, chunk_z: int,
                    config: Optional[ReaderConfig] = None) -> Optional["Chunk"]:
        """Load a chunk from a region, or None if it is not present."""
        data = region.chunk_data(chunk_x, chunk_z)
        if data is None:
            return None
        return cls(data, chunk_x, chunk_z, config)

    def get_status(self) -> str:
        """Get the chunk's generation status, e.g. ``minecraft:full``."""
        status = self.data.get("Status")
        if not isinstance(status, nbtlib.String):
            raise WrongTagError("Status", "String", status)
        return str(status)

    def is_full(self) -> bool:
        """Check if the chunk has finished generating."""
        return self.get_status() in STATUS_FULL

    def get_heightmap(self, ignore_water: bool = False) -> Optional[List[int]]:
        """Get the surface height of each column.

        Args:
            ignore_water: Use the ocean floor instead of the top of any water

        Returns:
            World Y of the highest block per column in ZX order, or None if the
            chunk is not fully generated or has no such heightmap
        """
        if not self.is_full():
            return None
        heightmaps = self.data.get("Heightmaps")
        if heightmaps is None:
            return None
        if not isinstance(heightmaps, nbtlib.Compound):
            raise WrongTagError("Heightmaps", "Compound", heightmaps)

        key = HEIGHTMAP_OCEAN_FLOOR if ignore_water else HEIGHTMAP_WORLD_SURFACE
        surface = heightmaps.get(key)
        if surface is None:
            return None
        if not isinstance(surface, nbtlib.LongArray):
            raise WrongTagError(f"Heightmaps.{key}", "LongArray", surface)

        return decode_heightmap(surface)

    get_heights = get_heightmap

    def get_section(self, index: int) -> Optional[Section]:
        """Get the section with Y index ``index`` (-4 to 19)."""
        if not self.config.cache_sections:
            return find_section(self.data, index)
        if index not in self._sections:
            self._sections[index] = find_section(self.data, index)
        else:
            logger.debug("Section cache hit for chunk (%d, %d) Y=%d", self.x, self.z, index)
        return self._sections[index]

    def _section_at(self, y: int) -> Optional[Section]:
        if not MIN_Y <= y <= MAX_Y:
            raise OutOfRangeError(f"Y {y} outside {MIN_Y}..{MAX_Y}")
        return self.get_section(altitude_index(y))

    def get_biome(self, y: int, x: int = 0, z: int = 0) -> str:
        """Get the biome at world Y ``y`` in column (x, z).

        x and z may be world or chunk-local coordinates. Where the chunk has
        no biome data for ``y`` the configured default biome is returned.
        """
        section = self._section_at(y)
        if section is None:
            return self.config.default_biome
        biome = section.biome_name(x % CHUNK_SIZE, y % SECTION_HEIGHT, z % CHUNK_SIZE)
        if biome is None:
            return self.config.default_biome
        return biome

    def get_block(self, x: int, y: int, z: int, with_biome: bool = False) -> Block:
        """Get the block at world Y ``y`` in column (x, z).

        x and z may be world or chunk-local coordinates. The returned block
        carries the coordinates as given. Air is returned where the chunk has
        no block-state data.
        """
        coords = (x, y, z)
        biome = self.get_biome(y, x, z) if with_biome else None
        section = self._section_at(y)
        index = None
        if section is not None:
            index = section.block_palette_index(x % CHUNK_SIZE, y % SECTION_HEIGHT, z % CHUNK_SIZE)
        if index is None:
            return Block.air(coords, biome, self.config.air_block)
        return Block.from_palette(
            section.block_palette[index], coords, biome, strict=self.config.strict_names
        )

    def iter_blocks(self, section_index: int) -> Iterator[Block]:
        """Yield every block of a section in YZX order.

        Blocks carry chunk-local x and z and world y.
        """
        section = self.get_section(section_index)
        base_y = section_index * SECTION_HEIGHT
        if section is None or not section.has_blocks:
            for i in range(BLOCKS_PER_SECTION):
                yield Block.air((x_from_index(i), base_y + y_from_index(i), z_from_index(i)),
                                name=self.config.air_block)
            return

        palette = section.block_palette
        resolved: Dict[int, Block] = {}
        for i, index in enumerate(section.block_indices()):
            index = int(index)
            if index not in resolved:
                resolved[index] = Block.from_palette(palette[index], strict=self.config.strict_names)
            template = resolved[index]
            yield Block(
                template.namespace,
                template.id,
                (x_from_index(i), base_y + y_from_index(i), z_from_index(i)),
                template.properties,
            )

    def __repr__(self) -> str:
        return f"Chunk({self.x}, {self.z})"
