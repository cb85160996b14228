"""Block and biome lookup across the region files of a dimension.

Dimension structure:
<world>/region/
    r.{X}.{Z}.mca       # Region files, 32x32 chunks each

World block coordinates map to chunk coordinates by ``// 16`` and chunk
coordinates to region coordinates by ``// 32`` (``% 32`` within the region).
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .blocks import Block
from .chunk import Chunk
from .constants import REGION_SIZE, chunk_coordinate, region_coordinate
from .region import Region, region_filename, region_coords_from_filename
from ..config import ReaderConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class World:
    """A directory of region files.

    Regions are read from disk on first use and kept in memory. Chunks are
    decoded on every query.

    Attributes:
        path: Directory holding the ``r.<x>.<z>.mca`` files
        config: Query defaults passed to every chunk
    """

    def __init__(self, path: Union[str, Path], config: Optional[ReaderConfig] = None):
        self.path = Path(path)
        self.config = config or DEFAULT_CONFIG
        self._regions: Dict[Tuple[int, int], Optional[Region]] = {}

    def list_regions(self) -> List[Tuple[int, int]]:
        """Get coordinates of every region file in the directory."""
        coords = []
        for entry in sorted(self.path.iterdir()):
            parsed = region_coords_from_filename(entry.name)
            if parsed is not None and entry.is_file():
                coords.append(parsed)
        return coords

    def get_region(self, region_x: int, region_z: int) -> Optional[Region]:
        """Get a region by region coordinates, or None if it has no file."""
        key = (region_x, region_z)
        if key not in self._regions:
            filepath = self.path / region_filename(region_x, region_z)
            if filepath.is_file():
                logger.debug("Loading region %s", filepath)
                self._regions[key] = Region.from_file(filepath)
            else:
                self._regions[key] = None
        return self._regions[key]

    def region_for_chunk(self, chunk_x: int, chunk_z: int) -> Optional[Region]:
        """Get the region holding a chunk."""
        return self.get_region(region_coordinate(chunk_x), region_coordinate(chunk_z))

    def get_chunk(self, chunk_x: int, chunk_z: int) -> Optional[Chunk]:
        """Get a chunk by absolute chunk coordinates."""
        region = self.region_for_chunk(chunk_x, chunk_z)
        if region is None:
            return None
        return Chunk.from_region(
            region, chunk_x % REGION_SIZE, chunk_z % REGION_SIZE, self.config
        )

    def get_block(self, x: int, y: int, z: int, with_biome: bool = False) -> Block:
        """Get the block at world coordinates; air where no chunk is stored."""
        chunk = self.get_chunk(chunk_coordinate(x), chunk_coordinate(z))
        if chunk is None:
            biome = self.config.default_biome if with_biome else None
            return Block.air((x, y, z), biome, self.config.air_block)
        return chunk.get_block(x, y, z, with_biome)

    def get_biome(self, x: int, y: int, z: int) -> str:
        """Get the biome at world coordinates."""
        chunk = self.get_chunk(chunk_coordinate(x), chunk_coordinate(z))
        if chunk is None:
            return self.config.default_biome
        return chunk.get_biome(y, x, z)
