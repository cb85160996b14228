"""Chunk sections of the Anvil format (Minecraft 1.18+).

A section is a 16x16x16 cube of blocks within a chunk. Each chunk lists up
to 24 sections (Y index -4 to 19, covering world Y -64 to 319) under its
``sections`` tag:

    {
        Y: -4b,
        block_states: {palette: [{Name: ...}, ...], data: [L; ...]},
        biomes: {palette: ["minecraft:plains", ...], data: [L; ...]},
    }

``data`` is left out when the palette has a single entry.
"""

import logging
from typing import Iterator, List, Optional

import nbtlib
import numpy as np

from .constants import (
    MIN_SECTION,
    MAX_SECTION,
    BLOCKS_PER_SECTION,
    block_index,
    biome_index,
)
from .palette import (
    block_state_bits,
    block_state_palette_index,
    biome_palette_index,
    unpack_padded,
)
from ..errors import FormatError, OutOfRangeError, PaletteIndexError, WrongTagError

logger = logging.getLogger(__name__)


def _optional(tag, key: str, tag_type, path: str):
    """Child ``key`` of a compound if present, checked against ``tag_type``."""
    value = tag.get(key)
    if value is not None and not isinstance(value, tag_type):
        raise WrongTagError(f"{path}.{key}", tag_type.__name__, value)
    return value


class Section:
    """Read-only view over one section compound.

    Attributes:
        y: Signed section index
        block_palette: Block-state palette compounds, or None
        block_data: Packed block-state indices, or None when uniform
        biome_palette: Biome names, or None
        biome_data: Packed biome indices, or None when uniform
    """

    def __init__(self, tag: nbtlib.Compound):
        if not isinstance(tag, nbtlib.Compound):
            raise WrongTagError("sections[]", "Compound", tag)
        y = tag.get("Y")
        if not isinstance(y, nbtlib.Byte):
            raise WrongTagError("sections[].Y", "Byte", y)
        self.y = int(y)
        path = f"sections[Y={self.y}]"

        self.block_palette: Optional[nbtlib.List] = None
        self.block_data: Optional[nbtlib.LongArray] = None
        block_states = _optional(tag, "block_states", nbtlib.Compound, path)
        if block_states is not None:
            path_bs = f"{path}.block_states"
            self.block_palette = _optional(block_states, "palette", nbtlib.List, path_bs)
            self.block_data = _optional(block_states, "data", nbtlib.LongArray, path_bs)
            if self.block_palette is None:
                raise WrongTagError(f"{path_bs}.palette", "List")

        self.biome_palette: Optional[List[str]] = None
        self.biome_data: Optional[nbtlib.LongArray] = None
        biomes = _optional(tag, "biomes", nbtlib.Compound, path)
        if biomes is not None:
            path_b = f"{path}.biomes"
            palette = _optional(biomes, "palette", nbtlib.List, path_b)
            if palette is None:
                raise WrongTagError(f"{path_b}.palette", "List")
            for entry in palette:
                if not isinstance(entry, nbtlib.String):
                    raise WrongTagError(f"{path_b}.palette[]", "String", entry)
            self.biome_palette = [str(entry) for entry in palette]
            self.biome_data = _optional(biomes, "data", nbtlib.LongArray, path_b)

    @property
    def has_blocks(self) -> bool:
        return bool(self.block_palette)

    @property
    def has_biomes(self) -> bool:
        return bool(self.biome_palette)

    def block_palette_index(self, x: int, y: int, z: int) -> Optional[int]:
        """Palette index of the block at local coordinates, None without block data."""
        if not self.has_blocks:
            return None
        if self.block_data is None:
            return 0
        return block_state_palette_index(
            self.block_data, len(self.block_palette), block_index(x, y, z)
        )

    def block_indices(self) -> np.ndarray:
        """Palette indices of all 4096 blocks in YZX order."""
        if not self.has_blocks:
            raise FormatError(f"Section {self.y} has no block states")
        palette_len = len(self.block_palette)
        if self.block_data is None:
            return np.zeros(BLOCKS_PER_SECTION, dtype=np.int64)
        indices = unpack_padded(self.block_data, block_state_bits(palette_len), BLOCKS_PER_SECTION)
        if indices.size and int(indices.max()) >= palette_len:
            raise PaletteIndexError(int(indices.max()), palette_len)
        return indices

    def biome_name(self, x: int, y: int, z: int) -> Optional[str]:
        """Biome at local coordinates, None without biome data."""
        if not self.has_biomes:
            return None
        if self.biome_data is None:
            return self.biome_palette[0]
        index = biome_palette_index(
            self.biome_data, len(self.biome_palette), biome_index(x, y, z)
        )
        return self.biome_palette[index]


def iter_sections(root: nbtlib.Compound) -> Iterator[Section]:
    """Yield every section of a chunk root in stored order."""
    sections = root.get("sections")
    if sections is None:
        return
    if not isinstance(sections, nbtlib.List):
        raise WrongTagError("sections", "List", sections)
    for tag in sections:
        yield Section(tag)


def find_section(root: nbtlib.Compound, index: int) -> Optional[Section]:
    """Locate the section with Y index ``index``.

    Returns:
        The section, or None if the chunk does not store it

    Raises:
        OutOfRangeError: If ``index`` is outside -4..19
        FormatError: If two sections share the index
    """
    if not MIN_SECTION <= index <= MAX_SECTION:
        raise OutOfRangeError(f"Section index {index} outside {MIN_SECTION}..{MAX_SECTION}")

    found = None
    for section in iter_sections(root):
        if section.y != index:
            continue
        if found is not None:
            raise FormatError(f"Duplicate section Y={index}")
        found = section

    if found is None:
        logger.debug("No section at Y index %d", index)
    return found
