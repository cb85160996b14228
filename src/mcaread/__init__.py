"""mcaread: read blocks, biomes and heightmaps from Minecraft region files."""

__version__ = "0.1.0"

from .config import ReaderConfig
from .errors import (
    AnvilError,
    FormatError,
    OutOfBoundsError,
    TruncatedBufferError,
    DecompressionError,
    MalformedTagTreeError,
    WrongTagError,
    UnsupportedCompressionError,
    OutOfRangeError,
    PaletteIndexError,
    BlockNameError,
)
from .anvil import Block, Chunk, Region, World

__all__ = [
    "__version__",
    "ReaderConfig",
    "AnvilError",
    "FormatError",
    "OutOfBoundsError",
    "TruncatedBufferError",
    "DecompressionError",
    "MalformedTagTreeError",
    "WrongTagError",
    "UnsupportedCompressionError",
    "OutOfRangeError",
    "PaletteIndexError",
    "BlockNameError",
    "Block",
    "Chunk",
    "Region",
    "World",
]
