"""Region file handling for the Anvil format.

Region files (``r.<x>.<z>.mca``) hold a 32x32 grid of chunks:
- Locations: 1024 x 4 bytes. 3-byte big-endian offset of the chunk in
  4096-byte sectors, then a 1-byte sector count. (0, 0) means the chunk has
  not been generated.
- Timestamps: 1024 x 4-byte big-endian last-modified times (epoch seconds)
- Chunk data, aligned to sectors

Entry ``i`` of each table belongs to the chunk at (i % 32, i // 32).

Chunk data format:
- 4 bytes: length of what follows, compression byte included (big-endian)
- 1 byte: compression type (1 = gzip, 2 = zlib)
- length - 1 bytes: compressed tag tree
"""

import io
import logging
import re
import struct
import zlib
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

import nbtlib

from .constants import (
    SECTOR_SIZE,
    HEADER_ENTRY_COUNT,
    LOCATION_TABLE_SIZE,
    CHUNK_HEADER_SIZE,
    COMPRESSION_GZIP,
    COMPRESSION_ZLIB,
    header_offset,
    chunk_from_index,
)
from .chunk import Chunk
from ..config import ReaderConfig
from ..errors import (
    FormatError,
    OutOfBoundsError,
    TruncatedBufferError,
    DecompressionError,
    MalformedTagTreeError,
    UnsupportedCompressionError,
)

logger = logging.getLogger(__name__)

RE_FILENAME = re.compile(r"^r\.(-?\d+)\.(-?\d+)\.mca$", re.IGNORECASE)
FMT_FILENAME = "r.{:d}.{:d}.mca"


def region_coords_from_filename(filename: str) -> Optional[Tuple[int, int]]:
    """Parse region coordinates from an ``r.<x>.<z>.mca`` file name."""
    match = RE_FILENAME.match(Path(filename).name)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def region_filename(region_x: int, region_z: int) -> str:
    """Get the file name of the region at the given region coordinates."""
    return FMT_FILENAME.format(region_x, region_z)


def parse_tag_tree(raw: bytes) -> nbtlib.Compound:
    """Parse an uncompressed tag tree into its root compound."""
    try:
        root = nbtlib.File.parse(io.BytesIO(raw), byteorder="big")
    except (ValueError, TypeError, KeyError, IndexError, EOFError, RecursionError, struct.error) as exc:
        raise MalformedTagTreeError(f"Invalid tag tree: {exc}") from exc
    if not isinstance(root, nbtlib.Compound):
        raise MalformedTagTreeError(f"Root tag is {type(root).__name__}, not Compound")
    return root


class Region:
    """A region file held in memory.

    Lookups never modify the buffer, so one Region can serve concurrent
    readers.

    Attributes:
        data: Raw region file contents
        filename: Display name, usually the file path
    """

    def __init__(self, data: bytes, filename: str = "<memory>"):
        self.data = bytes(data)
        self.filename = filename

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Region":
        """Read a region file from disk."""
        path = Path(path)
        return cls(path.read_bytes(), str(path))

    @property
    def coords(self) -> Optional[Tuple[int, int]]:
        """Region coordinates from the file name, if it follows ``r.<x>.<z>.mca``."""
        return region_coords_from_filename(self.filename)

    def _read_u32(self, offset: int) -> int:
        if offset < 0 or offset + 4 > len(self.data):
            raise OutOfBoundsError(
                f"{self.filename}: header read at {offset} past end of {len(self.data)} bytes"
            )
        return struct.unpack_from(">I", self.data, offset)[0]

    def chunk_location(self, chunk_x: int, chunk_z: int) -> Tuple[int, int]:
        """Get the (sector offset, sector count) entry of a chunk.

        Coordinates are taken modulo 32, so absolute chunk coordinates work.
        (0, 0) means the chunk is not present.
        """
        entry = self._read_u32(header_offset(chunk_x, chunk_z))
        return entry >> 8, entry & 0xFF

    def chunk_timestamp(self, chunk_x: int, chunk_z: int) -> int:
        """Get the last-modified time of a chunk in seconds since the epoch."""
        return self._read_u32(LOCATION_TABLE_SIZE + header_offset(chunk_x, chunk_z))

    def present_chunks(self) -> Iterator[Tuple[int, int]]:
        """Yield region-local (x, z) of every chunk stored in this region."""
        for index in range(HEADER_ENTRY_COUNT):
            x, z = chunk_from_index(index)
            if self.chunk_location(x, z) != (0, 0):
                yield x, z

    def chunk_payload(self, chunk_x: int, chunk_z: int) -> Optional[Tuple[int, bytes]]:
        """Get the compression type and compressed bytes of a chunk.

        Returns:
            (compression, payload), or None if the chunk is not present
        """
        location = self.chunk_location(chunk_x, chunk_z)
        if location == (0, 0):
            return None
        start = location[0] * SECTOR_SIZE

        if start + CHUNK_HEADER_SIZE > len(self.data):
            raise TruncatedBufferError(
                f"{self.filename}: chunk ({chunk_x}, {chunk_z}) header at {start} "
                f"past end of {len(self.data)} bytes"
            )
        length = struct.unpack_from(">I", self.data, start)[0]
        if length == 0:
            raise FormatError(f"{self.filename}: chunk ({chunk_x}, {chunk_z}) has zero length")
        compression = self.data[start + 4]

        end = start + 4 + length
        if end > len(self.data):
            raise TruncatedBufferError(
                f"{self.filename}: chunk ({chunk_x}, {chunk_z}) needs {length} bytes "
                f"at {start + 4}, file has {len(self.data)}"
            )
        logger.debug(
            "%s: chunk (%d, %d) at sector %d, %d bytes, compression %d",
            self.filename, chunk_x, chunk_z, location[0], length, compression,
        )
        return compression, self.data[start + CHUNK_HEADER_SIZE:end]

    def chunk_data(self, chunk_x: int, chunk_z: int) -> Optional[nbtlib.Compound]:
        """Decompress and parse a chunk's tag tree.

        Returns:
            Root compound, or None if the chunk is not present or uses the
            unsupported gzip compression

        Raises:
            UnsupportedCompressionError: For compression types other than 1 and 2
            DecompressionError: If the zlib stream is corrupt
            MalformedTagTreeError: If the inflated data is not a tag tree
        """
        payload = self.chunk_payload(chunk_x, chunk_z)
        if payload is None:
            return None
        compression, compressed = payload

        if compression == COMPRESSION_GZIP:
            logger.warning(
                "%s: chunk (%d, %d) uses gzip compression, skipping",
                self.filename, chunk_x, chunk_z,
            )
            return None
        if compression != COMPRESSION_ZLIB:
            raise UnsupportedCompressionError(compression)

        try:
            raw = zlib.decompress(compressed)
        except zlib.error as exc:
            raise DecompressionError(
                f"{self.filename}: chunk ({chunk_x}, {chunk_z}): {exc}"
            ) from exc
        logger.debug("Inflated chunk (%d, %d) to %d bytes", chunk_x, chunk_z, len(raw))
        return parse_tag_tree(raw)

    def get_chunk(self, chunk_x: int, chunk_z: int,
                  config: Optional[ReaderConfig] = None) -> Optional[Chunk]:
        """Get a chunk by coordinates, or None if it is not present."""
        return Chunk.from_region(self, chunk_x, chunk_z, config)

    def __repr__(self) -> str:
        return f"Region({self.filename!r}, {len(self.data)} bytes)"
