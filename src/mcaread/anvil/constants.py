"""Constants for the Anvil region format (Minecraft 1.18+ chunk layout)."""

# Region file format
REGION_SIZE = 32  # 32x32 chunks per region
SECTOR_SIZE = 4096
HEADER_ENTRY_SIZE = 4
HEADER_ENTRY_COUNT = 1024  # 32*32 chunks
LOCATION_TABLE_SIZE = HEADER_ENTRY_SIZE * HEADER_ENTRY_COUNT
HEADER_SIZE = 2 * LOCATION_TABLE_SIZE  # locations + timestamps
CHUNK_HEADER_SIZE = 5  # 4 bytes length + 1 byte compression

# Chunk compression types
COMPRESSION_GZIP = 1
COMPRESSION_ZLIB = 2

# Chunk dimensions
CHUNK_SIZE = 16  # 16x16 blocks horizontally
SECTION_HEIGHT = 16
BLOCKS_PER_SECTION = 4096  # 16*16*16
COLUMNS_PER_CHUNK = 256  # 16*16

# Y bounds
MIN_Y = -64
MAX_Y = 319
MIN_SECTION = -4
MAX_SECTION = 19

# Biomes are stored per 4x4x4 cell
BIOME_CELL_SIZE = 4

# Packed arrays
WORD_BITS = 64
WORD_MASK = (1 << 64) - 1
MIN_BLOCK_STATE_BITS = 4
HEIGHTMAP_BITS = 9
HEIGHTMAP_FIELDS_PER_WORD = 7  # 63 usable bits per word
HEIGHTMAP_OFFSET = MIN_Y - 1  # stored value counts from the floor to the first block above the surface

# Chunk status of a fully generated chunk
STATUS_FULL = ("full", "minecraft:full")


def header_offset(chunk_x: int, chunk_z: int) -> int:
    """Byte offset of a chunk's location entry in the region header."""
    return HEADER_ENTRY_SIZE * chunk_index(chunk_x, chunk_z)


def chunk_index(chunk_x: int, chunk_z: int) -> int:
    """Index of a chunk within its region, 0-1023."""
    return (chunk_x % REGION_SIZE) + (chunk_z % REGION_SIZE) * REGION_SIZE


def chunk_from_index(index: int) -> tuple:
    """Region-local (x, z) chunk coordinates of a header index."""
    z, x = divmod(index, REGION_SIZE)
    return x, z


def altitude_index(y: int) -> int:
    """Section index holding world Y coordinate ``y``."""
    return (y - MIN_Y) // SECTION_HEIGHT + MIN_SECTION


def block_index(x: int, y: int, z: int) -> int:
    """Calculate block index within a section from local x,y,z coordinates.

    Blocks are stored in YZX order: Y occupies bits 8-11, Z bits 4-7 and
    X bits 0-3.
    """
    return (y & 0xF) << 8 | (z & 0xF) << 4 | (x & 0xF)


def biome_index(x: int, y: int, z: int) -> int:
    """Calculate the 4x4x4 biome cell index within a section."""
    cell_y = (y % SECTION_HEIGHT) // BIOME_CELL_SIZE
    cell_z = (z & 0xF) // BIOME_CELL_SIZE
    cell_x = (x & 0xF) // BIOME_CELL_SIZE
    return cell_y * 16 + cell_z * 4 + cell_x


def x_from_index(index: int) -> int:
    """Extract x coordinate from block index."""
    return index & 0xF


def y_from_index(index: int) -> int:
    """Extract y coordinate from block index."""
    return (index >> 8) & 0xF


def z_from_index(index: int) -> int:
    """Extract z coordinate from block index."""
    return (index >> 4) & 0xF


def chunk_coordinate(block: int) -> int:
    """Calculate chunk coordinate from block coordinate."""
    return block // CHUNK_SIZE


def region_coordinate(chunk: int) -> int:
    """Calculate region coordinate from chunk coordinate."""
    return chunk // REGION_SIZE
