"""Packed long-array decoding for section palettes and heightmaps.

Anvil stores small integers in arrays of 64-bit words ("packed long-arrays"):
- Block states: one palette index per block, at least 4 bits per entry.
  Entries never straddle two words; the unused high bits of each word are
  padding.
- Biomes: one palette index per 4x4x4 cell, with no minimum width. Entries
  are read as a continuous bitstream and may straddle two words.
- Heightmaps: one 9-bit value per column, 7 values per word (63 bits used).

Words come out of the tag tree as signed 64-bit integers and are reinterpreted
as unsigned before any shifting.
"""

from typing import List, Sequence

import numpy as np

from .constants import (
    WORD_BITS,
    WORD_MASK,
    MIN_BLOCK_STATE_BITS,
    HEIGHTMAP_BITS,
    HEIGHTMAP_FIELDS_PER_WORD,
    HEIGHTMAP_OFFSET,
    COLUMNS_PER_CHUNK,
)
from ..errors import FormatError, TruncatedBufferError, PaletteIndexError


def bit_length(n: int) -> int:
    """Number of bits needed to write ``n``; 0 for 0."""
    if n <= 0:
        return 0
    return n.bit_length()


def block_state_bits(palette_len: int) -> int:
    """Bits per entry of a block-state array for a palette of ``palette_len``."""
    return max(bit_length(palette_len - 1), MIN_BLOCK_STATE_BITS)


def biome_bits(palette_len: int) -> int:
    """Bits per entry of a biome array for a palette of ``palette_len``."""
    return bit_length(palette_len - 1)


def unsigned_word(word) -> int:
    """Reinterpret a signed 64-bit word as its unsigned bit pattern."""
    return int(word) & WORD_MASK


def read_packed_field(words: Sequence, width: int, index: int, spanning: bool = False) -> int:
    """Read entry ``index`` of ``width`` bits from a packed long-array.

    Args:
        words: Signed or unsigned 64-bit words
        width: Bits per entry (0-64)
        index: Entry number
        spanning: If True, entries form one continuous bitstream and may cross
            a word boundary. If False, each word holds ``64 // width`` whole
            entries and the remaining high bits are padding.

    Returns:
        The unsigned entry value

    Raises:
        TruncatedBufferError: If the entry lies past the end of ``words``
    """
    if width == 0:
        return 0
    if not 0 < width <= WORD_BITS:
        raise FormatError(f"Invalid packed field width: {width}")
    mask = (1 << width) - 1

    if spanning:
        word_index, bit_start = divmod(index * width, WORD_BITS)
    else:
        per_word = WORD_BITS // width
        word_index, slot = divmod(index, per_word)
        bit_start = slot * width

    if word_index >= len(words):
        raise TruncatedBufferError(
            f"Packed field {index} needs word {word_index}, array has {len(words)}"
        )
    value = unsigned_word(words[word_index]) >> bit_start

    if spanning and WORD_BITS - bit_start < width:
        # Entry continues in the low bits of the next word
        if word_index + 1 >= len(words):
            raise TruncatedBufferError(
                f"Packed field {index} spans past the last word ({len(words)})"
            )
        value |= unsigned_word(words[word_index + 1]) << (WORD_BITS - bit_start)

    return value & mask


def unpack_padded(words: Sequence, width: int, count: int) -> np.ndarray:
    """Unpack the first ``count`` entries of a padded packed long-array.

    Vectorised counterpart of ``read_packed_field(..., spanning=False)`` for
    decoding a whole section at once.
    """
    if width == 0:
        return np.zeros(count, dtype=np.int64)
    per_word = WORD_BITS // width
    needed = -(-count // per_word)
    if len(words) < needed:
        raise TruncatedBufferError(
            f"{count} entries of {width} bits need {needed} words, array has {len(words)}"
        )
    data = np.array([unsigned_word(w) for w in words[:needed]], dtype=np.uint64)
    shifts = np.arange(per_word, dtype=np.uint64) * np.uint64(width)
    mask = np.uint64((1 << width) - 1)
    fields = (data[:, None] >> shifts[None, :]) & mask
    return fields.reshape(-1)[:count].astype(np.int64)


def check_palette_index(index: int, palette_len: int) -> int:
    """Return ``index`` if it addresses a palette entry, else raise."""
    if index >= palette_len:
        raise PaletteIndexError(index, palette_len)
    return index


def block_state_palette_index(words: Sequence, palette_len: int, index: int) -> int:
    """Palette index of block ``index`` in a block-state array."""
    width = block_state_bits(palette_len)
    value = read_packed_field(words, width, index, spanning=False)
    return check_palette_index(value, palette_len)


def biome_palette_index(words: Sequence, palette_len: int, index: int) -> int:
    """Palette index of biome cell ``index`` in a biome array."""
    width = biome_bits(palette_len)
    value = read_packed_field(words, width, index, spanning=True)
    return check_palette_index(value, palette_len)


def decode_heightmap(words: Sequence) -> List[int]:
    """Decode a heightmap long-array into world heights, one per column.

    Each word holds 7 values of 9 bits starting at the lowest bits; the top
    bit is unused. Zero values at the end of the stream are padding and are
    dropped. A stored value ``v`` is the world height ``v - 65``.
    """
    mask = (1 << HEIGHTMAP_BITS) - 1
    values: List[int] = []
    for i, word in enumerate(words):
        word = unsigned_word(word)
        if word >> (HEIGHTMAP_BITS * HEIGHTMAP_FIELDS_PER_WORD):
            raise FormatError(f"Heightmap word {i} uses bit 63: {word:#x}")
        for slot in range(HEIGHTMAP_FIELDS_PER_WORD):
            values.append((word >> (slot * HEIGHTMAP_BITS)) & mask)

    while values and values[-1] == 0:
        values.pop()
    return [v + HEIGHTMAP_OFFSET for v in values[:COLUMNS_PER_CHUNK]]
