import random

import pytest

from builders import pack_padded, pack_spanning, signed
from mcaread.anvil.palette import (
    bit_length,
    block_state_bits,
    biome_bits,
    read_packed_field,
    unpack_padded,
    block_state_palette_index,
    biome_palette_index,
    decode_heightmap,
)
from mcaread.errors import FormatError, TruncatedBufferError, PaletteIndexError


@pytest.mark.parametrize("n, expected", [(0, 0), (1, 1), (2, 2), (3, 2), (15, 4), (16, 5), (255, 8)])
def test_bit_length(n, expected):
    assert bit_length(n) == expected


@pytest.mark.parametrize("palette_len, expected", [(1, 4), (2, 4), (16, 4), (17, 5), (32, 5), (33, 6), (300, 9)])
def test_block_state_bits_has_minimum_of_four(palette_len, expected):
    assert block_state_bits(palette_len) == expected


@pytest.mark.parametrize("palette_len, expected", [(1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (17, 5)])
def test_biome_bits_has_no_minimum(palette_len, expected):
    assert biome_bits(palette_len) == expected


@pytest.mark.parametrize("seed", range(12))
def test_padded_layout_recovers_packed_values(seed):
    rng = random.Random(seed)
    width = rng.randint(1, 32)
    count = rng.randint(1, 300)
    values = [rng.getrandbits(width) for _ in range(count)]
    words = [signed(w) for w in pack_padded(values, width)]

    decoded = [read_packed_field(words, width, i) for i in range(count)]
    assert decoded == values
    assert unpack_padded(words, width, count).tolist() == values


def test_negative_words_are_read_as_unsigned():
    # Entry 15 of a 4-bit word sits in the sign bit
    word = signed(0xF << 60 | 0x3)
    assert word < 0
    assert read_packed_field([word], 4, 15) == 15
    assert read_packed_field([word], 4, 0) == 3
    assert unpack_padded([word], 4, 16).tolist() == [3] + [0] * 14 + [15]


def test_padded_layout_leaves_high_bits_unused():
    # 5-bit entries: 12 per word, bits 60-63 are padding
    word = (0b11111 << 55) | (0b1111 << 60)
    assert read_packed_field([word, 0b10101], 5, 11) == 0b11111
    assert read_packed_field([word, 0b10101], 5, 12) == 0b10101


def test_spanning_field_is_stitched_across_words():
    values = list(range(20)) * 3 + [31, 30, 29, 28]
    words = [signed(w) for w in pack_spanning(values, 5)]
    # Entry 12 covers bits 60-64, one bit in the second word
    assert read_packed_field(words, 5, 12, spanning=True) == values[12]
    assert [read_packed_field(words, 5, i, spanning=True) for i in range(64)] == values


def test_spanning_field_past_last_word():
    words = pack_spanning([1] * 12, 5)
    words[0] |= 0b1111 << 60
    with pytest.raises(TruncatedBufferError):
        read_packed_field(words, 5, 12, spanning=True)


def test_zero_width_reads_zero():
    assert read_packed_field([], 0, 40, spanning=True) == 0
    assert unpack_padded([], 0, 5).tolist() == [0] * 5


def test_invalid_width():
    with pytest.raises(FormatError):
        read_packed_field([0], 65, 0)


def test_truncated_array():
    with pytest.raises(TruncatedBufferError):
        read_packed_field([0] * 4, 4, 64)
    with pytest.raises(TruncatedBufferError):
        unpack_padded([0] * 4, 4, 4096)


def test_palette_index_must_address_palette():
    words = pack_padded([0, 1, 7], 4)
    assert block_state_palette_index(words, 3, 1) == 1
    with pytest.raises(PaletteIndexError) as excinfo:
        block_state_palette_index(words, 3, 2)
    assert excinfo.value.index == 7
    assert excinfo.value.palette_len == 3


def test_biome_palette_index_uses_spanning_layout():
    values = [i % 17 for i in range(64)]
    words = pack_spanning(values, 5)
    assert [biome_palette_index(words, 17, i) for i in range(64)] == values


def test_heightmap_single_word():
    word = 129 | (200 << 9) | (65 << 18)
    assert decode_heightmap([word]) == [64, 135, 0]


def test_heightmap_matches_reversed_63_bit_groups():
    word = 0b000000001 << 54 | 0b101010101
    bits = format(word, "b").zfill(63)
    groups = [bits[i:i + 9] for i in range(0, 63, 9)][::-1]
    expected = [int(g, 2) - 65 for g in groups]
    assert decode_heightmap([signed(word)]) == expected


def test_heightmap_full_chunk_drops_padding():
    heights = [(i * 3) % 384 + 1 for i in range(256)]
    words = pack_padded(heights, 9)
    assert len(words) == 37
    assert decode_heightmap(words) == [h - 65 for h in heights]


def test_heightmap_keeps_one_value_per_column():
    # 37 words hold 259 fields; the last three are beyond the 256 columns
    heights = [(i % 300) + 1 for i in range(256)]
    words = pack_padded(heights + [400, 401, 402], 9)
    assert len(words) == 37
    decoded = decode_heightmap(words)
    assert len(decoded) == 256
    assert decoded == [h - 65 for h in heights]


def test_heightmap_rejects_sign_bit():
    with pytest.raises(FormatError):
        decode_heightmap([signed(1 << 63)])
