"""
Bit utilities
=============
Read and write the low-order bits of a single byte, and cut a payload
into a continuous LSB-first bit stream.

Bit 0 is the least significant bit. Everything here is plain integer
arithmetic: bit i of b is (b >> i) & 1.

Stream order: bit j of the stream is bit (j % 8) of byte j // 8.
"""

from typing import Iterator, List, Tuple


def get_bits(byte: int, count: int) -> List[int]:
    """Return the `count` low-order bits of `byte`, bit 0 first."""
    return [(byte >> i) & 1 for i in range(count)]


def set_bits(byte: int, bit_offset: int, count: int, source_bits: int) -> int:
    """
    Replace bits [bit_offset, bit_offset + count) of `byte` with the low
    `count` bits of `source_bits`. All other bits are left untouched.
    """
    mask = ((1 << count) - 1) << bit_offset
    return (byte & ~mask & 0xFF) | ((source_bits << bit_offset) & mask)


def read_bits(data: bytes, bit_offset: int, count: int) -> int:
    """Read `count` stream bits starting at `bit_offset`; may cross byte boundaries."""
    value = 0
    for i in range(count):
        pos = bit_offset + i
        value |= ((data[pos >> 3] >> (pos & 7)) & 1) << i
    return value


def iter_chunks(data: bytes, bits_per_chunk: int) -> Iterator[Tuple[int, int, int]]:
    """
    Cut `data` into (bit_offset, count, value) chunks of the bit stream.

    Chunks may straddle two bytes. Only the final chunk of the whole
    payload can be shorter than bits_per_chunk.
    """
    total = len(data) * 8
    offset = 0
    while offset < total:
        count = min(bits_per_chunk, total - offset)
        yield offset, count, read_bits(data, offset, count)
        offset += count
