"""
Embedding engine
================
Write a payload into the low bits of one colour channel.

The payload is read as one continuous bit stream, least significant bit
of byte 0 first. For every bits_per_pixel chunk of that stream:
    1. take the next address from the cursor
    2. overwrite the low bits of that pixel's selected channel byte
    3. record the pixel's colour before and after

A chunk may straddle two payload bytes; its record then appears in the
change log of both. Only the final chunk of the payload can be short.

Capacity is checked before anything is written: either the whole payload
fits or CapacityExceeded is raised and nothing happens. The source buffer
is never modified; all writes go to a private copy.

The marker option is ignored here. To make a payload self-terminating,
append the marker bytes to it before encoding.
"""

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from PIL import Image

from .. import codec
from ..codec import ImageFormat, PixelBuffer
from .bits import iter_chunks, set_bits
from .capacity import check_capacity
from .cursor import iter_pixels
from .options import Options

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ChangeRecord:
    x: int
    y: int
    original: RGB
    new: RGB

    @property
    def changed(self) -> bool:
        return self.original != self.new


@dataclass(frozen=True)
class ByteEncodeMap:
    """All pixels that carry one payload byte, in write order."""

    source_byte: int
    changes: Tuple[ChangeRecord, ...]


@dataclass(frozen=True)
class EncodedResult:
    altered: PixelBuffer
    original: PixelBuffer
    byte_maps: Tuple[ByteEncodeMap, ...]

    def changes(self) -> List[ByteEncodeMap]:
        return list(self.byte_maps)

    def iter_records(self) -> Iterator[ChangeRecord]:
        """Every touched pixel once, in write order."""
        last = None
        for byte_map in self.byte_maps:
            for record in byte_map.changes:
                # shared by two adjacent byte maps
                if record is last:
                    continue
                last = record
                yield record

    def pixels_touched(self) -> int:
        return sum(1 for _ in self.iter_records())

    def pixels_changed(self) -> int:
        """Touched pixels whose colour actually differs from the original."""
        return sum(1 for record in self.iter_records() if record.changed)

    def image(self) -> Image.Image:
        return self.altered.to_image()

    def to_bytes(self, fmt: ImageFormat = ImageFormat.PNG) -> bytes:
        return codec.save(self.altered, fmt)

    def write(self, target: BinaryIO, fmt: ImageFormat = ImageFormat.PNG) -> int:
        """Write the encoded image to a binary file object. Returns bytes written."""
        return target.write(self.to_bytes(fmt))

    def save(self, path: Union[str, os.PathLike], fmt: Optional[ImageFormat] = None) -> None:
        """Save to `path`; the format follows the file suffix unless given."""
        fmt = fmt or ImageFormat.from_path(path)
        with open(path, "wb") as fh:
            self.write(fh, fmt)


def encode(payload: bytes, options: Options, source: PixelBuffer) -> EncodedResult:
    """
    Embed `payload` into a copy of `source`.

    Raises:
        CapacityExceeded : the payload needs more pixel visits than the
                           options allow on this image
    """
    payload = bytes(payload)
    check_capacity(len(payload), options, source.width, source.height)

    logger.info(f"Encoding {len(payload)} bytes into {source.width}x{source.height} "
                f"channel={options.channel.name} bits={options.bits_per_pixel} "
                f"offset={options.pixel_offset} stride={options.pixel_stride} "
                f"spread={options.spread}")

    altered = source.copy()
    channel = int(options.channel)
    cursor  = iter_pixels(options, source.width, source.height)
    records: List[List[ChangeRecord]] = [[] for _ in payload]

    for offset, count, chunk in iter_chunks(payload, options.bits_per_pixel):
        x, y = next(cursor)
        before = altered.get_pixel(x, y)
        value  = set_bits(before[channel], 0, count, chunk)
        altered.set_channel_byte(x, y, channel, value)
        record = ChangeRecord(x, y, before, altered.get_pixel(x, y))
        # a chunk straddling a byte boundary belongs to both bytes
        for index in range(offset // 8, (offset + count - 1) // 8 + 1):
            records[index].append(record)

    byte_maps = tuple(ByteEncodeMap(byte, tuple(changes)) for byte, changes in zip(payload, records))
    result = EncodedResult(altered=altered, original=source.copy(), byte_maps=byte_maps)
    logger.info(f"Encoded: {result.pixels_touched()} pixels touched, "
                f"{result.pixels_changed()} changed")
    return result
