"""
Extraction engine
=================
Read a payload back out of the low bits of one colour channel.

Walks the same cursor as the encoder. Each visited pixel contributes its
bits_per_pixel low bits to one continuous LSB-first bit stream; a byte may
be spread over two pixels. Every completed byte is appended to the output
and, when a marker is configured, pushed through the MarkerScanner.

Termination:
    marker matched   -> stop at once, hit_marker = True
    cursor exhausted -> stop, hit_marker = False (not an error)

The returned data keeps the marker bytes. A trailing, partially filled
byte is dropped, so an exhausted cursor yields exactly
floor(visits * bits_per_pixel / 8) bytes.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..codec import PixelBuffer
from ..errors import InvalidUtf8
from .bits import get_bits
from .cursor import iter_pixels
from .marker import MarkerScanner
from .options import Options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedResult:
    data: bytes
    hit_marker: bool
    marker: bytes = b""
    elapsed: Optional[float] = None

    def embedded_data(self) -> bytes:
        return self.data

    def trimmed(self) -> bytes:
        """The data without the trailing marker, if decoding stopped on one."""
        if self.hit_marker and self.marker:
            return self.data[:-len(self.marker)]
        return self.data

    def as_raw_text(self) -> str:
        """Lossy UTF-8 view; invalid sequences become U+FFFD."""
        return self.data.decode("utf-8", errors="replace")

    def as_text(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(
                f"Embedded data is not valid UTF-8: {exc.reason} at byte {exc.start}",
                details={"start": exc.start, "end": exc.end},
            ) from exc


def decode(options: Options, source: PixelBuffer) -> DecodedResult:
    """Extract embedded bytes from `source`."""
    t0 = time.perf_counter()
    scanner = MarkerScanner(options.marker)
    channel = int(options.channel)
    bits    = options.bits_per_pixel

    out = bytearray()
    acc     = 0
    filled  = 0
    hit_marker = False

    for x, y in iter_pixels(options, source.width, source.height):
        for i, bit in enumerate(get_bits(source.get_channel_byte(x, y, channel), bits)):
            acc |= bit << (filled + i)
        filled += bits

        while filled >= 8:
            out.append(acc & 0xFF)
            acc   >>= 8
            filled -= 8
            if scanner.push(out[-1]):
                hit_marker = True
                break
        if hit_marker:
            logger.debug(f"Marker {options.marker!r} found after {len(out)} bytes")
            break

    elapsed = time.perf_counter() - t0
    logger.info(f"Decoded {len(out)} bytes from {source.width}x{source.height} "
                f"channel={options.channel.name} bits={bits} hit_marker={hit_marker} "
                f"in {elapsed * 1000:.2f} ms")
    return DecodedResult(
        data=bytes(out),
        hit_marker=hit_marker,
        marker=options.marker or b"",
        elapsed=elapsed,
    )
