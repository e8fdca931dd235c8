"""
Image encoder / decoder
=======================
Convenience entry points that load a carrier and run the engine on it.

    result = ImageEncoder("panda.png", Options(bits_per_pixel=2)).encode_bytes(data + b"--")
    result.save("panda_steg.png")

    decoded = ImageDecoder("panda_steg.png", Options(bits_per_pixel=2, marker=b"--")).decode()
    decoded.trimmed()

Sources can be a file path, raw image bytes, a binary file object, a
PIL Image or a PixelBuffer. The carrier is loaded once, at construction.

Carrier format: PNG or BMP. JPEG re-compression destroys LSB data.
"""

import logging
import os
from typing import BinaryIO, Optional, Union

from PIL import Image

from . import codec
from .core.capacity import max_payload_bytes
from .core.decoder import DecodedResult, decode
from .core.encoder import EncodedResult, encode
from .core.options import Options

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, bytes, bytearray, BinaryIO, Image.Image, codec.PixelBuffer]


class _Carrier:

    def __init__(self, source: Source, options: Optional[Options] = None):
        self._pixels  = codec.load_image(source)
        self._options = options or Options()
        logger.debug(f"Carrier loaded: {self._pixels.width}x{self._pixels.height}")

    @property
    def options(self) -> Options:
        return self._options

    @property
    def pixels(self) -> codec.PixelBuffer:
        return self._pixels

    def with_options(self, **changes):
        """Same carrier, new options. The loaded pixels are shared read-only."""
        return type(self)(self._pixels, self._options.replace(**changes))

    def max_capacity_bytes(self) -> int:
        """Return maximum payload bytes this carrier can take under the current options."""
        return max_payload_bytes(self._options, self._pixels.width, self._pixels.height)


class ImageEncoder(_Carrier):
    """Hide bytes in the LSBs of one channel of a carrier image."""

    def encode_bytes(self, payload: bytes) -> EncodedResult:
        return encode(payload, self._options, self._pixels)

    def encode_text(self, text: str) -> EncodedResult:
        return self.encode_bytes(text.encode("utf-8"))


class ImageDecoder(_Carrier):
    """Read bytes back out of a stego image."""

    def decode(self) -> DecodedResult:
        return decode(self._options, self._pixels)
