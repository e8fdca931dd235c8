"""
Image codec
===========
Pillow-backed bridge between image containers and a flat RGB pixel buffer.

The engine only ever sees a PixelBuffer: width, height and one byte per
channel per pixel, row-major. Everything about file formats lives here.

Carrier formats:
    PNG, BMP   lossless, embedded bits survive save/load
    JPEG       lossy, re-compression destroys LSB data (saving is allowed,
               reading the payload back usually is not)

Alpha is dropped on load; the engine works on RGB only.

Dependencies: Pillow >= 10.0
"""

import io
import logging
import os
from enum import Enum
from typing import BinaryIO, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import InvalidChannel, InvalidImage, InvalidOptions

logger = logging.getLogger(__name__)

CHANNELS = 3   # R, G, B


class ImageFormat(Enum):
    JPEG = "JPEG"
    PNG  = "PNG"
    BMP  = "BMP"

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "ImageFormat":
        suffix = os.path.splitext(os.fspath(path))[1].lower()
        formats = {
            ".jpg":  cls.JPEG,
            ".jpeg": cls.JPEG,
            ".png":  cls.PNG,
            ".bmp":  cls.BMP,
        }
        if suffix not in formats:
            raise InvalidOptions(f"Cannot infer image format from {os.fspath(path)!r}")
        return formats[suffix]


class PixelBuffer:
    """Mutable RGB pixel storage, 3 bytes per pixel, row-major."""

    def __init__(self, width: int, height: int, data: Union[bytes, bytearray, None] = None):
        if width <= 0 or height <= 0:
            raise InvalidImage(f"Image must have at least one pixel, got {width}x{height}")
        size = width * height * CHANNELS
        if data is None:
            data = bytes(size)
        if len(data) != size:
            raise InvalidImage(
                f"Pixel data is {len(data)} bytes, expected {size} for {width}x{height} RGB"
            )
        self.width  = width
        self.height = height
        self._data  = bytearray(data)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        if img.mode != "RGB":
            img = img.convert("RGB")
        return cls(img.width, img.height, img.tobytes())

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGB", (self.width, self.height), bytes(self._data))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self._data)

    def tobytes(self) -> bytes:
        return bytes(self._data)

    def _pos(self, x: int, y: int, channel: int) -> int:
        if not 0 <= channel < CHANNELS:
            raise InvalidChannel(f"Channel {channel} is not part of an RGB pixel")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return (y * self.width + x) * CHANNELS + channel

    def get_channel_byte(self, x: int, y: int, channel: int) -> int:
        return self._data[self._pos(x, y, channel)]

    def set_channel_byte(self, x: int, y: int, channel: int, value: int) -> None:
        self._data[self._pos(x, y, channel)] = value

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        i = self._pos(x, y, 0)
        return tuple(self._data[i:i + CHANNELS])

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width, self.height, self._data) == (other.width, other.height, other._data)

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"


def load(data: bytes) -> PixelBuffer:
    """Decode container bytes (PNG, BMP, JPEG, ...) into a PixelBuffer."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise InvalidImage(f"Could not decode image: {exc}") from exc
    logger.debug(f"Loaded {img.format} image {img.width}x{img.height} mode={img.mode}")
    return PixelBuffer.from_image(img)


def load_image(src: Union[str, os.PathLike, bytes, bytearray, BinaryIO, Image.Image, PixelBuffer]) -> PixelBuffer:
    """Accept a file path, raw image bytes, a binary file object, a PIL Image
    or an already loaded PixelBuffer (returned as is)."""
    if isinstance(src, PixelBuffer):
        return src
    if isinstance(src, Image.Image):
        return PixelBuffer.from_image(src)
    if isinstance(src, (bytes, bytearray, memoryview)):
        return load(bytes(src))
    if hasattr(src, "read"):
        return load(src.read())
    with open(src, "rb") as fh:
        return load(fh.read())


def save(buffer: PixelBuffer, fmt: ImageFormat = ImageFormat.PNG) -> bytes:
    """Encode a PixelBuffer into container bytes."""
    if fmt is ImageFormat.JPEG:
        logger.warning("Saving as JPEG: lossy compression will destroy embedded LSB data")
    out = io.BytesIO()
    buffer.to_image().save(out, format=fmt.value)
    return out.getvalue()
