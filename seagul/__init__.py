"""
seagul: LSB payload embedding for raster images
=================================================
Hide arbitrary bytes in the least significant bits of one colour channel,
then read them back.

Core:
    bits        get / set the low bits of a byte
    options     immutable configuration (bits, channel, offset, stride,
                start position, spread, marker)
    cursor      deterministic pixel visiting order
    capacity    up-front fit check, exact to the cursor
    encoder     payload -> altered pixel buffer + per-byte change log
    decoder     pixel buffer -> payload, optional early stop on a marker
    marker      sliding-window terminator detection

Around it:
    codec       Pillow bridge, PNG / BMP / JPEG <-> PixelBuffer
    steg        ImageEncoder / ImageDecoder convenience entry points

Not a watermark: no encryption, no compression, no robustness against
re-compression. Use a lossless carrier.

License: Apache 2.0
"""

__version__  = "1.0.0"
__author__   = "seagul contributors"
__project__  = "seagul"

from .errors          import (SeagulError, InvalidOptions, InvalidChannel,
                              CapacityExceeded, InvalidImage, InvalidUtf8)
from .core.options    import Options, Channel, StartPosition, At
from .core.capacity   import required_pixel_visits, available_pixel_visits, max_payload_bytes
from .core.marker     import MarkerScanner
from .core.encoder    import encode, EncodedResult, ByteEncodeMap, ChangeRecord
from .core.decoder    import decode, DecodedResult
from .codec           import PixelBuffer, ImageFormat, load, load_image, save
from .steg            import ImageEncoder, ImageDecoder

__all__ = [
    "SeagulError",
    "InvalidOptions",
    "InvalidChannel",
    "CapacityExceeded",
    "InvalidImage",
    "InvalidUtf8",
    "Options",
    "Channel",
    "StartPosition",
    "At",
    "required_pixel_visits",
    "available_pixel_visits",
    "max_payload_bytes",
    "MarkerScanner",
    "encode",
    "EncodedResult",
    "ByteEncodeMap",
    "ChangeRecord",
    "decode",
    "DecodedResult",
    "PixelBuffer",
    "ImageFormat",
    "load",
    "load_image",
    "save",
    "ImageEncoder",
    "ImageDecoder",
]
