"""
Capacity
========
How many pixel visits a payload needs, and how many the cursor can give.

The payload is one continuous bit stream, bits_per_pixel bits per visit,
so a payload of n bytes needs ceil(n * 8 / bits_per_pixel) visits.

Available visits are counted from the same ranges the cursor walks:
    no spread  -> length of the first pass (offset, position and stride applied)
    spread     -> every pixel of the image
"""

import logging

from ..errors import CapacityExceeded
from .cursor import first_pass
from .options import Options

logger = logging.getLogger(__name__)


def required_pixel_visits(payload_len: int, bits_per_pixel: int) -> int:
    return -(-payload_len * 8 // bits_per_pixel)


def available_pixel_visits(options: Options, width: int, height: int) -> int:
    if options.spread:
        return width * height
    return len(first_pass(options, width, height))


def max_payload_bytes(options: Options, width: int, height: int) -> int:
    """Largest payload, in bytes, that fits under these options."""
    return available_pixel_visits(options, width, height) * options.bits_per_pixel // 8


def check_capacity(payload_len: int, options: Options, width: int, height: int) -> None:
    """Raise CapacityExceeded if the payload does not fit."""
    required  = required_pixel_visits(payload_len, options.bits_per_pixel)
    available = available_pixel_visits(options, width, height)
    logger.debug(f"Capacity: {required} visits required, {available} available "
                 f"({width}x{height}, spread={options.spread})")
    if required > available:
        raise CapacityExceeded(required, available)
