"""
Traversal cursor
================
The deterministic order in which pixels are visited.

Pixels are numbered row by row: index = y * width + x.

First pass
    Starts at base_offset(start_position) + pixel_offset and takes every
    pixel_stride-th index until the end of the image.

Spread (wrap) passes
    Only when spread is enabled. After the first pass the cursor walks the
    residue classes of s = pixel_stride in order: indices 0, s, 2s, ... then
    1, 1+s, 1+2s, ... and so on, skipping indices the first pass already
    took. The starting skip is not applied again. A spread traversal is
    therefore always `width * height` visits long, never lands on the same
    pixel twice, and takes time linear in the pixel count.

Encoder and decoder both walk this sequence; given the same Options and
image size they see the same addresses in the same order.
"""

from typing import Iterator, Tuple

from .options import At, Options, Position, StartPosition


def base_offset(position: Position, width: int, height: int) -> int:
    """Coarse starting skip, in pixels, derived from the start position."""
    if isinstance(position, At):
        return position.x * position.y
    if position is StartPosition.TOP_LEFT:
        return 0
    if position is StartPosition.TOP_RIGHT:
        return width
    if position is StartPosition.BOTTOM_LEFT:
        return height
    if position is StartPosition.BOTTOM_RIGHT:
        return width + height
    if position is StartPosition.CENTER:
        return (width + height) // 2
    raise ValueError(f"Unknown start position: {position!r}")


def first_pass(options: Options, width: int, height: int) -> range:
    start = base_offset(options.start_position, width, height) + options.pixel_offset
    return range(start, width * height, options.pixel_stride)


def iter_indices(options: Options, width: int, height: int) -> Iterator[int]:
    """Yield row-major pixel indices in visiting order."""
    total  = width * height
    pass_1 = first_pass(options, width, height)
    yield from pass_1

    if not options.spread or len(pass_1) >= total:
        return

    start  = pass_1.start
    stride = options.pixel_stride
    for residue in range(min(stride, total)):
        for i in range(residue, total, stride):
            if i >= start and (i - start) % stride == 0:
                continue
            yield i


def iter_pixels(options: Options, width: int, height: int) -> Iterator[Tuple[int, int]]:
    """Yield (x, y) addresses in visiting order."""
    for i in iter_indices(options, width, height):
        yield i % width, i // width
