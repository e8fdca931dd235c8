"""
Options
=======
One immutable configuration value shared by the encoder and the decoder.

    bits_per_pixel   1..8      low bits of the channel byte carrying data
    channel          Channel   RED / GREEN / BLUE (default BLUE)
    pixel_offset     >= 0      extra pixels skipped before the first write
    pixel_stride     >= 1      visit every n-th pixel (values < 1 clamp to 1)
    start_position   StartPosition or At(x, y)
    spread           bool      wrap around the image when one pass is not enough
    marker           bytes     decode-only terminator sequence

Options never change in place. Build a new one with replace(), or parse
untyped settings (JSON, form data, argv dicts) with from_mapping().
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import InvalidChannel, InvalidOptions


class Channel(IntEnum):
    """Index of a colour component inside an RGB pixel."""

    RED   = 0
    GREEN = 1
    BLUE  = 2

    @classmethod
    def parse(cls, value: Any) -> "Channel":
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidChannel(f"Unknown channel: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidChannel(
                f"Channel index must be 0, 1 or 2, got {value!r}",
                details={"channel": value},
            ) from None


class StartPosition(Enum):
    TOP_LEFT     = "top-left"
    TOP_RIGHT    = "top-right"
    BOTTOM_LEFT  = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER       = "center"


@dataclass(frozen=True)
class At:
    """Explicit start coordinates. Only the product x * y is used as offset."""

    x: int
    y: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise InvalidOptions(f"Start coordinates must be non-negative, got ({self.x}, {self.y})")


Position = Union[StartPosition, At]


def parse_position(value: Any) -> Position:
    """Accept a StartPosition, At, a name like "top-right", "x,y" or an (x, y) pair."""
    if isinstance(value, (StartPosition, At)):
        return value
    if isinstance(value, str):
        text = value.strip().lower().replace("_", "-")
        if "," in text:
            x, _, y = text.partition(",")
            try:
                return At(int(x), int(y))
            except ValueError:
                raise InvalidOptions(f"Bad start coordinates: {value!r}") from None
        try:
            return StartPosition(text)
        except ValueError:
            raise InvalidOptions(f"Unknown start position: {value!r}") from None
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return At(int(value[0]), int(value[1]))
    raise InvalidOptions(f"Unknown start position: {value!r}")


@dataclass(frozen=True)
class Options:
    bits_per_pixel: int = 1
    channel: Channel = Channel.BLUE
    pixel_offset: int = 0
    pixel_stride: int = 1
    start_position: Position = StartPosition.TOP_LEFT
    spread: bool = False
    marker: Optional[bytes] = None

    def __post_init__(self):
        if not 1 <= self.bits_per_pixel <= 8:
            raise InvalidOptions(
                f"bits_per_pixel must be between 1 and 8, got {self.bits_per_pixel}",
                details={"bits_per_pixel": self.bits_per_pixel},
            )
        if self.pixel_offset < 0:
            raise InvalidOptions(f"pixel_offset must be non-negative, got {self.pixel_offset}")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "channel", Channel.parse(self.channel))
        object.__setattr__(self, "pixel_stride", max(1, self.pixel_stride))
        object.__setattr__(self, "start_position", parse_position(self.start_position))
        if isinstance(self.marker, str):
            object.__setattr__(self, "marker", self.marker.encode("utf-8"))
        elif self.marker is not None:
            object.__setattr__(self, "marker", bytes(self.marker))

    def replace(self, **changes) -> "Options":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "Options":
        """Build Options from untyped settings, e.g. a parsed JSON object."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(settings) - known
        if unknown:
            raise InvalidOptions(
                f"Unknown option(s): {', '.join(sorted(unknown))}",
                details={"unknown": sorted(unknown)},
            )
        kwargs: Dict[str, Any] = dict(settings)
        for key in ("bits_per_pixel", "pixel_offset", "pixel_stride"):
            if key in kwargs:
                try:
                    kwargs[key] = int(kwargs[key])
                except (TypeError, ValueError):
                    raise InvalidOptions(f"{key} must be an integer, got {kwargs[key]!r}") from None
        if "spread" in kwargs and isinstance(kwargs["spread"], str):
            kwargs["spread"] = kwargs["spread"].strip().lower() in ("1", "true", "yes", "on")
        return cls(**kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        if isinstance(self.start_position, At):
            position = f"{self.start_position.x},{self.start_position.y}"
        else:
            position = self.start_position.value
        return {
            "bits_per_pixel": self.bits_per_pixel,
            "channel":        self.channel.name.lower(),
            "pixel_offset":   self.pixel_offset,
            "pixel_stride":   self.pixel_stride,
            "start_position": position,
            "spread":         self.spread,
            "marker":         self.marker,
        }
