"""
Errors
======
Every failure raised by seagul derives from SeagulError.

The concrete kinds also derive from ValueError, so callers that only
care about "bad input" can catch that and move on.

    InvalidOptions       option value out of range (bits, offset, position)
    InvalidChannel       channel is not Red / Green / Blue
    CapacityExceeded     payload needs more pixel visits than available
    InvalidImage         Pillow could not decode the carrier bytes
    InvalidUtf8          text view requested on non UTF-8 payload
"""

from typing import Any, Dict, Optional


class SeagulError(Exception):
    """Base class for all seagul errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidOptions(SeagulError, ValueError):
    pass


class InvalidChannel(InvalidOptions):
    pass


class CapacityExceeded(SeagulError, ValueError):
    """Raised by encode before touching any pixel."""

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Payload too large: {required} pixel visits needed, "
            f"{available} available.",
            details={"required": required, "available": available},
        )
        self.required  = required
        self.available = available


class InvalidImage(SeagulError, ValueError):
    pass


class InvalidUtf8(SeagulError, ValueError):
    pass
