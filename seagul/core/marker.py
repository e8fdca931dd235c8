"""
Marker scanner
==============
Sliding window over the most recent decoded bytes.

The decoder pushes every completed byte. Once the window holds
len(marker) bytes it is compared with the marker, exact length and
exact value. A match is terminal: decoding stops right there.

An empty or missing marker disables the scanner.
"""

from collections import deque
from typing import Optional


class MarkerScanner:
    """FIFO window of at most len(marker) bytes."""

    def __init__(self, marker: Optional[bytes]):
        self._marker = bytes(marker or b"")
        self._window = deque(maxlen=len(self._marker) or None)
        self._matched = False

    @property
    def enabled(self) -> bool:
        return bool(self._marker)

    @property
    def matched(self) -> bool:
        return self._matched

    def push(self, byte: int) -> bool:
        """Feed one completed byte. Returns True once the marker is seen."""
        if not self._marker:
            return False
        if self._matched:
            return True
        self._window.append(byte)
        if len(self._window) == len(self._marker) and bytes(self._window) == self._marker:
            self._matched = True
        return self._matched
