# seagul test configuration

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from seagul.codec import PixelBuffer


def blank_buffer(width: int, height: int) -> PixelBuffer:
    return PixelBuffer(width, height)


def noisy_buffer(width: int, height: int) -> PixelBuffer:
    """Deterministic, non-uniform pixels so high bits are worth checking."""
    size = width * height * 3
    return PixelBuffer(width, height, bytes((i * 37 + 11) % 256 for i in range(size)))


@pytest.fixture
def blank():
    return blank_buffer


@pytest.fixture
def noisy():
    return noisy_buffer
