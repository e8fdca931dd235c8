"""
seagul: core building blocks
=============================
Bits, options, cursor, capacity and marker scanner.

Run with:  python -m pytest tests/ -v
"""

import dataclasses

import pytest
from seagul.core.bits     import get_bits, set_bits, read_bits, iter_chunks
from seagul.core.options  import Options, Channel, StartPosition, At
from seagul.core.cursor   import base_offset, iter_indices, iter_pixels
from seagul.core.capacity import (required_pixel_visits, available_pixel_visits,
                                  max_payload_bytes, check_capacity)
from seagul.core.marker   import MarkerScanner
from seagul.errors        import InvalidOptions, InvalidChannel, CapacityExceeded

# ── Bits ──────────────────────────────────────────────────────────────────────
def test_get_bits_lsb_first():
    assert get_bits(0x41, 8) == [1, 0, 0, 0, 0, 0, 1, 0]
    assert get_bits(0b1011, 2) == [1, 1]

def test_set_bits_only_touches_target_range():
    assert set_bits(0xFF, 0, 1, 0) == 0xFE
    assert set_bits(0b10101010, 2, 3, 0b111) == 0b10111110
    assert set_bits(0x00, 0, 2, 0xFF) == 0x03
    assert set_bits(0xF0, 0, 8, 0x0F) == 0x0F

def test_read_bits_crosses_byte_boundary():
    assert read_bits(b"\x41\x42", 0, 8) == 0x41
    assert read_bits(b"\x41\x42", 6, 3) == 0b001
    assert read_bits(b"\x41\x42", 14, 2) == 0b01

def test_iter_chunks_straddle_bytes():
    chunks = list(iter_chunks(b"\x41\x42", 3))
    assert [value for _, _, value in chunks] == [1, 0, 1, 1, 4, 0]
    assert [offset for offset, _, _ in chunks] == [0, 3, 6, 9, 12, 15]
    assert chunks[-1][1] == 1
    assert all(count == 3 for _, count, _ in chunks[:-1])

@pytest.mark.parametrize("bits", [1, 2, 3, 4, 5, 6, 7, 8])
def test_iter_chunks_only_last_chunk_is_short(bits):
    data = bytes(range(7))
    chunks = list(iter_chunks(data, bits))
    assert len(chunks) == -(-len(data) * 8 // bits)
    assert sum(count for _, count, _ in chunks) == len(data) * 8
    assert all(count == bits for _, count, _ in chunks[:-1])

# ── Options ───────────────────────────────────────────────────────────────────
def test_options_defaults():
    o = Options()
    assert o.bits_per_pixel == 1
    assert o.channel is Channel.BLUE
    assert o.pixel_offset == 0
    assert o.pixel_stride == 1
    assert o.start_position is StartPosition.TOP_LEFT
    assert o.spread is False
    assert o.marker is None

@pytest.mark.parametrize("stride", [0, -1, -100])
def test_options_stride_clamps_to_one(stride):
    assert Options(pixel_stride=stride).pixel_stride == 1

@pytest.mark.parametrize("bits", [0, 9, -1])
def test_options_rejects_bad_bit_count(bits):
    with pytest.raises(InvalidOptions):
        Options(bits_per_pixel=bits)

def test_options_rejects_negative_offset():
    with pytest.raises(ValueError):
        Options(pixel_offset=-1)

def test_options_raw_channel_values():
    assert Options(channel=0).channel is Channel.RED
    assert Options(channel="Green").channel is Channel.GREEN
    with pytest.raises(InvalidChannel):
        Options(channel=3)
    with pytest.raises(InvalidChannel):
        Options(channel="alpha")

def test_options_are_immutable():
    o = Options()
    with pytest.raises(dataclasses.FrozenInstanceError):
        o.bits_per_pixel = 4
    o2 = o.replace(bits_per_pixel=4)
    assert o.bits_per_pixel == 1
    assert o2.bits_per_pixel == 4

def test_options_marker_text_is_utf8():
    assert Options(marker="--").marker == b"--"
    assert Options(marker=bytearray(b"\x00\xff")).marker == b"\x00\xff"

def test_options_from_mapping():
    o = Options.from_mapping({
        "bits_per_pixel": "2",
        "channel":        "red",
        "start_position": "3,4",
        "spread":         "true",
        "marker":         "--",
    })
    assert o.bits_per_pixel == 2
    assert o.channel is Channel.RED
    assert o.start_position == At(3, 4)
    assert o.spread is True
    assert o.marker == b"--"

def test_options_from_mapping_named_position():
    assert Options.from_mapping({"start_position": "bottom_right"}).start_position \
        is StartPosition.BOTTOM_RIGHT
    with pytest.raises(InvalidOptions):
        Options.from_mapping({"start_position": "middle"})

def test_options_from_mapping_unknown_key():
    with pytest.raises(InvalidOptions):
        Options.from_mapping({"padding": True})

def test_options_mapping_roundtrip():
    o = Options(bits_per_pixel=3, channel=Channel.GREEN, pixel_offset=7,
                pixel_stride=2, start_position=At(2, 5), spread=True, marker=b"END")
    assert Options.from_mapping(o.to_mapping()) == o

def test_at_rejects_negative_coordinates():
    with pytest.raises(InvalidOptions):
        At(-1, 2)

# ── Cursor ────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("position,expected", [
    (StartPosition.TOP_LEFT,     0),
    (StartPosition.TOP_RIGHT,    10),
    (StartPosition.BOTTOM_LEFT,  4),
    (StartPosition.BOTTOM_RIGHT, 14),
    (StartPosition.CENTER,       7),
    (At(2, 3),                   6),
])
def test_base_offset(position, expected):
    assert base_offset(position, 10, 4) == expected

def test_cursor_offset_and_stride():
    o = Options(pixel_offset=2, pixel_stride=3)
    assert list(iter_indices(o, 4, 4)) == [2, 5, 8, 11, 14]

def test_cursor_start_position_adds_to_offset():
    o = Options(start_position=StartPosition.TOP_RIGHT, pixel_offset=1)
    assert next(iter_pixels(o, 4, 4)) == (1, 1)

def test_cursor_row_major_addresses():
    assert list(iter_pixels(Options(), 3, 2)) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

def test_cursor_without_spread_stops_after_one_pass():
    assert list(iter_indices(Options(pixel_offset=20), 4, 4)) == []

def test_cursor_spread_wraps_to_zero():
    o = Options(pixel_offset=5, spread=True)
    assert list(iter_indices(o, 4, 4)) == list(range(5, 16)) + list(range(5))

def test_cursor_spread_with_stride_never_revisits():
    o = Options(pixel_stride=2, spread=True)
    seq = list(iter_indices(o, 4, 4))
    assert seq == [0, 2, 4, 6, 8, 10, 12, 14, 1, 3, 5, 7, 9, 11, 13, 15]
    assert sorted(seq) == list(range(16))

def test_cursor_spread_walks_residue_classes_after_first_pass():
    o = Options(pixel_offset=1, pixel_stride=3, spread=True)
    assert list(iter_indices(o, 3, 3)) == [1, 4, 7, 0, 3, 6, 2, 5, 8]

def test_cursor_spread_large_stride_visits_every_pixel_once():
    o = Options(pixel_stride=1000, spread=True)
    seq = list(iter_indices(o, 300, 300))
    assert len(seq) == 90000
    assert sorted(seq) == list(range(90000))
    assert seq[:3] == [0, 1000, 2000]

def test_cursor_spread_from_past_the_end():
    o = Options(pixel_offset=100, spread=True)
    assert list(iter_indices(o, 4, 4)) == list(range(16))

def test_cursor_is_restartable():
    o = Options(pixel_stride=3, spread=True)
    assert list(iter_indices(o, 5, 5)) == list(iter_indices(o, 5, 5))

# ── Capacity ──────────────────────────────────────────────────────────────────
def test_required_pixel_visits():
    assert required_pixel_visits(3, 1) == 24
    assert required_pixel_visits(3, 2) == 12
    assert required_pixel_visits(2, 8) == 2
    assert required_pixel_visits(1, 3) == 3
    assert required_pixel_visits(2, 3) == 6
    assert required_pixel_visits(3, 3) == 8
    assert required_pixel_visits(5, 7) == 6
    assert required_pixel_visits(0, 1) == 0

def test_available_visits_match_cursor():
    for o in (Options(pixel_offset=2, pixel_stride=3),
              Options(start_position=StartPosition.CENTER, pixel_stride=2),
              Options(pixel_offset=3, spread=True),
              Options(pixel_offset=50)):
        assert available_pixel_visits(o, 6, 5) == len(list(iter_indices(o, 6, 5)))

def test_max_payload_bytes():
    assert max_payload_bytes(Options(), 4, 4) == 2
    assert max_payload_bytes(Options(bits_per_pixel=2), 4, 4) == 4
    assert max_payload_bytes(Options(bits_per_pixel=3), 4, 4) == 6
    assert max_payload_bytes(Options(bits_per_pixel=5), 3, 3) == 5

def test_check_capacity_boundary():
    o = Options(bits_per_pixel=8, pixel_offset=3, pixel_stride=2)
    check_capacity(7, o, 4, 4)
    with pytest.raises(CapacityExceeded) as exc:
        check_capacity(8, o, 4, 4)
    assert exc.value.required == 8
    assert exc.value.available == 7
    check_capacity(16, o.replace(spread=True), 4, 4)
    with pytest.raises(CapacityExceeded):
        check_capacity(17, o.replace(spread=True), 4, 4)

# ── Marker scanner ────────────────────────────────────────────────────────────
def test_marker_scanner_matches_trailing_window():
    s = MarkerScanner(b"--")
    assert s.enabled
    assert s.push(ord("a")) is False
    assert s.push(ord("-")) is False
    assert s.push(ord("-")) is True
    assert s.matched

def test_marker_scanner_slides():
    s = MarkerScanner(b"ab")
    assert [s.push(b) for b in b"aab"] == [False, False, True]

def test_marker_scanner_exact_only():
    s = MarkerScanner(b"END")
    assert not any(s.push(b) for b in b"ENNXEN")

@pytest.mark.parametrize("marker", [None, b""])
def test_marker_scanner_disabled(marker):
    s = MarkerScanner(marker)
    assert not s.enabled
    assert not any(s.push(b) for b in b"\x00" * 10)
