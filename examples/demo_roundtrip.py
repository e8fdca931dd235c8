"""
seagul: Live Demo: embed, save, load, extract
===============================================
Run:  python examples/demo_roundtrip.py [carrier.png]

Without an argument a synthetic gradient carrier is generated. Shows the
capacity, the encode change log, and a marker-terminated decode for a few
option sets, with timing for each.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from PIL import Image

from seagul import (ImageEncoder, ImageDecoder, Options, Channel, StartPosition,
                    ImageFormat, CapacityExceeded)

LINE   = "═" * 70
MARKER = b"--"
VERSES = b"""Midway upon the journey of our life
I found myself within a forest dark,
For the straightforward pathway had been lost."""

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

def gradient(width=160, height=120) -> Image.Image:
    img = Image.new("RGB", (width, height))
    img.putdata([((x * 255) // width, (y * 255) // height, (x + y) % 256)
                 for y in range(height) for x in range(width)])
    return img

def run(name, carrier, options):
    header(name)
    t0 = time.perf_counter()
    encoder = ImageEncoder(carrier, options)
    ok("Capacity", f"{encoder.max_capacity_bytes()} bytes")
    try:
        encoded = encoder.encode_bytes(VERSES + MARKER)
    except CapacityExceeded as e:
        print(f"  ✗  {e.message}")
        return
    ok("Pixels touched", encoded.pixels_touched())
    ok("Pixels changed", encoded.pixels_changed())

    png = encoded.to_bytes(ImageFormat.PNG)
    decoded = ImageDecoder(png, options.replace(marker=MARKER)).decode()
    elapsed = time.perf_counter() - t0
    ok("Hit marker", str(decoded.hit_marker))
    ok("Round-trip", f"{elapsed * 1000:.2f} ms")
    ok("Decoded", decoded.trimmed().decode()[:40] + "...")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=" %(message)s")

    carrier = Image.open(sys.argv[1]) if len(sys.argv) > 1 else gradient()

    print(f"\n{LINE}")
    print("  seagul: LSB embedding demo")
    print(LINE)
    print(f"  Carrier: {carrier.width}x{carrier.height}  payload: {len(VERSES)} bytes\n")

    run("Default, 1 bit, blue channel", carrier, Options())
    run("2 bits, red channel, stride 3", carrier,
        Options(bits_per_pixel=2, channel=Channel.RED, pixel_stride=3))
    run("Center start, spread", carrier,
        Options(start_position=StartPosition.CENTER, pixel_offset=18500, spread=True))
    run("Too tight, offset with no spread", carrier,
        Options(pixel_offset=18500))
    print(f"\n{LINE}\n")
