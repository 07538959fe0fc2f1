# DDS/pixel_formats.py
from collections import namedtuple
from enum import Enum

from texture_errors import UnsupportedFormat

DDPF_ALPHAPIXELS = 0x1
DDPF_FOURCC = 0x4
DDPF_RGB = 0x40

PixelFormatTag = namedtuple(
    "PixelFormatTag",
    ["flags", "fourcc", "rgb_bit_count", "r_mask", "g_mask", "b_mask", "a_mask"],
)


class CanonicalFormat(Enum):
    ARGB32 = "ARGB32"  # 32 bits per pixel, straight alpha, stored B, G, R, A


A8R8G8B8 = PixelFormatTag(
    flags=DDPF_RGB | DDPF_ALPHAPIXELS,
    fourcc=b"\x00\x00\x00\x00",
    rgb_bit_count=32,
    r_mask=0x00FF0000,
    g_mask=0x0000FF00,
    b_mask=0x000000FF,
    a_mask=0xFF000000,
)

PIXEL_FORMATS = {
    A8R8G8B8: CanonicalFormat.ARGB32,
}

# Byte offset of R, G, B and A inside one source pixel.
CHANNEL_ORDER = {
    CanonicalFormat.ARGB32: (2, 1, 0, 3),
}

BYTES_PER_PIXEL = {
    CanonicalFormat.ARGB32: 4,
}


def describe_pixel_format(tag):
    if tag.flags & DDPF_FOURCC:
        return f"FourCC {tag.fourcc.decode('ascii', errors='replace').rstrip(chr(0))!r}"
    return (
        f"{tag.rgb_bit_count}bpp flags=0x{tag.flags:X} "
        f"masks=({tag.r_mask:08X}, {tag.g_mask:08X}, {tag.b_mask:08X}, {tag.a_mask:08X})"
    )


def normalize_pixel_format(tag):
    """Map a DDS pixel-format tag onto the canonical in-memory layout.

    Only uncompressed 32-bit straight-alpha ARGB is supported; every other
    tag raises UnsupportedFormat. New layouts are added to PIXEL_FORMATS.
    """
    # FourCC is meaningless for uncompressed layouts, some writers leave junk there
    if not tag.flags & DDPF_FOURCC:
        tag = tag._replace(fourcc=A8R8G8B8.fourcc)
    canonical = PIXEL_FORMATS.get(tag)
    if canonical is None:
        raise UnsupportedFormat(f"Unsupported pixel format: {describe_pixel_format(tag)}")
    return canonical


def channel_order(canonical):
    return CHANNEL_ORDER[canonical]


def bytes_per_pixel(canonical):
    return BYTES_PER_PIXEL[canonical]
