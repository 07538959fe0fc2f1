# DDS/dds_texture_decoder.py
import io
import logging
import struct
from collections import namedtuple

import numpy as np
from PIL import Image

from texture_decoder import DecodedPixelBuffer, NotRecognized, Recognized, TextureDecoder
from texture_errors import TruncatedTexture
from DDS.pixel_formats import A8R8G8B8, PixelFormatTag, bytes_per_pixel, channel_order, normalize_pixel_format

logger = logging.getLogger(__name__)

DDS_MAGIC = b"DDS "
DDS_HEADER_SIZE = 124
DDS_PREAMBLE_LENGTH = 128
DDS_PIXELFORMAT_SIZE = 32

DDSD_CAPS = 0x1
DDSD_HEIGHT = 0x2
DDSD_WIDTH = 0x4
DDSD_PITCH = 0x8
DDSD_PIXELFORMAT = 0x1000
DDSCAPS_TEXTURE = 0x1000

DDSHeader = namedtuple("DDSHeader", ["width", "height", "pitch", "flags", "pixel_format"])


class DDSTextureDecoder(TextureDecoder):
    def parse_texture_header(self, data):
        OFFSET_HEADER = 0x04
        OFFSET_PIXEL_FORMAT = 0x4C

        if len(data) < DDS_PREAMBLE_LENGTH or bytes(data[0:4]) != DDS_MAGIC:
            return None
        header_size, flags, height, width, pitch, _depth, _mip_count = struct.unpack_from(
            "<7I", data, OFFSET_HEADER
        )
        if header_size != DDS_HEADER_SIZE:
            return None
        pf_size, pf_flags, fourcc, bit_count, r_mask, g_mask, b_mask, a_mask = struct.unpack_from(
            "<II4s5I", data, OFFSET_PIXEL_FORMAT
        )
        if pf_size != DDS_PIXELFORMAT_SIZE:
            return None
        pixel_format = PixelFormatTag(pf_flags, fourcc, bit_count, r_mask, g_mask, b_mask, a_mask)
        return DDSHeader(width, height, pitch, flags, pixel_format)

    def decode_texture(self, data):
        header = self.parse_texture_header(data)
        if header is None:
            return NotRecognized(data)

        canonical = normalize_pixel_format(header.pixel_format)
        if header.width == 0 or header.height == 0:
            raise TruncatedTexture(f"Invalid texture dimensions ({header.width}x{header.height})")

        row_length = header.width * bytes_per_pixel(canonical)
        stride = row_length
        if header.flags & DDSD_PITCH and header.pitch:
            stride = header.pitch
        if stride < row_length:
            raise TruncatedTexture(f"Pitch {stride} is shorter than a {header.width} pixel row")

        size = stride * header.height
        payload = data[DDS_PREAMBLE_LENGTH:DDS_PREAMBLE_LENGTH + size]
        if len(payload) < size:
            raise TruncatedTexture(
                f"Expected {size} bytes of pixel data for {header.width}x{header.height}, got {len(payload)}"
            )
        logger.debug("DDS texture: %dx%d stride=%d (%s)", header.width, header.height, stride, canonical.value)
        return Recognized(DecodedPixelBuffer(header.width, header.height, stride, header.pixel_format, bytes(payload)))


def classify_stream(data):
    return DDSTextureDecoder().decode_texture(data)


def buffer_to_image(buffer):
    """Build an RGBA image from a decoded buffer.

    The pixel bytes are only looked at through a memoryview that is released
    before returning; the resulting image owns a copy of the pixels.
    """
    canonical = normalize_pixel_format(buffer.pixel_format)
    bpp = bytes_per_pixel(canonical)
    order = list(channel_order(canonical))
    with memoryview(buffer.data) as view:
        rows = np.frombuffer(view, dtype=np.uint8)
        try:
            # Fancy indexing copies, so nothing returned here still points into the view
            pixels = rows.reshape(buffer.height, buffer.stride)[:, :buffer.width * bpp].reshape(
                buffer.height, buffer.width, bpp
            )[..., order]
        finally:
            # numpy keeps the buffer exported until its array goes away
            del rows
    return Image.fromarray(np.ascontiguousarray(pixels), "RGBA")


def convert_dds(data):
    """Return PNG bytes for a supported DDS stream, or the input untouched."""
    result = classify_stream(data)
    if isinstance(result, NotRecognized):
        return result.data
    image = buffer_to_image(result.buffer)
    with io.BytesIO() as output:
        image.save(output, format="PNG")
        return output.getvalue()


def create_dds_header(width, height, pitch=None):
    header = bytearray(DDS_PREAMBLE_LENGTH)
    header[0:4] = DDS_MAGIC
    header[4:8] = DDS_HEADER_SIZE.to_bytes(4, "little")
    flags = DDSD_CAPS | DDSD_HEIGHT | DDSD_WIDTH | DDSD_PIXELFORMAT | DDSD_PITCH
    if pitch is None:
        pitch = width * 4
    header[8:12] = flags.to_bytes(4, "little")
    header[12:16] = height.to_bytes(4, "little")
    header[16:20] = width.to_bytes(4, "little")
    header[20:24] = pitch.to_bytes(4, "little")
    header[76:80] = DDS_PIXELFORMAT_SIZE.to_bytes(4, "little")
    header[80:84] = A8R8G8B8.flags.to_bytes(4, "little")
    header[84:88] = A8R8G8B8.fourcc
    header[88:92] = A8R8G8B8.rgb_bit_count.to_bytes(4, "little")
    header[92:96] = A8R8G8B8.r_mask.to_bytes(4, "little")
    header[96:100] = A8R8G8B8.g_mask.to_bytes(4, "little")
    header[100:104] = A8R8G8B8.b_mask.to_bytes(4, "little")
    header[104:108] = A8R8G8B8.a_mask.to_bytes(4, "little")
    header[108:112] = DDSCAPS_TEXTURE.to_bytes(4, "little")
    return header
