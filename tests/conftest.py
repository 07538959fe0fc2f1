import io

import numpy as np
import pytest
from PIL import Image

from DDS.dds_texture_decoder import create_dds_header


@pytest.fixture
def make_dds():
    """Wrap an (h, w, 4) RGBA array into an uncompressed A8R8G8B8 DDS stream."""
    def _make_dds(rgba, pitch=None):
        height, width = rgba.shape[:2]
        bgra = np.ascontiguousarray(rgba[..., [2, 1, 0, 3]], dtype=np.uint8)
        rows = bgra.reshape(height, width * 4)
        if pitch is not None:
            padded = np.zeros((height, pitch), dtype=np.uint8)
            padded[:, :width * 4] = rows
            rows = padded
        return bytes(create_dds_header(width, height, pitch)) + rows.tobytes()
    return _make_dds


@pytest.fixture
def solid_rgba():
    def _solid_rgba(color, width=4, height=4):
        return np.tile(np.array(color, dtype=np.uint8), (height, width, 1))
    return _solid_rgba


@pytest.fixture
def encode_image():
    def _encode_image(image, format):
        with io.BytesIO() as output:
            image.save(output, format=format)
            return output.getvalue()
    return _encode_image


@pytest.fixture
def masked_bmp(encode_image):
    """4x4 8-bit BMP: left half palette index 0 (yellow), right half index 1 (blue)."""
    image = Image.new("P", (4, 4))
    image.putpalette([255, 255, 0, 0, 0, 255])
    for y in range(4):
        for x in range(4):
            image.putpixel((x, y), 0 if x < 2 else 1)
    return encode_image(image, "BMP")
