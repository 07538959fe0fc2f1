# image_writer.py
import io
import logging
import os

from PIL import Image


logger = logging.getLogger(__name__)

PALETTE_SIZE = 256
MASK_INDEX = 0


def _masked_palette(image):
    """Return the image's palette as 256 RGBA entries with the mask index cleared."""
    entries = image.getpalette("RGBA") or []
    transparency = image.info.pop("transparency", None)
    if isinstance(transparency, int) and transparency * 4 < len(entries):
        entries[transparency * 4 + 3] = 0
    elif isinstance(transparency, bytes):
        for index, alpha in enumerate(transparency[:len(entries) // 4]):
            entries[index * 4 + 3] = alpha
    entries += [0, 0, 0, 255] * (PALETTE_SIZE - len(entries) // 4)

    # Only the mask index is cleared, whatever color was stored in it.
    entries[MASK_INDEX * 4:MASK_INDEX * 4 + 4] = [0, 0, 0, 0]
    return entries


def to_indexed(image):
    if image.mode == "P":
        return image.copy()
    return image.convert("RGB").convert("P", palette=Image.Palette.WEB, dither=Image.Dither.NONE)


def materialize(shader_type, image):
    """Produce the bitmap that gets written for a texture of the given shader type."""
    if shader_type.is_masked:
        indexed = to_indexed(image)
        indexed.putpalette(_masked_palette(indexed), "RGBA")
        return indexed
    return image.convert("RGBA")


def write_image(data, file_path, file_name, shader_type):
    """Writes an image to <file_path><file_name> as PNG based on the shader type.

    An empty file_path means textures are not being written and nothing
    happens. The directory is created before the data is checked, so an
    empty stream still leaves the directory behind.
    """
    if not file_path:
        return

    os.makedirs(file_path, exist_ok=True)

    if not data:
        return

    with Image.open(io.BytesIO(data)) as image:
        image.load()
        output = materialize(shader_type, image)

    output.save(file_path + file_name, format="PNG")
    logger.debug("Wrote %s%s (%s, %dx%d %s)", file_path, file_name, shader_type.name,
                 output.width, output.height, output.mode)
