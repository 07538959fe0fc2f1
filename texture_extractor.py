# texture_extractor.py
import argparse
import logging
import os
import sys
from collections import namedtuple

from DDS.dds_texture_decoder import convert_dds
from image_writer import write_image
from settings import Settings, SettingsError
from shader_types import ShaderType
from texture_errors import TextureError

logger = logging.getLogger("texture_extractor")

TEXTURE_EXTENSIONS = (".bmp", ".dds", ".tga")
MATERIALS_FILE = "materials.txt"

ExtractionResult = namedtuple("ExtractionResult", ["written", "failed"])


def configure_logging(settings):
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def is_texture_file(name):
    return name.lower().endswith(TEXTURE_EXTENSIONS)


def png_name_for(name):
    return os.path.splitext(os.path.basename(name))[0].lower() + ".png"


def load_material_types(path):
    """Read `<texture file> <shader type>` lines into a lower-cased lookup."""
    material_types = {}
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) != 2:
                raise SettingsError(f"{path}:{line_number}: expected '<texture> <shader type>', got {line!r}")
            try:
                shader_type = ShaderType.from_name(parts[1])
            except ValueError as e:
                raise SettingsError(f"{path}:{line_number}: {e}") from e
            material_types[parts[0].lower()] = shader_type
    return material_types


def iter_texture_files(directory):
    for name in sorted(os.listdir(directory)):
        full_path = os.path.join(directory, name)
        if not os.path.isfile(full_path) or not is_texture_file(name):
            continue
        with open(full_path, "rb") as f:
            yield name, f.read()


def extract_textures(textures, output_path, material_types=None, source_name=""):
    """Convert and write every texture, isolating failures per texture."""
    material_types = material_types or {}
    written = []
    failed = []
    for name, data in textures:
        shader_type = material_types.get(name.lower(), ShaderType.NORMAL)
        file_name = png_name_for(name)
        try:
            write_image(convert_dds(data), output_path, file_name, shader_type)
        except Exception as e:
            # Expected decode failures get one line, anything else also gets its traceback
            logger.error("Failed to extract texture %s (shader: %s, archive: %s): %s",
                         name, shader_type.name, source_name, e,
                         exc_info=not isinstance(e, (TextureError, OSError)))
            failed.append(name)
            continue
        written.append(file_name)
    return ExtractionResult(written, failed)


def find_archives(settings, short_name):
    if short_name.lower() == "all":
        if not os.path.isdir(settings.input_directory):
            return []
        return [
            name for name in sorted(os.listdir(settings.input_directory))
            if os.path.isdir(os.path.join(settings.input_directory, name))
        ]
    if os.path.isdir(os.path.join(settings.input_directory, short_name)):
        return [short_name]
    return []


def extract_archive(settings, short_name):
    archive_directory = os.path.join(settings.input_directory, short_name)
    materials_path = os.path.join(archive_directory, MATERIALS_FILE)
    material_types = {}
    if os.path.isfile(materials_path):
        material_types = load_material_types(materials_path)
    logger.info("Extracting textures from %s", short_name)
    result = extract_textures(
        iter_texture_files(archive_directory),
        settings.texture_output_path(short_name),
        material_types,
        source_name=short_name,
    )
    logger.info("%s: %d written, %d failed", short_name, len(result.written), len(result.failed))
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="Extract legacy client textures to PNG.")
    parser.add_argument("shortname", help="zone short name, or 'all'")
    parser.add_argument("--settings", default="settings.txt", help="settings file (default: settings.txt)")
    args = parser.parse_args(argv)

    try:
        settings = Settings.load(args.settings)
    except SettingsError as e:
        logger.error("Invalid settings file %s: %s", args.settings, e)
        return 1
    configure_logging(settings)

    archives = find_archives(settings, args.shortname)
    if not archives:
        logger.error("No extracted archives found for: '%s' at path: %s", args.shortname, settings.input_directory)
        return 1

    failed = []
    failed_archives = []
    for short_name in archives:
        try:
            result = extract_archive(settings, short_name)
        except SettingsError as e:
            logger.error("Skipping archive %s: %s", short_name, e)
            failed_archives.append(short_name)
            continue
        failed.extend(f"{short_name}/{name}" for name in result.failed)

    if failed_archives:
        logger.warning("Skipped archives (%d): %s", len(failed_archives), ", ".join(failed_archives))
    if failed:
        logger.warning("Failed textures (%d): %s", len(failed), ", ".join(failed))
    logger.info("Extraction complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
