# settings.py
import logging
import os

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    pass


LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _parse_bool(key, value):
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise SettingsError(f"{key} must be true or false, got {value!r}")


def _as_directory(value):
    value = value.strip()
    if value and not value.endswith(("/", os.sep)):
        value += "/"
    return value


class Settings:
    """Extractor settings read from a settings.txt style file.

    Each line is `Key = Value`; lines starting with # are comments.
    """

    def __init__(self):
        self.input_directory = "archives/"
        self.output_directory = "Exports/"
        self.write_textures = True
        self.log_verbosity = "info"
        self.log_file = "log.txt"

    @property
    def log_level(self):
        return LOG_LEVELS[self.log_verbosity]

    def texture_output_path(self, short_name):
        """Destination directory for a zone's textures, or "" when writing is off."""
        if not self.write_textures:
            return ""
        return f"{self.output_directory}{short_name}/Textures/"

    def apply(self, key, value):
        if key == "InputDirectory":
            self.input_directory = _as_directory(value)
        elif key == "OutputDirectory":
            self.output_directory = _as_directory(value)
        elif key == "WriteTextures":
            self.write_textures = _parse_bool(key, value)
        elif key == "LogVerbosity":
            verbosity = value.strip().lower()
            if verbosity not in LOG_LEVELS:
                raise SettingsError(f"LogVerbosity must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
            self.log_verbosity = verbosity
        elif key == "LogFile":
            self.log_file = value.strip()
        else:
            logger.warning("Ignoring unknown setting: %s", key)

    @classmethod
    def load(cls, path):
        settings = cls()
        if not os.path.isfile(path):
            logger.warning("Settings file %s not found, using defaults", path)
            return settings
        with open(path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                key, sep, value = line.partition("=")
                if not sep:
                    raise SettingsError(f"{path}:{line_number}: expected 'Key = Value', got {line!r}")
                settings.apply(key.strip(), value)
        return settings
