# texture_errors.py


class TextureError(Exception):
    """Base class for failures that are fatal for a single texture."""


class UnsupportedFormat(TextureError):
    """Recognized container, but its pixel layout is not one we can decode."""


class TruncatedTexture(TextureError):
    """Recognized container whose pixel payload is shorter than its header claims."""
