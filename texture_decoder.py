# texture_decoder.py
from abc import ABC, abstractmethod
from collections import namedtuple

DecodedPixelBuffer = namedtuple("DecodedPixelBuffer", ["width", "height", "stride", "pixel_format", "data"])

# Tagged result of classifying a raw stream. Exactly one of the two is returned.
Recognized = namedtuple("Recognized", ["buffer"])
NotRecognized = namedtuple("NotRecognized", ["data"])


class TextureDecoder(ABC):
    @abstractmethod
    def parse_texture_header(self, data):
        """Parse the container header, or return None if the stream is not ours."""
        pass

    @abstractmethod
    def decode_texture(self, data):
        """Classify the stream and return Recognized(buffer) or NotRecognized(data)."""
        pass
