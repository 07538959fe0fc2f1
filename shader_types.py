# shader_types.py
from enum import Enum


class ShaderType(Enum):
    NORMAL = 0
    TRANSPARENT_25 = 1
    TRANSPARENT_50 = 2
    TRANSPARENT_75 = 3
    TRANSPARENT_ADDITIVE = 4
    TRANSPARENT_ADDITIVE_UNLIT = 5
    TRANSPARENT_MASKED = 6
    DIFFUSE_SKYDOME = 7
    TRANSPARENT_SKYDOME = 8
    TRANSPARENT_ADDITIVE_UNLIT_SKYDOME = 9
    INVISIBLE = 10
    BOUNDARY = 11

    @classmethod
    def from_name(cls, name):
        """Accepts 'TransparentMasked', 'transparent_masked', 'TRANSPARENT-MASKED'..."""
        key = name.strip().replace("_", "").replace("-", "").upper()
        for member in cls:
            if member.name.replace("_", "") == key:
                return member
        # The legacy tools call the opaque shader "Diffuse"
        if key == "DIFFUSE":
            return cls.NORMAL
        raise ValueError(f"Unknown shader type: {name!r}")

    @property
    def is_masked(self):
        return self is ShaderType.TRANSPARENT_MASKED
