"""
Style presets appended to generation prompts.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any


class StylePreset(str, Enum):
    """Named visual styles accepted by /generate."""
    CINEMATICO = "cinematico"
    DOCUMENTARY = "documentary"
    COMMERCIAL = "commercial"
    ARTISTICO = "artistico"

    @property
    def hint(self) -> str:
        return STYLE_HINTS[self]

    @classmethod
    def resolve(cls, value: Any) -> "StylePreset":
        """Return the preset for ``value``, or the default preset if it is not a known key."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return DEFAULT_STYLE


DEFAULT_STYLE = StylePreset.CINEMATICO

STYLE_HINTS = MappingProxyType({
    StylePreset.CINEMATICO: "cinematic look, shallow depth of field, film grain, anamorphic lens",
    StylePreset.DOCUMENTARY: "documentary style, natural lighting, handheld camera, authentic feel",
    StylePreset.COMMERCIAL: "commercial production quality, clean lighting, polished look, vibrant colors",
    StylePreset.ARTISTICO: "artistic cinematography, creative angles, dramatic lighting, visual poetry",
})


def build_prompt(prompt: str, style: Any = DEFAULT_STYLE) -> str:
    """Append the resolved style hint to a user prompt."""
    return f"{prompt}. Style: {StylePreset.resolve(style).hint}"
