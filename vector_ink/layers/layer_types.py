"""
Layer type and blend mode registry.

Layer types and blend modes are plain tags. Their capabilities and
display data live in lookup tables next to them:

    from vector_ink.layers.layer_types import LayerType, get_layer_traits

    traits = get_layer_traits(LayerType.TEXT)
    print(traits.supports_text, traits.supports_blend_modes)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class LayerType(Enum):
    """Kinds of layer content."""
    DRAWING = "drawing"
    TEXT = "text"
    IMAGE = "image"
    BACKGROUND = "background"

    @classmethod
    def from_name(cls, name: str) -> Optional['LayerType']:
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name.upper())


class BlendMode(Enum):
    """Pixel combination used when compositing a layer."""
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    SOFT_LIGHT = "soft_light"
    HARD_LIGHT = "hard_light"
    COLOR_DODGE = "color_dodge"
    COLOR_BURN = "color_burn"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"

    @classmethod
    def from_name(cls, name: str) -> Optional['BlendMode']:
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name.upper())


@dataclass(frozen=True)
class LayerTraits:
    """
    Capabilities of a layer type.

    Attributes:
        display_name: Human-readable label
        description: Short description for UI
        supports_drawing: Accepts strokes
        supports_text: Carries text content
        supports_images: Carries an image
        supports_transparency: Opacity may change
        supports_blend_modes: Blend mode is honoured when compositing
    """
    display_name: str
    description: str
    supports_drawing: bool
    supports_text: bool
    supports_images: bool
    supports_transparency: bool
    supports_blend_modes: bool


@dataclass(frozen=True)
class BlendModeInfo:
    display_name: str
    description: str


# ============================================================================
# LAYER TYPE TABLE
# ============================================================================

LAYER_TRAITS: Dict[LayerType, LayerTraits] = {
    LayerType.DRAWING: LayerTraits(
        display_name="Drawing Layer",
        description="Hand-drawn vector content",
        supports_drawing=True,
        supports_text=False,
        supports_images=False,
        supports_transparency=True,
        supports_blend_modes=True,
    ),
    LayerType.TEXT: LayerTraits(
        display_name="Text Layer",
        description="Text and annotations",
        supports_drawing=False,
        supports_text=True,
        supports_images=False,
        supports_transparency=True,
        supports_blend_modes=False,
    ),
    LayerType.IMAGE: LayerTraits(
        display_name="Image Layer",
        description="Placed image content",
        supports_drawing=False,
        supports_text=False,
        supports_images=True,
        supports_transparency=True,
        supports_blend_modes=True,
    ),
    LayerType.BACKGROUND: LayerTraits(
        display_name="Background",
        description="Canvas background, always opaque",
        supports_drawing=True,
        supports_text=True,
        supports_images=True,
        supports_transparency=False,
        supports_blend_modes=False,
    ),
}


# ============================================================================
# BLEND MODE TABLE
# ============================================================================

BLEND_MODE_INFO: Dict[BlendMode, BlendModeInfo] = {
    BlendMode.NORMAL: BlendModeInfo("Normal", "Standard layer coverage"),
    BlendMode.MULTIPLY: BlendModeInfo("Multiply", "Multiplies colors, darkening the result"),
    BlendMode.SCREEN: BlendModeInfo("Screen", "Inverse multiply, lightening the result"),
    BlendMode.OVERLAY: BlendModeInfo("Overlay", "Boosts contrast and saturation"),
    BlendMode.SOFT_LIGHT: BlendModeInfo("Soft Light", "Gentle contrast boost"),
    BlendMode.HARD_LIGHT: BlendModeInfo("Hard Light", "Strong contrast boost"),
    BlendMode.COLOR_DODGE: BlendModeInfo("Color Dodge", "Brightens the layers below"),
    BlendMode.COLOR_BURN: BlendModeInfo("Color Burn", "Darkens the layers below"),
    BlendMode.DIFFERENCE: BlendModeInfo("Difference", "Absolute color difference"),
    BlendMode.EXCLUSION: BlendModeInfo("Exclusion", "Like difference with lower contrast"),
}


def get_layer_traits(layer_type: LayerType) -> LayerTraits:
    return LAYER_TRAITS[layer_type]


def get_blend_mode_info(mode: BlendMode) -> BlendModeInfo:
    return BLEND_MODE_INFO[mode]


__all__ = [
    'LayerType',
    'BlendMode',
    'LayerTraits',
    'BlendModeInfo',
    'LAYER_TRAITS',
    'BLEND_MODE_INFO',
    'get_layer_traits',
    'get_blend_mode_info',
]
