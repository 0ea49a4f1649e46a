"""
Brush type registry.

BrushType is a plain tag; BRUSH_TRAITS maps each tag to its display
data and default tool parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class BrushType(Enum):
    """Drawing tools."""
    PEN = "pen"
    PENCIL = "pencil"
    BRUSH = "brush"
    HIGHLIGHTER = "highlighter"
    MARKER = "marker"
    WATERCOLOR = "watercolor"
    CHALK = "chalk"
    CRAYON = "crayon"

    @classmethod
    def from_name(cls, name: str) -> Optional['BrushType']:
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name.upper())


@dataclass(frozen=True)
class BrushTraits:
    """
    Defaults for a brush type.

    Attributes:
        display_name: Human-readable label
        description: What the tool is good for
        default_size: Stroke width in pixels
        default_opacity: Opacity in [0, 1]
        supports_pressure: Width reacts to pen pressure
        supports_texture: Texture settings apply
        flow: Paint flow in [0, 1]
        hardness: Edge hardness in [0, 1]
        scatter: Stamp scatter in [0, 1]
        pressure_sensitivity: Pressure response in [0, 2]
        texture_intensity: Texture strength in [0, 1]
    """
    display_name: str
    description: str
    default_size: float
    default_opacity: float
    supports_pressure: bool
    supports_texture: bool
    flow: float
    hardness: float
    scatter: float
    pressure_sensitivity: float
    texture_intensity: float


BRUSH_TRAITS: Dict[BrushType, BrushTraits] = {
    BrushType.PEN: BrushTraits(
        display_name="Pen",
        description="Precise lines for writing and detail work",
        default_size=3.0, default_opacity=1.0,
        supports_pressure=True, supports_texture=False,
        flow=1.0, hardness=1.0, scatter=0.0,
        pressure_sensitivity=1.2, texture_intensity=0.0,
    ),
    BrushType.PENCIL: BrushTraits(
        display_name="Pencil",
        description="Adjustable hardness for sketching",
        default_size=2.0, default_opacity=0.8,
        supports_pressure=True, supports_texture=True,
        flow=0.8, hardness=0.7, scatter=0.1,
        pressure_sensitivity=1.5, texture_intensity=0.3,
    ),
    BrushType.BRUSH: BrushTraits(
        display_name="Brush",
        description="Soft strokes for painting",
        default_size=8.0, default_opacity=0.9,
        supports_pressure=True, supports_texture=True,
        flow=0.9, hardness=0.3, scatter=0.2,
        pressure_sensitivity=1.8, texture_intensity=0.2,
    ),
    BrushType.HIGHLIGHTER: BrushTraits(
        display_name="Highlighter",
        description="Translucent marking of key passages",
        default_size=12.0, default_opacity=0.4,
        supports_pressure=False, supports_texture=False,
        flow=0.6, hardness=0.8, scatter=0.0,
        pressure_sensitivity=0.5, texture_intensity=0.0,
    ),
    BrushType.MARKER: BrushTraits(
        display_name="Marker",
        description="Saturated color for fills",
        default_size=10.0, default_opacity=0.85,
        supports_pressure=False, supports_texture=True,
        flow=0.9, hardness=0.6, scatter=0.05,
        pressure_sensitivity=0.8, texture_intensity=0.1,
    ),
    BrushType.WATERCOLOR: BrushTraits(
        display_name="Watercolor",
        description="Flowing wash effect",
        default_size=15.0, default_opacity=0.6,
        supports_pressure=True, supports_texture=True,
        flow=0.7, hardness=0.2, scatter=0.3,
        pressure_sensitivity=2.0, texture_intensity=0.4,
    ),
    BrushType.CHALK: BrushTraits(
        display_name="Chalk",
        description="Rough blackboard texture",
        default_size=8.0, default_opacity=0.7,
        supports_pressure=False, supports_texture=True,
        flow=0.8, hardness=0.4, scatter=0.4,
        pressure_sensitivity=1.0, texture_intensity=0.8,
    ),
    BrushType.CRAYON: BrushTraits(
        display_name="Crayon",
        description="Heavy waxy texture",
        default_size=12.0, default_opacity=0.9,
        supports_pressure=False, supports_texture=True,
        flow=0.9, hardness=0.5, scatter=0.2,
        pressure_sensitivity=1.0, texture_intensity=0.6,
    ),
}


def get_brush_traits(brush_type: BrushType) -> BrushTraits:
    return BRUSH_TRAITS[brush_type]


__all__ = ['BrushType', 'BrushTraits', 'BRUSH_TRAITS', 'get_brush_traits']
