"""Brush tools and presets"""

from .brush_type import BrushType, BrushTraits, BRUSH_TRAITS, get_brush_traits
from .brush_properties import BrushProperties
from .brush_preset import BrushPreset, PresetCategory, create_system_presets
from .preset_manager import BrushPresetManager

__all__ = [
    'BrushType',
    'BrushTraits',
    'BRUSH_TRAITS',
    'get_brush_traits',
    'BrushProperties',
    'BrushPreset',
    'PresetCategory',
    'create_system_presets',
    'BrushPresetManager',
]
