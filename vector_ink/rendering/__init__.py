"""QPainter rendering of strokes and layers"""

from .blend_modes import (
    NATIVE_COMPOSITION_MODES,
    FALLBACK_COMPOSITION_MODES,
    composition_mode_for,
    painter_supports_blend_modes,
)
from .stroke_renderer import render_stroke, render_strokes, make_pen
from .layer_renderer import LayerRenderer

__all__ = [
    'NATIVE_COMPOSITION_MODES',
    'FALLBACK_COMPOSITION_MODES',
    'composition_mode_for',
    'painter_supports_blend_modes',
    'render_stroke',
    'render_strokes',
    'make_pen',
    'LayerRenderer',
]
