"""
Blend mode to QPainter composition mode mapping.

Qt's raster engine (QImage targets) implements every layer blend mode
natively, so NATIVE_COMPOSITION_MODES is an exact passthrough. Paint
engines without the BlendModes feature (some printers, PDF, SVG) get
the nearest Porter-Duff operator from FALLBACK_COMPOSITION_MODES.
"""

from typing import Dict, Optional

from PyQt6.QtGui import QPainter, QPaintEngine

from ..layers.layer_types import BlendMode

CompositionMode = QPainter.CompositionMode


NATIVE_COMPOSITION_MODES: Dict[BlendMode, CompositionMode] = {
    BlendMode.NORMAL: CompositionMode.CompositionMode_SourceOver,
    BlendMode.MULTIPLY: CompositionMode.CompositionMode_Multiply,
    BlendMode.SCREEN: CompositionMode.CompositionMode_Screen,
    BlendMode.OVERLAY: CompositionMode.CompositionMode_Overlay,
    BlendMode.SOFT_LIGHT: CompositionMode.CompositionMode_SoftLight,
    BlendMode.HARD_LIGHT: CompositionMode.CompositionMode_HardLight,
    BlendMode.COLOR_DODGE: CompositionMode.CompositionMode_ColorDodge,
    BlendMode.COLOR_BURN: CompositionMode.CompositionMode_ColorBurn,
    BlendMode.DIFFERENCE: CompositionMode.CompositionMode_Difference,
    BlendMode.EXCLUSION: CompositionMode.CompositionMode_Exclusion,
}

# Substitutes used when the target has no native blend operators
FALLBACK_COMPOSITION_MODES: Dict[BlendMode, CompositionMode] = {
    BlendMode.NORMAL: CompositionMode.CompositionMode_SourceOver,
    BlendMode.MULTIPLY: CompositionMode.CompositionMode_Multiply,
    BlendMode.SCREEN: CompositionMode.CompositionMode_Screen,
    BlendMode.OVERLAY: CompositionMode.CompositionMode_Overlay,
    BlendMode.SOFT_LIGHT: CompositionMode.CompositionMode_Overlay,
    BlendMode.HARD_LIGHT: CompositionMode.CompositionMode_Overlay,
    BlendMode.COLOR_DODGE: CompositionMode.CompositionMode_Lighten,
    BlendMode.COLOR_BURN: CompositionMode.CompositionMode_Darken,
    BlendMode.DIFFERENCE: CompositionMode.CompositionMode_Xor,
    BlendMode.EXCLUSION: CompositionMode.CompositionMode_Xor,
}


def painter_supports_blend_modes(painter: QPainter) -> bool:
    """True when the painter's engine implements the advanced blend operators"""
    engine: Optional[QPaintEngine] = painter.paintEngine()
    if engine is None:
        return False
    return engine.hasFeature(QPaintEngine.PaintEngineFeature.BlendModes)


def composition_mode_for(mode: BlendMode, native: bool = True) -> CompositionMode:
    """
    Composition mode for a layer blend mode.

    Args:
        mode: Layer blend mode
        native: Whether the target supports blend operators natively

    Returns:
        Exact operator when native, else the documented substitute
    """
    table = NATIVE_COMPOSITION_MODES if native else FALLBACK_COMPOSITION_MODES
    return table[mode]


__all__ = [
    'NATIVE_COMPOSITION_MODES',
    'FALLBACK_COMPOSITION_MODES',
    'painter_supports_blend_modes',
    'composition_mode_for',
]
