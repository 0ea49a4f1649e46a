"""
Brush properties - the live settings of the current drawing tool.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from ..config import Config
from ..core.geometry import VectorPoint, clamp
from ..core.vector_stroke import VectorStroke
from .brush_type import BrushType, get_brush_traits


@dataclass(frozen=True)
class BrushProperties:
    """Tool settings; color is a packed ARGB integer."""
    brush_type: BrushType = BrushType.PEN
    color: int = Config.DEFAULT_STROKE_COLOR
    size: float = Config.DEFAULT_STROKE_WIDTH
    opacity: float = 1.0
    flow: float = 1.0
    hardness: float = 1.0
    scatter: float = 0.0
    pressure_sensitivity: float = 1.0
    texture_intensity: float = 0.0
    pressure_enabled: bool = True
    texture_enabled: bool = False

    @classmethod
    def from_brush_type(cls, brush_type: BrushType) -> 'BrushProperties':
        """Defaults for a brush type, in black"""
        traits = get_brush_traits(brush_type)
        return cls(
            brush_type=brush_type,
            size=traits.default_size,
            opacity=traits.default_opacity,
            flow=traits.flow,
            hardness=traits.hardness,
            scatter=traits.scatter,
            pressure_sensitivity=traits.pressure_sensitivity,
            texture_intensity=traits.texture_intensity,
            pressure_enabled=traits.supports_pressure,
            texture_enabled=traits.supports_texture,
        )

    def validate(self) -> 'BrushProperties':
        """Copy with every numeric field clamped to its valid range"""
        return replace(
            self,
            size=clamp(self.size, Config.MIN_BRUSH_SIZE, Config.MAX_BRUSH_SIZE),
            opacity=clamp(self.opacity),
            flow=clamp(self.flow),
            hardness=clamp(self.hardness),
            scatter=clamp(self.scatter),
            pressure_sensitivity=clamp(self.pressure_sensitivity, 0.0, 2.0),
            texture_intensity=clamp(self.texture_intensity),
        )

    @property
    def uses_pressure(self) -> bool:
        return self.pressure_enabled and get_brush_traits(self.brush_type).supports_pressure

    @property
    def uses_texture(self) -> bool:
        return self.texture_enabled and get_brush_traits(self.brush_type).supports_texture

    def final_size(self, pressure: float = 1.0) -> float:
        """Width at a given pressure, clamped to the brush size range"""
        size = self.size
        if self.uses_pressure:
            size = self.size * (1.0 + (pressure - 1.0) * self.pressure_sensitivity)
        return clamp(size, Config.MIN_BRUSH_SIZE, Config.MAX_BRUSH_SIZE)

    def final_opacity(self) -> float:
        return clamp(self.opacity * self.flow)

    def with_pressure(self, pressure: float) -> 'BrushProperties':
        """
        Properties adjusted for one pressure sample.

        Light pressure (below 0.5) also fades the opacity.
        """
        if not self.uses_pressure:
            return self
        opacity = self.final_opacity()
        if pressure < 0.5:
            opacity *= 0.5 + pressure
        return replace(self, size=self.final_size(pressure), opacity=clamp(opacity))

    def with_texture(self, strength: Optional[float] = None) -> 'BrushProperties':
        if not self.uses_texture:
            return self
        if strength is None:
            strength = self.texture_intensity
        return replace(self, texture_intensity=clamp(strength))

    def is_default(self) -> bool:
        return self == replace(BrushProperties.from_brush_type(self.brush_type), color=self.color)

    def create_stroke(self, points: Iterable[VectorPoint]) -> VectorStroke:
        """Build a stroke drawn with these settings"""
        stroke = VectorStroke.from_raw_points(
            points,
            color=self.color,
            width=self.size,
            enable_pressure=self.uses_pressure,
        )
        return stroke.update_opacity(self.final_opacity()).update_properties(
            {'brush_type': self.brush_type.name})


__all__ = ['BrushProperties']
