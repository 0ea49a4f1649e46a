"""
Brush presets - named, persistable brush settings.
"""

import json
import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.color_utils import to_argb
from .brush_properties import BrushProperties
from .brush_type import BrushType

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class PresetCategory(Enum):
    """Preset groupings shown in a preset picker."""
    SYSTEM = "System Presets"
    USER = "My Presets"
    RECENT = "Recently Used"
    FAVORITE = "Favorites"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class BrushPreset:
    """
    Stored brush configuration.

    The brush type is kept by name so presets written by a newer version
    with an unknown type still load (and are then reported invalid).
    """
    id: str
    name: str
    brush_type_name: str
    color: int
    size: float
    opacity: float
    flow: float
    hardness: float
    scatter: float
    pressure_sensitivity: float
    texture_intensity: float
    pressure_enabled: bool
    texture_enabled: bool
    is_system_preset: bool = False
    created_at: int = field(default_factory=_now_ms)
    description: str = ""

    @classmethod
    def from_brush_properties(cls, preset_id: str, name: str, properties: BrushProperties,
                              is_system_preset: bool = False,
                              description: str = "") -> 'BrushPreset':
        return cls(
            id=preset_id,
            name=name,
            brush_type_name=properties.brush_type.name,
            color=properties.color,
            size=properties.size,
            opacity=properties.opacity,
            flow=properties.flow,
            hardness=properties.hardness,
            scatter=properties.scatter,
            pressure_sensitivity=properties.pressure_sensitivity,
            texture_intensity=properties.texture_intensity,
            pressure_enabled=properties.pressure_enabled,
            texture_enabled=properties.texture_enabled,
            is_system_preset=is_system_preset,
            description=description,
        )

    @property
    def brush_type(self) -> Optional[BrushType]:
        return BrushType.from_name(self.brush_type_name)

    def to_brush_properties(self) -> Optional[BrushProperties]:
        """Validated properties, or None if the brush type is unknown"""
        brush_type = self.brush_type
        if brush_type is None:
            return None
        return BrushProperties(
            brush_type=brush_type,
            color=self.color,
            size=self.size,
            opacity=self.opacity,
            flow=self.flow,
            hardness=self.hardness,
            scatter=self.scatter,
            pressure_sensitivity=self.pressure_sensitivity,
            texture_intensity=self.texture_intensity,
            pressure_enabled=self.pressure_enabled,
            texture_enabled=self.texture_enabled,
        ).validate()

    def copy_with_name(self, name: str, preset_id: Optional[str] = None) -> 'BrushPreset':
        """User-owned copy of this preset"""
        return replace(
            self,
            id=preset_id if preset_id is not None else f"{self.id}_copy",
            name=name,
            is_system_preset=False,
            created_at=_now_ms(),
        )

    def is_valid(self) -> bool:
        return (bool(self.name.strip()) and
                self.brush_type is not None and
                self.size > 0 and
                0.0 <= self.opacity <= 1.0 and
                0.0 <= self.flow <= 1.0 and
                0.0 <= self.hardness <= 1.0 and
                0.0 <= self.scatter <= 1.0 and
                self.pressure_sensitivity >= 0.0 and
                0.0 <= self.texture_intensity <= 1.0)

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, description or brush type"""
        query = query.lower()
        return (query in self.name.lower() or
                query in self.description.lower() or
                query in self.brush_type_name.lower())

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'brush_type': self.brush_type_name,
            'color': self.color,
            'size': self.size,
            'opacity': self.opacity,
            'flow': self.flow,
            'hardness': self.hardness,
            'scatter': self.scatter,
            'pressure_sensitivity': self.pressure_sensitivity,
            'texture_intensity': self.texture_intensity,
            'pressure_enabled': self.pressure_enabled,
            'texture_enabled': self.texture_enabled,
            'is_system_preset': self.is_system_preset,
            'created_at': self.created_at,
            'description': self.description,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['BrushPreset']:
        try:
            return cls(
                id=str(data['id']),
                name=str(data['name']),
                brush_type_name=str(data['brush_type']),
                color=int(data['color']),
                size=float(data['size']),
                opacity=float(data['opacity']),
                flow=float(data['flow']),
                hardness=float(data['hardness']),
                scatter=float(data['scatter']),
                pressure_sensitivity=float(data['pressure_sensitivity']),
                texture_intensity=float(data['texture_intensity']),
                pressure_enabled=bool(data['pressure_enabled']),
                texture_enabled=bool(data['texture_enabled']),
                is_system_preset=bool(data.get('is_system_preset', False)),
                created_at=int(data.get('created_at', 0)),
                description=str(data.get('description', "")),
            )
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Invalid brush preset data: {e}")
            return None

    @classmethod
    def from_json(cls, text: str) -> Optional['BrushPreset']:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid brush preset JSON: {e}")
            return None
        return cls.from_dict(data) if isinstance(data, dict) else None


def _system_preset(preset_id: str, name: str, brush_type: BrushType, size: float,
                   color: str, description: str) -> BrushPreset:
    properties = replace(BrushProperties.from_brush_type(brush_type),
                         size=size, color=to_argb(color))
    return BrushPreset.from_brush_properties(preset_id, name, properties, True, description)


def create_system_presets() -> List[BrushPreset]:
    """Built-in presets shipped with the application"""
    return [
        _system_preset("pen_fine", "Fine Pen", BrushType.PEN, 2.0, "#000000", "Fine lines for detail work"),
        _system_preset("pen_medium", "Medium Pen", BrushType.PEN, 4.0, "#0000FF", "Everyday writing"),
        _system_preset("pen_bold", "Bold Pen", BrushType.PEN, 6.0, "#FF0000", "Thick lines for emphasis"),
        _system_preset("pencil_2h", "2H Pencil", BrushType.PENCIL, 1.5, "#757575", "Hard lead, light thin lines"),
        _system_preset("pencil_hb", "HB Pencil", BrushType.PENCIL, 2.5, "#424242", "Standard sketching pencil"),
        _system_preset("pencil_2b", "2B Pencil", BrushType.PENCIL, 3.5, "#212121", "Soft lead, dark lines"),
        _system_preset("highlight_yellow", "Yellow Highlighter", BrushType.HIGHLIGHTER, 12.0, "#FFFF00",
                       "Classic yellow highlight"),
        _system_preset("highlight_green", "Green Highlighter", BrushType.HIGHLIGHTER, 12.0, "#4CAF50",
                       "Green marking"),
        _system_preset("highlight_pink", "Pink Highlighter", BrushType.HIGHLIGHTER, 12.0, "#E91E63",
                       "Pink marking"),
        _system_preset("brush_ink", "Ink Brush", BrushType.BRUSH, 8.0, "#000000", "Traditional ink wash"),
        _system_preset("brush_color", "Color Brush", BrushType.BRUSH, 10.0, "#1976D2", "Colored painting"),
        _system_preset("marker_red", "Red Marker", BrushType.MARKER, 8.0, "#FF0000", "Bright red fill"),
        _system_preset("marker_blue", "Blue Marker", BrushType.MARKER, 8.0, "#0000FF", "Classic blue marking"),
        _system_preset("watercolor_blue", "Blue Watercolor", BrushType.WATERCOLOR, 15.0, "#2196F3",
                       "Flowing watercolor"),
        _system_preset("watercolor_green", "Green Watercolor", BrushType.WATERCOLOR, 15.0, "#4CAF50",
                       "Natural green wash"),
    ]


__all__ = ['BrushPreset', 'PresetCategory', 'create_system_presets']
