"""
Vector stroke model.

A VectorStroke is the persisted unit of drawing: the sampled geometry plus
style and bookkeeping. Strokes are immutable; every edit returns a new
stroke with its bounds recomputed.
"""

import json
import logging
import math
import time
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from PyQt6.QtGui import QPainterPath

from ..config import Config
from ..utils.color_utils import ColorLike, to_argb
from .geometry import VectorBounds, VectorPoint, clamp
from .smoothing import SmoothingAlgorithm, apply_smoothing
from .vector_path import VectorPath

logger = logging.getLogger(__name__)


class VectorStrokeStyle(Enum):
    """Dash style of a stroke"""
    SOLID = "Solid"
    DASHED = "Dashed"
    DOTTED = "Dotted"
    DASH_DOT = "Dash Dot"
    DASH_DOT_DOT = "Dash Dot Dot"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional['VectorStrokeStyle']:
        """Case-insensitive lookup by member name"""
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name.upper())


def _new_id() -> str:
    return str(uuid.uuid4())


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class VectorStroke:
    """
    One drawn gesture stored as vector data.

    Attributes:
        id: Unique stroke id (uuid4 string)
        path_points: Ordered sample points
        color: Packed ARGB color (0xAARRGGBB)
        width: Stroke width, floored at Config.MIN_STROKE_WIDTH
        opacity: Opacity in [0, 1]
        style: Dash style
        pressure_enabled: Whether width follows point pressure
        smoothing_factor: Control point scale used when building the path
        simplification_tolerance: Douglas-Peucker tolerance for the path
        timestamp: Creation time in milliseconds
        properties: Free-form string metadata, read-only
        bounds: Bounding box of path_points (always derived)
    """
    path_points: Tuple[VectorPoint, ...] = ()
    id: str = field(default_factory=_new_id)
    color: int = Config.DEFAULT_STROKE_COLOR
    width: float = Config.DEFAULT_STROKE_WIDTH
    opacity: float = 1.0
    style: VectorStrokeStyle = VectorStrokeStyle.SOLID
    pressure_enabled: bool = True
    smoothing_factor: float = Config.DEFAULT_SMOOTHING_FACTOR
    simplification_tolerance: float = Config.DEFAULT_SIMPLIFICATION_TOLERANCE
    timestamp: int = field(default_factory=_now_ms)
    properties: Mapping[str, str] = field(default_factory=dict)
    bounds: Optional[VectorBounds] = field(init=False, default=None)

    def __post_init__(self):
        points = tuple(self.path_points)
        object.__setattr__(self, 'path_points', points)
        object.__setattr__(self, 'color', int(self.color) & 0xFFFFFFFF)
        object.__setattr__(self, 'width', max(Config.MIN_STROKE_WIDTH, float(self.width)))
        object.__setattr__(self, 'opacity', clamp(float(self.opacity)))
        object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))
        object.__setattr__(self, 'bounds', VectorBounds.from_points(points))

    def __hash__(self):
        return hash(self.id)

    # ==================== CONSTRUCTION ====================

    @classmethod
    def from_raw_points(cls, points: Iterable[VectorPoint],
                        color: ColorLike = Config.DEFAULT_STROKE_COLOR,
                        width: float = Config.DEFAULT_STROKE_WIDTH,
                        style: VectorStrokeStyle = VectorStrokeStyle.SOLID,
                        enable_pressure: bool = True) -> 'VectorStroke':
        """
        Create a stroke from a finished input gesture.

        Args:
            points: Sampled points in input order
            color: Any value accepted by color_utils.to_argb
            width: Base stroke width
            style: Dash style
            enable_pressure: Vary width with point pressure when rendering

        Returns:
            New VectorStroke
        """
        return cls(
            path_points=tuple(points),
            color=to_argb(color),
            width=width,
            style=style,
            pressure_enabled=enable_pressure,
        )

    # ==================== PATH ====================

    def generate_smooth_path(self) -> VectorPath:
        """Build a VectorPath from this stroke's points and parameters"""
        path = VectorPath(self.path_points)
        path.generate_smooth_path(self.smoothing_factor, self.simplification_tolerance)
        return path

    def to_path(self) -> QPainterPath:
        return self.generate_smooth_path().to_path()

    # ==================== PURE EDITS ====================

    def transform(self, offset_x: float = 0.0, offset_y: float = 0.0,
                  scale_x: float = 1.0, scale_y: float = 1.0,
                  rotation: float = 0.0,
                  pivot_x: float = 0.0, pivot_y: float = 0.0) -> 'VectorStroke':
        """
        Scale and rotate about a pivot, then translate.

        Args:
            offset_x: Horizontal translation applied last
            offset_y: Vertical translation applied last
            scale_x: Horizontal scale about the pivot
            scale_y: Vertical scale about the pivot
            rotation: Rotation about the pivot, in radians
            pivot_x: Pivot x
            pivot_y: Pivot y

        Returns:
            Transformed copy
        """
        cos_r = math.cos(rotation)
        sin_r = math.sin(rotation)

        transformed = []
        for point in self.path_points:
            x = (point.x - pivot_x) * scale_x
            y = (point.y - pivot_y) * scale_y
            if rotation:
                x, y = x * cos_r - y * sin_r, x * sin_r + y * cos_r
            transformed.append(point.with_position(x + pivot_x + offset_x,
                                                   y + pivot_y + offset_y))

        return replace(self, path_points=tuple(transformed))

    def clip_to_region(self, region: VectorBounds) -> Optional['VectorStroke']:
        """
        Keep only the points inside region.

        Returns:
            Clipped copy, or None when no point falls inside
        """
        kept = tuple(p for p in self.path_points if region.contains(p.x, p.y))
        if not kept:
            return None
        return replace(self, path_points=kept)

    def intersects(self, region: VectorBounds) -> bool:
        if self.bounds is None:
            return False
        return self.bounds.intersects(region)

    def apply_smoothing(self, algorithm: SmoothingAlgorithm) -> 'VectorStroke':
        """Smooth the points with the given algorithm, returning a copy"""
        if algorithm is SmoothingAlgorithm.CATMULL_ROM:
            points = apply_smoothing(self.path_points, algorithm, tension=self.smoothing_factor)
        else:
            points = apply_smoothing(self.path_points, algorithm)
        return replace(self, path_points=tuple(points))

    def simplify(self, tolerance: Optional[float] = None) -> Optional['VectorStroke']:
        """
        Re-derive the path at a new tolerance and resample it.

        Args:
            tolerance: Douglas-Peucker tolerance (defaults to the stroke's own)

        Returns:
            Simplified copy, self when there are two points or fewer, or
            None for a negative tolerance
        """
        if tolerance is None:
            tolerance = self.simplification_tolerance
        if len(self.path_points) <= 2:
            return self
        if tolerance < 0:
            logger.warning(f"Cannot simplify stroke {self.id} with tolerance {tolerance}")
            return None

        path = VectorPath(self.path_points)
        path.generate_smooth_path(self.smoothing_factor, tolerance)
        return replace(self,
                       path_points=tuple(path.path_points()),
                       simplification_tolerance=tolerance)

    def update_color(self, color: ColorLike) -> 'VectorStroke':
        return replace(self, color=to_argb(color))

    def update_width(self, width: float) -> 'VectorStroke':
        return replace(self, width=width)

    def update_opacity(self, opacity: float) -> 'VectorStroke':
        return replace(self, opacity=opacity)

    def update_properties(self, properties: Mapping[str, str]) -> 'VectorStroke':
        """Merge properties into the existing ones"""
        merged = dict(self.properties)
        merged.update(properties)
        return replace(self, properties=merged)

    def duplicate(self) -> 'VectorStroke':
        """Copy with a fresh id"""
        return replace(self, id=_new_id())

    # ==================== QUERIES ====================

    def length(self) -> float:
        """Polyline length of the sample points"""
        return sum(a.distance_to(b) for a, b in zip(self.path_points, self.path_points[1:]))

    def point_count(self) -> int:
        return len(self.path_points)

    def is_empty(self) -> bool:
        return not self.path_points

    def has_varying_pressure(self) -> bool:
        if not self.path_points:
            return False
        first = self.path_points[0].pressure
        return any(abs(p.pressure - first) > Config.GEOMETRY_EPSILON for p in self.path_points)

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'path_points': [p.to_dict() for p in self.path_points],
            'color': self.color,
            'width': self.width,
            'opacity': self.opacity,
            'style': self.style.name,
            'pressure_enabled': self.pressure_enabled,
            'smoothing_factor': self.smoothing_factor,
            'simplification_tolerance': self.simplification_tolerance,
            'timestamp': self.timestamp,
            'properties': dict(self.properties),
            'bounds': self.bounds.to_dict() if self.bounds else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['VectorStroke']:
        """
        Restore a stroke from to_dict() output.

        Unknown keys are ignored. Bounds are always recomputed.

        Returns:
            VectorStroke, or None if the data is corrupt
        """
        try:
            properties = data.get('properties') or {}
            if not isinstance(properties, dict):
                raise TypeError("properties must be an object")

            return cls(
                path_points=tuple(VectorPoint.from_dict(p) for p in data['path_points']),
                id=str(data['id']),
                color=int(data.get('color', Config.DEFAULT_STROKE_COLOR)),
                width=float(data.get('width', Config.DEFAULT_STROKE_WIDTH)),
                opacity=float(data.get('opacity', 1.0)),
                style=VectorStrokeStyle.from_name(data.get('style', 'SOLID')) or VectorStrokeStyle.SOLID,
                pressure_enabled=bool(data.get('pressure_enabled', True)),
                smoothing_factor=float(data.get('smoothing_factor', Config.DEFAULT_SMOOTHING_FACTOR)),
                simplification_tolerance=float(data.get('simplification_tolerance',
                                                        Config.DEFAULT_SIMPLIFICATION_TOLERANCE)),
                timestamp=int(data.get('timestamp', 0)),
                properties={str(k): str(v) for k, v in properties.items()},
            )
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Invalid stroke data: {e}")
            return None

    @classmethod
    def from_json(cls, text: str) -> Optional['VectorStroke']:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid stroke JSON: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning("Stroke JSON is not an object")
            return None
        return cls.from_dict(data)


__all__ = ['VectorStroke', 'VectorStrokeStyle']
