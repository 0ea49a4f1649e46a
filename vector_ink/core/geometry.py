"""
Geometry primitives for vector strokes.

Provides:
- VectorPoint: pressure-sampled input point
- VectorBounds: axis-aligned bounding box derived from a point set
- BezierSegment: one cubic Bezier arc with evaluation helpers
"""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..config import Config


def _now_ms() -> int:
    return int(time.time() * 1000)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


@dataclass(frozen=True)
class VectorPoint:
    """
    A single sampled input point.

    Pressure is always clamped to [0, 1] on construction, so every
    operation producing a point yields a valid pressure.

    Attributes:
        x: Horizontal position
        y: Vertical position
        pressure: Pen pressure in [0, 1]
        timestamp: Sample time in milliseconds
    """
    x: float
    y: float
    pressure: float = 1.0
    timestamp: int = field(default_factory=_now_ms)

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'pressure', clamp(float(self.pressure)))
        object.__setattr__(self, 'timestamp', int(self.timestamp))

    def distance_to(self, other: 'VectorPoint') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def mid_point(self, other: 'VectorPoint') -> 'VectorPoint':
        return VectorPoint(
            (self.x + other.x) / 2.0,
            (self.y + other.y) / 2.0,
            (self.pressure + other.pressure) / 2.0,
            (self.timestamp + other.timestamp) // 2,
        )

    def lerp(self, other: 'VectorPoint', t: float) -> 'VectorPoint':
        """
        Linear interpolation towards other.

        Args:
            other: Target point
            t: Interpolation parameter, clamped to [0, 1]

        Returns:
            Interpolated point (pressure and timestamp interpolated too)
        """
        t = clamp(t)
        return VectorPoint(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.pressure + (other.pressure - self.pressure) * t,
            int(round(self.timestamp + (other.timestamp - self.timestamp) * t)),
        )

    def with_position(self, x: float, y: float) -> 'VectorPoint':
        """Copy of this point moved to (x, y), keeping pressure and time"""
        return VectorPoint(x, y, self.pressure, self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'pressure': self.pressure,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VectorPoint':
        """Build a point from a dict; raises KeyError, TypeError, ValueError
        or OverflowError on bad input"""
        return cls(
            float(data['x']),
            float(data['y']),
            float(data.get('pressure', 1.0)),
            int(data.get('timestamp', 0)),
        )


@dataclass(frozen=True)
class VectorBounds:
    """Axis-aligned bounding box"""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_points(cls, points: Iterable[VectorPoint]) -> Optional['VectorBounds']:
        """
        Compute the bounding box of a point set.

        Returns:
            VectorBounds, or None for an empty point set
        """
        points = list(points)
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    def contains(self, x: float, y: float) -> bool:
        """Inclusive point containment"""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def intersects(self, other: 'VectorBounds') -> bool:
        """Strict overlap; boxes that only touch do not intersect"""
        return (self.left < other.right and self.right > other.left and
                self.top < other.bottom and self.bottom > other.top)

    def union(self, other: 'VectorBounds') -> 'VectorBounds':
        return VectorBounds(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def expand(self, padding: float) -> 'VectorBounds':
        return VectorBounds(
            self.left - padding,
            self.top - padding,
            self.right + padding,
            self.bottom + padding,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'left': self.left,
            'top': self.top,
            'right': self.right,
            'bottom': self.bottom,
        }


@dataclass(frozen=True)
class BezierSegment:
    """
    One cubic Bezier arc.

    Pressure is carried on every control point and evaluated with the same
    basis as the coordinates.
    """
    start: VectorPoint
    control1: VectorPoint
    control2: VectorPoint
    end: VectorPoint

    def point_at(self, t: float) -> VectorPoint:
        """
        Evaluate the curve.

        Args:
            t: Curve parameter, clamped to [0, 1]

        Returns:
            Point on the curve
        """
        t = clamp(t)
        mt = 1.0 - t
        b0 = mt * mt * mt
        b1 = 3.0 * mt * mt * t
        b2 = 3.0 * mt * t * t
        b3 = t * t * t

        x = b0 * self.start.x + b1 * self.control1.x + b2 * self.control2.x + b3 * self.end.x
        y = b0 * self.start.y + b1 * self.control1.y + b2 * self.control2.y + b3 * self.end.y
        pressure = (b0 * self.start.pressure + b1 * self.control1.pressure +
                    b2 * self.control2.pressure + b3 * self.end.pressure)
        timestamp = self.start.timestamp + (self.end.timestamp - self.start.timestamp) * t

        return VectorPoint(x, y, pressure, int(round(timestamp)))

    def tangent_at(self, t: float) -> VectorPoint:
        """First derivative at t, returned as a direction vector"""
        t = clamp(t)
        mt = 1.0 - t
        d0 = 3.0 * mt * mt
        d1 = 6.0 * mt * t
        d2 = 3.0 * t * t

        dx = (d0 * (self.control1.x - self.start.x) +
              d1 * (self.control2.x - self.control1.x) +
              d2 * (self.end.x - self.control2.x))
        dy = (d0 * (self.control1.y - self.start.y) +
              d1 * (self.control2.y - self.control1.y) +
              d2 * (self.end.y - self.control2.y))

        return VectorPoint(dx, dy, 1.0, self.start.timestamp)

    def length(self, steps: int = Config.BEZIER_LENGTH_STEPS) -> float:
        """Approximate arclength as a polyline of `steps` chords"""
        steps = max(1, steps)
        total = 0.0
        prev = self.start
        for i in range(1, steps + 1):
            current = self.point_at(i / steps)
            total += prev.distance_to(current)
            prev = current
        return total


__all__ = ['VectorPoint', 'VectorBounds', 'BezierSegment', 'clamp']
