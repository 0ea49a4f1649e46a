"""
Vector path builder.

Turns a raw point history into a chain of cubic Bezier segments and
flattens that chain back into a QPainterPath or a resampled point list.
"""

from typing import Iterable, List, Optional, Tuple

from PyQt6.QtGui import QPainterPath

from ..config import Config
from .geometry import BezierSegment, VectorBounds, VectorPoint
from .simplifier import simplify


class VectorPath:
    """
    Raw point history plus the derived Bezier segments.

    Any change to the raw points marks the path dirty. Reading segments,
    to_path(), path_points() or length() on a dirty path rebuilds first
    with the last used parameters, so stale segments are never returned.
    """

    def __init__(self, points: Optional[Iterable[VectorPoint]] = None):
        self._raw_points: List[VectorPoint] = []
        self._segments: List[BezierSegment] = []
        self._dirty = False
        self._smoothing_factor = Config.DEFAULT_SMOOTHING_FACTOR
        self._simplification_tolerance = Config.DEFAULT_SIMPLIFICATION_TOLERANCE

        if points is not None:
            self.add_points(points)

    # ==================== RAW POINTS ====================

    def add_point(self, point: VectorPoint):
        self._raw_points.append(point)
        self._dirty = True

    def add_points(self, points: Iterable[VectorPoint]):
        self._raw_points.extend(points)
        self._dirty = True

    def clear(self):
        self._raw_points.clear()
        self._segments.clear()
        self._dirty = False

    @property
    def raw_points(self) -> Tuple[VectorPoint, ...]:
        return tuple(self._raw_points)

    @property
    def raw_point_count(self) -> int:
        return len(self._raw_points)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # ==================== BUILD ====================

    def generate_smooth_path(self,
                             smoothing_factor: float = Config.DEFAULT_SMOOTHING_FACTOR,
                             simplification_tolerance: float = Config.DEFAULT_SIMPLIFICATION_TOLERANCE):
        """
        Rebuild the Bezier segments from the raw points.

        Args:
            smoothing_factor: Scales control point distance from the chord
            simplification_tolerance: Douglas-Peucker tolerance applied first
        """
        self._smoothing_factor = smoothing_factor
        self._simplification_tolerance = simplification_tolerance
        self._segments = self._build_segments(
            simplify(self._raw_points, simplification_tolerance), smoothing_factor)
        self._dirty = False

    def _ensure_built(self):
        if self._dirty:
            self.generate_smooth_path(self._smoothing_factor, self._simplification_tolerance)

    @staticmethod
    def _build_segments(points: List[VectorPoint], smoothing_factor: float) -> List[BezierSegment]:
        if len(points) < 2:
            return []

        if len(points) == 2:
            start, end = points
            return [BezierSegment(
                start,
                start.lerp(end, Config.STRAIGHT_CONTROL_T1),
                start.lerp(end, Config.STRAIGHT_CONTROL_T2),
                end,
            )]

        segments = []
        last = len(points) - 1
        for i in range(last):
            p0 = points[max(0, i - 1)]
            p1 = points[i]
            p2 = points[i + 1]
            p3 = points[min(last, i + 2)]

            scale = p1.distance_to(p2) * smoothing_factor * 0.25
            control1 = VectorPoint(
                p1.x + (p2.x - p0.x) * scale,
                p1.y + (p2.y - p0.y) * scale,
                p1.pressure,
                p1.timestamp,
            )
            control2 = VectorPoint(
                p2.x - (p3.x - p1.x) * scale,
                p2.y - (p3.y - p1.y) * scale,
                p2.pressure,
                p2.timestamp,
            )
            segments.append(BezierSegment(p1, control1, control2, p2))

        return segments

    # ==================== READ ====================

    @property
    def segments(self) -> Tuple[BezierSegment, ...]:
        self._ensure_built()
        return tuple(self._segments)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def to_path(self) -> QPainterPath:
        """
        Convert to a QPainterPath.

        Returns:
            Cubic chain through the segments, or a polyline through the raw
            points when no segments exist
        """
        self._ensure_built()
        path = QPainterPath()

        if not self._segments:
            if self._raw_points:
                first = self._raw_points[0]
                path.moveTo(first.x, first.y)
                for point in self._raw_points[1:]:
                    path.lineTo(point.x, point.y)
            return path

        first = self._segments[0].start
        path.moveTo(first.x, first.y)
        for seg in self._segments:
            path.cubicTo(seg.control1.x, seg.control1.y,
                         seg.control2.x, seg.control2.y,
                         seg.end.x, seg.end.y)
        return path

    def path_points(self, density: float = 1.0) -> List[VectorPoint]:
        """
        Resample every segment.

        Each segment contributes steps + 1 points where
        steps = max(2, round(length * density)). Join points appear once
        per adjoining segment.
        """
        self._ensure_built()
        points = []
        for seg in self._segments:
            steps = max(2, int(round(seg.length() * density)))
            for i in range(steps + 1):
                points.append(seg.point_at(i / steps))
        return points

    def bounds(self) -> Optional[VectorBounds]:
        return VectorBounds.from_points(self._raw_points)

    def length(self) -> float:
        self._ensure_built()
        return sum(seg.length() for seg in self._segments)

    def is_empty(self) -> bool:
        return not self._raw_points and not self._segments


__all__ = ['VectorPath']
