"""
Douglas-Peucker point reduction for raw stroke input.
"""

import logging
from typing import List, Sequence

from ..config import Config
from .geometry import VectorPoint

logger = logging.getLogger(__name__)


def segment_distance(point: VectorPoint, start: VectorPoint, end: VectorPoint) -> float:
    """
    Distance from point to the segment start-end.

    The projection is clamped to the segment. When start and end coincide
    the distance to start is returned.
    """
    cx = end.x - start.x
    cy = end.y - start.y
    len_sq = cx * cx + cy * cy

    if len_sq <= Config.GEOMETRY_EPSILON:
        return point.distance_to(start)

    param = ((point.x - start.x) * cx + (point.y - start.y) * cy) / len_sq
    param = max(0.0, min(1.0, param))

    dx = point.x - (start.x + param * cx)
    dy = point.y - (start.y + param * cy)
    return (dx * dx + dy * dy) ** 0.5


def simplify(points: Sequence[VectorPoint], tolerance: float) -> List[VectorPoint]:
    """
    Simplify a point sequence using Ramer-Douglas-Peucker.

    Args:
        points: Ordered input points
        tolerance: Maximum allowed deviation (must be >= 0)

    Returns:
        Order-preserving subsequence of points that keeps the first and the
        last point. Inputs of two points or fewer come back unchanged. A
        negative tolerance yields an empty list.
    """
    if tolerance < 0:
        logger.warning(f"Negative simplification tolerance {tolerance}")
        return []

    points = list(points)
    if len(points) <= 2:
        return points

    keep = [False] * len(points)
    keep[0] = keep[-1] = True

    # Explicit stack so long strokes don't hit the recursion limit
    ranges = [(0, len(points) - 1)]
    while ranges:
        first, last = ranges.pop()
        if last - first < 2:
            continue

        start, end = points[first], points[last]
        max_dist = 0.0
        max_idx = first

        for i in range(first + 1, last):
            dist = segment_distance(points[i], start, end)
            if dist > max_dist:
                max_dist = dist
                max_idx = i

        # Collinear ranges collapse even at tolerance 0
        if max_dist < tolerance or max_dist <= Config.GEOMETRY_EPSILON:
            continue

        keep[max_idx] = True
        ranges.append((first, max_idx))
        ranges.append((max_idx, last))

    return [p for p, kept in zip(points, keep) if kept]


__all__ = ['simplify', 'segment_distance']
