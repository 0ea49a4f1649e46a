"""
Stroke erasing against a rectangular eraser region.

Two modes:
- Whole: drop every stroke sufficiently covered by the eraser
- Partial: cut the covered points out and keep the remaining runs
"""

import logging
import uuid
from dataclasses import replace
from typing import List, Sequence

from ..config import Config
from .geometry import VectorBounds
from .vector_stroke import VectorStroke

logger = logging.getLogger(__name__)


def coverage(stroke: VectorStroke, eraser: VectorBounds) -> float:
    """Fraction of the stroke's points inside the eraser"""
    if not stroke.path_points:
        return 0.0
    inside = sum(1 for p in stroke.path_points if eraser.contains(p.x, p.y))
    return inside / len(stroke.path_points)


def erase_whole_strokes(strokes: Sequence[VectorStroke], eraser: VectorBounds,
                        coverage_threshold: float = Config.ERASER_COVERAGE_THRESHOLD) -> List[VectorStroke]:
    """
    Remove strokes covered by the eraser.

    Args:
        strokes: Strokes to test
        eraser: Eraser rectangle
        coverage_threshold: Strokes with a larger covered fraction are removed

    Returns:
        Surviving strokes in their original order
    """
    kept = [s for s in strokes if coverage(s, eraser) <= coverage_threshold]
    removed = len(strokes) - len(kept)
    if removed:
        logger.debug(f"Erased {removed} whole stroke(s)")
    return kept


def erase_partial_strokes(strokes: Sequence[VectorStroke], eraser: VectorBounds) -> List[VectorStroke]:
    """
    Cut the eraser region out of every stroke.

    Strokes whose bounds miss the eraser are kept as they are. Others are
    split into the runs of consecutive points outside the eraser; runs of
    fewer than two points are dropped and each remaining run becomes a
    new stroke with a fresh id and the original style.

    Returns:
        Resulting strokes in order
    """
    result = []
    for stroke in strokes:
        if stroke.bounds is None or not _touches(stroke.bounds, eraser):
            result.append(stroke)
            continue

        runs = []
        current = []
        for point in stroke.path_points:
            if eraser.contains(point.x, point.y):
                if current:
                    runs.append(current)
                current = []
            else:
                current.append(point)
        if current:
            runs.append(current)

        if len(runs) == 1 and len(runs[0]) == len(stroke.path_points):
            result.append(stroke)
            continue

        for run in runs:
            if len(run) >= 2:
                result.append(replace(stroke, id=str(uuid.uuid4()), path_points=tuple(run)))

    return result


def _touches(a: VectorBounds, b: VectorBounds) -> bool:
    # Inclusive, so degenerate (zero-width) stroke bounds still hit
    return a.left <= b.right and a.right >= b.left and a.top <= b.bottom and a.bottom >= b.top


__all__ = ['coverage', 'erase_whole_strokes', 'erase_partial_strokes']
