"""Core vector geometry, smoothing and stroke model"""

from .geometry import VectorPoint, VectorBounds, BezierSegment
from .simplifier import simplify
from .smoothing import (
    SmoothingAlgorithm,
    apply_smoothing,
    catmull_rom_smooth,
    b_spline_smooth,
    gaussian_smooth,
    moving_average_smooth,
    adaptive_smooth,
    pressure_aware_smooth,
)
from .vector_path import VectorPath
from .vector_stroke import VectorStroke, VectorStrokeStyle
from .stroke_collection import VectorStrokeCollection
from .eraser import erase_whole_strokes, erase_partial_strokes

__all__ = [
    'VectorPoint',
    'VectorBounds',
    'BezierSegment',
    'simplify',
    'SmoothingAlgorithm',
    'apply_smoothing',
    'catmull_rom_smooth',
    'b_spline_smooth',
    'gaussian_smooth',
    'moving_average_smooth',
    'adaptive_smooth',
    'pressure_aware_smooth',
    'VectorPath',
    'VectorStroke',
    'VectorStrokeStyle',
    'VectorStrokeCollection',
    'erase_whole_strokes',
    'erase_partial_strokes',
]
