"""
Vector Ink

Vector stroke processing and layer compositing for handwritten notes.
"""

__version__ = "1.0.0"

from .config import Config
from .core.geometry import VectorPoint, VectorBounds, BezierSegment
from .core.vector_path import VectorPath
from .core.vector_stroke import VectorStroke, VectorStrokeStyle
from .layers.layer import Layer, LayerTransform
from .layers.layer_types import LayerType, BlendMode
from .layers.layer_manager import LayerManager
from .rendering.layer_renderer import LayerRenderer

__all__ = [
    'Config',
    'VectorPoint',
    'VectorBounds',
    'BezierSegment',
    'VectorPath',
    'VectorStroke',
    'VectorStrokeStyle',
    'Layer',
    'LayerTransform',
    'LayerType',
    'BlendMode',
    'LayerManager',
    'LayerRenderer',
]
