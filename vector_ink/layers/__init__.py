"""Layer model, manager and change events"""

from .layer_types import LayerType, BlendMode, LayerTraits, get_layer_traits
from .layer import Layer, LayerTransform
from .layer_events import (
    LayerAdded,
    LayerRemoved,
    LayerUpdated,
    LayerReordered,
    ActiveLayerChanged,
    SelectionChanged,
    AllLayersCleared,
)
from .layer_manager import LayerManager, LayerStats
from .undo_commands import AddStrokeCommand, RemoveStrokeCommand, ClearLayerCommand

__all__ = [
    'LayerType',
    'BlendMode',
    'LayerTraits',
    'get_layer_traits',
    'Layer',
    'LayerTransform',
    'LayerAdded',
    'LayerRemoved',
    'LayerUpdated',
    'LayerReordered',
    'ActiveLayerChanged',
    'SelectionChanged',
    'AllLayersCleared',
    'LayerManager',
    'LayerStats',
    'AddStrokeCommand',
    'RemoveStrokeCommand',
    'ClearLayerCommand',
]
