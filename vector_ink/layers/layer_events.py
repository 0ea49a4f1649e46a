"""
Layer change events.

Delivered synchronously to LayerManager listeners after each committed
mutation. All payloads are immutable snapshots.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

from .layer import Layer


@dataclass(frozen=True)
class LayerAdded:
    layer: Layer


@dataclass(frozen=True)
class LayerRemoved:
    layer: Layer


@dataclass(frozen=True)
class LayerUpdated:
    old_layer: Layer
    new_layer: Layer


@dataclass(frozen=True)
class LayerReordered:
    layer_id: str
    from_index: int
    to_index: int


@dataclass(frozen=True)
class ActiveLayerChanged:
    layer_id: Optional[str]


@dataclass(frozen=True)
class SelectionChanged:
    selected_ids: FrozenSet[str]


@dataclass(frozen=True)
class AllLayersCleared:
    pass


LayerChangeEvent = Union[
    LayerAdded,
    LayerRemoved,
    LayerUpdated,
    LayerReordered,
    ActiveLayerChanged,
    SelectionChanged,
    AllLayersCleared,
]


__all__ = [
    'LayerAdded',
    'LayerRemoved',
    'LayerUpdated',
    'LayerReordered',
    'ActiveLayerChanged',
    'SelectionChanged',
    'AllLayersCleared',
    'LayerChangeEvent',
]
