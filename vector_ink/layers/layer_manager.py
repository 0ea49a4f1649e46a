"""
Layer Manager - owns the ordered layer list of one canvas.

Responsibilities:
- Layer creation, deletion, duplication and updates
- Ordering and z-order bookkeeping (background pinned at the bottom)
- Active layer and selection tracking
- Stroke ownership for drawing layers
- Synchronous change notification

Usage:
    manager = LayerManager()
    manager.add_layer_change_listener(lambda event: print(event))

    layer = manager.create_drawing_layer()
    manager.add_stroke(layer.id, stroke)

Reads return snapshots (tuples, frozensets, frozen layers), so a snapshot
can be handed to the renderer on another thread while editing continues.
"""

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..config import Config
from ..core.vector_stroke import VectorStroke
from .layer import Layer
from .layer_events import (
    ActiveLayerChanged,
    AllLayersCleared,
    LayerAdded,
    LayerChangeEvent,
    LayerRemoved,
    LayerReordered,
    LayerUpdated,
    SelectionChanged,
)
from .layer_types import LayerType

logger = logging.getLogger(__name__)

LayerChangeListener = Callable[[LayerChangeEvent], None]


@dataclass(frozen=True)
class LayerStats:
    """Layer counts for a canvas"""
    total_layers: int
    visible_layers: int
    locked_layers: int
    drawing_layers: int
    text_layers: int
    image_layers: int
    total_strokes: int


class LayerManager:
    """
    Ordered layer collection for one canvas.

    The list is kept in paint order: index 0 is always the single
    BACKGROUND layer, and list order matches z-order.
    """

    def __init__(self):
        self._layers: List[Layer] = [Layer.create_background_layer()]
        self._active_layer_id: Optional[str] = None
        self._selected_layer_ids: FrozenSet[str] = frozenset()
        self._listeners: List[LayerChangeListener] = []

    # ==================== LISTENERS ====================

    def add_layer_change_listener(self, listener: LayerChangeListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_layer_change_listener(self, listener: LayerChangeListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, *events: Optional[LayerChangeEvent]):
        """Deliver events in order; None entries are skipped"""
        for event in events:
            if event is None:
                continue
            for listener in list(self._listeners):
                listener(event)

    # ==================== SNAPSHOTS ====================

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def active_layer_id(self) -> Optional[str]:
        return self._active_layer_id

    @property
    def selected_layer_ids(self) -> FrozenSet[str]:
        return self._selected_layer_ids

    @property
    def background_layer(self) -> Layer:
        return self._layers[0]

    def find_layer_by_id(self, layer_id: str) -> Optional[Layer]:
        index = self._index_of(layer_id)
        return self._layers[index] if index >= 0 else None

    def get_active_layer(self) -> Optional[Layer]:
        if self._active_layer_id is None:
            return None
        return self.find_layer_by_id(self._active_layer_id)

    def get_visible_layers(self) -> Tuple[Layer, ...]:
        return tuple(sorted((l for l in self._layers if l.is_visible), key=lambda l: l.z_order))

    def get_editable_layers(self) -> Tuple[Layer, ...]:
        return tuple(l for l in self._layers if l.is_editable())

    def get_layers_by_type(self, layer_type: LayerType) -> Tuple[Layer, ...]:
        return tuple(l for l in self._layers if l.layer_type is layer_type)

    def strokes_by_layer(self) -> Mapping[str, Tuple[VectorStroke, ...]]:
        """Read-only map of layer id to its strokes"""
        return MappingProxyType({l.id: l.strokes for l in self._layers})

    def get_layer_stats(self) -> LayerStats:
        return LayerStats(
            total_layers=len(self._layers),
            visible_layers=sum(1 for l in self._layers if l.is_visible),
            locked_layers=sum(1 for l in self._layers if l.is_locked),
            drawing_layers=sum(1 for l in self._layers if l.layer_type is LayerType.DRAWING),
            text_layers=sum(1 for l in self._layers if l.layer_type is LayerType.TEXT),
            image_layers=sum(1 for l in self._layers if l.layer_type is LayerType.IMAGE),
            total_strokes=sum(len(l.strokes) for l in self._layers),
        )

    def _index_of(self, layer_id: str) -> int:
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return -1

    # ==================== CREATE / DELETE ====================

    def _next_z_order(self) -> int:
        top = max((l.z_order for l in self._layers if not l.is_background), default=0)
        return max(0, top) + 1

    def _append_layer(self, layer: Layer) -> Layer:
        layer = replace(layer, z_order=self._next_z_order())
        self._layers.append(layer)
        logger.debug(f"Added {layer.layer_type.name} layer '{layer.name}' at z={layer.z_order}")
        activated = self._change_active(layer.id) if layer.is_editable() else None
        self._notify(LayerAdded(layer), activated)
        return layer

    def create_drawing_layer(self, name: Optional[str] = None) -> Layer:
        if name is None:
            name = f"Layer {len(self._layers)}"
        return self._append_layer(Layer.create_drawing_layer(name))

    def create_text_layer(self, name: Optional[str] = None, content: str = "") -> Layer:
        if name is None:
            name = f"Text Layer {len(self.get_layers_by_type(LayerType.TEXT)) + 1}"
        return self._append_layer(Layer.create_text_layer(name, content))

    def create_image_layer(self, name: Optional[str] = None, image_path: str = "") -> Layer:
        if name is None:
            name = f"Image Layer {len(self.get_layers_by_type(LayerType.IMAGE)) + 1}"
        return self._append_layer(Layer.create_image_layer(name, image_path))

    def duplicate_layer(self, layer_id: str) -> Optional[Layer]:
        """Copy a non-background layer (strokes get new ids) onto the top"""
        layer = self.find_layer_by_id(layer_id)
        if layer is None or layer.is_background:
            return None
        return self._append_layer(layer.duplicate())

    def delete_layer(self, layer_id: str) -> bool:
        """
        Delete a layer.

        Background layers cannot be deleted. If the deleted layer was
        active, the nearest editable non-background layer (preferring the
        one below) becomes active, or none.

        Returns:
            True if deleted
        """
        index = self._index_of(layer_id)
        if index < 0:
            return False
        layer = self._layers[index]
        if layer.is_background:
            logger.warning("Refusing to delete the background layer")
            return False

        del self._layers[index]
        logger.debug(f"Removed layer '{layer.name}'")

        selection = None
        if layer_id in self._selected_layer_ids:
            selection = self._change_selection(self._selected_layer_ids - {layer_id})
        activated = None
        if self._active_layer_id == layer_id:
            activated = self._change_active(self._nearest_editable(index))

        self._notify(LayerRemoved(layer), selection, activated)

        return True

    def _nearest_editable(self, removed_index: int) -> Optional[str]:
        below = range(removed_index - 1, 0, -1)
        above = range(removed_index, len(self._layers))
        for i in list(below) + list(above):
            if self._layers[i].is_editable():
                return self._layers[i].id
        return None

    def clear_all_layers(self):
        """Remove every layer except the background"""
        self._layers = [self._layers[0]]
        self._active_layer_id = None
        self._selected_layer_ids = frozenset()
        logger.debug("Cleared all layers")
        self._notify(AllLayersCleared())

    def load_layers(self, layers: Iterable[Layer]):
        """
        Replace the whole layer list, e.g. when restoring from storage.

        The first BACKGROUND layer found is kept (a new one is created if
        there is none), extra backgrounds are dropped, and the remaining
        layers are ordered by z-order. A stroke id already owned by an
        earlier layer is dropped from later ones.
        """
        background = None
        others = []
        for layer in layers:
            if layer.is_background:
                if background is None:
                    background = layer
                else:
                    logger.warning(f"Dropping extra background layer {layer.id}")
            else:
                others.append(layer)

        if background is None:
            background = Layer.create_background_layer()
        background = replace(background, z_order=Config.BACKGROUND_Z_ORDER)

        seen_layer_ids = {background.id}
        seen_strokes = {s.id for s in background.strokes}
        loaded = [background]
        for layer in sorted(others, key=lambda l: l.z_order):
            if layer.id in seen_layer_ids:
                logger.warning(f"Dropping duplicate layer id {layer.id}")
                continue
            seen_layer_ids.add(layer.id)
            strokes = [s for s in layer.strokes if s.id not in seen_strokes]
            if len(strokes) != len(layer.strokes):
                logger.warning(f"Dropped duplicate stroke ids from layer {layer.id}")
                layer = replace(layer, strokes=tuple(strokes))
            seen_strokes.update(s.id for s in strokes)
            loaded.append(layer)

        self._layers = loaded
        self._active_layer_id = None
        self._selected_layer_ids = frozenset()
        self._notify(AllLayersCleared())
        for layer in loaded[1:]:
            self._notify(LayerAdded(layer))

    # ==================== UPDATE ====================

    def update_layer(self, layer_id: str, updater: Callable[[Layer], Layer]) -> bool:
        """
        Replace a layer with updater(layer).

        The result may not change the layer's id or type, nor move the
        background off its pinned z-order. LayerUpdated is emitted only
        when the value actually changed.

        Returns:
            False if the layer is missing or the update was rejected
        """
        index = self._index_of(layer_id)
        if index < 0:
            return False

        old_layer = self._layers[index]
        new_layer = updater(old_layer)

        if new_layer.id != old_layer.id or new_layer.layer_type is not old_layer.layer_type:
            logger.warning(f"Rejected update changing identity of layer {layer_id}")
            return False
        if new_layer.is_background and new_layer.z_order != Config.BACKGROUND_Z_ORDER:
            logger.warning("Rejected update moving the background z-order")
            return False

        if new_layer == old_layer:
            return True

        self._layers[index] = new_layer
        deactivated = None
        if self._active_layer_id == layer_id and not new_layer.is_editable():
            deactivated = self._change_active(None)

        self._notify(LayerUpdated(old_layer, new_layer), deactivated)

        return True

    def rename_layer(self, layer_id: str, name: str) -> bool:
        return self.update_layer(layer_id, lambda l: l.with_name(name))

    def set_layer_visibility(self, layer_id: str, visible: bool) -> bool:
        return self.update_layer(layer_id, lambda l: l.with_visibility(visible))

    def set_layer_locked(self, layer_id: str, locked: bool) -> bool:
        return self.update_layer(layer_id, lambda l: l.with_lock_state(locked))

    def set_layer_opacity(self, layer_id: str, opacity: float) -> bool:
        return self.update_layer(layer_id, lambda l: l.with_opacity(opacity))

    # ==================== ACTIVE / SELECTION ====================

    def set_active_layer(self, layer_id: Optional[str]) -> bool:
        """
        Make a layer active.

        Accepted only for None or an existing editable layer; anything
        else leaves the active layer unchanged.
        """
        if layer_id is not None:
            layer = self.find_layer_by_id(layer_id)
            if layer is None or not layer.is_editable():
                return False
        self._set_active(layer_id)
        return True

    def _change_active(self, layer_id: Optional[str]) -> Optional[ActiveLayerChanged]:
        """Apply an active layer change and return its event, if any"""
        if layer_id == self._active_layer_id:
            return None
        self._active_layer_id = layer_id
        return ActiveLayerChanged(layer_id)

    def _change_selection(self, layer_ids: FrozenSet[str]) -> SelectionChanged:
        self._selected_layer_ids = layer_ids
        return SelectionChanged(layer_ids)

    def _set_active(self, layer_id: Optional[str]):
        self._notify(self._change_active(layer_id))

    def _set_selection(self, layer_ids: FrozenSet[str]):
        self._notify(self._change_selection(layer_ids))

    def select_layers(self, layer_ids: Iterable[str]):
        existing = {l.id for l in self._layers}
        self._set_selection(frozenset(i for i in layer_ids if i in existing))

    def add_to_selection(self, layer_id: str):
        if self.find_layer_by_id(layer_id) is not None:
            self._set_selection(self._selected_layer_ids | {layer_id})

    def remove_from_selection(self, layer_id: str):
        self._set_selection(self._selected_layer_ids - {layer_id})

    def clear_selection(self):
        self._set_selection(frozenset())

    # ==================== ORDERING ====================

    def move_layer(self, layer_id: str, target_index: int) -> bool:
        """
        Move a layer to a final list position.

        The background cannot move and nothing can move to index 0. After
        the move every non-background z-order becomes index * stride.

        Returns:
            True on success (including a move to the current position)
        """
        current = self._index_of(layer_id)
        if current < 0 or self._layers[current].is_background:
            return False
        if target_index < 1 or target_index >= len(self._layers):
            return False
        if target_index == current:
            return True

        layer = self._layers.pop(current)
        self._layers.insert(target_index, layer)
        self._reindex_z_orders()
        logger.debug(f"Moved layer '{layer.name}' from {current} to {target_index}")
        self._notify(LayerReordered(layer_id, current, target_index))
        return True

    def _reindex_z_orders(self):
        for i, layer in enumerate(self._layers):
            z_order = Config.BACKGROUND_Z_ORDER if layer.is_background else i * Config.Z_ORDER_STRIDE
            if layer.z_order != z_order:
                self._layers[i] = layer.with_z_order(z_order)

    def move_layer_up(self, layer_id: str) -> bool:
        index = self._index_of(layer_id)
        if index < 0 or index >= len(self._layers) - 1:
            return False
        return self.move_layer(layer_id, index + 1)

    def move_layer_down(self, layer_id: str) -> bool:
        index = self._index_of(layer_id)
        if index <= 1:
            return False
        return self.move_layer(layer_id, index - 1)

    def move_to_top(self, layer_id: str) -> bool:
        return self.move_layer(layer_id, len(self._layers) - 1)

    def move_to_bottom(self, layer_id: str) -> bool:
        return self.move_layer(layer_id, 1)

    # ==================== MERGE ====================

    def merge_layers(self, layer_ids: Iterable[str]) -> Optional[Layer]:
        """
        Merge drawing layers into one new layer.

        Needs at least two distinct existing DRAWING layers. The new layer
        holds the sources' strokes in paint order and is placed on top;
        the sources are deleted.

        Returns:
            The merged layer, or None (with nothing changed) on failure
        """
        sources = []
        for layer_id in dict.fromkeys(layer_ids):
            layer = self.find_layer_by_id(layer_id)
            if layer is not None and layer.layer_type is LayerType.DRAWING:
                sources.append(layer)

        if len(sources) < 2:
            logger.warning("Merge needs at least two drawing layers")
            return None

        sources.sort(key=lambda l: (l.z_order, self._index_of(l.id)))
        strokes = tuple(s for layer in sources for s in layer.strokes)

        for layer in sources:
            self.delete_layer(layer.id)

        merged = Layer.create_drawing_layer(Config.MERGED_LAYER_NAME).with_strokes(strokes)
        return self._append_layer(merged)

    # ==================== STROKES ====================

    def _drawable_index(self, layer_id: str) -> int:
        index = self._index_of(layer_id)
        if index < 0:
            return -1
        layer = self._layers[index]
        if not layer.is_editable() or not layer.supports_drawing():
            return -1
        return index

    def _owner_of(self, stroke_id: str) -> Optional[Layer]:
        for layer in self._layers:
            if any(s.id == stroke_id for s in layer.strokes):
                return layer
        return None

    def get_strokes(self, layer_id: str) -> Tuple[VectorStroke, ...]:
        layer = self.find_layer_by_id(layer_id)
        return layer.strokes if layer is not None else ()

    def add_stroke(self, layer_id: str, stroke: VectorStroke, index: Optional[int] = None) -> bool:
        """
        Attach a stroke to an editable drawing-capable layer.

        Args:
            layer_id: Target layer
            stroke: Stroke to add; its id must not be owned by any layer
            index: Position in the layer's stroke list (appended if None)

        Returns:
            True if added
        """
        layer_index = self._drawable_index(layer_id)
        if layer_index < 0:
            return False
        if self._owner_of(stroke.id) is not None:
            logger.warning(f"Stroke {stroke.id} already belongs to a layer")
            return False

        strokes = list(self._layers[layer_index].strokes)
        if index is None:
            strokes.append(stroke)
        else:
            strokes.insert(max(0, min(index, len(strokes))), stroke)
        return self.update_layer(layer_id, lambda l: l.with_strokes(strokes))

    def remove_stroke(self, layer_id: str, stroke_id: str) -> bool:
        layer_index = self._drawable_index(layer_id)
        if layer_index < 0:
            return False
        strokes = self._layers[layer_index].strokes
        kept = tuple(s for s in strokes if s.id != stroke_id)
        if len(kept) == len(strokes):
            return False
        return self.update_layer(layer_id, lambda l: l.with_strokes(kept))

    def replace_stroke(self, layer_id: str, stroke: VectorStroke) -> bool:
        """Swap an edited stroke in for the one with the same id"""
        layer_index = self._drawable_index(layer_id)
        if layer_index < 0:
            return False
        strokes = self._layers[layer_index].strokes
        if not any(s.id == stroke.id for s in strokes):
            return False
        updated = tuple(stroke if s.id == stroke.id else s for s in strokes)
        return self.update_layer(layer_id, lambda l: l.with_strokes(updated))

    def set_strokes(self, layer_id: str, strokes: Iterable[VectorStroke]) -> bool:
        """Replace a layer's whole stroke list"""
        layer_index = self._drawable_index(layer_id)
        if layer_index < 0:
            return False
        strokes = tuple(strokes)
        ids = [s.id for s in strokes]
        if len(set(ids)) != len(ids):
            return False
        for stroke in strokes:
            owner = self._owner_of(stroke.id)
            if owner is not None and owner.id != layer_id:
                return False
        return self.update_layer(layer_id, lambda l: l.with_strokes(strokes))

    def clear_strokes(self, layer_id: str) -> bool:
        if self._drawable_index(layer_id) < 0:
            return False
        return self.update_layer(layer_id, lambda l: l.with_strokes(()))


__all__ = ['LayerManager', 'LayerStats', 'LayerChangeListener']
