"""
Undo commands for layer stroke operations.

Provides QUndoCommand subclasses for stroke add/remove/clear operations
that work through the LayerManager.
"""

from typing import TYPE_CHECKING, Optional, Tuple

from PyQt6.QtGui import QUndoCommand

from ..core.vector_stroke import VectorStroke

if TYPE_CHECKING:
    from .layer_manager import LayerManager


class AddStrokeCommand(QUndoCommand):
    """Undo command for adding a stroke."""

    def __init__(self, manager: 'LayerManager', layer_id: str, stroke: VectorStroke):
        super().__init__("Add Stroke")
        self._manager = manager
        self._layer_id = layer_id
        self._stroke = stroke

    def redo(self):
        self._manager.add_stroke(self._layer_id, self._stroke)

    def undo(self):
        self._manager.remove_stroke(self._layer_id, self._stroke.id)


class RemoveStrokeCommand(QUndoCommand):
    """Undo command for removing a stroke."""

    def __init__(self, manager: 'LayerManager', layer_id: str, stroke_id: str):
        super().__init__("Remove Stroke")
        self._manager = manager
        self._layer_id = layer_id
        self._stroke_id = stroke_id
        self._stroke: Optional[VectorStroke] = None
        self._index = 0

    def redo(self):
        strokes = self._manager.get_strokes(self._layer_id)
        for i, stroke in enumerate(strokes):
            if stroke.id == self._stroke_id:
                self._stroke, self._index = stroke, i
                break
        else:
            self._stroke = None
            return
        self._manager.remove_stroke(self._layer_id, self._stroke_id)

    def undo(self):
        if self._stroke is not None:
            self._manager.add_stroke(self._layer_id, self._stroke, self._index)


class ClearLayerCommand(QUndoCommand):
    """Undo command for clearing all strokes of a layer."""

    def __init__(self, manager: 'LayerManager', layer_id: str):
        super().__init__("Clear Layer")
        self._manager = manager
        self._layer_id = layer_id
        self._strokes: Tuple[VectorStroke, ...] = ()

    def redo(self):
        self._strokes = self._manager.get_strokes(self._layer_id)
        self._manager.clear_strokes(self._layer_id)

    def undo(self):
        self._manager.set_strokes(self._layer_id, self._strokes)


__all__ = ['AddStrokeCommand', 'RemoveStrokeCommand', 'ClearLayerCommand']
