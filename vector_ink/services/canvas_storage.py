"""
CanvasStorage - File storage for layered canvases

Handles saving/loading canvas JSON documents and PNG preview cache generation.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from PyQt6.QtGui import QImage

from ..config import Config
from ..layers.layer import Layer
from ..layers.layer_manager import LayerManager
from ..rendering.layer_renderer import LayerRenderer
from ..utils.json_utils import safe_json_load, safe_json_save

logger = logging.getLogger(__name__)

_CANVAS_ID_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_.-]*$')


class CanvasStorage:
    """
    Manages canvas files on disk.

    File structure:
        storage/canvases/
        ├── {canvas_id}.json     # Layers, strokes and canvas size
        └── {canvas_id}.png      # Rendered preview cache
    """

    def __init__(self, base_path: Optional[Union[str, Path]] = None,
                 renderer: Optional[LayerRenderer] = None):
        self._base = Path(base_path) if base_path is not None else Config.get_storage_dir()
        self._base.mkdir(parents=True, exist_ok=True)
        self._renderer = renderer or LayerRenderer()

    @property
    def base_path(self) -> Path:
        return self._base

    @staticmethod
    def is_valid_canvas_id(canvas_id: str) -> bool:
        """Ids become file names, so path separators are not allowed"""
        return isinstance(canvas_id, str) and bool(_CANVAS_ID_PATTERN.match(canvas_id))

    def get_canvas_path(self, canvas_id: str) -> Path:
        return self._base / f'{canvas_id}.json'

    def get_png_cache_path(self, canvas_id: str) -> Path:
        return self._base / f'{canvas_id}.png'

    # ==================== Save/Load ====================

    def save_canvas(self, canvas_id: str,
                    layers: Union[LayerManager, Iterable[Layer]],
                    canvas_size: Tuple[int, int] = (1920, 1080)) -> bool:
        """
        Save a canvas.

        Args:
            canvas_id: File-name safe identifier
            layers: A LayerManager or a plain layer sequence
            canvas_size: Width and height in pixels

        Returns:
            True if saved successfully
        """
        if not self.is_valid_canvas_id(canvas_id):
            logger.warning(f"Invalid canvas id: {canvas_id!r}")
            return False

        layer_list = layers.layers if isinstance(layers, LayerManager) else tuple(layers)
        now = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

        existing = self.load_canvas_data(canvas_id)
        created_at = existing.get('created_at', now) if existing else now

        data = {
            'version': Config.CANVAS_FORMAT_VERSION,
            'canvas_size': [int(canvas_size[0]), int(canvas_size[1])],
            'created_at': created_at,
            'modified_at': now,
            'layers': [layer.to_dict() for layer in layer_list],
        }

        if not safe_json_save(self.get_canvas_path(canvas_id), data):
            logger.error(f"Error saving canvas {canvas_id}")
            return False

        # Invalidate PNG cache
        png_path = self.get_png_cache_path(canvas_id)
        if png_path.exists():
            png_path.unlink()

        logger.debug(f"Saved canvas {canvas_id} with {len(layer_list)} layers")
        return True

    def load_canvas_data(self, canvas_id: str) -> Optional[Dict[str, Any]]:
        """Raw canvas document, or None if missing or unreadable"""
        if not self.is_valid_canvas_id(canvas_id):
            return None
        data = safe_json_load(self.get_canvas_path(canvas_id), default=None)
        if data is not None and not isinstance(data, dict):
            logger.warning(f"Canvas {canvas_id} is not a JSON object")
            return None
        return data

    def load_layers(self, canvas_id: str) -> Optional[List[Layer]]:
        """Stored layers; entries that fail to parse are skipped"""
        data = self.load_canvas_data(canvas_id)
        if data is None:
            return None
        entries = data.get('layers', [])
        if not isinstance(entries, list):
            logger.warning(f"Canvas {canvas_id} has no layer list")
            return None
        layers = []
        for entry in entries:
            layer = Layer.from_dict(entry) if isinstance(entry, dict) else None
            if layer is None:
                logger.warning(f"Skipping unreadable layer in canvas {canvas_id}")
                continue
            layers.append(layer)
        return layers

    def load_canvas(self, canvas_id: str) -> Optional[LayerManager]:
        """Restore a canvas into a new LayerManager"""
        layers = self.load_layers(canvas_id)
        if layers is None:
            return None
        manager = LayerManager()
        manager.load_layers(layers)
        return manager

    def get_canvas_size(self, canvas_id: str) -> Optional[Tuple[int, int]]:
        data = self.load_canvas_data(canvas_id)
        if data is None:
            return None
        try:
            width, height = data['canvas_size']
            return int(width), int(height)
        except (KeyError, TypeError, ValueError, OverflowError):
            return None

    def delete_canvas(self, canvas_id: str) -> bool:
        """Delete a canvas and its preview (hard delete)."""
        if not self.has_canvas(canvas_id):
            return False
        try:
            for path in (self.get_canvas_path(canvas_id), self.get_png_cache_path(canvas_id)):
                if path.exists():
                    path.unlink()
            return True
        except OSError as e:
            logger.error(f"Error deleting canvas {canvas_id}: {e}")
            return False

    def has_canvas(self, canvas_id: str) -> bool:
        return self.is_valid_canvas_id(canvas_id) and self.get_canvas_path(canvas_id).exists()

    def list_canvases(self) -> List[str]:
        """Ids of all stored canvases, sorted"""
        return sorted(path.stem for path in self._base.glob('*.json')
                      if self.is_valid_canvas_id(path.stem))

    # ==================== PNG Rendering ====================

    def render_image(self, canvas_id: str,
                     size: Optional[Tuple[int, int]] = None) -> Optional[QImage]:
        """
        Composite a stored canvas into an image.

        Args:
            canvas_id: Canvas to render
            size: Output size; defaults to the stored canvas size

        Returns:
            QImage, or None if the canvas is missing or rendering failed
        """
        if size is None:
            size = self.get_canvas_size(canvas_id)
        if size is None:
            logger.warning(f"Canvas {canvas_id} has no usable size")
            return None

        manager = self.load_canvas(canvas_id)
        if manager is None:
            return None
        return self._renderer.merge_layers(manager.layers, size[0], size[1])

    def render_to_png(self, canvas_id: str) -> Optional[Path]:
        """
        Render a canvas preview to PNG at its stored size, using the cache if valid.

        Returns:
            Path to PNG file, or None if the canvas is missing or rendering failed
        """
        if not self.has_canvas(canvas_id):
            return None

        json_path = self.get_canvas_path(canvas_id)
        png_path = self.get_png_cache_path(canvas_id)

        # Check if cache is valid
        if png_path.exists():
            if png_path.stat().st_mtime >= json_path.stat().st_mtime:
                return png_path

        if not self.export_png(canvas_id, png_path):
            return None
        return png_path

    def export_png(self, canvas_id: str, output_path: Union[str, Path],
                   size: Optional[Tuple[int, int]] = None) -> bool:
        """Render a canvas and write it to an arbitrary PNG file"""
        image = self.render_image(canvas_id, size)
        if image is None:
            return False
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if not image.save(str(output_path), 'PNG'):
            logger.error(f"Could not write PNG {output_path}")
            return False
        logger.info(f"Rendered canvas {canvas_id} to {output_path}")
        return True


__all__ = ['CanvasStorage']
