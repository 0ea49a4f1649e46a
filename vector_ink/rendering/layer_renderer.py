"""
Layer Renderer - deterministic compositing of layers onto a QPainter.

Layers are painted in ascending z-order (stable for ties). Each visible
layer is drawn inside its own save()/restore() pair with the shared
transform, its opacity and its blend mode applied. Invisible layers are
skipped without any paint calls.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QColor, QFont, QFontMetricsF, QImage, QPainter, QTransform

from ..config import Config
from ..core.geometry import VectorBounds
from ..core.vector_stroke import VectorStroke
from ..layers.layer import Layer
from ..layers.layer_types import BlendMode, LayerType
from ..utils.color_utils import argb_to_qcolor
from ..utils.image_utils import allocate_image, load_image_as_qimage
from .blend_modes import composition_mode_for, painter_supports_blend_modes
from .stroke_renderer import render_strokes

logger = logging.getLogger(__name__)

StrokesByLayer = Mapping[str, Sequence[VectorStroke]]

_TEXT_FLAGS = (Qt.AlignmentFlag.AlignLeft.value | Qt.AlignmentFlag.AlignTop.value |
               Qt.TextFlag.TextWordWrap.value)


class LayerRenderer:
    """
    Composites Layer values onto a QPainter.

    The renderer holds no document state, so one instance can render any
    immutable layer snapshot.
    """

    # ==================== COMPOSITING ====================

    def render_layers(self, layers: Iterable[Layer], painter: QPainter,
                      transform: Optional[QTransform] = None,
                      strokes_by_layer: Optional[StrokesByLayer] = None):
        """
        Paint layers in ascending z-order.

        Args:
            layers: Layers to composite
            painter: Active painter on the target
            transform: Shared transform combined with the painter's own
            strokes_by_layer: Optional stroke override per layer id; drawing
                layers missing from it use their own strokes
        """
        native = painter_supports_blend_modes(painter)
        for layer in sorted(layers, key=lambda l: l.z_order):
            strokes = None
            if strokes_by_layer is not None:
                strokes = strokes_by_layer.get(layer.id)
            self.render_layer(layer, painter, transform, strokes, native)

    def render_layer(self, layer: Layer, painter: QPainter,
                     transform: Optional[QTransform] = None,
                     strokes: Optional[Sequence[VectorStroke]] = None,
                     native_blend: Optional[bool] = None):
        """Paint one layer inside its own save/restore scope"""
        if not layer.is_visible:
            return

        if native_blend is None:
            native_blend = painter_supports_blend_modes(painter)

        blend_mode = layer.blend_mode if layer.supports_blend_modes() else BlendMode.NORMAL

        painter.save()
        try:
            if transform is not None:
                painter.setTransform(transform, True)
            painter.setOpacity(int(layer.opacity * 255) / 255.0)
            painter.setCompositionMode(composition_mode_for(blend_mode, native_blend))
            self.draw_layer_content(layer, painter,
                                    layer.strokes if strokes is None else strokes)
        finally:
            painter.restore()

    def draw_layer_content(self, layer: Layer, painter: QPainter,
                           strokes: Sequence[VectorStroke]):
        """Type-specific draw routine"""
        if layer.layer_type is LayerType.DRAWING:
            render_strokes(painter, strokes)
        elif layer.layer_type is LayerType.TEXT:
            self._draw_text(layer, painter)
        elif layer.layer_type is LayerType.IMAGE:
            self._draw_image(layer, painter)
        elif layer.layer_type is LayerType.BACKGROUND:
            self._draw_background(layer, painter, strokes)

    # ==================== TYPE-SPECIFIC DRAWING ====================

    @staticmethod
    def _text_font(layer: Layer) -> QFont:
        font = QFont()
        font.setPixelSize(max(1, int(round(layer.text_size))))
        return font

    def _draw_text(self, layer: Layer, painter: QPainter):
        if not layer.text_content.strip():
            return
        device = painter.device()
        rect = QRectF(0, 0, device.width(), device.height())
        painter.setFont(self._text_font(layer))
        painter.setPen(argb_to_qcolor(layer.text_color))
        painter.drawText(rect, _TEXT_FLAGS, layer.text_content)

    def _draw_image(self, layer: Layer, painter: QPainter):
        if not layer.image_path:
            return
        image = load_image_as_qimage(layer.image_path)
        if image is None:
            logger.warning(f"Image for layer '{layer.name}' not available: {layer.image_path}")
            return
        painter.setTransform(layer.image_transform.to_qtransform(), True)
        painter.drawImage(0, 0, image)

    def _draw_background(self, layer: Layer, painter: QPainter,
                         strokes: Sequence[VectorStroke]):
        device = painter.device()
        painter.save()
        # Fill the whole target regardless of the world transform
        painter.resetTransform()
        painter.fillRect(QRectF(0, 0, device.width(), device.height()),
                         argb_to_qcolor(layer.background_color))
        painter.restore()

        if layer.image_path:
            self._draw_background_image(layer, painter)
        render_strokes(painter, strokes)

    def _draw_background_image(self, layer: Layer, painter: QPainter):
        painter.save()
        self._draw_image(layer, painter)
        painter.restore()

    # ==================== OFFSCREEN TARGETS ====================

    def merge_layers(self, layers: Iterable[Layer], width: int, height: int,
                     strokes_by_layer: Optional[StrokesByLayer] = None) -> Optional[QImage]:
        """
        Composite layers into a new transparent image.

        Returns:
            QImage, or None if allocation or drawing failed
        """
        image = allocate_image(width, height)
        if image is None:
            return None
        if not self._paint_into(image, lambda p: self.render_layers(
                layers, p, strokes_by_layer=strokes_by_layer)):
            return None
        return image

    def create_layer_thumbnail(self, layer: Layer,
                               width: int = Config.THUMBNAIL_SIZE,
                               height: int = Config.THUMBNAIL_SIZE,
                               strokes: Optional[Sequence[VectorStroke]] = None) -> Optional[QImage]:
        """
        Render one layer over a white background.

        Returns:
            QImage, or None if allocation or drawing failed
        """
        image = allocate_image(width, height, QColor(255, 255, 255))
        if image is None:
            return None
        if not self._paint_into(image, lambda p: self.render_layer(layer, p, strokes=strokes)):
            return None
        return image

    @staticmethod
    def _paint_into(image: QImage, draw) -> bool:
        painter = QPainter()
        if not painter.begin(image):
            logger.error("Could not begin painting on offscreen image")
            return False
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            draw(painter)
            return True
        except Exception as e:
            logger.error(f"Error rendering layers: {e}")
            return False
        finally:
            painter.end()

    # ==================== QUERIES ====================

    def calculate_layer_bounds(self, layer: Layer,
                               strokes: Optional[Sequence[VectorStroke]] = None) -> Optional[VectorBounds]:
        """
        Content bounds of a layer in canvas coordinates.

        Returns:
            VectorBounds, or None for empty layers and the background
        """
        if layer.layer_type is LayerType.DRAWING:
            result = None
            for stroke in layer.strokes if strokes is None else strokes:
                if stroke.bounds is None:
                    continue
                bounds = stroke.bounds.expand(stroke.width / 2.0)
                result = bounds if result is None else result.union(bounds)
            return result

        if layer.layer_type is LayerType.TEXT:
            if not layer.text_content.strip():
                return None
            metrics = QFontMetricsF(self._text_font(layer))
            lines = layer.text_content.split('\n')
            text_width = max(metrics.horizontalAdvance(line) for line in lines)
            text_height = len(lines) * layer.text_size * Config.TEXT_LINE_HEIGHT
            return VectorBounds(0.0, 0.0, text_width, text_height)

        if layer.layer_type is LayerType.IMAGE:
            if not layer.image_path:
                return None
            image = load_image_as_qimage(layer.image_path)
            if image is None:
                return None
            rect = layer.image_transform.to_qtransform().mapRect(
                QRectF(0, 0, image.width(), image.height()))
            return VectorBounds(rect.left(), rect.top(), rect.right(), rect.bottom())

        return None

    def has_content_in_region(self, layer: Layer, x: float, y: float,
                              width: float, height: float,
                              strokes: Optional[Sequence[VectorStroke]] = None) -> bool:
        """Whether the layer draws anything inside the given rectangle"""
        region = VectorBounds(x, y, x + width, y + height)

        if layer.layer_type is LayerType.BACKGROUND:
            return True

        if layer.layer_type is LayerType.DRAWING:
            source = layer.strokes if strokes is None else strokes
            return any(s.intersects(region) for s in source)

        bounds = self.calculate_layer_bounds(layer)
        return bounds is not None and bounds.intersects(region)


__all__ = ['LayerRenderer', 'StrokesByLayer']
