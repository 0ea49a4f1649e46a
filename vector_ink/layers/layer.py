"""
Layer value model.

Layers are immutable. Every with_* method returns a new layer and stamps
last_modified; the LayerManager swaps the new value into its list.
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from PyQt6.QtGui import QTransform

from ..config import Config
from ..core.geometry import clamp
from ..core.vector_stroke import VectorStroke
from ..utils.color_utils import ColorLike, to_argb
from .layer_types import BlendMode, LayerType, LayerTraits, get_layer_traits

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class LayerTransform:
    """
    Placement of an image layer.

    Rotation is in degrees, matching QTransform.rotate().
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    maintain_aspect_ratio: bool = True

    @classmethod
    def identity(cls) -> 'LayerTransform':
        return cls()

    def is_identity(self) -> bool:
        return (self.offset_x == 0.0 and self.offset_y == 0.0 and
                self.scale_x == 1.0 and self.scale_y == 1.0 and
                self.rotation == 0.0)

    def to_qtransform(self) -> QTransform:
        """Scale, then rotate, then translate"""
        transform = QTransform()
        transform.translate(self.offset_x, self.offset_y)
        transform.rotate(self.rotation)
        transform.scale(self.scale_x, self.scale_y)
        return transform

    def to_dict(self) -> Dict[str, Any]:
        return {
            'offset_x': self.offset_x,
            'offset_y': self.offset_y,
            'scale_x': self.scale_x,
            'scale_y': self.scale_y,
            'rotation': self.rotation,
            'maintain_aspect_ratio': self.maintain_aspect_ratio,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['LayerTransform']:
        try:
            return cls(
                offset_x=float(data.get('offset_x', 0.0)),
                offset_y=float(data.get('offset_y', 0.0)),
                scale_x=float(data.get('scale_x', 1.0)),
                scale_y=float(data.get('scale_y', 1.0)),
                rotation=float(data.get('rotation', 0.0)),
                maintain_aspect_ratio=bool(data.get('maintain_aspect_ratio', True)),
            )
        except (TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Invalid layer transform: {e}")
            return None

    @classmethod
    def from_json(cls, text: str) -> Optional['LayerTransform']:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid layer transform JSON: {e}")
            return None
        return cls.from_dict(data) if isinstance(data, dict) else None


@dataclass(frozen=True)
class Layer:
    """
    One compositing layer.

    The payload fields that matter depend on layer_type: strokes for
    DRAWING, text_* for TEXT, image_* for IMAGE, background_color (plus an
    optional image) for BACKGROUND.

    Attributes:
        name: Display name, truncated to Config.MAX_LAYER_NAME_LENGTH
        layer_type: Kind of content
        id: Unique layer id
        is_visible: Rendered when True
        is_locked: Locked layers reject edits
        opacity: Opacity in [0, 1], always 1.0 for BACKGROUND
        blend_mode: Compositing operator
        z_order: Paint order, lower first
    """
    name: str
    layer_type: LayerType = LayerType.DRAWING
    id: str = field(default_factory=_new_id)
    is_visible: bool = True
    is_locked: bool = False
    opacity: float = 1.0
    blend_mode: BlendMode = BlendMode.NORMAL
    z_order: int = 0
    strokes: Tuple[VectorStroke, ...] = ()
    text_content: str = ""
    text_color: int = Config.DEFAULT_TEXT_COLOR
    text_size: float = Config.DEFAULT_TEXT_SIZE
    image_path: str = ""
    image_transform: LayerTransform = field(default_factory=LayerTransform)
    background_color: int = Config.DEFAULT_BACKGROUND_COLOR
    created_at: int = field(default_factory=_now_ms)
    last_modified: int = field(default_factory=_now_ms)
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'name', str(self.name)[:Config.MAX_LAYER_NAME_LENGTH])
        object.__setattr__(self, 'strokes', tuple(self.strokes))
        if self.layer_type is LayerType.BACKGROUND:
            object.__setattr__(self, 'opacity', 1.0)
        else:
            object.__setattr__(self, 'opacity', clamp(float(self.opacity)))

    # ==================== FACTORIES ====================

    @classmethod
    def create_drawing_layer(cls, name: str = "Drawing Layer") -> 'Layer':
        return cls(name=name, layer_type=LayerType.DRAWING,
                   description="Hand-drawn content")

    @classmethod
    def create_text_layer(cls, name: str = "Text Layer", content: str = "",
                          color: ColorLike = Config.DEFAULT_TEXT_COLOR,
                          size: float = Config.DEFAULT_TEXT_SIZE) -> 'Layer':
        return cls(name=name, layer_type=LayerType.TEXT, text_content=content,
                   text_color=to_argb(color), text_size=size,
                   description="Text content")

    @classmethod
    def create_image_layer(cls, name: str = "Image Layer", image_path: str = "") -> 'Layer':
        return cls(name=name, layer_type=LayerType.IMAGE, image_path=image_path,
                   description="Image content")

    @classmethod
    def create_background_layer(cls, name: str = "Background",
                                color: ColorLike = Config.DEFAULT_BACKGROUND_COLOR) -> 'Layer':
        return cls(name=name, layer_type=LayerType.BACKGROUND,
                   z_order=Config.BACKGROUND_Z_ORDER,
                   background_color=to_argb(color),
                   description="Background layer")

    # ==================== TRAITS ====================

    @property
    def traits(self) -> LayerTraits:
        return get_layer_traits(self.layer_type)

    @property
    def is_background(self) -> bool:
        return self.layer_type is LayerType.BACKGROUND

    def is_editable(self) -> bool:
        return not self.is_locked and self.is_visible

    def supports_drawing(self) -> bool:
        return self.traits.supports_drawing

    def supports_text(self) -> bool:
        return self.traits.supports_text

    def supports_images(self) -> bool:
        return self.traits.supports_images

    def supports_transparency(self) -> bool:
        return self.traits.supports_transparency

    def supports_blend_modes(self) -> bool:
        return self.traits.supports_blend_modes

    def is_valid(self) -> bool:
        return bool(self.name.strip()) and 0.0 <= self.opacity <= 1.0

    def display_info(self) -> str:
        visibility = "Visible" if self.is_visible else "Hidden"
        lock = "Locked" if self.is_locked else "Editable"
        return f"{self.traits.display_name} · {visibility} · {lock} · {int(self.opacity * 100)}%"

    # ==================== EDITS ====================

    def _touched(self, **changes) -> 'Layer':
        return replace(self, last_modified=_now_ms(), **changes)

    def with_name(self, name: str) -> 'Layer':
        return self._touched(name=name)

    def with_visibility(self, visible: bool) -> 'Layer':
        return self._touched(is_visible=visible)

    def with_lock_state(self, locked: bool) -> 'Layer':
        return self._touched(is_locked=locked)

    def with_opacity(self, opacity: float) -> 'Layer':
        """Clamped opacity change; BACKGROUND layers return unchanged"""
        if not self.supports_transparency():
            return self
        return self._touched(opacity=opacity)

    def with_blend_mode(self, mode: BlendMode) -> 'Layer':
        return self._touched(blend_mode=mode)

    def with_z_order(self, z_order: int) -> 'Layer':
        return self._touched(z_order=z_order)

    def with_strokes(self, strokes: Iterable[VectorStroke]) -> 'Layer':
        return self._touched(strokes=tuple(strokes))

    def with_text_content(self, content: str, color: Optional[ColorLike] = None,
                          size: Optional[float] = None) -> 'Layer':
        if self.layer_type is not LayerType.TEXT:
            return self
        return self._touched(
            text_content=content,
            text_color=self.text_color if color is None else to_argb(color),
            text_size=self.text_size if size is None else size,
        )

    def with_image_path(self, path: str) -> 'Layer':
        if self.layer_type is not LayerType.IMAGE:
            return self
        return self._touched(image_path=path)

    def with_image_transform(self, transform: LayerTransform) -> 'Layer':
        return self._touched(image_transform=transform)

    def with_background_color(self, color: ColorLike) -> 'Layer':
        if self.layer_type is not LayerType.BACKGROUND:
            return self
        return self._touched(background_color=to_argb(color))

    def duplicate(self, name: Optional[str] = None) -> 'Layer':
        """Copy with a fresh id; strokes get fresh ids too"""
        now = _now_ms()
        return replace(
            self,
            id=_new_id(),
            name=name if name is not None else f"{self.name} copy",
            strokes=tuple(s.duplicate() for s in self.strokes),
            created_at=now,
            last_modified=now,
        )

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'layer_type': self.layer_type.name,
            'is_visible': self.is_visible,
            'is_locked': self.is_locked,
            'opacity': self.opacity,
            'blend_mode': self.blend_mode.name,
            'z_order': self.z_order,
            'strokes': [s.to_dict() for s in self.strokes],
            'text_content': self.text_content,
            'text_color': self.text_color,
            'text_size': self.text_size,
            'image_path': self.image_path,
            'image_transform': self.image_transform.to_dict(),
            'background_color': self.background_color,
            'created_at': self.created_at,
            'last_modified': self.last_modified,
            'description': self.description,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['Layer']:
        """
        Restore a layer from to_dict() output.

        Returns:
            Layer, or None if the data (or any stroke in it) is corrupt
        """
        try:
            layer_type = LayerType.from_name(data['layer_type'])
            if layer_type is None:
                raise ValueError(f"unknown layer type {data['layer_type']!r}")

            strokes = []
            for stroke_data in data.get('strokes') or []:
                stroke = VectorStroke.from_dict(stroke_data)
                if stroke is None:
                    raise ValueError("corrupt stroke")
                strokes.append(stroke)

            transform = LayerTransform.from_dict(data.get('image_transform') or {})
            if transform is None:
                raise ValueError("corrupt image transform")

            return cls(
                name=str(data['name']),
                layer_type=layer_type,
                id=str(data['id']),
                is_visible=bool(data.get('is_visible', True)),
                is_locked=bool(data.get('is_locked', False)),
                opacity=float(data.get('opacity', 1.0)),
                blend_mode=BlendMode.from_name(data.get('blend_mode', 'NORMAL')) or BlendMode.NORMAL,
                z_order=int(data.get('z_order', 0)),
                strokes=tuple(strokes),
                text_content=str(data.get('text_content', "")),
                text_color=int(data.get('text_color', Config.DEFAULT_TEXT_COLOR)),
                text_size=float(data.get('text_size', Config.DEFAULT_TEXT_SIZE)),
                image_path=str(data.get('image_path', "")),
                image_transform=transform,
                background_color=int(data.get('background_color', Config.DEFAULT_BACKGROUND_COLOR)),
                created_at=int(data.get('created_at', 0)),
                last_modified=int(data.get('last_modified', 0)),
                description=str(data.get('description', "")),
            )
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Invalid layer data: {e}")
            return None

    @classmethod
    def from_json(cls, text: str) -> Optional['Layer']:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid layer JSON: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning("Layer JSON is not an object")
            return None
        return cls.from_dict(data)


__all__ = ['Layer', 'LayerTransform']
