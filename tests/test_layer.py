""" Unit tests for the layer value model and its type tables. """

import json

from PyQt6.QtCore import QPointF

from vector_ink.config import Config
from vector_ink.core.vector_stroke import VectorStroke
from vector_ink.layers.layer import Layer, LayerTransform
from vector_ink.layers.layer_types import (
    BLEND_MODE_INFO,
    BlendMode,
    LayerType,
    get_layer_traits,
)

from conftest import pts


def test_type_traits() -> None:
    assert get_layer_traits(LayerType.DRAWING).supports_blend_modes
    assert not get_layer_traits(LayerType.TEXT).supports_blend_modes
    assert not get_layer_traits(LayerType.BACKGROUND).supports_transparency
    assert set(BLEND_MODE_INFO) == set(BlendMode)
    assert len(BlendMode) == 10
    assert BlendMode.from_name("soft_light") is BlendMode.SOFT_LIGHT
    assert LayerType.from_name("nope") is None


def test_name_is_truncated_and_opacity_clamped() -> None:
    layer = Layer(name="x" * 80, opacity=2.0)
    assert len(layer.name) == Config.MAX_LAYER_NAME_LENGTH
    assert layer.opacity == 1.0
    assert Layer(name="a", opacity=-1).opacity == 0.0


def test_background_ignores_transparency() -> None:
    background = Layer.create_background_layer()
    assert background.z_order == Config.BACKGROUND_Z_ORDER
    assert background.opacity == 1.0
    assert background.with_opacity(0.2) is background
    assert Layer(name="bg", layer_type=LayerType.BACKGROUND, opacity=0.3).opacity == 1.0


def test_edits_return_new_values() -> None:
    layer = Layer.create_drawing_layer("Ink")
    hidden = layer.with_visibility(False)
    assert layer.is_visible and not hidden.is_visible
    assert not hidden.is_editable()
    assert not layer.with_lock_state(True).is_editable()
    assert layer.with_opacity(0.5).opacity == 0.5
    assert hidden.id == layer.id


def test_type_specific_edits_only_apply_to_their_type() -> None:
    drawing = Layer.create_drawing_layer()
    text = Layer.create_text_layer(content="hi")
    assert drawing.with_text_content("nope") is drawing
    assert text.with_text_content("hello", color="#00FF00").text_color == 0xFF00FF00
    assert drawing.with_background_color("#000000") is drawing


def test_duplicate_gets_fresh_ids_for_layer_and_strokes() -> None:
    stroke = VectorStroke.from_raw_points(pts((0, 0), (1, 1)))
    layer = Layer.create_drawing_layer("Ink").with_strokes([stroke])
    copy = layer.duplicate()
    assert copy.id != layer.id
    assert copy.name == "Ink copy"
    assert copy.strokes[0].id != stroke.id
    assert copy.strokes[0].path_points == stroke.path_points


def test_layer_json_round_trip() -> None:
    stroke = VectorStroke.from_raw_points(pts((0, 0), (3, 4)), color="#123456")
    layer = (Layer.create_drawing_layer("Ink")
             .with_strokes([stroke])
             .with_blend_mode(BlendMode.MULTIPLY)
             .with_opacity(0.25))
    restored = Layer.from_json(layer.to_json())
    assert restored == layer
    assert restored.strokes[0] == stroke


def test_image_transform_round_trip_and_identity() -> None:
    transform = LayerTransform(offset_x=10, offset_y=5, scale_x=2, rotation=90)
    assert LayerTransform.from_json(transform.to_json()) == transform
    assert LayerTransform.identity().is_identity()
    assert not transform.is_identity()

    mapped = transform.to_qtransform().map(QPointF(1.0, 0.0))
    assert round(mapped.x(), 6) == 10.0
    assert round(mapped.y(), 6) == 7.0


def test_corrupt_layer_data() -> None:
    assert Layer.from_json("nope") is None
    assert Layer.from_dict({'name': 'x', 'id': '1', 'layer_type': 'SPACESHIP'}) is None
    data = Layer.create_drawing_layer().to_dict()
    data['strokes'] = [{'id': 's'}]
    assert Layer.from_dict(data) is None


def test_out_of_range_numbers_are_rejected() -> None:
    data = Layer.create_drawing_layer().to_dict()
    data['z_order'] = 7
    assert Layer.from_json(json.dumps(data).replace('"z_order": 7', '"z_order": 1e999')) is None
    data['last_modified'] = float('inf')
    assert Layer.from_dict(data) is None
    stroke = VectorStroke.from_raw_points(pts((0, 0), (1, 1))).to_dict()
    stroke['timestamp'] = float('inf')
    data = Layer.create_drawing_layer().to_dict()
    data['strokes'] = [stroke]
    assert Layer.from_dict(data) is None


def test_image_edits_and_display_info() -> None:
    image = Layer.create_image_layer(image_path="a.png")
    moved = image.with_image_path("b.png").with_image_transform(LayerTransform(offset_x=4.0))
    assert image.image_path == "a.png" and moved.image_path == "b.png"
    assert moved.image_transform.offset_x == 4.0
    assert Layer.create_drawing_layer().with_image_path("x.png").image_path == ""
    info = image.with_lock_state(True).with_opacity(0.5).display_info()
    assert info == "Image Layer · Visible · Locked · 50%"
