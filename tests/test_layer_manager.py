""" Unit tests for the layer manager: ordering, active layer, events and strokes. """

import random

import pytest

from vector_ink.config import Config
from vector_ink.core.vector_stroke import VectorStroke
from vector_ink.layers.layer import Layer
from vector_ink.layers.layer_events import (
    ActiveLayerChanged,
    AllLayersCleared,
    LayerAdded,
    LayerRemoved,
    LayerReordered,
    LayerUpdated,
    SelectionChanged,
)
from vector_ink.layers.layer_manager import LayerManager
from vector_ink.layers.layer_types import LayerType

from conftest import pts


def _stroke() -> VectorStroke:
    return VectorStroke.from_raw_points(pts((0, 0), (4, 4)))


def _recording_manager():
    manager = LayerManager()
    events = []
    manager.add_layer_change_listener(events.append)
    return manager, events


def _assert_invariants(manager: LayerManager) -> None:
    layers = manager.layers
    assert sum(1 for l in layers if l.layer_type is LayerType.BACKGROUND) == 1
    assert layers[0].is_background
    assert layers[0].z_order == Config.BACKGROUND_Z_ORDER
    z_orders = [l.z_order for l in layers]
    assert z_orders == sorted(z_orders)
    active = manager.get_active_layer()
    if manager.active_layer_id is not None:
        assert active is not None and active.is_editable()
    ids = {l.id for l in layers}
    assert manager.selected_layer_ids <= ids
    stroke_ids = [s.id for l in layers for s in l.strokes]
    assert len(stroke_ids) == len(set(stroke_ids))


def test_new_canvas_has_only_the_background() -> None:
    manager = LayerManager()
    assert len(manager.layers) == 1
    assert manager.background_layer.layer_type is LayerType.BACKGROUND
    assert manager.background_layer.z_order == Config.BACKGROUND_Z_ORDER
    assert manager.active_layer_id is None


def test_created_layers_stack_and_become_active() -> None:
    manager, events = _recording_manager()
    drawing = manager.create_drawing_layer()
    text = manager.create_text_layer()

    assert [l.z_order for l in manager.layers] == [Config.BACKGROUND_Z_ORDER, 1, 2]
    assert manager.active_layer_id == text.id
    assert events == [
        LayerAdded(drawing), ActiveLayerChanged(drawing.id),
        LayerAdded(text), ActiveLayerChanged(text.id),
    ]


def test_background_cannot_be_deleted() -> None:
    manager = LayerManager()
    manager.create_drawing_layer()
    before = manager.layers
    assert not manager.delete_layer(manager.background_layer.id)
    assert manager.layers == before
    assert not manager.delete_layer("missing")


def test_deleting_active_layer_retargets_to_the_layer_below() -> None:
    manager, events = _recording_manager()
    lower = manager.create_drawing_layer("lower")
    upper = manager.create_drawing_layer("upper")
    manager.add_to_selection(upper.id)
    events.clear()

    assert manager.delete_layer(upper.id)
    assert manager.active_layer_id == lower.id
    assert upper.id not in manager.selected_layer_ids
    assert isinstance(events[0], LayerRemoved)
    assert events[-1] == ActiveLayerChanged(lower.id)

    assert manager.delete_layer(lower.id)
    assert manager.active_layer_id is None


def test_set_active_layer_requires_editable_target() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer()
    b = manager.create_drawing_layer()
    manager.set_layer_locked(a.id, True)

    assert not manager.set_active_layer(a.id)
    assert manager.active_layer_id == b.id
    assert not manager.set_active_layer("missing")
    assert manager.set_active_layer(None)
    assert manager.active_layer_id is None


def test_hiding_the_active_layer_clears_it() -> None:
    manager = LayerManager()
    layer = manager.create_drawing_layer()
    assert manager.set_layer_visibility(layer.id, False)
    assert manager.active_layer_id is None
    _assert_invariants(manager)


def test_update_rejects_identity_changes_and_only_emits_on_change() -> None:
    manager, events = _recording_manager()
    layer = manager.create_drawing_layer()
    events.clear()

    assert not manager.update_layer(layer.id, lambda l: l.duplicate())
    assert manager.update_layer(layer.id, lambda l: l)
    assert events == []

    assert manager.rename_layer(layer.id, "Renamed")
    assert isinstance(events[-1], LayerUpdated)
    assert events[-1].new_layer.name == "Renamed"

    background = manager.background_layer
    assert not manager.update_layer(background.id, lambda l: l.with_z_order(5))
    assert manager.set_layer_opacity(background.id, 0.1)
    assert manager.background_layer.opacity == 1.0


def test_move_layer_reindexes_z_orders() -> None:
    manager, events = _recording_manager()
    a = manager.create_drawing_layer("a")
    b = manager.create_drawing_layer("b")
    c = manager.create_drawing_layer("c")
    events.clear()

    assert manager.move_layer(c.id, 1)
    assert [l.name for l in manager.layers[1:]] == ["c", "a", "b"]
    assert [l.z_order for l in manager.layers] == [Config.BACKGROUND_Z_ORDER, 10, 20, 30]
    assert events == [LayerReordered(c.id, 3, 1)]

    assert manager.move_layer(c.id, 1)
    assert len(events) == 1
    assert not manager.move_layer(c.id, 0)
    assert not manager.move_layer(c.id, 4)
    assert not manager.move_layer(manager.background_layer.id, 2)


def test_move_helpers() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer("a")
    b = manager.create_drawing_layer("b")
    c = manager.create_drawing_layer("c")

    assert manager.move_to_bottom(c.id)
    assert [l.name for l in manager.layers[1:]] == ["c", "a", "b"]
    assert not manager.move_layer_down(c.id)
    assert manager.move_layer_up(c.id)
    assert [l.name for l in manager.layers[1:]] == ["a", "c", "b"]
    assert manager.move_to_top(a.id)
    assert [l.name for l in manager.layers[1:]] == ["c", "b", "a"]
    assert not manager.move_layer_up(a.id)
    assert manager.move_layer_down(b.id)
    assert [l.name for l in manager.layers[1:]] == ["b", "c", "a"]
    _assert_invariants(manager)


def test_merge_needs_two_drawing_layers() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer()
    text = manager.create_text_layer()
    before = manager.layers

    assert manager.merge_layers([a.id]) is None
    assert manager.merge_layers([a.id, a.id]) is None
    assert manager.merge_layers([a.id, text.id]) is None
    assert manager.layers == before


def test_merge_concatenates_strokes_in_paint_order() -> None:
    manager = LayerManager()
    lower = manager.create_drawing_layer("lower")
    upper = manager.create_drawing_layer("upper")
    s1, s2, s3 = _stroke(), _stroke(), _stroke()
    manager.add_stroke(lower.id, s1)
    manager.add_stroke(upper.id, s2)
    manager.add_stroke(upper.id, s3)

    merged = manager.merge_layers([upper.id, lower.id])
    assert merged.name == Config.MERGED_LAYER_NAME
    assert [s.id for s in merged.strokes] == [s1.id, s2.id, s3.id]
    assert manager.find_layer_by_id(lower.id) is None
    assert manager.find_layer_by_id(upper.id) is None
    assert manager.layers[-1].id == merged.id
    assert manager.active_layer_id == merged.id
    _assert_invariants(manager)


def test_stroke_operations_respect_editability_and_ownership() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer()
    b = manager.create_drawing_layer()
    text = manager.create_text_layer()
    stroke = _stroke()

    assert manager.add_stroke(a.id, stroke)
    assert not manager.add_stroke(b.id, stroke)
    assert not manager.add_stroke(text.id, _stroke())
    assert not manager.add_stroke("missing", _stroke())

    manager.set_layer_locked(a.id, True)
    assert not manager.remove_stroke(a.id, stroke.id)
    assert not manager.clear_strokes(a.id)
    manager.set_layer_locked(a.id, False)

    wider = stroke.update_width(12.0)
    assert manager.replace_stroke(a.id, wider)
    assert manager.get_strokes(a.id)[0].width == 12.0

    first = _stroke()
    assert manager.add_stroke(a.id, first, index=0)
    assert [s.id for s in manager.get_strokes(a.id)] == [first.id, stroke.id]

    assert not manager.set_strokes(b.id, [stroke])
    assert manager.remove_stroke(a.id, stroke.id)
    assert not manager.remove_stroke(a.id, stroke.id)
    assert manager.clear_strokes(a.id)
    assert manager.get_strokes(a.id) == ()


def test_background_accepts_strokes() -> None:
    manager = LayerManager()
    stroke = _stroke()
    assert manager.add_stroke(manager.background_layer.id, stroke)
    assert manager.strokes_by_layer()[manager.background_layer.id] == (stroke,)


def test_snapshots_are_read_only() -> None:
    manager = LayerManager()
    layer = manager.create_drawing_layer()
    snapshot = manager.strokes_by_layer()
    with pytest.raises(TypeError):
        snapshot[layer.id] = ()
    layers = manager.layers
    manager.create_drawing_layer()
    assert len(layers) == 2


def test_clear_all_and_load_layers() -> None:
    manager, events = _recording_manager()
    manager.create_drawing_layer()
    manager.create_text_layer()
    events.clear()

    manager.clear_all_layers()
    assert len(manager.layers) == 1
    assert manager.active_layer_id is None
    assert events == [AllLayersCleared()]

    stroke = _stroke()
    extra_background = Layer.create_background_layer("second")
    first = Layer.create_drawing_layer("first").with_strokes([stroke])
    clash = Layer.create_drawing_layer("clash").with_strokes([stroke])
    manager.load_layers([first, extra_background, clash])
    assert [l.name for l in manager.layers] == ["second", "first", "clash"]
    assert manager.layers[2].strokes == ()
    _assert_invariants(manager)


def test_listener_errors_propagate_and_listeners_can_be_removed() -> None:
    manager = LayerManager()

    def broken(event):
        raise RuntimeError("listener failed")

    manager.add_layer_change_listener(broken)
    with pytest.raises(RuntimeError):
        manager.create_drawing_layer()

    manager.remove_layer_change_listener(broken)
    manager.create_drawing_layer()


def test_listeners_see_committed_state() -> None:
    manager = LayerManager()
    below = manager.create_drawing_layer("Below")
    top = manager.create_drawing_layer("Top")
    manager.select_layers([below.id, top.id])
    seen = []

    def check(event):
        _assert_invariants(manager)
        seen.append((type(event), manager.active_layer_id))

    manager.add_layer_change_listener(check)
    manager.delete_layer(top.id)
    assert seen == [
        (LayerRemoved, below.id),
        (SelectionChanged, below.id),
        (ActiveLayerChanged, below.id),
    ]

    seen.clear()
    manager.set_layer_locked(below.id, True)
    assert seen == [(LayerUpdated, None), (ActiveLayerChanged, None)]

    seen.clear()
    added = manager.create_text_layer()
    assert seen == [(LayerAdded, added.id), (ActiveLayerChanged, added.id)]

def test_layer_stats() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer()
    manager.create_text_layer()
    manager.create_image_layer()
    manager.add_stroke(a.id, _stroke())
    manager.set_layer_visibility(a.id, False)

    stats = manager.get_layer_stats()
    assert stats.total_layers == 4
    assert stats.visible_layers == 3
    assert stats.drawing_layers == 1
    assert stats.text_layers == 1
    assert stats.image_layers == 1
    assert stats.total_strokes == 1


def test_duplicate_layer_goes_on_top() -> None:
    manager = LayerManager()
    a = manager.create_drawing_layer()
    manager.add_stroke(a.id, _stroke())
    copy = manager.duplicate_layer(a.id)
    assert manager.layers[-1].id == copy.id
    assert copy.z_order == a.z_order + 1
    assert manager.duplicate_layer(manager.background_layer.id) is None
    _assert_invariants(manager)


def test_selection_and_layer_queries() -> None:
    manager, events = _recording_manager()
    ink = manager.create_drawing_layer("Ink")
    notes = manager.create_text_layer("Notes")
    manager.set_layer_visibility(notes.id, False)
    manager.set_layer_locked(ink.id, True)

    assert [l.id for l in manager.get_visible_layers()] == [manager.background_layer.id, ink.id]
    assert ink.id not in {l.id for l in manager.get_editable_layers()}

    events.clear()
    manager.select_layers([ink.id, "missing"])
    assert manager.selected_layer_ids == {ink.id}
    manager.add_to_selection(notes.id)
    manager.add_to_selection("missing")
    manager.remove_from_selection(ink.id)
    assert manager.selected_layer_ids == {notes.id}
    manager.clear_selection()
    assert manager.selected_layer_ids == frozenset()
    assert all(isinstance(e, SelectionChanged) for e in events)
    assert len(events) == 4


def test_random_operation_sequences_keep_invariants() -> None:
    rng = random.Random(1234)
    manager = LayerManager()
    manager.add_layer_change_listener(lambda event: _assert_invariants(manager))

    for _ in range(400):
        layers = manager.layers
        layer = rng.choice(layers)
        op = rng.randrange(10)
        if op == 0:
            manager.create_drawing_layer()
        elif op == 1:
            manager.create_text_layer()
        elif op == 2:
            manager.delete_layer(layer.id)
        elif op == 3:
            manager.set_layer_visibility(layer.id, rng.random() < 0.5)
        elif op == 4:
            manager.set_layer_locked(layer.id, rng.random() < 0.5)
        elif op == 5:
            manager.move_layer(layer.id, rng.randrange(len(layers) + 1))
        elif op == 6:
            manager.set_active_layer(layer.id)
        elif op == 7:
            manager.add_stroke(layer.id, _stroke())
        elif op == 8:
            manager.merge_layers([l.id for l in rng.sample(layers, min(2, len(layers)))])
        else:
            manager.add_to_selection(layer.id)
        _assert_invariants(manager)
