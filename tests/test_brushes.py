""" Unit tests for brush types, properties and presets. """

import json

import pytest

from vector_ink.brushes.brush_preset import BrushPreset, PresetCategory, create_system_presets
from vector_ink.brushes.brush_properties import BrushProperties
from vector_ink.brushes.brush_type import BRUSH_TRAITS, BrushType, get_brush_traits
from vector_ink.brushes.preset_manager import BrushPresetManager
from vector_ink.config import Config

from conftest import pts


def test_every_brush_type_has_traits() -> None:
    assert set(BRUSH_TRAITS) == set(BrushType)
    assert BrushType.from_name("marker") is BrushType.MARKER
    assert BrushType.from_name(None) is None
    assert not get_brush_traits(BrushType.HIGHLIGHTER).supports_pressure


def test_properties_from_brush_type() -> None:
    props = BrushProperties.from_brush_type(BrushType.PENCIL)
    assert props.size == 2.0
    assert props.hardness == 0.7
    assert props.uses_pressure and props.uses_texture
    assert props.is_default()


def test_validate_clamps_every_field() -> None:
    props = BrushProperties(size=500.0, opacity=2.0, flow=-1.0, pressure_sensitivity=9.0).validate()
    assert props.size == Config.MAX_BRUSH_SIZE
    assert props.opacity == 1.0
    assert props.flow == 0.0
    assert props.pressure_sensitivity == 2.0


def test_final_size_follows_pressure() -> None:
    props = BrushProperties(brush_type=BrushType.PEN, size=10.0, pressure_sensitivity=1.0)
    assert props.final_size(1.0) == 10.0
    assert props.final_size(0.5) == pytest.approx(5.0)
    assert props.final_size(0.0) == Config.MIN_BRUSH_SIZE

    highlighter = BrushProperties.from_brush_type(BrushType.HIGHLIGHTER)
    assert highlighter.final_size(0.1) == highlighter.size


def test_with_pressure_fades_light_strokes() -> None:
    props = BrushProperties(brush_type=BrushType.PEN, size=10.0, opacity=1.0, flow=1.0)
    firm = props.with_pressure(0.8)
    light = props.with_pressure(0.25)
    assert firm.opacity == 1.0
    assert light.opacity == pytest.approx(0.75)
    assert light.size < firm.size


def test_with_texture_only_for_textured_brushes() -> None:
    pen = BrushProperties.from_brush_type(BrushType.PEN)
    assert pen.with_texture(0.9) is pen
    chalk = BrushProperties.from_brush_type(BrushType.CHALK)
    assert chalk.with_texture(1.5).texture_intensity == 1.0


def test_create_stroke_applies_settings() -> None:
    props = BrushProperties.from_brush_type(BrushType.MARKER)
    stroke = props.create_stroke(pts((0, 0), (5, 5)))
    assert stroke.width == props.size
    assert stroke.opacity == pytest.approx(props.opacity * props.flow)
    assert stroke.properties == {'brush_type': 'MARKER'}
    assert not stroke.pressure_enabled


def test_system_presets() -> None:
    presets = create_system_presets()
    assert len(presets) == 15
    assert len({p.id for p in presets}) == 15
    assert all(p.is_system_preset and p.is_valid() for p in presets)
    yellow = next(p for p in presets if p.id == "highlight_yellow")
    assert yellow.color == 0xFFFFFF00
    assert yellow.to_brush_properties().brush_type is BrushType.HIGHLIGHTER


def test_preset_json_round_trip_and_corruption() -> None:
    preset = create_system_presets()[0].copy_with_name("Mine", "user_1")
    assert not preset.is_system_preset
    assert BrushPreset.from_json(preset.to_json()) == preset
    assert BrushPreset.from_json("{") is None
    assert BrushPreset.from_dict({'id': 'x'}) is None


def test_unknown_brush_type_is_invalid() -> None:
    data = create_system_presets()[0].to_dict()
    data['brush_type'] = 'AIRBRUSH'
    preset = BrushPreset.from_dict(data)
    assert preset is not None
    assert not preset.is_valid()
    assert preset.to_brush_properties() is None


def test_preset_manager_user_presets_persist(tmp_path) -> None:
    path = tmp_path / "presets.json"
    manager = BrushPresetManager(path)
    props = BrushProperties.from_brush_type(BrushType.BRUSH)

    preset = manager.save_user_preset("Soft", props, "for shading")
    assert preset is not None
    assert manager.save_user_preset("   ", props) is None

    reloaded = BrushPresetManager(path)
    assert [p.name for p in reloaded.get_user_presets()] == ["Soft"]
    assert reloaded.find_preset_by_id(preset.id) == preset
    assert json.loads(path.read_text(encoding='utf-8'))['user'][0]['id'] == preset.id


def test_preset_manager_enforces_user_limit(tmp_path) -> None:
    manager = BrushPresetManager(tmp_path / "presets.json")
    props = BrushProperties()
    for i in range(Config.MAX_USER_PRESETS):
        assert manager.save_user_preset(f"p{i}", props) is not None
    assert manager.save_user_preset("one too many", props) is None
    assert len(manager.get_user_presets()) == Config.MAX_USER_PRESETS


def test_recent_presets_are_most_recent_first_and_bounded(tmp_path) -> None:
    manager = BrushPresetManager(tmp_path / "presets.json")
    system_ids = [p.id for p in manager.get_system_presets()]
    for preset_id in system_ids:
        manager.add_to_recent_presets(preset_id)
    manager.add_to_recent_presets(system_ids[5])
    manager.add_to_recent_presets("does_not_exist")

    recent = [p.id for p in manager.get_recent_presets()]
    assert len(recent) == Config.MAX_RECENT_PRESETS
    assert recent[0] == system_ids[5]
    assert recent[1] == system_ids[-1]
    assert len(set(recent)) == len(recent)


def test_recent_presets_degrade_silently_when_unwritable(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a folder", encoding='utf-8')
    manager = BrushPresetManager(blocker / "presets.json")
    manager.add_to_recent_presets("pen_fine")
    assert [p.id for p in manager.get_recent_presets()] == ["pen_fine"]


def test_malformed_preset_file_loads_empty(tmp_path) -> None:
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({'user': 5, 'recent': "pen_fine", 'favorite': {'a': 1}}), encoding='utf-8')
    manager = BrushPresetManager(path)
    assert manager.get_user_presets() == []
    assert manager.get_recent_presets() == []
    assert manager.get_favorite_presets() == []

    manager.add_to_recent_presets("pen_fine")
    assert [p.id for p in BrushPresetManager(path).get_recent_presets()] == ["pen_fine"]


def test_favorites_and_deletion(tmp_path) -> None:
    manager = BrushPresetManager(tmp_path / "presets.json")
    preset = manager.save_user_preset("Fav", BrushProperties())
    assert manager.add_favorite_preset(preset.id)
    assert manager.add_favorite_preset("pen_bold")
    assert not manager.add_favorite_preset("missing")
    assert [p.id for p in manager.get_presets_by_category(PresetCategory.FAVORITE)] == [preset.id, "pen_bold"]

    assert manager.delete_user_preset(preset.id)
    assert not manager.is_favorite(preset.id)
    assert not manager.delete_user_preset("pen_bold")
    assert manager.remove_favorite_preset("pen_bold")
    assert manager.get_favorite_presets() == []


def test_search_and_categories(tmp_path) -> None:
    manager = BrushPresetManager(tmp_path / "presets.json")
    names = {p.name for p in manager.search_presets("pencil")}
    assert names == {"2H Pencil", "HB Pencil", "2B Pencil"}
    assert len(manager.search_presets("")) == 15
    assert len(manager.get_presets_by_category(PresetCategory.SYSTEM)) == 15
    assert manager.get_presets_by_category(PresetCategory.USER) == []


def test_export_import(tmp_path) -> None:
    source = BrushPresetManager(tmp_path / "a.json")
    source.save_user_preset("One", BrushProperties())
    source.save_user_preset("Two", BrushProperties.from_brush_type(BrushType.CRAYON))
    exported = source.export_user_presets()

    target = BrushPresetManager(tmp_path / "b.json")
    assert target.import_user_presets(exported) == 2
    assert target.import_user_presets(exported) == 0
    assert target.import_user_presets("not json") == 0
    assert sorted(p.name for p in target.get_user_presets()) == ["One", "Two"]

    assert target.clear_user_data()
    assert target.get_user_presets() == []
