"""
BrushPresetManager - persistent store for user, recent and favorite presets

System presets are built in and never written to disk. Everything else
lives in one JSON document:

    {
        "user": [ {preset}, ... ],
        "recent": [ "preset_id", ... ],   # most recent first
        "favorite": [ "preset_id", ... ]
    }
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import Config
from ..utils.json_utils import safe_json_load, safe_json_loads, safe_json_save
from .brush_preset import BrushPreset, PresetCategory, create_system_presets
from .brush_properties import BrushProperties

logger = logging.getLogger(__name__)


class BrushPresetManager:
    """
    Manages brush presets.

    Usage:
        manager = BrushPresetManager()
        preset = manager.save_user_preset("Sketch", properties)
        manager.add_to_recent_presets(preset.id)
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path is not None else Config.get_presets_file()
        self._system_presets: List[BrushPreset] = create_system_presets()
        self._user_presets: List[BrushPreset] = []
        self._recent_ids: List[str] = []
        self._favorite_ids: List[str] = []
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ==================== PERSISTENCE ====================

    def _load(self):
        data = safe_json_load(self._path, default={})
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preset file: {self._path}")
            return

        for entry in self._list_field(data, 'user'):
            preset = BrushPreset.from_dict(entry) if isinstance(entry, dict) else None
            if preset is None or preset.is_system_preset:
                continue
            if self._find_user_preset(preset.id) is None:
                self._user_presets.append(preset)

        self._recent_ids = [pid for pid in self._list_field(data, 'recent')
                            if isinstance(pid, str)][:Config.MAX_RECENT_PRESETS]
        self._favorite_ids = [pid for pid in self._list_field(data, 'favorite')
                              if isinstance(pid, str)]
        logger.debug(f"Loaded {len(self._user_presets)} user presets from {self._path}")

    def _list_field(self, data: Dict[str, Any], key: str) -> List[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            logger.warning(f"Ignoring malformed '{key}' entry in {self._path}")
            return []
        return value

    def _save(self) -> bool:
        if not safe_json_save(self._path, self._document()):
            logger.error(f"Could not save brush presets to {self._path}")
            return False
        return True

    # ==================== QUERIES ====================

    def get_system_presets(self) -> List[BrushPreset]:
        return list(self._system_presets)

    def get_user_presets(self) -> List[BrushPreset]:
        return list(self._user_presets)

    def get_recent_presets(self) -> List[BrushPreset]:
        """Recently used presets, most recent first; unknown ids are skipped"""
        return self._resolve(self._recent_ids)

    def get_favorite_presets(self) -> List[BrushPreset]:
        return self._resolve(self._favorite_ids)

    def get_presets_by_category(self, category: PresetCategory) -> List[BrushPreset]:
        if category is PresetCategory.SYSTEM:
            return self.get_system_presets()
        if category is PresetCategory.USER:
            return self.get_user_presets()
        if category is PresetCategory.RECENT:
            return self.get_recent_presets()
        return self.get_favorite_presets()

    def find_preset_by_id(self, preset_id: str) -> Optional[BrushPreset]:
        for preset in self._system_presets:
            if preset.id == preset_id:
                return preset
        return self._find_user_preset(preset_id)

    def search_presets(self, query: str) -> List[BrushPreset]:
        """Presets whose name, description or brush type contains the query"""
        query = query.strip()
        presets = self._system_presets + self._user_presets
        if not query:
            return list(presets)
        return [p for p in presets if p.matches(query)]

    def _find_user_preset(self, preset_id: str) -> Optional[BrushPreset]:
        for preset in self._user_presets:
            if preset.id == preset_id:
                return preset
        return None

    def _resolve(self, preset_ids: List[str]) -> List[BrushPreset]:
        result = []
        for preset_id in preset_ids:
            preset = self.find_preset_by_id(preset_id)
            if preset is not None:
                result.append(preset)
        return result

    # ==================== USER PRESETS ====================

    def save_user_preset(self, name: str, properties: BrushProperties,
                         description: str = "") -> Optional[BrushPreset]:
        """
        Store the given properties as a new user preset.

        Args:
            name: Display name, must not be blank
            properties: Brush settings to store
            description: Optional description

        Returns:
            The new preset, or None if the name is blank, the user preset
            limit is reached or the file could not be written
        """
        if not name.strip():
            logger.warning("Refusing to save a brush preset without a name")
            return None
        if len(self._user_presets) >= Config.MAX_USER_PRESETS:
            logger.warning(f"User preset limit reached ({Config.MAX_USER_PRESETS})")
            return None

        preset = BrushPreset.from_brush_properties(
            f"user_{uuid.uuid4().hex[:8]}", name.strip(), properties.validate(),
            description=description)
        self._user_presets.append(preset)
        if not self._save():
            self._user_presets.pop()
            return None
        logger.info(f"Saved brush preset '{preset.name}' ({preset.id})")
        return preset

    def delete_user_preset(self, preset_id: str) -> bool:
        """Delete a user preset; system presets cannot be deleted"""
        preset = self._find_user_preset(preset_id)
        if preset is None:
            return False
        self._user_presets.remove(preset)
        if preset_id in self._favorite_ids:
            self._favorite_ids.remove(preset_id)
        if preset_id in self._recent_ids:
            self._recent_ids.remove(preset_id)
        return self._save()

    # ==================== RECENT / FAVORITES ====================

    def add_to_recent_presets(self, preset_id: str):
        """
        Move a preset to the front of the recent list.

        Recent tracking is best effort: unknown ids and write failures are
        only logged.
        """
        if self.find_preset_by_id(preset_id) is None:
            logger.debug(f"Not tracking unknown preset as recent: {preset_id}")
            return
        if preset_id in self._recent_ids:
            self._recent_ids.remove(preset_id)
        self._recent_ids.insert(0, preset_id)
        del self._recent_ids[Config.MAX_RECENT_PRESETS:]
        if not safe_json_save(self._path, self._document()):
            logger.debug(f"Could not persist recent presets to {self._path}")

    def add_favorite_preset(self, preset_id: str) -> bool:
        if self.find_preset_by_id(preset_id) is None:
            return False
        if preset_id in self._favorite_ids:
            return True
        self._favorite_ids.append(preset_id)
        return self._save()

    def remove_favorite_preset(self, preset_id: str) -> bool:
        if preset_id not in self._favorite_ids:
            return False
        self._favorite_ids.remove(preset_id)
        return self._save()

    def is_favorite(self, preset_id: str) -> bool:
        return preset_id in self._favorite_ids

    def _document(self) -> Dict[str, Any]:
        return {
            'user': [p.to_dict() for p in self._user_presets],
            'recent': list(self._recent_ids),
            'favorite': list(self._favorite_ids),
        }

    # ==================== IMPORT / EXPORT ====================

    def export_user_presets(self) -> str:
        return json.dumps([p.to_dict() for p in self._user_presets], indent=2)

    def import_user_presets(self, text: str) -> int:
        """
        Add presets from an exported JSON list.

        Invalid entries and ids that already exist are skipped, and the
        user preset limit still applies.

        Returns:
            Number of presets imported
        """
        data = safe_json_loads(text, default=None)
        if not isinstance(data, list):
            logger.warning("Brush preset import is not a JSON list")
            return 0

        imported = 0
        for entry in data:
            if len(self._user_presets) >= Config.MAX_USER_PRESETS:
                logger.warning("User preset limit reached during import")
                break
            preset = BrushPreset.from_dict(entry) if isinstance(entry, dict) else None
            if preset is None or not preset.is_valid():
                continue
            if self.find_preset_by_id(preset.id) is not None:
                continue
            self._user_presets.append(preset.copy_with_name(preset.name, preset.id))
            imported += 1

        if imported:
            self._save()
        logger.info(f"Imported {imported} brush presets")
        return imported

    def clear_user_data(self) -> bool:
        """Drop user presets, recents and favorites"""
        self._user_presets.clear()
        self._recent_ids.clear()
        self._favorite_ids.clear()
        return self._save()


__all__ = ['BrushPresetManager']
