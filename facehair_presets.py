"""
Preset operations over parsed face data.

- apply_smart_preset: copy slider values (0..100) from a preset
- randomize_parsed_data: random slider values
- nullify_parsed_data: zero every slider

All three walk the face schema, skip HeroID and Version, leave
hair_data alone, and return a new record without touching the input.
Values above 100 are part identifiers, not sliders, and are kept.

PresetStore keeps named presets as JSON files on disk.
"""

import copy
import json
import time
import uuid
import random
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import facehair_config as config
from facehair_types import (
    ParsedFaceHair, FaceHairPresetError, FaceHairPayloadError,
    is_slider_value, is_identifier_value,
)
from facehair_schema import iter_editable
from facehair_paths import get_by_path, set_by_path

LOG = logging.getLogger(__name__)


def _fresh_copy(current: ParsedFaceHair) -> ParsedFaceHair:
    state = copy.deepcopy(current)
    if state.face_data is None:
        state.face_data = {}
    return state


def apply_smart_preset(current: ParsedFaceHair, preset: ParsedFaceHair) -> ParsedFaceHair:
    """
    Apply a preset onto the current state.

    Only slider values (numbers in 0..100) are copied from the preset;
    every other field keeps the current value.
    """
    state = _fresh_copy(current)
    for entry in iter_editable():
        value = get_by_path(preset.face_data, entry.path)
        if is_slider_value(value):
            set_by_path(state.face_data, entry.path, value)
    return state


def randomize_parsed_data(current: ParsedFaceHair,
                          rng: Optional[random.Random] = None) -> ParsedFaceHair:
    """Set every slider to a random integer in [0, 100]."""
    rng = rng or random
    state = _fresh_copy(current)
    for entry in iter_editable():
        if is_identifier_value(get_by_path(state.face_data, entry.path)):
            continue
        set_by_path(state.face_data, entry.path, rng.randint(0, 100))
    return state


def nullify_parsed_data(current: ParsedFaceHair) -> ParsedFaceHair:
    """Set every slider to 0."""
    state = _fresh_copy(current)
    for entry in iter_editable():
        if is_identifier_value(get_by_path(state.face_data, entry.path)):
            continue
        set_by_path(state.face_data, entry.path, 0)
    return state


# ═══════════════════════════════════════════════════════════════
# PRESET STORE
# ═══════════════════════════════════════════════════════════════

@dataclass
class Preset:
    """A named, saved parsed record."""
    id: str
    name: str
    data: ParsedFaceHair
    created_at: int  # epoch milliseconds

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'data': self.data.to_dict(),
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Preset':
        try:
            return cls(
                id=data['id'],
                name=data['name'],
                data=ParsedFaceHair.from_dict(data['data']),
                created_at=int(data['createdAt']),
            )
        except (KeyError, TypeError, ValueError, FaceHairPayloadError) as e:
            raise FaceHairPresetError(f"Malformed preset: {e}") from e


class PresetStore:
    """Presets stored as <directory>/<id>.json."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else config.PRESETS_DIR

    def _path_for(self, preset_id: str) -> Path:
        # ids are uuid4 strings; anything else could escape the directory
        try:
            uuid.UUID(preset_id)
        except ValueError as e:
            raise FaceHairPresetError(f"Invalid preset id: {preset_id!r}") from e
        return self.directory / f"{preset_id}.json"

    def list(self) -> List[Preset]:
        """All presets, newest first."""
        if not self.directory.exists():
            return []
        presets = []
        for f in self.directory.glob("*.json"):
            try:
                presets.append(Preset.from_dict(json.loads(f.read_text(encoding="utf-8"))))
            except (OSError, ValueError, FaceHairPresetError) as e:
                LOG.warning("Skipping unreadable preset %s: %s", f, e)
        presets.sort(key=lambda p: p.created_at, reverse=True)
        return presets

    def get(self, preset_id: str) -> Optional[Preset]:
        p = self._path_for(preset_id)
        if not p.exists():
            return None
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise FaceHairPresetError(f"Unreadable preset {preset_id}: {e}") from e
        return Preset.from_dict(data)

    def save(self, name: str, data: ParsedFaceHair) -> Preset:
        """Store a deep copy of data under a new id."""
        name = name.strip()
        if not name:
            raise FaceHairPresetError("Preset name must not be empty")

        preset = Preset(
            id=str(uuid.uuid4()),
            name=name,
            data=copy.deepcopy(data),
            created_at=int(time.time() * 1000),
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path_for(preset.id).write_text(
            json.dumps(preset.to_dict(), ensure_ascii=False), encoding="utf-8"
        )
        LOG.info("Saved preset %r as %s", preset.name, preset.id)
        return preset

    def delete(self, preset_id: str) -> bool:
        """Remove a preset. Returns False if it did not exist."""
        p = self._path_for(preset_id)
        if not p.exists():
            return False
        p.unlink()
        LOG.info("Deleted preset %s", preset_id)
        return True
