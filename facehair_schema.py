"""
FaceHair Schema — flat face array layout
========================================

Every addressable scalar of the face data, in array order. The position
of a path in FACE_PATHS is its index in the flat faceData array.

Top-level entries are identifiers (hero, version, preset part ids);
everything under ParamData is a slider in [0, 100].
"""

from dataclasses import dataclass
from typing import List, Iterator, Optional

from facehair_types import FaceHairError, IDENTITY_PATHS


@dataclass(frozen=True)
class SchemaEntry:
    """One face data field: slash-delimited path + flat array index."""
    path: str
    index: int


FACE_PATHS = (
    # Identity / part selection
    'HeroID',
    'Version',
    'FaceID',
    'SkinToneID',
    'MakeupID',
    'EyebrowStyleID',
    'PupilStyleID',
    'TattooID',
    'ScarID',
    'BeardID',

    # Face shape
    'ParamData/Face/Width',
    'ParamData/Face/Length',
    'ParamData/Face/Roundness',
    'ParamData/Forehead/Height',
    'ParamData/Forehead/Width',
    'ParamData/Forehead/Slope',
    'ParamData/Cheeks/Height',
    'ParamData/Cheeks/Width',
    'ParamData/Cheeks/Fullness',
    'ParamData/Jaw/Width',
    'ParamData/Jaw/Angle',
    'ParamData/Jaw/Height',
    'ParamData/Chin/Width',
    'ParamData/Chin/Length',
    'ParamData/Chin/Protrusion',

    # Eyebrows
    'ParamData/Eyebrows/Height',
    'ParamData/Eyebrows/Spacing',
    'ParamData/Eyebrows/Angle',
    'ParamData/Eyebrows/Thickness',

    # Eyes
    'ParamData/Eyes/Size',
    'ParamData/Eyes/Height',
    'ParamData/Eyes/Spacing',
    'ParamData/Eyes/Angle',
    'ParamData/Eyes/Depth',
    'ParamData/Eyes/Left',
    'ParamData/Eyes/Right',
    'ParamData/Eyes/Lid/Upper',
    'ParamData/Eyes/Lid/Lower',
    'ParamData/Eyes/Pupil/Size',
    'ParamData/Eyes/Pupil/Color',

    # Nose
    'ParamData/Nose/Height',
    'ParamData/Nose/Length',
    'ParamData/Nose/Bridge',
    'ParamData/Nose/Tip',
    'ParamData/Nose/Nostril/Width',
    'ParamData/Nose/Nostril/Height',

    # Mouth
    'ParamData/Mouth/Width',
    'ParamData/Mouth/Height',
    'ParamData/Mouth/Corner',
    'ParamData/Mouth/Lip/Upper',
    'ParamData/Mouth/Lip/Lower',

    # Ears
    'ParamData/Ears/Size',
    'ParamData/Ears/Height',
    'ParamData/Ears/Angle',

    # Colors & makeup intensity
    'ParamData/Color/Skin',
    'ParamData/Color/Lip',
    'ParamData/Color/Eyebrow',
    'ParamData/Color/Makeup',
    'ParamData/Makeup/Intensity',
    'ParamData/Tattoo/Intensity',
)

SCHEMA: List[SchemaEntry] = [
    SchemaEntry(path=path, index=i) for i, path in enumerate(FACE_PATHS)
]

SCHEMA_SIZE = len(SCHEMA)


def iter_editable() -> Iterator[SchemaEntry]:
    """Schema entries a preset operation may write (identity paths skipped)."""
    for entry in SCHEMA:
        if entry.path in IDENTITY_PATHS:
            continue
        yield entry


def validate_schema(schema: Optional[List[SchemaEntry]] = None) -> None:
    """
    Check the schema invariants: unique paths, indices 0..N-1, and no
    path that is also a prefix (container) of another path.
    """
    schema = SCHEMA if schema is None else schema

    indices = sorted(e.index for e in schema)
    if indices != list(range(len(schema))):
        raise FaceHairError("Schema indices must be unique and contiguous from 0")

    paths = [e.path for e in schema]
    if len(set(paths)) != len(paths):
        raise FaceHairError("Schema paths must be unique")

    leaves = set(paths)
    for path in paths:
        parts = path.split('/')
        for depth in range(1, len(parts)):
            prefix = '/'.join(parts[:depth])
            if prefix in leaves:
                raise FaceHairError(f"Schema path {prefix!r} is both a leaf and a container")
