"""
FaceHair Types & Constants — NARAKA Face/Hair Share Code
========================================================

Foundational type definitions, constants, error classes and the header
quirk transforms for the face/hair share code. This module has ZERO
external dependencies beyond the Python standard library.

Share code layout:
  "NARAKA-FACEHAIR-" + base64( quirked LZMA-alone stream )

LZMA-alone header (13 bytes):
  offset 0       : properties byte (lc/lp/pb)
  offset 1..4    : dictionary size (uint32 LE)
  offset 5..12   : uncompressed size (uint64 LE)
  offset 13..    : compressed payload

The share code stores the low 4 bytes of the uncompressed size twice
(offsets 5..8 and 9..12) instead of the full 64-bit field.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any

# ═══════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════

# Text prefix of every share code
CODE_PREFIX = "NARAKA-FACEHAIR-"

# LZMA preset level used for every share code
COMPRESSION_PRESET = 5

# LZMA-alone header geometry
LZMA_HEADER_SIZE = 13
SIZE_LOW_OFFSET = 5     # low 4 bytes of the uncompressed size
SIZE_HIGH_OFFSET = 9    # high 4 bytes (rewritten by the quirk)
SIZE_FIELD_LEN = 4

# Slider values live in [0, 100]; anything above is an identifier
SLIDER_MIN = 0
SLIDER_MAX = 100

# Schema paths that identify the character and are never edited
IDENTITY_PATHS = ('HeroID', 'Version')


# ═══════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ═══════════════════════════════════════════════════════════════

@dataclass
class HairData:
    """
    Hair parameter record. Opaque to the face codec, carried through as-is.

    Wire format (JSON object):
        HeroID      : int
        HairID      : int
        Version     : int
        BaseLevelID : int
        ParamData   : {str: {str: [number, ...]}}
    """
    hero_id: int = 0
    hair_id: int = 0
    version: int = 0
    base_level_id: int = 0
    param_data: Dict[str, Dict[str, List[float]]] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)  # unknown wire keys

    WIRE_KEYS = ('HeroID', 'HairID', 'Version', 'BaseLevelID', 'ParamData')

    def to_dict(self) -> dict:
        """Serialize to the wire shape, keys in wire order."""
        out = {
            'HeroID': self.hero_id,
            'HairID': self.hair_id,
            'Version': self.version,
            'BaseLevelID': self.base_level_id,
            'ParamData': self.param_data,
        }
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> 'HairData':
        """Deserialize from the wire shape."""
        if not isinstance(data, dict):
            raise FaceHairPayloadError(
                f"hairData must be an object, got {type(data).__name__}"
            )
        param_data = data.get('ParamData') or {}
        if not isinstance(param_data, dict):
            raise FaceHairPayloadError("hairData.ParamData must be an object")
        return cls(
            hero_id=data.get('HeroID', 0),
            hair_id=data.get('HairID', 0),
            version=data.get('Version', 0),
            base_level_id=data.get('BaseLevelID', 0),
            param_data=param_data,
            extra={k: v for k, v in data.items() if k not in cls.WIRE_KEYS},
        )


@dataclass
class RawFaceHair:
    """
    Raw record: flat face array + hair data.

    face_data[i] belongs to the schema entry whose index is i.
    """
    face_data: List[float]
    hair_data: HairData = field(default_factory=HairData)

    def to_dict(self) -> dict:
        return {
            'faceData': list(self.face_data),
            'hairData': self.hair_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'RawFaceHair':
        if not isinstance(data, dict):
            raise FaceHairPayloadError(
                f"Payload must be an object, got {type(data).__name__}"
            )
        face = data.get('faceData')
        if not isinstance(face, list):
            raise FaceHairPayloadError("faceData must be an array")
        return cls(face_data=face,
                   hair_data=HairData.from_dict(data.get('hairData', {})))


@dataclass
class ParsedFaceHair:
    """
    Parsed record: nested face tree keyed by schema path segments + hair data.
    """
    face_data: Dict[str, Any] = field(default_factory=dict)
    hair_data: HairData = field(default_factory=HairData)

    def to_dict(self) -> dict:
        return {
            'faceData': self.face_data,
            'hairData': self.hair_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'ParsedFaceHair':
        if not isinstance(data, dict):
            raise FaceHairPayloadError(
                f"Parsed data must be an object, got {type(data).__name__}"
            )
        face = data.get('faceData') or {}
        if not isinstance(face, dict):
            raise FaceHairPayloadError("faceData must be an object")
        return cls(face_data=face,
                   hair_data=HairData.from_dict(data.get('hairData', {})))


# ═══════════════════════════════════════════════════════════════
# ERROR CLASSES
# ═══════════════════════════════════════════════════════════════

class FaceHairError(Exception):
    """Base error for all face/hair share code operations."""
    pass

class FaceHairFormatError(FaceHairError):
    """Malformed share code: bad base64 or header."""
    pass

class FaceHairCompressionError(FaceHairError):
    """Compression or decompression failure."""
    pass

class FaceHairPayloadError(FaceHairError):
    """Decompressed payload is not valid face/hair JSON."""
    pass

class FaceHairFetchError(FaceHairError):
    """Remote share code retrieval failed."""
    pass

class FaceHairQRError(FaceHairError):
    """No readable QR code where one was required."""
    pass

class FaceHairPresetError(FaceHairError):
    """Preset storage error."""
    pass


# ═══════════════════════════════════════════════════════════════
# HEADER QUIRK
# ═══════════════════════════════════════════════════════════════

def quirk_header(stream: bytes) -> bytes:
    """
    Rewrite a standard LZMA-alone stream into the share code layout.

    Bytes 0..8 are copied, the low size half (5..8) is written again at
    9..12, the payload from 13 on is copied. Length is unchanged.
    """
    if len(stream) < LZMA_HEADER_SIZE:
        raise FaceHairFormatError(
            f"LZMA stream needs >={LZMA_HEADER_SIZE} bytes, got {len(stream)}"
        )
    high = stream[SIZE_HIGH_OFFSET:SIZE_HIGH_OFFSET + SIZE_FIELD_LEN]
    if high != b'\x00' * SIZE_FIELD_LEN:
        raise FaceHairFormatError(
            f"Uncompressed size does not fit in 32 bits (high bytes {high.hex()})"
        )

    size_low = stream[SIZE_LOW_OFFSET:SIZE_LOW_OFFSET + SIZE_FIELD_LEN]
    buf = bytearray(len(stream))
    buf[0:SIZE_LOW_OFFSET] = stream[0:SIZE_LOW_OFFSET]
    buf[SIZE_LOW_OFFSET:SIZE_HIGH_OFFSET] = size_low
    buf[SIZE_HIGH_OFFSET:LZMA_HEADER_SIZE] = size_low
    buf[LZMA_HEADER_SIZE:] = stream[LZMA_HEADER_SIZE:]
    return bytes(buf)


def restore_header(data: bytes) -> bytes:
    """
    Inverse of quirk_header: zero the duplicated size half at 9..12.
    """
    if len(data) < LZMA_HEADER_SIZE:
        raise FaceHairFormatError(
            f"Share code payload needs >={LZMA_HEADER_SIZE} bytes, got {len(data)}"
        )
    buf = bytearray(len(data))
    buf[0:SIZE_HIGH_OFFSET] = data[0:SIZE_HIGH_OFFSET]
    # buf[9:13] stays zero
    buf[LZMA_HEADER_SIZE:] = data[LZMA_HEADER_SIZE:]
    return bytes(buf)


def is_slider_value(value: Any) -> bool:
    """True for real numbers in the slider range [0, 100]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return SLIDER_MIN <= value <= SLIDER_MAX


def is_identifier_value(value: Any) -> bool:
    """True for numbers above the slider range (non-slider identifiers)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > SLIDER_MAX
