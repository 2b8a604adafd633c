"""
NARAKA FaceHair — character face/hair share code transcoder
===========================================================

Converts between the flat face array, the nested parsed face tree,
and the "NARAKA-FACEHAIR-" share code (optionally as a QR image).
"""

from facehair_types import (
    CODE_PREFIX, COMPRESSION_PRESET,
    HairData, RawFaceHair, ParsedFaceHair,
    FaceHairError, FaceHairFormatError, FaceHairCompressionError,
    FaceHairPayloadError, FaceHairFetchError, FaceHairQRError,
    quirk_header, restore_header,
)
from facehair_schema import SCHEMA, SchemaEntry
from facehair_encoder import FaceHairEncoder, encode_parsed, encode_raw
from facehair_decoder import FaceHairDecoder, decode_code, decode_code_raw
from facehair_presets import (
    apply_smart_preset, randomize_parsed_data, nullify_parsed_data,
    Preset, PresetStore,
)

__version__ = "1.0.0"
__all__ = [
    'FaceHairEncoder', 'FaceHairDecoder',
    'encode_parsed', 'encode_raw', 'decode_code', 'decode_code_raw',
    'HairData', 'RawFaceHair', 'ParsedFaceHair', 'SCHEMA', 'SchemaEntry',
    'apply_smart_preset', 'randomize_parsed_data', 'nullify_parsed_data',
    'Preset', 'PresetStore',
    'quirk_header', 'restore_header', 'CODE_PREFIX', 'COMPRESSION_PRESET',
    'FaceHairError', 'FaceHairFormatError', 'FaceHairCompressionError',
    'FaceHairPayloadError', 'FaceHairFetchError', 'FaceHairQRError',
]
