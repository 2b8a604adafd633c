"""
FaceHair Decoder — NARAKA Face/Hair Share Code Decoder
======================================================

Decodes share codes back to character data:
  prefix strip → base64 → header restore → LZMA-alone → JSON
  → raw record → parsed face tree

Share codes can also arrive as QR images, or as links whose body is
the share code; both are resolved before decoding.
"""

import json
import base64
import binascii
import logging
from typing import Any, Dict, List

from facehair_types import (
    CODE_PREFIX,
    RawFaceHair, ParsedFaceHair,
    FaceHairFormatError, FaceHairPayloadError, FaceHairQRError,
    restore_header,
)
from facehair_schema import SCHEMA
from facehair_paths import set_by_path
from facehair_encoder import CompressionEngine
from facehair_reader import read_qr_code, fetch_token

LOG = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# FLAT ARRAY → FACE TREE
# ═══════════════════════════════════════════════════════════════

def face_array_to_tree(flat: List[Any]) -> Dict[str, Any]:
    """
    Expand a schema-ordered flat array into a nested face tree.

    Indices past the end of the array, and None values, become 0.
    """
    tree: Dict[str, Any] = {}
    for entry in SCHEMA:
        value = flat[entry.index] if entry.index < len(flat) else None
        set_by_path(tree, entry.path, 0 if value is None else value)
    return tree


def strip_prefix(code: str) -> str:
    """Drop surrounding whitespace and the share code prefix, if present."""
    code = code.strip()
    if code.startswith(CODE_PREFIX):
        code = code[len(CODE_PREFIX):]
    return code


# ═══════════════════════════════════════════════════════════════
# DECODER
# ═══════════════════════════════════════════════════════════════

class FaceHairDecoder:
    """
    Share code decoder.

    Usage:
        decoder = FaceHairDecoder()
        parsed = decoder.decode_code_to_parsed("NARAKA-FACEHAIR-XQAAgA...")
        raw = await decoder.decode_qr_image_to_raw("face.png")
    """

    def __init__(self):
        self.compressor = CompressionEngine()

    # ─── Codec stages ─────────────────────────────────────────

    def decode_raw_to_parsed(self, raw: RawFaceHair) -> ParsedFaceHair:
        """Raw record → parsed record (flat array expanded by schema)."""
        return ParsedFaceHair(
            face_data=face_array_to_tree(raw.face_data),
            hair_data=raw.hair_data,
        )

    def decode_code_to_raw(self, code: str) -> RawFaceHair:
        """Share code (with or without prefix) → raw record."""
        # ── 1. Strip prefix, whitespace, restore padding ──
        body = "".join(strip_prefix(code).split())
        body += "=" * (-len(body) % 4)

        # ── 2. Base64 ──
        try:
            quirked = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FaceHairFormatError(f"Share code is not valid base64: {e}") from e

        # ── 3. Restore standard LZMA-alone header ──
        stream = restore_header(quirked)

        # ── 4. Decompress ──
        raw_bytes = self.compressor.decompress(stream)

        # ── 5. Parse JSON ──
        try:
            payload = json.loads(raw_bytes.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise FaceHairPayloadError(f"Share code payload is not valid JSON: {e}") from e

        raw = RawFaceHair.from_dict(payload)
        LOG.debug("Decoded share code: %d chars -> %dB JSON, %d face values",
                  len(code), len(raw_bytes), len(raw.face_data))
        return raw

    def decode_code_to_parsed(self, code: str) -> ParsedFaceHair:
        """Share code → parsed record."""
        return self.decode_raw_to_parsed(self.decode_code_to_raw(code))

    # ─── Image / link sources ─────────────────────────────────

    async def resolve_code(self, text: str) -> RawFaceHair:
        """Decode a share code that may be a link to a share code."""
        return self.decode_code_to_raw(await fetch_token(text.strip()))

    async def decode_qr_image_to_raw(self, image: Any) -> RawFaceHair:
        """QR image (path, bytes, or PIL image) → raw record."""
        text = await read_qr_code(image)
        if not text:
            raise FaceHairQRError("Could not read QR code from image")
        return await self.resolve_code(text)

    async def decode_qr_image_to_parsed(self, image: Any) -> ParsedFaceHair:
        """QR image → parsed record."""
        return self.decode_raw_to_parsed(await self.decode_qr_image_to_raw(image))


# ═══════════════════════════════════════════════════════════════
# CONVENIENCE FUNCTIONS
# ═══════════════════════════════════════════════════════════════

def decode_code(code: str) -> ParsedFaceHair:
    """Convenience: share code → parsed record in one call."""
    return FaceHairDecoder().decode_code_to_parsed(code)

def decode_code_raw(code: str) -> RawFaceHair:
    """Convenience: share code → raw record in one call."""
    return FaceHairDecoder().decode_code_to_raw(code)
