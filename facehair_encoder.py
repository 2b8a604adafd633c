"""
FaceHair Encoder — NARAKA Face/Hair Share Code Encoder
======================================================

Encodes character data into a share code:
  parsed face tree → flat array → JSON → LZMA-alone → header quirk
  → base64 → "NARAKA-FACEHAIR-" prefix

Also renders share codes as QR images (PNG bytes or data URL).
"""

import io
import json
import lzma
import base64
import struct
import logging
from collections.abc import Mapping
from typing import Any, List, Optional
from pathlib import Path

import qrcode

import facehair_config as config
from facehair_types import (
    CODE_PREFIX, COMPRESSION_PRESET, LZMA_HEADER_SIZE, SIZE_LOW_OFFSET,
    RawFaceHair, ParsedFaceHair,
    FaceHairCompressionError, FaceHairPayloadError,
    quirk_header,
)
from facehair_schema import SCHEMA, SCHEMA_SIZE
from facehair_paths import get_by_path

LOG = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# COMPRESSION ENGINE
# ═══════════════════════════════════════════════════════════════

class CompressionEngine:
    """LZMA-alone (.lzma) compression with a known uncompressed size."""

    @staticmethod
    def compress(data: bytes, preset: int = COMPRESSION_PRESET) -> bytes:
        """
        Compress to an LZMA-alone stream.

        liblzma writes "unknown" (all 0xFF) into the size field; the real
        length is patched in so the header carries it like the game does.
        """
        try:
            stream = lzma.compress(data, format=lzma.FORMAT_ALONE, preset=preset)
        except lzma.LZMAError as e:
            raise FaceHairCompressionError(f"LZMA compression failed: {e}") from e

        buf = bytearray(stream)
        buf[SIZE_LOW_OFFSET:LZMA_HEADER_SIZE] = struct.pack('<Q', len(data))
        return bytes(buf)

    @staticmethod
    def decompress(data: bytes) -> bytes:
        """Decompress a standard LZMA-alone stream."""
        decomp = lzma.LZMADecompressor(format=lzma.FORMAT_ALONE)
        try:
            raw = decomp.decompress(data)
        except lzma.LZMAError as e:
            raise FaceHairCompressionError(f"LZMA decompression failed: {e}") from e
        if not decomp.eof:
            raise FaceHairCompressionError(
                "LZMA stream truncated before the end of the payload"
            )
        return raw


# ═══════════════════════════════════════════════════════════════
# FACE TREE → FLAT ARRAY
# ═══════════════════════════════════════════════════════════════

def face_tree_to_array(face_tree: Any) -> List[Any]:
    """
    Flatten a nested face tree into the schema-ordered array.

    Missing, None, broken-path and container values become 0.
    """
    flat: List[Any] = [0] * SCHEMA_SIZE
    for entry in SCHEMA:
        value = get_by_path(face_tree, entry.path)
        if value is None or isinstance(value, Mapping):
            value = 0
        flat[entry.index] = value
    return flat


# ═══════════════════════════════════════════════════════════════
# ENCODER
# ═══════════════════════════════════════════════════════════════

class FaceHairEncoder:
    """
    Share code encoder.

    Usage:
        encoder = FaceHairEncoder()
        code = encoder.encode_parsed_to_code(parsed)
        png = encoder.encode_raw_to_qr_image(raw, output_path="face.png")
    """

    def __init__(self, preset: int = COMPRESSION_PRESET):
        self.preset = preset
        self.compressor = CompressionEngine()

    # ─── Codec stages ─────────────────────────────────────────

    def encode_parsed_to_raw(self, parsed: ParsedFaceHair) -> RawFaceHair:
        """Parsed record → raw record (face tree flattened by schema)."""
        return RawFaceHair(
            face_data=face_tree_to_array(parsed.face_data),
            hair_data=parsed.hair_data,
        )

    def encode_raw_to_code(self, raw: RawFaceHair) -> str:
        """Raw record → share code string."""
        # ── 1. Serialize to compact JSON ──
        raw_bytes = self._serialize(raw)

        # ── 2. Compress ──
        compressed = self.compressor.compress(raw_bytes, self.preset)

        # ── 3. Rewrite header into the share code layout ──
        quirked = quirk_header(compressed)

        # ── 4. Base64 + prefix ──
        code = CODE_PREFIX + base64.b64encode(quirked).decode('ascii')

        LOG.debug("Encoded share code: %dB JSON -> %dB LZMA -> %d chars",
                  len(raw_bytes), len(compressed), len(code))
        return code

    def encode_parsed_to_code(self, parsed: ParsedFaceHair) -> str:
        """Parsed record → share code string."""
        return self.encode_raw_to_code(self.encode_parsed_to_raw(parsed))

    # ─── QR output ────────────────────────────────────────────

    def encode_raw_to_qr_image(self, raw: RawFaceHair,
                               output_path: Optional[str] = None) -> bytes:
        """Render the share code of a raw record as a PNG QR code."""
        png = self._generate_qr_image(self.encode_raw_to_code(raw))
        if output_path:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'wb') as f:
                f.write(png)
            LOG.info("Wrote QR image %s (%d bytes)", output_path, len(png))
        return png

    def encode_raw_to_qr_data_url(self, raw: RawFaceHair) -> str:
        """Render the share code of a raw record as a PNG data URL."""
        png = self.encode_raw_to_qr_image(raw)
        return "data:image/png;base64," + base64.b64encode(png).decode('ascii')

    # ─── Serialization ────────────────────────────────────────

    def _serialize(self, raw: RawFaceHair) -> bytes:
        """Compact JSON, same shape and key order as the game writes."""
        try:
            text = json.dumps(raw.to_dict(), separators=(',', ':'),
                              ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise FaceHairPayloadError(f"Record is not JSON-serializable: {e}") from e
        return text.encode('utf-8')

    def _generate_qr_image(self, payload: str) -> bytes:
        """Generate a PNG image containing the share code."""
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=config.QR_BOX_SIZE,
            border=config.QR_BORDER,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format='PNG')
        return buf.getvalue()


# ═══════════════════════════════════════════════════════════════
# CONVENIENCE FUNCTIONS
# ═══════════════════════════════════════════════════════════════

def encode_parsed(parsed: ParsedFaceHair) -> str:
    """Convenience: parsed record → share code in one call."""
    return FaceHairEncoder().encode_parsed_to_code(parsed)

def encode_raw(raw: RawFaceHair) -> str:
    """Convenience: raw record → share code in one call."""
    return FaceHairEncoder().encode_raw_to_code(raw)
