"""
QR scanning and remote share code retrieval.

These are the only calls that touch images or the network; the async
entry points run the blocking work in a worker thread.
"""

import io
import re
import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import requests
from PIL import Image

import facehair_config as config
from facehair_types import FaceHairFetchError

LOG = logging.getLogger(__name__)

URL_PATTERN = re.compile(r'^https?://')


# ═══════════════════════════════════════════════════════════════
# QR SCANNING
# ═══════════════════════════════════════════════════════════════

def _open_image(source: Any) -> Image.Image:
    """Accept a PIL image, encoded image bytes, or a file path."""
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        return Image.open(io.BytesIO(source))
    return Image.open(Path(source))


def scan_qr_code(source: Any) -> Optional[str]:
    """
    Decode the first QR symbol in an image.

    Returns None when the image holds no readable QR code.
    """
    # zbar is a system library; import it only when scanning
    from pyzbar.pyzbar import decode as qr_decode, ZBarSymbol

    img = _open_image(source)
    results = qr_decode(img.convert('L'), symbols=[ZBarSymbol.QRCODE])
    if not results:
        LOG.debug("No QR code found in image")
        return None
    return results[0].data.decode('utf-8')


async def read_qr_code(source: Any) -> Optional[str]:
    """Async wrapper around scan_qr_code."""
    return await asyncio.to_thread(scan_qr_code, source)


# ═══════════════════════════════════════════════════════════════
# REMOTE FETCH
# ═══════════════════════════════════════════════════════════════

def fetch_token_sync(text: str, proxy: Optional[str] = None,
                     timeout: Optional[float] = None) -> str:
    """
    Resolve a share code that may be a link.

    http(s) URLs are fetched (through the configured proxy prefix) and
    the body is returned; anything else is returned unchanged.
    """
    if not URL_PATTERN.match(text):
        return text

    proxy = config.FETCH_PROXY if proxy is None else proxy
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    url = f"{proxy}{text}" if proxy else text

    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        LOG.error("Error fetching share code from %s: %s", text, e)
        raise FaceHairFetchError(f"Failed to fetch share code from {text}: {e}") from e

    LOG.info("Fetched share code from %s (%d bytes)", text, len(resp.content))
    return resp.text.strip()


async def fetch_token(text: str, proxy: Optional[str] = None,
                      timeout: Optional[float] = None) -> str:
    """Async wrapper around fetch_token_sync."""
    return await asyncio.to_thread(fetch_token_sync, text, proxy, timeout)
