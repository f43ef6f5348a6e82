"""
Image URL validation used by the favicon fallback probe.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import httpx
import structlog

logger = structlog.get_logger(__name__)

# Content types accepted as images, with their usual file extensions.
IMAGE_CONTENT_TYPES: Dict[str, Tuple[str, ...]] = {
    "image/avif": (".avif",),
    "image/bmp": (".bmp",),
    "image/gif": (".gif",),
    "image/heic": (".heic",),
    "image/heif": (".heif",),
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "image/svg+xml": (".svg",),
    "image/tiff": (".tif", ".tiff"),
    "image/vnd.microsoft.icon": (".ico",),
    "image/webp": (".webp",),
    "image/x-icon": (".ico",),
    "image/x-windows-bmp": (".bmp",),
}

# Leading bytes of the image formats we can recognise without decoding.
_SIGNATURES: Tuple[Tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"BM", "image/bmp"),
)


def sniff_content_type(data: bytes) -> Optional[str]:
    """Guess an image content type from the first bytes of ``data``."""
    for signature, content_type in _SIGNATURES:
        if data.startswith(signature):
            return content_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def is_image_content_type(content_type: str) -> bool:
    """Check whether a Content-Type header value names a known image type."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in IMAGE_CONTENT_TYPES


def is_valid_image(url: str, *, client: Optional[httpx.Client] = None, timeout: float = 5.0) -> bool:
    """Fetch ``url`` and report whether it serves a recognised image.

    The declared Content-Type wins when it is an image type; otherwise the
    body is sniffed. Any network or HTTP error means "not an image".
    """
    if not url:
        return False

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = http.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.debug("Image probe failed", url=url, error=str(e))
        return False
    finally:
        if owns_client:
            http.close()

    declared = response.headers.get("content-type", "")
    if declared and is_image_content_type(declared):
        return bool(response.content)

    sniffed = sniff_content_type(response.content)
    if sniffed is None:
        logger.debug("Image probe returned non-image content", url=url, content_type=declared)
        return False
    return True
