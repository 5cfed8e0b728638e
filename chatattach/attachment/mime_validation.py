"""MIME type sniffing and acceptance rules.

This module detects the true content type of a payload from its leading
magic bytes, independent of whatever type the sender declared. Detection
uses a static signature table; adding a format means adding an entry.

Example:
    >>> from chatattach.attachment.mime_validation import sniff_mime_type
    >>> sniff_mime_type(b"\\x89PNG\\r\\n\\x1a\\n...")
    'image/png'
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Non-image types a downstream consumer accepts
ACCEPTED_DOCUMENT_MIME_TYPES: frozenset[str] = frozenset({"application/pdf"})

# Magic bytes (file signatures) for common MIME types
# Maps MIME type to a list of possible signatures at offset 0
# Note: RIFF-based formats and ISO-BMFF use offset-aware checks below
MAGIC_BYTES: dict[str, list[bytes]] = {
    # Images
    "image/png": [b"\x89PNG\r\n\x1a\n"],
    "image/jpeg": [b"\xff\xd8\xff"],
    "image/gif": [b"GIF87a", b"GIF89a"],
    "image/bmp": [b"BM"],
    "image/tiff": [b"II\x2a\x00", b"MM\x00\x2a"],  # Little-endian and big-endian TIFF
    "image/x-icon": [b"\x00\x00\x01\x00", b"\x00\x00\x02\x00"],  # ICO and CUR
    # Documents
    "application/pdf": [b"%PDF"],
    "application/zip": [b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08"],
    "application/gzip": [b"\x1f\x8b"],
    "application/x-rar-compressed": [b"Rar!\x1a\x07"],
    "application/x-7z-compressed": [b"7z\xbc\xaf\x27\x1c"],
    # Audio
    "audio/mpeg": [b"\xff\xfb", b"\xff\xfa", b"\xff\xf3", b"\xff\xf2", b"ID3"],  # MP3
    "audio/ogg": [b"OggS"],
    "audio/flac": [b"fLaC"],
    # Video
    "video/webm": [b"\x1a\x45\xdf\xa3"],
    # Other
    "application/wasm": [b"\x00asm"],
}

# RIFF containers: format tag at offset 8
RIFF_FORMATS: dict[bytes, str] = {
    b"WEBP": "image/webp",
    b"WAVE": "audio/wav",
    b"AVI ": "video/avi",
}

# ISO-BMFF containers: major brand at offset 8 of the ftyp box
FTYP_BRANDS: dict[bytes, str] = {
    b"avif": "image/avif",
    b"avis": "image/avif",
    b"heic": "image/heic",
    b"heix": "image/heic",
    b"mif1": "image/heif",
    b"msf1": "image/heif",
}

# Unknown ftyp brands are treated as generic MP4 video
FTYP_FALLBACK_MIME_TYPE = "video/mp4"


def normalize_mime_type(mime_type: str | None) -> str | None:
    """Lowercase a mime type and drop any parameters.

    Returns None for missing or blank values so they count as undeclared.
    """
    if not mime_type:
        return None
    base = mime_type.split(";", 1)[0].strip().lower()
    return base or None


def is_image_mime_type(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def is_accepted_mime_type(mime_type: str | None) -> bool:
    """Check whether a downstream consumer accepts this mime type."""
    return is_image_mime_type(mime_type) or mime_type in ACCEPTED_DOCUMENT_MIME_TYPES


def _sniff_riff(head: bytes) -> str | None:
    """Detect RIFF-based formats.

    RIFF files have structure: RIFF + 4-byte size + format tag (4 bytes at offset 8)
    """
    if len(head) < 12 or head[:4] != b"RIFF":
        return None
    return RIFF_FORMATS.get(head[8:12])


def _sniff_ftyp(head: bytes) -> str | None:
    """Detect ISO-BMFF formats (HEIC, AVIF, MP4) from the ftyp box.

    The box starts with a 4-byte big-endian size followed by "ftyp" and the
    4-byte major brand.
    """
    if len(head) < 12 or head[4:8] != b"ftyp":
        return None
    return FTYP_BRANDS.get(head[8:12], FTYP_FALLBACK_MIME_TYPE)


def sniff_mime_type(head: bytes) -> str | None:
    """Detect the mime type of a payload from its leading bytes.

    Args:
        head: The first decoded bytes of the payload. A few dozen bytes are
            enough for every signature in the table.

    Returns:
        The detected mime type, or None if no signature matches.
    """
    if not head:
        return None

    detected = _sniff_riff(head) or _sniff_ftyp(head)
    if detected is None:
        for mime_type, signatures in MAGIC_BYTES.items():
            if any(head.startswith(signature) for signature in signatures):
                detected = mime_type
                break

    logger.debug("Sniffed mime type %s from leading bytes %s", detected, head[:16].hex())
    return detected
