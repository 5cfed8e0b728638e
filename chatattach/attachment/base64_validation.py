"""Base64 structure validation and decoded size estimation.

These checks run on the raw base64 text so that malformed or oversized
payloads are rejected before any byte-level decoding happens.

Example:
    >>> from chatattach.attachment.base64_validation import split_data_url
    >>> split_data_url("data:image/png;base64,iVBORw0KGgo=")
    ('image/png', 'iVBORw0KGgo=')
"""

from __future__ import annotations

import base64
import re

from chatattach.attachment.constants import (
    DEFAULT_SNIFF_CHARS,
    AttachmentSizeError,
    InvalidBase64Error,
)

# Standard alphabet, at most two padding characters and only at the end
_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")

# Media type, optional ;name=value parameters, then the base64 marker
_DATA_URL_RE = re.compile(r"data:([^;,]*)(?:;[^;,=]+=[^;,]*)*;base64,(.*)", re.DOTALL)


def split_data_url(content: str) -> tuple[str | None, str]:
    """Strip a leading ``data:<mime>;base64,`` header from content.

    Returns:
        A ``(mime_type, payload)`` tuple. ``mime_type`` is None when the content
        carries no header or the header names no type.
    """
    match = _DATA_URL_RE.match(content)
    if match is None:
        return None, content
    return match.group(1) or None, match.group(2)


def is_valid_base64(value: str) -> bool:
    """Check that value is well-formed, padded base64 without decoding it."""
    if not value or len(value) % 4 != 0:
        return False
    return _BASE64_RE.fullmatch(value) is not None


def estimate_decoded_bytes(value: str) -> int:
    """Return the decoded byte length of a valid base64 string.

    Every 4 characters encode 3 bytes, each trailing ``=`` removes one byte.
    """
    padding = len(value) - len(value.rstrip("="))
    return len(value) * 3 // 4 - padding


def validate_base64(value: str, label: str) -> None:
    """Raise InvalidBase64Error unless value is well-formed base64."""
    if not value:
        raise InvalidBase64Error.for_attachment(label, "empty base64 content")
    if not is_valid_base64(value):
        raise InvalidBase64Error.for_attachment(label)


def validate_decoded_size(value: str, label: str, max_bytes: int) -> int:
    """Enforce the decoded size ceiling on already validated base64.

    Returns:
        The decoded byte length.

    Raises:
        AttachmentSizeError: If the decoded length exceeds max_bytes.
    """
    size = estimate_decoded_bytes(value)
    if size > max_bytes:
        raise AttachmentSizeError.for_attachment(label, max_bytes, size)
    return size


def decode_head(value: str, sniff_chars: int = DEFAULT_SNIFF_CHARS) -> bytes:
    """Decode only the leading bytes of a valid base64 string for sniffing.

    The window is rounded down to whole 4-character groups.

    Raises:
        ValueError: If the window is shorter than one 4-character group.
    """
    if sniff_chars < 4:
        raise ValueError(f"Invalid sniff_chars: {sniff_chars}. Must be at least 4")
    head = value[: sniff_chars - sniff_chars % 4]
    return base64.b64decode(head, validate=True)
