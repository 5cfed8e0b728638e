"""Attachment package for chat message attachments.

This package validates base64 attachment payloads, sniffs their true
content type and converts them to and from chat message form.

Example:
    >>> from chatattach.attachment import build_message_with_attachments
    >>> build_message_with_attachments(
    ...     "see this",
    ...     [ChatAttachment(mime_type="image/png", file_name="dot.png", content=png_b64)],
    ... )
    'see this\\n\\n![dot.png](data:image/png;base64,...)'

For untrusted inbound input, use the parse path:
    >>> result = await parse_message_with_attachments(text, attachments, log=sink)
    >>> result.images
"""

from chatattach.attachment.constants import (
    DEFAULT_MAX_BYTES,
    AttachmentError,
    AttachmentErrorKind,
    AttachmentSizeError,
    InvalidBase64Error,
    UnsupportedMimeTypeError,
)
from chatattach.attachment.core import (
    LoggerWarnSink,
    WarnLogger,
    build_message_with_attachments,
    parse_message_with_attachments,
)
from chatattach.attachment.mime_validation import sniff_mime_type

__all__ = [
    "AttachmentError",
    "AttachmentErrorKind",
    "AttachmentSizeError",
    "DEFAULT_MAX_BYTES",
    "InvalidBase64Error",
    "LoggerWarnSink",
    "UnsupportedMimeTypeError",
    "WarnLogger",
    "build_message_with_attachments",
    "parse_message_with_attachments",
    "sniff_mime_type",
]
