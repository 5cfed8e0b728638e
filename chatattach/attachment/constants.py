"""Attachment size limits and validation errors.

This module provides the size limit constants and the tagged error types
raised for fatal attachment validation failures.

Size Limits:
    The default maximum decoded attachment size is 5,000,000 bytes
    (DEFAULT_MAX_BYTES). It can be overridden per call with ``max_bytes``
    or through ``AttachmentConfig.max_bytes``.
"""

from __future__ import annotations

from enum import Enum

# Default ceiling for the decoded size of a single attachment
DEFAULT_MAX_BYTES = 5_000_000

# Number of leading base64 characters decoded for mime sniffing (48 bytes)
DEFAULT_SNIFF_CHARS = 64


class AttachmentErrorKind(Enum):
    """Kind of a fatal attachment validation failure."""

    INVALID_BASE64 = "invalid_base64"
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    UNSUPPORTED_TYPE = "unsupported_type"


class AttachmentError(ValueError):
    """Base class for fatal attachment validation failures.

    This is a subclass of ValueError so callers that already catch
    ValueError for bad input keep working. Branch on ``kind`` rather than
    on the message text.

    Attributes:
        kind: Which validation failed.
        label: Label of the offending attachment.
    """

    kind: AttachmentErrorKind

    def __init__(self, message: str, label: str) -> None:
        self.label = label
        super().__init__(message)


class InvalidBase64Error(AttachmentError):
    """Raised when attachment content is not valid base64."""

    kind = AttachmentErrorKind.INVALID_BASE64

    @classmethod
    def for_attachment(
        cls, label: str, reason: str = "invalid base64 content"
    ) -> InvalidBase64Error:
        return cls(f"attachment {label}: {reason}", label)


class AttachmentSizeError(AttachmentError):
    """Raised when the decoded attachment size exceeds the configured ceiling.

    Attributes:
        max_bytes: The configured ceiling.
        actual_bytes: The decoded size of the attachment.
    """

    kind = AttachmentErrorKind.SIZE_LIMIT_EXCEEDED

    def __init__(self, message: str, label: str, max_bytes: int, actual_bytes: int) -> None:
        self.max_bytes = max_bytes
        self.actual_bytes = actual_bytes
        super().__init__(message, label)

    @classmethod
    def for_attachment(cls, label: str, max_bytes: int, actual_bytes: int) -> AttachmentSizeError:
        """Create an AttachmentSizeError with a formatted message."""
        message = f"attachment {label}: exceeds size limit ({actual_bytes} > {max_bytes} bytes)"
        return cls(message, label, max_bytes, actual_bytes)


class UnsupportedMimeTypeError(AttachmentError):
    """Raised by the build path when an attachment does not declare an image type.

    Attributes:
        mime_type: The declared (normalized) mime type, or None if absent.
    """

    kind = AttachmentErrorKind.UNSUPPORTED_TYPE

    def __init__(self, message: str, label: str, mime_type: str | None) -> None:
        self.mime_type = mime_type
        super().__init__(message, label)

    @classmethod
    def for_attachment(cls, label: str, mime_type: str | None) -> UnsupportedMimeTypeError:
        declared = f"'{mime_type}'" if mime_type else "none declared"
        message = f"attachment {label}: only image/* mime types are supported ({declared})"
        return cls(message, label, mime_type)
