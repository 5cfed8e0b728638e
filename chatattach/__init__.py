from chatattach.attachment import (
    DEFAULT_MAX_BYTES,
    AttachmentError,
    AttachmentErrorKind,
    AttachmentSizeError,
    InvalidBase64Error,
    LoggerWarnSink,
    UnsupportedMimeTypeError,
    WarnLogger,
    build_message_with_attachments,
    parse_message_with_attachments,
)
from chatattach.codec import AttachmentCodec
from chatattach.config import AttachmentConfig
from chatattach.models import (
    AttachmentType,
    ChatAttachment,
    DroppedAttachment,
    DropReason,
    ParsedImage,
    ParseResult,
)

__all__ = [
    "AttachmentCodec",
    "AttachmentConfig",
    "AttachmentError",
    "AttachmentErrorKind",
    "AttachmentSizeError",
    "AttachmentType",
    "ChatAttachment",
    "DEFAULT_MAX_BYTES",
    "DropReason",
    "DroppedAttachment",
    "InvalidBase64Error",
    "LoggerWarnSink",
    "ParseResult",
    "ParsedImage",
    "UnsupportedMimeTypeError",
    "WarnLogger",
    "build_message_with_attachments",
    "parse_message_with_attachments",
]
