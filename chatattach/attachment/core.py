"""Building and parsing chat messages that carry attachments.

The build path embeds image attachments into an outbound message as
markdown images pointing at data URLs. The parse path turns inbound
attachments into a validated, ordered list of payloads a downstream
consumer accepts.

Both paths treat malformed base64 and oversized payloads as fatal for the
whole call. On the parse path, unsupported or undetectable content types
only drop the affected attachment and emit one warning through the
caller-supplied ``log``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, Union

from chatattach.attachment.base64_validation import (
    decode_head,
    split_data_url,
    validate_base64,
    validate_decoded_size,
)
from chatattach.attachment.constants import (
    DEFAULT_MAX_BYTES,
    DEFAULT_SNIFF_CHARS,
    UnsupportedMimeTypeError,
)
from chatattach.attachment.mime_validation import (
    is_accepted_mime_type,
    is_image_mime_type,
    normalize_mime_type,
    sniff_mime_type,
)
from chatattach.models import (
    ChatAttachment,
    DroppedAttachment,
    DropReason,
    ParsedImage,
    ParseResult,
)

logger = logging.getLogger(__name__)

AttachmentInput = Union[ChatAttachment, Mapping[str, Any]]

_WHITESPACE_RE = re.compile(r"\s+")
_LABEL_SPECIAL_RE = re.compile(r"[\\\[\]()]")


class WarnLogger(Protocol):
    """Capability receiving one warning per recoverable attachment issue."""

    def warn(self, message: str) -> None: ...


class LoggerWarnSink:
    """Route parse warnings into a standard library logger.

    Example:
        >>> sink = LoggerWarnSink(logging.getLogger("gateway.attachments"))
        >>> await parse_message_with_attachments(text, attachments, log=sink)
    """

    def __init__(self, target: logging.Logger) -> None:
        self.target = target

    def warn(self, message: str) -> None:
        self.target.warning(message)


def _markdown_label(label: str) -> str:
    """Make a label safe to use as markdown image alt text."""
    return _LABEL_SPECIAL_RE.sub(r"\\\g<0>", _WHITESPACE_RE.sub("_", label))


def _coerce_attachments(attachments: Iterable[AttachmentInput]) -> list[ChatAttachment]:
    """Validate mapping inputs into ChatAttachment before any processing starts."""
    return [
        item if isinstance(item, ChatAttachment) else ChatAttachment.model_validate(item)
        for item in attachments
    ]


def build_message_with_attachments(
    text: str,
    attachments: Iterable[AttachmentInput],
    *,
    max_bytes: int | None = None,
) -> str:
    """Append image attachments to a message as inline data URLs.

    Every attachment is validated before anything is rendered, so the call
    either returns the complete message or raises without partial output.

    Args:
        text: Message text, kept verbatim at the start of the result. Blank
            text is dropped so the result starts with the first block.
        attachments: Attachments to embed, in display order.
        max_bytes: Ceiling on the decoded size of each attachment.
            Defaults to DEFAULT_MAX_BYTES.

    Returns:
        The text followed by one ``![<label>](data:<mime>;base64,<content>)``
        block per attachment, separated by blank lines.

    Raises:
        UnsupportedMimeTypeError: If an attachment does not declare an image type.
        InvalidBase64Error: If an attachment's content is not valid base64.
        AttachmentSizeError: If an attachment's decoded size exceeds max_bytes.
    """
    limit = DEFAULT_MAX_BYTES if max_bytes is None else max_bytes
    blocks: list[str] = []

    for position, attachment in enumerate(_coerce_attachments(attachments), start=1):
        label = attachment.label(position)
        mime_type = normalize_mime_type(attachment.mime_type)
        if not is_image_mime_type(mime_type):
            raise UnsupportedMimeTypeError.for_attachment(label, mime_type)

        # Rendered verbatim, so surrounding whitespace fails base64 validation
        content = attachment.content
        validate_base64(content, label)
        validate_decoded_size(content, label, limit)
        blocks.append(
            f"![{_markdown_label(label)}](data:{attachment.mime_type};base64,{content})"
        )

    if not blocks:
        return text
    return "\n\n".join([text, *blocks] if text.strip() else blocks)


def _resolve_attachment(
    label: str,
    declared: str | None,
    sniffed: str | None,
    data: str,
    log: WarnLogger,
) -> ParsedImage | DroppedAttachment:
    """Decide the effective mime type of one attachment.

    Sniffed types win over declared ones. Emits at most one warning.
    """
    if sniffed is not None and is_accepted_mime_type(sniffed):
        if declared is not None and declared != sniffed:
            log.warn(
                f"attachment {label}: mime mismatch ({declared} -> {sniffed}), using sniffed type"
            )
        return ParsedImage(mime_type=sniffed, data=data)

    candidate = sniffed or declared
    if candidate is None:
        log.warn(f"attachment {label}: unable to detect accepted mime type, dropping")
        return DroppedAttachment(label=label, reason=DropReason.UNDETECTABLE_TYPE)

    if not is_accepted_mime_type(candidate):
        log.warn(f"attachment {label}: non-accepted mime type {candidate}, dropping")
        return DroppedAttachment(
            label=label, mime_type=candidate, reason=DropReason.UNSUPPORTED_TYPE
        )

    return ParsedImage(mime_type=candidate, data=data)


async def parse_message_with_attachments(
    text: str,
    attachments: Iterable[AttachmentInput],
    *,
    log: WarnLogger,
    max_bytes: int | None = None,
    sniff_chars: int = DEFAULT_SNIFF_CHARS,
) -> ParseResult:
    """Normalize inbound attachments into payloads a consumer accepts.

    Attachments are handled in input order. A ``data:<mime>;base64,`` header
    is stripped from the content, and its mime type is used when none was
    declared. The true type is then sniffed from the leading bytes.

    Args:
        text: Message text, returned unchanged.
        attachments: Inbound attachments.
        log: Receives one warning per dropped or re-typed attachment.
        max_bytes: Ceiling on the decoded size of each attachment.
            Defaults to DEFAULT_MAX_BYTES.
        sniff_chars: Number of leading base64 characters decoded for sniffing.

    Returns:
        The unchanged text with accepted images and dropped attachments, each
        in their original relative order.

    Raises:
        InvalidBase64Error: If any attachment's content is not valid base64.
        AttachmentSizeError: If any attachment's decoded size exceeds max_bytes.
    """
    limit = DEFAULT_MAX_BYTES if max_bytes is None else max_bytes
    images: list[ParsedImage] = []
    dropped: list[DroppedAttachment] = []

    for position, attachment in enumerate(_coerce_attachments(attachments), start=1):
        label = attachment.label(position)
        header_mime, payload = split_data_url(attachment.content.strip())
        declared = normalize_mime_type(attachment.mime_type) or normalize_mime_type(header_mime)

        validate_base64(payload, label)
        validate_decoded_size(payload, label, limit)
        sniffed = sniff_mime_type(decode_head(payload, sniff_chars))

        outcome = _resolve_attachment(label, declared, sniffed, payload, log)
        if isinstance(outcome, ParsedImage):
            logger.debug("Accepted attachment %s as %s", label, outcome.mime_type)
            images.append(outcome)
        else:
            dropped.append(outcome)

    return ParseResult(message=text, images=images, dropped=dropped)
