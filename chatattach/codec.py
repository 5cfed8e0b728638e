"""Configured entry point for building and parsing attachment messages."""

from __future__ import annotations

from collections.abc import Iterable

from chatattach.attachment.core import (
    AttachmentInput,
    WarnLogger,
    build_message_with_attachments,
    parse_message_with_attachments,
)
from chatattach.config import AttachmentConfig
from chatattach.models import ParseResult


class AttachmentCodec:
    """Apply one AttachmentConfig to both the build and parse paths.

    Example:
        >>> codec = AttachmentCodec(AttachmentConfig.parse_yaml("attachments.yml"))
        >>> outbound = codec.build("see this", [attachment])
        >>> inbound = await codec.parse("see this", [attachment], log=sink)
    """

    def __init__(self, config: AttachmentConfig | None = None) -> None:
        self.config = config if config is not None else AttachmentConfig()

    def build(self, text: str, attachments: Iterable[AttachmentInput]) -> str:
        return build_message_with_attachments(
            text, attachments, max_bytes=self.config.max_bytes
        )

    async def parse(
        self, text: str, attachments: Iterable[AttachmentInput], log: WarnLogger
    ) -> ParseResult:
        return await parse_message_with_attachments(
            text,
            attachments,
            log=log,
            max_bytes=self.config.max_bytes,
            sniff_chars=self.config.sniff_chars,
        )
