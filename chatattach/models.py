"""Data models for chat attachments and parse results."""

import typing as t
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AttachmentType(str, Enum):
    """Tag describing how the sender classified an attachment."""

    IMAGE = "image"
    FILE = "file"


class DropReason(str, Enum):
    """Why an inbound attachment was left out of a parse result."""

    UNSUPPORTED_TYPE = "unsupported_type"
    UNDETECTABLE_TYPE = "undetectable_type"


class WireModel(BaseModel):
    """Immutable model accepting both wire (camelCase) and Python field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ChatAttachment(WireModel):
    """An attachment supplied alongside a chat message.

    Attributes:
        type: Sender's classification of the attachment
        mime_type: Declared content type, if any
        file_name: Display name used in markup and log messages
        content: Base64 payload, optionally prefixed with ``data:<mime>;base64,``
    """

    type: t.Optional[AttachmentType] = Field(default=None, alias="type")
    mime_type: t.Optional[str] = Field(default=None, alias="mimeType")
    file_name: t.Optional[str] = Field(default=None, alias="fileName")
    content: str = Field(alias="content")

    def label(self, position: int) -> str:
        """Return the name used for this attachment in markup and messages.

        Args:
            position: 1-based position of the attachment in its input list
        """
        if self.file_name:
            return self.file_name
        if self.type is not None:
            return self.type.value
        return f"attachment-{position}"


class ParsedImage(WireModel):
    """An accepted inbound payload, ready to forward downstream.

    Attributes:
        mime_type: Resolved content type, always an image type or PDF
        data: Base64 payload without any data URL header
    """

    mime_type: str = Field(alias="mimeType")
    data: str = Field(alias="data")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class DroppedAttachment(WireModel):
    """An inbound attachment that was omitted from a parse result.

    Attributes:
        label: Name of the attachment as used in the warning
        mime_type: The mime type that was rejected, None if none was detected
        reason: Why the attachment was dropped
    """

    label: str
    mime_type: t.Optional[str] = Field(default=None, alias="mimeType")
    reason: DropReason


class ParseResult(WireModel):
    """Outcome of parsing an inbound message.

    Attributes:
        message: The input text, unchanged
        images: Accepted payloads in their original relative order
        dropped: Omitted attachments in their original relative order
    """

    message: str
    images: list[ParsedImage] = Field(default_factory=list)
    dropped: list[DroppedAttachment] = Field(default_factory=list)
