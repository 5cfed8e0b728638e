import base64
from pathlib import Path

import pytest
from pydantic import ValidationError

from chatattach.attachment import AttachmentSizeError
from chatattach.codec import AttachmentCodec
from chatattach.config import AttachmentConfig
from chatattach.models import ChatAttachment

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class RecordingLog:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


class TestAttachmentConfig:
    """Tests for AttachmentConfig validation."""

    def test_defaults(self) -> None:
        config = AttachmentConfig()
        assert config.max_bytes == 5_000_000
        assert config.sniff_chars == 64

    def test_aliases(self) -> None:
        config = AttachmentConfig.model_validate({"MAX_BYTES": 100, "SNIFF_CHARS": 32})
        assert config.max_bytes == 100
        assert config.sniff_chars == 32

    @pytest.mark.parametrize("max_bytes", [0, -1])
    def test_max_bytes_must_be_positive(self, max_bytes: int) -> None:
        with pytest.raises(ValidationError):
            AttachmentConfig(max_bytes=max_bytes)

    def test_sniff_chars_must_cover_whole_quanta(self) -> None:
        with pytest.raises(ValidationError, match="multiple of 4"):
            AttachmentConfig(sniff_chars=30)

    def test_frozen(self) -> None:
        config = AttachmentConfig()
        with pytest.raises(ValidationError):
            config.max_bytes = 1  # type: ignore[misc]


def test_parse_yaml_config(tmp_path: Path) -> None:
    """Test that a YAML config file is parsed."""
    config_file = tmp_path / "attachments.yml"
    config_file.write_text("MAX_BYTES: 2048\nSNIFF_CHARS: 16\n")

    config = AttachmentConfig.parse_yaml(str(config_file))
    assert config.max_bytes == 2048
    assert config.sniff_chars == 16


def test_parse_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yml"
    config_file.write_text("")
    assert AttachmentConfig.parse_yaml(str(config_file)) == AttachmentConfig()


def test_parse_non_existing_config_file() -> None:
    """Assure that parsing a non-existing config file raises an error and exits application."""
    with pytest.raises(SystemExit):
        AttachmentConfig.parse_yaml("non-existing-file.yml")


class TestAttachmentCodec:
    """Tests for the configured codec entry point."""

    def test_build_uses_configured_limit(self) -> None:
        codec = AttachmentCodec(AttachmentConfig(max_bytes=10))
        content = base64.b64encode(PNG_HEADER + bytes(8)).decode()
        with pytest.raises(AttachmentSizeError, match="16 > 10 bytes"):
            codec.build("x", [ChatAttachment(mime_type="image/png", content=content)])

    def test_build_within_limit(self) -> None:
        codec = AttachmentCodec()
        content = base64.b64encode(PNG_HEADER).decode()
        message = codec.build(
            "hi", [ChatAttachment(mime_type="image/png", file_name="p.png", content=content)]
        )
        assert message == f"hi\n\n![p.png](data:image/png;base64,{content})"

    @pytest.mark.asyncio
    async def test_parse_uses_configured_limit(self) -> None:
        codec = AttachmentCodec(AttachmentConfig(max_bytes=4))
        content = base64.b64encode(PNG_HEADER).decode()
        with pytest.raises(AttachmentSizeError):
            await codec.parse("x", [ChatAttachment(content=content)], log=RecordingLog())

    @pytest.mark.asyncio
    async def test_parse_uses_configured_sniff_window(self) -> None:
        """Test that a narrow sniff window cannot see offset-8 RIFF tags."""
        webp = base64.b64encode(b"RIFF\x24\x00\x00\x00WEBPVP8 ").decode()
        log = RecordingLog()

        wide = await AttachmentCodec().parse("x", [ChatAttachment(content=webp)], log=log)
        assert wide.images[0].mime_type == "image/webp"

        narrow_codec = AttachmentCodec(AttachmentConfig(sniff_chars=8))
        narrow = await narrow_codec.parse("x", [ChatAttachment(content=webp)], log=log)
        assert narrow.images == []
        assert len(log.messages) == 1
        assert "unable to detect" in log.messages[0]
