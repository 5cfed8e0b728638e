"""Configuration module for chat attachment handling.

This module defines the configuration model and YAML parsing logic.
"""

import sys

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chatattach.attachment.constants import DEFAULT_MAX_BYTES, DEFAULT_SNIFF_CHARS


class StrictBaseModel(BaseModel):
    """Base model with immutable (frozen) configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AttachmentConfig(StrictBaseModel):
    """Limits applied to attachments on both the build and parse paths.

    Attributes:
        max_bytes: Ceiling on the decoded size of each attachment
        sniff_chars: Number of leading base64 characters decoded for mime sniffing
    """

    max_bytes: int = Field(default=DEFAULT_MAX_BYTES, alias="MAX_BYTES", gt=0)
    sniff_chars: int = Field(default=DEFAULT_SNIFF_CHARS, alias="SNIFF_CHARS", gt=0)

    @field_validator("sniff_chars")
    @classmethod
    def validate_sniff_chars(cls, v: int) -> int:
        """Sniff window must cover whole base64 quanta."""
        if v % 4 != 0:
            raise ValueError(f"Invalid sniff_chars: {v}. Must be a multiple of 4")
        return v

    @classmethod
    def parse_yaml(cls, path: str) -> "AttachmentConfig":
        """Parse configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated AttachmentConfig instance

        Raises:
            SystemExit: If config file is not found
        """
        try:
            with open(path, "r") as f:
                return cls.model_validate(yaml.safe_load(f) or {})
        except FileNotFoundError:
            print(f"Config file not found: {path}", file=sys.stderr)
            raise SystemExit(1)
