"""Tests for base64 structure checks and the decoded size guard."""

import base64

import pytest

from chatattach.attachment.base64_validation import (
    decode_head,
    estimate_decoded_bytes,
    is_valid_base64,
    split_data_url,
    validate_base64,
    validate_decoded_size,
)
from chatattach.attachment.constants import AttachmentSizeError, InvalidBase64Error


class TestIsValidBase64:
    """Tests for syntactic base64 validation."""

    @pytest.mark.parametrize("value", ["AAAA", "AAA=", "AA==", "aGVsbG8gd29ybGQ=", "+/+/"])
    def test_valid_strings(self, value: str):
        assert is_valid_base64(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "%not-base64%",
            "AAA",  # missing padding
            "A===",
            "AA=A",  # padding before the end
            "AAAA\n",
            "aGVs bG8=",
            "aGVsbG8-",  # urlsafe alphabet
        ],
    )
    def test_invalid_strings(self, value: str):
        assert is_valid_base64(value) is False

    def test_validate_base64_raises_with_label(self):
        with pytest.raises(InvalidBase64Error, match="attachment dot.png: invalid base64") as exc:
            validate_base64("%%%%", "dot.png")
        assert exc.value.label == "dot.png"

    def test_validate_base64_empty(self):
        with pytest.raises(InvalidBase64Error, match="empty base64 content"):
            validate_base64("", "e.png")


class TestDecodedSize:
    """Tests for decoded length estimation and the size ceiling."""

    @pytest.mark.parametrize("raw", [b"", b"a", b"ab", b"abc", b"abcd", bytes(1000), bytes(1001)])
    def test_estimate_matches_real_decode(self, raw: bytes):
        encoded = base64.b64encode(raw).decode()
        assert estimate_decoded_bytes(encoded) == len(raw)

    def test_limit_is_inclusive(self):
        encoded = base64.b64encode(bytes(300)).decode()
        assert validate_decoded_size(encoded, "at-limit.png", 300) == 300

    def test_one_byte_over_limit(self):
        encoded = base64.b64encode(bytes(301)).decode()
        with pytest.raises(AttachmentSizeError, match="exceeds size limit \\(301 > 300 bytes\\)"):
            validate_decoded_size(encoded, "over.png", 300)

    def test_padding_counts_at_boundary(self):
        """Test that trailing padding is subtracted before comparing."""
        encoded = base64.b64encode(bytes(299)).decode()
        assert encoded.endswith("=")
        assert validate_decoded_size(encoded, "pad.png", 299) == 299


class TestDataUrl:
    """Tests for data URL header stripping."""

    def test_strips_header(self):
        assert split_data_url("data:image/png;base64,AAAA") == ("image/png", "AAAA")

    def test_plain_content_untouched(self):
        assert split_data_url("AAAA") == (None, "AAAA")

    def test_header_without_mime(self):
        assert split_data_url("data:;base64,AAAA") == (None, "AAAA")

    def test_non_base64_data_url_is_not_stripped(self):
        assert split_data_url("data:text/plain,hello") == (None, "data:text/plain,hello")

    def test_header_with_parameters(self):
        assert split_data_url("data:image/png;name=a.png;base64,AAAA") == ("image/png", "AAAA")

    def test_header_with_parameters_and_no_mime(self):
        assert split_data_url("data:;charset=binary;base64,AAAA") == (None, "AAAA")


class TestDecodeHead:
    """Tests for partial decoding used by mime sniffing."""

    def test_decodes_only_leading_quanta(self):
        encoded = base64.b64encode(b"\x89PNG\r\n\x1a\n" + bytes(500)).decode()
        head = decode_head(encoded, 16)
        assert head == b"\x89PNG\r\n\x1a\n" + bytes(4)

    def test_short_payload_fully_decoded(self):
        assert decode_head("JVBERi0xLjQK") == b"%PDF-1.4\n"

    @pytest.mark.parametrize("sniff_chars", [9, 10, 11])
    def test_window_rounded_down_to_whole_groups(self, sniff_chars: int):
        """Test that a window that is not a multiple of 4 still decodes."""
        encoded = base64.b64encode(b"%PDF-1.7 body").decode()
        assert decode_head(encoded, sniff_chars) == b"%PDF-1"

    @pytest.mark.parametrize("sniff_chars", [0, 3, -8])
    def test_window_shorter_than_one_group_rejected(self, sniff_chars: int):
        with pytest.raises(ValueError, match="sniff_chars"):
            decode_head("JVBERi0xLjQK", sniff_chars)
