"""Unit tests for header-safe reason encoding."""

from __future__ import annotations

import pytest

from error_mapping.core.security.header_safe import (
    BASE64_PREFIX,
    decode_header_safe,
    make_header_safe,
)


class TestMakeHeaderSafe:
    """Tests for make_header_safe."""

    def test_none_passes_through(self):
        """Absent input stays absent."""
        assert make_header_safe(None) is None

    def test_ascii_unchanged(self):
        """ASCII text is returned as is."""
        assert make_header_safe("00001 - Invalid Merchant ID") == "00001 - Invalid Merchant ID"

    def test_empty_string_unchanged(self):
        """Empty string is ASCII."""
        assert make_header_safe("") == ""

    def test_latin_letter_encoded_without_padding(self):
        """Two UTF-8 bytes C3 91 encode to w5E with padding stripped."""
        assert make_header_safe("Ñ") == "base64:w5E"

    def test_cyrillic_letter_encoded(self):
        """Cyrillic text is base64 encoded."""
        assert make_header_safe("ы") == "base64:0Ys"

    def test_mixed_text_encoded_entirely(self):
        """One non-ASCII character encodes the whole value."""
        encoded = make_header_safe("Карта 4242 declined")

        assert encoded.startswith(BASE64_PREFIX)
        assert encoded.isascii()
        assert "=" not in encoded


class TestDecodeHeaderSafe:
    """Tests for decode_header_safe."""

    @pytest.mark.parametrize(
        "text",
        [None, "", "00001", "Ñ", "ы", "Недостаточно средств", "déclinée 💳", "ab"],
    )
    def test_round_trip(self, text):
        """Decoding reverses encoding."""
        assert decode_header_safe(make_header_safe(text)) == text

    def test_unprefixed_value_returned(self):
        """Plain values are not decoded."""
        assert decode_header_safe("code = 42") == "code = 42"

    def test_invalid_payload_raises(self):
        """Corrupt base64 payloads are rejected."""
        with pytest.raises(ValueError):
            decode_header_safe("base64:!!!")
