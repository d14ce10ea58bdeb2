"""
Unit tests for the canonical proof bytes.
"""
import struct
from unittest.mock import patch

import pytest

from wopi_proof.core.proof.canonical import (
    ProofEncodingError,
    build_proof,
    check_field_length,
    check_percent_encoding,
    check_ticks,
    decode_access_token,
)

E2E_TICKS = 637000000000000000


class TestDecodeAccessToken:
    """Test access token percent-decoding."""

    def test_plain_token_unchanged(self):
        assert decode_access_token("abc") == b"abc"

    def test_percent_escape(self):
        assert decode_access_token("tok%20en") == b"tok en"

    def test_plus_is_not_space(self):
        assert decode_access_token("a+b") == b"a+b"

    def test_multibyte_escape(self):
        assert decode_access_token("%E2%82%AC") == "€".encode("utf-8")


class TestCheckFieldLength:
    """Test int32 length validation."""

    def test_returns_byte_length(self):
        assert check_field_length("uri", "http://x/y") == 10
        assert check_field_length("uri", "€") == 3

    def test_rejects_oversized(self):
        with patch("wopi_proof.core.proof.canonical.MAX_FIELD_LENGTH", 4):
            with pytest.raises(ProofEncodingError) as exc_info:
                check_field_length("access_token", b"12345")
        assert exc_info.value.field == "access_token"
        assert exc_info.value.length == 5

    def test_boundary_is_allowed(self):
        with patch("wopi_proof.core.proof.canonical.MAX_FIELD_LENGTH", 5):
            assert check_field_length("uri", b"12345") == 5

    def test_error_is_value_error(self):
        assert issubclass(ProofEncodingError, ValueError)


class TestBuildProof:
    """Test the proof byte layout."""

    def test_short_token_layout(self):
        proof = build_proof("abc", "http://x/y", 0)

        assert len(proof) == 4 + 3 + 4 + 10 + 4 + 8
        assert struct.unpack(">i", proof[:4])[0] == 3

    def test_exact_bytes(self):
        proof = build_proof("abc", "http://x/y", 1)
        expected = (
            b"\x00\x00\x00\x03" + b"abc"
            + b"\x00\x00\x00\x0a" + b"http://x/y"
            + b"\x00\x00\x00\x08" + b"\x00\x00\x00\x00\x00\x00\x00\x01"
        )
        assert proof == expected

    def test_percent_encoded_token(self):
        uri = "https://host/wopi/files/1"
        proof = build_proof("tok%20en", uri, E2E_TICKS)

        assert len(proof) == 4 + 6 + 4 + len(uri) + 4 + 8
        assert struct.unpack(">i", proof[:4])[0] == 6
        assert proof[4:10] == b"tok en"
        assert struct.unpack(">i", proof[10:14])[0] == len(uri)
        assert proof[14:14 + len(uri)] == uri.encode()
        assert struct.unpack(">i", proof[-12:-8])[0] == 8
        assert struct.unpack(">q", proof[-8:])[0] == E2E_TICKS

    def test_ticks_big_endian(self):
        proof = build_proof("", "", E2E_TICKS)
        assert proof[-8:] == E2E_TICKS.to_bytes(8, "big")

    def test_empty_token_and_uri(self):
        proof = build_proof("", "", 0)
        assert proof == b"\x00" * 4 + b"\x00" * 4 + b"\x00\x00\x00\x08" + b"\x00" * 8

    def test_uri_measured_in_utf8_bytes(self):
        proof = build_proof("t", "https://host/€", 0)
        uri_len = struct.unpack(">i", proof[5:9])[0]
        assert uri_len == len("https://host/€".encode("utf-8"))

    def test_oversized_uri_rejected(self):
        with patch("wopi_proof.core.proof.canonical.MAX_FIELD_LENGTH", 8):
            with pytest.raises(ProofEncodingError) as exc_info:
                build_proof("abc", "http://x/y", 0)
        assert exc_info.value.field == "uri"

    def test_oversized_token_checked_after_decoding(self):
        with patch("wopi_proof.core.proof.canonical.MAX_FIELD_LENGTH", 3):
            # "%41%42%43" decodes to 3 bytes
            assert len(build_proof("%41%42%43", "abc", 0)) == 4 + 3 + 4 + 3 + 4 + 8
            with pytest.raises(ProofEncodingError):
                build_proof("ABCD", "abc", 0)

    def test_int64_tick_bounds_accepted(self):
        assert build_proof("", "", 2**63 - 1)[-8:] == b"\x7f" + b"\xff" * 7
        assert build_proof("", "", -(2**63))[-8:] == b"\x80" + b"\x00" * 7

    @pytest.mark.parametrize("ticks", [2**63, -(2**63) - 1, 10**21])
    def test_out_of_range_ticks_rejected(self, ticks):
        with pytest.raises(ProofEncodingError) as exc_info:
            build_proof("tok%20en", "https://host/wopi/files/1", ticks)
        assert exc_info.value.field == "ticks"


class TestCheckTicks:
    """Test the int64 timestamp range check."""

    def test_returns_value(self):
        assert check_ticks(E2E_TICKS) == E2E_TICKS

    def test_rejects_overflow(self):
        with pytest.raises(ProofEncodingError, match="64-bit"):
            check_ticks(2**63)


class TestCheckPercentEncoding:
    """Test rejection of malformed percent escapes."""

    def test_valid_escapes_pass(self):
        check_percent_encoding("access_token", "tok%20en%2Bx+y")

    @pytest.mark.parametrize("token", ["%zz", "abc%", "abc%4", "%G0rest"])
    def test_malformed_escape_rejected(self, token):
        with pytest.raises(ProofEncodingError) as exc_info:
            check_percent_encoding("access_token", token)
        assert exc_info.value.field == "access_token"

    def test_decoding_alone_is_lenient(self):
        assert decode_access_token("%zz") == b"%zz"
