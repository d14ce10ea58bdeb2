"""
Canonical Proof Bytes

Builds the exact byte string a WOPI host recomputes to check ``X-WOPI-Proof``.

Proof Format (all integers big-endian):
    int32   length of decoded access token
    bytes   decoded access token
    int32   length of URI
    bytes   URI (UTF-8)
    int32   8
    int64   timestamp ticks

The access token arrives percent-encoded from the query string and must be
decoded first; hosts sign over the raw token.
"""

import re
import struct
from typing import Optional, Union
from urllib.parse import unquote_to_bytes

# Length prefixes are signed 32-bit integers
MAX_FIELD_LENGTH = 2**31 - 1

TICKS_FIELD_SIZE = 8
MIN_TICKS = -(2**63)
MAX_TICKS = 2**63 - 1

# A "%" not followed by two hex digits
MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ProofEncodingError(ValueError):
    """A token or URI cannot be represented in the proof byte layout."""

    def __init__(self, field: str, length: int, message: Optional[str] = None):
        self.field = field
        self.length = length
        super().__init__(
            message or f"{field} is {length} bytes long; at most {MAX_FIELD_LENGTH} bytes can be signed"
        )


def decode_access_token(access_token: str) -> bytes:
    """
    Percent-decode an access token to the raw bytes that get signed.

    Only ``%XX`` escapes are decoded; ``+`` is kept as is. A malformed
    escape such as ``%zz`` is passed through unchanged here; request models
    reject it with :func:`check_percent_encoding` before signing.
    """
    return unquote_to_bytes(access_token)


def check_field_length(field: str, data: Union[bytes, str]) -> int:
    """
    Ensure ``data`` fits in an int32 length prefix.

    Args:
        field: Field name used in the error
        data: Field value (strings are measured in UTF-8 bytes)

    Returns:
        The length in bytes

    Raises:
        ProofEncodingError: If the value is too long
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    length = len(data)
    if length > MAX_FIELD_LENGTH:
        raise ProofEncodingError(field, length)
    return length


def check_percent_encoding(field: str, value: str) -> None:
    """
    Reject a percent-encoded value containing a ``%`` not followed by two hex digits.

    Raises:
        ProofEncodingError: If a malformed escape is found
    """
    match = MALFORMED_ESCAPE.search(value)
    if match:
        raise ProofEncodingError(
            field, len(value),
            f"{field} has a malformed percent escape at position {match.start()}",
        )


def check_ticks(ticks: int) -> int:
    """
    Ensure ``ticks`` fits in the signed 64-bit timestamp field.

    Raises:
        ProofEncodingError: If the value is out of range
    """
    if not MIN_TICKS <= ticks <= MAX_TICKS:
        raise ProofEncodingError(
            "ticks", TICKS_FIELD_SIZE,
            f"ticks value {ticks} does not fit in a signed 64-bit integer",
        )
    return ticks


def build_proof(access_token: str, uri: str, ticks: int) -> bytes:
    """
    Build the proof bytes for one request.

    Args:
        access_token: Access token as found in the query string (percent-encoded)
        uri: Full request URI
        ticks: Timestamp in .NET ticks, also sent as X-WOPI-TimeStamp

    Returns:
        Bytes to sign

    Example:
        >>> len(build_proof("abc", "http://x/y", 0))
        33
    """
    token_bytes = decode_access_token(access_token)
    uri_bytes = uri.encode("utf-8")
    token_len = check_field_length("access_token", token_bytes)
    uri_len = check_field_length("uri", uri_bytes)
    check_ticks(ticks)

    return b"".join([
        struct.pack(">i", token_len),
        token_bytes,
        struct.pack(">i", uri_len),
        uri_bytes,
        struct.pack(">i", TICKS_FIELD_SIZE),
        struct.pack(">q", ticks),
    ])
