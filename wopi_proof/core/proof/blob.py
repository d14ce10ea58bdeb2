"""
Public Key Blob Encoding

Byte layout helpers for publishing the proof key in the discovery document.

The ``value`` attribute of ``<proof-key>`` carries the key as a Microsoft
CryptoAPI PUBLICKEYBLOB (``RSA1``), which WOPI hosts running on .NET import
directly:

    offset  size  field
    0       12    BLOBHEADER + RSAPUBKEY magic: 06 02 00 00 00 A4 00 00 52 53 41 31
    12      4     bit length of the modulus (uint32, little-endian)
    16      |E|   public exponent, little-endian
    16+|E|  |M|   modulus, little-endian

See: https://docs.microsoft.com/en-us/openspecs/windows_protocols/ms-mqqb/ade9efde-3ec8-4e47-9ae9-34b64d8081bb
"""

from typing import Optional, Union

# PUBLICKEYBLOB, CUR_BLOB_VERSION, reserved, CALG_RSA_KEYX, "RSA1"
CAPI_RSA1_HEADER = bytes([
    0x06, 0x02, 0x00, 0x00,
    0x00, 0xA4, 0x00, 0x00,
    0x52, 0x53, 0x41, 0x31,
])


def to_little_endian(value: Union[bytes, bytearray, int], length: Optional[int] = None) -> bytes:
    """
    Return ``value`` as least-significant-byte-first bytes.

    Args:
        value: Big-endian byte sequence, or a non-negative integer
        length: Output width in bytes; required for integers

    Returns:
        Little-endian bytes, regardless of the host byte order

    Raises:
        ValueError: If an integer is given without a length, or does not fit
    """
    if isinstance(value, int):
        if length is None:
            raise ValueError("length is required when encoding an integer")
        try:
            return value.to_bytes(length, "little", signed=False)
        except OverflowError as e:
            raise ValueError(f"{value} does not fit in {length} bytes") from e
    return bytes(reversed(bytes(value)))


def build_public_key_blob(modulus: bytes, exponent: bytes) -> bytes:
    """
    Build a CryptoAPI RSA1 public key blob.

    Args:
        modulus: RSA modulus, big-endian
        exponent: RSA public exponent, big-endian

    Returns:
        Blob of ``16 + len(exponent) + len(modulus)`` bytes
    """
    bit_length = to_little_endian(len(modulus) * 8, 4)
    return b"".join([
        CAPI_RSA1_HEADER,
        bit_length,
        to_little_endian(exponent),
        to_little_endian(modulus),
    ])
