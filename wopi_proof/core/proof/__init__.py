"""
WOPI Proof Keys

RSA proof headers (X-WOPI-TimeStamp / X-WOPI-Proof) for outbound requests to a
WOPI host, and the proof-key attributes published in discovery.
"""

from wopi_proof.core.proof.blob import (
    build_public_key_blob,
    to_little_endian,
)
from wopi_proof.core.proof.canonical import (
    build_proof,
    check_field_length,
    check_percent_encoding,
    check_ticks,
    decode_access_token,
    ProofEncodingError,
)
from wopi_proof.core.proof.keys import (
    KeyStore,
    ProofKeyMaterial,
    load_key_material,
)
from wopi_proof.core.proof.service import (
    ProofService,
    HEADER_TIMESTAMP,
    HEADER_PROOF,
)
from wopi_proof.core.proof.signer import (
    sign_proof,
    verify_proof,
    ProofSigningError,
)
from wopi_proof.core.proof.ticks import (
    ticks_since_epoch,
    DOTNET_EPOCH_OFFSET,
)

__all__ = [
    # Blob
    "build_public_key_blob",
    "to_little_endian",
    # Canonical bytes
    "build_proof",
    "check_field_length",
    "check_percent_encoding",
    "check_ticks",
    "decode_access_token",
    "ProofEncodingError",
    # Keys
    "KeyStore",
    "ProofKeyMaterial",
    "load_key_material",
    # Service
    "ProofService",
    "HEADER_TIMESTAMP",
    "HEADER_PROOF",
    # Signing
    "sign_proof",
    "verify_proof",
    "ProofSigningError",
    # Ticks
    "ticks_since_epoch",
    "DOTNET_EPOCH_OFFSET",
]
