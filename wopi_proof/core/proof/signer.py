"""
Proof Signing

RSASSA-PKCS1-v1_5 over SHA-256, which is what WOPI hosts check
``X-WOPI-Proof`` with. PKCS#1 v1.5 is deterministic: the same bytes signed
with the same key always give the same signature.
"""

import base64
import binascii
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

logger = logging.getLogger(__name__)


class ProofSigningError(RuntimeError):
    """The cryptographic signing operation failed."""


def encode_base64(data: bytes) -> str:
    """Standard base64 on a single line (header values must not contain CR/LF)."""
    return base64.b64encode(data).decode("ascii")


def sign_proof(private_key: rsa.RSAPrivateKey, data: bytes) -> str:
    """
    Sign proof bytes and return the base64-encoded signature.

    Args:
        private_key: RSA private key
        data: Proof bytes from :func:`~wopi_proof.core.proof.canonical.build_proof`

    Returns:
        Base64 signature for the X-WOPI-Proof header

    Raises:
        ProofSigningError: If signing fails
    """
    try:
        signature = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError) as e:
        raise ProofSigningError(f"Failed to sign proof: {e}") from e
    return encode_base64(signature)


def verify_proof(public_key: rsa.RSAPublicKey, data: bytes, proof_b64: str) -> bool:
    """
    Check a proof signature the way a WOPI host does.

    Args:
        public_key: RSA public key published in discovery
        data: Proof bytes rebuilt from the request
        proof_b64: Value of the X-WOPI-Proof header

    Returns:
        True if the signature matches
    """
    try:
        signature = base64.b64decode(proof_b64, validate=True)
    except (binascii.Error, ValueError):
        logger.debug("Proof is not valid base64")
        return False

    try:
        public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True
