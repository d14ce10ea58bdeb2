"""
Shared fixtures for proof key tests.
"""
import logging

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from wopi_proof.core.log import LogPrefixFormatter
from wopi_proof.core.proof.keys import KeyStore, save_private_key
from wopi_proof.core.proof.service import ProofService
from wopi_proof.core.proof.ticks import DOTNET_EPOCH_OFFSET

FIXED_TICKS = 637000000000000000


@pytest.fixture(scope="session")
def rsa_private_key():
    """One 2048-bit key for the whole session (generation is slow)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def proof_key_path(tmp_path, rsa_private_key):
    """Proof key written as PEM to a temporary config dir."""
    return save_private_key(rsa_private_key, tmp_path / "proof_key")


@pytest.fixture
def missing_key_path(tmp_path):
    return tmp_path / "missing" / "proof_key"


@pytest.fixture
def key_store(proof_key_path):
    return KeyStore(proof_key_path)


@pytest.fixture
def fixed_clock():
    """Clock returning the Unix nanoseconds that correspond to FIXED_TICKS."""
    unix_ns = (FIXED_TICKS - DOTNET_EPOCH_OFFSET) * 100
    return lambda: unix_ns


@pytest.fixture
def proof_service(key_store, fixed_clock):
    return ProofService(key_store, clock=fixed_clock)


@pytest.fixture
def keyless_service(missing_key_path):
    return ProofService(KeyStore(missing_key_path))


@pytest.fixture(autouse=True)
def remove_prefix_handlers():
    """Drop handlers installed by configure_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler.formatter, LogPrefixFormatter):
            root.removeHandler(handler)
