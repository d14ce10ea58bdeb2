"""
Proof Service

Produces the WOPI proof headers for outbound requests and the proof-key
attributes for the discovery document.

Built once at startup and shared by every request handler. The key is loaded
once; discovery attributes are computed once and cached. Header generation
touches no shared mutable state.

Usage:
    service = ProofService(KeyStore(settings.resolved_proof_key_path))
    for name, value in service.get_proof_headers(access_token, url):
        request.headers[name] = value
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from wopi_proof.core.proof.blob import build_public_key_blob
from wopi_proof.core.proof.canonical import build_proof
from wopi_proof.core.proof.keys import KeyStore, ProofKeyMaterial
from wopi_proof.core.proof.signer import ProofSigningError, encode_base64, sign_proof
from wopi_proof.core.proof.ticks import ticks_since_epoch

logger = logging.getLogger(__name__)


HEADER_TIMESTAMP = "X-WOPI-TimeStamp"
HEADER_PROOF = "X-WOPI-Proof"

ATTR_VALUE = "value"
ATTR_MODULUS = "modulus"
ATTR_EXPONENT = "exponent"

HeaderPair = Tuple[str, str]


def build_discovery_attributes(material: ProofKeyMaterial) -> List[Tuple[str, str]]:
    """Attributes of the discovery ``<proof-key>`` element for ``material``."""
    blob = build_public_key_blob(material.modulus, material.exponent)
    return [
        (ATTR_VALUE, encode_base64(blob)),
        (ATTR_MODULUS, encode_base64(material.modulus)),
        (ATTR_EXPONENT, encode_base64(material.exponent)),
    ]


class ProofService:
    """
    Signs outbound WOPI requests.

    Without a key the service stays usable: it returns no headers and no
    discovery attributes.

    Args:
        key_store: Holder of the proof key
        clock: Returns the current Unix time in nanoseconds
        enabled: When False, no proof headers are produced even with a key
    """

    def __init__(
        self,
        key_store: KeyStore,
        clock: Callable[[], int] = time.time_ns,
        enabled: bool = True,
    ):
        self.key_store = key_store
        self.clock = clock
        self.enabled = enabled
        self._attributes: Optional[List[Tuple[str, str]]] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "ProofService":
        """Create the service from :class:`~wopi_proof.core.config.Settings`."""
        return cls(
            KeyStore(settings.resolved_proof_key_path),
            enabled=settings.proof_headers_enabled,
        )

    @property
    def has_proof_key(self) -> bool:
        return self.key_store.has_key

    def get_proof_headers(self, access_token: str, uri: str) -> List[HeaderPair]:
        """
        Return the proof headers for one request.

        Args:
            access_token: Access token as sent in the query string (percent-encoded)
            uri: Full request URI, including the access token parameter

        Returns:
            ``[(X-WOPI-TimeStamp, ticks), (X-WOPI-Proof, signature)]``, or an
            empty list if there is no key or signing failed

        Raises:
            ProofEncodingError: If the token or URI is too long to be signed
        """
        material = self.key_store.material
        if material is None or not self.enabled:
            return []

        ticks = ticks_since_epoch(self.clock())
        proof = build_proof(access_token, uri, ticks)
        try:
            signature = sign_proof(material.private_key, proof)
        except ProofSigningError as e:
            logger.error(f"Omitting proof headers: {e}")
            return []

        return [
            (HEADER_TIMESTAMP, str(ticks)),
            (HEADER_PROOF, signature),
        ]

    def get_discovery_attributes(self) -> List[Tuple[str, str]]:
        """
        Return the ``value``, ``modulus`` and ``exponent`` discovery attributes.

        Computed on first call and cached; empty if there is no key.
        """
        if self._attributes is None:
            with self._lock:
                if self._attributes is None:
                    material = self.key_store.material
                    self._attributes = build_discovery_attributes(material) if material else []
        return list(self._attributes)
