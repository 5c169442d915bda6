"""
Peer for peerlink secure messaging.

A Peer owns an X25519 key pair, derives a symmetric key from the other
party's public key, and then encodes and receives payloads with it.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PublicKey

from .agreement import KeyAgreementConfig, SymmetricKey, derive_symmetric_key
from .cipher import AeadCipher, ChaCha20Poly1305Cipher
from .codec import JsonPayloadCodec, PayloadCodec
from .keys import KeyPair, fingerprint, public_key_to_bytes
from .models import PeerState, TextPayload
from .types import AlreadyKeyedError, NotKeyedError

logger = logging.getLogger(__name__)


@dataclass
class PeerConfig:
    """Configuration for a peer."""

    key_agreement: KeyAgreementConfig = field(default_factory=KeyAgreementConfig)
    """HKDF parameters. Both peers must use the same values."""

    allow_rekey: bool = True
    """Whether a second key agreement may replace the current key."""


class Peer:
    """
    One party of a two-party secure channel.

    The peer starts UNINITIALIZED and becomes KEYED after the first
    successful call to derive_symmetric_key. encode and receive are only
    available once keyed.

    Example usage:
        ```python
        alice = Peer("alice")
        bob = Peer("bob")

        alice.derive_symmetric_key(bob.public_key)
        bob.derive_symmetric_key(alice.public_key)

        ciphertext = alice.encode(TextPayload(message="hello"))
        payload = bob.receive(ciphertext)
        ```
    """

    def __init__(
        self,
        name: str,
        key_pair: Optional[KeyPair] = None,
        cipher: Optional[AeadCipher] = None,
        codec: Optional[PayloadCodec] = None,
        config: Optional[PeerConfig] = None,
    ) -> None:
        """
        Initialize a peer.

        Args:
            name: Label used for diagnostics only.
            key_pair: Key pair to use (default: freshly generated).
            cipher: Authenticated cipher (default: ChaCha20-Poly1305).
            codec: Payload codec (default: JSON codec for TextPayload).
            config: Peer configuration.

        Raises:
            EntropyError: If a key pair has to be generated and the random source fails.
        """
        self.name = name
        self._key_pair = key_pair or KeyPair.generate()
        self.cipher = cipher or ChaCha20Poly1305Cipher()
        self.codec = codec or JsonPayloadCodec(TextPayload)
        self.config = config or PeerConfig()
        self._symmetric_key: Optional[SymmetricKey] = None
        self._lock = threading.Lock()

        logger.debug("Peer %r created with public key %s", name, self.fingerprint)

    @property
    def public_key(self) -> X25519PublicKey:
        """The peer's X25519 public key."""
        return self._key_pair.public_key

    @property
    def public_key_bytes(self) -> bytes:
        """The peer's public key as raw bytes (32 bytes)."""
        return self._key_pair.public_key_bytes

    @property
    def fingerprint(self) -> str:
        """Fingerprint of the public key for out-of-band comparison."""
        return self._key_pair.fingerprint()

    @property
    def state(self) -> PeerState:
        """Current key agreement state."""
        with self._lock:
            keyed = self._symmetric_key is not None
        return PeerState.KEYED if keyed else PeerState.UNINITIALIZED

    @property
    def is_keyed(self) -> bool:
        """Whether a symmetric key has been derived."""
        return self.state == PeerState.KEYED

    def derive_symmetric_key(self, peer_public_key: Union[X25519PublicKey, bytes]) -> None:
        """
        Derive and store the session key from the other party's public key.

        On failure the peer's state is left unchanged.

        Args:
            peer_public_key: The other party's public key (object or 32 bytes).

        Raises:
            InvalidPublicKeyError: If the public key is malformed.
            KeyAgreementError: If the ECDH step fails.
            AlreadyKeyedError: If already keyed and rekeying is disabled.
        """
        if not self.config.allow_rekey and self.is_keyed:
            raise AlreadyKeyedError(self.name)

        agreement = self.config.key_agreement
        symmetric_key = derive_symmetric_key(
            self._key_pair.private_key,
            peer_public_key,
            salt=agreement.salt,
            info=agreement.info,
        )

        with self._lock:
            if self._symmetric_key is not None and not self.config.allow_rekey:
                raise AlreadyKeyedError(self.name)
            rekeyed = self._symmetric_key is not None
            self._symmetric_key = symmetric_key

        if isinstance(peer_public_key, X25519PublicKey):
            peer_public_key = public_key_to_bytes(peer_public_key)
        logger.info(
            "Peer %r %s with %s",
            self.name,
            "rekeyed" if rekeyed else "keyed",
            fingerprint(bytes(peer_public_key)),
        )

    def encode(self, payload: Any) -> bytes:
        """
        Serialize and encrypt a payload.

        Args:
            payload: The payload to send.

        Returns:
            Ciphertext bytes (nonce || ciphertext || tag).

        Raises:
            NotKeyedError: If no symmetric key has been derived.
        """
        key = self._require_key("encode")
        plaintext = self.codec.serialize(payload)
        ciphertext = self.cipher.encrypt(plaintext, key)

        logger.debug("Peer %r encoded %d-byte payload", self.name, len(plaintext))
        return ciphertext

    def receive(self, ciphertext: bytes) -> Any:
        """
        Decrypt and deserialize a ciphertext.

        Args:
            ciphertext: Bytes produced by the other party's encode.

        Returns:
            The decoded payload.

        Raises:
            NotKeyedError: If no symmetric key has been derived.
            AuthenticationError: If the ciphertext was tampered with or used another key.
            DecodingError: If the plaintext is not a valid payload.
        """
        key = self._require_key("receive")
        plaintext = self.cipher.decrypt(ciphertext, key)
        payload = self.codec.deserialize(plaintext)

        logger.debug("Peer %r received %d-byte payload", self.name, len(plaintext))
        return payload

    def _require_key(self, operation: str) -> SymmetricKey:
        with self._lock:
            key = self._symmetric_key
        if key is None:
            raise NotKeyedError(self.name, operation)
        return key

    def __repr__(self) -> str:
        return f"Peer({self.name!r}, {self.state.value})"
