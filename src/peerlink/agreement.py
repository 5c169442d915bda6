"""X25519 key agreement and HKDF symmetric key derivation for peerlink."""

import hmac
import logging
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .keys import public_key_from_bytes
from .types import (
    KEY_AGREEMENT_INFO,
    KEY_AGREEMENT_SALT,
    SYMMETRIC_KEY_SIZE,
    InvalidPublicKeyError,
    KeyAgreementError,
)

logger = logging.getLogger(__name__)


class SymmetricKey:
    """
    A fixed-size symmetric key derived from a key agreement.

    Compares in constant time and never shows its bytes in repr.
    """

    __slots__ = ("_key",)

    def __init__(self, key: bytes) -> None:
        if len(key) != SYMMETRIC_KEY_SIZE:
            raise ValueError(f"Symmetric key must be {SYMMETRIC_KEY_SIZE} bytes, got {len(key)}")
        self._key = bytes(key)

    def __bytes__(self) -> bytes:
        return self._key

    def __len__(self) -> int:
        return len(self._key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymmetricKey):
            return NotImplemented
        return hmac.compare_digest(self._key, other._key)

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"SymmetricKey(<{len(self._key)} bytes>)"


@dataclass
class KeyAgreementConfig:
    """HKDF parameters shared by both parties."""

    salt: bytes = KEY_AGREEMENT_SALT
    """HKDF salt. Must be identical on both sides."""

    info: bytes = KEY_AGREEMENT_INFO
    """HKDF context info. Must be identical on both sides."""


def x25519_ecdh(private_key: X25519PrivateKey, public_key: X25519PublicKey) -> bytes:
    """
    Perform X25519 ECDH key exchange.

    Args:
        private_key: Our private key
        public_key: Their public key

    Returns:
        32-byte shared secret

    Raises:
        KeyAgreementError: If the peer key is a low-order point
    """
    try:
        return private_key.exchange(public_key)
    except ValueError as e:
        raise KeyAgreementError(f"X25519 key agreement failed: {e}") from e


def derive_symmetric_key(
    own_private_key: X25519PrivateKey,
    peer_public_key: Union[X25519PublicKey, bytes],
    salt: bytes = KEY_AGREEMENT_SALT,
    info: bytes = KEY_AGREEMENT_INFO,
) -> SymmetricKey:
    """
    Derive a symmetric key from our private key and the peer's public key.

    Both parties arrive at the same key as long as they use the same salt
    and info. A mismatch yields different keys with no error here; it only
    surfaces later as an AuthenticationError on decrypt.

    Args:
        own_private_key: Our X25519 private key
        peer_public_key: Peer X25519 public key, as an object or 32 raw bytes
        salt: HKDF salt
        info: HKDF context info

    Returns:
        The derived SymmetricKey

    Raises:
        InvalidPublicKeyError: If the peer public key is malformed
        KeyAgreementError: If the ECDH step fails
    """
    if isinstance(peer_public_key, (bytes, bytearray)):
        peer_public_key = public_key_from_bytes(peer_public_key)
    elif not isinstance(peer_public_key, X25519PublicKey):
        raise InvalidPublicKeyError(
            f"Peer public key must be X25519PublicKey or bytes, got {type(peer_public_key).__name__}"
        )

    shared_secret = x25519_ecdh(own_private_key, peer_public_key)

    hkdf = HKDF(algorithm=SHA256(), length=SYMMETRIC_KEY_SIZE, salt=salt, info=info)
    symmetric_key = SymmetricKey(hkdf.derive(shared_secret))

    logger.debug(
        "Derived %d-byte symmetric key (salt=%dB, info=%dB)",
        SYMMETRIC_KEY_SIZE,
        len(salt),
        len(info),
    )
    return symmetric_key
