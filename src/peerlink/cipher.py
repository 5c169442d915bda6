"""
Authenticated ciphers for peerlink.

This module defines the AeadCipher interface and its implementations. Every
implementation produces the same combined layout (nonce || ciphertext || tag),
so callers can swap primitives without other changes.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .agreement import SymmetricKey
from .envelope import SealedBox, decode_sealed_box, encode_sealed_box
from .types import NONCE_SIZE, TAG_SIZE, AuthenticationError

logger = logging.getLogger(__name__)


class AeadCipher(ABC):
    """Interface for authenticated encryption under a symmetric key."""

    name: str = "aead"

    @abstractmethod
    def encrypt(
        self,
        plaintext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        """Encrypt plaintext under a fresh random nonce and return the combined sealed box."""
        ...

    @abstractmethod
    def decrypt(
        self,
        ciphertext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        """Verify and decrypt a combined sealed box, raising AuthenticationError on failure."""
        ...


class ChaCha20Poly1305Cipher(AeadCipher):
    """ChaCha20-Poly1305 in combined mode (the default cipher)."""

    name = "chacha20-poly1305"

    def encrypt(
        self,
        plaintext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        sealed = ChaCha20Poly1305(bytes(key)).encrypt(nonce, plaintext, associated_data)
        return encode_sealed_box(
            SealedBox(nonce=nonce, ciphertext=sealed[:-TAG_SIZE], tag=sealed[-TAG_SIZE:])
        )

    def decrypt(
        self,
        ciphertext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        box = decode_sealed_box(ciphertext)
        try:
            return ChaCha20Poly1305(bytes(key)).decrypt(
                box.nonce, box.ciphertext + box.tag, associated_data
            )
        except InvalidTag as e:
            logger.warning("Rejected %d-byte ciphertext: authentication failed", len(ciphertext))
            raise AuthenticationError("Ciphertext authentication failed") from e


class AesGcmCipher(AeadCipher):
    """AES-256-GCM with the same combined layout as ChaCha20Poly1305Cipher."""

    name = "aes-256-gcm"

    def encrypt(
        self,
        plaintext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        sealed = AESGCM(bytes(key)).encrypt(nonce, plaintext, associated_data)
        return encode_sealed_box(
            SealedBox(nonce=nonce, ciphertext=sealed[:-TAG_SIZE], tag=sealed[-TAG_SIZE:])
        )

    def decrypt(
        self,
        ciphertext: bytes,
        key: SymmetricKey,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        box = decode_sealed_box(ciphertext)
        try:
            return AESGCM(bytes(key)).decrypt(
                box.nonce, box.ciphertext + box.tag, associated_data
            )
        except InvalidTag as e:
            logger.warning("Rejected %d-byte ciphertext: authentication failed", len(ciphertext))
            raise AuthenticationError("Ciphertext authentication failed") from e
