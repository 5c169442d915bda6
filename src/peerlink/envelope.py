"""Sealed box encoding and decoding for peerlink ciphertexts."""

from dataclasses import dataclass

from .types import NONCE_SIZE, TAG_SIZE, SEALED_BOX_OVERHEAD, AuthenticationError


@dataclass
class SealedBox:
    """An AEAD output split into its parts."""
    nonce: bytes  # 12 bytes
    ciphertext: bytes  # same length as the plaintext
    tag: bytes  # 16 bytes

    @property
    def combined(self) -> bytes:
        """The sealed box as one byte sequence."""
        return encode_sealed_box(self)


def encode_sealed_box(box: SealedBox) -> bytes:
    """
    Encode a sealed box to bytes.

    Format (28 bytes of overhead, no framing):
        [0-11]    nonce (12 bytes)
        [12..-17] ciphertext (variable)
        [-16..]   tag (16 bytes)

    Args:
        box: SealedBox to encode

    Returns:
        Encoded bytes
    """
    return box.nonce + box.ciphertext + box.tag


def decode_sealed_box(data: bytes) -> SealedBox:
    """
    Decode bytes into a sealed box.

    Args:
        data: Encoded sealed box bytes

    Returns:
        Decoded SealedBox

    Raises:
        AuthenticationError: If data is too short to hold a nonce and tag
    """
    if len(data) < SEALED_BOX_OVERHEAD:
        raise AuthenticationError(
            f"Ciphertext too short: {len(data)} bytes (minimum {SEALED_BOX_OVERHEAD})"
        )

    data = bytes(data)
    return SealedBox(
        nonce=data[:NONCE_SIZE],
        ciphertext=data[NONCE_SIZE:-TAG_SIZE],
        tag=data[-TAG_SIZE:],
    )


def is_sealed_box(data: bytes) -> bool:
    """Check if data is long enough to be a sealed box."""
    return len(data) >= SEALED_BOX_OVERHEAD
