"""Constants and error types for peerlink."""


# Key sizes
PRIVATE_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32
SYMMETRIC_KEY_SIZE = 32

# Sealed box layout: nonce || ciphertext || tag
NONCE_SIZE = 12
TAG_SIZE = 16
SEALED_BOX_OVERHEAD = NONCE_SIZE + TAG_SIZE

# Key agreement constants (must match on both sides)
KEY_AGREEMENT_SALT = b"salty"
KEY_AGREEMENT_INFO = b""


class EntropyError(Exception):
    """
    The system random source could not produce key material.

    This is fatal and intentionally not a PeerLinkError, so handlers for
    recoverable protocol errors do not catch it.
    """
    pass


# Recoverable errors
class PeerLinkError(Exception):
    """Base exception for recoverable peerlink errors."""
    pass


class KeyAgreementError(PeerLinkError):
    """ECDH key agreement failed."""
    pass


class InvalidPublicKeyError(KeyAgreementError):
    """Invalid peer public key format or length."""
    pass


class NotKeyedError(PeerLinkError):
    """Operation attempted before key agreement completed."""

    def __init__(self, name: str, operation: str) -> None:
        self.name = name
        self.operation = operation
        super().__init__(f"Peer {name!r} cannot {operation}: no symmetric key has been derived")


class AlreadyKeyedError(PeerLinkError):
    """Key agreement attempted on a peer that does not allow rekeying."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Peer {name!r} already holds a symmetric key and rekeying is disabled")


class AuthenticationError(PeerLinkError):
    """Ciphertext failed authentication (tampered, truncated, or wrong key)."""
    pass


class DecodingError(PeerLinkError):
    """Decrypted bytes do not match the expected payload schema."""
    pass
