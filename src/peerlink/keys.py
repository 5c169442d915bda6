"""Key pair generation and public key handling for peerlink."""

import hashlib
import logging
from dataclasses import dataclass, field

from cryptography.exceptions import InternalError
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .types import PRIVATE_KEY_SIZE, PUBLIC_KEY_SIZE, EntropyError, InvalidPublicKeyError

logger = logging.getLogger(__name__)


def generate_private_key() -> X25519PrivateKey:
    """
    Generate a random X25519 private key.

    Returns:
        A new private key drawn from the OS random source

    Raises:
        EntropyError: If the random source fails
    """
    try:
        private_key = X25519PrivateKey.generate()
    except (InternalError, OSError) as e:
        raise EntropyError(f"Unable to generate private key: {e}") from e

    logger.debug("Generated X25519 private key")
    return private_key


def public_key_of(private_key: X25519PrivateKey) -> X25519PublicKey:
    """Derive the public key for a private key."""
    return private_key.public_key()


def private_key_from_bytes(data: bytes) -> X25519PrivateKey:
    """
    Create an X25519 private key from raw bytes.

    Args:
        data: 32-byte private scalar

    Returns:
        The private key

    Raises:
        ValueError: If data is not 32 bytes
    """
    if len(data) != PRIVATE_KEY_SIZE:
        raise ValueError(f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(data)}")
    return X25519PrivateKey.from_private_bytes(data)


def public_key_to_bytes(public_key: X25519PublicKey) -> bytes:
    """Convert X25519 public key to raw bytes."""
    return public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def public_key_from_bytes(data: bytes) -> X25519PublicKey:
    """
    Create X25519 public key from raw bytes.

    Raises:
        InvalidPublicKeyError: If data is not a 32-byte value
    """
    if not isinstance(data, (bytes, bytearray)):
        raise InvalidPublicKeyError(f"Public key must be bytes, got {type(data).__name__}")

    if len(data) != PUBLIC_KEY_SIZE:
        raise InvalidPublicKeyError(
            f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(data)}"
        )

    try:
        return X25519PublicKey.from_public_bytes(bytes(data))
    except ValueError as e:
        raise InvalidPublicKeyError(f"Invalid X25519 public key: {e}") from e


def fingerprint(public_key: bytes) -> str:
    """
    Short, human-comparable digest of a public key.

    Both parties read these aloud or compare them side by side to check that
    the public key they received is the one the other party sent.

    Args:
        public_key: Raw public key bytes

    Returns:
        Four space-separated groups of four uppercase hex digits taken from
        SHA-256(public_key), e.g. "A7B3 C9D1 E5F2 8A4B"
    """
    digest = hashlib.sha256(public_key).hexdigest()[:16].upper()
    return " ".join(digest[i : i + 4] for i in range(0, 16, 4))


@dataclass(frozen=True)
class KeyPair:
    """
    An X25519 private key together with its public key.

    Attributes:
        private_key: The X25519 private key. Never included in repr.
        public_key: The matching X25519 public key.
    """

    private_key: X25519PrivateKey = field(repr=False)
    public_key: X25519PublicKey = field(repr=False)

    @classmethod
    def generate(cls) -> "KeyPair":
        """Generate a fresh random key pair."""
        private_key = generate_private_key()
        return cls(private_key=private_key, public_key=public_key_of(private_key))

    @classmethod
    def from_private_key(cls, private_key: X25519PrivateKey) -> "KeyPair":
        """Wrap a caller-supplied private key."""
        return cls(private_key=private_key, public_key=public_key_of(private_key))

    @classmethod
    def from_private_bytes(cls, data: bytes) -> "KeyPair":
        """
        Create a key pair from a 32-byte private scalar.

        Raises:
            ValueError: If data is not 32 bytes.
        """
        return cls.from_private_key(private_key_from_bytes(data))

    @property
    def public_key_bytes(self) -> bytes:
        """The public key as raw bytes (32 bytes)."""
        return public_key_to_bytes(self.public_key)

    def fingerprint(self) -> str:
        """Fingerprint of the public key."""
        return fingerprint(self.public_key_bytes)

    def __repr__(self) -> str:
        return f"KeyPair({self.fingerprint()})"
