"""
peerlink - Two-party secure channel bootstrap

Python implementation of an X25519 + HKDF-SHA256 key agreement followed by
ChaCha20-Poly1305 authenticated messaging.
"""

from .keys import (
    KeyPair,
    generate_private_key,
    public_key_of,
    public_key_to_bytes,
    public_key_from_bytes,
    private_key_from_bytes,
    fingerprint,
)
from .agreement import (
    SymmetricKey,
    KeyAgreementConfig,
    x25519_ecdh,
    derive_symmetric_key,
)
from .envelope import SealedBox, encode_sealed_box, decode_sealed_box, is_sealed_box
from .cipher import AeadCipher, ChaCha20Poly1305Cipher, AesGcmCipher
from .codec import PayloadCodec, JsonPayloadCodec
from .models import PeerState, TextPayload
from .peer import Peer, PeerConfig
from .types import (
    PRIVATE_KEY_SIZE,
    PUBLIC_KEY_SIZE,
    SYMMETRIC_KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    SEALED_BOX_OVERHEAD,
    KEY_AGREEMENT_SALT,
    KEY_AGREEMENT_INFO,
    EntropyError,
    PeerLinkError,
    KeyAgreementError,
    InvalidPublicKeyError,
    NotKeyedError,
    AlreadyKeyedError,
    AuthenticationError,
    DecodingError,
)

__version__ = "0.1.0"

__all__ = [
    # Keys
    "KeyPair",
    "generate_private_key",
    "public_key_of",
    "public_key_to_bytes",
    "public_key_from_bytes",
    "private_key_from_bytes",
    "fingerprint",
    # Key agreement
    "SymmetricKey",
    "KeyAgreementConfig",
    "x25519_ecdh",
    "derive_symmetric_key",
    # Envelope
    "SealedBox",
    "encode_sealed_box",
    "decode_sealed_box",
    "is_sealed_box",
    # Ciphers
    "AeadCipher",
    "ChaCha20Poly1305Cipher",
    "AesGcmCipher",
    # Codec
    "PayloadCodec",
    "JsonPayloadCodec",
    # Models
    "PeerState",
    "TextPayload",
    # Peer
    "Peer",
    "PeerConfig",
    # Constants
    "PRIVATE_KEY_SIZE",
    "PUBLIC_KEY_SIZE",
    "SYMMETRIC_KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "SEALED_BOX_OVERHEAD",
    "KEY_AGREEMENT_SALT",
    "KEY_AGREEMENT_INFO",
    # Errors
    "EntropyError",
    "PeerLinkError",
    "KeyAgreementError",
    "InvalidPublicKeyError",
    "NotKeyedError",
    "AlreadyKeyedError",
    "AuthenticationError",
    "DecodingError",
]
