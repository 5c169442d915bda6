"""Tests for key agreement and symmetric key derivation."""

import pytest
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from peerlink.agreement import KeyAgreementConfig, SymmetricKey, derive_symmetric_key, x25519_ecdh
from peerlink.keys import KeyPair
from peerlink.types import KEY_AGREEMENT_SALT, InvalidPublicKeyError, KeyAgreementError
from .test_vectors import (
    ALICE_PRIVATE_KEY_HEX,
    BOB_PRIVATE_KEY_HEX,
    SHARED_SECRET_HEX,
    ZERO_PUBLIC_KEY,
)


@pytest.fixture
def alice():
    """Alice's key pair."""
    return KeyPair.from_private_bytes(bytes.fromhex(ALICE_PRIVATE_KEY_HEX))


@pytest.fixture
def bob():
    """Bob's key pair."""
    return KeyPair.from_private_bytes(bytes.fromhex(BOB_PRIVATE_KEY_HEX))


class TestECDH:
    """Test the raw X25519 exchange."""

    def test_shared_secret_vector(self, alice, bob) -> None:
        """ECDH matches RFC 7748 in both directions."""
        assert x25519_ecdh(alice.private_key, bob.public_key).hex() == SHARED_SECRET_HEX
        assert x25519_ecdh(bob.private_key, alice.public_key).hex() == SHARED_SECRET_HEX

    def test_low_order_point_rejected(self, alice) -> None:
        with pytest.raises(KeyAgreementError):
            derive_symmetric_key(alice.private_key, ZERO_PUBLIC_KEY)


class TestDerivation:
    """Test HKDF symmetric key derivation."""

    def test_agreement_symmetry(self, alice, bob) -> None:
        """Both parties derive the identical key."""
        key_a = derive_symmetric_key(alice.private_key, bob.public_key)
        key_b = derive_symmetric_key(bob.private_key, alice.public_key)

        assert key_a == key_b
        assert len(bytes(key_a)) == 32

    def test_agreement_symmetry_random_keys(self) -> None:
        for _ in range(5):
            a = KeyPair.generate()
            b = KeyPair.generate()
            assert derive_symmetric_key(a.private_key, b.public_key_bytes) == derive_symmetric_key(
                b.private_key, a.public_key_bytes
            )

    def test_matches_hkdf_over_shared_secret(self, alice, bob) -> None:
        """The key is HKDF-SHA256 over the shared secret with the default salt."""
        expected = HKDF(algorithm=SHA256(), length=32, salt=KEY_AGREEMENT_SALT, info=b"").derive(
            bytes.fromhex(SHARED_SECRET_HEX)
        )

        key = derive_symmetric_key(alice.private_key, bob.public_key)

        assert bytes(key) == expected
        assert bytes(key) != bytes.fromhex(SHARED_SECRET_HEX)

    def test_accepts_raw_public_key_bytes(self, alice, bob) -> None:
        assert derive_symmetric_key(alice.private_key, bob.public_key_bytes) == derive_symmetric_key(
            alice.private_key, bob.public_key
        )

    def test_salt_mismatch_gives_different_keys(self, alice, bob) -> None:
        """Salt mismatch is silent here and yields non-interoperable keys."""
        key_a = derive_symmetric_key(alice.private_key, bob.public_key, salt=b"salty")
        key_b = derive_symmetric_key(bob.private_key, alice.public_key, salt=b"")

        assert key_a != key_b

    def test_info_mismatch_gives_different_keys(self, alice, bob) -> None:
        key_a = derive_symmetric_key(alice.private_key, bob.public_key, info=b"context")
        key_b = derive_symmetric_key(bob.private_key, alice.public_key)

        assert key_a != key_b

    def test_invalid_public_key_length(self, alice) -> None:
        with pytest.raises(InvalidPublicKeyError):
            derive_symmetric_key(alice.private_key, bytes(16))

    def test_invalid_public_key_type(self, alice) -> None:
        with pytest.raises(InvalidPublicKeyError):
            derive_symmetric_key(alice.private_key, "not a key")  # type: ignore[arg-type]

    def test_output_length_is_fixed(self, alice, bob) -> None:
        """The key length is not configurable; keys are always 32 bytes."""
        with pytest.raises(TypeError):
            KeyAgreementConfig(length=16)  # type: ignore[call-arg]
        with pytest.raises(TypeError):
            derive_symmetric_key(alice.private_key, bob.public_key, length=16)  # type: ignore[call-arg]

        config = KeyAgreementConfig(salt=b"other", info=b"ctx")
        key = derive_symmetric_key(alice.private_key, bob.public_key, salt=config.salt, info=config.info)
        assert len(key) == 32


class TestSymmetricKey:
    """Tests for the SymmetricKey value type."""

    def test_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            SymmetricKey(bytes(16))

    def test_repr_is_redacted(self) -> None:
        key = SymmetricKey(bytes([0xAB] * 32))
        assert "abab" not in repr(key).lower()
        assert "32 bytes" in repr(key)

    def test_equality(self) -> None:
        assert SymmetricKey(bytes(32)) == SymmetricKey(bytes(32))
        assert SymmetricKey(bytes(32)) != SymmetricKey(bytes([1] * 32))
