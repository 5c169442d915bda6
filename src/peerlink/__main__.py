"""Toy two-party exchange: python -m peerlink [message]"""

import logging
import sys

from .models import TextPayload
from .peer import Peer
from .types import AuthenticationError

logger = logging.getLogger("peerlink.demo")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    text = " ".join(argv) or "hello"

    logging.basicConfig(level=logging.INFO, format=" %(message)s")

    alice = Peer("alice")
    bob = Peer("bob")
    logger.info("alice public key: %s", alice.fingerprint)
    logger.info("bob   public key: %s", bob.fingerprint)

    # Public keys travel out of band
    alice.derive_symmetric_key(bob.public_key_bytes)
    bob.derive_symmetric_key(alice.public_key_bytes)

    ciphertext = alice.encode(TextPayload(message=text))
    logger.info("ciphertext (%d bytes): %s", len(ciphertext), ciphertext.hex())

    payload = bob.receive(ciphertext)
    logger.info("bob received: %s", payload.message)

    tampered = ciphertext[:-1] + bytes([ciphertext[-1] ^ 0x01])
    try:
        bob.receive(tampered)
    except AuthenticationError as e:
        logger.info("tampered ciphertext rejected: %s", e)
    else:
        logger.error("tampered ciphertext was accepted")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
