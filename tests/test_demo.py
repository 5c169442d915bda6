"""Tests for the demo entry point."""

import logging

from peerlink.__main__ import main


def test_demo_exchange(caplog) -> None:
    """The toy exchange delivers the message and rejects the tampered copy."""
    caplog.set_level(logging.INFO)

    assert main(["hello", "bob"]) == 0
    assert "bob received: hello bob" in caplog.text
    assert "tampered ciphertext rejected" in caplog.text
