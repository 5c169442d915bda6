"""Models for peerlink payloads and peer state."""

from dataclasses import dataclass
from enum import Enum


class PeerState(Enum):
    """Key agreement state of a peer."""
    UNINITIALIZED = "uninitialized"
    KEYED = "keyed"


@dataclass
class TextPayload:
    """A single text message."""
    message: str
