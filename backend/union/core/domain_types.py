"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is the decimal string form of a 64-bit snowflake
    - ServerId is a positive integer (1, 2, 3, ...)
    - Discriminator is always 4 characters, "0001".."9999"
    - Tag is always "<username>#<discriminator>"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - UserId kept as str: 64-bit ids overflow JavaScript clients, so they travel as strings
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ServerId = NewType("ServerId", int)
MessageId = NewType("MessageId", str)
InviteCode = NewType("InviteCode", str)
Discriminator = NewType("Discriminator", str)


# ─── Discriminator namespace ─────────────────────────────────────

DISCRIMINATOR_MIN = 1
DISCRIMINATOR_MAX = 9999
DISCRIMINATOR_WIDTH = 4
TAG_SEPARATOR = "#"


def format_discriminator(value: int) -> Discriminator:
    """Zero-pad an integer in 1..9999 to a 4-digit discriminator."""
    if not DISCRIMINATOR_MIN <= value <= DISCRIMINATOR_MAX:
        raise ValueError(f"discriminator out of range: {value}")
    return Discriminator(str(value).zfill(DISCRIMINATOR_WIDTH))


def format_tag(username: str, discriminator: str) -> str:
    return f"{username}{TAG_SEPARATOR}{discriminator}"
