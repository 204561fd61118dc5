"""Basic Auth Parsing — turns an Authorization header into (name, discriminator, password).

Invariants:
    - Pure and total: never raises, malformed input returns None
    - Only the "Basic" scheme is accepted (case-sensitive)
    - Payload splits on the FIRST ":" (passwords may contain colons)
    - Username splits on the FIRST "#" into name and discriminator
    - Empty name, discriminator or password returns None
    - A payload containing NUL, or a discriminator that is not exactly four
      ASCII digits, returns None before any store lookup
"""

import base64
import binascii
from dataclasses import dataclass

from union.core.domain_types import DISCRIMINATOR_WIDTH, TAG_SEPARATOR

BASIC_SCHEME = "Basic"
NUL = "\x00"


@dataclass(frozen=True)
class BasicCredentials:
    name: str
    discriminator: str
    password: str


def parse_basic_auth(header: str | None) -> BasicCredentials | None:
    if not header:
        return None

    parts = header.split(" ")
    if len(parts) < 2 or parts[0] != BASIC_SCHEME or not parts[1]:
        return None

    try:
        decoded = base64.b64decode(parts[1], validate=False).decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    if NUL in decoded:
        return None

    username, colon, password = decoded.partition(":")
    if not colon or not username or not password:
        return None

    name, _, discriminator = username.partition(TAG_SEPARATOR)
    if not name or not discriminator:
        return None
    if not _is_discriminator(discriminator):
        return None

    return BasicCredentials(name=name, discriminator=discriminator, password=password)


def _is_discriminator(value: str) -> bool:
    return (
        len(value) == DISCRIMINATOR_WIDTH and value.isascii() and value.isdigit()
    )


def encode_basic_auth(name: str, discriminator: str, password: str) -> str:
    """Build the header value a client sends. Used by scripts and tests."""
    raw = f"{name}{TAG_SEPARATOR}{discriminator}:{password}".encode("utf-8")
    return f"{BASIC_SCHEME} {base64.b64encode(raw).decode('ascii')}"
