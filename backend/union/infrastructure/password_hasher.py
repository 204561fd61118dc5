"""Password Hashing — bcrypt with a per-password salt and a fixed cost factor.

Invariants:
    - hash() output never contains the plaintext
    - verify() never raises: malformed hashes and over-long passwords return False
    - Passwords longer than 72 bytes are rejected at hash time (bcrypt truncates them)
"""

import logging

import bcrypt

from union.core.errors import ValidationFailureError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """bcrypt wrapper; rounds=10 matches the hashes already in the users table."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            raise ValidationFailureError(
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes", "password",
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            raw = password.encode("utf-8")
            if len(raw) > BCRYPT_MAX_BYTES:
                return False
            return bcrypt.checkpw(raw, hashed.encode("ascii"))
        except (ValueError, TypeError) as e:
            logger.debug(f"Password verification rejected input: {e}")
            return False
