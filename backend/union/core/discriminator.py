"""Discriminator Resolver — picks a free 4-digit suffix for a username.

Invariants:
    - Returned value is always in "0001".."9999" and was not in use at probe time
    - Never loops forever: at most max_probes random probes, then one exhaustive read
    - DiscriminatorExhaustedError when all 9999 values are taken for the username

Design Decisions:
    - Random probing first: O(1) reads while the namespace is sparse (the common case)
    - Exhaustive fallback picks uniformly from the free set, so a nearly full
      namespace still resolves instead of failing on bad luck
    - Check-then-insert is NOT atomic. Two concurrent registrations of the
      same username can pick the same value; the users table's unique
      (username, discriminator) constraint turns the loser into a DatabaseError
"""

import logging
import random

from union.core.domain_types import (
    DISCRIMINATOR_MAX, DISCRIMINATOR_MIN, Discriminator, format_discriminator,
)
from union.core.errors import DiscriminatorExhaustedError
from union.core.repository_protocols import DiscriminatorLookup

logger = logging.getLogger(__name__)

ALL_DISCRIMINATORS: tuple[Discriminator, ...] = tuple(
    format_discriminator(n) for n in range(DISCRIMINATOR_MIN, DISCRIMINATOR_MAX + 1)
)


def roll_discriminator(rng: random.Random) -> Discriminator:
    """Draw uniformly from 0001..9999."""
    return format_discriminator(rng.randint(DISCRIMINATOR_MIN, DISCRIMINATOR_MAX))


class DiscriminatorResolver:
    """Bounded retry loop over a DiscriminatorLookup."""

    def __init__(
        self,
        lookup: DiscriminatorLookup,
        max_probes: int = 32,
        rng: random.Random | None = None,
    ):
        if max_probes < 1:
            raise ValueError("max_probes must be at least 1")
        self._lookup = lookup
        self._max_probes = max_probes
        self._rng = rng or random.Random()

    async def resolve(self, username: str) -> Discriminator:
        for _ in range(self._max_probes):
            candidate = roll_discriminator(self._rng)
            if not await self._lookup.discriminator_taken(username, candidate):
                return candidate

        taken = await self._lookup.discriminators_in_use(username)
        free = [d for d in ALL_DISCRIMINATORS if d not in taken]
        if not free:
            logger.warning(f"Discriminator namespace exhausted for '{username}'")
            raise DiscriminatorExhaustedError(username)
        logger.info(
            f"Random probing missed {self._max_probes} times for '{username}', "
            f"picking from {len(free)} free values",
        )
        return self._rng.choice(free)
