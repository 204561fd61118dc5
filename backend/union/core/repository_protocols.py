"""Boundary Protocols — contracts between core and the persistence shell.

Invariants:
    - Core NEVER imports from services/ or models/ — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the registries via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations hit the database, the core loops await them
"""

from typing import Protocol

from union.core.domain_types import Discriminator
from union.core.records import Account


class DiscriminatorLookup(Protocol):
    """Read side of the account namespace, used by DiscriminatorResolver."""
    async def discriminator_taken(
        self, username: str, discriminator: Discriminator,
    ) -> bool: ...
    async def discriminators_in_use(self, username: str) -> set[str]: ...


class AccountLookup(Protocol):
    """Tag lookup used by CredentialService."""
    async def find_by_tag(
        self, username: str, discriminator: str,
    ) -> Account | None: ...
