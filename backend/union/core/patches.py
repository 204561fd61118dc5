"""Partial Updates — explicit three-state fields for account and server updates.

Invariants:
    - Every patch field is in exactly one state: UNSET (leave alone), None (clear), or a value
    - Fields that cannot be cleared (username, server name, password, admin)
      treat None the same as UNSET
    - column_changes() is deterministic and never contains UNSET

Design Decisions:
    - Enum sentinel over a bare object(): survives pickling/copy and reads well in reprs
    - Patches are pure data; hashing the new password stays in the registry
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


def is_set(value: Any) -> bool:
    return value is not UNSET


@dataclass(frozen=True)
class AccountPatch:
    """Changes for AccountRegistry.update. username is always written."""
    username: str
    password: str | None | _Unset = UNSET
    avatar_url: str | None | _Unset = UNSET
    admin: bool | None | _Unset = UNSET

    def new_password(self) -> str | None:
        """Plaintext to rehash, or None when the password stays as is."""
        if isinstance(self.password, str) and self.password:
            return self.password
        return None

    def column_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {"username": self.username}
        if is_set(self.avatar_url):
            changes["avatar_url"] = self.avatar_url
        if isinstance(self.admin, bool):
            changes["admin"] = self.admin
        return changes


@dataclass(frozen=True)
class ServerPatch:
    """Changes for ServerRegistry.update. Empty patch is a no-op."""
    name: str | None | _Unset = UNSET
    icon_url: str | None | _Unset = UNSET

    def column_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if isinstance(self.name, str) and self.name:
            changes["name"] = self.name
        if is_set(self.icon_url):
            changes["icon_url"] = self.icon_url
        return changes
