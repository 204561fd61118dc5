"""Partial Updates — UNSET vs None vs value for account and server patches."""

import copy

from union.core.patches import UNSET, AccountPatch, ServerPatch, is_set


def test_unset_is_falsy_and_distinct_from_none():
    assert not UNSET
    assert UNSET is not None
    assert is_set(None)
    assert not is_set(UNSET)
    assert repr(UNSET) == "UNSET"


def test_unset_survives_copy():
    assert copy.deepcopy(UNSET) is UNSET


def test_account_patch_with_only_username():
    patch = AccountPatch(username="alice")
    assert patch.column_changes() == {"username": "alice"}
    assert patch.new_password() is None


def test_account_patch_none_avatar_clears_it():
    patch = AccountPatch(username="alice", avatar_url=None)
    assert patch.column_changes() == {"username": "alice", "avatar_url": None}


def test_account_patch_sets_avatar_and_admin():
    patch = AccountPatch(username="alice", avatar_url="https://x/a.png", admin=False)
    assert patch.column_changes() == {
        "username": "alice", "avatar_url": "https://x/a.png", "admin": False,
    }


def test_account_patch_ignores_none_admin_and_empty_password():
    patch = AccountPatch(username="alice", admin=None, password="")
    assert patch.column_changes() == {"username": "alice"}
    assert patch.new_password() is None


def test_account_patch_exposes_new_password():
    assert AccountPatch(username="alice", password="n3w").new_password() == "n3w"


def test_server_patch_empty_is_noop():
    assert ServerPatch().column_changes() == {}


def test_server_patch_none_name_is_ignored_none_icon_clears():
    patch = ServerPatch(name=None, icon_url=None)
    assert patch.column_changes() == {"icon_url": None}


def test_server_patch_sets_name():
    assert ServerPatch(name="Guild").column_changes() == {"name": "Guild"}
