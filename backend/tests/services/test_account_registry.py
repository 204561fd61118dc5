"""Account Registry — registration, updates, presence policy and read accessors.

Tests cover:
    - register() stores a hashed, offline account with no memberships
    - update() always re-rolls the discriminator and applies three-state fields
    - Presence failures are swallowed or propagated according to policy
    - Read accessors return None/False/empty instead of raising
"""

import pytest
from sqlalchemy import select

from union.core.errors import DatabaseError, ValidationFailureError
from union.core.patches import AccountPatch
from union.core.records import Member
from union.core.snowflake import timestamp_of
from union.models.user import User as UserModel


async def test_register_returns_tag(accounts):
    tag = await accounts.register("alice", "secret")
    name, discriminator = tag.split("#")
    assert name == "alice"
    assert len(discriminator) == 4 and discriminator.isdigit()


async def test_register_stores_offline_account_without_memberships(accounts):
    tag = await accounts.register("alice", "secret")
    account = await accounts.find_by_tag(*tag.split("#"))
    assert account.online is False
    assert account.servers == frozenset()
    assert account.admin is None
    assert account.password_hash != "secret"
    assert timestamp_of(account.id) > 0


async def test_same_username_gets_distinct_discriminators(accounts):
    tags = {await accounts.register("alice", "secret") for _ in range(20)}
    assert len(tags) == 20


async def test_ids_increase_with_registration_order(accounts):
    first = await accounts.find_by_tag(*(await accounts.register("a", "pw")).split("#"))
    second = await accounts.find_by_tag(*(await accounts.register("b", "pw")).split("#"))
    assert int(second.id) > int(first.id)


@pytest.mark.parametrize("username", ["", "   ", "al#ice", "al:ice"])
async def test_register_rejects_bad_usernames(accounts, username):
    with pytest.raises(ValidationFailureError):
        await accounts.register(username, "secret")


async def test_register_rejects_empty_password(accounts):
    with pytest.raises(ValidationFailureError):
        await accounts.register("alice", "")


async def test_update_rerolls_discriminator_and_keeps_password(accounts, credentials, alice):
    tag = await accounts.update(alice.id, AccountPatch(username="alice"))
    updated = await accounts.get(alice.id)
    assert tag == updated.tag
    assert updated.discriminator != alice.discriminator
    assert updated.password_hash == alice.password_hash


async def test_update_rehashes_new_password(accounts, credentials, alice):
    await accounts.update(alice.id, AccountPatch(username="alice", password="n3w"))
    updated = await accounts.get(alice.id)
    assert await credentials.verify("n3w", updated.password_hash)
    assert not await credentials.verify("secret", updated.password_hash)


async def test_update_renames(accounts, alice):
    tag = await accounts.update(alice.id, AccountPatch(username="alicia"))
    assert tag.startswith("alicia#")
    assert (await accounts.get(alice.id)).username == "alicia"


async def test_update_avatar_set_then_untouched_then_cleared(accounts, alice):
    await accounts.update(alice.id, AccountPatch(username="alice", avatar_url="https://x/a.png"))
    assert (await accounts.get(alice.id)).avatar_url == "https://x/a.png"

    await accounts.update(alice.id, AccountPatch(username="alice"))
    assert (await accounts.get(alice.id)).avatar_url == "https://x/a.png"

    await accounts.update(alice.id, AccountPatch(username="alice", avatar_url=None))
    assert (await accounts.get(alice.id)).avatar_url is None


async def test_update_admin_only_when_bool(accounts, alice):
    await accounts.update(alice.id, AccountPatch(username="alice", admin=True))
    assert (await accounts.get(alice.id)).admin is True
    await accounts.update(alice.id, AccountPatch(username="alice", admin=None))
    assert (await accounts.get(alice.id)).admin is True
    await accounts.update(alice.id, AccountPatch(username="alice", admin=False))
    assert (await accounts.get(alice.id)).admin is False


async def test_update_unknown_account_returns_none(accounts):
    assert await accounts.update("123", AccountPatch(username="ghost")) is None


async def test_set_presence(accounts, alice):
    assert await accounts.set_presence(alice.id, True) is True
    assert (await accounts.get(alice.id)).online is True
    await accounts.set_presence(alice.id, False)
    assert (await accounts.get(alice.id)).online is False


async def _drop_users_table(db_manager):
    async with db_manager.engine.begin() as conn:
        await conn.run_sync(UserModel.__table__.drop)


async def test_presence_failure_is_suppressed_by_default(accounts, alice, db_manager):
    await _drop_users_table(db_manager)
    assert await accounts.set_presence(alice.id, True) is False


async def test_presence_failure_propagates_when_policy_disabled(accounts, alice, db_manager):
    await _drop_users_table(db_manager)
    with pytest.raises(DatabaseError):
        await accounts.set_presence(alice.id, True, suppress_errors=False)


async def test_presence_policy_from_constructor(accounts, alice, db_manager):
    accounts.suppress_presence_errors = False
    await _drop_users_table(db_manager)
    with pytest.raises(DatabaseError):
        await accounts.set_presence(alice.id, True)


def _refuse_connections(accounts, monkeypatch):
    def session():
        raise ConnectionRefusedError("store unreachable")

    monkeypatch.setattr(accounts._db, "session", session)


async def test_connection_failure_is_suppressed_by_default(accounts, alice, monkeypatch):
    _refuse_connections(accounts, monkeypatch)
    assert await accounts.set_presence(alice.id, True) is False


async def test_connection_failure_propagates_when_policy_disabled(
    accounts, alice, monkeypatch,
):
    _refuse_connections(accounts, monkeypatch)
    with pytest.raises(ConnectionRefusedError):
        await accounts.set_presence(alice.id, True, suppress_errors=False)


async def test_reset_all_presence(accounts, db_manager, alice, bob):
    await accounts.set_presence(alice.id, True)
    await accounts.set_presence(bob.id, True)

    assert await accounts.reset_all_presence() == 2

    async with db_manager.session() as db:
        online = (await db.execute(select(UserModel).where(UserModel.online.is_(True)))).all()
    assert online == []


async def test_delete_removes_account_but_not_owned_servers(accounts, servers, alice):
    server = await servers.create("Guild", None, alice.id)
    assert await accounts.delete(alice.id) is True

    assert await accounts.get(alice.id) is None
    remaining = await servers.get(server.id)
    assert remaining is not None
    assert remaining.members == []


async def test_delete_unknown_account_returns_false(accounts):
    assert await accounts.delete("999") is False


async def test_get_member_strips_private_fields(accounts, alice):
    member = await accounts.get_member(alice.id)
    assert isinstance(member, Member)
    assert not hasattr(member, "password_hash")
    assert not hasattr(member, "servers")
    assert member.tag == alice.tag


async def test_missing_accounts_read_as_empty(accounts):
    assert await accounts.get("1") is None
    assert await accounts.get_member("1") is None
    assert await accounts.server_ids_of("1") == set()
    assert await accounts.servers_of("1") == []
    assert await accounts.owned_server_count("1") == 0
    assert await accounts.is_in_server("1", 1) is False
    assert await accounts.owns_server("1", 1) is False


async def test_membership_accessors(accounts, servers, alice, bob):
    first = await servers.create("One", None, alice.id)
    second = await servers.create("Two", None, alice.id)
    await servers.join_member(bob.id, first.id)

    assert await accounts.server_ids_of(alice.id) == {first.id, second.id}
    assert await accounts.owned_server_count(alice.id) == 2
    assert await accounts.owned_server_count(bob.id) == 0
    assert await accounts.is_in_server(bob.id, first.id) is True
    assert await accounts.is_in_server(bob.id, second.id) is False
    assert await accounts.owns_server(alice.id, first.id) is True
    assert await accounts.owns_server(bob.id, first.id) is False
    assert {m.id for m in await accounts.members_of(first.id)} == {alice.id, bob.id}

    listed = await accounts.servers_of(bob.id)
    assert [s.id for s in listed] == [first.id]
    assert {m.id for m in listed[0].members} == {alice.id, bob.id}
