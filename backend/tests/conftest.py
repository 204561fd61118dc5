"""Root conftest — shared test configuration and registry fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - bcrypt runs at its minimum cost (4) so hashing stays fast
    - The discriminator RNG is seeded: resolution is reproducible

Design Decisions:
    - StaticPool: all sessions share the single in-memory connection, so the
      tables created by create_all are visible to every registry call
"""

import os
import random

# Never point tests at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from union.config import Settings  # noqa: E402
from union.infrastructure.database import DatabaseSessionManager  # noqa: E402
from union.services.registries import build_registries  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        password_hash_rounds=4,
        discriminator_max_probes=8,
        log_format="text",
    )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    manager = DatabaseSessionManager(test_engine)
    await manager.create_all()
    return manager


@pytest.fixture
def registries(db_manager, settings):
    return build_registries(db_manager, settings, rng=random.Random(2018))


@pytest.fixture
def accounts(registries):
    return registries.accounts


@pytest.fixture
def servers(registries):
    return registries.servers


@pytest.fixture
def invites(registries):
    return registries.invites


@pytest.fixture
def messages(registries):
    return registries.messages


@pytest.fixture
def credentials(registries):
    return registries.credentials


@pytest.fixture
async def alice(accounts):
    """Registered account 'alice' with password 'secret'."""
    tag = await accounts.register("alice", "secret")
    name, discriminator = tag.split("#")
    return await accounts.find_by_tag(name, discriminator)


@pytest.fixture
async def bob(accounts):
    """Registered account 'bob' with password 'hunter2'."""
    tag = await accounts.register("bob", "hunter2")
    name, discriminator = tag.split("#")
    return await accounts.find_by_tag(name, discriminator)
