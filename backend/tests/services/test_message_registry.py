"""Message Registry — keyed store with server-assigned timestamps."""

from datetime import datetime

import pytest

from union.core.errors import ValidationFailureError


async def test_create_and_get(messages):
    created = await messages.create("100", "1", 7, "hello")
    fetched = await messages.get("100")

    assert fetched.id == "100"
    assert fetched.author == "1"
    assert fetched.server == 7
    assert fetched.contents == "hello"
    assert isinstance(fetched.created_at, datetime)
    assert created.created_at.tzinfo is not None


async def test_update_changes_contents_only(messages):
    created = await messages.create("100", "1", 7, "hello")
    assert await messages.update("100", "edited") is True

    fetched = await messages.get("100")
    assert fetched.contents == "edited"
    assert fetched.author == created.author
    assert fetched.server == created.server


async def test_delete(messages):
    await messages.create("100", "1", 7, "hello")
    assert await messages.delete("100") is True
    assert await messages.get("100") is None
    assert await messages.delete("100") is False


async def test_missing_message(messages):
    assert await messages.get("404") is None
    assert await messages.update("404", "x") is False


async def test_empty_contents_rejected(messages):
    with pytest.raises(ValidationFailureError):
        await messages.create("100", "1", 7, "")
    with pytest.raises(ValidationFailureError):
        await messages.update("100", "")
