"""Pytest fixtures for the bot startup tests."""

from unittest.mock import AsyncMock

import pytest

from core.context import BotContext, BotIdentity


@pytest.fixture
def identity() -> BotIdentity:
    return BotIdentity(id=4242, username="examplebot", first_name="Example")


@pytest.fixture
def bot_context() -> BotContext:
    return BotContext()


@pytest.fixture
def no_sleep() -> AsyncMock:
    """Stand-in for asyncio.sleep that records the requested delays."""
    return AsyncMock(return_value=None)
