"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import AsyncMock, MagicMock

import hikari
import pytest

# Disable logging during tests
logging.disable(logging.CRITICAL)


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: float = 1349852318000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_message():
    """Factory for messages exposing ``content`` and an async ``reply``."""

    def factory(content: str = "", guild_id: int | None = 123456789):
        message = MagicMock()
        message.content = content
        message.guild_id = guild_id
        message.reply = AsyncMock()
        return message

    return factory


@pytest.fixture
def mock_hikari_bot():
    """Mock Hikari bot instance."""
    bot = MagicMock(spec=hikari.GatewayBot)
    bot.cache = MagicMock()
    bot.rest = MagicMock()
    bot.cache.get_member = MagicMock(return_value=None)
    bot.rest.fetch_member = AsyncMock()
    bot.subscribe = MagicMock()
    return bot


@pytest.fixture
def mock_user():
    """Mock Discord user."""
    user = MagicMock(spec=hikari.User)
    user.id = 111111111
    user.username = "testuser"
    user.is_bot = False
    user.mention = "<@111111111>"
    return user


@pytest.fixture
def mock_member(mock_user):
    """Mock Discord member."""
    member = MagicMock(spec=hikari.Member)
    member.id = mock_user.id
    member.username = mock_user.username
    member.display_name = "Test User"
    member.user = mock_user
    return member


@pytest.fixture
def mock_message_event(mock_user, mock_member):
    """Mock message create event."""
    event = MagicMock(spec=hikari.GuildMessageCreateEvent)
    event.author = mock_user
    event.member = mock_member
    event.guild_id = 123456789
    event.channel_id = 444444444
    event.content = "!test command"
    event.message = MagicMock()
    event.message.respond = AsyncMock()
    return event
