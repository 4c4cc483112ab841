"""Bridges a hikari gateway bot to a :class:`CommandDispatcher`."""

import logging
from typing import Any

import hikari

from ..core.dispatcher import CommandDispatcher
from ..core.results import InvocationResult

logger = logging.getLogger(__name__)


class HikariMessage:
    """Exposes a guild message event through the ``content`` / ``reply`` contract."""

    def __init__(self, event: hikari.GuildMessageCreateEvent) -> None:
        self.event = event

        self.author = event.author
        self.member = event.member
        self.guild_id = event.guild_id
        self.channel_id = event.channel_id

    @property
    def content(self) -> str:
        return self.event.content or ""

    async def reply(self, text: str) -> None:
        await self.event.message.respond(text)


class HikariMemberResolver:
    """Looks up guild members in the gateway cache, falling back to REST."""

    def __init__(self, app: hikari.GatewayBot) -> None:
        self.app = app

    async def resolve(self, member_id: str, message: Any) -> hikari.Member | None:
        guild_id = getattr(message, "guild_id", None)
        if not guild_id:
            return None

        user_id = int(member_id)
        member = self.app.cache.get_member(guild_id, user_id)
        if member:
            return member

        try:
            return await self.app.rest.fetch_member(guild_id, user_id)
        except hikari.NotFoundError:
            logger.debug(f"Member {user_id} not found in guild {guild_id}")
            return None


def subscribe(app: hikari.GatewayBot, dispatcher: CommandDispatcher):
    """Dispatch every guild message from a non-bot author.

    Returns the registered callback so the host can unsubscribe it.
    """

    async def on_guild_message(event: hikari.GuildMessageCreateEvent) -> InvocationResult | None:
        if event.author.is_bot:
            return None
        return await dispatcher.process_message(HikariMessage(event))

    app.subscribe(hikari.GuildMessageCreateEvent, on_guild_message)
    logger.debug("Subscribed command dispatcher to guild messages")
    return on_guild_message
