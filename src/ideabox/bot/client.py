"""Discord client for the IdeaBox bot."""
from __future__ import annotations

import logging

import discord
from discord.ext import commands

from ideabox.core.settings import settings
from ideabox.db.session import SessionLocal

from .cog import SessionFactory, SuggestionsCog
from .embeds import ReviewButton

logger = logging.getLogger(__name__)


def default_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.guild_reactions = True
    intents.members = False
    return intents


class IdeaBot(commands.Bot):
    """Process-wide bot client.

    The core services never see this object; the cog passes
    :meth:`fetch_member_role_ids` into the permission check instead.
    """

    def __init__(self, session_factory: SessionFactory = SessionLocal) -> None:
        super().__init__(command_prefix=commands.when_mentioned, intents=default_intents())
        self.session_factory = session_factory

    async def setup_hook(self) -> None:
        await self.add_cog(SuggestionsCog(self, self.session_factory))
        self.add_dynamic_items(ReviewButton)

        if settings.discord_command_guild_id:
            guild = discord.Object(id=settings.discord_command_guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
        else:
            synced = await self.tree.sync()
        logger.info("Registered %d application commands", len(synced))

    async def on_ready(self) -> None:
        logger.info("IdeaBox bot connected as %s", self.user)

    async def fetch_member_role_ids(self, guild_id: str, user_id: str) -> list[str]:
        """Return a guild member's live role ids.

        Raises:
            LookupError: If the guild or member cannot be found.
        """
        try:
            guild = self.get_guild(int(guild_id)) or await self.fetch_guild(int(guild_id))
            member = guild.get_member(int(user_id)) or await guild.fetch_member(int(user_id))
        except (discord.NotFound, discord.Forbidden) as err:
            raise LookupError(f"member {user_id} not found in guild {guild_id}") from err
        return [str(role.id) for role in member.roles]
