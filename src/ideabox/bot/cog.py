"""Slash commands, review buttons and reaction voting for the IdeaBox bot."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ideabox.models import IdeaCategory, IdeaStatus, Role
from ideabox.repositories import ActorRepository, IdeaRepository
from ideabox.services.actors import assign_role, ensure_discord_actor
from ideabox.services.errors import IdeaBoxError
from ideabox.services.ideas import submit_idea
from ideabox.services.permissions import can_approve, can_manage_bot_config
from ideabox.services.status import set_status

from .embeds import idea_embed, review_view, with_status
from .reactions import (
    DOWNVOTE_EMOJI,
    UPVOTE_EMOJI,
    ReactionEvent,
    handle_reaction_add,
    handle_reaction_remove,
)

if TYPE_CHECKING:
    from .client import IdeaBot

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]

ROLE_CHOICES = [app_commands.Choice(name=role.value, value=role.value) for role in Role]


def _actor_fields(user: discord.abc.User) -> dict[str, str | None]:
    return {
        "username": user.name,
        "display_name": user.display_name,
        "avatar": user.display_avatar.key,
    }


class SuggestionsCog(commands.Cog, name="Suggestions"):
    """Suggestion submission and review inside Discord guilds."""

    def __init__(self, bot: IdeaBot, session_factory: SessionFactory) -> None:
        self.bot = bot
        self.session_factory = session_factory

    # Commands

    @app_commands.command(name="suggest", description="Submit a new suggestion")
    @app_commands.describe(title="Suggestion title", description="Detailed description")
    @app_commands.guild_only()
    async def suggest(
        self,
        interaction: discord.Interaction,
        title: app_commands.Range[str, 1, 200],
        description: app_commands.Range[str, 1, 4000],
    ) -> None:
        user = interaction.user
        with self.session_factory() as db:
            actors = ActorRepository(db)
            author = ensure_discord_actor(actors, str(user.id), **_actor_fields(user))
            idea = submit_idea(
                IdeaRepository(db),
                author=author,
                title=title,
                description=description,
                category=IdeaCategory.GENERAL,
            )
            idea_id = idea.id
            embed = idea_embed(idea, user.display_name)
            config = actors.get_server_config(str(interaction.guild_id))
            channel_id = config.suggestions_channel_id if config else None

        channel = await self._resolve_channel(channel_id)
        view = review_view(idea_id)
        if channel is not None and channel.id != interaction.channel_id:
            message = await channel.send(embed=embed, view=view)
            await interaction.response.send_message(
                f"✅ Suggestion sent to {channel.mention}", ephemeral=True
            )
        else:
            await interaction.response.send_message(embed=embed, view=view)
            message = await interaction.original_response()

        await message.add_reaction(UPVOTE_EMOJI)
        await message.add_reaction(DOWNVOTE_EMOJI)

        with self.session_factory() as db:
            ideas = IdeaRepository(db)
            ideas.attach_message(idea_id, message_id=str(message.id), channel_id=str(message.channel.id))
            ideas.commit()

    @app_commands.command(
        name="config-permissions",
        description="Toggle a role's permission to approve or reject suggestions",
    )
    @app_commands.describe(role="Role that may approve or reject suggestions")
    @app_commands.guild_only()
    async def config_permissions(self, interaction: discord.Interaction, role: discord.Role) -> None:
        with self.session_factory() as db:
            actors = ActorRepository(db)
            actor = ensure_discord_actor(actors, str(interaction.user.id), **_actor_fields(interaction.user))
            if not can_manage_bot_config(actor):
                await interaction.response.send_message(
                    "❌ Only administrators can configure permissions", ephemeral=True
                )
                return
            granted = actors.toggle_approval_role(str(interaction.guild_id), str(role.id))
            actors.commit()

        if granted:
            content = f"✅ Members with {role.mention} can now approve and reject suggestions"
        else:
            content = f"✅ {role.mention} can no longer approve or reject suggestions"
        await interaction.response.send_message(content)

    @app_commands.command(name="config-channel", description="Set the channel suggestions are posted to")
    @app_commands.describe(channel="Channel for new suggestions")
    @app_commands.guild_only()
    async def config_channel(
        self,
        interaction: discord.Interaction,
        channel: discord.TextChannel,
    ) -> None:
        with self.session_factory() as db:
            actors = ActorRepository(db)
            actor = ensure_discord_actor(actors, str(interaction.user.id), **_actor_fields(interaction.user))
            if not can_manage_bot_config(actor):
                await interaction.response.send_message(
                    "❌ Only administrators can configure the channel", ephemeral=True
                )
                return
            actors.set_suggestions_channel(str(interaction.guild_id), str(channel.id))
            actors.commit()

        await interaction.response.send_message(f"✅ Suggestions channel set to {channel.mention}")

    @app_commands.command(name="set-role", description="Assign an IdeaBox role to a member")
    @app_commands.describe(member="Member to update", role="Role to assign")
    @app_commands.choices(role=ROLE_CHOICES)
    @app_commands.guild_only()
    async def set_role(
        self,
        interaction: discord.Interaction,
        member: discord.Member,
        role: app_commands.Choice[str],
    ) -> None:
        with self.session_factory() as db:
            actors = ActorRepository(db)
            actor = ensure_discord_actor(actors, str(interaction.user.id), **_actor_fields(interaction.user))
            target = ensure_discord_actor(actors, str(member.id), **_actor_fields(member))
            try:
                assign_role(actors, actor, target, role.value)
            except IdeaBoxError as err:
                await interaction.response.send_message(f"❌ {err.message}", ephemeral=True)
                return

        await interaction.response.send_message(
            f"✅ {member.mention} is now `{role.value}`", ephemeral=True
        )

    async def cog_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        logger.error("Command %s failed", interaction.command, exc_info=error)
        content = "An error occurred while processing the command"
        if interaction.response.is_done():
            await interaction.followup.send(content, ephemeral=True)
        else:
            await interaction.response.send_message(content, ephemeral=True)

    # Review buttons

    async def review(
        self,
        interaction: discord.Interaction,
        idea_id: int,
        requested: IdeaStatus,
    ) -> None:
        """Approve or reject an idea from its message buttons."""
        user_id = str(interaction.user.id)
        guild_id = str(interaction.guild_id) if interaction.guild_id else None
        with self.session_factory() as db:
            actors = ActorRepository(db)
            actor = ensure_discord_actor(actors, user_id, **_actor_fields(interaction.user))
            allowed = await can_approve(
                user_id,
                guild_id,
                repo=actors,
                fetch_member_role_ids=self.bot.fetch_member_role_ids,
            )
            try:
                set_status(IdeaRepository(db), idea_id, requested, actor, authorized=allowed)
            except IdeaBoxError as err:
                await interaction.response.send_message(f"❌ {err.message}", ephemeral=True)
                return

        embeds = interaction.message.embeds if interaction.message else []
        if embeds:
            await interaction.response.edit_message(embed=with_status(embeds[0], requested), view=None)
        else:
            await interaction.response.edit_message(view=None)

    # Reaction voting

    def _is_bot(self, payload: discord.RawReactionActionEvent) -> bool:
        if payload.member is not None:
            return payload.member.bot
        if self.bot.user is not None and payload.user_id == self.bot.user.id:
            return True
        user = self.bot.get_user(payload.user_id)
        return bool(user and user.bot)

    def _reaction_event(self, payload: discord.RawReactionActionEvent) -> ReactionEvent:
        member = payload.member
        return ReactionEvent(
            message_id=str(payload.message_id),
            user_id=str(payload.user_id),
            emoji=str(payload.emoji),
            is_bot=self._is_bot(payload),
            username=member.name if member else None,
            display_name=member.display_name if member else None,
        )

    @commands.Cog.listener()
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        event = self._reaction_event(payload)
        try:
            with self.session_factory() as db:
                handle_reaction_add(db, event)
        except SQLAlchemyError:
            logger.exception("Failed to record reaction vote on message %s", payload.message_id)

    @commands.Cog.listener()
    async def on_raw_reaction_remove(self, payload: discord.RawReactionActionEvent) -> None:
        event = self._reaction_event(payload)
        try:
            with self.session_factory() as db:
                handle_reaction_remove(db, event)
        except SQLAlchemyError:
            logger.exception("Failed to retract reaction vote on message %s", payload.message_id)

    # Helpers

    async def _resolve_channel(self, channel_id: str | None) -> discord.abc.Messageable | None:
        if not channel_id:
            return None
        channel = self.bot.get_channel(int(channel_id))
        if channel is not None:
            return channel  # type: ignore[return-value]
        try:
            return await self.bot.fetch_channel(int(channel_id))  # type: ignore[return-value]
        except discord.HTTPException:
            logger.warning("Configured suggestions channel %s is unavailable", channel_id)
            return None
