"""Embed and button builders for suggestion messages."""
from __future__ import annotations

import copy
import re

import discord

from ideabox.models import Idea, IdeaStatus

EMBED_COLOR = 0x3498DB
FOOTER_TEXT = "IdeaBox suggestions"
STATUS_FIELD = "Status"
AUTHOR_FIELD = "Author"

STATUS_LABELS: dict[str, str] = {
    IdeaStatus.PENDING: "🟡 Pending",
    IdeaStatus.APPROVED: "✅ Approved",
    IdeaStatus.REJECTED: "❌ Rejected",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def idea_embed(idea: Idea, author_name: str) -> discord.Embed:
    """Build the embed a new suggestion is posted with."""
    embed = discord.Embed(
        title=f"💡 {idea.title}",
        description=idea.description,
        color=EMBED_COLOR,
        timestamp=idea.created_at,
    )
    embed.add_field(name=STATUS_FIELD, value=status_label(idea.status), inline=True)
    embed.add_field(name=AUTHOR_FIELD, value=author_name, inline=True)
    embed.set_footer(text=f"{FOOTER_TEXT} · #{idea.id}")
    return embed


def with_status(embed: discord.Embed, status: str) -> discord.Embed:
    """Return a copy of ``embed`` whose status field shows ``status``."""
    # Embed.copy() shares the field list with the original.
    updated = discord.Embed.from_dict(copy.deepcopy(embed.to_dict()))
    author = next(
        (field.value for field in updated.fields if field.name == AUTHOR_FIELD),
        "Unknown",
    )
    updated.clear_fields()
    updated.add_field(name=STATUS_FIELD, value=status_label(status), inline=True)
    updated.add_field(name=AUTHOR_FIELD, value=author, inline=True)
    return updated


class ReviewButton(
    discord.ui.DynamicItem[discord.ui.Button],
    template=r"review:(?P<action>approve|reject):(?P<idea_id>[0-9]+)",
):
    """Approve/reject button that survives bot restarts.

    The idea id lives in the custom id, so no view state is kept in memory.
    """

    def __init__(self, action: str, idea_id: int) -> None:
        approve = action == "approve"
        super().__init__(
            discord.ui.Button(
                label="✅ Approve" if approve else "❌ Reject",
                style=discord.ButtonStyle.success if approve else discord.ButtonStyle.danger,
                custom_id=f"review:{action}:{idea_id}",
            )
        )
        self.action = action
        self.idea_id = idea_id

    @property
    def requested_status(self) -> IdeaStatus:
        return IdeaStatus.APPROVED if self.action == "approve" else IdeaStatus.REJECTED

    @classmethod
    async def from_custom_id(
        cls,
        interaction: discord.Interaction,
        item: discord.ui.Button,
        match: re.Match[str],
        /,
    ) -> ReviewButton:
        return cls(match["action"], int(match["idea_id"]))

    async def callback(self, interaction: discord.Interaction) -> None:
        cog = interaction.client.get_cog("Suggestions")  # type: ignore[attr-defined]
        await cog.review(interaction, self.idea_id, self.requested_status)


def review_view(idea_id: int) -> discord.ui.View:
    """Return the approve/reject buttons for an idea."""
    view = discord.ui.View(timeout=None)
    view.add_item(ReviewButton("approve", idea_id))
    view.add_item(ReviewButton("reject", idea_id))
    return view
