# mypy: ignore-errors
"""Tests for suggestion embeds and review buttons."""

import re

import discord
import pytest

from ideabox.bot.embeds import (
    AUTHOR_FIELD,
    STATUS_FIELD,
    ReviewButton,
    idea_embed,
    review_view,
    status_label,
    with_status,
)
from ideabox.models import IdeaStatus


def _field(embed, name):
    return next(field.value for field in embed.fields if field.name == name)


def test_idea_embed(pending_idea) -> None:
    embed = idea_embed(pending_idea, "Alice")

    assert embed.title == f"💡 {pending_idea.title}"
    assert embed.description == pending_idea.description
    assert _field(embed, STATUS_FIELD) == status_label(IdeaStatus.PENDING)
    assert _field(embed, AUTHOR_FIELD) == "Alice"
    assert f"#{pending_idea.id}" in embed.footer.text


def test_with_status_keeps_author_and_original(pending_idea) -> None:
    original = idea_embed(pending_idea, "Alice")

    updated = with_status(original, IdeaStatus.APPROVED)

    assert _field(updated, STATUS_FIELD) == "✅ Approved"
    assert _field(updated, AUTHOR_FIELD) == "Alice"
    assert _field(original, STATUS_FIELD) == "🟡 Pending"
    assert _field(original, AUTHOR_FIELD) == "Alice"
    assert updated.title == original.title
    assert updated.footer.text == original.footer.text


def test_unknown_status_label_passes_through() -> None:
    assert status_label("archived") == "archived"


@pytest.mark.asyncio
async def test_review_view_custom_ids() -> None:
    view = review_view(42)

    custom_ids = sorted(item.custom_id for item in view.children)
    assert custom_ids == ["review:approve:42", "review:reject:42"]
    assert view.timeout is None
    assert view.is_persistent()


@pytest.mark.asyncio
async def test_review_button_from_custom_id() -> None:
    match = re.fullmatch(r"review:(?P<action>approve|reject):(?P<idea_id>[0-9]+)", "review:reject:7")
    button = await ReviewButton.from_custom_id(None, discord.ui.Button(), match)

    assert button.idea_id == 7
    assert button.requested_status is IdeaStatus.REJECTED
