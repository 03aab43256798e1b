"""Health, bot status and statistics endpoints."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ideabox.api.v1.dependencies import IdeaRepoDep, ModeratorDep
from ideabox.core.settings import settings
from ideabox.db.time import utcnow
from ideabox.schemas import IdeaStats
from ideabox.services.ideas import idea_stats

router = APIRouter(prefix="/system", tags=["system"])
health_router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()

BOT_COMMANDS = ["suggest", "config-permissions", "config-channel", "set-role"]


def _uptime() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


@router.get("/stats", response_model=IdeaStats)
async def get_stats(moderator: ModeratorDep, repo: IdeaRepoDep) -> dict[str, int]:
    """Return how many ideas are pending, approved and rejected."""
    return idea_stats(repo)


@health_router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint for uptime monitors."""
    return {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "uptime": _uptime(),
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@health_router.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    return "pong"


@health_router.get("/bot-status")
async def bot_status(request: Request) -> dict[str, Any]:
    """Report whether the Discord bot is connected in this process."""
    bot = getattr(request.app.state, "bot", None)
    connected = bool(bot is not None and bot.is_ready())
    return {
        "bot": "active" if connected else "inactive",
        "enabled": settings.bot_enabled,
        "timestamp": utcnow().isoformat(),
        "uptime": _uptime(),
        "commands": BOT_COMMANDS,
    }
