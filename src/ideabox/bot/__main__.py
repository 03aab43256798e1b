"""Run the IdeaBox Discord bot on its own: ``python -m ideabox.bot``."""
from __future__ import annotations

import logging
import sys

from ideabox.core.logging import configure_logging
from ideabox.core.settings import settings

from .client import IdeaBot

logger = logging.getLogger("ideabox.bot")


def main() -> int:
    configure_logging()
    if not settings.discord_bot_token:
        logger.error(
            "DISCORD_BOT_TOKEN is not set. Create a bot application in the Discord "
            "developer portal and export its token as DISCORD_BOT_TOKEN."
        )
        return 1
    IdeaBot().run(settings.discord_bot_token, log_handler=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
