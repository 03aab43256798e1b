"""Process-level logging setup shared by the web app and the bot."""

from __future__ import annotations

import logging

from ideabox.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the running process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # discord.py is chatty at DEBUG/INFO about gateway heartbeats.
    logging.getLogger("discord").setLevel(logging.WARNING)
