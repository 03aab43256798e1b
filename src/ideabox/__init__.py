"""IdeaBox: idea submission and voting for a web dashboard and a Discord bot."""

__version__ = "1.0.0"
