"""Core services shared by the REST API and the Discord bot."""
