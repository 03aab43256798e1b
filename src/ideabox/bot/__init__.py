"""Discord surface of IdeaBox."""
