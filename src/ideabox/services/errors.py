"""Exceptions raised by the IdeaBox core services.

Both surfaces translate these: the REST API through a single exception
handler keyed on ``status_code`` and the Discord bot into ephemeral replies.
"""


class IdeaBoxError(RuntimeError):
    """Base exception for expected, non-retryable domain failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(IdeaBoxError):
    """Raised when a referenced idea or actor does not exist."""

    status_code = 404


class IdeaNotFoundError(NotFoundError):
    """Raised when an idea id does not resolve."""

    def __init__(self, idea_id: int) -> None:
        super().__init__(f"Idea {idea_id} not found")
        self.idea_id = idea_id


class ActorNotFoundError(NotFoundError):
    """Raised when an actor lookup does not resolve."""

    def __init__(self, reference: str) -> None:
        super().__init__("User not found")
        self.reference = reference


class VotingClosedError(IdeaBoxError):
    """Raised when a vote targets an idea that no longer accepts votes."""

    status_code = 409

    def __init__(self, idea_id: int, status: str) -> None:
        super().__init__(f"Voting is closed for idea {idea_id} ({status})")
        self.idea_id = idea_id
        self.status = status


class ForbiddenError(IdeaBoxError):
    """Raised when an actor lacks the role required for an action."""

    status_code = 403


class InvalidTransitionError(IdeaBoxError):
    """Raised when a status change is requested on an idea that is not pending."""

    status_code = 409

    def __init__(self, idea_id: int, current: str, requested: str) -> None:
        super().__init__(
            f"Idea {idea_id} is already {current}; cannot change it to {requested}"
        )
        self.idea_id = idea_id
        self.current = current
        self.requested = requested


class InvalidRoleError(IdeaBoxError):
    """Raised when a role name is not one of the known roles."""

    status_code = 400
