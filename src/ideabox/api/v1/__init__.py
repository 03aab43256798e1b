"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    health_router,
    ideas_router,
    system_router,
    users_router,
)

__all__ = [
    "auth_router",
    "health_router",
    "ideas_router",
    "system_router",
    "users_router",
]
