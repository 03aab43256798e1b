"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .ideas import router as ideas_router
from .system import health_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "health_router",
    "ideas_router",
    "system_router",
    "users_router",
]
