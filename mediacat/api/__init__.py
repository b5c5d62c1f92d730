"""API routes."""

from .folders import router as folders_router
from .users import router as users_router

__all__ = [
    "folders_router",
    "users_router",
]
