"""API routers for different endpoint groups.

Routers:
- auth: Signup, login and current user
- health: Health check
- stories: Owner-scoped story CRUD
"""

from .auth import router as auth_router
from .health import router as health_router
from .stories import router as stories_router

__all__ = [
    "auth_router",
    "health_router",
    "stories_router",
]
