"""Backend services for Prepository.

Services hold the business rules between the HTTP routers and the
database. Each one is bound to a single request-scoped session.

Services:
- story_service: owner-scoped story CRUD
- user_service: signup, login and user lookup
"""

from .story_service import StoryInput, StoryPatch, StoryService
from .user_service import UserService

__all__ = [
    "StoryInput",
    "StoryPatch",
    "StoryService",
    "UserService",
]
