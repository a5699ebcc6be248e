"""Database models for Prepository.

SQLAlchemy models for:
- Users
- Stories

All models use async SQLAlchemy (asyncpg for PostgreSQL, aiosqlite locally).
"""

from .database import Base, UTCDateTime, close_db, create_tables, get_engine, get_session, init_db
from .story import Story
from .user import User

__all__ = [
    # Database
    "Base",
    "UTCDateTime",
    "init_db",
    "create_tables",
    "get_session",
    "get_engine",
    "close_db",
    # Models
    "User",
    "Story",
]
