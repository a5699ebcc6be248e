"""Story model.

A STAR-format interview story owned by a single user.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base, UTCDateTime
from .user import _new_id, _utcnow

if TYPE_CHECKING:
    from .user import User

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
CategoriesType = JSON().with_variant(JSONB(), "postgresql")


class Story(Base):
    """Story model - one Situation/Action/Result answer with category tags."""

    __tablename__ = "stories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    title: Mapped[str] = mapped_column(Text)
    categories: Mapped[list[str]] = mapped_column(CategoriesType, default=list)
    situation: Mapped[str] = mapped_column(Text, default="")
    action: Mapped[str] = mapped_column(Text, default="")
    result: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=_utcnow,
        index=True,
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="stories")

    def __repr__(self) -> str:
        return f"<Story(id={self.id}, title='{self.title}')>"
