"""Story service with owner-scoped CRUD.

Every read and write is filtered by the caller's owner id. A story that
exists but belongs to someone else is reported exactly like a missing one,
so non-owners cannot probe for ids.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select

from prepository.core.errors import NotFoundError, ValidationError
from prepository.models.story import Story
from prepository.models.user import User

from .base import BaseService, store_guard

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "situation", "action", "result")


@dataclass
class StoryInput:
    """Fields for a new story."""

    title: str
    categories: list[str]
    situation: str | None = None
    action: str | None = None
    result: str | None = None


@dataclass
class StoryPatch:
    """Partial update; ``None`` means the field was not supplied."""

    title: str | None = None
    categories: list[str] | None = None
    situation: str | None = None
    action: str | None = None
    result: str | None = None


def _is_text(value: object) -> bool:
    return isinstance(value, str) and value != ""


def _is_categories(value: object) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(_is_text(c) for c in value)
    )


def validate_story_input(data: StoryInput) -> None:
    """Check required fields of a new story.

    Raises:
        ValidationError: Naming every offending field
    """
    invalid = []
    if not _is_text(data.title):
        invalid.append("title")
    if not _is_categories(data.categories):
        invalid.append("categories")
    for name in ("situation", "action", "result"):
        value = getattr(data, name)
        if value is not None and not isinstance(value, str):
            invalid.append(name)

    if invalid:
        raise ValidationError(f"Invalid fields: {', '.join(invalid)}", fields=invalid)


def eligible_changes(patch: StoryPatch) -> dict[str, object]:
    """Return only the patch fields that may overwrite stored values."""
    changes: dict[str, object] = {}
    for name in TEXT_FIELDS:
        value = getattr(patch, name)
        if _is_text(value):
            changes[name] = value
    if _is_categories(patch.categories):
        changes["categories"] = list(patch.categories or [])
    return changes


class StoryService(BaseService):
    """Owner-scoped create/list/get/update/delete over stories."""

    @store_guard
    async def create(self, owner_id: str, data: StoryInput) -> Story:
        """Create a story owned by ``owner_id``.

        Args:
            owner_id: Authenticated user's id
            data: Story fields; missing situation/action/result become ""

        Returns:
            The persisted story

        Raises:
            ValidationError: If title or categories are invalid
            NotFoundError: If the owner does not exist
        """
        validate_story_input(data)

        owner = await self.db.get(User, owner_id)
        if owner is None:
            raise NotFoundError("User")

        story = Story(
            user_id=owner_id,
            title=data.title,
            categories=list(data.categories),
            situation=data.situation or "",
            action=data.action or "",
            result=data.result or "",
        )
        self.db.add(story)
        await self.db.commit()
        await self.db.refresh(story)

        logger.info("Story %s created by user %s", story.id, owner_id)
        return story

    @store_guard
    async def list(self, owner_id: str) -> list[Story]:
        """List the owner's stories, most recent first."""
        result = await self.db.execute(
            select(Story)
            .where(Story.user_id == owner_id)
            .order_by(Story.created_at.desc(), Story.id.desc())
        )
        return list(result.scalars().all())

    @store_guard
    async def get(self, owner_id: str, story_id: str) -> Story:
        """Get one of the owner's stories.

        Raises:
            NotFoundError: If the story is missing or owned by someone else
        """
        return await self._get_owned(owner_id, story_id)

    @store_guard
    async def update(self, owner_id: str, story_id: str, patch: StoryPatch) -> Story:
        """Apply a partial update to one of the owner's stories.

        Only non-empty text fields and non-empty category lists are applied;
        everything else in the patch is ignored.

        Raises:
            NotFoundError: If the story is missing or owned by someone else
            ValidationError: If no field in the patch is eligible
        """
        story = await self._get_owned(owner_id, story_id)

        changes = eligible_changes(patch)
        if not changes:
            raise ValidationError("Nothing to update")

        for name, value in changes.items():
            setattr(story, name, value)
        await self.db.commit()
        await self.db.refresh(story)

        logger.info("Story %s updated (%s)", story.id, ", ".join(sorted(changes)))
        return story

    @store_guard
    async def delete(self, owner_id: str, story_id: str) -> None:
        """Delete one of the owner's stories.

        Raises:
            NotFoundError: If the story is missing or owned by someone else
        """
        story = await self._get_owned(owner_id, story_id)
        await self.db.delete(story)
        await self.db.commit()
        logger.info("Story %s deleted by user %s", story_id, owner_id)

    async def _get_owned(self, owner_id: str, story_id: str) -> Story:
        result = await self.db.execute(
            select(Story).where(Story.id == story_id, Story.user_id == owner_id)
        )
        story = result.scalar_one_or_none()
        if story is None:
            raise NotFoundError("Story")
        return story
