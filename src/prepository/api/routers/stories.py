"""Stories router for STAR story management.

Thin HTTP adapter over ``StoryService``; every endpoint requires a bearer
token and only ever touches the caller's own stories.
"""

from datetime import datetime

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prepository.api.deps import CurrentClaims, Stories
from prepository.services import StoryInput, StoryPatch

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class StoryCreateRequest(BaseModel):
    """Request to create a new story."""

    title: str = Field(..., min_length=1)
    categories: list[str] = Field(..., min_length=1)
    situation: str | None = None
    action: str | None = None
    result: str | None = None

    def to_input(self) -> StoryInput:
        return StoryInput(
            title=self.title,
            categories=self.categories,
            situation=self.situation,
            action=self.action,
            result=self.result,
        )


class StoryUpdateRequest(BaseModel):
    """Partial update; empty values are ignored by the service."""

    title: str | None = None
    categories: list[str] | None = None
    situation: str | None = None
    action: str | None = None
    result: str | None = None

    def to_patch(self) -> StoryPatch:
        return StoryPatch(
            title=self.title,
            categories=self.categories,
            situation=self.situation,
            action=self.action,
            result=self.result,
        )


class StoryResponse(BaseModel):
    """Story information response (camelCase on the wire)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    user_id: str
    title: str
    categories: list[str]
    situation: str
    action: str
    result: str
    created_at: datetime


class StoryEnvelope(BaseModel):
    """Single story wrapped as ``{"story": ...}``."""

    story: StoryResponse


class StoryListResponse(BaseModel):
    """All of the caller's stories, newest first."""

    stories: list[StoryResponse]


class DeleteResponse(BaseModel):
    """Delete confirmation."""

    success: bool = True


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    request: StoryCreateRequest,
    claims: CurrentClaims,
    stories: Stories,
) -> StoryResponse:
    """Create a new story owned by the caller.

    Missing situation/action/result are stored as empty strings.
    """
    story = await stories.create(claims.owner_id, request.to_input())
    return StoryResponse.model_validate(story)


@router.get("", response_model=StoryListResponse)
async def list_stories(claims: CurrentClaims, stories: Stories) -> StoryListResponse:
    """List the caller's stories, most recent first."""
    items = await stories.list(claims.owner_id)
    return StoryListResponse(stories=[StoryResponse.model_validate(s) for s in items])


@router.get("/{story_id}", response_model=StoryEnvelope)
async def get_story(
    story_id: str,
    claims: CurrentClaims,
    stories: Stories,
) -> StoryEnvelope:
    """Get a specific story by ID.

    Raises:
        NotFoundError: If story doesn't exist or user doesn't own it
    """
    story = await stories.get(claims.owner_id, story_id)
    return StoryEnvelope(story=StoryResponse.model_validate(story))


@router.patch("/{story_id}", response_model=StoryEnvelope)
async def update_story(
    story_id: str,
    request: StoryUpdateRequest,
    claims: CurrentClaims,
    stories: Stories,
) -> StoryEnvelope:
    """Update some fields of a story.

    Raises:
        NotFoundError: If story doesn't exist or user doesn't own it
        ValidationError: If no field in the body is eligible for update
    """
    story = await stories.update(claims.owner_id, story_id, request.to_patch())
    return StoryEnvelope(story=StoryResponse.model_validate(story))


@router.delete("/{story_id}", response_model=DeleteResponse)
async def delete_story(
    story_id: str,
    claims: CurrentClaims,
    stories: Stories,
) -> DeleteResponse:
    """Delete a story.

    Raises:
        NotFoundError: If story doesn't exist or user doesn't own it
    """
    await stories.delete(claims.owner_id, story_id)
    return DeleteResponse()
