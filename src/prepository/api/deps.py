"""FastAPI dependencies for dependency injection.

Provides the auth gate, database sessions and per-request services.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from prepository.core.errors import (
    InvalidCredentialError,
    InvalidTokenError,
    MalformedCredentialError,
    MissingCredentialError,
)
from prepository.core.security import TokenClaims, TokenService
from prepository.models.database import get_session
from prepository.services import StoryService, UserService

# Database session dependency
DBSession = Annotated[AsyncSession, Depends(get_session)]


def get_token_service(request: Request) -> TokenService:
    """Return the process-wide token service built at startup."""
    token_service: TokenService | None = getattr(request.app.state, "token_service", None)
    if token_service is None:
        raise RuntimeError("Token service not initialized")
    return token_service

Tokens = Annotated[TokenService, Depends(get_token_service)]

def authenticate(authorization: str | None, token_service: TokenService) -> TokenClaims:
    """Resolve an Authorization header value to token claims.

    Args:
        authorization: Raw header value, or None if absent
        token_service: Verifier for bearer tokens

    Returns:
        Claims carried by the token

    Raises:
        MissingCredentialError: No header
        MalformedCredentialError: Header is not ``Bearer <token>``
        InvalidCredentialError: Token failed verification
    """
    if authorization is None:
        raise MissingCredentialError()

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MalformedCredentialError()

    try:
        return token_service.verify(parts[1])
    except InvalidTokenError as e:
        raise InvalidCredentialError(f"Invalid token: {e.message}") from e

async def get_current_claims(request: Request, token_service: Tokens) -> TokenClaims:
    """Auth gate: verify the bearer token and attach its claims to the request.

    Claims are stored on ``request.state.claims`` for downstream use.
    """
    claims = authenticate(request.headers.get("Authorization"), token_service)
    request.state.claims = claims
    return claims

def get_story_service(db: DBSession) -> StoryService:
    return StoryService(db)

def get_user_service(db: DBSession) -> UserService:
    return UserService(db)

# Type aliases for dependency injection
CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
Stories = Annotated[StoryService, Depends(get_story_service)]
Users = Annotated[UserService, Depends(get_user_service)]
