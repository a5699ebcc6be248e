"""Authentication router for signup and login.

Issues a 7-day bearer token on both signup and login. Tokens are stateless;
there is no logout or refresh endpoint.
"""

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from prepository.api.deps import CurrentClaims, Tokens, Users
from prepository.core.security import TokenClaims
from prepository.models.user import User

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class SignupRequest(BaseModel):
    """User signup request."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    """User login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public user info; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str


class AuthResponse(BaseModel):
    """User plus a freshly issued bearer token."""

    user: UserResponse
    token: str


class MeResponse(BaseModel):
    """Current user response."""

    user: UserResponse


def _auth_response(user: User, tokens: Tokens) -> AuthResponse:
    token = tokens.issue(TokenClaims(owner_id=user.id, email=user.email))
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    users: Users,
    tokens: Tokens,
) -> AuthResponse:
    """Register a new user and return a token.

    Raises:
        ConflictError: If the email is already registered
    """
    user = await users.signup(request.email, request.password)
    return _auth_response(user, tokens)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    users: Users,
    tokens: Tokens,
) -> AuthResponse:
    """Login with email and password.

    Raises:
        InvalidLoginError: If credentials are invalid
    """
    user = await users.authenticate(request.email, request.password)
    return _auth_response(user, tokens)


@router.get("/me", response_model=MeResponse)
async def me(claims: CurrentClaims, users: Users) -> MeResponse:
    """Get the user the bearer token belongs to."""
    user = await users.get(claims.owner_id)
    return MeResponse(user=UserResponse.model_validate(user))
