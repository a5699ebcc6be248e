"""Security utilities for authentication.

Password hashing (bcrypt) and signed access tokens (JWT via python-jose).
"""
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from .config import Settings, get_settings
from .errors import InvalidTokenError


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        rounds: bcrypt work factor (defaults to ``Settings.bcrypt_rounds``)

    Returns:
        Hashed password string
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    # Bcrypt requires bytes and has 72-byte limit
    password_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Previously hashed password

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        password_bytes = plain_password.encode("utf-8")[:72]
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by an access token."""

    owner_id: str
    email: str


class TokenService:
    """Issues and verifies signed, time-limited access tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build the process-wide token service from configuration."""
        return cls(
            settings.effective_jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(days=settings.access_token_expire_days),
        )

    def __repr__(self) -> str:
        return f"<TokenService(algorithm='{self.algorithm}', expires_in={self.expires_in})>"

    def issue(self, claims: TokenClaims) -> str:
        """Create a signed access token for the given claims.

        Args:
            claims: Owner id and email to embed

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(UTC)
        to_encode: dict[str, Any] = {
            "sub": claims.owner_id,
            "email": claims.email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        encoded: str = jwt.encode(to_encode, self._secret, algorithm=self.algorithm)
        return encoded

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate an access token.

        Args:
            token: The JWT token string

        Returns:
            The claims the token was issued with

        Raises:
            InvalidTokenError: If the signature, structure or expiry is invalid
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        owner_id = payload.get("sub")
        email = payload.get("email")
        if not isinstance(owner_id, str) or not isinstance(email, str):
            raise InvalidTokenError("Token payload is missing identity claims")

        return TokenClaims(owner_id=owner_id, email=email)
