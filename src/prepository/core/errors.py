"""Domain errors for Prepository.

Services and the auth gate raise these; ``prepository.api.exceptions`` maps
them to HTTP responses. None of them carry storage internals.
"""


class PrepositoryError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(PrepositoryError):
    """Caller input failed validation."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class NotFoundError(PrepositoryError):
    """Resource does not exist, or is not owned by the caller."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(PrepositoryError):
    """A unique field collided with an existing record."""


class StoreUnavailableError(PrepositoryError):
    """The backing store failed."""

    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message)


class InvalidTokenError(PrepositoryError):
    """Token is tampered, malformed or expired."""


class InvalidLoginError(PrepositoryError):
    """Email/password pair did not match a user."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class CredentialError(PrepositoryError):
    """Base for request credential failures.

    All subclasses collapse to the same unauthorized response; ``message``
    is the internal reason and is only logged.
    """


class MissingCredentialError(CredentialError):
    """No Authorization header on the request."""

    def __init__(self) -> None:
        super().__init__("Authorization header is missing")


class MalformedCredentialError(CredentialError):
    """Authorization header is not of the form ``Bearer <token>``."""

    def __init__(self) -> None:
        super().__init__("Invalid Authorization header format")


class InvalidCredentialError(CredentialError):
    """Bearer token failed verification."""
