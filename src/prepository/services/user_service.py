"""Account service for signup and login."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from prepository.core.errors import ConflictError, InvalidLoginError, NotFoundError
from prepository.core.security import hash_password, verify_password
from prepository.models.user import User

from .base import BaseService, store_guard

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Credential store operations."""

    @store_guard
    async def signup(self, email: str, password: str) -> User:
        """Register a new user.

        Uniqueness is enforced by the database constraint on ``email``.

        Raises:
            ConflictError: If the email is already registered
        """
        user = User(email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Email already registered")
        await self.db.refresh(user)

        logger.info("User %s signed up", user.id)
        return user

    @store_guard
    async def authenticate(self, email: str, password: str) -> User:
        """Check an email/password pair.

        Raises:
            InvalidLoginError: Unknown email or wrong password
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidLoginError()

        logger.info("User %s logged in", user.id)
        return user

    @store_guard
    async def get(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User")
        return user
