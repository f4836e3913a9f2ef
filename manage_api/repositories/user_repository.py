"""
User repository for user-specific database operations.

This module provides database operations for the User model: lookups by
login, by email and by the activation and reset keys handed out by mail.
Authorities are eager loaded on every lookup so that callers can read them
outside of the async session context.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from manage_api.models.user import User
from manage_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User model operations.

    Extends BaseRepository with user-specific queries:
    - Login and email lookups (for authentication and uniqueness checks)
    - Activation and reset key lookups (for the mailed account links)
    """

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    def _select(self) -> Select[tuple[User]]:
        return select(User).options(selectinload(User.authorities))

    async def _one_or_none(self, query: Select[tuple[User]]) -> User | None:
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_login(self, login: str) -> User | None:
        """
        Get user by login.

        Logins are stored lowercase; the argument is matched as given.

        Example:
            user = await user_repo.get_by_login("admin")
        """
        return await self._one_or_none(self._select().where(User.login == login))

    async def get_by_email(self, email: str) -> User | None:
        """
        Get user by email address, ignoring case.

        Example:
            user = await user_repo.get_by_email("John@Example.com")
        """
        return await self._one_or_none(
            self._select().where(func.lower(User.email) == email.lower())
        )

    async def get_by_activation_key(self, activation_key: str) -> User | None:
        """Get the user holding an activation key."""
        return await self._one_or_none(
            self._select().where(User.activation_key == activation_key)
        )

    async def get_by_reset_key(self, reset_key: str) -> User | None:
        """Get the user holding a password reset key."""
        return await self._one_or_none(
            self._select().where(User.reset_key == reset_key)
        )
