"""
Authority repository.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from manage_api.models.authority import Authority
from manage_api.repositories.base import BaseRepository


class AuthorityRepository(BaseRepository[Authority]):
    """Repository for Authority lookups."""

    def __init__(self, session: AsyncSession):
        super().__init__(Authority, session)

    async def get_by_name(self, name: str) -> Authority | None:
        result = await self.session.execute(
            select(Authority).where(Authority.name == name)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str) -> Authority:
        """
        Get an authority by name, creating it on first use.

        Example:
            role_user = await authority_repo.get_or_create(ROLE_USER)
        """
        authority = await self.get_by_name(name)
        if authority is None:
            authority = await self.add(Authority(name=name))
        return authority
