"""Username to Discord ID mapping store."""

import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notifier.database import get_db
from notifier.models.user_mapping import UserMapping

logger = logging.getLogger(__name__)


class MappingStoreError(Exception):
    """Base class for mapping store failures tied to a username."""

    def __init__(self, username: str, message: str):
        super().__init__(message)
        self.username = username


class MappingNotFound(MappingStoreError):
    def __init__(self, username: str):
        super().__init__(username, f"No mapping for username '{username}'")


class MappingConflict(MappingStoreError):
    def __init__(self, username: str):
        super().__init__(username, f"Username '{username}' already exists")


class UserMappingStore:
    """
    CRUD over the ``user_mappings`` table.

    Every write commits its own transaction. Uniqueness of ``username`` is
    enforced by the table, so concurrent creates of the same name surface as
    ``MappingConflict`` for all but one caller.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find(self, username: str) -> Optional[UserMapping]:
        result = await self.session.execute(
            select(UserMapping).where(UserMapping.username == username)
        )
        return result.scalar_one_or_none()

    async def create(self, username: str, platform_id: str) -> UserMapping:
        mapping = UserMapping(username=username, platform_id=platform_id)
        self.session.add(mapping)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise MappingConflict(username)
        await self.session.refresh(mapping)
        logger.info("Created mapping for %s", username)
        return mapping

    async def get(self, username: str) -> UserMapping:
        mapping = await self._find(username)
        if mapping is None:
            raise MappingNotFound(username)
        return mapping

    async def list_all(self) -> list[UserMapping]:
        result = await self.session.execute(select(UserMapping).order_by(UserMapping.username))
        return list(result.scalars().all())

    async def update(self, username: str, platform_id: str) -> UserMapping:
        mapping = await self.get(username)
        mapping.platform_id = platform_id
        await self.session.commit()
        await self.session.refresh(mapping)
        logger.info("Updated mapping for %s", username)
        return mapping

    async def delete(self, username: str) -> None:
        mapping = await self.get(username)
        await self.session.delete(mapping)
        await self.session.commit()
        logger.info("Deleted mapping for %s", username)

    async def resolve(self, username: str) -> Optional[str]:
        """Return the Discord ID mapped to *username*, or None if there is none."""
        mapping = await self._find(username)
        return mapping.platform_id if mapping else None


async def get_store(db: AsyncSession = Depends(get_db)) -> UserMappingStore:
    return UserMappingStore(db)
