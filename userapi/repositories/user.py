"""
userapi/repositories/user.py

Document-store adapter for User. Every method is a coroutine (or async
iterator) over an AsyncSession; nothing here blocks the event loop.

The repository is the only place that talks to SQLAlchemy. Missing
documents are reported as None, and the service decides what that means.
"""

import logging
from typing import AsyncIterator, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Async store port for User documents, keyed by string id.
    Concurrent writes to the same id are last-write-wins.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, user: User) -> User:
        """
        Insert or update a document and return it with its id populated.
        """
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.debug(f"Saved user document id={user.id}")
        return user

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def find_all(self) -> AsyncIterator[User]:
        """
        Stream every stored document. The iterator is lazy and can be
        consumed only once.
        """
        result = await self.db.stream_scalars(select(User))
        async for user in result:
            yield user

    async def find_and_remove(self, user_id: str) -> Optional[User]:
        """
        Delete the document with this id and return it, or None when no
        such document exists.
        """
        user = await self.db.get(User, user_id)
        if user is None:
            return None
        await self.db.delete(user)
        await self.db.commit()
        logger.debug(f"Removed user document id={user_id}")
        return user
