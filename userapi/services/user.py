"""
userapi/services/user.py

Handles user-level operations (save, find, list, update, delete) on top of
the document store. Each operation is a single async pipeline:
(fetch) -> mutate/persist -> return the entity. Requests reaching this layer
have already passed validation.
"""

import logging
from typing import AsyncIterator, Optional

from userapi.exceptions import ObjectNotFoundError
from userapi.mappers.user import UserMapper, user_mapper
from userapi.models.user import User
from userapi.repositories.user import UserRepository
from userapi.schemas.user import UserRequest

logger = logging.getLogger(__name__)


class UserService:
    """
    Orchestrates the store and the mapper. Holds no state of its own; both
    collaborators are passed in at construction.
    """

    def __init__(self, repository: UserRepository, mapper: UserMapper = user_mapper):
        self.repository = repository
        self.mapper = mapper

    async def save(self, request: UserRequest) -> User:
        """
        Create a new user document from the request. Any id the client sent
        is ignored; the store assigns one.
        """
        user = await self.repository.save(self.mapper.to_entity(request))
        logger.info(f"Created user id={user.id}")
        return user

    async def find_by_id(self, user_id: str) -> User:
        return self._found_or_raise(await self.repository.find_by_id(user_id), user_id)

    def find_all(self) -> AsyncIterator[User]:
        return self.repository.find_all()

    async def update(self, user_id: str, request: UserRequest) -> User:
        """
        Merge the request into the stored document and persist it.
        Fields left out of the request keep their stored values.
        """
        user = await self.find_by_id(user_id)
        user = await self.repository.save(self.mapper.to_entity(request, user))
        logger.info(f"Updated user id={user_id}")
        return user

    async def delete(self, user_id: str) -> User:
        """
        Remove the document and return what was removed.
        """
        user = self._found_or_raise(await self.repository.find_and_remove(user_id), user_id)
        logger.info(f"Deleted user id={user_id}")
        return user

    def _found_or_raise(self, user: Optional[User], user_id: str) -> User:
        if user is None:
            logger.warning(f"User not found: id={user_id}")
            raise ObjectNotFoundError(user_id, User.__name__)
        return user
