"""
userapi/mappers/user.py

Conversions between the wire shapes (UserRequest / UserResponse) and the
stored User entity.
"""

from typing import Optional

from userapi.models.user import User
from userapi.schemas.user import UserRequest, UserResponse

MAPPED_FIELDS = ("name", "email", "password")


class UserMapper:
    """
    Request -> entity and entity -> response mapping. Null request fields
    are never copied, so the same merge serves both create and PATCH.
    """

    def to_entity(self, request: UserRequest, entity: Optional[User] = None) -> User:
        """
        Copy the request onto an entity and return it.

        Without 'entity' a new, id-less User is built (the store assigns the
        id). With 'entity' the request is merged into it in place: a field
        that is None in the request keeps the entity's current value.
        """
        target = entity if entity is not None else User()
        for field in MAPPED_FIELDS:
            value = getattr(request, field)
            if value is not None:
                setattr(target, field, value)
        return target

    def to_response(self, entity: User) -> UserResponse:
        return UserResponse.model_validate(entity)


user_mapper = UserMapper()
