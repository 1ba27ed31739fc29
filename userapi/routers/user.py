# FILE: userapi/routers/user.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

# Pydantic schemas for the request body and responses
from userapi.schemas.user import UserRequest, UserResponse

# Service, store adapter and mapper wiring
from userapi.services.user import UserService
from userapi.repositories.user import UserRepository
from userapi.mappers.user import user_mapper

# Request validation dependencies (run before any service logic)
from userapi.validators import valid_user_request, valid_partial_user_request

# Database session provider
from userapi.database import get_db

# Create a FastAPI router instance with the "users" tag for API documentation
router = APIRouter(tags=["users"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """
    Build a UserService bound to this request's DB session.
    Tests override this to swap in a fake store.
    """
    return UserService(UserRepository(db), user_mapper)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def save_user(
    request: UserRequest = Depends(valid_user_request),
    service: UserService = Depends(get_user_service),
):
    """
    Create a user: POST /users

    - All fields are required and validated; every violation is returned
      in a single 400 response.
    - Returns 201 with the stored user, including its new id.
    """
    return user_mapper.to_response(await service.save(request))


@router.get("/{user_id}", response_model=UserResponse)
async def find_user(user_id: str, service: UserService = Depends(get_user_service)):
    """
    Fetch one user: GET /users/{user_id}. 404 if absent.
    """
    return user_mapper.to_response(await service.find_by_id(user_id))


@router.get("", response_model=List[UserResponse])
async def find_all_users(service: UserService = Depends(get_user_service)):
    return [user_mapper.to_response(user) async for user in service.find_all()]


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserRequest = Depends(valid_partial_user_request),
    service: UserService = Depends(get_user_service),
):
    """
    Partially update a user: PATCH /users/{user_id}

    - Only the fields present in the body are validated and written.
    - Raises 404 if the user is not found.
    """
    return user_mapper.to_response(await service.update(user_id, request))


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """
    Delete a user: DELETE /users/{user_id}

    - Returns the removed user with 200.
    - Raises 404 if the user is not found.
    """
    return user_mapper.to_response(await service.delete(user_id))
