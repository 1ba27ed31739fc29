"""
userapi/tests/test_service.py

Service + repository tests against a temporary SQLite database.

Usage:
    pytest userapi/tests/test_service.py -v
"""

import pytest

from userapi.exceptions import ObjectNotFoundError
from userapi.repositories.user import UserRepository
from userapi.schemas.user import UserRequest
from userapi.services.user import UserService

NAME = "Usuário Teste"
EMAIL = "emailteste@mail.com"
PASSWORD = "abcd1234"


@pytest.fixture
def service(db_session):
    return UserService(UserRepository(db_session))


def new_request(**overrides):
    values = {"name": NAME, "email": EMAIL, "password": PASSWORD}
    values.update(overrides)
    return UserRequest(**values)


@pytest.mark.asyncio
async def test_save_assigns_id_and_keeps_fields(service):
    user = await service.save(new_request())

    assert user.id
    assert len(user.id) == 24
    assert (user.name, user.email, user.password) == (NAME, EMAIL, PASSWORD)


@pytest.mark.asyncio
async def test_save_assigns_distinct_ids(service):
    first = await service.save(new_request())
    second = await service.save(new_request(name="Outro Usuário"))
    assert first.id != second.id


@pytest.mark.asyncio
async def test_find_by_id_returns_stored_user(service):
    saved = await service.save(new_request())
    found = await service.find_by_id(saved.id)
    assert found.id == saved.id
    assert found.name == NAME


@pytest.mark.asyncio
async def test_find_by_id_missing_raises_not_found(service):
    with pytest.raises(ObjectNotFoundError) as exc_info:
        await service.find_by_id("ab12cd34e")

    assert str(exc_info.value) == "Object not found. Id: ab12cd34e Type: User"
    assert exc_info.value.object_id == "ab12cd34e"
    assert exc_info.value.type_name == "User"


@pytest.mark.asyncio
async def test_find_all_streams_every_user(service):
    await service.save(new_request(name="Primeiro"))
    await service.save(new_request(name="Segundo"))

    names = sorted([user.name async for user in service.find_all()])

    assert names == ["Primeiro", "Segundo"]


@pytest.mark.asyncio
async def test_find_all_on_empty_store(service):
    assert [user async for user in service.find_all()] == []


@pytest.mark.asyncio
async def test_update_overwrites_only_present_fields(service, session_factory):
    saved = await service.save(new_request())

    updated = await service.update(saved.id, UserRequest(name="Nome Novo"))

    assert updated.id == saved.id
    assert updated.name == "Nome Novo"
    assert updated.email == EMAIL
    assert updated.password == PASSWORD

    # Confirm the change reached the store, not just the session
    async with session_factory() as other:
        stored = await UserRepository(other).find_by_id(saved.id)
    assert (stored.name, stored.email, stored.password) == ("Nome Novo", EMAIL, PASSWORD)


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(service):
    with pytest.raises(ObjectNotFoundError, match="Id: nope Type: User"):
        await service.update("nope", UserRequest(name="Nome Novo"))


@pytest.mark.asyncio
async def test_delete_returns_removed_user(service):
    saved = await service.save(new_request())

    removed = await service.delete(saved.id)

    assert removed.id == saved.id
    assert removed.name == NAME
    with pytest.raises(ObjectNotFoundError):
        await service.find_by_id(saved.id)


@pytest.mark.asyncio
async def test_delete_missing_raises_not_found(service):
    with pytest.raises(ObjectNotFoundError, match="Object not found. Id: ab12cd34 Type: User"):
        await service.delete("ab12cd34")
