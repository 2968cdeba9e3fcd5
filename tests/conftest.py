"""Shared test fixtures."""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.us_card.api.router import get_card_info_service
from src.us_card.application.schemas import CardInfoDto
from src.us_card.application.service import CardInfoService
from src.us_common.cache import EntityCache
from src.us_common.database import get_db_session
from src.us_user.api.router import get_user_service
from src.us_user.application.schemas import UserDto
from src.us_user.application.service import UserService
from tests.fakes import (
    FakeRedis,
    InMemoryCardInfoRepository,
    InMemoryUserRepository,
    make_session,
)

TTL = timedelta(minutes=15)


@pytest.fixture
def redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def card_repo() -> InMemoryCardInfoRepository:
    return InMemoryCardInfoRepository()


@pytest.fixture
def user_repo(card_repo: InMemoryCardInfoRepository) -> InMemoryUserRepository:
    return InMemoryUserRepository(cards=card_repo)


@pytest.fixture
def user_cache(redis: FakeRedis) -> EntityCache[UserDto]:
    return EntityCache("userCache", UserDto, TTL, client=redis)


@pytest.fixture
def card_cache(redis: FakeRedis) -> EntityCache[CardInfoDto]:
    return EntityCache("cardInfoCache", CardInfoDto, TTL, client=redis)


@pytest.fixture
def user_service(user_repo, user_cache, card_repo, card_cache) -> UserService:
    return UserService(
        repo=user_repo, cache=user_cache, card_repo=card_repo, card_cache=card_cache
    )


@pytest.fixture
def card_service(card_repo, user_repo, card_cache) -> CardInfoService:
    return CardInfoService(repo=card_repo, user_repo=user_repo, cache=card_cache)


@pytest.fixture
def db():
    return make_session()


@pytest.fixture
async def client(user_service, card_service) -> AsyncClient:
    """Async HTTP client over the real app, wired to in-memory collaborators."""
    app.dependency_overrides[get_db_session] = make_session
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_card_info_service] = lambda: card_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
