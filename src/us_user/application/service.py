"""UserService — CRUD over the users store with a Redis side-cache.

Cache discipline (userCache, keyed by user id):
  create        → store only; nothing cached
  get_user_by_id → cache hit returns without touching the store;
                   miss → store → cache populate (absence is never cached)
  update_user   → authoritative store lookup → commit → cache put (overwrite)
  delete_user   → store delete → commit → cache evict (plus the evicted
                   user's cards in cardInfoCache, removed by the cascade)
All other queries go straight to the store.

Each write runs inside write_transaction(): commit on success, rollback on
failure. The cache is touched only after the commit returned.
"""

import logging
from collections.abc import Collection
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.us_card.application.service import build_card_info_cache
from src.us_card.application.schemas import CardInfoDto
from src.us_card.domain.repository import CardInfoRepositoryProtocol
from src.us_card.infrastructure.persistence import CardInfoRepository
from src.us_common.cache import EntityCache
from src.us_common.database import write_transaction
from src.us_common.enums import Role
from src.us_common.errors import UserNotFoundError
from src.us_common.response import PageResponse
from src.us_common.validation import raise_if_invalid
from src.us_gateway.auth.password import hash_password
from src.us_user.application.schemas import UserDto
from src.us_user.application.validation import validate_user
from src.us_user.domain.repository import UserRepositoryProtocol
from src.us_user.infrastructure.persistence import UserRepository

logger = logging.getLogger("us.user")


def build_user_cache() -> EntityCache[UserDto]:
    return EntityCache(
        settings.USER_CACHE_NAME,
        UserDto,
        timedelta(minutes=settings.CACHE_TTL_MINUTES),
    )


class UserService:
    """Stateless apart from its collaborators; one instance serves every request."""

    def __init__(
        self,
        repo: UserRepositoryProtocol | None = None,
        cache: EntityCache[UserDto] | None = None,
        card_repo: CardInfoRepositoryProtocol | None = None,
        card_cache: EntityCache[CardInfoDto] | None = None,
    ) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()
        self._cache = cache or build_user_cache()
        self._card_repo: CardInfoRepositoryProtocol = card_repo or CardInfoRepository()
        self._card_cache = card_cache or build_card_info_cache()

    # ------------------------------------------------------------------
    # Cached CRUD
    # ------------------------------------------------------------------

    async def create_user(self, db: AsyncSession, dto: UserDto) -> UserDto:
        raise_if_invalid(validate_user(dto))
        entity = dto.model_copy(
            update={"user_id": None, "password": hash_password(dto.password)}
        ).to_entity()

        async with write_transaction(db, f"User with email {dto.email} already exists"):
            user = await self._repo.add(db, entity)
        logger.info("createUser(): %s", user)
        return UserDto.from_entity(user)

    async def get_user_by_id(self, db: AsyncSession, user_id: int) -> UserDto:
        cached = await self._cache.get(user_id)
        if cached is not None:
            return cached

        user = await self._repo.get_by_id(db, user_id)
        if user is None:
            logger.warning("getUserById(): no user with id %s", user_id)
            raise UserNotFoundError("id", user_id)
        logger.info("getUserById(): %s", user_id)
        dto = UserDto.from_entity(user)
        await self._cache.put(user_id, dto)
        return dto

    async def update_user(self, db: AsyncSession, user_id: int, dto: UserDto) -> UserDto:
        """Full replace: every mutable field is overwritten from dto."""
        raise_if_invalid(validate_user(dto))

        async with write_transaction(db, f"User with email {dto.email} already exists"):
            user = await self._repo.get_by_id(db, user_id)
            if user is None:
                raise UserNotFoundError("id", user_id)
            user.name = dto.name
            user.surname = dto.surname
            user.birth_date = dto.birth_date
            user.email = dto.email
            user.password = hash_password(dto.password)
            user.role = dto.role
        logger.info("updateUser(): %s", user)

        updated = UserDto.from_entity(user)
        await self._cache.put(user_id, updated)
        return updated

    async def delete_user(self, db: AsyncSession, user_id: int) -> UserDto:
        """Delete the user and its cards; returns the user's last known state."""
        async with write_transaction(db, f"User {user_id} could not be deleted"):
            user = await self._repo.get_by_id(db, user_id)
            if user is None:
                raise UserNotFoundError("id", user_id)
            deleted = UserDto.from_entity(user)
            card_ids = await self._card_repo.list_ids_by_user_id(db, user_id)
            await self._repo.delete(db, user)
        logger.info("deleteUser(): %s (cards removed: %s)", user_id, card_ids)

        await self._cache.evict(user_id)
        for card_id in card_ids:
            await self._card_cache.evict(card_id)
        return deleted

    # ------------------------------------------------------------------
    # Store-only queries
    # ------------------------------------------------------------------

    async def get_user_by_email(self, db: AsyncSession, email: str) -> UserDto:
        user = await self._repo.get_by_email(db, email)
        if user is None:
            raise UserNotFoundError("email", email)
        logger.info("getUserByEmail(): %s", email)
        return UserDto.from_entity(user)

    async def get_users_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[UserDto]:
        users = await self._repo.list_by_ids(db, set(ids))
        logger.info("getUsersByIds(): %d of %d found", len(users), len(set(ids)))
        return [UserDto.from_entity(u) for u in users]

    async def get_users_by_role(self, db: AsyncSession, role: Role) -> list[UserDto]:
        users = await self._repo.list_by_role(db, role)
        logger.info("getUsersByRole(): %s", role.value)
        return [UserDto.from_entity(u) for u in users]

    async def get_users_born_after(self, db: AsyncSession, day: date) -> list[UserDto]:
        users = await self._repo.list_born_after(db, day)
        logger.info("getUsersBornAfter(): %s", day)
        return [UserDto.from_entity(u) for u in users]

    async def get_all_users(self, db: AsyncSession) -> list[UserDto]:
        users = await self._repo.list_all(db)
        logger.info("getAllUsers()")
        return [UserDto.from_entity(u) for u in users]

    async def get_users_page(
        self, db: AsyncSession, page: int, size: int
    ) -> PageResponse[UserDto]:
        total = await self._repo.count(db)
        users = await self._repo.list_page(db, page * size, size)
        logger.info("getUsersPage(): page=%d size=%d total=%d", page, size, total)
        return PageResponse[UserDto].build(
            [UserDto.from_entity(u) for u in users], page, size, total
        )
