"""CardInfoService — CRUD over card_info with the cardInfoCache side-cache.

Same discipline as UserService: id reads are read-through, updates write
through after commit, deletes evict after commit, create and every other
query bypass the cache.

An owner reference (userId) is resolved against the users store on create
and update; a dangling reference is a UserNotFoundError, raised before any
write.
"""

import logging
from collections.abc import Collection
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.us_card.application.schemas import CardInfoDto
from src.us_card.application.validation import validate_card_info
from src.us_card.domain.repository import CardInfoRepositoryProtocol
from src.us_card.infrastructure.persistence import CardInfoRepository
from src.us_common.cache import EntityCache
from src.us_common.database import write_transaction
from src.us_common.datetime_utils import utc_today
from src.us_common.errors import CardInfoNotFoundError, UserNotFoundError
from src.us_common.response import PageResponse
from src.us_common.validation import raise_if_invalid
from src.us_user.domain.repository import UserRepositoryProtocol
from src.us_user.infrastructure.persistence import UserRepository

logger = logging.getLogger("us.card")


def build_card_info_cache() -> EntityCache[CardInfoDto]:
    return EntityCache(
        settings.CARD_INFO_CACHE_NAME,
        CardInfoDto,
        timedelta(minutes=settings.CACHE_TTL_MINUTES),
    )


class CardInfoService:
    def __init__(
        self,
        repo: CardInfoRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        cache: EntityCache[CardInfoDto] | None = None,
    ) -> None:
        self._repo: CardInfoRepositoryProtocol = repo or CardInfoRepository()
        self._user_repo: UserRepositoryProtocol = user_repo or UserRepository()
        self._cache = cache or build_card_info_cache()

    async def _require_owner(self, db: AsyncSession, user_id: int) -> None:
        if await self._user_repo.get_by_id(db, user_id) is None:
            logger.warning("Card owner %s does not exist", user_id)
            raise UserNotFoundError("id", user_id)

    # ------------------------------------------------------------------
    # Cached CRUD
    # ------------------------------------------------------------------

    async def create_card_info(self, db: AsyncSession, dto: CardInfoDto) -> CardInfoDto:
        raise_if_invalid(validate_card_info(dto))
        entity = dto.model_copy(update={"card_id": None}).to_entity()

        async with write_transaction(db, "CardInfo violates a data constraint"):
            if dto.user_id is not None:
                await self._require_owner(db, dto.user_id)
            card = await self._repo.add(db, entity)
        logger.info("createCardInfo(): %s", card)
        return CardInfoDto.from_entity(card)

    async def get_card_info_by_id(self, db: AsyncSession, card_id: int) -> CardInfoDto:
        cached = await self._cache.get(card_id)
        if cached is not None:
            return cached

        card = await self._repo.get_by_id(db, card_id)
        if card is None:
            logger.warning("getCardInfoById(): no card with id %s", card_id)
            raise CardInfoNotFoundError("id", card_id)
        logger.info("getCardInfoById(): %s", card_id)
        dto = CardInfoDto.from_entity(card)
        await self._cache.put(card_id, dto)
        return dto

    async def update_card_info(
        self, db: AsyncSession, card_id: int, dto: CardInfoDto
    ) -> CardInfoDto:
        """Overwrite number, holder and expirationDate; re-own only when userId is given."""
        raise_if_invalid(validate_card_info(dto))

        async with write_transaction(db, "CardInfo violates a data constraint"):
            card = await self._repo.get_by_id(db, card_id)
            if card is None:
                raise CardInfoNotFoundError("id", card_id)
            if dto.user_id is not None:
                await self._require_owner(db, dto.user_id)
                card.user_id = dto.user_id
            card.number = dto.number
            card.holder = dto.holder
            card.expiration_date = dto.expiration_date
        logger.info("updateCardInfo(): %s", card)

        updated = CardInfoDto.from_entity(card)
        await self._cache.put(card_id, updated)
        return updated

    async def delete_card_info(self, db: AsyncSession, card_id: int) -> CardInfoDto:
        async with write_transaction(db, f"CardInfo {card_id} could not be deleted"):
            card = await self._repo.get_by_id(db, card_id)
            if card is None:
                raise CardInfoNotFoundError("id", card_id)
            deleted = CardInfoDto.from_entity(card)
            await self._repo.delete(db, card)
        logger.info("deleteCardInfo(): %s", card_id)

        await self._cache.evict(card_id)
        return deleted

    # ------------------------------------------------------------------
    # Store-only queries
    # ------------------------------------------------------------------

    async def get_card_info_by_number(self, db: AsyncSession, number: str) -> CardInfoDto:
        card = await self._repo.get_by_number(db, number)
        if card is None:
            raise CardInfoNotFoundError("number", number)
        logger.info("getCardInfoByNumber(): %s", card.id)
        return CardInfoDto.from_entity(card)

    async def get_card_infos_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[CardInfoDto]:
        cards = await self._repo.list_by_ids(db, set(ids))
        logger.info("getCardInfosByIds(): %d of %d found", len(cards), len(set(ids)))
        return [CardInfoDto.from_entity(c) for c in cards]

    async def get_card_infos_by_user_id(
        self, db: AsyncSession, user_id: int
    ) -> list[CardInfoDto]:
        cards = await self._repo.list_by_user_id(db, user_id)
        logger.info("getByUserId(): %s", user_id)
        return [CardInfoDto.from_entity(c) for c in cards]

    async def get_expired_card_infos(self, db: AsyncSession) -> list[CardInfoDto]:
        cards = await self._repo.list_expired(db, utc_today())
        logger.info("getExpiredCards(): %d", len(cards))
        return [CardInfoDto.from_entity(c) for c in cards]

    async def get_all_card_infos(self, db: AsyncSession) -> list[CardInfoDto]:
        cards = await self._repo.list_all(db)
        logger.info("getAllCardInfos()")
        return [CardInfoDto.from_entity(c) for c in cards]

    async def get_card_infos_page(
        self, db: AsyncSession, page: int, size: int
    ) -> PageResponse[CardInfoDto]:
        total = await self._repo.count(db)
        cards = await self._repo.list_page(db, page * size, size)
        logger.info("getCardInfosPage(): page=%d size=%d total=%d", page, size, total)
        return PageResponse[CardInfoDto].build(
            [CardInfoDto.from_entity(c) for c in cards], page, size, total
        )
