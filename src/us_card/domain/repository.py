# src/us_card/domain/repository.py
"""Repository Protocol — dependency inversion for testability."""

from collections.abc import Collection
from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.us_card.infrastructure.db_models import CardInfoModel


class CardInfoRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, card_id: int) -> CardInfoModel | None: ...

    async def get_by_number(self, db: AsyncSession, number: str) -> CardInfoModel | None: ...

    async def list_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[CardInfoModel]: ...

    async def list_by_user_id(self, db: AsyncSession, user_id: int) -> list[CardInfoModel]: ...

    async def list_ids_by_user_id(self, db: AsyncSession, user_id: int) -> list[int]: ...

    async def list_expired(self, db: AsyncSession, today: date) -> list[CardInfoModel]: ...

    async def list_all(self, db: AsyncSession) -> list[CardInfoModel]: ...

    async def list_page(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[CardInfoModel]: ...

    async def count(self, db: AsyncSession) -> int: ...

    async def add(self, db: AsyncSession, card: CardInfoModel) -> CardInfoModel: ...

    async def delete(self, db: AsyncSession, card: CardInfoModel) -> None: ...
