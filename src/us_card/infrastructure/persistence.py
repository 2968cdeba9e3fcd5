"""CardInfoRepository — concrete implementation of CardInfoRepositoryProtocol.

number is not unique at the storage level; get_by_number returns the
lowest id among matches.
"""

from collections.abc import Collection
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.us_card.infrastructure.db_models import CardInfoModel


class CardInfoRepository:
    async def get_by_id(self, db: AsyncSession, card_id: int) -> CardInfoModel | None:
        return await db.get(CardInfoModel, card_id)

    async def get_by_number(self, db: AsyncSession, number: str) -> CardInfoModel | None:
        result = await db.execute(
            select(CardInfoModel)
            .where(CardInfoModel.number == number)
            .order_by(CardInfoModel.id)
            .limit(1)
        )
        return result.scalars().first()

    async def list_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[CardInfoModel]:
        if not ids:
            return []
        result = await db.execute(
            select(CardInfoModel)
            .where(CardInfoModel.id.in_(list(ids)))
            .order_by(CardInfoModel.id)
        )
        return list(result.scalars().all())

    async def list_by_user_id(self, db: AsyncSession, user_id: int) -> list[CardInfoModel]:
        result = await db.execute(
            select(CardInfoModel)
            .where(CardInfoModel.user_id == user_id)
            .order_by(CardInfoModel.id)
        )
        return list(result.scalars().all())

    async def list_ids_by_user_id(self, db: AsyncSession, user_id: int) -> list[int]:
        result = await db.execute(
            select(CardInfoModel.id).where(CardInfoModel.user_id == user_id)
        )
        return list(result.scalars().all())

    async def list_expired(self, db: AsyncSession, today: date) -> list[CardInfoModel]:
        result = await db.execute(
            select(CardInfoModel)
            .where(CardInfoModel.expiration_date < today)
            .order_by(CardInfoModel.id)
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession) -> list[CardInfoModel]:
        result = await db.execute(select(CardInfoModel).order_by(CardInfoModel.id))
        return list(result.scalars().all())

    async def list_page(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[CardInfoModel]:
        result = await db.execute(
            select(CardInfoModel)
            .order_by(CardInfoModel.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(CardInfoModel))
        return int(result.scalar_one())

    async def add(self, db: AsyncSession, card: CardInfoModel) -> CardInfoModel:
        db.add(card)
        await db.flush()
        return card

    async def delete(self, db: AsyncSession, card: CardInfoModel) -> None:
        await db.delete(card)
        await db.flush()
