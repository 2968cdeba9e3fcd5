"""UserRepository — concrete implementation of UserRepositoryProtocol.

Queries use SQLAlchemy 2.x select()/delete() against UserModel.
The repository never commits; UserService owns the transaction.
"""

from collections.abc import Collection
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.us_card.infrastructure.db_models import CardInfoModel
from src.us_common.enums import Role
from src.us_user.infrastructure.db_models import UserModel


class UserRepository:
    async def get_by_id(self, db: AsyncSession, user_id: int) -> UserModel | None:
        return await db.get(UserModel, user_id)

    async def get_by_email(self, db: AsyncSession, email: str) -> UserModel | None:
        result = await db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        )
        return result.scalars().first()

    async def list_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[UserModel]:
        if not ids:
            return []
        result = await db.execute(
            select(UserModel).where(UserModel.id.in_(list(ids))).order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def list_by_role(self, db: AsyncSession, role: Role) -> list[UserModel]:
        result = await db.execute(
            select(UserModel).where(UserModel.role == role).order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def list_born_after(self, db: AsyncSession, day: date) -> list[UserModel]:
        result = await db.execute(
            select(UserModel).where(UserModel.birth_date > day).order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession) -> list[UserModel]:
        result = await db.execute(select(UserModel).order_by(UserModel.id))
        return list(result.scalars().all())

    async def list_page(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[UserModel]:
        result = await db.execute(
            select(UserModel).order_by(UserModel.id.asc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(UserModel))
        return int(result.scalar_one())

    async def add(self, db: AsyncSession, user: UserModel) -> UserModel:
        db.add(user)
        await db.flush()  # Get user.id without committing
        return user

    async def delete(self, db: AsyncSession, user: UserModel) -> None:
        # Children first, then parent: independent of the FK cascade.
        await db.execute(delete(CardInfoModel).where(CardInfoModel.user_id == user.id))
        await db.delete(user)
        await db.flush()
