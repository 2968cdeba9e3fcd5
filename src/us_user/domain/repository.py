# src/us_user/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory fake that conforms to this Protocol.
Infrastructure layer provides the SQLAlchemy implementation.
"""

from collections.abc import Collection
from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.us_common.enums import Role
from src.us_user.infrastructure.db_models import UserModel


class UserRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, user_id: int) -> UserModel | None: ...

    async def get_by_email(self, db: AsyncSession, email: str) -> UserModel | None: ...

    async def list_by_ids(
        self, db: AsyncSession, ids: Collection[int]
    ) -> list[UserModel]: ...

    async def list_by_role(self, db: AsyncSession, role: Role) -> list[UserModel]: ...

    async def list_born_after(self, db: AsyncSession, day: date) -> list[UserModel]: ...

    async def list_all(self, db: AsyncSession) -> list[UserModel]: ...

    async def list_page(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[UserModel]: ...

    async def count(self, db: AsyncSession) -> int: ...

    async def add(self, db: AsyncSession, user: UserModel) -> UserModel: ...

    async def delete(self, db: AsyncSession, user: UserModel) -> None: ...
