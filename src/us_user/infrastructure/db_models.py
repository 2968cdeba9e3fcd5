"""SQLAlchemy ORM model for the users table.

Table is created by Alembic migration: alembic/versions/001_create_users.py
The owned cards live in card_info.user_id (ON DELETE CASCADE); no ORM
relationship is mapped, joins are explicit in the repositories.
"""

from datetime import date

from sqlalchemy import BigInteger, Date, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.us_common.database import Base
from src.us_common.enums import Role

# BIGSERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    surname: Mapped[str] = mapped_column(String(50), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=16), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
