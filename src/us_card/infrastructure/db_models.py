"""SQLAlchemy ORM model for the card_info table.

Table is created by Alembic migration: alembic/versions/002_create_card_info.py
number carries an index but no UNIQUE constraint.
"""

from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.us_common.database import Base
from src.us_user.infrastructure.db_models import ID_TYPE


class CardInfoModel(Base):
    __tablename__ = "card_info"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    number: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    holder: Mapped[str] = mapped_column(String(100), nullable=False)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    user_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<CardInfo(id={self.id}, holder={self.holder}, user_id={self.user_id})>"
