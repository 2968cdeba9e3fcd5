"""Pydantic transfer representation for cards.

CardInfoDto is used for request bodies, responses and cardInfoCache values.
Constraints are checked in us_card/application/validation.py.
"""

from datetime import date

from src.us_card.infrastructure.db_models import CardInfoModel
from src.us_common.response import CamelModel


class CardInfoDto(CamelModel):
    card_id: int | None = None
    number: str | None = None
    holder: str | None = None
    expiration_date: date | None = None
    user_id: int | None = None

    @classmethod
    def from_entity(cls, card: CardInfoModel) -> "CardInfoDto":
        return cls(
            card_id=card.id,
            number=card.number,
            holder=card.holder,
            expiration_date=card.expiration_date,
            user_id=card.user_id,
        )

    def to_entity(self) -> CardInfoModel:
        return CardInfoModel(
            id=self.card_id,
            number=self.number,
            holder=self.holder,
            expiration_date=self.expiration_date,
            user_id=self.user_id,
        )
