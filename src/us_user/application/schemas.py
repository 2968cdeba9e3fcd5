"""Pydantic transfer representations for users.

UserDto is the request body and the value stored in userCache; it carries
the write-only password and role. Responses are always UserResponse, which
has neither.

Field constraints live in us_user/application/validation.py, not here, so a
bad value surfaces as a fieldErrors entry rather than a type error.
"""

from datetime import date

from src.us_common.enums import Role
from src.us_common.response import CamelModel
from src.us_user.infrastructure.db_models import UserModel


class UserDto(CamelModel):
    user_id: int | None = None
    name: str | None = None
    surname: str | None = None
    birth_date: date | None = None
    email: str | None = None
    password: str | None = None
    role: Role | None = None

    @classmethod
    def from_entity(cls, user: UserModel) -> "UserDto":
        return cls(
            user_id=user.id,
            name=user.name,
            surname=user.surname,
            birth_date=user.birth_date,
            email=user.email,
            password=user.password,
            role=user.role,
        )

    def to_entity(self) -> UserModel:
        return UserModel(
            id=self.user_id,
            name=self.name,
            surname=self.surname,
            birth_date=self.birth_date,
            email=self.email,
            password=self.password,
            role=self.role,
        )


class UserResponse(CamelModel):
    """Outbound user. Password and role are never serialised."""

    user_id: int
    name: str
    surname: str
    birth_date: date
    email: str

    @classmethod
    def from_dto(cls, dto: UserDto) -> "UserResponse":
        return cls(
            user_id=dto.user_id,
            name=dto.name,
            surname=dto.surname,
            birth_date=dto.birth_date,
            email=dto.email,
        )


class GreetingResponse(CamelModel):
    message: str
