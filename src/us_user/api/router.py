"""us_user REST endpoints — every route requires a gateway-trusted identity.

GET    /users/hello                 — greeting for the calling principal (looked up by email)
GET    /users/find-by-email?email=
GET    /users/find-by-ids?ids=1&ids=2
GET    /users/find-by-role?role=USER
GET    /users/born-after?date=1990-01-01
GET    /users/all
GET    /users/paginated?page=0&size=10
GET    /users/{user_id}            — cached
PUT    /users/{user_id}            — full replace, refreshes cache
DELETE /users/{user_id}            — ADMIN only, evicts cache
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.us_common.database import get_db_session
from src.us_common.enums import Role
from src.us_common.response import PageResponse
from src.us_gateway.auth.dependencies import require_authenticated, require_role
from src.us_gateway.auth.gateway_trust import Principal
from src.us_user.application.schemas import GreetingResponse, UserDto, UserResponse
from src.us_user.application.service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_authenticated)],
)

_service = UserService()


def get_user_service() -> UserService:
    return _service


Service = Annotated[UserService, Depends(get_user_service)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/hello")
async def say_hello(
    principal: Annotated[Principal, Depends(require_authenticated)],
    service: Service,
    db: Db,
) -> GreetingResponse:
    user = await service.get_user_by_email(db, principal.name)
    return GreetingResponse(message=f"Welcome, {user.name} {user.surname}")


@router.get("/find-by-email")
async def get_user_by_email(
    service: Service,
    db: Db,
    email: str = Query(..., min_length=1),
) -> UserResponse:
    return UserResponse.from_dto(await service.get_user_by_email(db, email))


@router.get("/find-by-ids")
async def get_users_by_ids(
    service: Service,
    db: Db,
    ids: list[int] = Query(..., min_length=1),
) -> list[UserResponse]:
    users = await service.get_users_by_ids(db, ids)
    return [UserResponse.from_dto(u) for u in users]


@router.get("/find-by-role")
async def get_users_by_role(
    service: Service,
    db: Db,
    role: Role = Query(...),
) -> list[UserResponse]:
    users = await service.get_users_by_role(db, role)
    return [UserResponse.from_dto(u) for u in users]


@router.get("/born-after")
async def get_users_born_after(
    service: Service,
    db: Db,
    day: date = Query(..., alias="date"),
) -> list[UserResponse]:
    users = await service.get_users_born_after(db, day)
    return [UserResponse.from_dto(u) for u in users]


@router.get("/all")
async def get_all_users(service: Service, db: Db) -> list[UserResponse]:
    return [UserResponse.from_dto(u) for u in await service.get_all_users(db)]


@router.get("/paginated")
async def get_users_paginated(
    service: Service,
    db: Db,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1),
) -> PageResponse[UserResponse]:
    result = await service.get_users_page(db, page, size)
    return PageResponse[UserResponse].build(
        [UserResponse.from_dto(u) for u in result.content],
        result.page,
        result.size,
        result.total_elements,
    )


@router.get("/{user_id}")
async def get_user_by_id(user_id: int, service: Service, db: Db) -> UserResponse:
    return UserResponse.from_dto(await service.get_user_by_id(db, user_id))


@router.put("/{user_id}")
async def update_user(
    user_id: int, body: UserDto, service: Service, db: Db
) -> UserResponse:
    return UserResponse.from_dto(await service.update_user(db, user_id, body))


@router.delete("/{user_id}", dependencies=[Depends(require_role("ADMIN"))])
async def delete_user(user_id: int, service: Service, db: Db) -> UserResponse:
    return UserResponse.from_dto(await service.delete_user(db, user_id))
