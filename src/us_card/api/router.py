"""us_card REST endpoints — every route requires a gateway-trusted identity.

GET    /cards/find-by-number?number=
GET    /cards/find-by-ids?ids=1&ids=2
GET    /cards/user/{user_id}
GET    /cards/expired
GET    /cards/all
GET    /cards/paginated?page=0&size=10
POST   /cards/
GET    /cards/{card_id}            — cached
PUT    /cards/{card_id}            — refreshes cache
DELETE /cards/{card_id}            — evicts cache
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.us_card.application.schemas import CardInfoDto
from src.us_card.application.service import CardInfoService
from src.us_common.database import get_db_session
from src.us_common.response import PageResponse
from src.us_gateway.auth.dependencies import require_authenticated

router = APIRouter(
    prefix="/cards",
    tags=["cards"],
    dependencies=[Depends(require_authenticated)],
)

_service = CardInfoService()


def get_card_info_service() -> CardInfoService:
    return _service


Service = Annotated[CardInfoService, Depends(get_card_info_service)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/find-by-number")
async def get_card_info_by_number(
    service: Service,
    db: Db,
    number: str = Query(..., min_length=1),
) -> CardInfoDto:
    return await service.get_card_info_by_number(db, number)


@router.get("/find-by-ids")
async def get_card_infos_by_ids(
    service: Service,
    db: Db,
    ids: list[int] = Query(..., min_length=1),
) -> list[CardInfoDto]:
    return await service.get_card_infos_by_ids(db, ids)


@router.get("/user/{user_id}")
async def get_card_infos_by_user_id(
    user_id: int, service: Service, db: Db
) -> list[CardInfoDto]:
    return await service.get_card_infos_by_user_id(db, user_id)


@router.get("/expired")
async def get_expired_card_infos(service: Service, db: Db) -> list[CardInfoDto]:
    return await service.get_expired_card_infos(db)


@router.get("/all")
async def get_all_card_infos(service: Service, db: Db) -> list[CardInfoDto]:
    return await service.get_all_card_infos(db)


@router.get("/paginated")
async def get_card_infos_paginated(
    service: Service,
    db: Db,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1),
) -> PageResponse[CardInfoDto]:
    return await service.get_card_infos_page(db, page, size)


@router.post("/")
async def create_card_info(body: CardInfoDto, service: Service, db: Db) -> CardInfoDto:
    return await service.create_card_info(db, body)


@router.get("/{card_id}")
async def get_card_info_by_id(card_id: int, service: Service, db: Db) -> CardInfoDto:
    return await service.get_card_info_by_id(db, card_id)


@router.put("/{card_id}")
async def update_card_info(
    card_id: int, body: CardInfoDto, service: Service, db: Db
) -> CardInfoDto:
    return await service.update_card_info(db, card_id, body)


@router.delete("/{card_id}")
async def delete_card_info(card_id: int, service: Service, db: Db) -> CardInfoDto:
    return await service.delete_card_info(db, card_id)
