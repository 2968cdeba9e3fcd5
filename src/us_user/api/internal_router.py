"""Service-to-service user endpoints (e.g. called by the auth service on sign-up).

No principal is required; every route demands X-Internal-Call: true and
answers 403 otherwise.

POST   /internal/users/
GET    /internal/users/find-by-email?email=
GET    /internal/users/{user_id}
DELETE /internal/users/{user_id}
"""

from fastapi import APIRouter, Depends, Query

from src.us_gateway.auth.dependencies import require_internal_call
from src.us_user.api.router import Db, Service
from src.us_user.application.schemas import UserDto, UserResponse

router = APIRouter(
    prefix="/internal/users",
    tags=["internal"],
    dependencies=[Depends(require_internal_call)],
)


@router.post("/")
async def create_user(body: UserDto, service: Service, db: Db) -> UserResponse:
    return UserResponse.from_dto(await service.create_user(db, body))


@router.get("/find-by-email")
async def get_user_by_email(
    service: Service,
    db: Db,
    email: str = Query(..., min_length=1),
) -> UserResponse:
    return UserResponse.from_dto(await service.get_user_by_email(db, email))


@router.get("/{user_id}")
async def get_user_by_id(user_id: int, service: Service, db: Db) -> UserResponse:
    return UserResponse.from_dto(await service.get_user_by_id(db, user_id))


@router.delete("/{user_id}")
async def delete_user(user_id: int, service: Service, db: Db) -> UserResponse:
    return UserResponse.from_dto(await service.delete_user(db, user_id))
