"""Shared response shapes.

Error body returned by every exception handler:
{
    "message": "User wasn't found with id 7",
    "timestamp": "2026-10-17 12:30",
    "url": "http://host/api/users/7",
    "statusCode": 404,
    "fieldErrors": {"email": "..."}   // validation failures only
}

Successful responses return the transfer representation directly;
paginated queries wrap it in PageResponse.
"""

import math
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every JSON body: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def format_timestamp(moment: datetime | None = None) -> str:
    return (moment or datetime.now()).strftime("%Y-%m-%d %H:%M")


class ErrorItem(CamelModel):
    message: str
    timestamp: str = Field(default_factory=format_timestamp)
    url: str
    status_code: int
    field_errors: dict[str, str] | None = None


def error_body(
    message: str,
    url: str,
    status_code: int,
    field_errors: dict[str, str] | None = None,
) -> dict:
    item = ErrorItem(
        message=message, url=url, status_code=status_code, field_errors=field_errors
    )
    return item.model_dump(by_alias=True, exclude_none=True)


class PageResponse(CamelModel, Generic[T]):
    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, content: list[T], page: int, size: int, total: int) -> "PageResponse[T]":
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
        )
