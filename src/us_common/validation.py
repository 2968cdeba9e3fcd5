"""Explicit field validation shared by the entity validators.

Validators return a list of FieldError (empty list = valid). Field names
are the camelCase wire names so they can be echoed back in fieldErrors.
"""

from dataclasses import dataclass

from src.us_common.errors import ValidationFailedError


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def raise_if_invalid(errors: list[FieldError]) -> None:
    """Raise ValidationFailedError keeping the first message per field."""
    if not errors:
        return
    field_errors: dict[str, str] = {}
    for error in errors:
        field_errors.setdefault(error.field, error.message)
    raise ValidationFailedError(field_errors)
