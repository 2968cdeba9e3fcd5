"""Field constraints for a user payload, checked before create/update."""

import re

from src.us_common.datetime_utils import utc_today
from src.us_common.validation import FieldError, is_blank
from src.us_user.application.schemas import UserDto

EMAIL_PATTERN = re.compile(r"[\w.]+@\w+\.\w+")

NAME_MAX = 50
PASSWORD_MIN = 5
PASSWORD_MAX = 255


def validate_user(dto: UserDto) -> list[FieldError]:
    errors: list[FieldError] = []

    if is_blank(dto.name):
        errors.append(FieldError("name", "Name cannot be blank"))
    elif len(dto.name) > NAME_MAX:
        errors.append(FieldError("name", "Name must be less than 50 characters"))

    if is_blank(dto.surname):
        errors.append(FieldError("surname", "Surname cannot be blank"))
    elif len(dto.surname) > NAME_MAX:
        errors.append(FieldError("surname", "Surname must be less than 50 characters"))

    if dto.birth_date is None:
        errors.append(FieldError("birthDate", "Birth date cannot be null"))
    elif dto.birth_date >= utc_today():
        errors.append(FieldError("birthDate", "Birth date must be in the past"))

    if is_blank(dto.email):
        errors.append(FieldError("email", "Email address may not be blank"))
    elif not EMAIL_PATTERN.fullmatch(dto.email):
        errors.append(FieldError("email", "Please provide a valid email address"))

    if is_blank(dto.password):
        errors.append(FieldError("password", "Password may not be blank"))
    elif not PASSWORD_MIN <= len(dto.password) <= PASSWORD_MAX:
        errors.append(FieldError("password", "Password size must be between 5 and 255"))

    if dto.role is None:
        errors.append(FieldError("role", "Role cannot be null"))

    return errors
