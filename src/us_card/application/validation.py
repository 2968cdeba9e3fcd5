"""Field constraints for a card payload, checked before create/update."""

from src.us_card.application.schemas import CardInfoDto
from src.us_common.datetime_utils import utc_today
from src.us_common.validation import FieldError, is_blank

NUMBER_LENGTH = 16
HOLDER_MAX = 100


def validate_card_info(dto: CardInfoDto) -> list[FieldError]:
    errors: list[FieldError] = []

    if is_blank(dto.number):
        errors.append(FieldError("number", "Card number cannot be blank"))
    elif len(dto.number) != NUMBER_LENGTH:
        errors.append(FieldError("number", "Card number must be exactly 16 characters"))
    elif not (dto.number.isascii() and dto.number.isdigit()):
        errors.append(FieldError("number", "Card number must contain only digits"))

    if is_blank(dto.holder):
        errors.append(FieldError("holder", "Card holder cannot be blank"))
    elif len(dto.holder) > HOLDER_MAX:
        errors.append(FieldError("holder", "Card holder must be less than 100 characters"))

    # Optional, but when present it must not already be expired
    if dto.expiration_date is not None and dto.expiration_date <= utc_today():
        errors.append(FieldError("expirationDate", "Expiration date must be in the future"))

    return errors
