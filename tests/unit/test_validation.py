"""Unit tests for user and card field validation."""

from datetime import date, timedelta

import pytest

from src.us_card.application.validation import validate_card_info
from src.us_common.errors import ValidationFailedError
from src.us_common.validation import FieldError, is_blank, raise_if_invalid
from src.us_user.application.validation import validate_user
from tests.fakes import make_card_dto, make_user_dto


def _fields(errors: list[FieldError]) -> dict[str, str]:
    return {e.field: e.message for e in errors}


class TestHelpers:
    def test_is_blank(self) -> None:
        assert is_blank(None)
        assert is_blank("   ")
        assert not is_blank(" a ")

    def test_raise_if_invalid_keeps_first_message_per_field(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            raise_if_invalid([FieldError("name", "first"), FieldError("name", "second")])
        assert exc_info.value.field_errors == {"name": "first"}

    def test_raise_if_invalid_passes_on_empty(self) -> None:
        raise_if_invalid([])


class TestValidateUser:
    def test_valid_user(self) -> None:
        assert validate_user(make_user_dto()) == []

    def test_blank_name(self) -> None:
        errors = _fields(validate_user(make_user_dto(name=" ")))
        assert errors == {"name": "Name cannot be blank"}

    def test_surname_too_long(self) -> None:
        errors = _fields(validate_user(make_user_dto(surname="x" * 51)))
        assert errors["surname"] == "Surname must be less than 50 characters"

    def test_name_at_limit_is_valid(self) -> None:
        assert validate_user(make_user_dto(name="x" * 50)) == []

    def test_future_birth_date_rejected(self) -> None:
        errors = _fields(validate_user(make_user_dto(birth_date=date.today() + timedelta(days=1))))
        assert errors["birthDate"] == "Birth date must be in the past"

    def test_missing_birth_date(self) -> None:
        errors = _fields(validate_user(make_user_dto(birth_date=None)))
        assert "birthDate" in errors

    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a b@c.io", "a@b.c.d"])
    def test_invalid_email(self, email: str) -> None:
        errors = _fields(validate_user(make_user_dto(email=email)))
        assert errors["email"] == "Please provide a valid email address"

    def test_dotted_local_part_accepted(self) -> None:
        assert validate_user(make_user_dto(email="first.last@mail.io")) == []

    def test_short_password(self) -> None:
        errors = _fields(validate_user(make_user_dto(password="1234")))
        assert errors["password"] == "Password size must be between 5 and 255"

    def test_missing_role(self) -> None:
        errors = _fields(validate_user(make_user_dto(role=None)))
        assert errors["role"] == "Role cannot be null"

    def test_reports_every_bad_field(self) -> None:
        errors = _fields(validate_user(make_user_dto(name="", email="bad", role=None)))
        assert set(errors) == {"name", "email", "role"}


class TestValidateCardInfo:
    def test_valid_card(self) -> None:
        assert validate_card_info(make_card_dto()) == []

    def test_expiration_date_optional(self) -> None:
        assert validate_card_info(make_card_dto(expiration_date=None)) == []

    def test_blank_number(self) -> None:
        errors = _fields(validate_card_info(make_card_dto(number="")))
        assert errors["number"] == "Card number cannot be blank"

    def test_wrong_length(self) -> None:
        errors = _fields(validate_card_info(make_card_dto(number="411111111111111")))
        assert errors["number"] == "Card number must be exactly 16 characters"

    def test_non_digit_number(self) -> None:
        errors = _fields(validate_card_info(make_card_dto(number="4111-1111-1111-1")))
        assert errors["number"] == "Card number must contain only digits"

    def test_holder_too_long(self) -> None:
        errors = _fields(validate_card_info(make_card_dto(holder="x" * 101)))
        assert "holder" in errors

    def test_past_expiration_rejected(self) -> None:
        errors = _fields(
            validate_card_info(make_card_dto(expiration_date=date.today() - timedelta(days=1)))
        )
        assert errors["expirationDate"] == "Expiration date must be in the future"
