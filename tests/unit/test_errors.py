"""Tests for us_common.errors and us_common.response."""

from datetime import datetime

from src.us_common.errors import (
    AppError,
    AuthenticationFailedError,
    AuthorizationDeniedError,
    CardInfoNotFoundError,
    DataIntegrityError,
    MalformedRequestBodyError,
    NotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from src.us_common.response import PageResponse, error_body, format_timestamp


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError("Internal error")
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError("x"), Exception)


class TestSpecificErrors:
    def test_user_not_found(self) -> None:
        err = UserNotFoundError("id", 7)
        assert isinstance(err, NotFoundError)
        assert err.http_status == 404
        assert err.message == "User wasn't found with id 7"

    def test_user_not_found_by_email(self) -> None:
        err = UserNotFoundError("email", "a@b.io")
        assert err.message == "User wasn't found with email a@b.io"

    def test_card_not_found(self) -> None:
        err = CardInfoNotFoundError("number", "4111111111111111")
        assert err.http_status == 404
        assert "4111111111111111" in err.message

    def test_validation_failed_carries_field_errors(self) -> None:
        err = ValidationFailedError({"email": "Please provide a valid email address"})
        assert err.http_status == 400
        assert err.message == "Validation failed"
        assert err.field_errors["email"] == "Please provide a valid email address"

    def test_400_family(self) -> None:
        assert DataIntegrityError().http_status == 400
        assert MalformedRequestBodyError().http_status == 400

    def test_auth_errors(self) -> None:
        assert AuthenticationFailedError().http_status == 401
        assert AuthorizationDeniedError().http_status == 403


class TestErrorBody:
    def test_camel_case_keys_without_field_errors(self) -> None:
        body = error_body("User wasn't found with id 7", "http://test/api/users/7", 404)
        assert body["message"] == "User wasn't found with id 7"
        assert body["url"] == "http://test/api/users/7"
        assert body["statusCode"] == 404
        assert "timestamp" in body
        assert "fieldErrors" not in body

    def test_field_errors_included_when_present(self) -> None:
        body = error_body("Validation failed", "http://test", 400, {"name": "bad"})
        assert body["fieldErrors"] == {"name": "bad"}

    def test_timestamp_format(self) -> None:
        assert format_timestamp(datetime(2026, 3, 4, 5, 6, 7)) == "2026-03-04 05:06"


class TestPageResponse:
    def test_total_pages_rounds_up(self) -> None:
        page = PageResponse[int].build([1, 2], page=0, size=2, total=5)
        assert page.total_pages == 3
        assert page.model_dump(by_alias=True)["totalElements"] == 5

    def test_empty(self) -> None:
        page = PageResponse[int].build([], page=0, size=10, total=0)
        assert page.total_pages == 0
        assert page.content == []
