"""Domain error taxonomy.

Services raise these; only the HTTP boundary (src/main.py) turns them
into responses.

  404: NotFoundError (UserNotFoundError, CardInfoNotFoundError)
  400: ValidationFailedError, DataIntegrityError, MalformedRequestBodyError
  401: AuthenticationFailedError
  403: AuthorizationDeniedError
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, http_status: int = 500) -> None:
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 404 ---

class NotFoundError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class UserNotFoundError(NotFoundError):
    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(f"User wasn't found with {key} {value}")


class CardInfoNotFoundError(NotFoundError):
    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(f"CardInfo wasn't found with {key} {value}")


# --- 400 ---

class ValidationFailedError(AppError):
    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = field_errors
        super().__init__("Validation failed", 400)


class DataIntegrityError(AppError):
    def __init__(self, detail: str = "Data integrity violation") -> None:
        super().__init__(detail, 400)


class MalformedRequestBodyError(AppError):
    def __init__(self, detail: str = "Malformed request body") -> None:
        super().__init__(detail, 400)


# --- 401 / 403 ---

class AuthenticationFailedError(AppError):
    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(detail, 401)


class AuthorizationDeniedError(AppError):
    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(detail, 403)
