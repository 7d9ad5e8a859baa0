# bank_api/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=403)


class UnprocessableEntityError(AppError):
    def __init__(self, message: str = "Unprocessable entity") -> None:
        super().__init__(message, status_code=422)


class UnsupportedApiVersionError(AppError):
    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported API version {version}.", status_code=400)
        self.version = version


class ValidationFailedError(AppError):
    def __init__(self, errors: list[str], message: str = "Validation failed") -> None:
        super().__init__(message, status_code=400)
        self.errors = list(errors)


# Raised by the repository when a unique index rejects a write
class DuplicateEmailError(ConflictError):
    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists.")
        self.email = email


class DuplicateAccountNumberError(ConflictError):
    def __init__(self, account_number: str) -> None:
        super().__init__(f"Account number {account_number} already exists.")
        self.account_number = account_number
