"""
Exception definitions.
Owns: Application-specific exception classes.
"""

from typing import Any


class AppException(Exception):
    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class InvalidInputException(AppException):
    error_code = "INVALID_INPUT"
    status_code = 400
    retryable = False


class InvalidAmountException(InvalidInputException):
    error_code = "INVALID_AMOUNT"


class InvalidCategoryException(InvalidInputException):
    error_code = "INVALID_CATEGORY"


class UnauthorizedException(AppException):
    error_code = "UNAUTHORIZED"
    status_code = 401
    retryable = False


class InvalidTokenException(UnauthorizedException):
    """Raised when a token fails signature, shape or claim checks."""
    error_code = "INVALID_TOKEN"


class TokenExpiredException(InvalidTokenException):
    error_code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token expired", details: dict[str, Any] | None = None):
        super().__init__(message, {"token_expired": True, **(details or {})})


class InvalidCredentialsException(UnauthorizedException):
    """Raised for any login failure; unknown email and wrong password look the same."""
    error_code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class NotFoundException(AppException):
    error_code = "NOT_FOUND"
    status_code = 404
    retryable = False


class ExpenseNotFoundException(NotFoundException):
    """Raised when an expense is absent or owned by someone else."""
    error_code = "EXPENSE_NOT_FOUND"

    def __init__(self, message: str = "Expense not found", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class ConflictException(AppException):
    error_code = "CONFLICT"
    status_code = 409
    retryable = False


class EmailTakenException(ConflictException):
    error_code = "EMAIL_TAKEN"

    def __init__(self, message: str = "Email already registered", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class InternalException(AppException):
    error_code = "INTERNAL_ERROR"
    status_code = 500
    retryable = True
