from .exceptions import (
    AppException,
    ConflictException,
    EmailTakenException,
    ExpenseNotFoundException,
    InternalException,
    InvalidAmountException,
    InvalidCategoryException,
    InvalidCredentialsException,
    InvalidInputException,
    InvalidTokenException,
    NotFoundException,
    TokenExpiredException,
    UnauthorizedException,
)
from .handlers import register_exception_handlers

__all__ = [
    "AppException",
    "ConflictException",
    "EmailTakenException",
    "ExpenseNotFoundException",
    "InternalException",
    "InvalidAmountException",
    "InvalidCategoryException",
    "InvalidCredentialsException",
    "InvalidInputException",
    "InvalidTokenException",
    "NotFoundException",
    "TokenExpiredException",
    "UnauthorizedException",
    "register_exception_handlers",
]
