from .dependencies import get_current_user, get_token_service
from .models import AuthenticatedUser
from .passwords import PasswordHasher, PasswordMismatchError
from .tokens import TokenService

__all__ = [
    "get_current_user",
    "get_token_service",
    "AuthenticatedUser",
    "PasswordHasher",
    "PasswordMismatchError",
    "TokenService",
]
