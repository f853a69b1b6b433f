"""
User service.
Owns: Registration, login, and profile lookup.
"""

import logging
import re

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from app.api.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher, PasswordMismatchError
from app.api.auth.tokens import TokenService
from app.api.db import MAX_ROW_ID, User, UserStore
from app.api.errors import (
    InvalidCredentialsException,
    InvalidInputException,
    NotFoundException,
    UnauthorizedException,
)
from shared.logging import hash_user_id

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self._store = store
        self._hasher = hasher
        self._tokens = tokens

    async def register(self, email: str, password: str) -> User:
        email = normalize_email(email)
        if not email:
            raise InvalidInputException("Email is required")
        if not EMAIL_PATTERN.match(email):
            raise InvalidInputException("Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidInputException(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

        password_hash = await run_in_threadpool(self._hasher.hash, password)
        user = await self._store.create(email, password_hash)

        logger.info("User registered", extra={"user_id_hash": hash_user_id(user.id)})
        return user

    async def login(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same exception, and both
        paths run one bcrypt verification.
        """
        email = normalize_email(email)
        if not email:
            raise InvalidCredentialsException()

        try:
            user = await self._store.find_by_email(email)
        except NotFoundException:
            await run_in_threadpool(self._hasher.burn, password)
            logger.info("Login failed", extra={"error_code": "INVALID_CREDENTIALS"})
            raise InvalidCredentialsException()

        try:
            await run_in_threadpool(self._hasher.verify, password, user.password_hash or "")
        except PasswordMismatchError:
            logger.info(
                "Login failed",
                extra={"error_code": "INVALID_CREDENTIALS", "user_id_hash": hash_user_id(user.id)},
            )
            raise InvalidCredentialsException()

        token = self._tokens.issue(user.id)
        logger.info("User logged in", extra={"user_id_hash": hash_user_id(user.id)})
        return token, User(id=user.id, email=user.email, created_at=user.created_at)

    async def get(self, user_id: int) -> User:
        if user_id <= 0:
            raise InvalidInputException("Invalid user id")
        if user_id > MAX_ROW_ID:
            raise UnauthorizedException("Unknown user")
        try:
            return await self._store.find_by_id(user_id)
        except NotFoundException:
            raise UnauthorizedException("Unknown user")


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
