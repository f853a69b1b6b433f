"""
Auth dependencies.
Owns: Bearer token extraction, user extraction.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, Request

from app.api.errors import InvalidTokenException, UnauthorizedException
from shared.logging import hash_user_id
from .models import AuthenticatedUser
from .tokens import TokenService

logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    correlation_id = getattr(request.state, "correlation_id", None)

    if not authorization:
        raise UnauthorizedException("Missing authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedException("Invalid authorization header format")

    try:
        user_id = tokens.validate(parts[1])
    except InvalidTokenException as e:
        logger.info(
            "Rejected bearer token",
            extra={"error_code": e.error_code, "correlation_id": correlation_id},
        )
        raise

    # Visible to the rest of this request only
    request.state.user_id = user_id
    logger.debug(
        "Request authenticated",
        extra={"user_id_hash": hash_user_id(user_id), "correlation_id": correlation_id},
    )

    return AuthenticatedUser(id=user_id)
