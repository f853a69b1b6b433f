"""
Token service.
Owns: Issuing and validating signed identity tokens.
"""

from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.api.config import Settings
from app.api.errors import InvalidTokenException, TokenExpiredException


class TokenService:
    """
    HS256 JWTs asserting a user id.

    The secret and lifetime are fixed at construction; only the configured
    algorithm is accepted on decode, so tokens re-signed with ``none`` or an
    asymmetric algorithm never validate.
    """

    def __init__(self, secret: str, *, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(hours=settings.token_ttl_hours),
        )

    def issue(self, user_id: int, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> int:
        """
        Decode a token and return the user id it asserts.

        Raises:
            TokenExpiredException: Signature is fine but ``exp`` has passed
            InvalidTokenException: Bad signature, wrong algorithm, malformed token or subject
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except ExpiredSignatureError:
            raise TokenExpiredException()
        except InvalidTokenError:
            raise InvalidTokenException("Invalid token")

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenException("Invalid token payload")

        if user_id <= 0:
            raise InvalidTokenException("Invalid token payload")

        return user_id
