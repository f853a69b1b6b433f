"""
Password hashing.
Owns: bcrypt hashing and verification of user passwords.
"""

import logging

import bcrypt

from app.api.errors import InternalException

logger = logging.getLogger(__name__)

# bcrypt ignores (or, in recent releases, rejects) input past this length
MAX_PASSWORD_BYTES = 72


class PasswordMismatchError(Exception):
    """Raised when a plaintext password does not match a stored hash."""


class PasswordHasher:
    """
    Salted one-way password hashing.

    Every hash carries its own random salt, so hashing the same password
    twice gives two different strings that both verify.
    """

    def __init__(self, rounds: int = 12):
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, plaintext: str) -> str:
        try:
            hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds))
        except (ValueError, TypeError) as e:
            logger.error("Password hashing failed", extra={"error": type(e).__name__})
            raise InternalException("Failed to secure password")
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Check plaintext against a stored hash.

        Returns True on a match.

        Raises:
            PasswordMismatchError: Password does not match, or the hash is unusable
        """
        try:
            matched = bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            matched = False
        if not matched:
            raise PasswordMismatchError("password does not match")
        return True

    def burn(self, plaintext: str) -> None:
        """Spend one verification's worth of work against a throwaway hash."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=self._rounds))
        try:
            bcrypt.checkpw(plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES], self._dummy_hash)
        except ValueError:
            pass
