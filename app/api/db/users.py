"""
User store.
Owns: Persistence of user identities with unique emails.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.api.errors import EmailTakenException, NotFoundException
from .client import Store
from .models import User
from .schema import UserRow


class UserStore(Store):
    async def create(self, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            EmailTakenException: Email already registered
            InternalException: Database operation failed
        """

        async def _create() -> User:
            async with self._sessions() as session:
                row = UserRow(email=email, password_hash=password_hash)
                session.add(row)
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    raise EmailTakenException()
                await session.refresh(row)
                return User.from_row(row)

        return await self._run(_create(), "Failed to create user")

    async def find_by_email(self, email: str) -> User:
        """Fetch a user including the password hash, for login."""

        async def _find() -> User:
            async with self._sessions() as session:
                row = await session.scalar(select(UserRow).where(UserRow.email == email).limit(1))
                if row is None:
                    raise NotFoundException("User not found")
                return User.from_row(row, with_hash=True)

        return await self._run(_find(), "Failed to fetch user")

    async def find_by_id(self, user_id: int) -> User:
        """Fetch a user without the password hash."""

        async def _find() -> User:
            async with self._sessions() as session:
                row = await session.get(UserRow, user_id)
                if row is None:
                    raise NotFoundException("User not found")
                return User.from_row(row)

        return await self._run(_find(), "Failed to fetch user")
