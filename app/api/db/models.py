"""
Store records.
Owns: Plain data returned by the stores, detached from any session.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.engine import Row

from .schema import ExpenseRow, UserRow


@dataclass(frozen=True)
class User:
    id: int
    email: str
    created_at: datetime
    # Only populated by lookups that need it for login
    password_hash: str | None = None

    @classmethod
    def from_row(cls, row: UserRow, *, with_hash: bool = False) -> "User":
        return cls(
            id=row.id,
            email=row.email,
            created_at=row.created_at,
            password_hash=row.password_hash if with_hash else None,
        )


@dataclass(frozen=True)
class Expense:
    id: int
    user_id: int
    amount: float
    category: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: ExpenseRow | Row) -> "Expense":
        return cls(
            id=row.id,
            user_id=row.user_id,
            amount=row.amount,
            category=row.category,
            created_at=row.created_at,
        )


@dataclass(frozen=True)
class ExpensePatch:
    """Partial update; None leaves the field unchanged."""
    amount: float | None = None
    category: str | None = None
