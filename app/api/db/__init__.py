from .client import (
    Store,
    create_engine,
    create_schema,
    create_session_factory,
    normalize_database_url,
    ping,
)
from .expenses import ExpenseStore
from .models import Expense, ExpensePatch, User
from .schema import MAX_ROW_ID
from .users import UserStore

__all__ = [
    "Store",
    "create_engine",
    "create_schema",
    "create_session_factory",
    "normalize_database_url",
    "ping",
    "ExpenseStore",
    "UserStore",
    "Expense",
    "ExpensePatch",
    "User",
    "MAX_ROW_ID",
]
