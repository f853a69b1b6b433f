from .expenses import ExpenseService, get_expense_service
from .users import UserService, get_user_service

__all__ = [
    "ExpenseService",
    "get_expense_service",
    "UserService",
    "get_user_service",
]
