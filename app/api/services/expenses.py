"""
Expense service.
Owns: Validation and owner-scoped lifecycle of expenses.

Each call is one transition: input is validated first and rejected without
touching the store, then a single store operation persists the result.
Not-found and not-owned are reported as the same ExpenseNotFoundException
so callers cannot discover other users' records.
"""

import logging
import math

from fastapi import Request

from app.api.db import MAX_ROW_ID, Expense, ExpensePatch, ExpenseStore
from app.api.errors import (
    ExpenseNotFoundException,
    InvalidAmountException,
    InvalidCategoryException,
    InvalidInputException,
    NotFoundException,
)
from shared.logging import hash_user_id

logger = logging.getLogger(__name__)

MAX_CATEGORY_LENGTH = 100


def validate_amount(amount: float) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidAmountException("Amount must be a number")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountException("Amount must be greater than 0")
    return float(amount)


def validate_category(category: str) -> str:
    if not isinstance(category, str):
        raise InvalidCategoryException("Category is required")
    cleaned = category.strip()
    if not cleaned:
        raise InvalidCategoryException("Category is required")
    if len(cleaned) > MAX_CATEGORY_LENGTH:
        raise InvalidCategoryException(
            f"Category must be at most {MAX_CATEGORY_LENGTH} characters"
        )
    return cleaned


def _require_positive(value: int, what: str) -> None:
    if value <= 0:
        raise InvalidInputException(f"Invalid {what}")


class ExpenseService:
    def __init__(self, store: ExpenseStore):
        self._store = store

    async def create(self, owner_id: int, amount: float, category: str) -> Expense:
        _require_positive(owner_id, "user id")
        amount = validate_amount(amount)
        category = validate_category(category)

        expense = await self._store.create(owner_id, amount, category)
        logger.info(
            "Expense created",
            extra={"expense_id": expense.id, "user_id_hash": hash_user_id(owner_id)},
        )
        return expense

    async def list_for_owner(self, owner_id: int) -> list[Expense]:
        _require_positive(owner_id, "user id")
        return await self._store.list_by_owner(owner_id)

    async def get(self, expense_id: int, owner_id: int) -> Expense:
        _require_positive(expense_id, "expense id")
        _require_positive(owner_id, "user id")
        return await self._fetch_owned(expense_id, owner_id)

    async def update(self, expense_id: int, owner_id: int, patch: ExpensePatch) -> Expense:
        """
        Apply a partial patch to an owned expense.

        Fetch, overlay present fields, then write both fields back. The fetch
        and the write are separate statements: two concurrent updates by the
        same owner resolve as last-writer-wins.
        """
        _require_positive(expense_id, "expense id")
        _require_positive(owner_id, "user id")

        existing = await self._fetch_owned(expense_id, owner_id)

        amount = existing.amount
        category = existing.category
        if patch.amount is not None:
            amount = validate_amount(patch.amount)
        if patch.category is not None:
            category = validate_category(patch.category)

        try:
            updated = await self._store.update(expense_id, owner_id, amount, category)
        except NotFoundException:
            # Deleted between fetch and write
            raise ExpenseNotFoundException()

        logger.info(
            "Expense updated",
            extra={"expense_id": expense_id, "user_id_hash": hash_user_id(owner_id)},
        )
        return updated

    async def delete(self, expense_id: int, owner_id: int) -> None:
        _require_positive(expense_id, "expense id")
        _require_positive(owner_id, "user id")

        existing = await self._fetch_owned(expense_id, owner_id)
        try:
            await self._store.delete_by_owner(existing.id, existing.user_id)
        except NotFoundException:
            raise ExpenseNotFoundException()

        logger.info(
            "Expense deleted",
            extra={"expense_id": expense_id, "user_id_hash": hash_user_id(owner_id)},
        )

    async def _fetch_owned(self, expense_id: int, owner_id: int) -> Expense:
        if expense_id > MAX_ROW_ID:
            # Cannot exist in the table
            raise ExpenseNotFoundException()
        try:
            return await self._store.get_by_owner(expense_id, owner_id)
        except NotFoundException:
            raise ExpenseNotFoundException()


def get_expense_service(request: Request) -> ExpenseService:
    return request.app.state.expense_service
