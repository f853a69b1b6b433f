"""
Expense routes.
Owns: Read, partial update, and delete of a single owned expense.

All three answer 404 for both missing and foreign expenses.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.auth import AuthenticatedUser, get_current_user
from app.api.db import ExpensePatch
from app.api.services import ExpenseService, get_expense_service
from .models import (
    ExpenseEnvelope,
    ExpenseResponse,
    MessageResponse,
    UpdateExpenseRequest,
)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("/{expense_id}", response_model=ExpenseEnvelope)
async def get_expense(
    expense_id: int,
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    expenses: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseEnvelope:
    expense = await expenses.get(expense_id, user.id)
    return ExpenseEnvelope(expense=ExpenseResponse.from_expense(expense))


@router.put("/{expense_id}", response_model=ExpenseEnvelope)
async def update_expense(
    expense_id: int,
    body: UpdateExpenseRequest,
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    expenses: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseEnvelope:
    patch = ExpensePatch(amount=body.amount, category=body.category)
    expense = await expenses.update(expense_id, user.id, patch)
    return ExpenseEnvelope(expense=ExpenseResponse.from_expense(expense))


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    expenses: Annotated[ExpenseService, Depends(get_expense_service)],
) -> MessageResponse:
    await expenses.delete(expense_id, user.id)
    return MessageResponse(message="expense deleted successfully")
