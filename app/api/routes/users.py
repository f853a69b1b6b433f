"""
User routes.
Owns: Registration, login, profile, and the caller's expense collection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.auth import AuthenticatedUser, get_current_user
from app.api.services import ExpenseService, UserService, get_expense_service, get_user_service
from .models import (
    CreateExpenseRequest,
    CredentialsRequest,
    ExpenseListResponse,
    ExpenseResponse,
    LoginResponse,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: CredentialsRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    user = await users.register(body.email, body.password)
    return UserResponse.from_user(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: CredentialsRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> LoginResponse:
    token, user = await users.login(body.email, body.password)
    return LoginResponse(token=token, user=UserResponse.from_user(user))


@router.get("/me", response_model=UserResponse)
async def me(
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    profile = await users.get(user.id)
    return UserResponse.from_user(profile)


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    body: CreateExpenseRequest,
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    expenses: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    expense = await expenses.create(user.id, body.amount, body.category)
    return ExpenseResponse.from_expense(expense)


@router.get("/expenses", response_model=ExpenseListResponse)
async def list_expenses(
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    expenses: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseListResponse:
    """All of the caller's expenses, newest first."""
    items = await expenses.list_for_owner(user.id)
    return ExpenseListResponse(expenses=[ExpenseResponse.from_expense(e) for e in items])
