"""
Route models.
Owns: Request/response schemas for all routes.

Request models only check shape and types. Value rules (positive amount,
non-empty category, email format) live in the services so that every
caller goes through the same checks.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.api.db import Expense, User


# =============================================================================
# User Models
# =============================================================================


class CredentialsRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, created_at=user.created_at)


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


# =============================================================================
# Expense Models
# =============================================================================


class CreateExpenseRequest(BaseModel):
    amount: float
    category: str


class UpdateExpenseRequest(BaseModel):
    """Partial patch: omitted or null fields are left unchanged."""
    model_config = ConfigDict(extra="ignore")

    amount: float | None = None
    category: str | None = None


class ExpenseResponse(BaseModel):
    id: int
    user_id: int
    amount: float
    category: str
    created_at: datetime

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            user_id=expense.user_id,
            amount=expense.amount,
            category=expense.category,
            created_at=expense.created_at,
        )


class ExpenseEnvelope(BaseModel):
    expense: ExpenseResponse


class ExpenseListResponse(BaseModel):
    expenses: list[ExpenseResponse]


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    status: str = "ok"
