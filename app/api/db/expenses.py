"""
Expense store.
Owns: Owner-scoped persistence of expense records.

Every read and write is filtered by (id, user_id); a row owned by another
user is reported exactly like a missing one.
"""

from sqlalchemy import delete, select, update

from app.api.errors import NotFoundException
from .client import Store
from .models import Expense
from .schema import ExpenseRow

EXPENSE_COLUMNS = (
    ExpenseRow.id,
    ExpenseRow.user_id,
    ExpenseRow.amount,
    ExpenseRow.category,
    ExpenseRow.created_at,
)


class ExpenseStore(Store):
    async def create(self, owner_id: int, amount: float, category: str) -> Expense:
        async def _create() -> Expense:
            async with self._sessions() as session:
                row = ExpenseRow(user_id=owner_id, amount=amount, category=category)
                session.add(row)
                await session.commit()
                # Reload so timestamps come back in the database's own representation
                await session.refresh(row)
                return Expense.from_row(row)

        return await self._run(_create(), "Failed to create expense")

    async def list_by_owner(self, owner_id: int) -> list[Expense]:
        """All of an owner's expenses, newest first."""

        async def _list() -> list[Expense]:
            async with self._sessions() as session:
                rows = await session.scalars(
                    select(ExpenseRow)
                    .where(ExpenseRow.user_id == owner_id)
                    .order_by(ExpenseRow.created_at.desc(), ExpenseRow.id.desc())
                )
                return [Expense.from_row(row) for row in rows]

        return await self._run(_list(), "Failed to fetch expenses")

    async def get_by_owner(self, expense_id: int, owner_id: int) -> Expense:
        async def _get() -> Expense:
            async with self._sessions() as session:
                row = await session.scalar(
                    select(ExpenseRow)
                    .where(ExpenseRow.id == expense_id, ExpenseRow.user_id == owner_id)
                    .limit(1)
                )
                if row is None:
                    raise NotFoundException(f"Expense {expense_id} not found")
                return Expense.from_row(row)

        return await self._run(_get(), "Failed to fetch expense")

    async def update(self, expense_id: int, owner_id: int, amount: float, category: str) -> Expense:
        """Replace amount and category in a single owner-scoped statement."""

        async def _update() -> Expense:
            async with self._sessions() as session:
                result = await session.execute(
                    update(ExpenseRow)
                    .where(ExpenseRow.id == expense_id, ExpenseRow.user_id == owner_id)
                    .values(amount=amount, category=category)
                    .returning(*EXPENSE_COLUMNS)
                    .execution_options(synchronize_session=False)
                )
                row = result.one_or_none()
                if row is None:
                    await session.rollback()
                    raise NotFoundException(f"Expense {expense_id} not found")
                await session.commit()
                return Expense.from_row(row)

        return await self._run(_update(), "Failed to update expense")

    async def delete_by_owner(self, expense_id: int, owner_id: int) -> None:
        async def _delete() -> None:
            async with self._sessions() as session:
                result = await session.execute(
                    delete(ExpenseRow)
                    .where(ExpenseRow.id == expense_id, ExpenseRow.user_id == owner_id)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    await session.rollback()
                    raise NotFoundException(f"Expense {expense_id} not found")
                await session.commit()

        return await self._run(_delete(), "Failed to delete expense")
