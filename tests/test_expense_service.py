"""
Expense service tests.

Validation, owner scoping and partial-update semantics of the expense
lifecycle, against a real store. Failure paths that a real database
cannot easily produce use an AsyncMock store.
"""

import math
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.api.db import Expense, ExpensePatch, ExpenseStore
from app.api.errors import (
    ExpenseNotFoundException,
    InternalException,
    InvalidAmountException,
    InvalidCategoryException,
    InvalidInputException,
    NotFoundException,
)
from app.api.services import ExpenseService

ALICE = 1
BOB = 2


@pytest.fixture
def service(expense_store: ExpenseStore) -> ExpenseService:
    return ExpenseService(expense_store)


def _expense(**overrides) -> Expense:
    fields = {
        "id": 7,
        "user_id": ALICE,
        "amount": 50.0,
        "category": "food",
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Expense(**fields)


# ============================================================================
# CREATE
# ============================================================================


@pytest.mark.asyncio
async def test_create_persists_for_owner(service: ExpenseService):
    expense = await service.create(ALICE, 12.5, "fuel")

    assert expense.user_id == ALICE
    assert expense.amount == 12.5
    assert expense.category == "fuel"


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, 0.0, -0.01, -5, -1e9, math.nan, math.inf])
@pytest.mark.parametrize("category", ["food", ""])
async def test_non_positive_amount_is_rejected(service: ExpenseService, amount, category):
    """Any amount <= 0 is rejected regardless of category, and nothing is stored."""
    with pytest.raises(InvalidAmountException):
        await service.create(ALICE, amount, category)

    assert await service.list_for_owner(ALICE) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("category", ["", "   ", "\t\n", "x" * 101])
async def test_bad_category_is_rejected(service: ExpenseService, category: str):
    with pytest.raises(InvalidCategoryException):
        await service.create(ALICE, 10.0, category)

    assert await service.list_for_owner(ALICE) == []


@pytest.mark.asyncio
async def test_category_is_trimmed(service: ExpenseService):
    expense = await service.create(ALICE, 3.0, "  groceries ")

    assert expense.category == "groceries"


# ============================================================================
# READ
# ============================================================================


@pytest.mark.asyncio
async def test_get_round_trip(service: ExpenseService):
    created = await service.create(ALICE, 12.5, "fuel")

    fetched = await service.get(created.id, ALICE)

    assert (fetched.amount, fetched.category, fetched.user_id) == (12.5, "fuel", ALICE)


@pytest.mark.asyncio
@pytest.mark.parametrize("expense_id, owner_id", [(0, ALICE), (-1, ALICE), (1, 0)])
async def test_get_rejects_non_positive_ids(service: ExpenseService, expense_id, owner_id):
    with pytest.raises(InvalidInputException):
        await service.get(expense_id, owner_id)


@pytest.mark.asyncio
async def test_list_is_owner_scoped(service: ExpenseService):
    await service.create(ALICE, 1.0, "a")
    await service.create(BOB, 2.0, "b")

    alice_expenses = await service.list_for_owner(ALICE)

    assert [e.category for e in alice_expenses] == ["a"]


# ============================================================================
# OWNERSHIP
# ============================================================================


@pytest.mark.asyncio
async def test_foreign_expense_looks_exactly_like_missing(service: ExpenseService):
    owned = await service.create(ALICE, 10.0, "food")

    for operation in (
        lambda expense_id: service.get(expense_id, BOB),
        lambda expense_id: service.update(expense_id, BOB, ExpensePatch(amount=1.0)),
        lambda expense_id: service.delete(expense_id, BOB),
    ):
        with pytest.raises(ExpenseNotFoundException) as foreign:
            await operation(owned.id)
        with pytest.raises(ExpenseNotFoundException) as missing:
            await operation(owned.id + 1000)

        assert foreign.value.to_dict() == missing.value.to_dict()

    # Alice's record is untouched
    assert await service.get(owned.id, ALICE) == owned


# ============================================================================
# UPDATE
# ============================================================================


@pytest.mark.asyncio
async def test_partial_update_keeps_absent_amount(service: ExpenseService):
    created = await service.create(ALICE, 50.0, "food")

    updated = await service.update(created.id, ALICE, ExpensePatch(category="travel"))

    assert updated.amount == 50.0
    assert updated.category == "travel"


@pytest.mark.asyncio
async def test_partial_update_keeps_absent_category(service: ExpenseService):
    created = await service.create(ALICE, 50.0, "food")

    updated = await service.update(created.id, ALICE, ExpensePatch(amount=75.25))

    assert updated.amount == 75.25
    assert updated.category == "food"


@pytest.mark.asyncio
async def test_empty_patch_returns_record_unchanged(service: ExpenseService):
    created = await service.create(ALICE, 50.0, "food")

    updated = await service.update(created.id, ALICE, ExpensePatch())

    assert updated == created


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "patch, error",
    [
        (ExpensePatch(amount=0), InvalidAmountException),
        (ExpensePatch(amount=-4.0), InvalidAmountException),
        (ExpensePatch(category=""), InvalidCategoryException),
        (ExpensePatch(amount=10.0, category="  "), InvalidCategoryException),
    ],
)
async def test_invalid_patch_changes_nothing(service: ExpenseService, patch, error):
    created = await service.create(ALICE, 50.0, "food")

    with pytest.raises(error):
        await service.update(created.id, ALICE, patch)

    assert await service.get(created.id, ALICE) == created


@pytest.mark.asyncio
async def test_update_of_row_deleted_mid_flight_is_not_found():
    store = AsyncMock(spec=ExpenseStore)
    store.get_by_owner.return_value = _expense()
    store.update.side_effect = NotFoundException("Expense 7 not found")

    with pytest.raises(ExpenseNotFoundException):
        await ExpenseService(store).update(7, ALICE, ExpensePatch(amount=1.0))


@pytest.mark.asyncio
async def test_update_writes_merged_record():
    store = AsyncMock(spec=ExpenseStore)
    store.get_by_owner.return_value = _expense(amount=50.0, category="food")
    store.update.return_value = _expense(amount=50.0, category="travel")

    await ExpenseService(store).update(7, ALICE, ExpensePatch(category=" travel "))

    store.get_by_owner.assert_awaited_once_with(7, ALICE)
    store.update.assert_awaited_once_with(7, ALICE, 50.0, "travel")


# ============================================================================
# DELETE
# ============================================================================


@pytest.mark.asyncio
async def test_delete_then_delete_again_is_not_found(service: ExpenseService):
    created = await service.create(ALICE, 5.0, "coffee")

    await service.delete(created.id, ALICE)

    with pytest.raises(ExpenseNotFoundException):
        await service.delete(created.id, ALICE)
    with pytest.raises(ExpenseNotFoundException):
        await service.get(created.id, ALICE)


@pytest.mark.asyncio
async def test_delete_of_never_existing_id_is_not_found(service: ExpenseService):
    with pytest.raises(ExpenseNotFoundException):
        await service.delete(12345, ALICE)


@pytest.mark.asyncio
async def test_id_beyond_column_range_is_not_found_without_a_query():
    store = AsyncMock(spec=ExpenseStore)
    service = ExpenseService(store)

    with pytest.raises(ExpenseNotFoundException):
        await service.get(2**63, ALICE)
    with pytest.raises(ExpenseNotFoundException):
        await service.update(2**63, ALICE, ExpensePatch(amount=1.0))
    with pytest.raises(ExpenseNotFoundException):
        await service.delete(2**63, ALICE)
    store.get_by_owner.assert_not_awaited()
    store.update.assert_not_awaited()
    store.delete_by_owner.assert_not_awaited()


# ============================================================================
# STORE FAILURES
# ============================================================================


@pytest.mark.asyncio
async def test_store_failure_is_not_reported_as_not_found():
    store = AsyncMock(spec=ExpenseStore)
    store.get_by_owner.side_effect = InternalException("Failed to fetch expense")

    with pytest.raises(InternalException):
        await ExpenseService(store).get(7, ALICE)
    with pytest.raises(InternalException):
        await ExpenseService(store).delete(7, ALICE)
    store.delete_by_owner.assert_not_awaited()
