"""
LedgerWriter - the only code path that records expenses and contributions.

Every operation returns a WriteResult instead of raising, so the caller can
roll back optimistic state on failure. Balances are never written; they
are recomputed from the rows on read.
"""

from datetime import datetime
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from houseledger.core.config import settings
from houseledger.core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    WriteResult,
)
from houseledger.core.logging_config import get_logger
from houseledger.db.mongo import start_transaction
from houseledger.models.base import utcnow
from houseledger.models.expense import Contribution, Expense
from houseledger.repositories.expense_repo import ContributionRepository, ExpenseRepository
from houseledger.repositories.house_repo import HouseRepository
from houseledger.services.settlement import amount_owed_by, payer_share_cents
from houseledger.utils.ledger_validation import (
    validate_contribution,
    validate_expense,
    validate_participants,
)

logger = get_logger(__name__)


class LedgerWriter:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.expenses = ExpenseRepository(db)
        self.contributions = ContributionRepository(db)
        self.houses = HouseRepository(db)

    async def create_expense(
        self,
        title: str,
        amount_cents: int,
        paid_by: str,
        split_between: List[str],
        house_id: Optional[str],
        created_at: Optional[datetime] = None
    ) -> WriteResult[Expense]:
        """
        Record a new expense and the payer's own share.

        The payer's share is written as a contribution in the same
        transaction, so the expense never exists without it.
        """
        log = logger.bind(house_id=house_id, paid_by=paid_by, amount_cents=amount_cents)

        try:
            validate_expense(title, amount_cents, paid_by, split_between, house_id)
            members = await self.houses.list_members(house_id)
            validate_participants(paid_by, split_between, [m.user_id for m in members])
        except ValidationError as exc:
            log.warning("expense_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("expense_member_lookup_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        created_at = created_at or utcnow()
        expense = Expense(
            title=title.strip(),
            amount_cents=amount_cents,
            paid_by=paid_by,
            split_between=list(split_between),
            house_id=house_id,
            created_at=created_at
        )

        try:
            async with start_transaction(self.db) as session:
                expense = await self.expenses.insert_expense(expense, session=session)
                payer_contribution = Contribution(
                    expense_id=expense.id,
                    user_id=paid_by,
                    amount_cents=payer_share_cents(expense),
                    house_id=house_id,
                    date=created_at,
                    note=settings.PAYER_CONTRIBUTION_NOTE
                )
                await self.contributions.insert_contribution(payer_contribution, session=session)
        except PyMongoError as exc:
            log.error("expense_insert_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info("expense_created", expense_id=expense.id, split_count=len(split_between))
        return WriteResult.ok(expense)

    async def add_contribution(
        self,
        expense_id: Optional[str],
        user_id: str,
        amount_cents: int,
        date: Optional[datetime] = None,
        note: Optional[str] = None
    ) -> WriteResult[Contribution]:
        """
        Record a payment toward an expense.

        Rejected when it would take the contributor past their share;
        overpayment is never clamped.
        """
        log = logger.bind(expense_id=expense_id, user_id=user_id, amount_cents=amount_cents)

        if not expense_id:
            error = ValidationError("Expense needs to be valid")
            log.warning("contribution_rejected", reason=error.message)
            return WriteResult.fail(error)

        try:
            expense = await self.expenses.get_expense(expense_id)
            if expense is None:
                error = NotFoundError(f"Expense {expense_id} not found")
                log.warning("contribution_rejected", reason=error.message)
                return WriteResult.fail(error)

            existing = await self.contributions.list_contributions(expense_id=expense.id)
            validate_contribution(amount_cents, amount_owed_by(user_id, expense, existing))

            contribution = await self.contributions.insert_contribution(
                Contribution(
                    expense_id=expense.id,
                    user_id=user_id,
                    amount_cents=amount_cents,
                    house_id=expense.house_id,
                    date=date or utcnow(),
                    note=note
                )
            )
        except ValidationError as exc:
            log.warning("contribution_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("contribution_insert_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info("contribution_added", contribution_id=contribution.id)
        return WriteResult.ok(contribution)
