"""
ExpenseRepository / ContributionRepository - the append-only expense ledger.

Rows are only ever inserted. Nothing derived (balances, remaining amounts)
is written back; callers list the rows and recompute.
"""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from houseledger.models.expense import Contribution, Expense
from houseledger.repositories.base import to_object_id


class ExpenseRepository:
    """Repository for shared expenses."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["expenses"]

    async def insert_expense(
        self,
        expense: Expense,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> Expense:
        """Insert an expense and return it with its assigned id."""
        doc = expense.to_document()
        result = await self.collection.insert_one(doc, session=session)
        return expense.model_copy(update={"id": str(result.inserted_id)})

    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get an expense by id."""
        oid = to_object_id(expense_id)
        if oid is None:
            return None

        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Expense(**doc)
        return None

    async def list_expenses(self, house_id: str) -> List[Expense]:
        """All expenses of a house, newest first."""
        cursor = self.collection.find({"house_id": house_id}).sort("created_at", -1)
        docs = await cursor.to_list(None)
        return [Expense(**doc) for doc in docs]


class ContributionRepository:
    """Repository for contributions toward expenses."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["contributions"]

    async def insert_contribution(
        self,
        contribution: Contribution,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> Contribution:
        """Insert a contribution and return it with its assigned id."""
        doc = contribution.to_document()
        result = await self.collection.insert_one(doc, session=session)
        return contribution.model_copy(update={"id": str(result.inserted_id)})

    async def list_contributions(
        self,
        house_id: Optional[str] = None,
        expense_id: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> List[Contribution]:
        """
        List contributions filtered by house, expense and/or user.

        At least one filter is required so a caller never pulls every
        contribution across all houses by accident.
        """
        query = {}
        if house_id is not None:
            query["house_id"] = house_id
        if expense_id is not None:
            query["expense_id"] = expense_id
        if user_id is not None:
            query["user_id"] = user_id
        if not query:
            raise ValueError("list_contributions needs house_id, expense_id or user_id")

        cursor = self.collection.find(query).sort("date", 1)
        docs = await cursor.to_list(None)
        return [Contribution(**doc) for doc in docs]
