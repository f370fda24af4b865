"""
Expense ledger models.

Design principles:
- Expenses and contributions are append-only; nothing derived is stored
- Balances are recomputed from the full list on every read
- All amounts in integer cents
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from houseledger.models.base import MongoModel, utcnow


class Expense(MongoModel):
    """
    A shared cost paid by one member and split equally with others.

    Invariants:
    - amount_cents > 0
    - paid_by is not in split_between
    - the payer always counts as one of the len(split_between) + 1 shares
    """
    title: str
    amount_cents: int
    paid_by: str                                          # Payer user id
    split_between: List[str] = Field(default_factory=list)  # Other participants
    house_id: str
    created_at: datetime = Field(default_factory=utcnow)


class Contribution(MongoModel):
    """
    A payment by one member toward one expense.

    Invariant: a member's contributions on an expense never exceed their share.
    """
    expense_id: str
    user_id: str
    amount_cents: int
    house_id: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)
    note: Optional[str] = None
