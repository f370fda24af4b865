"""
Balance aggregation across all of a house's expenses.

Two views:
- viewer summary: what one member owes, is owed, and the net of the two
- house balances: a net balance for every member (positive = creditor)

Both read the same share/contribution arithmetic as the settlement
calculator, so for a closed house the balances always sum to exactly 0.
"""

from typing import Iterable, List

from pydantic import BaseModel

from houseledger.models.expense import Contribution, Expense
from houseledger.models.house import Member
from houseledger.services.settlement import (
    amount_owed_by,
    is_member_involved,
    split_shares,
)


class ViewerSummary(BaseModel):
    user_id: str
    total_owed_cents: int      # What the viewer still owes others
    total_owing_cents: int     # What others still owe the viewer
    net_balance_cents: int     # owing - owed


class MemberBalance(BaseModel):
    user_id: str
    name: str
    balance_cents: int


class SpendingOverview(BaseModel):
    user_id: str
    total_expenses_cents: int
    you_paid_cents: int
    your_share_cents: int
    your_contributions_cents: int


def _owed_by(member_id: str, expenses: List[Expense], contributions: List[Contribution]) -> int:
    return sum(amount_owed_by(member_id, expense, contributions) for expense in expenses)


def _owed_to(member_id: str, expenses: List[Expense], contributions: List[Contribution]) -> int:
    """Outstanding shares of other members on expenses this member paid."""
    total = 0
    for expense in expenses:
        if expense.paid_by != member_id:
            continue
        for other_id in expense.split_between:
            total += amount_owed_by(other_id, expense, contributions)
    return total


def compute_viewer_summary(
    viewer_id: str,
    expenses: Iterable[Expense],
    contributions: Iterable[Contribution],
) -> ViewerSummary:
    expenses = list(expenses)
    contributions = list(contributions)

    owed = _owed_by(viewer_id, expenses, contributions)
    owing = _owed_to(viewer_id, expenses, contributions)

    return ViewerSummary(
        user_id=viewer_id,
        total_owed_cents=owed,
        total_owing_cents=owing,
        net_balance_cents=owing - owed,
    )


def compute_house_balances(
    members: Iterable[Member],
    expenses: Iterable[Expense],
    contributions: Iterable[Contribution],
) -> List[MemberBalance]:
    """Net balance for every member, in member order."""
    expenses = list(expenses)
    contributions = list(contributions)

    balances = []
    for member in members:
        owing = _owed_to(member.user_id, expenses, contributions)
        owed = _owed_by(member.user_id, expenses, contributions)
        balances.append(
            MemberBalance(
                user_id=member.user_id,
                name=member.name,
                balance_cents=owing - owed,
            )
        )
    return balances


def compute_spending_overview(
    viewer_id: str,
    expenses: Iterable[Expense],
    contributions: Iterable[Contribution],
) -> SpendingOverview:
    """Headline totals for the viewer's dashboard."""
    expenses = list(expenses)
    contributions = list(contributions)

    your_share = 0
    for expense in expenses:
        if is_member_involved(viewer_id, expense):
            your_share += split_shares(expense)[viewer_id]

    return SpendingOverview(
        user_id=viewer_id,
        total_expenses_cents=sum(e.amount_cents for e in expenses),
        you_paid_cents=sum(e.amount_cents for e in expenses if e.paid_by == viewer_id),
        your_share_cents=your_share,
        your_contributions_cents=sum(
            c.amount_cents for c in contributions if c.user_id == viewer_id
        ),
    )
