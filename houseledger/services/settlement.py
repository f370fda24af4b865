"""
Settlement calculator - who still owes what on a single expense.

Split rule:
- An expense of A cents split with k other members has k + 1 equal shares;
  the payer always holds one of them
- Each non-payer owes A // (k + 1)
- The payer's share absorbs the indivisible remainder, so the shares always
  add up to exactly A

Everything here is a pure function over an expense and a contribution list.
Nothing raises for a (member, expense) pair: a member who is not involved,
or who paid, simply owes 0.
"""

from typing import Dict, Iterable, List

from pydantic import BaseModel

from houseledger.models.expense import Contribution, Expense


class ParticipantShare(BaseModel):
    user_id: str
    is_payer: bool
    share_cents: int
    paid_cents: int
    owed_cents: int


class ExpenseBreakdown(BaseModel):
    expense_id: str | None
    share_cents: int
    contributed_cents: int
    remaining_cents: int
    paid_in_full: bool
    participants: List[ParticipantShare]


def share_cents(expense: Expense) -> int:
    """Share owed by each member in split_between."""
    return expense.amount_cents // (len(expense.split_between) + 1)


def payer_share_cents(expense: Expense) -> int:
    """The payer's own share, including the rounding remainder."""
    return expense.amount_cents - share_cents(expense) * len(expense.split_between)


def split_shares(expense: Expense) -> Dict[str, int]:
    """Full share table for an expense, payer included."""
    shares = {user_id: share_cents(expense) for user_id in expense.split_between}
    shares[expense.paid_by] = payer_share_cents(expense)
    return shares


def is_member_involved(member_id: str, expense: Expense) -> bool:
    return member_id == expense.paid_by or member_id in expense.split_between


def _on_expense(expense: Expense, contributions: Iterable[Contribution]) -> List[Contribution]:
    return [c for c in contributions if c.expense_id == expense.id]


def contributed_by(member_id: str, expense: Expense, contributions: Iterable[Contribution]) -> int:
    """Total a member has put toward one expense."""
    return sum(
        c.amount_cents for c in _on_expense(expense, contributions)
        if c.user_id == member_id
    )


def amount_owed_by(member_id: str, expense: Expense, contributions: Iterable[Contribution]) -> int:
    """
    What a member still owes on an expense.

    0 for the payer and for anyone not in split_between. Overpayment is
    absorbed, never reported as a negative amount here.
    """
    if member_id == expense.paid_by or member_id not in expense.split_between:
        return 0
    paid = contributed_by(member_id, expense, contributions)
    return max(0, share_cents(expense) - paid)


def remaining_on_expense(expense: Expense, contributions: Iterable[Contribution]) -> int:
    """Amount of the expense not yet covered by any contribution."""
    total = sum(c.amount_cents for c in _on_expense(expense, contributions))
    return max(0, expense.amount_cents - total)


def is_paid_in_full(expense: Expense, contributions: Iterable[Contribution]) -> bool:
    return remaining_on_expense(expense, contributions) == 0


def expense_breakdown(expense: Expense, contributions: Iterable[Contribution]) -> ExpenseBreakdown:
    """Per-participant share/paid/owed rows for one expense."""
    relevant = _on_expense(expense, contributions)
    participants = [
        ParticipantShare(
            user_id=user_id,
            is_payer=user_id == expense.paid_by,
            share_cents=share,
            paid_cents=contributed_by(user_id, expense, relevant),
            owed_cents=amount_owed_by(user_id, expense, relevant),
        )
        for user_id, share in split_shares(expense).items()
    ]
    remaining = remaining_on_expense(expense, relevant)
    return ExpenseBreakdown(
        expense_id=expense.id,
        share_cents=share_cents(expense),
        contributed_cents=sum(c.amount_cents for c in relevant),
        remaining_cents=remaining,
        paid_in_full=remaining == 0,
        participants=participants,
    )
