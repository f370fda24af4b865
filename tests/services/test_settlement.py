"""
Tests for the settlement calculator.

Covers:
- Equal split with the payer counted as a share
- Rounding remainder absorbed by the payer
- Owed / remaining amounts never negative
- Payer and non-participant exclusion
- Per-expense breakdown
"""

import pytest

from houseledger.models.expense import Contribution, Expense
from houseledger.services.settlement import (
    amount_owed_by,
    contributed_by,
    expense_breakdown,
    is_member_involved,
    is_paid_in_full,
    payer_share_cents,
    remaining_on_expense,
    share_cents,
    split_shares,
)


def make_expense(amount_cents=30000, paid_by="alice", split_between=("bob", "carol"), expense_id="exp-1"):
    return Expense(
        id=expense_id,
        title="Rent",
        amount_cents=amount_cents,
        paid_by=paid_by,
        split_between=list(split_between),
        house_id="house-1"
    )


def pay(user_id, amount_cents, expense_id="exp-1"):
    return Contribution(expense_id=expense_id, user_id=user_id, amount_cents=amount_cents)


@pytest.mark.parametrize("amount_cents,split_between", [
    (30000, ["bob", "carol"]),
    (100, ["bob", "carol"]),
    (1, ["bob", "carol", "dave"]),
    (999, ["bob"]),
    (1234, []),
])
def test_shares_sum_to_amount(amount_cents, split_between):
    """Every cent of the expense is assigned to exactly one share."""
    expense = make_expense(amount_cents=amount_cents, split_between=split_between)

    shares = split_shares(expense)

    assert sum(shares.values()) == amount_cents
    # share * (k + 1) is short of the amount by less than one cent per member
    shortfall = amount_cents - share_cents(expense) * (len(split_between) + 1)
    assert 0 <= shortfall <= len(split_between)


def test_payer_absorbs_rounding_remainder():
    """100 cents three ways: payer holds 34, the others 33 each."""
    expense = make_expense(amount_cents=100)

    assert split_shares(expense) == {"bob": 33, "carol": 33, "alice": 34}


def test_share_of_even_split():
    expense = make_expense()

    assert share_cents(expense) == 10000
    assert payer_share_cents(expense) == 10000


def test_empty_split_is_personal_expense():
    """No split members: denominator is 1, payer holds the whole amount."""
    expense = make_expense(split_between=[])

    assert share_cents(expense) == 30000
    assert payer_share_cents(expense) == 30000
    assert split_shares(expense) == {"alice": 30000}


def test_amount_owed_before_any_contribution():
    expense = make_expense()

    assert amount_owed_by("bob", expense, []) == 10000
    assert amount_owed_by("carol", expense, []) == 10000


def test_contribution_reduces_owed():
    expense = make_expense()
    contributions = [pay("bob", 4000)]

    assert amount_owed_by("bob", expense, contributions) == 6000
    assert amount_owed_by("carol", expense, contributions) == 10000


def test_owed_never_negative_on_overpayment():
    expense = make_expense()
    contributions = [pay("bob", 8000), pay("bob", 8000)]

    assert amount_owed_by("bob", expense, contributions) == 0


def test_payer_owes_nothing():
    expense = make_expense()

    assert amount_owed_by("alice", expense, []) == 0


def test_non_participant_owes_nothing():
    expense = make_expense()

    assert amount_owed_by("dave", expense, []) == 0
    assert not is_member_involved("dave", expense)


def test_is_member_involved():
    expense = make_expense()

    assert is_member_involved("alice", expense)
    assert is_member_involved("bob", expense)


def test_contributions_on_other_expenses_ignored():
    expense = make_expense()
    contributions = [pay("bob", 4000, expense_id="exp-2")]

    assert contributed_by("bob", expense, contributions) == 0
    assert amount_owed_by("bob", expense, contributions) == 10000
    assert remaining_on_expense(expense, contributions) == 30000


def test_remaining_on_expense():
    expense = make_expense()
    contributions = [pay("alice", 10000), pay("bob", 4000)]

    assert remaining_on_expense(expense, contributions) == 16000
    assert not is_paid_in_full(expense, contributions)


def test_remaining_never_negative():
    expense = make_expense()
    contributions = [pay("alice", 10000), pay("bob", 25000)]

    assert remaining_on_expense(expense, contributions) == 0
    assert is_paid_in_full(expense, contributions)


def test_expense_breakdown():
    expense = make_expense(amount_cents=100)
    contributions = [pay("alice", 34), pay("bob", 10)]

    breakdown = expense_breakdown(expense, contributions)

    assert breakdown.expense_id == "exp-1"
    assert breakdown.share_cents == 33
    assert breakdown.contributed_cents == 44
    assert breakdown.remaining_cents == 56
    assert breakdown.paid_in_full is False

    rows = {p.user_id: p for p in breakdown.participants}
    assert rows["alice"].is_payer is True
    assert rows["alice"].share_cents == 34
    assert rows["alice"].owed_cents == 0
    assert rows["bob"].paid_cents == 10
    assert rows["bob"].owed_cents == 23
    assert rows["carol"].owed_cents == 33
