"""Tests for viewer summaries and house-wide balances."""

from houseledger.models.expense import Contribution, Expense
from houseledger.models.house import Member
from houseledger.services.balances import (
    compute_house_balances,
    compute_spending_overview,
    compute_viewer_summary,
)


def expense(expense_id, amount_cents, paid_by, split_between):
    return Expense(
        id=expense_id,
        title=expense_id,
        amount_cents=amount_cents,
        paid_by=paid_by,
        split_between=split_between,
        house_id="house-1"
    )


def pay(expense_id, user_id, amount_cents):
    return Contribution(expense_id=expense_id, user_id=user_id, amount_cents=amount_cents)


MEMBERS = [
    Member(house_id="house-1", user_id="alice", name="Alice", role="admin"),
    Member(house_id="house-1", user_id="bob", name="Bob"),
    Member(house_id="house-1", user_id="carol", name="Carol"),
]

# Rent paid by alice, groceries by bob (with an awkward split), internet by carol
EXPENSES = [
    expense("rent", 30000, "alice", ["bob", "carol"]),
    expense("groceries", 10001, "bob", ["alice", "carol"]),
    expense("internet", 4500, "carol", ["alice"]),
]

CONTRIBUTIONS = [
    pay("rent", "alice", 10000),
    pay("rent", "bob", 4000),
    pay("rent", "carol", 10000),
    pay("groceries", "bob", 3335),
    pay("groceries", "alice", 1000),
    pay("internet", "carol", 2250),
]


def test_viewer_summary_for_payer():
    summary = compute_viewer_summary("alice", EXPENSES, CONTRIBUTIONS)

    # alice is owed 6000 by bob on rent
    assert summary.total_owing_cents == 6000
    # alice owes 3333 - 1000 on groceries and 2250 on internet
    assert summary.total_owed_cents == 2333 + 2250
    assert summary.net_balance_cents == 6000 - 4583


def test_viewer_summary_uninvolved_viewer():
    summary = compute_viewer_summary("dave", EXPENSES, CONTRIBUTIONS)

    assert summary.total_owed_cents == 0
    assert summary.total_owing_cents == 0
    assert summary.net_balance_cents == 0


def test_viewer_summary_no_expenses():
    summary = compute_viewer_summary("alice", [], [])

    assert summary.net_balance_cents == 0


def test_house_balances_sum_to_zero():
    balances = compute_house_balances(MEMBERS, EXPENSES, CONTRIBUTIONS)

    assert sum(b.balance_cents for b in balances) == 0


def test_house_balances_zero_sum_with_overpayment():
    """Overpayment is absorbed on both sides, the house still nets to 0."""
    contributions = CONTRIBUTIONS + [pay("rent", "bob", 50000)]

    balances = compute_house_balances(MEMBERS, EXPENSES, contributions)

    assert sum(b.balance_cents for b in balances) == 0


def test_house_balances_values():
    balances = {b.user_id: b for b in compute_house_balances(MEMBERS, EXPENSES, CONTRIBUTIONS)}

    assert balances["alice"].balance_cents == 6000 - 4583
    # bob: owed 2333 (alice) + 3333 (carol) on groceries, owes 6000 on rent
    assert balances["bob"].balance_cents == 5666 - 6000
    # carol: owed 2250 on internet, owes 3333 on groceries
    assert balances["carol"].balance_cents == 2250 - 3333
    assert balances["bob"].name == "Bob"


def test_house_balances_match_viewer_summaries():
    balances = compute_house_balances(MEMBERS, EXPENSES, CONTRIBUTIONS)

    for balance in balances:
        summary = compute_viewer_summary(balance.user_id, EXPENSES, CONTRIBUTIONS)
        assert balance.balance_cents == summary.net_balance_cents


def test_house_balances_settled_house():
    contributions = [pay("rent", "alice", 10000), pay("rent", "bob", 10000), pay("rent", "carol", 10000)]

    balances = compute_house_balances(MEMBERS, EXPENSES[:1], contributions)

    assert [b.balance_cents for b in balances] == [0, 0, 0]


def test_spending_overview():
    overview = compute_spending_overview("alice", EXPENSES, CONTRIBUTIONS)

    assert overview.total_expenses_cents == 30000 + 10001 + 4500
    assert overview.you_paid_cents == 30000
    # payer share of rent, regular share of groceries and internet
    assert overview.your_share_cents == 10000 + 3333 + 2250
    assert overview.your_contributions_cents == 11000
