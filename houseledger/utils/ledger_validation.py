"""Expense and contribution validation utilities."""
from typing import Iterable, List, Optional

from houseledger.core.errors import ValidationError


def validate_expense(
    title: str,
    amount_cents: int,
    paid_by: str,
    split_between: List[str],
    house_id: Optional[str]
) -> None:
    """
    Validate a new expense before anything is written.

    Rules:
    - The payer must be in a house
    - title must not be blank
    - amount_cents must be positive
    - split_between must not contain the payer or repeat a member
    """
    if not house_id:
        raise ValidationError("User needs to be in a house")

    if not title or not title.strip():
        raise ValidationError("Expense title must not be blank")

    if amount_cents <= 0:
        raise ValidationError(
            f"Expense amount must be positive: {amount_cents}"
        )

    if paid_by in split_between:
        raise ValidationError(
            "Payer cannot be in split_between, their share is counted automatically"
        )

    if len(set(split_between)) != len(split_between):
        raise ValidationError("Duplicate members found in split_between")


def validate_participants(
    paid_by: str,
    split_between: List[str],
    member_ids: Iterable[str]
) -> None:
    """Payer and every split member must belong to the expense's house."""
    member_ids = set(member_ids)

    if paid_by not in member_ids:
        raise ValidationError(f"Payer {paid_by} is not a member of this house")

    outsiders = [user_id for user_id in split_between if user_id not in member_ids]
    if outsiders:
        raise ValidationError(
            f"Some users in split_between are not house members: {', '.join(outsiders)}"
        )


def validate_contribution(amount_cents: int, owed_cents: int) -> None:
    """
    Validate a contribution against what the contributor still owes.

    Rules:
    - amount_cents must be positive
    - amount_cents must not exceed the contributor's outstanding share
    """
    if amount_cents <= 0:
        raise ValidationError(
            f"Contribution amount must be positive: {amount_cents}"
        )

    if owed_cents == 0:
        raise ValidationError("Nothing left to pay on this expense")

    if amount_cents > owed_cents:
        raise ValidationError(
            f"Contribution must be 1 to {owed_cents} cents"
        )
