from typing import List

from fastapi import APIRouter, Depends, status

from houseledger.api.deps import get_current_member, unwrap
from houseledger.db.mongo import get_db
from houseledger.models.house import Member
from houseledger.repositories.expense_repo import ContributionRepository, ExpenseRepository
from houseledger.schemas.expense import (
    ContributionCreate,
    ContributionResponse,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseWithBreakdown,
)
from houseledger.services.ledger_writer import LedgerWriter
from houseledger.services.settlement import expense_breakdown

router = APIRouter()


@router.get("", response_model=List[ExpenseWithBreakdown])
async def list_expenses(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """House expenses, newest first, each with its current breakdown."""
    expenses = await ExpenseRepository(db).list_expenses(member.house_id)
    contributions = await ContributionRepository(db).list_contributions(house_id=member.house_id)
    return [
        ExpenseWithBreakdown(
            **expense.model_dump(),
            breakdown=expense_breakdown(expense, contributions)
        )
        for expense in expenses
    ]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    payload: ExpenseCreate,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Create an expense paid by the caller."""
    result = await LedgerWriter(db).create_expense(
        title=payload.title,
        amount_cents=payload.amount_cents,
        paid_by=member.user_id,
        split_between=payload.split_between,
        house_id=member.house_id,
        created_at=payload.created_at
    )
    return unwrap(result)


@router.get("/{expense_id}/contributions", response_model=List[ContributionResponse])
async def list_expense_contributions(
    expense_id: str,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    return await ContributionRepository(db).list_contributions(
        house_id=member.house_id,
        expense_id=expense_id
    )


@router.post(
    "/{expense_id}/contributions",
    response_model=ContributionResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_contribution(
    expense_id: str,
    payload: ContributionCreate,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Record a payment by the caller toward an expense."""
    result = await LedgerWriter(db).add_contribution(
        expense_id=expense_id,
        user_id=member.user_id,
        amount_cents=payload.amount_cents,
        date=payload.date,
        note=payload.note
    )
    return unwrap(result)
