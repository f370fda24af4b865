from fastapi import APIRouter, Depends

from houseledger.api.deps import get_current_member
from houseledger.db.mongo import get_db
from houseledger.models.house import Member
from houseledger.repositories.expense_repo import ContributionRepository, ExpenseRepository
from houseledger.repositories.house_repo import HouseRepository
from houseledger.schemas.balance import HouseBalancesResponse, ViewerBalanceResponse
from houseledger.services.balances import (
    compute_house_balances,
    compute_spending_overview,
    compute_viewer_summary,
)

router = APIRouter()


@router.get("/me", response_model=ViewerBalanceResponse)
async def get_my_balance(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Get current user's balance"""
    expenses = await ExpenseRepository(db).list_expenses(member.house_id)
    contributions = await ContributionRepository(db).list_contributions(house_id=member.house_id)
    return ViewerBalanceResponse(
        summary=compute_viewer_summary(member.user_id, expenses, contributions),
        overview=compute_spending_overview(member.user_id, expenses, contributions)
    )


@router.get("/house", response_model=HouseBalancesResponse)
async def get_house_balances(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Net balance of every member of the caller's house"""
    members = await HouseRepository(db).list_members(member.house_id)
    expenses = await ExpenseRepository(db).list_expenses(member.house_id)
    contributions = await ContributionRepository(db).list_contributions(house_id=member.house_id)
    return HouseBalancesResponse(
        house_id=member.house_id,
        balances=compute_house_balances(members, expenses, contributions)
    )
