from typing import List

from pydantic import BaseModel

from houseledger.services.balances import MemberBalance, SpendingOverview, ViewerSummary


class ViewerBalanceResponse(BaseModel):
    """The caller's dashboard numbers."""
    summary: ViewerSummary
    overview: SpendingOverview


class HouseBalancesResponse(BaseModel):
    house_id: str
    balances: List[MemberBalance]
