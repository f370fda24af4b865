from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from houseledger.services.settlement import ExpenseBreakdown


class ExpenseCreate(BaseModel):
    """Create an expense paid by the caller."""
    title: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., gt=0)
    split_between: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ContributionCreate(BaseModel):
    """Record a payment by the caller toward an expense."""
    amount_cents: int = Field(..., gt=0)
    date: Optional[datetime] = None
    note: Optional[str] = Field(None, max_length=500)


class ExpenseResponse(BaseModel):
    id: str = Field(validation_alias="_id", serialization_alias="id")
    title: str
    amount_cents: int
    paid_by: str
    split_between: List[str]
    house_id: str
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class ExpenseWithBreakdown(ExpenseResponse):
    """Expense plus who still owes what on it."""
    breakdown: ExpenseBreakdown


class ContributionResponse(BaseModel):
    id: str = Field(validation_alias="_id", serialization_alias="id")
    expense_id: str
    user_id: str
    amount_cents: int
    date: datetime
    note: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
