"""House and membership schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class HouseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_name: Optional[str] = Field(None, max_length=100)


class HouseJoin(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)
    display_name: Optional[str] = Field(None, max_length=100)


class HouseRename(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class HouseResponse(BaseModel):
    id: str = Field(validation_alias="_id", serialization_alias="id")
    name: str
    code: str
    created_by: str
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MemberResponse(BaseModel):
    """Member of a house."""
    user_id: str
    house_id: str
    role: str  # "admin" or "member"
    name: str
    joined_at: datetime
    
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
