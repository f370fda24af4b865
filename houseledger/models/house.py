from datetime import datetime
from typing import Literal

from pydantic import Field

from houseledger.models.base import MongoModel, utcnow

MemberRole = Literal["admin", "member"]


class House(MongoModel):
    """The tenant boundary: every expense and poll belongs to one house."""
    name: str
    code: str          # Invite code, unique join token
    created_by: str
    created_at: datetime = Field(default_factory=utcnow)


class Member(MongoModel):
    """
    A user's membership in a house.

    A user belongs to at most one house at a time; joining a new house
    removes the previous membership.
    """
    house_id: str
    user_id: str
    role: MemberRole = "member"
    name: str = ""     # Display name snapshot taken at join time
    joined_at: datetime = Field(default_factory=utcnow)
