from datetime import datetime

from pydantic import Field

from houseledger.models.base import MongoModel, utcnow


class Poll(MongoModel):
    house_id: str
    created_by: str
    question: str
    multiple_choice: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime


class PollOption(MongoModel):
    poll_id: str
    option_text: str


class PollVote(MongoModel):
    """One row per (user, option) pair."""
    poll_id: str
    user_id: str
    option_id: str
    created_at: datetime = Field(default_factory=utcnow)
