from typing import List, Optional

from pydantic import BaseModel


class VoteRequest(BaseModel):
    """Exactly one of option_id (single choice) or option_ids (multiple choice)."""
    option_id: Optional[str] = None
    option_ids: Optional[List[str]] = None


class VoteResponse(BaseModel):
    poll_id: str
    option_ids: List[str]


class VoteRemovedResponse(BaseModel):
    poll_id: str
    removed: int
