from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from houseledger.models.poll import Poll, PollOption, PollVote
from houseledger.repositories.base import to_object_id


class PollRepository:
    """Polls, their options and the vote rows cast on them."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["polls"]
        self.options = db["poll_options"]
        self.votes = db["poll_votes"]

    async def get_poll(self, poll_id: str) -> Optional[Poll]:
        """Get a poll by id."""
        oid = to_object_id(poll_id)
        if oid is None:
            return None

        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Poll(**doc)
        return None

    async def list_polls(self, house_id: str) -> List[Poll]:
        """List a house's polls, newest first."""
        docs = await self.collection.find({"house_id": house_id}).sort("created_at", -1).to_list(None)
        return [Poll(**doc) for doc in docs]

    async def list_options(self, poll_id: str) -> List[PollOption]:
        docs = await self.options.find({"poll_id": poll_id}).to_list(None)
        return [PollOption(**doc) for doc in docs]

    async def list_votes(self, poll_id: str) -> List[PollVote]:
        docs = await self.votes.find({"poll_id": poll_id}).to_list(None)
        return [PollVote(**doc) for doc in docs]

    async def insert_votes(
        self,
        votes: List[PollVote],
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> List[PollVote]:
        """Insert one row per (user, option) pair."""
        if not votes:
            return []
        result = await self.votes.insert_many(
            [vote.to_document() for vote in votes],
            session=session
        )
        return [
            vote.model_copy(update={"id": str(inserted_id)})
            for vote, inserted_id in zip(votes, result.inserted_ids)
        ]

    async def delete_votes(self, poll_id: str, user_id: str, option_ids: List[str]) -> int:
        """Delete a user's votes on the given options. Returns rows removed."""
        result = await self.votes.delete_many({
            "poll_id": poll_id,
            "user_id": user_id,
            "option_id": {"$in": option_ids}
        })
        return result.deleted_count
