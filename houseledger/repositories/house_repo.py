from datetime import datetime, timezone
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from houseledger.models.house import House, Member
from houseledger.repositories.base import to_object_id


class HouseRepository:
    """House and membership database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["houses"]
        self.members = db["house_members"]

    async def insert_house(
        self,
        house: House,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> House:
        """Create a new house."""
        result = await self.collection.insert_one(house.to_document(), session=session)
        return house.model_copy(update={"id": str(result.inserted_id)})

    async def get_house(self, house_id: str) -> Optional[House]:
        """Get a house by id."""
        oid = to_object_id(house_id)
        if oid is None:
            return None

        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return House(**doc)
        return None

    async def get_house_by_code(self, code: str) -> Optional[House]:
        """Get a house by its invite code."""
        doc = await self.collection.find_one({"code": code})
        if doc:
            return House(**doc)
        return None

    async def code_exists(self, code: str) -> bool:
        return await self.collection.count_documents({"code": code}, limit=1) > 0

    async def rename_house(self, house_id: str, name: str) -> Optional[House]:
        """Rename a house. The name is the only mutable field."""
        oid = to_object_id(house_id)
        if oid is None:
            return None

        result = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"name": name, "updated_at": datetime.now(timezone.utc)}},
            return_document=True
        )
        if result:
            return House(**result)
        return None

    # ===== MEMBERSHIP =====

    async def insert_member(
        self,
        member: Member,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> Member:
        """Add a membership row."""
        result = await self.members.insert_one(member.to_document(), session=session)
        return member.model_copy(update={"id": str(result.inserted_id)})

    async def get_membership(self, user_id: str) -> Optional[Member]:
        """The user's current membership, if any."""
        doc = await self.members.find_one({"user_id": user_id})
        if doc:
            return Member(**doc)
        return None

    async def delete_membership(
        self,
        user_id: str,
        session: Optional[AsyncIOMotorClientSession] = None
    ) -> int:
        """Remove every membership of a user. Returns the number removed."""
        result = await self.members.delete_many({"user_id": user_id}, session=session)
        return result.deleted_count

    async def list_members(self, house_id: str) -> List[Member]:
        """Members of a house in join order."""
        cursor = self.members.find({"house_id": house_id}).sort("joined_at", 1)
        docs = await cursor.to_list(None)
        return [Member(**doc) for doc in docs]
