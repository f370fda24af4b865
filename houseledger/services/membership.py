"""
House membership - create a house, join one by invite code, leave.

A user is in at most one house. Creating or joining a house drops the previous
membership in the same transaction as the new one is written.
"""

import secrets
import string
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from houseledger.core.config import settings
from houseledger.core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    WriteResult,
)
from houseledger.core.logging_config import get_logger
from houseledger.db.mongo import start_transaction
from houseledger.models.house import House, Member
from houseledger.repositories.house_repo import HouseRepository

logger = get_logger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 10


def generate_invite_code(length: Optional[int] = None) -> str:
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


class MembershipService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.houses = HouseRepository(db)

    async def _unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_invite_code()
            if not await self.houses.code_exists(code):
                return code
        raise PersistenceError("Failed to generate a unique invite code")

    async def create_house(self, name: str, user_id: str, display_name: str) -> WriteResult[House]:
        """Create a house with the caller as its admin, leaving any current house."""
        log = logger.bind(user_id=user_id)

        if not name or not name.strip():
            error = ValidationError("House name must not be blank")
            log.warning("house_rejected", reason=error.message)
            return WriteResult.fail(error)

        try:
            current = await self.houses.get_membership(user_id)
            house = House(name=name.strip(), code=await self._unique_code(), created_by=user_id)
            async with start_transaction(self.db) as session:
                await self.houses.delete_membership(user_id, session=session)
                house = await self.houses.insert_house(house, session=session)
                await self.houses.insert_member(
                    Member(house_id=house.id, user_id=user_id, role="admin", name=display_name),
                    session=session
                )
        except PersistenceError as exc:
            log.warning("house_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("house_insert_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info(
            "house_created",
            house_id=house.id,
            previous_house_id=current.house_id if current else None
        )
        return WriteResult.ok(house)

    async def join_house(self, code: str, user_id: str, display_name: str) -> WriteResult[Member]:
        """Join the house with this invite code, leaving any current house."""
        log = logger.bind(user_id=user_id)

        try:
            house = await self.houses.get_house_by_code(code.strip().upper())
            if house is None:
                error = NotFoundError("Invalid invite code")
                log.warning("join_rejected", reason=error.message)
                return WriteResult.fail(error)

            current = await self.houses.get_membership(user_id)
            if current is not None and current.house_id == house.id:
                return WriteResult.ok(current)

            async with start_transaction(self.db) as session:
                await self.houses.delete_membership(user_id, session=session)
                member = await self.houses.insert_member(
                    Member(house_id=house.id, user_id=user_id, role="member", name=display_name),
                    session=session
                )
        except PyMongoError as exc:
            log.error("join_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info(
            "house_joined",
            house_id=house.id,
            previous_house_id=current.house_id if current else None
        )
        return WriteResult.ok(member)

    async def leave_house(self, user_id: str) -> WriteResult[int]:
        log = logger.bind(user_id=user_id)

        try:
            removed = await self.houses.delete_membership(user_id)
        except PyMongoError as exc:
            log.error("leave_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        if removed == 0:
            error = NotFoundError("User is not in a house")
            log.warning("leave_rejected", reason=error.message)
            return WriteResult.fail(error)

        log.info("house_left")
        return WriteResult.ok(removed)

    async def rename_house(self, user_id: str, name: str) -> WriteResult[House]:
        """Rename the caller's house. Admins only."""
        log = logger.bind(user_id=user_id)

        try:
            if not name or not name.strip():
                raise ValidationError("House name must not be blank")

            member = await self.houses.get_membership(user_id)
            if member is None:
                raise ValidationError("User needs to be in a house")
            if member.role != "admin":
                raise ValidationError("Only a house admin can rename the house")

            house = await self.houses.rename_house(member.house_id, name.strip())
            if house is None:
                error = NotFoundError(f"House {member.house_id} not found")
                log.warning("rename_rejected", reason=error.message)
                return WriteResult.fail(error)
        except ValidationError as exc:
            log.warning("rename_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("rename_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info("house_renamed", house_id=house.id)
        return WriteResult.ok(house)
