from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from houseledger.api.deps import get_current_member, unwrap
from houseledger.core.auth import get_current_user
from houseledger.db.mongo import get_db
from houseledger.models.house import Member
from houseledger.repositories.house_repo import HouseRepository
from houseledger.schemas.house import (
    HouseCreate,
    HouseJoin,
    HouseRename,
    HouseResponse,
    MemberResponse,
)
from houseledger.schemas.user import CurrentUser
from houseledger.services.membership import MembershipService

router = APIRouter()


@router.post("", response_model=HouseResponse, status_code=status.HTTP_201_CREATED)
async def create_house(
    payload: HouseCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db = Depends(get_db)
):
    """Create a house with the caller as admin."""
    result = await MembershipService(db).create_house(
        payload.name,
        current_user.id,
        payload.display_name or current_user.name
    )
    return unwrap(result)


@router.post("/join", response_model=MemberResponse)
async def join_house(
    payload: HouseJoin,
    current_user: CurrentUser = Depends(get_current_user),
    db = Depends(get_db)
):
    """Join a house by invite code, leaving the current one."""
    result = await MembershipService(db).join_house(
        payload.code,
        current_user.id,
        payload.display_name or current_user.name
    )
    return unwrap(result)


@router.post("/leave", status_code=status.HTTP_204_NO_CONTENT)
async def leave_house(
    current_user: CurrentUser = Depends(get_current_user),
    db = Depends(get_db)
):
    unwrap(await MembershipService(db).leave_house(current_user.id))


@router.get("/me", response_model=HouseResponse)
async def get_my_house(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    house = await HouseRepository(db).get_house(member.house_id)
    if house is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="House not found")
    return house


@router.patch("/me", response_model=HouseResponse)
async def rename_my_house(
    payload: HouseRename,
    current_user: CurrentUser = Depends(get_current_user),
    db = Depends(get_db)
):
    """Rename the caller's house (admin only)."""
    return unwrap(await MembershipService(db).rename_house(current_user.id, payload.name))


@router.get("/me/members", response_model=List[MemberResponse])
async def list_my_members(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    return await HouseRepository(db).list_members(member.house_id)
