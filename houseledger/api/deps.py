from fastapi import Depends, HTTPException, status

from houseledger.core.auth import get_current_user
from houseledger.core.errors import NotFoundError, PersistenceError, ValidationError, WriteResult
from houseledger.db.mongo import get_db
from houseledger.models.house import Member
from houseledger.repositories.house_repo import HouseRepository
from houseledger.schemas.user import CurrentUser


async def get_current_member(
    current_user: CurrentUser = Depends(get_current_user),
    db = Depends(get_db)
) -> Member:
    """The caller's membership. House-scoped endpoints need one."""
    member = await HouseRepository(db).get_membership(current_user.id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User needs to be in a house"
        )
    return member


def unwrap(result: WriteResult):
    """Return a successful result's data or raise the matching HTTP error."""
    if result.success:
        return result.data

    error = result.error
    if isinstance(error, ValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, PersistenceError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    raise HTTPException(status_code=code, detail=error.message if error else "Write failed")
