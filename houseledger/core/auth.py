from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from houseledger.core.config import settings
from houseledger.schemas.user import CurrentUser

security = HTTPBearer()

def create_access_token(
    user_id: str,
    name: str = "",
    expires_delta: timedelta | None = None
) -> str:
    """
    Create a JWT access token.

    Production tokens come from the auth provider; this mirrors their shape
    for local development and tests.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=30)
    
    now = datetime.now(timezone.utc)
    expire = now + expires_delta
    
    payload = {
        "sub": user_id,
        "name": name,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp())
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    
    return jwt.encode(
        payload,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )

def decode_access_token(token: str) -> Optional[CurrentUser]:
    """Verify a token and return its user, None when invalid."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None}
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return CurrentUser(id=user_id, name=payload.get("name") or "")

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> CurrentUser:
    """Get current user from JWT token."""
    user = decode_access_token(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return user
