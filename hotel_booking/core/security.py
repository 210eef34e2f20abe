"""
Bearer-token authentication.

A token is accepted when it carries a valid signature, has not expired and a
row in ``sessions`` still holds it. Sign-in lives elsewhere; ``create_session``
is what it calls to issue a token.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import get_logger
from hotel_booking.db.session import get_db
from hotel_booking.models.session import UserSession

logger = get_logger(__name__)
settings = get_settings()

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


async def create_session(db: AsyncSession, user_id: int) -> str:
    """Issue a token for the user and record it as an open session."""
    token = create_access_token(data={"sub": str(user_id), "jti": uuid.uuid4().hex})
    db.add(UserSession(user_id=user_id, token=token))
    await db.flush()
    return token


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="You must be signed in to continue",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> int:
    if credentials is None:
        raise _unauthorized()

    token = credentials.credentials
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = int(payload["sub"])
    except (JWTError, KeyError, ValueError):
        logger.warning("auth_failed", reason="invalid_token")
        raise _unauthorized()

    result = await db.execute(select(UserSession).where(UserSession.token == token))
    if result.scalar_one_or_none() is None:
        logger.warning("auth_failed", reason="no_session", user_id=user_id)
        raise _unauthorized()

    return user_id
