"""Identity dependencies for FastAPI.

Content routes only need a stable user id or "no user"; authentication
itself is handled by the auth routes and service.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models.db.user import User
from api.services.auth_service import (
    extend_session,
    get_active_session,
    get_user_by_id,
    verify_token,
)

# HTTP Bearer scheme for JWT
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(
    credentials: HTTPAuthorizationCredentials | None, db: DbSession
) -> tuple[User | None, str | None]:
    """Resolve bearer credentials to an active user.

    Returns:
        Tuple of (user, failure reason). Exactly one of them is None.
    """
    if credentials is None:
        return None, "Not authenticated"

    payload = verify_token(credentials.credentials)
    if payload is None:
        return None, "Invalid or expired token"

    # Check if session is still active
    jti = payload.get("jti")
    if jti:
        session = get_active_session(db, jti)
        if session is None:
            return None, "Session expired or invalidated"
        # Extend session on activity
        extend_session(db, session)

    user_id = payload.get("sub")
    if user_id is None:
        return None, "Invalid token payload"

    user = get_user_by_id(db, int(user_id))
    if user is None:
        return None, "User not found"
    if not user.is_active:
        return None, "User is inactive"

    return user, None


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user.

    Raises:
        HTTPException: 401 if not authenticated or token is invalid.
    """
    user, reason = _resolve_user(credentials, db)
    if user is None:
        raise _unauthorized(reason or "Not authenticated")
    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User | None:
    """Get the current user if authenticated, otherwise None.

    Anonymous visitors can still practise; their sessions are not tracked.
    """
    user, _ = _resolve_user(credentials, db)
    return user
