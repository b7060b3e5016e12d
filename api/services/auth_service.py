"""Authentication service: the identity provider for practice users."""
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import or_, select
from sqlalchemy.orm import Session as DbSession

from api.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    SECRET_KEY,
    SESSION_EXTEND_MINUTES,
)
from api.models.db.user import Session, User


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def create_access_token(user_id: int) -> tuple[str, str, datetime]:
    """Create a JWT access token.

    Returns:
        Tuple of (token, jti, expiry)
    """
    jti = str(uuid.uuid4())
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(user_id), "exp": expire, "jti": jti}
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM), jti, expire


def verify_token(token: str) -> dict | None:
    """Decode a JWT token, or return None if it is invalid or expired."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None


def find_user(db: DbSession, login: str) -> User | None:
    """Find a user by username or email."""
    return db.execute(
        select(User).where(or_(User.username == login, User.email == login))
    ).scalars().first()


def user_exists(db: DbSession, username: str, email: str) -> str | None:
    """Return which unique field is already taken, if any."""
    if db.execute(select(User.id).where(User.username == username)).first():
        return "Username"
    if db.execute(select(User.id).where(User.email == email)).first():
        return "Email"
    return None


def get_user_by_id(db: DbSession, user_id: int) -> User | None:
    """Get user by ID."""
    return db.get(User, user_id)


def create_user(db: DbSession, username: str, email: str, password: str) -> User:
    """Create a new user."""
    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def start_session(db: DbSession, user_id: int) -> tuple[str, Session]:
    """Issue a token for the user and record its server-side session."""
    token, jti, expires_at = create_access_token(user_id)
    session = Session(user_id=user_id, token_jti=jti, expires_at=expires_at)
    db.add(session)
    db.commit()
    db.refresh(session)
    return token, session


def get_active_session(db: DbSession, token_jti: str) -> Session | None:
    """Get an active, unexpired session by token JTI."""
    session = db.execute(
        select(Session).where(
            Session.token_jti == token_jti,
            Session.is_active == True,  # noqa: E712
        )
    ).scalar_one_or_none()
    if session is None:
        return None

    expires_at = session.expires_at
    # SQLite drops tzinfo on read
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at <= datetime.now(timezone.utc):
        return None
    return session


def extend_session(db: DbSession, session: Session) -> Session:
    """Extend session expiration and update last activity."""
    now = datetime.now(timezone.utc)
    session.last_activity = now
    session.expires_at = now + timedelta(minutes=SESSION_EXTEND_MINUTES)
    db.commit()
    db.refresh(session)
    return session


def invalidate_session(db: DbSession, token_jti: str) -> None:
    """Invalidate a session by token JTI."""
    session = db.execute(
        select(Session).where(Session.token_jti == token_jti)
    ).scalar_one_or_none()
    if session:
        session.is_active = False
        db.commit()
