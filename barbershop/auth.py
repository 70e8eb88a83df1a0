"""
Login gate for the booking dashboard.

A single administrator account (configured through the environment) signs
in and receives a signed session token. The token carries its issue time;
expiry is checked with is_session_expired on every request.
"""

import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from jose import jwt as jose_jwt
from pydantic import BaseModel

from .config import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD, SECRET_KEY, SESSION_TIMEOUT_HOURS

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_TIMEOUT = timedelta(hours=SESSION_TIMEOUT_HOURS)

security = HTTPBearer(auto_error=False)


class User(BaseModel):
    id: str
    email: str
    name: str
    role: str


class Session(BaseModel):
    token: str
    user: User
    issued_at: datetime
    expires_at: datetime


ADMIN_USER = User(id="1", email=ADMIN_EMAIL, name=ADMIN_NAME, role="admin")


def is_session_expired(issued_at: datetime, now: datetime, timeout: timedelta = SESSION_TIMEOUT) -> bool:
    """True once more than ``timeout`` has passed since ``issued_at``"""
    return now - issued_at > timeout


def authenticate(email: str, password: str) -> Optional[User]:
    """Check credentials against the configured administrator account"""
    email_ok = hmac.compare_digest((email or "").strip().lower().encode(), ADMIN_EMAIL.lower().encode())
    password_ok = hmac.compare_digest((password or "").encode(), ADMIN_PASSWORD.encode())
    if email_ok and password_ok:
        return ADMIN_USER
    return None


def create_session_token(user: User, now: Optional[datetime] = None) -> Session:
    """Issue a signed token for ``user``"""
    issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    claims = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "iat": int(issued_at.timestamp()),
        "jti": secrets.token_urlsafe(8),
    }
    token = jose_jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)
    return Session(token=token, user=user, issued_at=issued_at, expires_at=issued_at + SESSION_TIMEOUT)


def verify_session_token(token: str, now: Optional[datetime] = None) -> Optional[dict[str, Any]]:
    """
    Decode a session token

    Returns:
        Decoded claims if the signature is valid and the session has not
        expired, None otherwise
    """
    try:
        payload = jose_jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    issued_at_ts = payload.get("iat")
    if not isinstance(issued_at_ts, (int, float)):
        logger.warning("⚠️ Session token missing issue time")
        return None

    issued_at = datetime.fromtimestamp(issued_at_ts, tz=timezone.utc)
    if is_session_expired(issued_at, now or datetime.now(timezone.utc)):
        logger.info(f"Session for {payload.get('email')} expired")
        return None

    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """Get current user from the bearer session token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    payload = verify_session_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    try:
        return User(
            id=payload["sub"],
            email=payload["email"],
            name=payload.get("name", ""),
            role=payload.get("role", "user"),
        )
    except KeyError as e:
        logger.error(f"❌ Session token missing claim: {e}")
        raise HTTPException(status_code=401, detail="Invalid token claims") from e
