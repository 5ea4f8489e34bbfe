"""JWT helpers and the request authentication gate."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import Settings
from app.core.container import get_settings_dependency
from app.core.errors import AuthenticationError

# auto_error=False so a missing or non-bearer header reaches our own 401 path
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True)
class Identity:
    """Decoded bearer token attached to an authenticated request."""

    account_id: str
    username: str


def create_access_token(
    settings: Settings,
    account_id: str,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: Settings, token: str) -> Identity:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise AuthenticationError("Invalid or expired token") from exc

    account_id = payload.get("sub")
    username = payload.get("username")
    if not account_id or not username:
        raise AuthenticationError("Invalid or expired token")
    return Identity(account_id=str(account_id), username=str(username))


async def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings_dependency),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    identity = decode_access_token(settings, credentials.credentials)
    # read back by the error handlers when logging failures
    request.state.account_id = identity.account_id
    return identity


__all__ = [
    "Identity",
    "create_access_token",
    "decode_access_token",
    "get_current_identity",
    "security",
]
