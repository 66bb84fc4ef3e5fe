"""
Authentication Dependencies
Bearer tokens issued by the identity provider, and role guards
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from campushub.config import settings

ROLES = ("admin", "contributor", "student")

# Security schemes
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token

    Args:
        data: Claims to encode (sub, email, name, role, managed_club_ids)
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.JWT_EXPIRATION_HOURS))
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token

    Raises:
        HTTPException: If token is invalid
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def _user_from_payload(payload: dict) -> dict:
    user_id = payload.get("sub")
    user_email = payload.get("email")

    if not user_id or not user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )

    role = payload.get("role") if payload.get("role") in ROLES else "student"
    return {
        "user_id": user_id,
        "email": user_email,
        "name": payload.get("name") or user_email.split("@")[0],
        "role": role,
        "managed_club_ids": list(payload.get("managed_club_ids") or []),
    }


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """
    Get current authenticated user from JWT token

    Returns:
        user_id, email, name, role and managed_club_ids
    """
    return _user_from_payload(decode_access_token(credentials.credentials))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> Optional[dict]:
    """Authenticated user if a bearer token was sent, otherwise None (guest flows)"""
    if credentials is None:
        return None
    return _user_from_payload(decode_access_token(credentials.credentials))


async def get_platform_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Require platform admin authentication

    Raises:
        HTTPException: If user is not an admin
    """
    if current_user["role"] != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized. Platform admin access required."
        )

    return current_user


async def get_club_manager(club_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """
    Require a manager of the club in the path (platform admins manage every club)

    Raises:
        HTTPException: If user does not manage this club
    """
    if current_user["role"] == "admin":
        return current_user

    if current_user["role"] != "contributor" or club_id not in current_user["managed_club_ids"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized. Club manager access required."
        )

    return current_user
