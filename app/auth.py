"""
Bearer token authentication.

Tokens are issued elsewhere and signed with the shared ``JWT_SECRET``. This
module only verifies them and hands the caller's user id to the routes.
"""
import logging
from typing import Optional
from fastapi import Header, HTTPException
from jose import jwt, JWTError
from . import config

logger = logging.getLogger(__name__)


def verify_token(token: str) -> dict:
    """
    Verify a signed JWT and return its payload
    Raises HTTPException if verification fails
    """
    if not config.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise HTTPException(
            status_code=500,
            detail="Authentication is not properly configured"
        )

    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except JWTError as e:
        logger.warning("JWT validation failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid authentication token")


def get_user_id_from_payload(payload: dict) -> Optional[str]:
    """Read the caller's id from the token, preferring the userID claim"""
    user_id = payload.get("userID") or payload.get("sub")
    return str(user_id) if user_id else None


async def get_current_user_id(
    authorization: Optional[str] = Header(None)
) -> Optional[str]:
    """
    FastAPI dependency to extract and verify the JWT from the Authorization header
    Returns the user id carried by the token, or None when the token has none
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )
    if scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization scheme. Expected 'Bearer'"
        )

    payload = verify_token(token.strip())
    return get_user_id_from_payload(payload)
