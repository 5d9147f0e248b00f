"""
FastAPI dependencies.

Authentication for the control endpoints.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from shared.config import settings
from shared.logging import get_logger

logger = get_logger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)  # Don't auto-raise on missing token


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> dict:
    """
    Validate the Supabase JWT and return the current user.

    Workspace-level authorization happens upstream; this only establishes
    that the caller holds a valid session.

    Args:
        credentials: HTTP Bearer token credentials

    Returns:
        Dictionary with user_id (and email when present in the token)

    Raises:
        HTTPException: If the token is missing, invalid or expired
    """
    if not credentials:
        logger.warning("No token provided in Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"}
        )

    token = credentials.credentials
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            options={"verify_aud": False}  # Supabase tokens don't include audience claim
        )
    except JWTError as e:
        logger.error(
            "JWT validation failed",
            extra={"error_type": type(e).__name__, "error_message": str(e), "token_length": len(token)}
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"}
        )

    user_id = payload.get("sub")  # Supabase uses "sub" for user_id
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user_id"
        )

    user_data = {"user_id": user_id}
    if payload.get("email"):
        user_data["email"] = payload["email"]

    logger.debug("JWT validated successfully", extra={"user_id": user_id})
    return user_data
