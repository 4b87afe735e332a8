# receiptdesk/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header

from receiptdesk.core.config import settings
from receiptdesk.core.errors import AuthError
from receiptdesk.core.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def issue_token(user_id: int, expires_in: timedelta = timedelta(days=1)) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> int:
    """Resolve a bearer token to the user id it was issued for.

    Raises AuthError with a distinct message for expired sessions so callers
    can prompt for a fresh login.
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Session expired. Please log in again.")
    except jwt.InvalidTokenError as exc:
        logger.info("rejected bearer token: %s", exc)
        raise AuthError("Invalid or expired token")

    subject = claims.get("sub") or claims.get("userId")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthError("Invalid or expired token")


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> int:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Missing or invalid authorization header")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthError("Missing or invalid authorization header")
    return verify_token(token)
