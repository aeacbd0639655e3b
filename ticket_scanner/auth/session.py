"""
Session token signing and verification.

The app has a single shared password. A successful login is remembered with
an HS256 JWT stored in an httpOnly cookie; the token carries no identity,
only the fact that the password was entered and when it expires.
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jwt import decode, encode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from ticket_scanner.config import settings

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "authToken"
SESSION_ALGORITHM = "HS256"


class InvalidSessionError(Exception):
    """Raised when a session token is missing, malformed, forged or expired."""


def _get_secret() -> str:
    if not settings.SESSION_SECRET:
        raise InvalidSessionError("SESSION_SECRET is not configured")
    return settings.SESSION_SECRET


def issue_session_token(now: Optional[datetime] = None) -> str:
    """
    Sign a new session token.

    Args:
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT valid for SESSION_TTL_DAYS

    Raises:
        InvalidSessionError: If SESSION_SECRET is not configured
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "logged_in": True,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.SESSION_TTL_DAYS),
    }
    return encode(payload, _get_secret(), algorithm=SESSION_ALGORITHM)


def verify_session_token(token: Optional[str]) -> Dict[str, Any]:
    """
    Verify a session token and return its claims.

    Raises:
        InvalidSessionError: If the token is empty, has a bad signature,
            is expired, or does not carry the logged_in claim
    """
    if not token:
        raise InvalidSessionError("Missing session token")

    try:
        payload = decode(
            token,
            _get_secret(),
            algorithms=[SESSION_ALGORITHM],
            options={"verify_signature": True, "verify_exp": True},
        )
    except ExpiredSignatureError as e:
        logger.info("Session token has expired")
        raise InvalidSessionError("Session token has expired") from e
    except InvalidTokenError as e:
        logger.warning(f"Invalid session token: {str(e)}")
        raise InvalidSessionError("Invalid session token") from e

    if payload.get("logged_in") is not True:
        logger.warning("Session token missing 'logged_in' claim")
        raise InvalidSessionError("Invalid session token")

    return payload


def check_password(candidate: Optional[str]) -> bool:
    """Compare a submitted password with APP_PASSWORD in constant time."""
    expected = settings.APP_PASSWORD
    if not expected or candidate is None:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
