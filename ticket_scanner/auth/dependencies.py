"""
FastAPI dependency functions for authentication.

Protected routes declare `Depends(require_login)`. When the session cookie
is missing or invalid the dependency raises LoginRequired, which main.py
turns into a redirect to the login page.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import Cookie

from ticket_scanner.auth.session import (
    SESSION_COOKIE_NAME,
    InvalidSessionError,
    verify_session_token,
)

logger = logging.getLogger(__name__)


class LoginRequired(Exception):
    """Raised by require_login; handled by redirecting to the login page."""


async def require_login(
    auth_token: Annotated[Optional[str], Cookie(alias=SESSION_COOKIE_NAME)] = None
) -> Dict[str, Any]:
    """
    Verify the session cookie.

    Returns:
        The verified session claims

    Raises:
        LoginRequired: If the cookie is missing or fails verification

    Usage:
        @router.get("/tickets")
        async def list_tickets(session: dict = Depends(require_login)):
            pass
    """
    if not auth_token:
        logger.debug("No session cookie, redirecting to login")
        raise LoginRequired()

    try:
        return verify_session_token(auth_token)
    except InvalidSessionError as e:
        logger.info(f"Session rejected: {e}")
        raise LoginRequired() from e
