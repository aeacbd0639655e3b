"""
Password login and signed session cookie for the Ticket Scanner app.

ALL PROTECTED ROUTES MUST depend on require_login before any other logic.
"""

from ticket_scanner.auth.dependencies import LoginRequired, require_login
from ticket_scanner.auth.session import (
    SESSION_COOKIE_NAME,
    InvalidSessionError,
    check_password,
    issue_session_token,
    verify_session_token,
)

__all__ = [
    "LoginRequired",
    "require_login",
    "SESSION_COOKIE_NAME",
    "InvalidSessionError",
    "check_password",
    "issue_session_token",
    "verify_session_token",
]
