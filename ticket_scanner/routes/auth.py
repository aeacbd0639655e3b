"""
Login and logout pages.

- GET  /login  - password form
- POST /login  - check password, set session cookie
- GET  /logout - clear session cookie
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ticket_scanner.auth.session import (
    SESSION_COOKIE_NAME,
    InvalidSessionError,
    check_password,
    issue_session_token,
)
from ticket_scanner.config import settings
from ticket_scanner.templating import render, render_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.BASE_PATH, tags=["auth"])

INCORRECT_PASSWORD = "Incorrect password."


def _cookie_path() -> str:
    return settings.BASE_PATH or "/"


@router.get("/login", response_class=HTMLResponse, summary="Login form")
async def login_form(request: Request) -> HTMLResponse:
    return render(request, "login.html", {"error": None})


@router.post("/login", summary="Check password and start a session")
async def login(
    request: Request,
    password: Annotated[str, Form()] = "",
):
    if not check_password(password):
        logger.warning("Login failed: incorrect password")
        return render(
            request,
            "login.html",
            {"error": INCORRECT_PASSWORD},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        token = issue_session_token()
    except InvalidSessionError as e:
        logger.error(f"Cannot issue session token: {e}")
        return render_error(
            request,
            "Login is not available right now.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = RedirectResponse(
        url=f"{settings.BASE_PATH}/",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        path=_cookie_path(),
        httponly=True,
        secure=settings.is_production(),
        samesite="lax",
    )

    logger.info("Login succeeded, session cookie issued")

    return response


@router.get("/logout", summary="End the session")
async def logout() -> RedirectResponse:
    response = RedirectResponse(
        url=f"{settings.BASE_PATH}/login",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.delete_cookie(key=SESSION_COOKIE_NAME, path=_cookie_path())

    logger.info("Logout, session cookie cleared")

    return response
