"""
FastAPI application entry point for the Ticket Scanner app.

This module creates the FastAPI app instance, mounts static assets and
registers all routers under BASE_PATH.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from ticket_scanner import __version__
from ticket_scanner.auth.dependencies import LoginRequired
from ticket_scanner.config import settings
from ticket_scanner.routes.auth import router as auth_router
from ticket_scanner.routes.health import router as health_router
from ticket_scanner.routes.tickets import router as tickets_router
from ticket_scanner.routes.upload import router as upload_router
from ticket_scanner.templating import STATIC_DIR, render_error

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Ticket Scanner",
    description="Scan purchase receipts with Gemini and keep them in Supabase",
    version=__version__,
    docs_url=None,
    redoc_url=None
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    """Send unauthenticated visitors to the login form."""
    return RedirectResponse(
        url=f"{settings.BASE_PATH}/login",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors and show the error page.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return render_error(request, "The request is not valid.", status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework errors (unknown routes, wrong methods) as HTML."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Page not found."
    else:
        message = str(exc.detail)
    return render_error(request, message, exc.status_code)


app.mount(
    f"{settings.BASE_PATH}/static",
    StaticFiles(directory=str(STATIC_DIR)),
    name="static",
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(upload_router)
app.include_router(tickets_router)

logger.info(f"FastAPI app initialized (base_path={settings.BASE_PATH or '/'})")
