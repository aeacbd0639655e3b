"""
Jinja2 template setup shared by all routers.

Templates receive `base_path` as a global so links and form actions work
when the app is served under BASE_PATH.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ticket_scanner.config import settings

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["base_path"] = settings.BASE_PATH


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render a template with the request bound in its context."""
    return templates.TemplateResponse(
        request,
        name,
        context or {},
        status_code=status_code,
    )


def render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    """Render the generic error page."""
    return render(
        request,
        "error.html",
        {"message": message, "status_code": status_code},
        status_code=status_code,
    )
