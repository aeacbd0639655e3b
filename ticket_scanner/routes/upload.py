"""
Capture page and receipt upload.

Flow:
1. GET  /       - capture page (camera or file picker)
2. POST /upload - send the image to TicketAgent, render the edit view
                  with the draft (PREVIEW ONLY, nothing is persisted)
3. POST /save   - see routes/tickets.py
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from ticket_scanner.agents.ticket import TicketExtractionError, run_ticket_agent
from ticket_scanner.auth.dependencies import require_login
from ticket_scanner.config import settings
from ticket_scanner.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.BASE_PATH, tags=["upload"])

NO_IMAGE = "No image was uploaded."
NOT_AN_IMAGE = "The file must be an image."
PROCESSING_FAILED = "There was an error processing the image."


def _too_large_message() -> str:
    return f"The image must be smaller than {settings.MAX_UPLOAD_MB} MB."


@router.get("/", response_class=HTMLResponse, summary="Capture page")
async def index(
    request: Request,
    session: Annotated[Dict[str, Any], Depends(require_login)],
) -> HTMLResponse:
    return render(request, "index.html", {"error": None})


@router.post("/upload", response_class=HTMLResponse, summary="Extract a ticket from an image")
async def upload_ticket(
    request: Request,
    session: Annotated[Dict[str, Any], Depends(require_login)],
    ticketImage: Annotated[Optional[UploadFile], File(description="Receipt image")] = None,
) -> HTMLResponse:
    """
    Read the uploaded receipt and render the edit view with the draft.

    The image must be present, be an image/* type and fit within
    MAX_UPLOAD_MB; otherwise the capture page is shown again with a 400.
    Extraction failures re-render the capture page with a 502.
    """
    if ticketImage is None:
        logger.warning("Upload without ticketImage field")
        return render(request, "index.html", {"error": NO_IMAGE},
                      status_code=status.HTTP_400_BAD_REQUEST)

    image_bytes = await ticketImage.read()
    if not image_bytes:
        logger.warning("Upload with empty ticketImage")
        return render(request, "index.html", {"error": NO_IMAGE},
                      status_code=status.HTTP_400_BAD_REQUEST)

    content_type = ticketImage.content_type or ""
    if not content_type.startswith("image/"):
        logger.warning(f"Invalid content type: {content_type}")
        return render(request, "index.html", {"error": NOT_AN_IMAGE},
                      status_code=status.HTTP_400_BAD_REQUEST)

    max_size_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if len(image_bytes) > max_size_bytes:
        logger.warning(f"Image too large: {len(image_bytes)} bytes")
        return render(request, "index.html", {"error": _too_large_message()},
                      status_code=status.HTTP_400_BAD_REQUEST)

    logger.info(
        f"Processing upload: filename={ticketImage.filename}, "
        f"size={len(image_bytes)} bytes"
    )

    try:
        draft = await run_in_threadpool(run_ticket_agent, image_bytes, content_type)
    except TicketExtractionError as e:
        logger.error(f"Error processing the image: {e}", exc_info=True)
        return render(request, "index.html", {"error": PROCESSING_FAILED},
                      status_code=status.HTTP_502_BAD_GATEWAY)

    return render(request, "edit.html", {"ticket": draft})
