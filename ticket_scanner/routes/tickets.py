"""
Ticket persistence, listing and detail pages.

- POST /save              - persist the confirmed draft (header + lines)
- GET  /tickets?q=&page=  - search and paginate saved tickets
- GET  /ticket/{id}       - one ticket with its lines and total
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ticket_scanner.auth.dependencies import require_login
from ticket_scanner.config import settings
from ticket_scanner.db.client import get_supabase_client
from ticket_scanner.schemas.tickets import TicketDetail, TicketSaveForm, TicketSummary
from ticket_scanner.services import (
    TicketPersistenceError,
    compute_ticket_total,
    filter_tickets,
    get_ticket_by_id,
    get_ticket_lines,
    list_all_tickets,
    paginate,
    save_ticket,
)
from ticket_scanner.templating import render, render_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.BASE_PATH, tags=["tickets"])

SAVE_FAILED = "Error saving the ticket."
LIST_FAILED = "Error fetching the tickets."
DETAIL_FAILED = "Error fetching the ticket."
NOT_FOUND = "Ticket not found."


@router.post("/save", summary="Persist a confirmed ticket")
async def save(
    request: Request,
    session: Annotated[Dict[str, Any], Depends(require_login)],
) -> Response:
    """
    Split the edit form into a header and its lines and write both.

    Redirects to the ticket list on success.
    """
    form = await request.form()
    ticket = TicketSaveForm.from_form(form)

    logger.info(
        f"Saving ticket: establishment={ticket.establishment!r}, "
        f"lines={len(ticket.lines)}"
    )

    try:
        supabase_client = get_supabase_client()
        ticket_id = await save_ticket(
            supabase_client=supabase_client,
            establishment=ticket.establishment,
            purchase_date=ticket.date,
            lines=ticket.lines,
        )
    except (TicketPersistenceError, ValueError) as e:
        logger.error(f"Error saving ticket: {e}", exc_info=True)
        return render_error(request, SAVE_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(f"Ticket {ticket_id} saved")

    return RedirectResponse(
        url=f"{settings.BASE_PATH}/tickets",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/tickets", response_class=HTMLResponse, summary="List and search tickets")
async def list_tickets(
    request: Request,
    session: Annotated[Dict[str, Any], Depends(require_login)],
    q: Annotated[Optional[str], Query(max_length=200)] = None,
    page: Annotated[int, Query()] = 1,
) -> HTMLResponse:
    """
    Fetch every ticket, filter by q, slice one page and total each row.

    Totals are computed only for the tickets on the current page, from
    their line rows.
    """
    query = (q or "").strip()

    try:
        supabase_client = get_supabase_client()
        tickets = await list_all_tickets(supabase_client)
        matching = filter_tickets(tickets, query)
        current = paginate(matching, page, settings.PAGE_SIZE)

        rows = []
        for ticket in current.items:
            lines = await get_ticket_lines(supabase_client, str(ticket.get("id")))
            rows.append(TicketSummary.from_row(ticket, compute_ticket_total(lines)))
    except (TicketPersistenceError, ValueError) as e:
        logger.error(f"Error fetching tickets: {e}", exc_info=True)
        return render_error(request, LIST_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(
        f"Listing tickets: q={query!r}, page={current.page}/{current.total_pages}, "
        f"matches={current.total_items}"
    )

    return render(
        request,
        "tickets.html",
        {"tickets": rows, "page": current, "q": query},
    )


@router.get("/ticket/{ticket_id}", response_class=HTMLResponse, summary="Ticket detail")
async def ticket_detail(
    request: Request,
    ticket_id: str,
    session: Annotated[Dict[str, Any], Depends(require_login)],
) -> HTMLResponse:
    try:
        supabase_client = get_supabase_client()
        ticket = await get_ticket_by_id(supabase_client, ticket_id)

        if not ticket:
            return render_error(request, NOT_FOUND, status.HTTP_404_NOT_FOUND)

        lines = await get_ticket_lines(supabase_client, ticket_id)
    except (TicketPersistenceError, ValueError) as e:
        logger.error(f"Error fetching ticket {ticket_id}: {e}", exc_info=True)
        return render_error(request, DETAIL_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = TicketDetail.from_rows(ticket, lines, compute_ticket_total(lines))

    return render(request, "ticket_detail.html", {"ticket": detail})
