"""
Ticket persistence service.

A ticket is stored as one header row in TICKETS_TABLE plus one row per
purchased product in LINES_TABLE, linked through ticket_line.ticket_id.
Line rows are inserted in batches of LINE_BATCH_SIZE to stay under the
store's per-request write limit.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from ticket_scanner.config import settings
from ticket_scanner.schemas.tickets import TicketLine
from ticket_scanner.utils.numbers import parse_amount

logger = logging.getLogger(__name__)

# PostgREST caps a single select at 1000 rows by default
FETCH_PAGE_SIZE = 1000


class TicketPersistenceError(Exception):
    """Raised when the datastore rejects or fails a read or write."""


def compute_ticket_total(lines: Iterable[Mapping[str, Any]]) -> float:
    """
    Sum units x unit_price over a ticket's line rows.

    Missing or unparseable values count as 0. The result is rounded to
    cents.
    """
    total = 0.0
    for line in lines:
        total += parse_amount(line.get("units")) * parse_amount(line.get("unit_price"))
    return round(total, 2)


async def create_ticket(
    supabase_client: Client,
    establishment: str,
    purchase_date: str,
) -> Dict[str, Any]:
    """
    Insert a ticket header row.

    Returns:
        The created row (includes id and created_at)

    Raises:
        TicketPersistenceError: If the insert fails or returns no row
    """
    ticket_data = {
        "establishment": establishment,
        "purchase_date": purchase_date or None,
    }

    logger.info(f"Creating ticket: establishment={establishment!r}, date={purchase_date}")

    try:
        result = supabase_client.table(settings.TICKETS_TABLE).insert(ticket_data).execute()
    except APIError as e:
        logger.error(f"Datastore rejected ticket insert: {e}", exc_info=True)
        raise TicketPersistenceError(f"Failed to create ticket: {e.message}") from e

    if not result.data or len(result.data) == 0:
        raise TicketPersistenceError("Failed to create ticket: no data returned")

    created_ticket = cast(Dict[str, Any], result.data[0])

    logger.info(f"Ticket created successfully: id={created_ticket.get('id')}")

    return created_ticket


async def create_ticket_lines(
    supabase_client: Client,
    ticket_id: str,
    lines: List[TicketLine],
    batch_size: Optional[int] = None,
) -> int:
    """
    Insert the line rows of a ticket in fixed-size batches.

    Args:
        supabase_client: Supabase client
        ticket_id: ID of the header row the lines belong to
        lines: Confirmed line items
        batch_size: Rows per insert request (defaults to LINE_BATCH_SIZE)

    Returns:
        Number of line rows written

    Raises:
        TicketPersistenceError: If any batch fails; earlier batches stay
            written
    """
    size = batch_size or settings.LINE_BATCH_SIZE
    if size < 1:
        raise ValueError("batch_size must be at least 1")

    rows = [
        {
            "ticket_id": ticket_id,
            "product": line.description,
            "units": line.units,
            "unit_price": line.unit_price,
        }
        for line in lines
    ]

    written = 0
    for start in range(0, len(rows), size):
        chunk = rows[start:start + size]
        try:
            supabase_client.table(settings.LINES_TABLE).insert(chunk).execute()
        except APIError as e:
            logger.error(
                f"Datastore rejected line batch for ticket {ticket_id} "
                f"(rows {start}-{start + len(chunk) - 1}): {e}",
                exc_info=True
            )
            raise TicketPersistenceError(f"Failed to create ticket lines: {e.message}") from e
        written += len(chunk)

    logger.info(f"Created {written} lines for ticket {ticket_id}")

    return written


async def save_ticket(
    supabase_client: Client,
    establishment: str,
    purchase_date: str,
    lines: List[TicketLine],
) -> str:
    """
    Persist a confirmed ticket: header first, then its lines.

    If a line batch fails, the header and any lines already written are
    deleted before the error is re-raised.

    Returns:
        The new ticket ID
    """
    created_ticket = await create_ticket(
        supabase_client=supabase_client,
        establishment=establishment,
        purchase_date=purchase_date,
    )

    ticket_id = created_ticket.get("id")
    if not ticket_id:
        raise TicketPersistenceError("Ticket created but no ID returned")

    try:
        await create_ticket_lines(
            supabase_client=supabase_client,
            ticket_id=str(ticket_id),
            lines=lines,
        )
    except TicketPersistenceError:
        await delete_ticket(supabase_client, str(ticket_id))
        raise

    return str(ticket_id)


async def delete_ticket(supabase_client: Client, ticket_id: str) -> None:
    """
    Remove a ticket and its lines.

    Used to roll back a partially saved ticket. A failed delete is logged
    and left for manual cleanup; the caller re-raises the original error.
    """
    logger.warning(f"Rolling back ticket {ticket_id}")

    try:
        supabase_client.table(settings.LINES_TABLE).delete().eq("ticket_id", ticket_id).execute()
        supabase_client.table(settings.TICKETS_TABLE).delete().eq("id", ticket_id).execute()
    except APIError as e:
        logger.error(f"Failed to roll back ticket {ticket_id}: {e}", exc_info=True)


async def list_all_tickets(supabase_client: Client) -> List[Dict[str, Any]]:
    """
    Fetch every ticket header, newest purchase date first.

    Tickets saved without a date come last.
    Pages through the store with .range() until a short page comes back.

    Raises:
        TicketPersistenceError: If the store query fails
    """
    tickets: List[Dict[str, Any]] = []
    offset = 0

    try:
        while True:
            result = (
                supabase_client.table(settings.TICKETS_TABLE)
                .select("*")
                .order("purchase_date", desc=True, nullsfirst=False)
                .range(offset, offset + FETCH_PAGE_SIZE - 1)
                .execute()
            )
            page = cast(List[Dict[str, Any]], result.data or [])
            tickets.extend(page)

            if len(page) < FETCH_PAGE_SIZE:
                break
            offset += FETCH_PAGE_SIZE
    except APIError as e:
        logger.error(f"Failed to fetch tickets: {e}", exc_info=True)
        raise TicketPersistenceError(f"Failed to fetch tickets: {e.message}") from e

    logger.info(f"Fetched {len(tickets)} tickets")

    return tickets


async def get_ticket_by_id(
    supabase_client: Client,
    ticket_id: str,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single ticket header.

    Returns:
        The row, or None if no ticket has that ID
    """
    logger.debug(f"Fetching ticket {ticket_id}")

    try:
        result = (
            supabase_client.table(settings.TICKETS_TABLE)
            .select("*")
            .eq("id", ticket_id)
            .execute()
        )
    except APIError as e:
        # 22P02: invalid input syntax, e.g. a malformed UUID in the URL
        if e.code == "22P02":
            logger.warning(f"Malformed ticket id {ticket_id!r}")
            return None
        logger.error(f"Failed to fetch ticket {ticket_id}: {e}", exc_info=True)
        raise TicketPersistenceError(f"Failed to fetch ticket: {e.message}") from e

    if not result.data or len(result.data) == 0:
        logger.warning(f"Ticket {ticket_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])


async def get_ticket_lines(
    supabase_client: Client,
    ticket_id: str,
) -> List[Dict[str, Any]]:
    """Fetch the line rows of a ticket in insertion order."""
    try:
        result = (
            supabase_client.table(settings.LINES_TABLE)
            .select("*")
            .eq("ticket_id", ticket_id)
            .order("id")
            .execute()
        )
    except APIError as e:
        logger.error(f"Failed to fetch lines for ticket {ticket_id}: {e}", exc_info=True)
        raise TicketPersistenceError(f"Failed to fetch ticket lines: {e.message}") from e

    lines = cast(List[Dict[str, Any]], result.data or [])
    logger.debug(f"Fetched {len(lines)} lines for ticket {ticket_id}")

    return lines
