"""
Service layer for the Ticket Scanner app.

Services sit between the routes (HTTP layer) and the datastore:
- ticket_service: reads and writes ticket headers and lines
- listing: in-memory search and pagination of the ticket list
"""

from .listing import Page, filter_tickets, paginate
from .ticket_service import (
    TicketPersistenceError,
    compute_ticket_total,
    create_ticket,
    create_ticket_lines,
    delete_ticket,
    get_ticket_by_id,
    get_ticket_lines,
    list_all_tickets,
    save_ticket,
)

__all__ = [
    "Page",
    "filter_tickets",
    "paginate",
    "TicketPersistenceError",
    "compute_ticket_total",
    "create_ticket",
    "create_ticket_lines",
    "delete_ticket",
    "get_ticket_by_id",
    "get_ticket_lines",
    "list_all_tickets",
    "save_ticket",
]
