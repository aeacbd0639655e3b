"""
AI components for the Ticket Scanner app.

TicketAgent (single-shot multimodal workflow)
   - Sends the receipt image and an instruction prompt to Gemini
   - Parses the JSON reply into a TicketDraft for the edit view
   - Does NOT write to the datastore
"""

from ticket_scanner.agents.ticket import (
    TicketDraft,
    TicketExtractionError,
    run_ticket_agent,
)

__all__ = [
    "run_ticket_agent",
    "TicketDraft",
    "TicketExtractionError",
]
