"""
TicketAgent Package

Extracts the establishment, date and line items from a photographed
receipt using Google Gemini with a single-shot vision call.

Main Components:
- types: TypedDict definitions for the draft
- prompts: Built-in extraction prompt (overridable with GEMINI_PROMPT)
- parsing: Turns the model's text reply into a TicketDraft
- agent: Runner that calls Gemini

Usage:
    from ticket_scanner.agents.ticket import run_ticket_agent

    draft = run_ticket_agent(image_bytes=data, mime_type="image/jpeg")
"""

from ticket_scanner.agents.ticket.agent import run_ticket_agent
from ticket_scanner.agents.ticket.parsing import normalize_draft, parse_model_reply
from ticket_scanner.agents.ticket.prompts import TICKET_EXTRACTION_PROMPT, get_extraction_prompt
from ticket_scanner.agents.ticket.types import (
    TicketDraft,
    TicketExtractionError,
    TicketLineDraft,
)

__all__ = [
    # Main runner
    "run_ticket_agent",
    # Parsing
    "parse_model_reply",
    "normalize_draft",
    # Types
    "TicketDraft",
    "TicketLineDraft",
    "TicketExtractionError",
    # Prompts
    "TICKET_EXTRACTION_PROMPT",
    "get_extraction_prompt",
]
