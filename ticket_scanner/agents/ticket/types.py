"""
TicketAgent Type Definitions

JSON-serializable contracts between the agent and the upload route.
"""

from typing import List, TypedDict


class TicketLineDraft(TypedDict):
    """Single line item read from a receipt."""
    description: str
    units: float
    unit_price: float


class TicketDraft(TypedDict):
    """Receipt data shown in the edit view before saving."""
    establishment: str
    date: str  # YYYY-MM-DD when recognised, raw text otherwise
    items: List[TicketLineDraft]


class TicketExtractionError(Exception):
    """Raised when the model call fails or its reply cannot be parsed."""
