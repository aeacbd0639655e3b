"""
Parsing of the model reply into a TicketDraft.

Models often wrap JSON in Markdown fences even when asked not to, and
different prompts name the fields differently, so parsing is lenient about
both. Numbers go through parse_amount so "1,50" and "1.50" are equal.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from ticket_scanner.agents.ticket.types import (
    TicketDraft,
    TicketExtractionError,
    TicketLineDraft,
)
from ticket_scanner.utils.dates import normalize_date
from ticket_scanner.utils.numbers import parse_amount

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

_ESTABLISHMENT_KEYS = ("establishment", "establecimiento", "store_name", "store", "merchant")
_DATE_KEYS = ("date", "fecha", "purchase_date", "transaction_time")
_ITEMS_KEYS = ("items", "productos", "products", "lines", "purchased_items")
_DESCRIPTION_KEYS = ("description", "descripcion", "producto", "product", "name")
_UNITS_KEYS = ("units", "unidades", "quantity", "qty", "cantidad")
_UNIT_PRICE_KEYS = ("unit_price", "precio_unitario", "price", "precio")


def parse_model_reply(text: Optional[str]) -> Dict[str, Any]:
    """
    Strip Markdown code fences from the model reply and decode the JSON.

    Raises:
        TicketExtractionError: If the reply is empty, not JSON, or not a
            JSON object
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    if not cleaned:
        raise TicketExtractionError("Model returned an empty reply")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse model reply as JSON: {e}")
        raise TicketExtractionError("Model reply is not valid JSON") from e

    if not isinstance(data, dict):
        raise TicketExtractionError(
            f"Model reply must be a JSON object, got {type(data).__name__}"
        )

    return data


def _first(data: Dict[str, Any], keys: tuple) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _normalize_line(raw: Any) -> Optional[TicketLineDraft]:
    if not isinstance(raw, dict):
        return None

    description = _first(raw, _DESCRIPTION_KEYS)
    if description is None or not str(description).strip():
        return None

    units = _first(raw, _UNITS_KEYS)

    return {
        "description": str(description).strip(),
        "units": parse_amount(units) if units is not None else 1.0,
        "unit_price": parse_amount(_first(raw, _UNIT_PRICE_KEYS)),
    }


def normalize_draft(raw: Dict[str, Any]) -> TicketDraft:
    """
    Map a decoded model reply onto a TicketDraft.

    Lines without a description are dropped. A missing establishment or
    date becomes an empty string so the user can fill it in.
    """
    establishment = _first(raw, _ESTABLISHMENT_KEYS)
    raw_items = _first(raw, _ITEMS_KEYS)

    items: List[TicketLineDraft] = []
    if isinstance(raw_items, list):
        for raw_line in raw_items:
            line = _normalize_line(raw_line)
            if line is None:
                logger.debug("Skipping malformed line item from model reply")
                continue
            items.append(line)

    return {
        "establishment": str(establishment).strip() if establishment is not None else "",
        "date": normalize_date(_first(raw, _DATE_KEYS)),
        "items": items,
    }
