"""
TicketAgent Runner

Single-shot multimodal extraction: one prompt plus the receipt image go to
Gemini, the JSON reply comes back as a TicketDraft.
"""

import logging
from typing import Optional

from google import genai
from google.genai import types

from ticket_scanner.agents.ticket.parsing import normalize_draft, parse_model_reply
from ticket_scanner.agents.ticket.prompts import get_extraction_prompt
from ticket_scanner.agents.ticket.types import TicketDraft, TicketExtractionError
from ticket_scanner.config import settings

logger = logging.getLogger(__name__)


def run_ticket_agent(
    image_bytes: bytes,
    mime_type: str,
    client: Optional[genai.Client] = None,
) -> TicketDraft:
    """
    Extract a ticket draft from a receipt image using Gemini.

    Args:
        image_bytes: Raw image file contents
        mime_type: Image MIME type as sent by the browser (e.g. "image/png")
        client: Optional preconfigured Gemini client

    Returns:
        TicketDraft with establishment, date and line items

    Raises:
        TicketExtractionError: If the image is missing, the API key is not
            configured, the call fails, or the reply cannot be parsed

    Notes:
        - Does NOT log the image or the full reply
        - Does NOT write to the datastore
    """
    if not image_bytes:
        raise TicketExtractionError("Receipt image is required")

    if client is None:
        if not settings.GOOGLE_API_KEY:
            logger.error("GOOGLE_API_KEY not configured")
            raise TicketExtractionError(
                "GOOGLE_API_KEY is not configured. "
                "Please set it in your .env file to process receipts."
            )
        client = genai.Client(api_key=settings.GOOGLE_API_KEY)

    logger.info(
        f"TicketAgent invoked: model={settings.GEMINI_MODEL}, "
        f"mime_type={mime_type}, size={len(image_bytes)} bytes"
    )

    prompt_parts = [
        types.Part(text=get_extraction_prompt()),
        types.Part(
            inline_data=types.Blob(
                mime_type=mime_type,
                data=image_bytes
            )
        )
    ]

    config = types.GenerateContentConfig(
        temperature=0.0,  # Deterministic for structured extraction
        response_mime_type="application/json"
    )

    try:
        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt_parts,  # type: ignore
            config=config
        )
    except Exception as e:
        logger.error(f"Gemini request failed: {e}", exc_info=True)
        raise TicketExtractionError(f"Gemini request failed: {e}") from e

    if not response.candidates or not response.candidates[0].content:
        logger.error("No response from model")
        raise TicketExtractionError("Model did not return a response")

    raw = parse_model_reply(response.text)
    draft = normalize_draft(raw)

    logger.info(
        f"TicketAgent completed: establishment={draft['establishment']!r}, "
        f"lines={len(draft['items'])}"
    )

    return draft
