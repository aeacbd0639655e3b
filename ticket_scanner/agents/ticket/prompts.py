"""
TicketAgent Prompt

The prompt is sent together with the receipt image in a single request.
Deployments can replace it entirely through the GEMINI_PROMPT variable;
parsing.normalize_draft accepts both the English keys requested here and
the Spanish keys (establecimiento, fecha, productos, ...) used by older
prompts.
"""

from ticket_scanner.config import settings

TICKET_EXTRACTION_PROMPT = """You are reading a photographed purchase receipt (ticket).

<instructions>
1. Identify the establishment (store or business name) printed on the receipt.
2. Identify the purchase date and write it as YYYY-MM-DD.
3. List every purchased product line with:
   - description: product name as printed
   - units: quantity purchased as a number (use 1 when not printed; use the weight for products sold by weight)
   - unit_price: price of one unit as a number, without currency symbol
4. Ignore totals, taxes, discounts summaries, payment and change lines.
5. If a value cannot be read, use an empty string for text and 0 for numbers.
</instructions>

<output_schema>
Return ONLY valid JSON with this exact structure. No markdown, no prose.

{
  "establishment": string,
  "date": string,
  "items": [
    {
      "description": string,
      "units": number,
      "unit_price": number
    }
  ]
}
</output_schema>"""


def get_extraction_prompt() -> str:
    """Return GEMINI_PROMPT when configured, otherwise the built-in prompt."""
    custom = settings.GEMINI_PROMPT.strip()
    return custom or TICKET_EXTRACTION_PROMPT
