"""Date normalization for receipt dates."""

from datetime import datetime
from typing import Any

# Receipts print dates in many layouts; day-first is tried before month-first
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d/%m/%y",
    "%d-%m-%y",
    "%d.%m.%y",
    "%Y/%m/%d",
    "%m/%d/%Y",
)


def normalize_date(value: Any) -> str:
    """
    Convert a receipt date into ISO format (YYYY-MM-DD).

    ISO datetimes are truncated to their date. Values that match none of the
    known layouts are returned stripped but otherwise unchanged, so the user
    can still correct them in the edit form.
    """
    if value is None:
        return ""

    text = str(value).strip()
    if not text:
        return ""

    # "2025-03-14T10:22:00" or "2025-03-14 10:22"
    candidate = text.split("T", 1)[0].split(" ", 1)[0]

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date().isoformat()
        except ValueError:
            continue

    return text
