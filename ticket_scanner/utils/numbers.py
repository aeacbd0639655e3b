"""
Number parsing for values typed by users or read by the vision model.

Receipts and form inputs frequently use a comma as decimal separator
("1,25"), so both separators are accepted.
"""

import re
import unicodedata
from typing import Any

# Optional leading sign, then digits and separators only
_NUMBER_RE = re.compile(r"^-?[\d.,]+$")


def parse_amount(value: Any) -> float:
    """
    Parse a quantity or price into a float.

    Accepts ints, floats and strings with either "." or "," as decimal
    separator. Currency symbols and whitespace are ignored. Anything else
    left in the text (letters, "x", exponents, a trailing sign) makes the
    value unparseable, and unparseable values return 0.0.

    Examples:
        >>> parse_amount("2,50")
        2.5
        >>> parse_amount("€ 3.10")
        3.1
        >>> parse_amount("2 x 1,50")
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        return float(value)

    cleaned = "".join(
        ch for ch in str(value)
        if not ch.isspace() and unicodedata.category(ch) != "Sc"
    )
    if not _NUMBER_RE.match(cleaned):
        return 0.0

    # "1.234,56" -> thousands "." and decimal ","
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    else:
        cleaned = cleaned.replace(",", ".")

    try:
        return float(cleaned)
    except ValueError:
        return 0.0
