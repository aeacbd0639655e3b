"""
Pydantic schemas for tickets and their line items.

The edit view posts a flat urlencoded form:

    establishment=...&date=...
    &description_0=...&units_0=...&unit_price_0=...
    &description_1=...&units_1=...&unit_price_1=...

TicketSaveForm.from_form() turns it into a header plus a list of lines.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from ticket_scanner.utils.dates import normalize_date
from ticket_scanner.utils.numbers import parse_amount


# --- Line models ---

class TicketLine(BaseModel):
    """A single purchased product on a ticket."""
    description: str = Field(..., description="Product name as printed on the receipt")
    units: float = Field(0.0, description="Quantity purchased")
    unit_price: float = Field(0.0, description="Price of one unit")

    @property
    def subtotal(self) -> float:
        return round(self.units * self.unit_price, 2)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TicketLine":
        """Build from a ticket_line datastore row."""
        return cls(
            description=str(row.get("product") or ""),
            units=parse_amount(row.get("units")),
            unit_price=parse_amount(row.get("unit_price")),
        )


# --- Save form ---

class TicketSaveForm(BaseModel):
    """Confirmed ticket as submitted from the edit view."""
    establishment: str = Field("", description="Store or business name")
    date: str = Field("", description="Purchase date (YYYY-MM-DD)")
    lines: List[TicketLine] = Field(default_factory=list)

    model_config = {
        "str_strip_whitespace": True,
    }

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "TicketSaveForm":
        """
        Split a flat form into header fields and indexed line items.

        Lines are read for i = 0, 1, 2, ... until description_{i} is absent,
        so a gap in the numbering ends the list. The date is normalised to
        ISO when its layout is recognised. Units and prices accept a
        comma as decimal separator; invalid or empty values become 0.
        """
        lines: List[TicketLine] = []
        i = 0
        while f"description_{i}" in form:
            lines.append(
                TicketLine(
                    description=str(form.get(f"description_{i}") or "").strip(),
                    units=parse_amount(form.get(f"units_{i}")),
                    unit_price=parse_amount(form.get(f"unit_price_{i}")),
                )
            )
            i += 1

        return cls(
            establishment=str(form.get("establishment") or ""),
            date=normalize_date(form.get("date")),
            lines=lines,
        )


# --- View models ---

class TicketSummary(BaseModel):
    """One row of the ticket list."""
    id: str = Field(..., description="Ticket record ID")
    establishment: str = Field("", description="Store or business name")
    date: str = Field("", description="Purchase date")
    total: float = Field(0.0, description="Sum of units x unit_price over the ticket's lines")

    @classmethod
    def from_row(cls, row: Mapping[str, Any], total: float) -> "TicketSummary":
        return cls(
            id=str(row.get("id")),
            establishment=str(row.get("establishment") or ""),
            date=str(row.get("purchase_date") or ""),
            total=total,
        )


class TicketDetail(BaseModel):
    """A ticket with all of its lines, for the detail view."""
    id: str
    establishment: str = ""
    date: str = ""
    created_at: Optional[str] = None
    lines: List[TicketLine] = Field(default_factory=list)
    total: float = 0.0

    @classmethod
    def from_rows(
        cls,
        row: Mapping[str, Any],
        line_rows: List[Dict[str, Any]],
        total: float,
    ) -> "TicketDetail":
        return cls(
            id=str(row.get("id")),
            establishment=str(row.get("establishment") or ""),
            date=str(row.get("purchase_date") or ""),
            created_at=row.get("created_at"),
            lines=[TicketLine.from_row(line) for line in line_rows],
            total=total,
        )
