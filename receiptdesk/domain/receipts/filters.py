# receiptdesk/domain/receipts/filters.py
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import Any, Iterable, List, Literal, Optional, Tuple, Union

DisplayStatus = Literal["full", "advance", "due", "due_paid"]
StatusFilter = Literal["all", "full", "advance", "due", "due_paid"]

STATUS_LABELS = {
    "all": "All Statuses",
    "full": "Full payment",
    "advance": "Advance payment",
    "due": "Due payment",
    "due_paid": "Due Paid",
}

MONTH_OPTIONS = tuple(f"{month:02d}" for month in range(1, 13))

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def normalize_total(value: Any) -> float:
    """Turn a receipt total that may be a number or text like "₹1,234.50" into a float."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        value = float(value)
        return value if math.isfinite(value) else 0.0
    if isinstance(value, str):
        match = _FLOAT_PREFIX_RE.match(_NON_NUMERIC_RE.sub("", value))
        return float(match.group(0)) if match else 0.0
    return 0.0


def format_currency(value: Any) -> str:
    return f"{normalize_total(value):.2f}"


def display_number(value: float) -> str:
    # integral totals read "100", not "100.0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def year_options(today: Optional[date] = None) -> List[str]:
    current = (today or date.today()).year
    return [str(current - offset) for offset in range(5)]


def receipt_year_month(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if not value:
        return None, None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = date.fromisoformat(value[:10])
        except ValueError:
            return None, None
    return str(parsed.year), f"{parsed.month:02d}"


class ReceiptSummary(BaseModel):
    id: Union[int, str, None] = None
    receipt_number: Optional[str] = Field("", alias="receiptNumber")
    date: Optional[str] = None
    customer_name: Optional[str] = Field(None, alias="customerName")
    total: float = 0.0
    payment_status: Optional[str] = Field(None, alias="paymentStatus")
    display_status: Optional[str] = Field(None, alias="displayStatus")

    class Config:
        populate_by_name = True

    @field_validator("total", mode="before")
    @classmethod
    def _normalize_total(cls, value):
        return normalize_total(value)

    @field_validator("receipt_number", mode="before")
    @classmethod
    def _receipt_number_or_blank(cls, value):
        return value or ""

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.display_status or "due", STATUS_LABELS["due"])


@dataclass(frozen=True)
class ReceiptFilter:
    """Search and dropdown state of the receipts list.

    The search term matches any of the searchable fields; status, year and
    month must all match unless set to "all".
    """

    search: str = ""
    status: StatusFilter = "all"
    year: str = "all"
    month: str = "all"

    def matches(self, receipt: ReceiptSummary) -> bool:
        term = self.search.strip().lower()
        fields = (
            str(receipt.id) if receipt.id is not None else "",
            receipt.receipt_number or "",
            receipt.customer_name or "",
            display_number(receipt.total),
            receipt.display_status or "",
        )
        if not any(term in field.lower() for field in fields):
            return False

        if self.status != "all" and receipt.display_status != self.status:
            return False

        year, month = receipt_year_month(receipt.date)
        if self.year != "all" and year != self.year:
            return False
        if self.month != "all" and month != self.month:
            return False
        return True


def load_receipts(rows: Iterable[Any]) -> List[ReceiptSummary]:
    return [row if isinstance(row, ReceiptSummary) else ReceiptSummary.model_validate(row) for row in rows]


def filter_receipts(
    receipts: Iterable[ReceiptSummary],
    criteria: ReceiptFilter,
) -> List[ReceiptSummary]:
    return [receipt for receipt in receipts if criteria.matches(receipt)]
