# receiptdesk/domain/receipts/service.py
import math
import numbers
import re
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional

import pydantic

from receiptdesk.core.errors import ReceiptValidationError
from .schemas import GST_RATES, PAYMENT_STATUSES, PAYMENT_TYPES, ReceiptDraft, ReceiptTotals

PHONE_RE = re.compile(r"^\d{10}$")
_INT_PREFIX_RE = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

ITEM_FIELDS = ("description", "quantity", "price", "advanceAmount", "dueAmount")

FIELD_MESSAGES = {
    "receiptNumber": "Receipt number is required",
    "date": "Invalid date format",
    "paymentDate": "Invalid date format",
    "customerName": "Customer name is required",
    "customerContact": "Contact must be at least 10 digits",
    "items": "At least one item is required",
    "description": "Description is required",
    "quantity": "Quantity must be at least 1",
    "price": "Price must be at least ₹0.01",
}


def coerce_number(value: Any) -> float:
    """Return ``value`` as a float, or 0 when it is not a finite number."""
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return 0.0
    value = float(value)
    return value if math.isfinite(value) else 0.0


def compute_totals(
    items: Iterable[Mapping[str, Any]],
    payment_status: str,
    gst_percentage: Optional[float] = None,
) -> ReceiptTotals:
    items = list(items)

    subtotal = sum(
        max(coerce_number(item.get("quantity")), 0.0) * max(coerce_number(item.get("price")), 0.0)
        for item in items
    )
    gst_amount = subtotal * coerce_number(gst_percentage) / 100 if gst_percentage is not None else 0.0
    total = subtotal + gst_amount

    if payment_status == "advance":
        # not clamped: advances larger than the total give a negative due
        due_total = total - sum(coerce_number(item.get("advanceAmount")) for item in items)
    elif payment_status == "due":
        due_total = sum(coerce_number(item.get("dueAmount")) for item in items)
    else:
        due_total = 0.0

    return ReceiptTotals(
        subtotal=float(subtotal),
        gst_amount=float(gst_amount),
        total=float(total),
        due_total=float(due_total),
    )


def parse_item_input(field: str, raw: str) -> Any:
    """Coerce text typed into an item field the way the live form does.

    Nothing here raises; unparseable input becomes 0 so editing never blocks.
    """
    if field == "description":
        return raw
    if raw == "":
        return 0
    if field == "quantity":
        match = _INT_PREFIX_RE.match(raw)
        return max(int(match.group(0)), 0) if match else 0
    match = _FLOAT_PREFIX_RE.match(raw)
    return float(match.group(0)) if match else 0


def _blank_item() -> Dict[str, Any]:
    return {"description": "", "quantity": 0, "price": 0}


class ReceiptDraftEditor:
    """In-memory receipt draft whose totals follow every edit.

    Changing the items, the payment status or the GST percentage recomputes
    ``total``, ``gstAmount`` and ``dueTotal`` straight away.
    """

    HEADER_FIELDS = (
        "receiptNumber",
        "date",
        "customerName",
        "customerContact",
        "customerCountryCode",
        "paymentDate",
        "notes",
    )

    def __init__(self, receipt_number: str = "", today: Optional[date] = None):
        self._today = today
        today_iso = self._today_iso()
        self.data: Dict[str, Any] = {
            "receiptNumber": receipt_number,
            "date": today_iso,
            "customerName": "",
            "customerContact": "",
            "customerCountryCode": "+91",
            "paymentType": "cash",
            "paymentStatus": "full",
            "paymentDate": today_iso,
            "notes": "",
            "items": [_blank_item()],
            "total": 0.0,
            "dueTotal": 0.0,
            "gstPercentage": None,
            "gstAmount": 0.0,
        }
        self.totals = ReceiptTotals(0.0, 0.0, 0.0, 0.0)
        self._recompute()

    @property
    def items(self):
        return self.data["items"]

    @property
    def is_due(self) -> bool:
        return self.data["paymentStatus"] == "due"

    def _today_iso(self) -> str:
        return (self._today or date.today()).isoformat()

    def _recompute(self) -> None:
        self.totals = compute_totals(
            self.data["items"], self.data["paymentStatus"], self.data["gstPercentage"]
        )
        self.data["total"] = self.totals.total
        self.data["gstAmount"] = self.totals.gst_amount
        self.data["dueTotal"] = self.totals.due_total

    def add_item(self) -> None:
        self.data["items"] = [*self.data["items"], _blank_item()]
        self._recompute()

    def remove_item(self, index: int) -> None:
        if len(self.data["items"]) <= 1:
            return
        items = list(self.data["items"])
        del items[index]
        self.data["items"] = items
        self._recompute()

    def update_item(self, index: int, field: str, value: Any) -> None:
        if field not in ITEM_FIELDS:
            raise ValueError(f"Unknown item field: {field}")
        if isinstance(value, str):
            value = parse_item_input(field, value)
        items = list(self.data["items"])
        items[index] = {**items[index], field: value}
        self.data["items"] = items
        self._recompute()

    def set_payment_status(self, status: str) -> None:
        if status not in PAYMENT_STATUSES:
            raise ValueError(f"Unknown payment status: {status}")
        self.data["paymentStatus"] = status
        if status == "due":
            # a due receipt carries no tax and is always settled in cash
            self.data["paymentType"] = "cash"
            self.data["gstPercentage"] = None
            self.data["paymentDate"] = self._today_iso()
        self._recompute()

    def set_payment_type(self, payment_type: str) -> None:
        if payment_type not in PAYMENT_TYPES:
            raise ValueError(f"Unknown payment type: {payment_type}")
        if self.is_due:
            return
        self.data["paymentType"] = payment_type

    def set_gst_percentage(self, percentage: Optional[int]) -> None:
        # 0 behaves like "no GST"
        if not percentage:
            percentage = None
        elif percentage not in GST_RATES:
            raise ValueError(f"Unsupported GST rate: {percentage}")
        if self.is_due:
            return
        self.data["gstPercentage"] = percentage
        self._recompute()

    def set_field(self, name: str, value: str) -> None:
        if name not in self.HEADER_FIELDS:
            raise ValueError(f"Unknown receipt field: {name}")
        self.data[name] = value

    def submission(self, payment_details: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        draft = validate_draft({**self.data, "paymentDetails": dict(payment_details) if payment_details else None})
        return build_submission(draft)


def _error_message(err: Mapping[str, Any]) -> str:
    loc = err.get("loc", ())
    if err.get("type") == "missing":
        return "Required"
    if loc and isinstance(loc[-1], str) and loc[-1] in FIELD_MESSAGES:
        return FIELD_MESSAGES[loc[-1]]
    return err.get("msg", "Invalid value")


def validate_draft(data: Mapping[str, Any]) -> ReceiptDraft:
    """Check a draft before submission and collect every field error.

    Raises ReceiptValidationError mapping dotted paths (``items.0.quantity``)
    to messages. Unlike the live totals, invalid numbers are rejected here.
    """
    errors: Dict[str, str] = {}
    draft = None
    try:
        draft = ReceiptDraft.model_validate(data)
    except pydantic.ValidationError as exc:
        for err in exc.errors():
            path = ".".join(str(part) for part in err["loc"])
            errors.setdefault(path, _error_message(err))

    details = data.get("paymentDetails") or {}
    phone = details.get("phoneNumber") if isinstance(details, Mapping) else None
    if data.get("paymentType") == "online" and data.get("paymentStatus") != "due":
        if not isinstance(phone, str) or not PHONE_RE.match(phone):
            errors.setdefault("paymentDetails.phoneNumber", "Invalid phone number (must be 10 digits)")

    if errors:
        raise ReceiptValidationError(errors)
    return draft


def build_submission(draft: ReceiptDraft) -> Dict[str, Any]:
    """Shape a validated draft into the body sent to the receipt service."""
    is_due = draft.payment_status == "due"
    payment_type = "cash" if is_due else draft.payment_type

    body: Dict[str, Any] = {
        "receiptNumber": draft.receipt_number,
        "date": draft.date,
        "customerName": draft.customer_name,
        "customerContact": draft.customer_contact,
        "customerCountryCode": draft.customer_country_code,
        "paymentType": payment_type,
        "paymentStatus": draft.payment_status,
        "paymentDate": draft.payment_date,
        "notes": draft.notes or None,
        "total": draft.total,
        "dueTotal": draft.due_total,
        "items": [item.model_dump(by_alias=True, exclude_none=True) for item in draft.items],
        "gstPercentage": None if is_due else draft.gst_percentage or None,
        "gstAmount": None if is_due else draft.gst_amount or None,
    }
    if draft.payment_details is not None:
        details = draft.payment_details.model_dump(by_alias=True, exclude_none=True)
        if details:
            body["paymentDetails"] = details

    return {key: value for key, value in body.items() if value is not None}
