# receiptdesk/domain/receipts/schemas.py
from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

PaymentType = Literal["cash", "online"]
PaymentStatus = Literal["full", "advance", "due"]

PAYMENT_TYPES = ("cash", "online")
PAYMENT_STATUSES = ("full", "advance", "due")
GST_RATES = (5, 12, 18, 28)


class ReceiptItem(BaseModel):
    description: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0.01, allow_inf_nan=False)
    advance_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="advanceAmount")
    due_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="dueAmount")

    class Config:
        populate_by_name = True


class PaymentDetails(BaseModel):
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    phone_country_code: Optional[str] = Field(None, alias="phoneCountryCode")

    class Config:
        populate_by_name = True


class ReceiptDraft(BaseModel):
    """A receipt as submitted for creation, checked before it leaves the client."""

    receipt_number: str = Field(..., min_length=1, alias="receiptNumber")
    date: str = Field(..., pattern=DATE_PATTERN)
    customer_name: str = Field(..., min_length=1, alias="customerName")
    customer_contact: str = Field(..., min_length=10, alias="customerContact")
    customer_country_code: Optional[str] = Field(None, alias="customerCountryCode")
    payment_type: PaymentType = Field(..., alias="paymentType")
    payment_status: PaymentStatus = Field(..., alias="paymentStatus")
    payment_date: Optional[str] = Field(None, pattern=DATE_PATTERN, alias="paymentDate")
    notes: Optional[str] = None
    total: float = Field(..., ge=0, allow_inf_nan=False)
    due_total: float = Field(..., ge=0, allow_inf_nan=False, alias="dueTotal")
    items: List[ReceiptItem] = Field(..., min_length=1)
    payment_details: Optional[PaymentDetails] = Field(None, alias="paymentDetails")
    gst_percentage: Optional[float] = Field(None, ge=0, le=28, allow_inf_nan=False, alias="gstPercentage")
    gst_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="gstAmount")

    class Config:
        populate_by_name = True


class TotalsRequest(BaseModel):
    items: List[dict] = Field(default_factory=list)
    payment_status: PaymentStatus = Field("full", alias="paymentStatus")
    gst_percentage: Optional[float] = Field(None, alias="gstPercentage")

    class Config:
        populate_by_name = True


@dataclass(frozen=True)
class ReceiptTotals:
    subtotal: float
    gst_amount: float
    total: float
    due_total: float

    def to_json(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "gstAmount": self.gst_amount,
            "total": self.total,
            "dueTotal": self.due_total,
        }
