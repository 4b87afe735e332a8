from .filters import ReceiptFilter, ReceiptSummary, filter_receipts, load_receipts, normalize_total
from .schemas import ReceiptDraft, ReceiptItem, ReceiptTotals
from .service import (
    ReceiptDraftEditor,
    build_submission,
    coerce_number,
    compute_totals,
    parse_item_input,
    validate_draft,
)

__all__ = [
    "ReceiptDraft",
    "ReceiptDraftEditor",
    "ReceiptFilter",
    "ReceiptItem",
    "ReceiptSummary",
    "ReceiptTotals",
    "build_submission",
    "coerce_number",
    "compute_totals",
    "filter_receipts",
    "load_receipts",
    "normalize_total",
    "parse_item_input",
    "validate_draft",
]
