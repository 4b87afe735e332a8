# receiptdesk/api/v1/routes_receipts.py
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from receiptdesk.core.security import get_current_user_id
from receiptdesk.domain.receipts.schemas import TotalsRequest
from receiptdesk.domain.receipts.service import build_submission, compute_totals, validate_draft


router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post("/totals")
async def compute_totals_endpoint(
    payload: TotalsRequest,
    user_id: int = Depends(get_current_user_id),
):
    totals = compute_totals(payload.items, payload.payment_status, payload.gst_percentage)
    return totals.to_json()


@router.post("/validate")
async def validate_receipt_endpoint(
    payload: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
):
    draft = validate_draft(payload)
    return build_submission(draft)
