# receiptdesk/api/v1/routes_profile.py
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from receiptdesk.core.errors import InternalError, ValidationError
from receiptdesk.core.security import get_current_user_id
from receiptdesk.db.base import get_db
from receiptdesk.domain.profile.schemas import ProfileCompleteFlag
from receiptdesk.domain.profile.service import (
    get_profile,
    parse_profile_update,
    set_profile_complete_flag,
    update_profile,
)


router = APIRouter(prefix="/profile", tags=["profile"])

NO_STORE = {"Cache-Control": "private, no-store, max-age=0"}


async def read_json_body(request: Request):
    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type:
        raise ValidationError("Invalid content type. Must be application/json")
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid request body", details="Malformed JSON")


@router.get("")
async def get_profile_endpoint(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await get_profile(db, user_id)
    return JSONResponse(profile.to_json(), headers=NO_STORE)


@router.put("")
async def update_profile_endpoint(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    payload = await read_json_body(request)
    command = parse_profile_update(payload)
    profile = await update_profile(db, user_id, command)
    return {"success": True, "updatedProfile": profile.to_json()}


@router.patch("")
async def set_profile_complete_endpoint(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    # no content-type gate here; an unreadable body is reported like any failed update
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InternalError("Update failed", details=str(exc))
    if not isinstance(payload, dict):
        raise InternalError("Update failed", details="Expected a JSON object")
    flag = ProfileCompleteFlag.model_validate(payload)
    is_complete = await set_profile_complete_flag(db, user_id, flag.is_profile_complete)
    return {"success": True, "isProfileComplete": is_complete}
