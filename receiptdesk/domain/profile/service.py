# receiptdesk/domain/profile/service.py
import re
from datetime import datetime, timezone
from typing import Any

import pydantic
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from receiptdesk.core.errors import (
    ConflictError,
    DependencyError,
    InternalError,
    NotFoundError,
    ValidationError,
    describe_errors,
)
from receiptdesk.core.logging import get_logger
from receiptdesk.db.repositories.users import (
    find_other_user_with_contact,
    get_user_by_id,
    set_profile_complete,
    update_user,
)
from .schemas import MANDATORY_FIELDS, ProfileOut, ProfileUpdate, ProfileUpdateCommand

logger = get_logger(__name__)

STORE_CONTACT_RE = re.compile(r"^\d{10}$")
GST_NUMBER_RE = re.compile(r"^[0-9A-Z]{15}$")

# columns a profile row cannot be served without
INTEGRITY_FIELDS = ("id", "superkey", "mobile")


async def get_profile(
    db: AsyncSession,
    user_id: int
) -> ProfileOut:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")

    row = {"id": user.id, "superkey": user.superkey, "mobile": user.store_contact}
    missing = [field for field in INTEGRITY_FIELDS if not row[field]]
    if missing:
        logger.error("Incomplete user data returned from database: user_id=%s missing=%s", user_id, missing)
        raise InternalError("Incomplete user data", missing_fields=missing)

    profile = ProfileOut.from_user(user)
    if profile.created_at is None:
        profile.created_at = datetime.now(timezone.utc)
    return profile


def parse_profile_update(payload: Any) -> ProfileUpdateCommand:
    """Check a full-update body and turn it into an update command.

    Checks run in a fixed order: mandatory fields (all missing ones are
    reported together), store contact format, then GST number format.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body", details="Expected a JSON object")

    try:
        update = ProfileUpdate.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid request body", details=describe_errors(exc.errors()))

    missing = update.missing_fields()
    if missing:
        raise ValidationError("Missing required fields", missing_fields=missing)

    if not STORE_CONTACT_RE.match(update.store_contact):
        raise ValidationError("Store contact must be exactly 10 digits")

    if update.gst_number and not GST_NUMBER_RE.match(update.gst_number):
        raise ValidationError("GST number must be exactly 15 alphanumeric characters")

    values = update.model_dump(by_alias=True)
    is_profile_complete = all(values.get(field) for field in MANDATORY_FIELDS)

    photo_set = "profile_photo" in update.model_fields_set
    return ProfileUpdateCommand(
        name=update.name,
        store_name=update.store_name,
        store_address=update.store_address,
        store_contact=update.store_contact,
        store_country_code=update.store_country_code,
        gst_number=update.gst_number or None,
        is_profile_complete=is_profile_complete,
        profile_photo=(update.profile_photo or None) if photo_set else None,
        profile_photo_set=photo_set,
    )


async def update_profile(
    db: AsyncSession,
    user_id: int,
    command: ProfileUpdateCommand
) -> ProfileOut:
    # The unique constraint on store_contact is what actually guarantees
    # uniqueness; this lookup only answers early with a friendlier message.
    try:
        taken_by = await find_other_user_with_contact(db, command.store_contact, user_id)
        if taken_by is not None:
            raise ConflictError("This phone number is already registered to another account.")

        await update_user(db, user_id, command.column_values())
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("store contact conflict on update: user_id=%s error=%s", user_id, exc.orig)
        raise ConflictError("Duplicate entry: This phone number is already in use.")
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("profile update failed: user_id=%s error=%s", user_id, exc)
        raise DependencyError("Database error occurred", details=str(exc))

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("Updated user not found")
    await db.refresh(user)

    logger.info("profile updated: user_id=%s photo_changed=%s", user_id, command.profile_photo_set)
    return ProfileOut.from_user(user)


async def set_profile_complete_flag(
    db: AsyncSession,
    user_id: int,
    is_complete: bool
) -> bool:
    # The flag is written as given, without checking it against the
    # mandatory fields; it can disagree with the stored profile afterwards.
    logger.warning("profile_complete overridden by client: user_id=%s value=%s", user_id, is_complete)
    try:
        affected = await set_profile_complete(db, user_id, is_complete)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("profile flag update failed: user_id=%s error=%s", user_id, exc)
        raise InternalError("Update failed", details=str(exc))

    if affected == 0:
        raise NotFoundError("User not found or no changes made")
    return is_complete
