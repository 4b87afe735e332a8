
from typing import Any, Mapping, Optional
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from receiptdesk.db.models.users import User

async def get_user_by_id(
    db: AsyncSession,
    user_id: int
) -> Optional[User]:
    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()
    return user

async def find_other_user_with_contact(
    db: AsyncSession,
    store_contact: str,
    user_id: int
) -> Optional[int]:
    result = await db.execute(
        select(User.id).where(User.store_contact == store_contact, User.id != user_id).limit(1)
    )
    return result.scalar_one_or_none()

async def update_user(
    db: AsyncSession,
    user_id: int,
    values: Mapping[str, Any]
) -> int:
    result = await db.execute(
        update(User).where(User.id == user_id).values(**values)
    )
    return result.rowcount

async def set_profile_complete(
    db: AsyncSession,
    user_id: int,
    is_complete: bool
) -> int:
    return await update_user(db, user_id, {"profile_complete": is_complete})
