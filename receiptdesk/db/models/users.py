# receiptdesk/db/models/users.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from receiptdesk.db.base import Base


class User(Base):
    __tablename__ = "users"

    """Represents a merchant account and its store profile.

    One row per merchant. Besides the identity columns (id, superkey) it
    carries the store identity shown on receipts: store name, address,
    contact number and country code, an optional GST registration number
    and profile photo, and the profile_complete flag the receipt pages use
    to decide whether the merchant may issue receipts yet.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    superkey = Column(String(64), nullable=False)

    name = Column(String(255), nullable=True)
    store_name = Column(String(255), nullable=True)
    store_address = Column(Text, nullable=True)
    store_contact = Column(String(20), nullable=True)
    store_country_code = Column(String(8), nullable=True)
    gst_number = Column(String(15), nullable=True)
    profile_photo = Column(Text, nullable=True)

    profile_complete = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("superkey", name="uq_users_superkey"),
        UniqueConstraint("store_contact", name="uq_users_store_contact"),
    )
