# receiptdesk/domain/profile/schemas.py
from dataclasses import dataclass
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union

MANDATORY_FIELDS = (
    "name",
    "storeName",
    "storeAddress",
    "storeContact",
    "storeCountryCode",
)


class ProfileOut(BaseModel):
    id: Union[int, str]
    superkey: Optional[str] = None
    name: Optional[str] = None
    mobile: Optional[str] = None
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    store_name: Optional[str] = Field(None, serialization_alias="storeName")
    store_address: Optional[str] = Field(None, serialization_alias="storeAddress")
    store_contact: Optional[str] = Field(None, serialization_alias="storeContact")
    store_country_code: Optional[str] = Field(None, serialization_alias="storeCountryCode")
    gst_number: Optional[str] = Field(None, serialization_alias="gstNumber")
    profile_photo: Optional[str] = Field(None, serialization_alias="profilePhoto")
    is_profile_complete: bool = Field(False, serialization_alias="isProfileComplete")

    @classmethod
    def from_user(cls, user) -> "ProfileOut":
        return cls(
            id=user.id,
            superkey=user.superkey,
            name=user.name,
            mobile=user.store_contact,
            created_at=user.created_at,
            store_name=user.store_name,
            store_address=user.store_address,
            store_contact=user.store_contact,
            store_country_code=user.store_country_code,
            gst_number=user.gst_number,
            profile_photo=user.profile_photo,
            is_profile_complete=bool(user.profile_complete),
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProfileUpdate(BaseModel):
    """Body of a full profile update, as sent by the client."""

    name: Optional[str] = None
    store_name: Optional[str] = Field(None, alias="storeName")
    store_address: Optional[str] = Field(None, alias="storeAddress")
    store_contact: Optional[str] = Field(None, alias="storeContact")
    store_country_code: Optional[str] = Field(None, alias="storeCountryCode")
    gst_number: Optional[str] = Field(None, alias="gstNumber")
    profile_photo: Optional[str] = Field(None, alias="profilePhoto")

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    def missing_fields(self) -> list:
        values = self.model_dump(by_alias=True)
        return [field for field in MANDATORY_FIELDS if not values.get(field)]


class ProfileCompleteFlag(BaseModel):
    """Body of the flag-only update. Any value is read for its truthiness; absent means false."""

    is_profile_complete: bool = Field(False, alias="isProfileComplete")

    class Config:
        populate_by_name = True

    @field_validator("is_profile_complete", mode="before")
    @classmethod
    def _truthy(cls, value):
        return bool(value)


@dataclass(frozen=True)
class ProfileUpdateCommand:
    """Validated full update.

    The mandatory columns are always written. ``profile_photo`` is written
    only when ``profile_photo_set`` is true, so an omitted key leaves the
    stored photo alone while an explicit null/empty value clears it.
    """

    name: str
    store_name: str
    store_address: str
    store_contact: str
    store_country_code: str
    gst_number: Optional[str]
    is_profile_complete: bool
    profile_photo: Optional[str] = None
    profile_photo_set: bool = False

    def column_values(self) -> dict:
        values = {
            "name": self.name,
            "store_name": self.store_name,
            "store_address": self.store_address,
            "store_contact": self.store_contact,
            "store_country_code": self.store_country_code,
            "gst_number": self.gst_number,
            "profile_complete": self.is_profile_complete,
        }
        if self.profile_photo_set:
            values["profile_photo"] = self.profile_photo
        return values
