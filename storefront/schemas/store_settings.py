"""Settings request/response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from storefront.schemas.store_template import validate_subdomain

STORE_IDENTITY_FIELDS = frozenset({"store_name", "store_description", "store_url"})


class SettingsCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email_address: EmailStr
    phone_number: str | None = Field(None, max_length=50)
    store_name: str = Field(..., min_length=1, max_length=255)
    store_description: str | None = None
    store_url: str | None = Field(None, max_length=255)
    payment_method_image: str | None = None

    @field_validator("store_url")
    @classmethod
    def check_store_url(cls, v: str | None) -> str | None:
        return validate_subdomain(v)


class SettingsUpdate(BaseModel):
    """PUT body; only the fields present in the request are written."""

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    email_address: EmailStr | None = None
    phone_number: str | None = Field(None, max_length=50)
    store_name: str | None = Field(None, max_length=255)
    store_description: str | None = None
    store_url: str | None = Field(None, max_length=255)
    payment_method_image: str | None = None

    @field_validator("store_url")
    @classmethod
    def check_store_url(cls, v: str | None) -> str | None:
        return validate_subdomain(v)


class StoreInfoUpdate(BaseModel):
    store_name: str = Field(..., min_length=1, max_length=255)
    store_description: str | None = None
    store_url: str | None = Field(None, max_length=255)

    @field_validator("store_url")
    @classmethod
    def check_store_url(cls, v: str | None) -> str | None:
        return validate_subdomain(v)


class SettingsResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email_address: str
    phone_number: str | None = None
    store_name: str | None = None
    store_description: str | None = None
    store_url: str | None = None
    payment_method_image: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
