"""Store template request/response schemas."""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
RESERVED_SUBDOMAINS = frozenset({"www", "api", "admin"})


def normalize_subdomain(value: str | None) -> str | None:
    """Trim and lower-case a subdomain; blank values become None."""
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


def validate_subdomain(value: str | None) -> str | None:
    value = normalize_subdomain(value)
    if value is None:
        return None
    if not SUBDOMAIN_PATTERN.match(value):
        raise ValueError(
            "Subdomain must be 1-63 chars, lowercase alphanumeric with hyphens, "
            "cannot start or end with a hyphen"
        )
    if value in RESERVED_SUBDOMAINS:
        raise ValueError(f"Subdomain '{value}' is reserved")
    return value


class StoreTemplateWrite(BaseModel):
    """POST body; every field is optional (patch semantics)."""

    base_template_id: uuid.UUID | None = None
    theme_part: dict | None = None
    header_part: dict | None = None
    section_part: list | None = None
    footer_part: dict | None = None
    store_name: str | None = Field(None, max_length=255)
    store_subdomain: str | None = Field(None, max_length=63)
    payment_method_image: str | None = None

    @field_validator("store_subdomain")
    @classmethod
    def check_subdomain(cls, v: str | None) -> str | None:
        return validate_subdomain(v)


class PublishRequest(BaseModel):
    store_subdomain: str | None = Field(None, max_length=63)

    @field_validator("store_subdomain")
    @classmethod
    def check_subdomain(cls, v: str | None) -> str | None:
        return validate_subdomain(v)


class StoreTemplateResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    settings_id: uuid.UUID | None = None
    base_template_id: uuid.UUID | None = None
    store_name: str | None = None
    store_subdomain: str | None = None
    theme_part: dict
    header_part: dict
    section_part: list
    footer_part: dict
    is_published: bool
    published_at: datetime | None = None
    payment_method_image: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class StoreView(BaseModel):
    """Public view of a published store, with the resolved payment asset merged in."""

    id: uuid.UUID
    store_name: str | None = None
    store_subdomain: str
    theme_part: dict
    header_part: dict
    section_part: list
    footer_part: dict
    is_published: bool
    published_at: datetime | None = None
    payment_method_image: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class PublishResponse(BaseModel):
    success: bool = True
    data: StoreTemplateResponse
    message: str
    store_url: str | None = None
