"""Image upload request/response schemas."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from storefront.services.storage import ALLOWED_CONTENT_TYPES, MAX_UPLOAD_SIZE


class UploadUrlRequest(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1)
    size_bytes: int = Field(..., gt=0, le=MAX_UPLOAD_SIZE)
    folder: Literal["payment", "products", "store"] = "products"

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, v: str) -> str:
        if v not in ALLOWED_CONTENT_TYPES:
            allowed = ", ".join(sorted(ALLOWED_CONTENT_TYPES))
            raise ValueError(f"content_type must be one of: {allowed}")
        return v


class UploadUrlResponse(BaseModel):
    upload_url: str
    public_url: str
    key: str
    expires_in: int
