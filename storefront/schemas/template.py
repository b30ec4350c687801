"""Base template catalog schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class TemplateCreate(BaseModel):
    template_name: str = Field(..., min_length=1, max_length=255)
    theme_part: dict = Field(default_factory=dict)
    header_part: dict = Field(default_factory=dict)
    section_part: list = Field(default_factory=list)
    footer_part: dict = Field(default_factory=dict)


class TemplateUpdate(BaseModel):
    template_name: str | None = Field(None, min_length=1, max_length=255)
    theme_part: dict | None = None
    header_part: dict | None = None
    section_part: list | None = None
    footer_part: dict | None = None


class TemplateResponse(BaseModel):
    id: uuid.UUID
    template_name: str
    theme_part: dict
    header_part: dict
    section_part: list
    footer_part: dict
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
