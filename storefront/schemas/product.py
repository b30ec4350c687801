"""Product request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

ProductStatus = Literal["active", "inactive", "out_of_stock"]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price_amount: Decimal = Field(..., ge=0, decimal_places=2)
    category: str | None = Field(None, max_length=255)
    status: ProductStatus = "active"
    image_url: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    category: str | None = Field(None, max_length=255)
    status: ProductStatus | None = None
    image_url: str | None = None


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    price_amount: Decimal
    category: str | None = None
    status: str
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PublicProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    price_amount: Decimal
    category: str | None = None
    image_url: str | None = None

    model_config = {"from_attributes": True}


class ProductSummary(BaseModel):
    total_products: int
    active_products: int
    inactive_products: int
    out_of_stock_products: int
    total_value: Decimal
    average_price: Decimal
