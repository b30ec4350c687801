"""Order request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from storefront.schemas.customer import CustomerResponse


class OrderItem(BaseModel):
    """A line item as stored on the order; missing numbers get safe defaults."""

    product_id: str | None = None
    product_name: str | None = None
    product_sku: str | None = None
    quantity: int = Field(1, ge=0)
    price: float = Field(0, ge=0)
    total: float | None = None

    @model_validator(mode="after")
    def _fill_total(self) -> "OrderItem":
        if self.total is None:
            self.total = self.quantity * self.price
        return self


class OrderCreate(BaseModel):
    customer_id: uuid.UUID
    total_price: Decimal = Field(..., ge=0, decimal_places=2)
    ordered_at: datetime | None = None
    items: list[OrderItem] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    customer_id: uuid.UUID | None = None
    total_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    ordered_at: datetime | None = None
    items: list[OrderItem] | None = None


class OrderResponse(BaseModel):
    id: uuid.UUID
    order_code: str
    customer_id: uuid.UUID
    customer: CustomerResponse | None = None
    total_price: Decimal
    ordered_at: datetime
    items: list[OrderItem]
    created_at: datetime
    updated_at: datetime | None = None
