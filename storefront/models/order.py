import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import JSONType, OwnerScopedBase, TimestampMixin


class Order(TimestampMixin, OwnerScopedBase):
    __tablename__ = "orders"
    __table_args__ = (UniqueConstraint("order_code", name="uq_orders_order_code"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # owner_id inherited from OwnerScopedBase
    order_code: Mapped[str] = mapped_column(String(40), nullable=False)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    ordered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    items: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
