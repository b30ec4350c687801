import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import OwnerScopedBase, TimestampMixin

PRODUCT_STATUSES = ("active", "inactive", "out_of_stock")


class Product(TimestampMixin, OwnerScopedBase):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'inactive', 'out_of_stock')",
            name="ck_products_status",
        ),
        CheckConstraint("price_amount >= 0", name="ck_products_price_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # owner_id inherited from OwnerScopedBase
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
