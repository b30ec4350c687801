import uuid

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import OwnerScopedBase, TimestampMixin


class Customer(TimestampMixin, OwnerScopedBase):
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("owner_id", "email", name="uq_customers_owner_email"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # owner_id inherited from OwnerScopedBase
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
