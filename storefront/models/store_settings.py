import uuid

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import OwnerScopedBase, TimestampMixin


class StoreSettings(TimestampMixin, OwnerScopedBase):
    """Owner profile and store identity, kept in sync with the store template."""

    __tablename__ = "settings"
    __table_args__ = (
        UniqueConstraint("owner_id", name="uq_settings_owner"),
        UniqueConstraint("email_address", name="uq_settings_email_address"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # owner_id inherited from OwnerScopedBase
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email_address: Mapped[str] = mapped_column(String(320), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    store_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    store_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    payment_method_image: Mapped[str | None] = mapped_column(Text, nullable=True)
