import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class PaymentImage(Base):
    """Append-only log of payment-display assets uploaded for a store template."""

    __tablename__ = "payment_images"
    __table_args__ = (
        Index("ix_payment_images_template_active", "store_template_id", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    store_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("store_templates.id", ondelete="CASCADE"), nullable=False
    )
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
