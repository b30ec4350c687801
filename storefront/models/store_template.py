import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, JSONType, TimestampMixin


class StoreTemplate(TimestampMixin, Base):
    """A seller's customized, publishable storefront (one per owner)."""

    __tablename__ = "store_templates"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    settings_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(), ForeignKey("settings.id", ondelete="SET NULL"), nullable=True
    )
    base_template_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(), ForeignKey("templates.id", ondelete="SET NULL"), nullable=True
    )
    store_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    store_subdomain: Mapped[str | None] = mapped_column(String(63), unique=True, nullable=True)
    theme_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    header_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    section_part: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    footer_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_method_image: Mapped[str | None] = mapped_column(Text, nullable=True)
