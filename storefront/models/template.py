import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, JSONType, TimestampMixin


class Template(TimestampMixin, Base):
    """Base template from the catalog that sellers start their store from."""

    __tablename__ = "templates"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    template_name: Mapped[str] = mapped_column(String(255), nullable=False)
    theme_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    header_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    section_part: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    footer_part: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
