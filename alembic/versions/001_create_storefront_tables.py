"""Create storefront tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "owner_id",
        sa.UUID(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _layout_columns() -> list[sa.Column]:
    return [
        sa.Column("theme_part", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("header_part", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("section_part", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("footer_part", postgresql.JSONB(), nullable=False, server_default="{}"),
    ]


def upgrade() -> None:
    # --- users (local mirror of auth identities) ---
    op.create_table(
        "users",
        _id_column(),
        sa.Column("auth_sub", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="seller"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'seller', 'customer')", name="ck_users_role"),
    )

    # --- settings (one per owner) ---
    op.create_table(
        "settings",
        _id_column(),
        _owner_column(),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email_address", sa.String(320), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("store_name", sa.String(255), nullable=True),
        sa.Column("store_description", sa.Text(), nullable=True),
        sa.Column("store_url", sa.String(255), nullable=True),
        sa.Column("payment_method_image", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("owner_id", name="uq_settings_owner"),
        sa.UniqueConstraint("email_address", name="uq_settings_email_address"),
    )
    op.create_index("ix_settings_owner_id", "settings", ["owner_id"])

    # --- templates (global base template catalog) ---
    op.create_table(
        "templates",
        _id_column(),
        sa.Column("template_name", sa.String(255), nullable=False),
        *_layout_columns(),
        *_timestamps(),
    )

    # --- store_templates (one per owner) ---
    op.create_table(
        "store_templates",
        _id_column(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "settings_id",
            sa.UUID(),
            sa.ForeignKey("settings.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "base_template_id",
            sa.UUID(),
            sa.ForeignKey("templates.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("store_name", sa.String(255), nullable=True),
        sa.Column("store_subdomain", sa.String(63), nullable=True, unique=True),
        *_layout_columns(),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("payment_method_image", sa.Text(), nullable=True),
        *_timestamps(),
    )

    # --- payment_images (append-only log, at most one active per template) ---
    op.create_table(
        "payment_images",
        _id_column(),
        sa.Column(
            "store_template_id",
            sa.UUID(),
            sa.ForeignKey("store_templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_payment_images_template_active",
        "payment_images",
        ["store_template_id", "is_active"],
    )

    # --- products ---
    op.create_table(
        "products",
        _id_column(),
        _owner_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("image_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'inactive', 'out_of_stock')",
            name="ck_products_status",
        ),
        sa.CheckConstraint("price_amount >= 0", name="ck_products_price_non_negative"),
    )
    op.create_index("ix_products_owner_id", "products", ["owner_id"])

    # --- customers ---
    op.create_table(
        "customers",
        _id_column(),
        _owner_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("owner_id", "email", name="uq_customers_owner_email"),
    )
    op.create_index("ix_customers_owner_id", "customers", ["owner_id"])

    # --- orders ---
    op.create_table(
        "orders",
        _id_column(),
        _owner_column(),
        sa.Column("order_code", sa.String(40), nullable=False),
        sa.Column(
            "customer_id",
            sa.UUID(),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("ordered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("items", postgresql.JSONB(), nullable=False, server_default="[]"),
        *_timestamps(),
        sa.UniqueConstraint("order_code", name="uq_orders_order_code"),
    )
    op.create_index("ix_orders_owner_id", "orders", ["owner_id"])
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])


def downgrade() -> None:
    op.drop_table("orders")
    op.drop_table("customers")
    op.drop_table("products")
    op.drop_table("payment_images")
    op.drop_table("store_templates")
    op.drop_table("templates")
    op.drop_table("settings")
    op.drop_table("users")
