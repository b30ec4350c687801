"""Resolve a public subdomain to a published store and its payment asset.

The payment-display asset can live in three tables. Strategies are tried
in order and the first usable value wins:

1. the latest active ``PaymentImage`` row for the template
2. the template's own ``payment_method_image`` override
3. the ``StoreSettings`` row linked through ``settings_id``
4. the owner's ``StoreSettings`` row matched by identity email (backfills
   ``settings_id`` so the next lookup takes step 3)

A miss on every strategy yields ``None``; it is never an error.
"""

import logging
from collections.abc import Awaitable, Callable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.payment_image import PaymentImage
from storefront.models.store_settings import StoreSettings
from storefront.models.store_template import StoreTemplate
from storefront.models.user import User
from storefront.schemas.store_template import StoreView

logger = logging.getLogger(__name__)

UNUSABLE_VALUES = frozenset({"", "null", "undefined"})

AssetStrategy = Callable[[AsyncSession, StoreTemplate], Awaitable[str | None]]


def clean_asset_url(value: str | None) -> str | None:
    """Return the stripped value, or None for blanks and ``null``/``undefined`` literals."""
    if value is None:
        return None
    value = value.strip()
    if value.lower() in UNUSABLE_VALUES:
        return None
    return value


async def _owner_email(db: AsyncSession, template: StoreTemplate) -> str | None:
    result = await db.execute(select(User.email).where(User.id == template.user_id))
    email = result.scalar_one_or_none()
    return email.lower() if email else None


async def from_payment_images(db: AsyncSession, template: StoreTemplate) -> str | None:
    result = await db.execute(
        select(PaymentImage.image_url)
        .where(
            PaymentImage.store_template_id == template.id,
            PaymentImage.is_active.is_(True),
        )
        .order_by(PaymentImage.created_at.desc(), PaymentImage.id.desc())
    )
    for url in result.scalars():
        cleaned = clean_asset_url(url)
        if cleaned:
            return cleaned
    return None


async def from_template_override(db: AsyncSession, template: StoreTemplate) -> str | None:
    return clean_asset_url(template.payment_method_image)


async def from_linked_settings(db: AsyncSession, template: StoreTemplate) -> str | None:
    if template.settings_id is None:
        return None
    row = await db.get(StoreSettings, template.settings_id)
    if row is None:
        return None

    owner_email = await _owner_email(db, template)
    if owner_email and row.email_address.lower() != owner_email:
        logger.warning(
            "Settings %s linked to store template %s has email %s, owner identity is %s",
            row.id,
            template.id,
            row.email_address,
            owner_email,
        )
    return clean_asset_url(row.payment_method_image)


async def from_settings_by_email(db: AsyncSession, template: StoreTemplate) -> str | None:
    owner_email = await _owner_email(db, template)
    if not owner_email:
        return None

    result = await db.execute(
        select(StoreSettings)
        .where(func.lower(StoreSettings.email_address) == owner_email)
        .order_by(StoreSettings.created_at.desc())
        .limit(1)
    )
    row = result.scalar_one_or_none()
    if row is None:
        return None

    if template.settings_id is None:
        template.settings_id = row.id
        await db.flush()
        logger.info("Backfilled settings_id %s on store template %s", row.id, template.id)

    return clean_asset_url(row.payment_method_image)


PAYMENT_ASSET_STRATEGIES: tuple[AssetStrategy, ...] = (
    from_payment_images,
    from_template_override,
    from_linked_settings,
    from_settings_by_email,
)


async def resolve_payment_image(
    db: AsyncSession,
    template: StoreTemplate,
    strategies: tuple[AssetStrategy, ...] = PAYMENT_ASSET_STRATEGIES,
) -> str | None:
    for strategy in strategies:
        value = await strategy(db, template)
        if value:
            return value
    return None


async def get_published_template(db: AsyncSession, identifier: str | None) -> StoreTemplate | None:
    """Published template for ``identifier``; unpublished and unknown both give None."""
    identifier = (identifier or "").strip().lower()
    if not identifier:
        return None

    result = await db.execute(
        select(StoreTemplate).where(
            StoreTemplate.store_subdomain == identifier,
            StoreTemplate.is_published.is_(True),
        )
    )
    template = result.scalar_one_or_none()
    if template is None:
        exists = await db.execute(
            select(StoreTemplate.id).where(StoreTemplate.store_subdomain == identifier)
        )
        logger.debug(
            "Store lookup miss for %r (unpublished template exists: %s)",
            identifier,
            exists.scalar_one_or_none() is not None,
        )
    return template


def build_store_view(template: StoreTemplate, payment_method_image: str | None) -> StoreView:
    return StoreView(
        id=template.id,
        store_name=template.store_name,
        store_subdomain=template.store_subdomain,
        theme_part=template.theme_part or {},
        header_part=template.header_part or {},
        section_part=template.section_part or [],
        footer_part=template.footer_part or {},
        is_published=template.is_published,
        published_at=template.published_at,
        payment_method_image=payment_method_image,
        created_at=template.created_at,
        updated_at=template.updated_at,
    )


async def resolve_store(db: AsyncSession, identifier: str | None) -> StoreView | None:
    """Resolve a subdomain to the published store view, or None when not found."""
    template = await get_published_template(db, identifier)
    if template is None:
        return None
    payment_method_image = await resolve_payment_image(db, template)
    return build_store_view(template, payment_method_image)
