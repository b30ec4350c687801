"""Keep an owner's StoreSettings and StoreTemplate rows in agreement.

Both directions only act on the fields a request actually carried, so a
field that is absent is never confused with one sent empty. A subdomain,
once set, is never cleared here: only an explicit new non-empty value
replaces it.
"""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import ConflictError, ProblemDetailError
from storefront.models.payment_image import PaymentImage
from storefront.models.store_settings import StoreSettings
from storefront.models.store_template import StoreTemplate
from storefront.models.user import User
from storefront.schemas.store_settings import STORE_IDENTITY_FIELDS
from storefront.schemas.store_template import validate_subdomain
from storefront.services.store_resolver import clean_asset_url

logger = logging.getLogger(__name__)

TEMPLATE_MIRRORED_FIELDS = frozenset({"store_name", "store_subdomain"})
PLACEHOLDER_FIRST_NAME = "Store"
PLACEHOLDER_LAST_NAME = "Owner"


async def get_owner_template(db: AsyncSession, owner_id: uuid.UUID) -> StoreTemplate | None:
    result = await db.execute(select(StoreTemplate).where(StoreTemplate.user_id == owner_id))
    return result.scalar_one_or_none()


async def get_owner_settings(db: AsyncSession, owner_id: uuid.UUID) -> StoreSettings | None:
    result = await db.execute(select(StoreSettings).where(StoreSettings.owner_id == owner_id))
    return result.scalar_one_or_none()


async def ensure_subdomain_available(
    db: AsyncSession, subdomain: str, template_id: uuid.UUID | None
) -> None:
    """Raise 409 if ``subdomain`` belongs to a template other than ``template_id``."""
    stmt = select(StoreTemplate.id).where(StoreTemplate.store_subdomain == subdomain)
    if template_id is not None:
        stmt = stmt.where(StoreTemplate.id != template_id)
    result = await db.execute(stmt)
    if result.first() is not None:
        raise ConflictError(f"Subdomain '{subdomain}' is already taken")


def _subdomain_from_store_url(value: str | None) -> str | None:
    try:
        return validate_subdomain(value)
    except ValueError as e:
        raise ProblemDetailError(
            status=422, title="Validation Error", detail=f"store_url: {e}"
        ) from e


async def record_payment_image(
    db: AsyncSession, template: StoreTemplate, image_url: str | None
) -> bool:
    """Append a PaymentImage row and deactivate earlier active ones.

    Runs inside a SAVEPOINT; a failure is logged and swallowed because the
    field on the Settings/StoreTemplate row already holds the durable value.
    An unusable ``image_url`` only deactivates the existing rows.
    """
    url = clean_asset_url(image_url)
    try:
        async with db.begin_nested():
            await db.execute(
                update(PaymentImage)
                .where(
                    PaymentImage.store_template_id == template.id,
                    PaymentImage.is_active.is_(True),
                )
                .values(is_active=False)
            )
            if url:
                db.add(PaymentImage(store_template_id=template.id, image_url=url, is_active=True))
    except SQLAlchemyError:
        logger.warning(
            "Payment image log write failed for store template %s", template.id, exc_info=True
        )
        return False
    return True


async def sync_after_settings_write(
    db: AsyncSession,
    owner: User,
    written: dict,
    settings_row: StoreSettings,
) -> StoreTemplate | None:
    """Propagate a settings write to the owner's store template.

    ``written`` holds only the fields present in the request body. Returns the
    template touched, or None when there was nothing to sync into.
    """
    template = await get_owner_template(db, owner.id)
    identity_written = STORE_IDENTITY_FIELDS & written.keys()

    if not identity_written:
        if "payment_method_image" not in written or template is None:
            return template
        template.settings_id = settings_row.id
        await db.flush()
        await record_payment_image(db, template, written["payment_method_image"])
        return template

    new_subdomain = None
    if "store_url" in written:
        new_subdomain = _subdomain_from_store_url(written["store_url"])

    store_name = (written.get("store_name") or "").strip() or None

    if template is None:
        if new_subdomain:
            await ensure_subdomain_available(db, new_subdomain, None)
        template = StoreTemplate(
            user_id=owner.id,
            settings_id=settings_row.id,
            store_name=store_name or settings_row.store_name,
            store_subdomain=new_subdomain,
            theme_part={},
            header_part={
                "title": store_name or settings_row.store_name or "",
                "description": settings_row.store_description or "",
            },
            section_part=[],
            footer_part={},
        )
        db.add(template)
        await db.flush()
        logger.info("Created store template %s for owner %s", template.id, owner.id)
    else:
        current = template.store_subdomain
        subdomain = new_subdomain or current
        if subdomain and subdomain != current:
            await ensure_subdomain_available(db, subdomain, template.id)
        template.store_subdomain = subdomain

        header = dict(template.header_part or {})
        if store_name:
            template.store_name = store_name
            header["title"] = store_name
        if "store_description" in written:
            header["description"] = written["store_description"] or ""
        template.header_part = header
        template.settings_id = settings_row.id
        await db.flush()

    if "payment_method_image" in written:
        await record_payment_image(db, template, written["payment_method_image"])
    return template


async def sync_after_template_write(
    db: AsyncSession,
    owner: User,
    template: StoreTemplate,
    written: dict,
) -> StoreSettings | None:
    """Mirror store name and subdomain from the template into the owner's settings.

    A populated ``store_url`` is never replaced by an empty value. When the
    owner has no settings yet a placeholder row is created from the identity
    email, provided a store name is known.
    """
    if "payment_method_image" in written:
        await record_payment_image(db, template, written["payment_method_image"])

    if not TEMPLATE_MIRRORED_FIELDS & written.keys():
        return None

    row = None
    if template.settings_id is not None:
        row = await db.get(StoreSettings, template.settings_id)
    if row is None:
        row = await get_owner_settings(db, owner.id)

    store_name = (template.store_name or "").strip() or None

    if row is None:
        if not store_name:
            return None
        taken = await db.execute(
            select(StoreSettings.id).where(
                func.lower(StoreSettings.email_address) == owner.email.lower()
            )
        )
        if taken.first() is not None:
            logger.warning(
                "Cannot create settings for owner %s: email %s already in use",
                owner.id,
                owner.email,
            )
            return None
        row = StoreSettings(
            owner_id=owner.id,
            first_name=PLACEHOLDER_FIRST_NAME,
            last_name=PLACEHOLDER_LAST_NAME,
            email_address=owner.email,
            store_name=store_name,
            store_url=template.store_subdomain,
        )
        db.add(row)
        await db.flush()
        logger.info("Created placeholder settings %s for owner %s", row.id, owner.id)
    else:
        if "store_name" in written and store_name:
            row.store_name = store_name
        if "store_subdomain" in written and template.store_subdomain:
            row.store_url = template.store_subdomain

    template.settings_id = row.id
    await db.flush()
    return row
