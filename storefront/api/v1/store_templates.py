"""Store template endpoints: owner builder CRUD, publishing and public lookups."""

import logging
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import settings
from storefront.core.dependencies import get_current_user, get_db, require_role
from storefront.core.exceptions import ConflictError, ProblemDetailError
from storefront.models.payment_image import PaymentImage
from storefront.models.store_template import StoreTemplate
from storefront.models.template import Template
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.store_template import (
    PublishRequest,
    PublishResponse,
    StoreTemplateResponse,
    StoreTemplateWrite,
    StoreView,
)
from storefront.services.store_resolver import (
    build_store_view,
    resolve_payment_image,
    resolve_store,
)
from storefront.services.store_sync import (
    ensure_subdomain_available,
    get_owner_template,
    sync_after_template_write,
)

logger = logging.getLogger(__name__)

router = APIRouter()

STORE_NOT_FOUND = "Store not found"
LAYOUT_PARTS = ("theme_part", "header_part", "section_part", "footer_part")


async def _require_owner_template(db: AsyncSession, user: User) -> StoreTemplate:
    template = await get_owner_template(db, user.id)
    if template is None:
        raise HTTPException(status_code=404, detail="Store template not found")
    return template


async def _flush_subdomain(db: AsyncSession, subdomain: str | None) -> None:
    """Flush, mapping a unique-index race on the subdomain to 409."""
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError(f"Subdomain '{subdomain}' is already taken") from e


@router.get("", response_model=Envelope[StoreTemplateResponse | None])
async def get_my_store_template(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await get_owner_template(db, user.id)
    data = StoreTemplateResponse.model_validate(template) if template else None
    return Envelope(data=data)


@router.post("", response_model=Envelope[StoreTemplateResponse])
async def save_store_template(
    body: StoreTemplateWrite,
    response: Response,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create the owner's template or merge the supplied fields into it.

    A null or blank ``store_subdomain`` leaves the stored subdomain as is;
    unpublishing is how a store is taken offline.
    """
    require_role("seller", user)

    written = body.model_dump(exclude_unset=True)
    if written.get("store_subdomain") is None:
        written.pop("store_subdomain", None)

    template = await get_owner_template(db, user.id)
    created = template is None

    if created:
        template = StoreTemplate(
            user_id=user.id,
            theme_part={},
            header_part={},
            section_part=[],
            footer_part={},
        )
        if body.base_template_id is not None:
            base = await db.get(Template, body.base_template_id)
            if base is None:
                raise HTTPException(status_code=404, detail="Template not found")
            for part in LAYOUT_PARTS:
                setattr(template, part, getattr(base, part))
        db.add(template)
    elif "base_template_id" in written and written["base_template_id"] is not None:
        if await db.get(Template, written["base_template_id"]) is None:
            raise HTTPException(status_code=404, detail="Template not found")

    new_subdomain = written.get("store_subdomain")
    if new_subdomain and new_subdomain != template.store_subdomain:
        await ensure_subdomain_available(db, new_subdomain, None if created else template.id)

    for field, value in written.items():
        if field in LAYOUT_PARTS and value is None:
            continue
        setattr(template, field, value)

    await _flush_subdomain(db, new_subdomain)
    await sync_after_template_write(db, user, template, written)

    response.status_code = 201 if created else 200
    return Envelope(
        data=StoreTemplateResponse.model_validate(template),
        message="Store template created" if created else "Store template updated",
    )


@router.put("/publish", response_model=PublishResponse)
async def publish_store_template(
    body: PublishRequest | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Publish the owner's store under the given (or already stored) subdomain.

    Publishing again with the same subdomain succeeds and only moves
    ``published_at``.
    """
    require_role("seller", user)
    template = await _require_owner_template(db, user)

    subdomain = (body.store_subdomain if body else None) or template.store_subdomain
    if not subdomain:
        raise ProblemDetailError(
            status=422,
            title="Validation Error",
            detail="store_subdomain is required to publish",
        )
    if subdomain != template.store_subdomain:
        await ensure_subdomain_available(db, subdomain, template.id)

    template.store_subdomain = subdomain
    template.is_published = True
    template.published_at = datetime.now(UTC)
    await _flush_subdomain(db, subdomain)

    await sync_after_template_write(db, user, template, {"store_subdomain": subdomain})
    logger.info("Store template %s published as %s", template.id, subdomain)

    return PublishResponse(
        data=StoreTemplateResponse.model_validate(template),
        message="Store published successfully",
        store_url=f"{subdomain}.{settings.BASE_DOMAIN}",
    )


@router.put("/unpublish", response_model=Envelope[StoreTemplateResponse])
async def unpublish_store_template(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("seller", user)
    template = await _require_owner_template(db, user)

    template.is_published = False
    await db.flush()
    return Envelope(
        data=StoreTemplateResponse.model_validate(template),
        message="Store unpublished",
    )


@router.delete("", response_model=Envelope[None])
async def delete_store_template(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("seller", user)
    template = await _require_owner_template(db, user)

    await db.execute(delete(PaymentImage).where(PaymentImage.store_template_id == template.id))
    await db.delete(template)
    await db.flush()
    return Envelope(data=None, message="Store template deleted")


@router.get("/subdomain/{subdomain}", response_model=Envelope[StoreView])
async def get_store_by_subdomain(
    subdomain: str,
    db: AsyncSession = Depends(get_db),
):
    """Public: resolve a subdomain to its published store."""
    view = await resolve_store(db, subdomain)
    if view is None:
        raise HTTPException(status_code=404, detail=STORE_NOT_FOUND)
    return Envelope(data=view)


@router.get("/{template_id}", response_model=Envelope[StoreView])
async def get_published_store_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Public: a published store template by id."""
    result = await db.execute(
        select(StoreTemplate).where(
            StoreTemplate.id == template_id,
            StoreTemplate.is_published.is_(True),
        )
    )
    template = result.scalar_one_or_none()
    if template is None or not template.store_subdomain:
        raise HTTPException(status_code=404, detail=STORE_NOT_FOUND)

    payment_method_image = await resolve_payment_image(db, template)
    return Envelope(data=build_store_view(template, payment_method_image))
