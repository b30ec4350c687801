"""Owner settings endpoints. Every write is propagated to the store template."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db
from storefront.core.exceptions import ConflictError
from storefront.models.store_settings import StoreSettings
from storefront.models.store_template import StoreTemplate
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.store_settings import (
    SettingsCreate,
    SettingsResponse,
    SettingsUpdate,
    StoreInfoUpdate,
)
from storefront.services.store_sync import get_owner_settings, sync_after_settings_write

router = APIRouter()


async def _get_owned(db: AsyncSession, settings_id: uuid.UUID, user: User) -> StoreSettings:
    result = await db.execute(
        select(StoreSettings).where(
            StoreSettings.id == settings_id,
            StoreSettings.owner_id == user.id,
        )
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail="Settings not found")
    return row


async def _ensure_email_available(
    db: AsyncSession, email: str, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(StoreSettings.id).where(func.lower(StoreSettings.email_address) == email.lower())
    if exclude_id is not None:
        stmt = stmt.where(StoreSettings.id != exclude_id)
    result = await db.execute(stmt)
    if result.first() is not None:
        raise ConflictError("Settings with this email already exists")



def _written_fields(body: SettingsCreate | SettingsUpdate | StoreInfoUpdate) -> dict:
    """Fields present in the body. A blank ``store_url`` never clears a stored subdomain."""
    written = body.model_dump(exclude_unset=True)
    if "store_url" in written and written["store_url"] is None:
        del written["store_url"]
    return written

@router.get("", response_model=Envelope[list[SettingsResponse]])
async def list_settings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The owner's settings as a list (empty until created)."""
    row = await get_owner_settings(db, user.id)
    data = [SettingsResponse.model_validate(row)] if row else []
    return Envelope(data=data)


@router.post("", response_model=Envelope[SettingsResponse], status_code=201)
async def create_settings(
    body: SettingsCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if await get_owner_settings(db, user.id) is not None:
        raise ConflictError("Settings already exist for this account")
    await _ensure_email_available(db, body.email_address)

    written = _written_fields(body)
    row = StoreSettings(owner_id=user.id, **written)
    db.add(row)
    await db.flush()

    await sync_after_settings_write(db, user, written, row)
    return Envelope(data=SettingsResponse.model_validate(row))


@router.put("/store", response_model=Envelope[SettingsResponse])
async def update_store_info(
    body: StoreInfoUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await get_owner_settings(db, user.id)
    if row is None:
        raise HTTPException(
            status_code=404, detail="Settings not found. Please create settings first."
        )

    written = _written_fields(body)
    for field, value in written.items():
        setattr(row, field, value)
    await db.flush()

    await sync_after_settings_write(db, user, written, row)
    return Envelope(
        data=SettingsResponse.model_validate(row),
        message="Store information updated successfully and synced with template",
    )


@router.get("/{settings_id}", response_model=Envelope[SettingsResponse])
async def get_settings(
    settings_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await _get_owned(db, settings_id, user)
    return Envelope(data=SettingsResponse.model_validate(row))


@router.put("/{settings_id}", response_model=Envelope[SettingsResponse])
async def update_settings(
    settings_id: uuid.UUID,
    body: SettingsUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await _get_owned(db, settings_id, user)

    written = _written_fields(body)
    for required in ("first_name", "last_name", "email_address"):
        if required in written and written[required] is None:
            raise HTTPException(status_code=422, detail=f"{required} cannot be null")
    if "email_address" in written:
        await _ensure_email_available(db, written["email_address"], exclude_id=row.id)

    for field, value in written.items():
        setattr(row, field, value)
    await db.flush()

    await sync_after_settings_write(db, user, written, row)
    return Envelope(data=SettingsResponse.model_validate(row))


@router.delete("/{settings_id}", response_model=Envelope[None])
async def delete_settings(
    settings_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await _get_owned(db, settings_id, user)

    await db.execute(
        update(StoreTemplate)
        .where(StoreTemplate.settings_id == row.id)
        .values(settings_id=None)
    )
    await db.delete(row)
    await db.flush()
    return Envelope(data=None, message="Settings deleted")
