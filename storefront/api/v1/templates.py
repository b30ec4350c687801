"""Base template catalog. Readable by any signed-in user, managed by admins."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db, require_role
from storefront.models.template import Template
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate

router = APIRouter()


async def _get_template(db: AsyncSession, template_id: uuid.UUID) -> Template:
    template = await db.get(Template, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.get("", response_model=Envelope[list[TemplateResponse]])
async def list_templates(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Template).order_by(Template.created_at.desc()))
    return Envelope(data=[TemplateResponse.model_validate(t) for t in result.scalars().all()])


@router.get("/{template_id}", response_model=Envelope[TemplateResponse])
async def get_template(
    template_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await _get_template(db, template_id)
    return Envelope(data=TemplateResponse.model_validate(template))


@router.post("", response_model=Envelope[TemplateResponse], status_code=201)
async def create_template(
    body: TemplateCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("admin", user)

    template = Template(**body.model_dump())
    db.add(template)
    await db.flush()
    return Envelope(data=TemplateResponse.model_validate(template))


@router.put("/{template_id}", response_model=Envelope[TemplateResponse])
async def update_template(
    template_id: uuid.UUID,
    body: TemplateUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("admin", user)
    template = await _get_template(db, template_id)

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(template, field, value)

    await db.flush()
    return Envelope(data=TemplateResponse.model_validate(template))


@router.delete("/{template_id}", response_model=Envelope[None])
async def delete_template(
    template_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("admin", user)
    template = await _get_template(db, template_id)

    await db.delete(template)
    await db.flush()
    return Envelope(data=None, message="Template deleted")
