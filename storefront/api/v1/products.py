"""Authenticated CRUD endpoints for the owner's products."""

import uuid
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db, require_role
from storefront.models.product import PRODUCT_STATUSES, Product
from storefront.models.user import User
from storefront.schemas.common import Envelope, PaginatedResponse
from storefront.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductStatus,
    ProductSummary,
    ProductUpdate,
)

router = APIRouter()

DEFAULT_PAGE_SIZE = 20
CENTS = Decimal("0.01")


def _encode_cursor(product: Product) -> str:
    return f"{product.created_at.isoformat()}|{product.id}"


def _decode_cursor(cursor: str) -> tuple[datetime, uuid.UUID]:
    try:
        dt_str, id_str = cursor.split("|", 1)
        return datetime.fromisoformat(dt_str), uuid.UUID(id_str)
    except (ValueError, AttributeError) as exc:
        raise HTTPException(status_code=400, detail="Invalid cursor") from exc


async def _get_owned(db: AsyncSession, product_id: uuid.UUID, user: User) -> Product:
    result = await db.execute(
        select(Product).where(Product.id == product_id, Product.owner_id == user.id)
    )
    product = result.scalar_one_or_none()
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("", response_model=Envelope[PaginatedResponse[ProductResponse]])
async def list_products(
    status: ProductStatus | None = Query(None),
    category: str | None = Query(None),
    cursor: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = (
        select(Product)
        .where(Product.owner_id == user.id)
        .order_by(Product.created_at.desc(), Product.id.desc())
    )

    if status is not None:
        stmt = stmt.where(Product.status == status)
    if category is not None:
        stmt = stmt.where(Product.category == category)
    if cursor is not None:
        cursor_dt, cursor_id = _decode_cursor(cursor)
        stmt = stmt.where(tuple_(Product.created_at, Product.id) < tuple_(cursor_dt, cursor_id))

    stmt = stmt.limit(limit + 1)
    result = await db.execute(stmt)
    rows = list(result.scalars().all())

    has_more = len(rows) > limit
    items = rows[:limit]

    page = PaginatedResponse(
        items=[ProductResponse.model_validate(p) for p in items],
        next_cursor=_encode_cursor(items[-1]) if has_more and items else None,
        has_more=has_more,
    )
    return Envelope(data=page)


@router.get("/summary", response_model=Envelope[ProductSummary])
async def product_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Counts per status plus total and average price."""
    result = await db.execute(
        select(Product.status, func.count(Product.id), func.sum(Product.price_amount))
        .where(Product.owner_id == user.id)
        .group_by(Product.status)
    )
    counts = dict.fromkeys(PRODUCT_STATUSES, 0)
    total_value = Decimal("0")
    for status, count, value in result.all():
        counts[status] = count
        total_value += Decimal(str(value or 0))

    total = sum(counts.values())
    average = total_value / total if total else Decimal("0")

    return Envelope(
        data=ProductSummary(
            total_products=total,
            active_products=counts["active"],
            inactive_products=counts["inactive"],
            out_of_stock_products=counts["out_of_stock"],
            total_value=total_value.quantize(CENTS),
            average_price=average.quantize(CENTS),
        )
    )


@router.post("", response_model=Envelope[ProductResponse], status_code=201)
async def create_product(
    body: ProductCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("seller", user)

    product = Product(owner_id=user.id, **body.model_dump())
    db.add(product)
    await db.flush()
    return Envelope(data=ProductResponse.model_validate(product))


@router.get("/{product_id}", response_model=Envelope[ProductResponse])
async def get_product(
    product_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    product = await _get_owned(db, product_id, user)
    return Envelope(data=ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=Envelope[ProductResponse])
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("seller", user)
    product = await _get_owned(db, product_id, user)

    update_data = body.model_dump(exclude_unset=True)
    for field in ("name", "price_amount", "status"):
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be null")
    for field, value in update_data.items():
        setattr(product, field, value)

    await db.flush()
    return Envelope(data=ProductResponse.model_validate(product))


@router.delete("/{product_id}", response_model=Envelope[None])
async def delete_product(
    product_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    require_role("seller", user)
    product = await _get_owned(db, product_id, user)

    await db.delete(product)
    await db.flush()
    return Envelope(data=None, message="Product deleted")
