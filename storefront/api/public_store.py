"""Public storefront endpoints (anonymous, scoped by store subdomain).

``/store/{subdomain}`` is the path form that works on every host. Requests to
``{subdomain}.{BASE_DOMAIN}`` reach the same handlers through
``TenantHostMiddleware``; ``/store`` resolves the tenant from the Host header
directly. Unpublished and unknown stores are indistinguishable.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_db
from storefront.models.product import Product
from storefront.schemas.common import Envelope, PaginatedResponse
from storefront.schemas.product import PublicProductResponse
from storefront.schemas.store_template import StoreView
from storefront.services.store_resolver import get_published_template, resolve_store
from storefront.services.tenant_host import extract_subdomain

router = APIRouter()

DEFAULT_PAGE_SIZE = 20
STORE_NOT_FOUND = "Store not found"


def _encode_cursor(product: Product) -> str:
    return f"{product.name}|{product.id}"


def _decode_cursor(cursor: str) -> tuple[str, uuid.UUID]:
    try:
        name, id_str = cursor.rsplit("|", 1)
        return name, uuid.UUID(id_str)
    except (ValueError, AttributeError) as exc:
        raise HTTPException(status_code=400, detail="Invalid cursor") from exc


async def _store_view_or_404(db: AsyncSession, subdomain: str | None) -> StoreView:
    view = await resolve_store(db, subdomain)
    if view is None:
        raise HTTPException(status_code=404, detail=STORE_NOT_FOUND)
    return view


@router.get("/store", response_model=Envelope[StoreView])
async def get_store_for_host(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Resolve the store named by the request's Host header."""
    subdomain = extract_subdomain(request.headers.get("host"), request.url.path)
    return Envelope(data=await _store_view_or_404(db, subdomain))


@router.get("/store/{subdomain}", response_model=Envelope[StoreView])
async def get_store(
    subdomain: str,
    db: AsyncSession = Depends(get_db),
):
    return Envelope(data=await _store_view_or_404(db, subdomain))


@router.get(
    "/store/{subdomain}/products",
    response_model=Envelope[PaginatedResponse[PublicProductResponse]],
)
async def list_store_products(
    subdomain: str,
    category: str | None = Query(None),
    cursor: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Active products of a published store, ordered by name."""
    template = await get_published_template(db, subdomain)
    if template is None:
        raise HTTPException(status_code=404, detail=STORE_NOT_FOUND)

    stmt = (
        select(Product)
        .where(Product.owner_id == template.user_id, Product.status == "active")
        .order_by(Product.name, Product.id)
    )

    if category is not None:
        stmt = stmt.where(Product.category == category)
    if cursor is not None:
        cursor_name, cursor_id = _decode_cursor(cursor)
        stmt = stmt.where(tuple_(Product.name, Product.id) > tuple_(cursor_name, cursor_id))

    stmt = stmt.limit(limit + 1)
    result = await db.execute(stmt)
    rows = list(result.scalars().all())

    has_more = len(rows) > limit
    items = rows[:limit]

    page = PaginatedResponse(
        items=[PublicProductResponse.model_validate(p) for p in items],
        next_cursor=_encode_cursor(items[-1]) if has_more and items else None,
        has_more=has_more,
    )
    return Envelope(data=page)
