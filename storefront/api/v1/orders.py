"""Authenticated CRUD endpoints for the owner's orders."""

import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db
from storefront.models.customer import Customer
from storefront.models.order import Order
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.customer import CustomerResponse
from storefront.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from storefront.services.numbering import get_next_order_code

router = APIRouter()


def _order_response(order: Order, customer: Customer | None) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        order_code=order.order_code,
        customer_id=order.customer_id,
        customer=CustomerResponse.model_validate(customer) if customer else None,
        total_price=order.total_price,
        ordered_at=order.ordered_at,
        items=order.items or [],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _order_with_customer(user: User):
    return (
        select(Order, Customer)
        .outerjoin(Customer, Customer.id == Order.customer_id)
        .where(Order.owner_id == user.id)
    )


async def _get_customer(db: AsyncSession, customer_id: uuid.UUID, user: User) -> Customer:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id, Customer.owner_id == user.id)
    )
    customer = result.scalar_one_or_none()
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


async def _get_owned(db: AsyncSession, order_id: uuid.UUID, user: User) -> tuple[Order, Customer]:
    result = await db.execute(_order_with_customer(user).where(Order.id == order_id))
    row = result.one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return row[0], row[1]


@router.get("", response_model=Envelope[list[OrderResponse]])
async def list_orders(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        _order_with_customer(user).order_by(Order.ordered_at.desc(), Order.id.desc())
    )
    return Envelope(data=[_order_response(order, customer) for order, customer in result.all()])


@router.post("", response_model=Envelope[OrderResponse], status_code=201)
async def create_order(
    body: OrderCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    customer = await _get_customer(db, body.customer_id, user)

    order = Order(
        owner_id=user.id,
        order_code=await get_next_order_code(db),
        customer_id=customer.id,
        total_price=body.total_price,
        ordered_at=body.ordered_at or datetime.now(UTC),
        items=[item.model_dump() for item in body.items],
    )
    db.add(order)
    await db.flush()
    return Envelope(data=_order_response(order, customer))


@router.get("/{order_id}", response_model=Envelope[OrderResponse])
async def get_order(
    order_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    order, customer = await _get_owned(db, order_id, user)
    return Envelope(data=_order_response(order, customer))


@router.put("/{order_id}", response_model=Envelope[OrderResponse])
async def update_order(
    order_id: uuid.UUID,
    body: OrderUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    order, customer = await _get_owned(db, order_id, user)

    update_data = body.model_dump(exclude_unset=True)
    for field in ("customer_id", "total_price", "ordered_at", "items"):
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be null")

    if "customer_id" in update_data:
        customer = await _get_customer(db, update_data["customer_id"], user)
        order.customer_id = customer.id
    if "total_price" in update_data:
        order.total_price = update_data["total_price"]
    if "ordered_at" in update_data:
        order.ordered_at = update_data["ordered_at"]
    if "items" in update_data:
        order.items = [item.model_dump() for item in body.items]

    await db.flush()
    return Envelope(data=_order_response(order, customer))


@router.delete("/{order_id}", response_model=Envelope[None])
async def delete_order(
    order_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    order, _customer = await _get_owned(db, order_id, user)

    await db.delete(order)
    await db.flush()
    return Envelope(data=None, message="Order deleted")
