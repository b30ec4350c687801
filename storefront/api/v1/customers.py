"""Authenticated CRUD endpoints for the owner's customers."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db
from storefront.core.exceptions import ConflictError
from storefront.models.customer import Customer
from storefront.models.order import Order
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

router = APIRouter()


async def _get_owned(db: AsyncSession, customer_id: uuid.UUID, user: User) -> Customer:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id, Customer.owner_id == user.id)
    )
    customer = result.scalar_one_or_none()
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


async def _ensure_email_available(
    db: AsyncSession, user: User, email: str, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(Customer.id).where(
        Customer.owner_id == user.id,
        func.lower(Customer.email) == email.lower(),
    )
    if exclude_id is not None:
        stmt = stmt.where(Customer.id != exclude_id)
    result = await db.execute(stmt)
    if result.first() is not None:
        raise ConflictError("Customer with this email already exists")


@router.get("", response_model=Envelope[list[CustomerResponse]])
async def list_customers(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Customer)
        .where(Customer.owner_id == user.id)
        .order_by(Customer.created_at.desc(), Customer.id.desc())
    )
    return Envelope(data=[CustomerResponse.model_validate(c) for c in result.scalars().all()])


@router.post("", response_model=Envelope[CustomerResponse], status_code=201)
async def create_customer(
    body: CustomerCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _ensure_email_available(db, user, body.email)

    customer = Customer(owner_id=user.id, **body.model_dump())
    db.add(customer)
    await db.flush()
    return Envelope(data=CustomerResponse.model_validate(customer))


@router.get("/{customer_id}", response_model=Envelope[CustomerResponse])
async def get_customer(
    customer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    customer = await _get_owned(db, customer_id, user)
    return Envelope(data=CustomerResponse.model_validate(customer))


@router.put("/{customer_id}", response_model=Envelope[CustomerResponse])
async def update_customer(
    customer_id: uuid.UUID,
    body: CustomerUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    customer = await _get_owned(db, customer_id, user)

    update_data = body.model_dump(exclude_unset=True)
    for field in ("name", "email"):
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be null")
    if "email" in update_data:
        await _ensure_email_available(db, user, update_data["email"], exclude_id=customer.id)

    for field, value in update_data.items():
        setattr(customer, field, value)

    await db.flush()
    return Envelope(data=CustomerResponse.model_validate(customer))


@router.delete("/{customer_id}", response_model=Envelope[None])
async def delete_customer(
    customer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    customer = await _get_owned(db, customer_id, user)

    await db.execute(delete(Order).where(Order.customer_id == customer.id))
    await db.delete(customer)
    await db.flush()
    return Envelope(data=None, message="Customer deleted")
