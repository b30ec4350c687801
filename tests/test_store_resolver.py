"""Store resolver tests: published lookup and payment asset fallback order."""

import logging
import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.payment_image import PaymentImage
from storefront.models.store_settings import StoreSettings
from storefront.models.store_template import StoreTemplate
from storefront.models.user import User
from storefront.services.store_resolver import (
    clean_asset_url,
    resolve_payment_image,
    resolve_store,
)


async def _seed_owner(db: AsyncSession) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        auth_sub=f"resolver-{unique}",
        email=f"resolver-{unique}@example.com",
        full_name="Resolver Owner",
    )
    db.add(user)
    await db.flush()
    return user


async def _seed_settings(
    db: AsyncSession, owner: User, *, email: str | None = None, image: str | None = None
) -> StoreSettings:
    row = StoreSettings(
        owner_id=owner.id,
        first_name="Ada",
        last_name="Lovelace",
        email_address=email or owner.email,
        store_name="Acme",
        payment_method_image=image,
    )
    db.add(row)
    await db.flush()
    return row


async def _seed_template(
    db: AsyncSession,
    owner: User,
    *,
    published: bool = True,
    settings_id: uuid.UUID | None = None,
    override: str | None = None,
) -> StoreTemplate:
    template = StoreTemplate(
        user_id=owner.id,
        settings_id=settings_id,
        store_name="Acme",
        store_subdomain=f"res-{uuid.uuid4().hex[:8]}",
        header_part={"title": "Acme"},
        is_published=published,
        payment_method_image=override,
    )
    db.add(template)
    await db.flush()
    return template


async def _add_payment_image(
    db: AsyncSession, template: StoreTemplate, url: str, active: bool = True
) -> None:
    db.add(PaymentImage(store_template_id=template.id, image_url=url, is_active=active))
    await db.flush()


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("null", None),
        ("undefined", None),
        ("NULL", None),
        (" https://cdn.test/qr.png ", "https://cdn.test/qr.png"),
    ],
)
def test_clean_asset_url(value, expected):
    assert clean_asset_url(value) == expected


async def test_payment_image_row_wins_over_settings(db: AsyncSession):
    owner = await _seed_owner(db)
    row = await _seed_settings(db, owner, image="https://cdn.test/stale.png")
    template = await _seed_template(db, owner, settings_id=row.id)
    await _add_payment_image(db, template, "https://cdn.test/current.png")

    view = await resolve_store(db, template.store_subdomain)
    assert view is not None
    assert view.payment_method_image == "https://cdn.test/current.png"


async def test_inactive_payment_rows_are_skipped(db: AsyncSession):
    owner = await _seed_owner(db)
    row = await _seed_settings(db, owner, image="https://cdn.test/settings.png")
    template = await _seed_template(db, owner, settings_id=row.id)
    await _add_payment_image(db, template, "https://cdn.test/old.png", active=False)

    view = await resolve_store(db, template.store_subdomain)
    assert view.payment_method_image == "https://cdn.test/settings.png"


async def test_template_override_beats_settings(db: AsyncSession):
    owner = await _seed_owner(db)
    row = await _seed_settings(db, owner, image="https://cdn.test/settings.png")
    template = await _seed_template(
        db, owner, settings_id=row.id, override="https://cdn.test/override.png"
    )

    view = await resolve_store(db, template.store_subdomain)
    assert view.payment_method_image == "https://cdn.test/override.png"


async def test_null_literals_fall_through_to_none(db: AsyncSession):
    owner = await _seed_owner(db)
    row = await _seed_settings(db, owner, image="  ")
    template = await _seed_template(db, owner, settings_id=row.id, override="undefined")
    await _add_payment_image(db, template, "null")

    view = await resolve_store(db, template.store_subdomain)
    assert view is not None
    assert view.payment_method_image is None


async def test_linked_settings_email_mismatch_is_logged_and_used(db: AsyncSession, caplog):
    owner = await _seed_owner(db)
    other_email = f"someone-{uuid.uuid4().hex[:8]}@example.com"
    row = await _seed_settings(db, owner, email=other_email, image="https://cdn.test/linked.png")
    template = await _seed_template(db, owner, settings_id=row.id)

    with caplog.at_level(logging.WARNING, logger="storefront.services.store_resolver"):
        view = await resolve_store(db, template.store_subdomain)

    assert view.payment_method_image == "https://cdn.test/linked.png"
    assert any(other_email in r.getMessage() for r in caplog.records)


async def test_email_match_backfills_settings_id(db: AsyncSession):
    owner = await _seed_owner(db)
    row = await _seed_settings(db, owner, image="https://cdn.test/by-email.png")
    template = await _seed_template(db, owner)
    assert template.settings_id is None

    view = await resolve_store(db, template.store_subdomain)
    assert view.payment_method_image == "https://cdn.test/by-email.png"

    await db.refresh(template)
    assert template.settings_id == row.id


async def test_no_asset_anywhere_is_none(db: AsyncSession):
    owner = await _seed_owner(db)
    template = await _seed_template(db, owner)

    view = await resolve_store(db, template.store_subdomain)
    assert view is not None
    assert view.payment_method_image is None


async def test_unpublished_and_unknown_are_both_none(db: AsyncSession):
    owner = await _seed_owner(db)
    template = await _seed_template(db, owner, published=False)

    assert await resolve_store(db, template.store_subdomain) is None
    assert await resolve_store(db, f"never-{uuid.uuid4().hex[:8]}") is None


async def test_blank_identifier_is_none(db: AsyncSession):
    assert await resolve_store(db, "") is None
    assert await resolve_store(db, "   ") is None
    assert await resolve_store(db, None) is None


async def test_identifier_is_case_insensitive(db: AsyncSession):
    owner = await _seed_owner(db)
    template = await _seed_template(db, owner)

    view = await resolve_store(db, template.store_subdomain.upper())
    assert view is not None
    assert view.id == template.id


async def test_strategies_stop_at_first_hit(db: AsyncSession):
    calls = []

    async def miss(db, template):
        calls.append("miss")
        return None

    async def hit(db, template):
        calls.append("hit")
        return "https://cdn.test/hit.png"

    async def never(db, template):
        calls.append("never")
        return "https://cdn.test/never.png"

    result = await resolve_payment_image(db, object(), strategies=(miss, hit, never))
    assert result == "https://cdn.test/hit.png"
    assert calls == ["miss", "hit"]
