"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from storefront.api.v1.auth import router as auth_router
from storefront.api.v1.customers import router as customers_router
from storefront.api.v1.health import router as health_router
from storefront.api.v1.orders import router as orders_router
from storefront.api.v1.products import router as products_router
from storefront.api.v1.settings import router as settings_router
from storefront.api.v1.storage import router as storage_router
from storefront.api.v1.store_templates import router as store_templates_router
from storefront.api.v1.templates import router as templates_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_v1_router.include_router(settings_router, prefix="/settings", tags=["settings"])
api_v1_router.include_router(
    store_templates_router, prefix="/store-templates", tags=["store-templates"]
)
api_v1_router.include_router(templates_router, prefix="/templates", tags=["templates"])
api_v1_router.include_router(products_router, prefix="/products", tags=["products"])
api_v1_router.include_router(customers_router, prefix="/customers", tags=["customers"])
api_v1_router.include_router(orders_router, prefix="/orders", tags=["orders"])
api_v1_router.include_router(storage_router, prefix="/storage", tags=["storage"])
