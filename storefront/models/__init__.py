from storefront.models.customer import Customer
from storefront.models.order import Order
from storefront.models.payment_image import PaymentImage
from storefront.models.product import Product
from storefront.models.store_settings import StoreSettings
from storefront.models.store_template import StoreTemplate
from storefront.models.template import Template
from storefront.models.user import User

__all__ = [
    "Customer",
    "Order",
    "PaymentImage",
    "Product",
    "StoreSettings",
    "StoreTemplate",
    "Template",
    "User",
]
