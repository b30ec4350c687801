"""CORS configuration for the dashboard and tenant storefront origins."""

import re

from storefront.core.config import settings


def tenant_origin_pattern() -> re.Pattern:
    """Match https://{base domain} and every https://{subdomain}.{base domain}."""
    return re.compile(rf"^https://([a-z0-9-]+\.)?{re.escape(settings.BASE_DOMAIN)}$")


def get_cors_config() -> dict:
    """Return CORS middleware kwargs for FastAPI."""
    config = {
        "allow_origins": settings.allowed_origins_list,
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": [
            "Authorization",
            "Content-Type",
            "X-Request-Id",
        ],
    }
    if settings.ENVIRONMENT != "development":
        config["allow_origin_regex"] = tenant_origin_pattern().pattern
    return config
