"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.public_store import router as public_store_router
from storefront.api.v1.router import api_v1_router
from storefront.core.config import settings
from storefront.core.exceptions import (
    ProblemDetailError,
    backend_unavailable_handler,
    http_exception_handler,
    problem_detail_handler,
    validation_exception_handler,
)
from storefront.core.middleware.cors import get_cors_config
from storefront.core.middleware.request_id import RequestIdMiddleware
from storefront.core.middleware.tenant_host import TenantHostMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Storefront Builder API",
    version="0.1.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
    debug=settings.DEBUG,
)

# Middleware (last added = first executed)
app.add_middleware(TenantHostMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(CORSMiddleware, **get_cors_config())

# Exception handlers (RFC 7807)
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(OperationalError, backend_unavailable_handler)
app.add_exception_handler(InterfaceError, backend_unavailable_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")
app.include_router(public_store_router, tags=["storefront"])
